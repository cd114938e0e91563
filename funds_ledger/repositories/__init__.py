"""Row-level repositories the transfer engine is composed from."""

from funds_ledger.repositories.base import Repositories
from funds_ledger.repositories.queries import Queries

__all__ = ["Repositories", "Queries"]
