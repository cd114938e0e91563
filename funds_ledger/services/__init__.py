"""Business logic services."""

from funds_ledger.services.store import SQLStore, add_money
from funds_ledger.services.transfer_service import TransferService

__all__ = ["SQLStore", "add_money", "TransferService"]
