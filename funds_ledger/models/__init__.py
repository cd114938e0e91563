"""
Database models package.

All models must be imported here so that they register on
Base.metadata before init_db() creates the tables.
"""

from funds_ledger.models.base import Base
from funds_ledger.models.user import User
from funds_ledger.models.account import Account
from funds_ledger.models.entry import Entry
from funds_ledger.models.transfer import Transfer

__all__ = [
    "Base",
    "User",
    "Account",
    "Entry",
    "Transfer",
]
