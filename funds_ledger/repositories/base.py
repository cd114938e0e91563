"""
The repository capability set.

Two things implement it: Queries, bound to one open database
transaction, and SQLStore, which runs every call in its own
short transaction. The transfer engine depends only on this
protocol.
"""

from typing import Protocol

from funds_ledger.models.account import Account
from funds_ledger.models.entry import Entry
from funds_ledger.models.transfer import Transfer
from funds_ledger.models.user import User


class Repositories(Protocol):

    # --- Users ---

    async def create_user(
        self, username: str, full_name: str, email: str
    ) -> User: ...

    async def get_user(self, username: str) -> User: ...

    # --- Accounts ---

    async def create_account(
        self, owner: str, balance: int, currency: str
    ) -> Account: ...

    async def get_account(self, account_id: int) -> Account: ...

    async def list_accounts(self, limit: int, offset: int) -> list[Account]: ...

    async def update_account(self, account_id: int, balance: int) -> Account: ...

    async def delete_account(self, account_id: int) -> None: ...

    async def add_account_balance(self, account_id: int, amount: int) -> Account:
        """Add amount to the balance in one atomic row update."""
        ...

    # --- Entries ---

    async def create_entry(self, account_id: int, amount: int) -> Entry: ...

    async def get_entry(self, entry_id: int) -> Entry: ...

    async def list_entries(
        self, account_id: int, limit: int, offset: int
    ) -> list[Entry]: ...

    # --- Transfers ---

    async def create_transfer(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> Transfer: ...

    async def get_transfer(self, transfer_id: int) -> Transfer: ...

    async def list_transfers(
        self, from_account_id: int, to_account_id: int, limit: int, offset: int
    ) -> list[Transfer]: ...
