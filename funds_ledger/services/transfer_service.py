"""
Transfer service: the caller-facing side of a transfer.

The engine in SQLStore.transfer_tx trusts its arguments. This
service is where they are earned: the request shape is checked
by TransferRequest, then both accounts must exist and hold the
requested currency.
"""

import logging

from funds_ledger.errors import CurrencyMismatchError
from funds_ledger.models.account import Account
from funds_ledger.models.user import User
from funds_ledger.schemas.account import AccountCreate, ListAccountsRequest
from funds_ledger.schemas.transfer import (
    TransferRequest,
    TransferTxParams,
    TransferTxResult,
)
from funds_ledger.schemas.user import UserCreate
from funds_ledger.services.store import SQLStore

logger = logging.getLogger(__name__)


class TransferService:

    def __init__(self, store: SQLStore):
        self.store = store

    async def _valid_account(self, account_id: int, currency: str) -> Account:
        """Return the account if it exists and matches currency."""
        account = await self.store.get_account(account_id)
        if account.currency != currency:
            raise CurrencyMismatchError(account.id, account.currency, currency)
        return account

    async def transfer(self, request: TransferRequest) -> TransferTxResult:
        """Validate both accounts, then run the transfer transaction."""
        await self._valid_account(request.from_account_id, request.currency)
        await self._valid_account(request.to_account_id, request.currency)

        logger.debug(
            "Transfer requested: %d -> %d amount=%d %s",
            request.from_account_id,
            request.to_account_id,
            request.amount,
            request.currency,
        )
        return await self.store.transfer_tx(TransferTxParams(
            from_account_id=request.from_account_id,
            to_account_id=request.to_account_id,
            amount=request.amount,
        ))

    async def create_user(self, request: UserCreate) -> User:
        return await self.store.create_user(
            request.username, request.full_name, request.email
        )

    async def open_account(self, request: AccountCreate) -> Account:
        return await self.store.create_account(
            request.owner, request.balance, request.currency
        )

    async def list_accounts(self, request: ListAccountsRequest) -> list[Account]:
        return await self.store.list_accounts(request.limit, request.offset)
