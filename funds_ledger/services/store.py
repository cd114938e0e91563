"""
SQLStore: the transfer engine.

The store owns one thing: a session factory. From it, it runs
units of work inside a database transaction (exec_tx), applies
paired balance changes in a fixed lock order (add_money), and
composes both into the transfer protocol (transfer_tx).

Outside a unit of work the store also serves the plain
repository calls, each in its own short transaction.

There are no locks in this module. Two transfers never wait on
each other in Python; they wait on row locks in the database,
and add_money makes sure every transaction asks for those row
locks in the same order.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from funds_ledger.errors import RollbackError, TransactionBeginError
from funds_ledger.models.account import Account
from funds_ledger.models.entry import Entry
from funds_ledger.models.transfer import Transfer
from funds_ledger.models.user import User
from funds_ledger.repositories.base import Repositories
from funds_ledger.repositories.queries import Queries
from funds_ledger.schemas.account import AccountResponse, EntryResponse
from funds_ledger.schemas.transfer import (
    TransferResponse,
    TransferTxParams,
    TransferTxResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_snapshot = AccountResponse.model_validate


async def add_money(
    q: Repositories,
    account_id1: int,
    amount1: int,
    account_id2: int,
    amount2: int,
) -> tuple[AccountResponse, AccountResponse]:
    """
    Apply two balance changes, lower account id first.

    Two transfers between the same pair of accounts running in
    opposite directions would otherwise lock the two rows in
    opposite orders and deadlock. Always touching the lower id
    first gives every transaction the same lock order.

    Returns the updated accounts in argument order, whichever
    one was updated first. If an update fails, the error
    propagates and the second update is not attempted.

    Each account is captured right after its own update. When
    both ids are the same row, account2 is updated first and
    so shows the balance before account1's change.
    """
    if account_id1 < account_id2:
        account1 = _snapshot(await q.add_account_balance(account_id1, amount1))
        account2 = _snapshot(await q.add_account_balance(account_id2, amount2))
    else:
        account2 = _snapshot(await q.add_account_balance(account_id2, amount2))
        account1 = _snapshot(await q.add_account_balance(account_id1, amount1))
    return account1, account2


class SQLStore:
    """
    The store takes a session factory as a constructor argument.
    Each transaction it runs checks out one connection for its
    whole duration and returns it on commit or rollback.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def exec_tx(self, fn: Callable[[Queries], Awaitable[T]]) -> T:
        """
        Run fn inside one database transaction.

        fn receives Queries bound to the transaction. If fn
        returns, the transaction commits and fn's result is
        returned. If fn raises (cancellation included), the
        transaction is rolled back and the same exception is
        re-raised. If the rollback fails too, RollbackError
        carries both exceptions, except for cancellation, which
        is re-raised with the rollback failure as its cause.

        Nothing is retried here; retry policy belongs to the
        caller.
        """
        async with self.session_factory() as session:
            try:
                # Autobegins and checks out the connection
                await session.connection()
            except Exception as e:
                logger.error("Cannot begin transaction: %s", e)
                raise TransactionBeginError(e) from e

            try:
                result = await fn(Queries(session))
            except BaseException as e:
                try:
                    await session.rollback()
                except Exception as rb_err:
                    logger.error(
                        "Rollback failed: tx err=%r rb err=%r", e, rb_err
                    )
                    if not isinstance(e, Exception):
                        # Cancellation and interrupts must still reach the caller
                        raise e from rb_err
                    raise RollbackError(e, rb_err) from e
                logger.warning("Transaction rolled back: %r", e)
                raise

            await session.commit()
            return result

    async def transfer_tx(self, arg: TransferTxParams) -> TransferTxResult:
        """
        Move arg.amount from one account to another.

        In one transaction:
        1. Create the transfer record
        2. Create the debit entry (-amount) on the source account
        3. Create the credit entry (+amount) on the destination
        4. Update both balances through add_money

        The arguments are trusted: amount > 0, both accounts
        exist and share a currency. Overdraft and transfers from
        an account to itself are not rejected.
        """

        async def unit_of_work(q: Queries) -> TransferTxResult:
            transfer = await q.create_transfer(
                arg.from_account_id, arg.to_account_id, arg.amount
            )
            from_entry = await q.create_entry(arg.from_account_id, -arg.amount)
            to_entry = await q.create_entry(arg.to_account_id, arg.amount)

            from_account, to_account = await add_money(
                q,
                arg.from_account_id,
                -arg.amount,
                arg.to_account_id,
                arg.amount,
            )

            return TransferTxResult(
                transfer=TransferResponse.model_validate(transfer),
                from_entry=EntryResponse.model_validate(from_entry),
                to_entry=EntryResponse.model_validate(to_entry),
                from_account=from_account,
                to_account=to_account,
            )

        result = await self.exec_tx(unit_of_work)
        logger.info(
            "Transfer %d committed: %d -> %d amount=%d",
            result.transfer.id,
            arg.from_account_id,
            arg.to_account_id,
            arg.amount,
        )
        return result

    # --- Plain repository calls, one transaction each ---

    async def create_user(self, username: str, full_name: str, email: str) -> User:
        return await self.exec_tx(
            lambda q: q.create_user(username, full_name, email)
        )

    async def get_user(self, username: str) -> User:
        return await self.exec_tx(lambda q: q.get_user(username))

    async def create_account(self, owner: str, balance: int, currency: str) -> Account:
        return await self.exec_tx(
            lambda q: q.create_account(owner, balance, currency)
        )

    async def get_account(self, account_id: int) -> Account:
        return await self.exec_tx(lambda q: q.get_account(account_id))

    async def list_accounts(self, limit: int, offset: int) -> list[Account]:
        return await self.exec_tx(lambda q: q.list_accounts(limit, offset))

    async def update_account(self, account_id: int, balance: int) -> Account:
        return await self.exec_tx(lambda q: q.update_account(account_id, balance))

    async def delete_account(self, account_id: int) -> None:
        await self.exec_tx(lambda q: q.delete_account(account_id))

    async def add_account_balance(self, account_id: int, amount: int) -> Account:
        return await self.exec_tx(
            lambda q: q.add_account_balance(account_id, amount)
        )

    async def create_entry(self, account_id: int, amount: int) -> Entry:
        return await self.exec_tx(lambda q: q.create_entry(account_id, amount))

    async def get_entry(self, entry_id: int) -> Entry:
        return await self.exec_tx(lambda q: q.get_entry(entry_id))

    async def list_entries(self, account_id: int, limit: int, offset: int) -> list[Entry]:
        return await self.exec_tx(
            lambda q: q.list_entries(account_id, limit, offset)
        )

    async def create_transfer(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> Transfer:
        return await self.exec_tx(
            lambda q: q.create_transfer(from_account_id, to_account_id, amount)
        )

    async def get_transfer(self, transfer_id: int) -> Transfer:
        return await self.exec_tx(lambda q: q.get_transfer(transfer_id))

    async def list_transfers(
        self, from_account_id: int, to_account_id: int, limit: int, offset: int
    ) -> list[Transfer]:
        return await self.exec_tx(
            lambda q: q.list_transfers(from_account_id, to_account_id, limit, offset)
        )
