"""
Queries: single-row primitives bound to one session.

None of these methods commit. Whoever owns the session owns
the transaction boundary and decides when to commit or roll
back. Integrity failures surface as ConstraintViolationError
and missing rows as NotFoundError.
"""

from sqlalchemy import select, update, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from funds_ledger.errors import ConstraintViolationError, NotFoundError
from funds_ledger.models.account import Account
from funds_ledger.models.entry import Entry
from funds_ledger.models.transfer import Transfer
from funds_ledger.models.user import User


class Queries:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _insert(self, row):
        self.session.add(row)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        return row

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e

    async def _get(self, model, key, entity: str):
        row = await self.session.get(model, key)
        if row is None:
            raise NotFoundError(entity, key)
        return row

    # --- Users ---

    async def create_user(self, username: str, full_name: str, email: str) -> User:
        return await self._insert(User(
            username=username,
            full_name=full_name,
            email=email,
        ))

    async def get_user(self, username: str) -> User:
        return await self._get(User, username, "User")

    # --- Accounts ---

    async def create_account(self, owner: str, balance: int, currency: str) -> Account:
        return await self._insert(Account(
            owner=owner,
            balance=balance,
            currency=currency,
        ))

    async def get_account(self, account_id: int) -> Account:
        return await self._get(Account, account_id, "Account")

    async def list_accounts(self, limit: int, offset: int) -> list[Account]:
        accounts = (await self.session.execute(
            select(Account).order_by(Account.id).limit(limit).offset(offset)
        )).scalars().all()
        return list(accounts)

    async def update_account(self, account_id: int, balance: int) -> Account:
        """Set the balance outright. Administrative use only."""
        result = await self._execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=balance)
            .returning(Account)
            .execution_options(populate_existing=True)
        )
        account = result.scalar_one_or_none()
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    async def delete_account(self, account_id: int) -> None:
        result = await self._execute(
            delete(Account).where(Account.id == account_id).returning(Account.id)
        )
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Account", account_id)

    async def add_account_balance(self, account_id: int, amount: int) -> Account:
        """
        Add amount to the balance and return the updated row.

        The addition is evaluated by the database inside the
        UPDATE, which also takes the row lock. Reading the
        balance first and writing it back would let a
        concurrent transfer's update be lost.
        """
        result = await self._execute(
            update(Account)
            .where(Account.id == account_id)
            .values(balance=Account.balance + amount)
            .returning(Account)
            .execution_options(populate_existing=True)
        )
        account = result.scalar_one_or_none()
        if account is None:
            raise NotFoundError("Account", account_id)
        return account

    # --- Entries ---

    async def create_entry(self, account_id: int, amount: int) -> Entry:
        return await self._insert(Entry(account_id=account_id, amount=amount))

    async def get_entry(self, entry_id: int) -> Entry:
        return await self._get(Entry, entry_id, "Entry")

    async def list_entries(self, account_id: int, limit: int, offset: int) -> list[Entry]:
        entries = (await self.session.execute(
            select(Entry)
            .where(Entry.account_id == account_id)
            .order_by(Entry.id)
            .limit(limit)
            .offset(offset)
        )).scalars().all()
        return list(entries)

    # --- Transfers ---

    async def create_transfer(
        self, from_account_id: int, to_account_id: int, amount: int
    ) -> Transfer:
        return await self._insert(Transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=amount,
        ))

    async def get_transfer(self, transfer_id: int) -> Transfer:
        return await self._get(Transfer, transfer_id, "Transfer")

    async def list_transfers(
        self, from_account_id: int, to_account_id: int, limit: int, offset: int
    ) -> list[Transfer]:
        """Transfers sent by from_account_id or received by to_account_id."""
        transfers = (await self.session.execute(
            select(Transfer)
            .where(or_(
                Transfer.from_account_id == from_account_id,
                Transfer.to_account_id == to_account_id,
            ))
            .order_by(Transfer.id)
            .limit(limit)
            .offset(offset)
        )).scalars().all()
        return list(transfers)
