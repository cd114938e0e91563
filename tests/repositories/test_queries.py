"""
Tests for the single-row repository calls.

These go through SQLStore's plain calls, which run each query
in its own transaction through Queries.
"""

import pytest

from funds_ledger.errors import ConstraintViolationError, NotFoundError

pytestmark = pytest.mark.asyncio


class TestUsers:

    async def test_create_user_succeeds(self, store):
        user = await store.create_user("alice", "Alice Smith", "alice@email.com")

        assert user.username == "alice"
        assert user.full_name == "Alice Smith"
        assert user.created_at is not None

    async def test_get_user(self, store, make_user):
        created = await make_user()

        fetched = await store.get_user(created.username)

        assert fetched.username == created.username
        assert fetched.email == created.email

    async def test_duplicate_username_rejected(self, store):
        await store.create_user("alice", "Alice", "alice@email.com")

        with pytest.raises(ConstraintViolationError):
            await store.create_user("alice", "Alice Again", "other@email.com")

    async def test_duplicate_email_rejected(self, store):
        await store.create_user("alice", "Alice", "same@email.com")

        with pytest.raises(ConstraintViolationError):
            await store.create_user("bob", "Bob", "same@email.com")

    async def test_missing_user_not_found(self, store):
        with pytest.raises(NotFoundError, match="User nobody not found"):
            await store.get_user("nobody")


class TestAccounts:

    async def test_create_account_succeeds(self, store, make_user):
        user = await make_user()

        account = await store.create_account(user.username, 500, "USD")

        assert account.id is not None
        assert account.owner == user.username
        assert account.balance == 500
        assert account.currency == "USD"
        assert account.created_at is not None

    async def test_account_ids_increase(self, make_account):
        first = await make_account()
        second = await make_account()

        assert second.id > first.id

    async def test_unknown_owner_rejected(self, store):
        with pytest.raises(ConstraintViolationError):
            await store.create_account("ghost", 0, "USD")

    async def test_one_account_per_currency_per_owner(self, store, make_user):
        user = await make_user()
        await store.create_account(user.username, 0, "USD")

        with pytest.raises(ConstraintViolationError):
            await store.create_account(user.username, 0, "USD")

        # A different currency is fine
        eur = await store.create_account(user.username, 0, "EUR")
        assert eur.currency == "EUR"

    async def test_get_account(self, store, make_account):
        created = await make_account(balance=42)

        fetched = await store.get_account(created.id)

        assert fetched.id == created.id
        assert fetched.owner == created.owner
        assert fetched.balance == 42

    async def test_missing_account_not_found(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            await store.get_account(999)

        assert exc_info.value.entity == "Account"
        assert exc_info.value.key == 999

    async def test_list_accounts_pages_by_id(self, store, make_account):
        created = [await make_account() for _ in range(7)]

        first_page = await store.list_accounts(limit=5, offset=0)
        second_page = await store.list_accounts(limit=5, offset=5)

        assert [a.id for a in first_page] == [a.id for a in created[:5]]
        assert [a.id for a in second_page] == [a.id for a in created[5:]]

    async def test_update_account_sets_balance(self, store, make_account):
        account = await make_account(balance=100)

        updated = await store.update_account(account.id, 250)

        assert updated.balance == 250
        assert (await store.get_account(account.id)).balance == 250

    async def test_update_missing_account_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.update_account(999, 10)

    async def test_delete_account(self, store, make_account):
        account = await make_account()

        await store.delete_account(account.id)

        with pytest.raises(NotFoundError):
            await store.get_account(account.id)

    async def test_delete_missing_account_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.delete_account(999)

    async def test_delete_account_with_entries_rejected(self, store, make_account):
        account = await make_account()
        await store.create_entry(account.id, 10)

        with pytest.raises(ConstraintViolationError):
            await store.delete_account(account.id)

        assert (await store.get_account(account.id)).id == account.id


class TestAddAccountBalance:

    async def test_adds_positive_amount(self, store, make_account):
        account = await make_account(balance=100)

        updated = await store.add_account_balance(account.id, 25)

        assert updated.balance == 125

    async def test_adds_negative_amount(self, store, make_account):
        account = await make_account(balance=100)

        updated = await store.add_account_balance(account.id, -130)

        # No floor at zero
        assert updated.balance == -30

    async def test_missing_account_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.add_account_balance(999, 10)


class TestEntries:

    async def test_create_and_get_entry(self, store, make_account):
        account = await make_account()

        entry = await store.create_entry(account.id, -75)
        fetched = await store.get_entry(entry.id)

        assert fetched.account_id == account.id
        assert fetched.amount == -75
        assert fetched.created_at is not None

    async def test_entry_for_unknown_account_rejected(self, store):
        with pytest.raises(ConstraintViolationError):
            await store.create_entry(999, 10)

    async def test_list_entries_filters_by_account(self, store, make_account):
        account = await make_account()
        other = await make_account()
        for amount in (10, -20, 30):
            await store.create_entry(account.id, amount)
        await store.create_entry(other.id, 99)

        entries = await store.list_entries(account.id, limit=10, offset=0)

        assert [e.amount for e in entries] == [10, -20, 30]
        assert all(e.account_id == account.id for e in entries)

    async def test_missing_entry_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.get_entry(999)


class TestTransfers:

    async def test_create_and_get_transfer(self, store, make_account):
        a = await make_account()
        b = await make_account()

        transfer = await store.create_transfer(a.id, b.id, 300)
        fetched = await store.get_transfer(transfer.id)

        assert fetched.from_account_id == a.id
        assert fetched.to_account_id == b.id
        assert fetched.amount == 300
        assert fetched.created_at is not None

    async def test_list_transfers_sent_or_received(self, store, make_account):
        account = await make_account()
        for _ in range(3):
            await store.create_transfer(
                (await make_account()).id, (await make_account()).id, 10
            )
        for _ in range(5):
            await store.create_transfer(account.id, (await make_account()).id, 10)
        for _ in range(5):
            await store.create_transfer((await make_account()).id, account.id, 10)

        transfers = await store.list_transfers(
            account.id, account.id, limit=5, offset=5
        )

        assert len(transfers) == 5
        for transfer in transfers:
            assert account.id in (transfer.from_account_id, transfer.to_account_id)

    async def test_missing_transfer_not_found(self, store):
        with pytest.raises(NotFoundError):
            await store.get_transfer(999)
