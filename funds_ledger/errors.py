"""
Ledger error taxonomy.

Unit-of-work failures are not wrapped: whatever a step raises
reaches the caller unchanged after the rollback. Only the
transaction boundary itself adds its own error types.
"""


class LedgerError(Exception):
    """Base class for errors raised by the ledger."""


class NotFoundError(LedgerError):
    """A referenced row does not exist."""

    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class ConstraintViolationError(LedgerError):
    """The store rejected a write (unique or foreign key constraint)."""


class CurrencyMismatchError(LedgerError, ValueError):
    """An account's currency differs from the requested currency."""

    def __init__(self, account_id: int, account_currency: str, currency: str):
        self.account_id = account_id
        self.account_currency = account_currency
        self.currency = currency
        super().__init__(
            f"account [{account_id}] currency mismatch: "
            f"{account_currency} vs {currency}"
        )


class TransactionBeginError(LedgerError):
    """The store could not open a transaction."""

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"cannot begin transaction: {cause}")


class RollbackError(LedgerError):
    """
    Rollback failed after the unit of work failed.

    Both failures are kept: `cause` is what the unit of work
    raised, `rollback_cause` is what the rollback raised.
    """

    def __init__(self, cause: BaseException, rollback_cause: BaseException):
        self.cause = cause
        self.rollback_cause = rollback_cause
        super().__init__(f"tx err: {cause!r}, rb err: {rollback_cause!r}")
