"""
Account model.

The balance is stored on the row and kept equal to the sum
of the account's entries. It only moves through the balance
mutator, which changes it with a single atomic UPDATE so two
concurrent transfers never lose each other's write.
"""

from datetime import datetime

from sqlalchemy import (
    BigInteger, String, DateTime, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from funds_ledger.models.base import Base, utcnow


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        # One account per currency per owner
        UniqueConstraint("owner", "currency", name="owner_currency_key"),
    )

    # Assigned by the store; also the lock-ordering key for transfers
    id: Mapped[int] = mapped_column(primary_key=True)
    owner: Mapped[str] = mapped_column(
        ForeignKey("users.username"), nullable=False, index=True
    )
    # Minor currency units
    balance: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow
    )

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.owner} {self.balance} {self.currency}>"
