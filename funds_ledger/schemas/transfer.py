"""
Pydantic schemas for transfers.

TransferTxParams is what the transfer engine consumes; it is
not re-validated there. TransferRequest is the caller-facing
shape and carries every input rule.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from funds_ledger.schemas.account import AccountResponse, EntryResponse
from funds_ledger.schemas.currency import validate_currency


class TransferRequest(BaseModel):
    from_account_id: int = Field(ge=1)
    to_account_id: int = Field(ge=1)
    amount: int = Field(gt=0)
    currency: str = Field(min_length=3, max_length=3)

    @field_validator("currency")
    @classmethod
    def currency_must_be_supported(cls, v: str) -> str:
        return validate_currency(v)


class TransferTxParams(BaseModel):
    from_account_id: int
    to_account_id: int
    amount: int


class TransferResponse(BaseModel):
    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

    model_config = {"from_attributes": True}


class TransferTxResult(BaseModel):
    """Everything one committed transfer produced."""
    transfer: TransferResponse
    from_entry: EntryResponse
    to_entry: EntryResponse
    from_account: AccountResponse
    to_account: AccountResponse
