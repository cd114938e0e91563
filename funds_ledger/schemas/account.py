"""
Pydantic schemas for account and entry operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from funds_ledger.schemas.currency import validate_currency


# --- Request Schemas ---

class AccountCreate(BaseModel):
    """Request to open a new account. Accounts start empty."""
    owner: str = Field(min_length=1, max_length=100)
    currency: str = Field(min_length=3, max_length=3)
    balance: int = Field(default=0, ge=0)

    @field_validator("currency")
    @classmethod
    def currency_must_be_supported(cls, v: str) -> str:
        return validate_currency(v)


class ListAccountsRequest(BaseModel):
    """One page of accounts."""
    page_id: int = Field(ge=1)
    page_size: int = Field(ge=5, le=10)

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page_id - 1) * self.page_size


# --- Response Schemas ---

class AccountResponse(BaseModel):
    id: int
    owner: str
    balance: int
    currency: str
    created_at: datetime

    model_config = {"from_attributes": True}


class EntryResponse(BaseModel):
    id: int
    account_id: int
    amount: int
    created_at: datetime

    model_config = {"from_attributes": True}
