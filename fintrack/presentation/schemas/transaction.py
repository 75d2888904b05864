"""Transaction-related Pydantic schemas."""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fintrack.domain.entities import TransactionType


class TransactionCreateSchema(BaseModel):
    """Schema for POST /v1/transactions request body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "amount": 250,
                    "type": "expense",
                    "category": "Food",
                    "description": "Lunch",
                    "date": "2026-10-19",
                }
            ]
        }
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Transaction amount, always positive",
        examples=[250],
    )
    type: TransactionType = Field(
        TransactionType.EXPENSE,
        description="expense or income",
    )
    category: Optional[str] = Field(
        None,
        max_length=64,
        description="Expense category; ignored for income, 'Other' when omitted",
        examples=["Food"],
    )
    description: str = Field(
        "",
        max_length=500,
        description="Free text note",
    )
    date: datetime.date = Field(
        default_factory=datetime.date.today,
        description="Calendar date of the transaction (defaults to today)",
    )

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()


class TransactionSchema(BaseModel):
    """Schema for a stored transaction."""

    id: str = Field(..., description="Store-assigned identifier")
    amount: float = Field(..., description="Transaction amount")
    type: str = Field(..., description="expense or income", examples=["expense"])
    date: str = Field(..., description="ISO calendar date", examples=["2026-10-19"])
    category: Optional[str] = Field(None, description="Category, null for income")
    description: str = Field("", description="Free text note")


class TransactionListSchema(BaseModel):
    """Schema for GET /v1/transactions response body."""

    window: str = Field(..., description="Window label", examples=["30days"])
    transactions: list[TransactionSchema]
