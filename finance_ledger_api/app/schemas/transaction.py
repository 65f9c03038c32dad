"""
Pydantic schemas for ledger transactions.

``TransactionRequest`` is used for both create and update: an update
always carries the full set of mutable fields.  Amounts are exact
decimals and are serialized as strings in JSON responses.
"""

import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..models import Transaction


class TransactionRequest(BaseModel):
    amount: Decimal = Field(..., examples=["1000.00"])
    description: Optional[str] = Field(None, examples=["Salary"])
    category: str = Field(..., min_length=1, examples=["Income"], description="\"Income\" or \"Expense\"; other values count as expenses")
    date: datetime.date = Field(..., examples=["2025-06-22"])

    @field_validator("amount")
    @classmethod
    def amount_is_finite(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("Amount must be a finite number")
        return v


class TransactionResponse(BaseModel):
    id: int
    amount: Decimal
    description: Optional[str] = None
    category: str
    date: datetime.date

    @classmethod
    def from_transaction(cls, txn: Transaction) -> "TransactionResponse":
        return cls(
            id=txn.id,
            amount=txn.amount,
            description=txn.description,
            category=txn.category,
            date=txn.date,
        )


class DeleteResponse(BaseModel):
    message: str = "Transaction deleted successfully"
    transaction: TransactionResponse


class BalanceResponse(BaseModel):
    balance: Decimal
