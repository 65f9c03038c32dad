"""
Domain records for users and transactions.

These are plain dataclasses, decoupled from both the SQLite rows and
the Pydantic API schemas.  A transaction refers to its owner by id
only; there is no object graph between the two records.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


INCOME_CATEGORY = "Income"
EXPENSE_CATEGORY = "Expense"


@dataclass(frozen=True)
class User:
    id: Optional[int]
    name: str
    email: str
    password_hash: str


@dataclass
class Transaction:
    """A monetary record owned by exactly one user.

    ``id`` is ``None`` until the transaction store assigns one.  Only
    ``amount``, ``description``, ``category`` and ``date`` may change
    after creation.
    """

    id: Optional[int]
    amount: Decimal
    description: Optional[str]
    category: str
    date: date
    owner_id: int

    def is_income(self) -> bool:
        return self.category.casefold() == INCOME_CATEGORY.casefold()

    def signed_amount(self) -> Decimal:
        """Amount as it counts towards the balance: income adds, anything else subtracts."""
        return self.amount if self.is_income() else self.amount.copy_negate()
