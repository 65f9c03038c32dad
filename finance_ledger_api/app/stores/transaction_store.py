"""
Transaction store backed by the ``transactions`` table.

Amounts are written with ``str(Decimal)`` and read back with
``Decimal(text)``; dates are ISO ``YYYY-MM-DD`` strings.  Each call
runs in its own connection, so a single statement is the unit of
atomicity: concurrent updates of one row are last‑writer‑wins.
"""

import sqlite3
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import List, Optional

from ..core.db import Database
from ..models import Transaction


class TransactionStore(ABC):
    """Abstract interface for transaction persistence."""

    @abstractmethod
    def find_by_id(self, transaction_id: int) -> Optional[Transaction]:
        pass

    @abstractmethod
    def find_all_by_owner(self, owner_id: int) -> List[Transaction]:
        """Return the owner's transactions in insertion order."""

    @abstractmethod
    def save(self, transaction: Transaction) -> Optional[Transaction]:
        """Insert a new transaction (``id is None``) or overwrite an existing one.

        Returns the stored transaction, or ``None`` when asked to
        overwrite a row that no longer exists.
        """

    @abstractmethod
    def delete(self, transaction: Transaction) -> bool:
        """Remove the transaction; ``False`` if it was already gone."""


class SQLiteTransactionStore(TransactionStore):

    _COLUMNS = "id, amount, description, category, date, user_id"

    def __init__(self, db: Database) -> None:
        self.db = db

    @staticmethod
    def _row_to_transaction(row: sqlite3.Row) -> Transaction:
        return Transaction(
            id=row["id"],
            amount=Decimal(row["amount"]),
            description=row["description"],
            category=row["category"],
            date=date.fromisoformat(row["date"]),
            owner_id=row["user_id"],
        )

    def find_by_id(self, transaction_id: int) -> Optional[Transaction]:
        with self.db.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM transactions WHERE id = ?",
                (transaction_id,),
            ).fetchone()
        return self._row_to_transaction(row) if row else None

    def find_all_by_owner(self, owner_id: int) -> List[Transaction]:
        with self.db.cursor() as cursor:
            rows = cursor.execute(
                f"SELECT {self._COLUMNS} FROM transactions WHERE user_id = ? ORDER BY id ASC",
                (owner_id,),
            ).fetchall()
        return [self._row_to_transaction(row) for row in rows]

    def save(self, transaction: Transaction) -> Optional[Transaction]:
        with self.db.cursor() as cursor:
            if transaction.id is None:
                cursor.execute(
                    "INSERT INTO transactions (amount, description, category, date, user_id) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (
                        str(transaction.amount),
                        transaction.description,
                        transaction.category,
                        transaction.date.isoformat(),
                        transaction.owner_id,
                    ),
                )
                transaction_id = cursor.lastrowid
            else:
                # The owner column is never part of the SET clause.
                cursor.execute(
                    "UPDATE transactions SET amount = ?, description = ?, category = ?, date = ?, "
                    "updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                    (
                        str(transaction.amount),
                        transaction.description,
                        transaction.category,
                        transaction.date.isoformat(),
                        transaction.id,
                    ),
                )
                if cursor.rowcount == 0:
                    return None
                transaction_id = transaction.id
            row = cursor.execute(
                f"SELECT {self._COLUMNS} FROM transactions WHERE id = ?",
                (transaction_id,),
            ).fetchone()
        return self._row_to_transaction(row)

    def delete(self, transaction: Transaction) -> bool:
        with self.db.cursor() as cursor:
            cursor.execute("DELETE FROM transactions WHERE id = ?", (transaction.id,))
            return cursor.rowcount > 0
