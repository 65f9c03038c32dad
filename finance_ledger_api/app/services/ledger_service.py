"""
Business logic for the transaction ledger.

``LedgerService`` enforces ownership on every read and mutation and
computes balances.  For ``update`` and ``delete`` existence is checked
before ownership, so a caller probing an id gets ``NOT_FOUND`` when it
does not exist and ``FORBIDDEN`` when it belongs to somebody else.
"""

import logging
from datetime import date
from decimal import MAX_PREC, Decimal, localcontext
from typing import List, Optional

from ..core.errors import ErrorKind, Result
from ..models import Transaction, User
from ..stores.transaction_store import TransactionStore


logger = logging.getLogger(__name__)


class LedgerService:
    """Ownership‑scoped CRUD and balance over a ``TransactionStore``."""

    def __init__(self, transactions: TransactionStore) -> None:
        self.transactions = transactions

    def create(
        self,
        caller: User,
        amount: Decimal,
        description: Optional[str],
        category: str,
        date: date,
    ) -> Result[Transaction]:
        """Persist a new transaction owned by ``caller``."""
        created = self.transactions.save(
            Transaction(
                id=None,
                amount=amount,
                description=description,
                category=category,
                date=date,
                owner_id=caller.id,
            )
        )
        logger.info("User %s created transaction %s", caller.id, created.id)
        return Result.success(created)

    def list(self, caller: User) -> Result[List[Transaction]]:
        return Result.success(self.transactions.find_all_by_owner(caller.id))

    def _owned(self, transaction_id: int, caller: User, action: str) -> Result[Transaction]:
        """Load a transaction the caller is allowed to ``action``."""
        transaction = self.transactions.find_by_id(transaction_id)
        if transaction is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"Transaction {transaction_id} not found")
        if transaction.owner_id != caller.id:
            logger.warning(
                "User %s attempted to %s transaction %s owned by user %s",
                caller.id, action, transaction_id, transaction.owner_id,
            )
            return Result.failure(
                ErrorKind.FORBIDDEN, f"You are not authorized to {action} this transaction"
            )
        return Result.success(transaction)

    def update(
        self,
        transaction_id: int,
        caller: User,
        amount: Decimal,
        description: Optional[str],
        category: str,
        date: date,
    ) -> Result[Transaction]:
        """Overwrite all four mutable fields of the caller's transaction.

        Fields are replaced as given, never merged with prior values;
        a ``None`` description clears the stored one.
        """
        found = self._owned(transaction_id, caller, "update")
        if not found.ok:
            return found
        current = found.value
        updated = self.transactions.save(
            Transaction(
                id=current.id,
                amount=amount,
                description=description,
                category=category,
                date=date,
                owner_id=current.owner_id,
            )
        )
        if updated is None:
            # Deleted between lookup and write.
            return Result.failure(ErrorKind.NOT_FOUND, f"Transaction {transaction_id} not found")
        logger.info("User %s updated transaction %s", caller.id, transaction_id)
        return Result.success(updated)

    def delete(self, transaction_id: int, caller: User) -> Result[Transaction]:
        """Remove the caller's transaction and return its last known values."""
        found = self._owned(transaction_id, caller, "delete")
        if not found.ok:
            return found
        if not self.transactions.delete(found.value):
            return Result.failure(ErrorKind.NOT_FOUND, f"Transaction {transaction_id} not found")
        logger.info("User %s deleted transaction %s", caller.id, transaction_id)
        return found

    def balance(self, caller: User) -> Result[Decimal]:
        """Signed sum of the caller's amounts: income positive, everything else negative."""
        transactions = self.transactions.find_all_by_owner(caller.id)
        # Precision wide enough that no addition is ever rounded.
        with localcontext() as ctx:
            ctx.prec = MAX_PREC
            total = sum((txn.signed_amount() for txn in transactions), Decimal("0"))
        return Result.success(total)
