"""
Transaction endpoints for API v1.

Every route requires a bearer token; the resolved user is passed to
``LedgerService`` as the caller and failed results are unwrapped into
the matching HTTP status (404 missing, 403 not yours).
"""

from typing import List

from fastapi import APIRouter, Depends, status

from finance_ledger_api.app.core.security import get_current_user
from finance_ledger_api.app.dependencies import Dependencies, get_deps
from finance_ledger_api.app.models import User
from finance_ledger_api.app.schemas.transaction import (
    BalanceResponse,
    DeleteResponse,
    TransactionRequest,
    TransactionResponse,
)


router = APIRouter()


@router.post("", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED)
def create_transaction(
    body: TransactionRequest,
    current_user: User = Depends(get_current_user),
    deps: Dependencies = Depends(get_deps),
) -> TransactionResponse:
    txn = deps.ledger.create(
        current_user, body.amount, body.description, body.category, body.date
    ).unwrap()
    return TransactionResponse.from_transaction(txn)


@router.get("", response_model=List[TransactionResponse])
def list_transactions(
    current_user: User = Depends(get_current_user),
    deps: Dependencies = Depends(get_deps),
) -> List[TransactionResponse]:
    """List the caller's transactions in creation order."""
    return [TransactionResponse.from_transaction(t) for t in deps.ledger.list(current_user).unwrap()]


# Declared before the ``/{transaction_id}`` routes.
@router.get("/balance", response_model=BalanceResponse)
def get_balance(
    current_user: User = Depends(get_current_user),
    deps: Dependencies = Depends(get_deps),
) -> BalanceResponse:
    """Income minus everything else, as an exact decimal string."""
    return BalanceResponse(balance=deps.ledger.balance(current_user).unwrap())


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    body: TransactionRequest,
    current_user: User = Depends(get_current_user),
    deps: Dependencies = Depends(get_deps),
) -> TransactionResponse:
    """Replace amount, description, category and date of a transaction.

    Fields missing from the body are not kept from the stored record:
    ``description`` falls back to ``null``, the others are required.
    """
    txn = deps.ledger.update(
        transaction_id, current_user, body.amount, body.description, body.category, body.date
    ).unwrap()
    return TransactionResponse.from_transaction(txn)


@router.delete("/{transaction_id}", response_model=DeleteResponse)
def delete_transaction(
    transaction_id: int,
    current_user: User = Depends(get_current_user),
    deps: Dependencies = Depends(get_deps),
) -> DeleteResponse:
    """Delete a transaction and echo back what was removed."""
    txn = deps.ledger.delete(transaction_id, current_user).unwrap()
    return DeleteResponse(transaction=TransactionResponse.from_transaction(txn))
