"""
Explicit wiring of stores and services.

``build_dependencies`` is called once at process start (by
``create_app``) and the resulting ``Dependencies`` object is stored on
``app.state.deps``.  Endpoints reach their collaborators through
``get_deps``; nothing is looked up from module globals.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Request

from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.security import CredentialService
from .services.ledger_service import LedgerService
from .services.user_service import UserService
from .stores.transaction_store import SQLiteTransactionStore, TransactionStore
from .stores.user_store import SQLiteUserStore, UserStore


@dataclass
class Dependencies:
    database: Database
    users: UserStore
    transactions: TransactionStore
    credentials: CredentialService
    user_service: UserService
    ledger: LedgerService


def build_dependencies(config: Optional[Settings] = None) -> Dependencies:
    config = config or default_settings
    database = Database(config.database_url)
    users = SQLiteUserStore(database)
    transactions = SQLiteTransactionStore(database)
    credentials = CredentialService(
        users,
        secret_key=config.secret_key,
        token_ttl_seconds=config.access_token_expire_minutes * 60,
    )
    return Dependencies(
        database=database,
        users=users,
        transactions=transactions,
        credentials=credentials,
        user_service=UserService(users, credentials),
        ledger=LedgerService(transactions),
    )


def get_deps(request: Request) -> Dependencies:
    return request.app.state.deps
