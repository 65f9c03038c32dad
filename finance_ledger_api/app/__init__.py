"""
Application package initializer.

The project is organised into logical pieces: ``core`` holds
configuration, logging, persistence, security and error handling;
``stores`` wraps the SQLite tables; ``services`` holds the ledger and
user business logic; ``api`` exposes the versioned FastAPI routers.
"""

from .main import app  # noqa: F401
