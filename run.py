"""Entry point for the Finance Ledger API.

Starts the FastAPI application with Uvicorn.  Host, port and all other
settings are read from environment variables (see
``finance_ledger_api.app.core.config``), for example::

    DATABASE_URL=/var/lib/ledger.db SECRET_KEY=... python run.py
"""
import asyncio

from uvicorn import Config, Server

from finance_ledger_api.app.core.config import settings
from finance_ledger_api.app.main import app


async def main() -> None:
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
