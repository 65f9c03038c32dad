"""
Top‑level package for the Finance Ledger API.

This file makes ``finance_ledger_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``finance_ledger_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
