"""
Tests for the SQLite stores and migrations.
"""

import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from finance_ledger_api.app.models import Transaction, User
from finance_ledger_api.app.stores.user_store import DuplicateEmailError


class TestDatabase:

    def test_init_is_idempotent(self, deps):
        deps.database.init()
        deps.database.init()
        with deps.database.cursor() as cursor:
            versions = [r["version"] for r in cursor.execute("SELECT version FROM migrations ORDER BY version")]
        assert versions == [1, 2]

    def test_cursor_rolls_back_on_error(self, deps):
        with pytest.raises(RuntimeError):
            with deps.database.cursor() as cursor:
                cursor.execute(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    ("Ghost", "ghost@example.com", "x$y"),
                )
                raise RuntimeError("boom")
        assert deps.users.find_by_email("ghost@example.com") is None


class TestUserStore:

    def test_save_assigns_id(self, deps):
        user = deps.users.save(User(id=None, name="John", email="john@example.com", password_hash="a$b"))
        assert user.id is not None
        assert deps.users.find_by_email("john@example.com") == user
        assert deps.users.find_by_id(user.id) == user

    def test_email_lookup_is_case_sensitive(self, deps, alice):
        assert deps.users.find_by_email("Alice@Example.com") is None

    def test_duplicate_email_raises(self, deps, alice):
        with pytest.raises(DuplicateEmailError):
            deps.users.save(User(id=None, name="Other", email=alice.email, password_hash="a$b"))


class TestTransactionStore:

    def test_amount_and_date_round_trip_exactly(self, deps, alice):
        saved = deps.transactions.save(
            Transaction(None, Decimal("1234567890.123456789"), "x", "Income", date(2024, 2, 29), alice.id)
        )
        loaded = deps.transactions.find_by_id(saved.id)
        assert loaded.amount == Decimal("1234567890.123456789")
        assert str(loaded.amount) == "1234567890.123456789"
        assert loaded.date == date(2024, 2, 29)

    def test_save_existing_overwrites_but_keeps_owner(self, deps, alice, bob):
        saved = deps.transactions.save(Transaction(None, Decimal("1"), "x", "Income", date(2025, 1, 1), alice.id))
        changed = Transaction(saved.id, Decimal("2"), "y", "Expense", date(2025, 1, 2), bob.id)
        result = deps.transactions.save(changed)
        assert result.amount == Decimal("2")
        assert result.owner_id == alice.id

    def test_save_missing_row_returns_none(self, deps, alice):
        ghost = Transaction(999, Decimal("1"), None, "Expense", date(2025, 1, 1), alice.id)
        assert deps.transactions.save(ghost) is None

    def test_delete_reports_whether_row_existed(self, deps, alice):
        saved = deps.transactions.save(Transaction(None, Decimal("1"), None, "Expense", date(2025, 1, 1), alice.id))
        assert deps.transactions.delete(saved) is True
        assert deps.transactions.delete(saved) is False

    def test_owner_must_exist(self, deps):
        with pytest.raises(sqlite3.IntegrityError):
            deps.transactions.save(Transaction(None, Decimal("1"), None, "Expense", date(2025, 1, 1), 12345))
