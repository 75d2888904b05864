"""
Unit tests for document normalization at the store boundary.

Malformed documents must never be fatal: every field has a coercion
rule, and the result is always a fully typed Transaction.
"""

from datetime import date, datetime, timezone

import pytest

from fintrack.domain.entities import Transaction, TransactionType
from fintrack.infrastructure.stores.normalize import (
    coerce_amount,
    coerce_date,
    document_to_transaction,
    sort_for_display,
)

TODAY = date(2026, 10, 19)


class TestCoerceAmount:

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (12, 12.0),
            (12.5, 12.5),
            ("12.5", 12.5),
            (" 40 ", 40.0),
            ("abc", 0.0),
            (None, 0.0),
            (True, 0.0),
            ([1], 0.0),
            (float("inf"), 0.0),
            ("nan", 0.0),
        ],
    )
    def test_coercion(self, raw, expected):
        assert coerce_amount(raw) == expected


class TestCoerceDate:

    def test_iso_date(self):
        assert coerce_date("2026-10-01", TODAY) == date(2026, 10, 1)

    def test_iso_datetime_keeps_date_part(self):
        assert coerce_date("2026-10-01T23:30:00Z", TODAY) == date(2026, 10, 1)

    @pytest.mark.parametrize("raw", [None, "", "yesterday", 20261001])
    def test_unusable_dates_fall_back_to_today(self, raw):
        assert coerce_date(raw, TODAY) == TODAY


class TestDocumentToTransaction:

    def test_well_formed_expense(self):
        txn = document_to_transaction(
            "d1",
            {
                "amount": 250,
                "type": "expense",
                "category": "Food",
                "description": "Lunch",
                "date": "2026-10-19",
            },
            TODAY,
        )

        assert txn == Transaction(
            id="d1",
            amount=250.0,
            type=TransactionType.EXPENSE,
            date=TODAY,
            category="Food",
            description="Lunch",
        )

    def test_income_has_no_category(self):
        txn = document_to_transaction(
            "d2", {"amount": "100", "type": "income", "category": "Food"}, TODAY
        )

        assert txn.is_income
        assert txn.category is None

    def test_expense_without_category_is_other(self):
        txn = document_to_transaction("d3", {"amount": 5, "type": "expense"}, TODAY)

        assert txn.category == "Other"

    def test_unknown_type_is_expense(self):
        txn = document_to_transaction("d4", {"amount": 5, "type": "refund"}, TODAY)

        assert txn.is_expense

    def test_malformed_document(self):
        txn = document_to_transaction("d5", {"amount": "lots", "description": 42}, TODAY)

        assert txn.amount == 0.0
        assert txn.date == TODAY
        assert txn.description == ""

    def test_non_mapping_document(self):
        txn = document_to_transaction("d6", "garbage", TODAY)

        assert txn.id == "d6"
        assert txn.amount == 0.0

    def test_created_at_from_document(self):
        txn = document_to_transaction(
            "d7", {"amount": 1, "createdAt": "2026-10-19T08:00:00+00:00"}, TODAY
        )

        assert txn.created_at == datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


class TestSortForDisplay:

    def test_newest_date_first_and_stable(self):
        txns = [
            document_to_transaction("old", {"amount": 1, "date": "2026-10-01"}, TODAY),
            document_to_transaction("new-a", {"amount": 1, "date": "2026-10-19"}, TODAY),
            document_to_transaction("new-b", {"amount": 1, "date": "2026-10-19"}, TODAY),
        ]

        assert [t.id for t in sort_for_display(txns)] == ["new-a", "new-b", "old"]
