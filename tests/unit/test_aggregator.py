"""
Unit tests for the aggregator.

These tests verify:
1. Income and expense totals and the net balance
2. Category totals: expenses only, largest first, stable on ties
3. Sparse daily trend: signed amounts, one entry per active date
4. The trend is only produced for day-count windows
"""

from datetime import date

import pytest

from fintrack.domain.entities import Transaction, TransactionType
from fintrack.service.analytics.aggregator import (
    aggregate,
    calculate_category_totals,
    calculate_daily_trend,
    calculate_totals,
)
from fintrack.service.analytics.window import AllTimeWindow, CustomRangeWindow, DayCountWindow

D1 = date(2026, 10, 17)
D2 = date(2026, 10, 18)
D3 = date(2026, 10, 19)


def expense(amount: float, category: str, day: date = D3, txn_id: str = "") -> Transaction:
    return Transaction(
        id=txn_id or f"e-{category}-{amount}",
        amount=amount,
        type=TransactionType.EXPENSE,
        date=day,
        category=category,
    )


def income(amount: float, day: date = D3, txn_id: str = "") -> Transaction:
    return Transaction(
        id=txn_id or f"i-{amount}",
        amount=amount,
        type=TransactionType.INCOME,
        date=day,
    )


class TestTotals:

    def test_totals_split_by_type(self):
        txns = [income(1000), expense(250, "Food"), expense(100, "Transport")]

        assert calculate_totals(txns) == (1000.0, 350.0)

    def test_empty_set(self):
        assert calculate_totals([]) == (0.0, 0.0)

    def test_net_balance(self):
        summary = aggregate([income(500), expense(800, "Rent")], AllTimeWindow())

        assert summary.net_balance == pytest.approx(-300.0)
        assert summary.net_balance == summary.total_income - summary.total_expense


class TestCategoryTotals:

    def test_sorted_largest_first(self):
        txns = [
            expense(50, "Food"),
            expense(500, "Rent"),
            expense(30, "Food"),
            expense(120, "Transport"),
        ]

        result = calculate_category_totals(txns)

        assert [(c.name, c.value) for c in result] == [
            ("Rent", 500.0),
            ("Transport", 120.0),
            ("Food", 80.0),
        ]

    def test_income_is_ignored(self):
        result = calculate_category_totals([income(1000), expense(10, "Food")])

        assert [c.name for c in result] == ["Food"]

    def test_ties_keep_first_seen_order(self):
        txns = [expense(40, "Health"), expense(40, "Bills"), expense(40, "Food")]

        result = calculate_category_totals(txns)

        assert [c.name for c in result] == ["Health", "Bills", "Food"]

    def test_category_sum_matches_total_expense(self):
        txns = [expense(12.5, "Food"), expense(7.25, "Bills"), income(99), expense(3, "Food")]

        summary = aggregate(txns, AllTimeWindow())

        assert sum(c.value for c in summary.category_totals) == pytest.approx(
            summary.total_expense
        )

    def test_no_expenses(self):
        assert calculate_category_totals([income(10)]) == []


class TestDailyTrend:

    def test_signed_net_per_day(self):
        txns = [
            income(100, D1),
            expense(30, "Food", D1),
            expense(20, "Food", D2),
        ]

        result = calculate_daily_trend(txns)

        assert [(p.date, p.value) for p in result] == [(D1, 70.0), (D2, -20.0)]

    def test_dates_without_activity_are_not_emitted(self):
        result = calculate_daily_trend([expense(5, "Food", D1), expense(5, "Food", D3)])

        assert [p.date for p in result] == [D1, D3]

    def test_trend_only_for_day_count_windows(self):
        txns = [income(100, D3)]

        assert aggregate(txns, DayCountWindow(7)).daily_trend != []
        assert aggregate(txns, AllTimeWindow()).daily_trend == []
        assert aggregate(txns, CustomRangeWindow(D1, D3)).daily_trend == []


class TestAggregate:

    def test_summary_fields(self):
        txns = [income(1000), expense(250, "Food"), expense(100, "Food")]

        summary = aggregate(txns, DayCountWindow(30))

        assert summary.total_income == 1000.0
        assert summary.total_expense == 350.0
        assert summary.transaction_count == 3
        assert summary.category_totals[0].name == "Food"
        assert summary.category_totals[0].value == 350.0

    def test_to_dict(self):
        summary = aggregate([expense(10, "Food", D3)], DayCountWindow(7))

        data = summary.to_dict()

        assert data["category_totals"] == [{"name": "Food", "value": 10.0}]
        assert data["daily_trend"] == [{"date": "2026-10-19", "value": -10.0}]
