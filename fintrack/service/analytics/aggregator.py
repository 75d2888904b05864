"""
Aggregator for the FinTrack dashboard.

Reduces a filtered transaction set into:
- Total income, total expense and net balance
- Expense totals per category, largest first
- Sparse per-day net movement for the trend chart

Inputs are expected to be normalized already; malformed amounts and dates
are handled once at the store boundary, not here.
"""

from typing import Dict, Iterable, List

from fintrack.domain.entities import DEFAULT_CATEGORY, Transaction

from .models import CategoryTotal, DailyValue, Summary
from .window import DayCountWindow, TimeWindow


def calculate_totals(transactions: Iterable[Transaction]) -> tuple[float, float]:
    """
    Sum income and expense amounts.

    Returns:
        (total_income, total_expense)
    """
    total_income = 0.0
    total_expense = 0.0

    for txn in transactions:
        if txn.is_income:
            total_income += txn.amount
        else:
            total_expense += txn.amount

    return total_income, total_expense


def calculate_category_totals(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """
    Group expenses by category and sum each group.

    Income is ignored. The result is sorted by amount, largest first;
    categories with equal totals keep the order in which they first appear.
    """
    totals: Dict[str, float] = {}

    for txn in transactions:
        if not txn.is_expense:
            continue
        name = txn.category or DEFAULT_CATEGORY
        totals[name] = totals.get(name, 0.0) + txn.amount

    ranked = [CategoryTotal(name=name, value=value) for name, value in totals.items()]
    return sorted(ranked, key=lambda c: c.value, reverse=True)


def calculate_daily_trend(transactions: Iterable[Transaction]) -> List[DailyValue]:
    """
    Net movement per date with activity.

    Income counts positive, expenses negative. Dates without transactions
    are not emitted; zero-filling belongs to the trend renderer.
    """
    per_day: Dict = {}

    for txn in transactions:
        per_day[txn.date] = per_day.get(txn.date, 0.0) + txn.signed_amount

    return [DailyValue(date=day, value=value) for day, value in per_day.items()]


def aggregate(transactions: Iterable[Transaction], window: TimeWindow) -> Summary:
    """
    Compute every dashboard figure for an already-filtered set.

    Args:
        transactions: Transactions inside the active window
        window: The active window; the daily trend is only produced for
            day-count windows

    Returns:
        Summary of the set
    """
    transactions = list(transactions)
    total_income, total_expense = calculate_totals(transactions)

    if isinstance(window, DayCountWindow):
        daily_trend = calculate_daily_trend(transactions)
    else:
        daily_trend = []

    return Summary(
        total_income=total_income,
        total_expense=total_expense,
        net_balance=total_income - total_expense,
        category_totals=calculate_category_totals(transactions),
        daily_trend=daily_trend,
        transaction_count=len(transactions),
    )
