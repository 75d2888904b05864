"""
Time-Window Filter for the FinTrack dashboard.

A window selects which transactions a dashboard pass considers:
- DayCountWindow(d): today and the d-1 days before it
- AllTimeWindow: every transaction
- CustomRangeWindow(start, end): whole days from start to end inclusive

Filtering is pure and order-preserving. A custom range with a missing
bound degrades to the unfiltered set instead of failing.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List, Optional, Union

from fintrack.domain.entities import Transaction
from fintrack.domain.exceptions import InvalidWindowException

ALL_SELECTOR = "all"
CUSTOM_SELECTOR = "custom"

MAX_WINDOW_DAYS = 3660  # ten years


@dataclass(frozen=True)
class DayCountWindow:
    """The last `days` calendar days, today included."""

    days: int

    def __post_init__(self):
        if self.days < 1:
            raise InvalidWindowException(
                f"Day-count window must be positive, got {self.days}"
            )

    def start_date(self, today: Optional[date] = None) -> date:
        """First day included in the window."""
        today = today or date.today()
        try:
            return today - timedelta(days=self.days - 1)
        except OverflowError:
            raise InvalidWindowException(
                f"Day-count window of {self.days} days reaches before year 1"
            )


@dataclass(frozen=True)
class AllTimeWindow:
    """No date restriction."""


@dataclass(frozen=True)
class CustomRangeWindow:
    """An explicit date range; either bound may still be unset."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_bounded(self) -> bool:
        return self.start is not None and self.end is not None


TimeWindow = Union[DayCountWindow, AllTimeWindow, CustomRangeWindow]


def parse_window(
    selector: str,
    start: Optional[Union[date, str]] = None,
    end: Optional[Union[date, str]] = None,
    max_days: int = MAX_WINDOW_DAYS,
) -> TimeWindow:
    """
    Build a window from a selector as sent by clients.

    Args:
        selector: "all", "custom", or a positive day count such as "7"
        start: Custom range start (date or ISO string), ignored otherwise
        end: Custom range end (date or ISO string), ignored otherwise
        max_days: Largest accepted day count

    Returns:
        The matching window

    Raises:
        InvalidWindowException: If the selector or a date cannot be parsed,
            or the day count is out of range
    """
    selector = (selector or "").strip().lower()

    if selector == ALL_SELECTOR:
        return AllTimeWindow()

    if selector == CUSTOM_SELECTOR:
        return CustomRangeWindow(start=_parse_bound(start), end=_parse_bound(end))

    try:
        days = int(selector)
    except ValueError:
        raise InvalidWindowException(f"Unknown window selector: {selector!r}")

    if days > max_days:
        raise InvalidWindowException(
            f"Day-count window cannot exceed {max_days} days, got {days}"
        )

    return DayCountWindow(days)


def _parse_bound(value: Optional[Union[date, str]]) -> Optional[date]:
    if value is None or isinstance(value, date):
        return value
    if not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise InvalidWindowException(f"Invalid date: {value!r}")


def filter_transactions(
    transactions: Iterable[Transaction],
    window: TimeWindow,
    today: Optional[date] = None,
) -> List[Transaction]:
    """
    Select the transactions that fall inside a window.

    Args:
        transactions: The full snapshot
        window: The active window
        today: Reference day for day-count windows (defaults to today)

    Returns:
        Matching transactions in their original relative order
    """
    if isinstance(window, DayCountWindow):
        cutoff = window.start_date(today)
        return [t for t in transactions if t.date >= cutoff]

    if isinstance(window, CustomRangeWindow) and window.is_bounded:
        return [t for t in transactions if window.start <= t.date <= window.end]

    return list(transactions)


def window_label(window: TimeWindow) -> str:
    """Short label used in export filenames."""
    if isinstance(window, DayCountWindow):
        return f"{window.days}days"
    if isinstance(window, CustomRangeWindow):
        return CUSTOM_SELECTOR
    return ALL_SELECTOR


def window_description(window: TimeWindow) -> str:
    """Human-readable range, as printed on reports."""
    if isinstance(window, DayCountWindow):
        return "Today" if window.days == 1 else f"{window.days} days"
    if isinstance(window, CustomRangeWindow) and window.is_bounded:
        return f"{window.start.isoformat()} to {window.end.isoformat()}"
    return "All time"
