"""Date helpers for Idea Terminal.

Week-over-week windows, deltas and the YYMMDD log file naming scheme.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass
class WeekWindows:
    """Current and previous comparison windows ending at ``now``."""
    now: datetime
    current_start: datetime
    previous_start: datetime

    def in_current(self, moment: datetime) -> bool:
        return self.current_start <= moment <= self.now

    def in_previous(self, moment: datetime) -> bool:
        return self.previous_start <= moment < self.current_start


def week_windows(now: datetime, days: int = 7) -> WeekWindows:
    """Split the last ``2 * days`` days at ``now - days``."""
    return WeekWindows(
        now=now,
        current_start=now - timedelta(days=days),
        previous_start=now - timedelta(days=days * 2),
    )


def lookback_start(now: datetime, days: int) -> datetime:
    """Start of the lookback range ending at ``now``."""
    return now - timedelta(days=days)


def calculate_wow_change(current: int | float, previous: int | float) -> float:
    """Fractional week-over-week change (0.27 means +27%).

    A category with no previous activity reports exactly 1.0 when it has
    any current activity, and 0 when it has none.
    """
    if previous == 0:
        return 1.0 if current > 0 else 0
    return (current - previous) / previous


def format_percentage_change(change: float) -> str:
    """Format a fractional change for display, e.g. ``+27.0%``."""
    sign = "+" if change >= 0 else ""
    return f"{sign}{change * 100:.1f}%"


def date_string(moment: date | datetime) -> str:
    """YYYY-MM-DD for a date or datetime."""
    return moment.strftime("%Y-%m-%d")


def get_log_filename(day: date | datetime, prefix: str = "free_tool_log") -> str:
    """Daily log filename, e.g. ``free_tool_log251103.txt``."""
    return f"{prefix}{day.strftime('%y%m%d')}.txt"


def parse_log_date(value: str | None) -> str | None:
    """Convert a YYMMDD stamp to YYYY-MM-DD, or None when invalid."""
    if not value or len(value) != 6 or not value.isdigit():
        return None
    try:
        parsed = date(2000 + int(value[:2]), int(value[2:4]), int(value[4:]))
    except ValueError:
        return None
    return parsed.strftime("%Y-%m-%d")
