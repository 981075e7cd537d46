"""Category counts with week-over-week deltas.

Chart entries are the preferred source, ideas the fallback. Categories may
combine several sub-categories (``SaaS / HealthTech``); each one is
trimmed, lowercased and counted separately.
"""

from collections import Counter
from typing import Iterable

from idea_terminal.dates import calculate_wow_change
from idea_terminal.models import CategoryStat, ChartEntry, Idea


def split_categories(category: str | None) -> list[str]:
    """``"SaaS / HealthTech"`` -> ``["saas", "healthtech"]``."""
    parts = (category or "general").split("/")
    return [part.strip().lower() for part in parts if part.strip()]


def _count(records: Iterable[ChartEntry | Idea]) -> Counter:
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(split_categories(record.category))
    return counts


def _stats(current: Counter, previous: Counter) -> list[CategoryStat]:
    """Every category seen in either period, sorted by current count."""
    names = list(dict.fromkeys([*current.keys(), *previous.keys()]))
    stats = [
        CategoryStat(
            name=name,
            count=current.get(name, 0),
            delta=calculate_wow_change(current.get(name, 0), previous.get(name, 0)),
        )
        for name in names
    ]
    stats.sort(key=lambda stat: stat.count, reverse=True)
    return stats


def category_stats_from_chart(
    current: list[ChartEntry],
    previous: list[ChartEntry],
) -> list[CategoryStat]:
    """Category stats from chart entries of the current and previous week."""
    return _stats(_count(current), _count(previous))


def category_stats_from_ideas(current: list[Idea], previous: list[Idea]) -> list[CategoryStat]:
    """Category stats from ideas, when no chart data exists."""
    return _stats(_count(current), _count(previous))
