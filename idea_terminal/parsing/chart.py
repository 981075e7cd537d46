"""Chart log parsing.

Chart lines are pipe-separated scored submissions::

    date|email|name|score|category

The category may hold several ``/``-separated sub-categories.
"""

import logging
from datetime import datetime

from idea_terminal.models import ChartEntry, parse_timestamp

logger = logging.getLogger(__name__)

CHART_FIELD_COUNT = 5

# Non-ISO layouts seen in chart logs
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M:%S",
    "%Y-%m-%d %H:%M",
)


def parse_chart_date(value: str) -> datetime | None:
    """Parse a chart date string, or None when it is not a date."""
    parsed = parse_timestamp(value)
    if parsed is not None:
        return parsed
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
    return None


def _parse_score(value: str) -> int:
    # Leading digits only, like "85/100" -> 85
    digits = ""
    for char in value.strip():
        if char.isdigit() or (char == "-" and not digits):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def parse_chart_line(line: str | None) -> ChartEntry | None:
    """Parse one chart line.

    Returns:
        A ChartEntry, or None for blank lines and lines with fewer than
        five pipe-separated fields.
    """
    if not line or not line.strip():
        return None

    parts = [part.strip() for part in line.strip().split("|")]
    if len(parts) < CHART_FIELD_COUNT:
        return None

    date_str, email, name, score_str, category = parts[:CHART_FIELD_COUNT]
    return ChartEntry(
        date=date_str,
        date_obj=parse_chart_date(date_str),
        email=email,
        name=name,
        score=_parse_score(score_str),
        category=category or "general",
        raw=line,
    )


def parse_chart_content(content: str | None) -> list[ChartEntry]:
    """Parse a chart log, dropping exact duplicate entries."""
    if not content:
        return []

    entries = []
    seen = set()
    duplicates = 0
    for line in content.splitlines():
        entry = parse_chart_line(line)
        if entry is None:
            continue
        key = entry.dedupe_key()
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        entries.append(entry)

    suffix = f" (deduped {duplicates} duplicates)" if duplicates else ""
    logger.info(f"[Parser] Parsed {len(entries)} unique chart entries{suffix}")
    return entries
