"""Base44 click log parsing.

One click per line::

    Email: ana@example.com | Keyword: pet app | IP: 203.0.113.7

Any of the three fields may be missing.
"""

import logging
import re
from collections import Counter

from idea_terminal.models import Base44Click

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"Email:\s*([^|]+)", re.IGNORECASE)
_KEYWORD_RE = re.compile(r"Keyword:\s*([^|]+)", re.IGNORECASE)
_IP_RE = re.compile(r"IP:\s*([^|]+)", re.IGNORECASE)


def _field(pattern: re.Pattern, line: str) -> str:
    match = pattern.search(line)
    return match.group(1).strip() if match else ""


def parse_base44_line(line: str | None, date: str = "") -> Base44Click | None:
    """Parse one click line, or None when it has no recognised field."""
    if not line or not line.strip():
        return None
    trimmed = line.strip()

    click = Base44Click(
        date=date,
        email=_field(_EMAIL_RE, trimmed),
        keyword=_field(_KEYWORD_RE, trimmed),
        ip=_field(_IP_RE, trimmed),
        raw=trimmed,
    )
    if not (click.email or click.keyword or click.ip):
        return None
    return click


def parse_base44_content(content: str | None, date: str = "") -> list[Base44Click]:
    """Parse one day's click log, dropping repeated clicks."""
    if not content:
        return []

    clicks = []
    seen = set()
    for line in content.splitlines():
        click = parse_base44_line(line, date)
        if click is None:
            continue
        key = click.dedupe_key()
        if key in seen:
            continue
        seen.add(key)
        clicks.append(click)

    logger.debug(f"[Parser] {len(clicks)} Base44 clicks for {date or 'undated log'}")
    return clicks


def top_click_keywords(clicks: list[Base44Click], limit: int = 5) -> list[dict]:
    """Most clicked keywords, compared case-insensitively."""
    counts = Counter(click.keyword.lower() for click in clicks if click.keyword)
    return [{"keyword": keyword, "count": count} for keyword, count in counts.most_common(limit)]
