"""Advice log parsing.

Advice logs (``tool_advise_<YYMMDD>.txt``) record the advice users got for
their ideas. Lines are usually ``date|email|idea|advice`` but may also be
JSON objects or tab-separated; the advice itself may contain pipes.
"""

import json
import logging

from idea_terminal.models import AdviceEntry, coerce_timestamp

logger = logging.getLogger(__name__)

MIN_ADVICE_LENGTH = 10  # Advice must be longer than this to count
MIN_PLAIN_LENGTH = 20  # Unstructured lines longer than this are advice


def _from_columns(parts: list[str], separator: str, raw: str) -> AdviceEntry | None:
    parts = [part.strip() for part in parts]
    if len(parts) < 3:
        return None
    return AdviceEntry(
        date=parts[0],
        email=parts[1],
        idea=parts[2],
        advice=separator.join(parts[3:]),
        raw=raw,
    )


def _from_json(line: str) -> AdviceEntry | None:
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    idea = data.get("idea") or data.get("name") or data.get("title") or ""
    advice = data.get("advice") or data.get("feedback") or data.get("hint") or data.get("instruction") or ""
    return AdviceEntry(
        date=coerce_timestamp(data.get("date")) or "",
        email=str(data.get("email") or ""),
        idea=str(idea),
        advice=str(advice),
        raw=line,
    )


def parse_advice_line(line: str | None) -> AdviceEntry | None:
    """Parse one advice line.

    Tries pipe columns, then JSON, then tab columns. A line matching none
    of them is taken as bare advice when it is longer than 20 characters.

    Returns:
        An AdviceEntry, or None for blank or too-short lines.
    """
    if not line or not line.strip():
        return None
    trimmed = line.strip()

    if "|" in trimmed:
        entry = _from_columns(trimmed.split("|"), "|", trimmed)
        if entry is not None:
            return entry

    if trimmed.startswith("{"):
        entry = _from_json(trimmed)
        if entry is not None:
            return entry

    if "\t" in trimmed:
        entry = _from_columns(trimmed.split("\t"), "\t", trimmed)
        if entry is not None:
            return entry

    if len(trimmed) > MIN_PLAIN_LENGTH:
        return AdviceEntry(advice=trimmed, raw=trimmed)
    return None


def parse_advice_content(content: str | None) -> list[AdviceEntry]:
    """Parse one advice log, keeping entries with substantial advice."""
    if not content:
        return []

    entries = []
    for line in content.splitlines():
        entry = parse_advice_line(line)
        if entry is not None and len(entry.advice.strip()) > MIN_ADVICE_LENGTH:
            entries.append(entry)
    return entries


def dedupe_advice_entries(entries: list[AdviceEntry]) -> list[AdviceEntry]:
    """Keep the first entry per advice text (first 100 chars, lowercased)."""
    unique = []
    seen = set()
    for entry in entries:
        key = entry.dedupe_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(entry)

    duplicates = len(entries) - len(unique)
    if duplicates:
        logger.info(f"[Parser] Removed {duplicates} duplicate advice entries")
    return unique
