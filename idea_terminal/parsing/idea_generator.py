"""Idea Generator log parsing.

Idea Generator submissions span several lines and start with a date
marker::

    Date:2025-10-29
    Email: founder@example.com
    Generate 10 business idea based on these criteria inputted by the user.
    Industry you like to explore or are Knowledgeable about: healthcare
    What resources do you have?: nursing background, small savings
    What problem do you want to solve?: nurses burn out on paperwork
    Who needs a solution?: hospital nurses
    1. Shift handover app
    Date:2025-10-29 | Selected Idea: Shift handover app

Entries are split on the date marker, parsed field by field, passed through
a noise filter and deduplicated.
"""

import logging
import re

from idea_terminal.models import IdeaGeneratorEntry

logger = logging.getLogger(__name__)

LOW_CONFIDENCE_THRESHOLD = 50

_ENTRY_START_RE = re.compile(r"^Date:(\d{4}-\d{2}-\d{2})(\s*\|.*)?$", re.IGNORECASE)
_SELECTED_RE = re.compile(r"^Date:\d{4}-\d{2}-\d{2}\s*\|\s*Selected Idea:", re.IGNORECASE)
_SELECTED_VALUE_RE = re.compile(r"Selected Idea:\s*(.+)", re.IGNORECASE)
_DATE_RE = re.compile(r"^Date:(\d{4}-\d{2}-\d{2})", re.IGNORECASE)
_IDEA_LINE_RE = re.compile(r"^(\d+\.|idea\s*\d+)", re.IGNORECASE)

_SEPARATOR = "-" * 54

# Each field: label detectors, value regexes, and next-line markers that
# mean the value is missing rather than wrapped onto the next line
_FIELDS = (
    (
        "industry",
        ("industry", "knowledgeable about"),
        (re.compile(r"industry.*?:\s*(.+)", re.I), re.compile(r"knowledgeable about.*?:\s*(.+)", re.I)),
        ("generate", "what resources", "what problem"),
    ),
    (
        "skills",
        ("what resources", "resources do you have"),
        (re.compile(r"what resources.*?:\s*(.+)", re.I), re.compile(r"resources do you have.*?:\s*(.+)", re.I)),
        ("what problem", "who needs"),
    ),
    (
        "problem",
        ("what problem", "problem do you want to solve"),
        (re.compile(r"what problem.*?:\s*(.+)", re.I), re.compile(r"problem do you want to solve.*?:\s*(.+)", re.I)),
        ("who needs", _SEPARATOR),
    ),
    (
        "customer",
        ("who needs",),
        (re.compile(r"who needs.*?:\s*(.+)", re.I),),
        (_SEPARATOR, "date:"),
    ),
)

_PLACEHOLDER_RE = re.compile(r"^(n/a|none|idk|na|n\.a\.|null|undefined|blank)$", re.IGNORECASE)
_SPECIAL_CHARS = set("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?")


def split_entries(content: str | None) -> list[list[str]]:
    """Split raw log text into per-entry line groups.

    A ``Date:YYYY-MM-DD`` line opens a new entry unless it is a
    ``Selected Idea`` line, which belongs to the entry before it. Lines
    before the first marker are dropped.
    """
    if not content:
        return []

    groups: list[list[str]] = []
    current: list[str] = []
    for line in content.splitlines():
        trimmed = line.strip()
        starts_entry = bool(_ENTRY_START_RE.match(trimmed)) and not _SELECTED_RE.match(trimmed)

        if starts_entry:
            if current:
                groups.append(current)
            current = [line]
        elif current:
            current.append(line)

    if current:
        groups.append(current)
    return groups


def _is_missing_value(next_line: str, stop_markers: tuple[str, ...]) -> bool:
    lower = next_line.lower()
    return not next_line or any(marker in lower for marker in stop_markers)


def parse_entry(lines: list[str]) -> IdeaGeneratorEntry | None:
    """Parse one entry's lines.

    Args:
        lines: Lines of a single entry, starting with the date marker.

    Returns:
        The entry, or None when the date marker is missing or none of
        industry, skills, problem and customer could be read.
    """
    if not lines or len(lines) < 3:
        return None

    date_match = _DATE_RE.match(lines[0].strip())
    if not date_match:
        return None

    entry = IdeaGeneratorEntry(date=date_match.group(1), raw="\n".join(lines))

    i = 0
    while i < len(lines):
        line = lines[i].strip()
        next_line = lines[i + 1].strip() if i + 1 < len(lines) else ""
        lower = line.lower()

        if _SELECTED_RE.match(line):
            match = _SELECTED_VALUE_RE.search(line)
            if match:
                entry.selected_idea = match.group(1).strip()
            elif next_line:
                entry.selected_idea = next_line
                i += 1
            i += 1
            continue

        if lower.startswith("email:"):
            entry.email = line[6:].strip()
            if not entry.email and next_line and "generate" not in next_line.lower():
                entry.email = next_line
                i += 1
            i += 1
            continue

        if lower.startswith("date:"):
            i += 1
            continue

        for name, labels, patterns, stop_markers in _FIELDS:
            if not any(label in lower for label in labels):
                continue
            value = ""
            for pattern in patterns:
                match = pattern.search(line)
                if match and match.group(1).strip():
                    value = match.group(1).strip()
                    break
            if not value and not _is_missing_value(next_line, stop_markers):
                value = next_line
                i += 1
            setattr(entry, name, value)
            break
        else:
            # The "Generate 10 business idea..." header is neither a field nor an idea
            if _IDEA_LINE_RE.match(line):
                entry.ideas.append(line)
        i += 1

    if entry.industry or entry.skills or entry.problem or entry.customer:
        return entry
    return None


def is_clean_entry(entry: IdeaGeneratorEntry | None) -> bool:
    """Noise filter for Idea Generator entries.

    Keeps entries with at least three of industry, skills, problem and
    customer filled in with real answers, and rejects non-English text,
    emoji noise, symbol spam, very short answers and repeated-word spam.
    """
    if entry is None:
        return False

    fields = [entry.industry.strip(), entry.skills.strip(), entry.problem.strip(), entry.customer.strip()]
    if sum(1 for value in fields if value) < 3:
        return False
    if any(value and _PLACEHOLDER_RE.match(value) for value in fields):
        return False

    all_text = " ".join(fields).lower()
    length = len(all_text)

    non_ascii = sum(1 for char in all_text if ord(char) > 0x7F)
    if non_ascii > length * 0.5:
        return False

    emoji = sum(1 for char in all_text if 0x1F300 <= ord(char) <= 0x1F9FF)
    if emoji > 10:
        return False

    special = sum(1 for char in all_text if char in _SPECIAL_CHARS)
    if special > length * 0.3:
        return False

    if length < 20:
        return False

    words = all_text.split()
    if len(words) > 10 and len(set(words)) < len(words) * 0.3:
        return False

    return True


def parse_idea_generator_content(content: str | None) -> list[IdeaGeneratorEntry]:
    """Parse, clean and dedupe a whole Idea Generator log."""
    entries = []
    seen = set()
    parsed = cleaned = duplicates = 0

    for lines in split_entries(content):
        entry = parse_entry(lines)
        if entry is None:
            continue
        parsed += 1
        if not is_clean_entry(entry):
            continue
        cleaned += 1
        key = entry.dedupe_key()
        if key in seen:
            duplicates += 1
            continue
        seen.add(key)
        entries.append(entry)

    logger.info(
        f"[Parser] Idea Generator: {parsed} parsed, {cleaned} passed cleaning, "
        f"{duplicates} duplicates, {len(entries)} unique"
    )
    if entries and len(entries) < LOW_CONFIDENCE_THRESHOLD:
        logger.info(f"[Parser] Only {len(entries)} Idea Generator entries; treat trends as high uncertainty")
    return entries
