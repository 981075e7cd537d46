"""Idea log line parsing for Idea Terminal.

Idea logs mix several line formats. Each format has a ``try_parse_*``
function returning an ``Idea`` or ``None``; ``parse_idea_line`` runs them in
a fixed order and the first match wins:

1. JSON object
2. Pipe-separated named fields (``startup_idea: ... | problem_to_solve: ...``)
3. Pipe-separated positional (``title|category|description``)
4. Tab-separated positional
5. Comma-separated positional
6. Plain text (whole line becomes the title)
"""

import csv
import json
import logging
import re
from typing import Callable

from idea_terminal.models import Idea, coerce_timestamp
from idea_terminal.parsing.keywords import extract_keywords

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"

# Named field captures stop at the next pipe or end of line
_NAMED_FIELDS = {
    "email": re.compile(r"Email:\s*([^|]+)", re.IGNORECASE),
    "startup_idea": re.compile(r"startup_idea:\s*([^|]+)", re.IGNORECASE),
    "target_customers": re.compile(r"target_customers:\s*([^|]+)", re.IGNORECASE),
    "problem_to_solve": re.compile(r"problem_to_solve:\s*([^|]+)", re.IGNORECASE),
    "website_need": re.compile(r"website_need\s*:\s*([^|]+)", re.IGNORECASE),
}

_NAMED_MARKERS = ("startup_idea:", "problem_to_solve:")


def _category_or_default(value: object) -> str:
    text = str(value).strip() if value is not None else ""
    return text or DEFAULT_CATEGORY


def _positional(parts: list[str], raw: str, source_format: str) -> Idea | None:
    """Build an idea from title/category/description columns."""
    if len(parts) < 2:
        return None
    return Idea(
        title=parts[0].strip(),
        category=_category_or_default(parts[1]),
        description=parts[2].strip() if len(parts) > 2 else "",
        raw=raw,
        source_format=source_format,
    )


def try_parse_json(line: str) -> Idea | None:
    """Parse a JSON object line."""
    if not line.startswith("{"):
        return None
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None

    title = data.get("title") or data.get("name") or data.get("idea") or ""
    problem = data.get("problem") or None
    return Idea(
        title=str(title).strip(),
        description=str(data.get("description") or "").strip(),
        category=_category_or_default(data.get("category")),
        problem=str(problem).strip() if problem else None,
        date=coerce_timestamp(data.get("date")),
        created_at=coerce_timestamp(data.get("created_at")),
        email=str(data.get("email") or ""),
        status=str(data.get("status") or ""),
        raw=line,
        source_format="json",
    )


def try_parse_named_pipe(line: str) -> Idea | None:
    """Parse ``Email: ... | startup_idea: ... | problem_to_solve: ...`` lines."""
    if "|" not in line:
        return None
    lower = line.lower()
    if not any(marker in lower for marker in _NAMED_MARKERS):
        return None

    values = {}
    for name, pattern in _NAMED_FIELDS.items():
        match = pattern.search(line)
        values[name] = match.group(1).strip() if match else ""

    return Idea(
        title=values["startup_idea"],
        description=values["startup_idea"],
        problem=values["problem_to_solve"] or None,
        email=values["email"],
        target_customers=values["target_customers"],
        website_need=values["website_need"],
        raw=line,
        source_format="named_pipe",
    )


def try_parse_simple_pipe(line: str) -> Idea | None:
    """Parse ``title|category|description`` lines."""
    if "|" not in line:
        return None
    return _positional(line.split("|"), line, "pipe")


def try_parse_tab(line: str) -> Idea | None:
    """Parse ``title<TAB>category<TAB>description`` lines."""
    if "\t" not in line:
        return None
    return _positional(line.split("\t"), line, "tab")


def try_parse_csv(line: str) -> Idea | None:
    """Parse ``title,category,description`` lines, honouring quotes."""
    if "," not in line:
        return None
    try:
        parts = next(csv.reader([line], skipinitialspace=True))
    except csv.Error:
        parts = line.split(",")
    return _positional(parts, line, "csv")


def parse_plain_text(line: str) -> Idea | None:
    """Fallback: the whole line is the title."""
    if not line:
        return None
    return Idea(title=line, category=DEFAULT_CATEGORY, raw=line, source_format="text")


LINE_PARSERS: tuple[Callable[[str], Idea | None], ...] = (
    try_parse_json,
    try_parse_named_pipe,
    try_parse_simple_pipe,
    try_parse_tab,
    try_parse_csv,
    parse_plain_text,
)


def parse_idea_line(line: str | None) -> Idea | None:
    """Parse one log line into an Idea.

    Returns:
        The first successful parse, or None for blank lines.
    """
    if not line or not line.strip():
        return None

    trimmed = line.strip()
    for parser in LINE_PARSERS:
        idea = parser(trimmed)
        if idea is not None:
            return idea
    return None


# =============================================================================
# PROBLEM EXTRACTION
# =============================================================================

_PIPE_PROBLEM_RE = re.compile(r"\|\s*problem[_\s]*to[_\s]*solve[:\s]+(.+?)(?:\||$)", re.IGNORECASE)

_PROBLEM_PATTERNS = [
    re.compile(rf"{label}[:\s]+(.+?)(?:\.|$|;)", re.IGNORECASE)
    for label in (
        "problem", "problem_to_solve", "issue", "challenge", "pain",
        "difficulty", "struggling", "can't", "cannot", "unable", "lack",
        "need", "want", "solving", "address", r"we're\s+solving",
    )
]

_PROBLEM_WORDS = (
    "problem", "issue", "challenge", "difficult", "hard", "struggle",
    "can't", "cannot", "pain point", "frustration",
)


def extract_problem(title: str | None, description: str | None) -> str | None:
    """Pull a stated problem out of an idea's text.

    Tries an explicit ``| problem_to_solve:`` label, then problem indicator
    phrases, then a description sentence that talks about a problem.
    Captures must be longer than 10 characters.

    Returns:
        The problem text, or None when nothing in the text states one.
    """
    text = f"{title or ''} {description or ''}"

    match = _PIPE_PROBLEM_RE.search(text)
    if match and len(match.group(1).strip()) > 10:
        return match.group(1).strip()

    for pattern in _PROBLEM_PATTERNS:
        match = pattern.search(text)
        if match and len(match.group(1).strip()) > 10:
            return match.group(1).strip()

    if description and len(description) > 20:
        sentences = [s for s in re.split(r"[.!?]+", description) if s.strip()]
        for sentence in sentences:
            lower = sentence.lower()
            if any(word in lower for word in _PROBLEM_WORDS):
                return sentence.strip()

    return None


def parse_log_content(content: str | None, date: str | None = None) -> list[Idea]:
    """Parse a whole idea log.

    Args:
        content: Raw log text.
        date: YYYY-MM-DD stamp for daily logs; the overall log has none.

    Returns:
        One Idea per non-blank line, with keywords and problem filled in.
    """
    if not content:
        return []

    ideas = []
    for line in content.splitlines():
        idea = parse_idea_line(line)
        if idea is None:
            continue

        if date:
            idea.date = date
            idea.created_at = f"{date}T00:00:00Z"

        if idea.title or idea.description:
            idea.keywords = extract_keywords(f"{idea.title} {idea.description}".lower())

        if not idea.problem:
            idea.problem = extract_problem(idea.title, idea.description)

        ideas.append(idea)

    logger.debug(f"[Parser] Parsed {len(ideas)} ideas" + (f" for {date}" if date else ""))
    return ideas
