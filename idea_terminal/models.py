"""Record types for Idea Terminal.

Parsed inputs (ideas, chart entries, idea generator entries, advice and
Base44 clicks) and the aggregates that make up a daily report. Every
record serializes with ``to_dict()`` using the field names downstream
rendering expects.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a YYYY-MM-DD or ISO-8601 string into a naive datetime.

    Anything that is not a string parses to None.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_timestamp(value: Any) -> str | None:
    """Turn a JSON date value into a string ``parse_timestamp`` understands.

    Numbers are read as a YYYYMMDD date (``20251103``), as epoch
    milliseconds (at least 1e11), or else as epoch seconds.

    Returns:
        The trimmed string, an ISO-8601 UTC string for numbers, or None
        when the value is empty or unusable.
    """
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None

    if isinstance(value, int) and 10_000_000 <= value <= 99_991_231:
        try:
            return datetime.strptime(str(value), "%Y%m%d").strftime("%Y-%m-%d")
        except ValueError:
            pass

    seconds = value / 1000 if abs(value) >= 1e11 else value
    try:
        moment = datetime.fromtimestamp(seconds, timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Idea:
    """One parsed idea submission."""
    title: str
    description: str = ""
    category: str = "general"
    problem: str | None = None
    keywords: list[str] = field(default_factory=list)
    date: str | None = None
    created_at: str | None = None
    raw: str = ""
    email: str = ""
    target_customers: str = ""
    website_need: str = ""
    status: str = ""
    source_format: str = ""  # Which line parser matched; not serialized

    def timestamp(self) -> datetime | None:
        """Submission time, preferring the log date over created_at."""
        if self.date:
            return parse_timestamp(self.date)
        return parse_timestamp(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "problem": self.problem,
            "keywords": list(self.keywords),
            "date": self.date,
            "created_at": self.created_at,
            "raw": self.raw,
        }
        for key in ("email", "target_customers", "website_need", "status"):
            value = getattr(self, key)
            if value:
                data[key] = value
        return data


@dataclass
class ChartEntry:
    """A scored submission from the chart log."""
    date: str
    date_obj: datetime | None
    email: str
    name: str
    score: int
    category: str = "general"
    raw: str = ""

    def dedupe_key(self) -> str:
        return f"{self.date}|{self.email}|{self.name}|{self.score}|{self.category}".lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "dateObj": self.date_obj.isoformat() if self.date_obj else None,
            "email": self.email,
            "name": self.name,
            "score": self.score,
            "category": self.category,
            "raw": self.raw,
        }


@dataclass
class IdeaGeneratorEntry:
    """A multi-line Idea Generator submission."""
    date: str = ""
    email: str = ""
    industry: str = ""
    skills: str = ""
    problem: str = ""
    customer: str = ""
    ideas: list[str] = field(default_factory=list)
    selected_idea: str = ""
    raw: str = ""

    def dedupe_key(self) -> str:
        return f"{self.email}|{self.industry}|{self.problem}".lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "email": self.email,
            "industry": self.industry,
            "skills": self.skills,
            "problem": self.problem,
            "customer": self.customer,
            "ideas": list(self.ideas),
            "selectedIdea": self.selected_idea,
            "raw": self.raw,
        }


@dataclass
class AdviceEntry:
    """Advice a user received from the advice tool."""
    date: str = ""
    email: str = ""
    idea: str = ""
    advice: str = ""
    raw: str = ""

    def dedupe_key(self) -> str:
        return self.advice[:100].lower().strip()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "email": self.email,
            "idea": self.idea,
            "advice": self.advice,
            "raw": self.raw,
        }


@dataclass
class Base44Click:
    """A click through to the Base44 mockup tool."""
    date: str = ""
    email: str = ""
    keyword: str = ""
    ip: str = ""
    raw: str = ""

    def dedupe_key(self) -> str:
        return f"{self.date}|{self.email}|{self.keyword}|{self.ip}".lower()

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "email": self.email,
            "keyword": self.keyword,
            "ip": self.ip,
            "raw": self.raw,
        }


@dataclass
class CategoryStat:
    """Submission count for one category with its week-over-week change."""
    name: str
    count: int
    delta: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count, "delta": self.delta}


@dataclass
class Cluster:
    """A named group of related ideas."""
    name: str
    count: int
    wow: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "count": self.count, "wow": self.wow}


@dataclass
class ProblemBucket:
    """A recurring problem statement on the heatmap."""
    problem: str
    count: int
    delta: float = 0.0
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "problem": self.problem,
            "count": self.count,
            "delta": self.delta,
            "examples": list(self.examples),
        }


@dataclass
class SignalScoreStats:
    """Aggregate signal score over a set of ideas."""
    average: float = 0.0
    top_decile: float = 0.0
    clear_problem: int = 0  # Percent of ideas
    named_competitor: int = 0
    concise_description: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "average": self.average,
            "topDecile": self.top_decile,
            "rules": {
                "clearProblem": self.clear_problem,
                "namedCompetitor": self.named_competitor,
                "conciseDescription": self.concise_description,
            },
        }


@dataclass
class ValidationStats:
    """Share of ideas showing each lifecycle signal (0-1)."""
    mvp: float = 0.0
    paying: float = 0.0
    mrr: float = 0.0
    launched: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "mvp": self.mvp,
            "paying": self.paying,
            "mrr": self.mrr,
            "launched": self.launched,
        }


@dataclass
class DailyReport:
    """One immutable daily snapshot."""
    date: str
    categories: list[CategoryStat]
    clusters: list[Cluster]
    validation: ValidationStats
    problem_heatmap: list[ProblemBucket]
    signal_score: SignalScoreStats
    ideas: list[Idea]
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "categories": [c.to_dict() for c in self.categories],
            "clusters": [c.to_dict() for c in self.clusters],
            "validation": self.validation.to_dict(),
            "problemHeatmap": [p.to_dict() for p in self.problem_heatmap],
            "signalScore": self.signal_score.to_dict(),
            "ideas": [i.to_dict() for i in self.ideas],
            "metadata": dict(self.metadata),
        }
