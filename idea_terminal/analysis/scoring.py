"""Signal scoring and validation stats for Idea Terminal.

Per-idea signal score (0-100):
- Clear problem: 30 (or 15 for a description over 50 chars)
- Named competitor or alternative: 20
- Concise description: 20 under 200 chars, 10 under 500
- Specific category: 10
- Keywords present: 10
- Validation signal (mvp, launched, paying): 10
"""

import logging
import math

from idea_terminal.models import Idea, SignalScoreStats, ValidationStats

logger = logging.getLogger(__name__)

MAX_SCORE = 100
TOP_DECILE = 0.1

COMPETITOR_KEYWORDS = ["competitor", "alternative", "vs", "like", "similar to", "instead of"]
SCORE_VALIDATION_KEYWORDS = ["mvp", "launched", "paying"]

MVP_KEYWORDS = ["mvp", "minimum viable product", "prototype"]
PAYING_KEYWORDS = ["paying", "revenue", "paying customers", "mrr", "arr"]
LAUNCHED_KEYWORDS = ["launched", "live", "public"]


# =============================================================================
# RULES
# =============================================================================

def _text(idea: Idea) -> str:
    return f"{idea.title or ''} {idea.description or ''}".lower()


def _mentions(idea: Idea, keywords: list[str]) -> bool:
    status = (idea.status or "").lower()
    text = _text(idea)
    return any(kw in status or kw in text for kw in keywords)


def has_clear_problem(idea: Idea) -> bool:
    return bool(idea.problem) and len(idea.problem) > 10


def names_competitor(idea: Idea) -> bool:
    text = _text(idea)
    return any(kw in text for kw in COMPETITOR_KEYWORDS)


def has_concise_description(idea: Idea) -> bool:
    return 0 < len(idea.description or "") < 200


def calculate_signal_score(idea: Idea) -> int:
    """Rule-based signal score for one idea, capped at 100."""
    score = 0

    if has_clear_problem(idea):
        score += 30
    elif len(idea.description or "") > 50:
        score += 15

    if names_competitor(idea):
        score += 20

    desc_length = len(idea.description or "")
    if has_concise_description(idea):
        score += 20
    elif 200 <= desc_length < 500:
        score += 10

    if idea.category and idea.category != "general":
        score += 10

    if idea.keywords:
        score += 10

    if _mentions(idea, SCORE_VALIDATION_KEYWORDS):
        score += 10

    return min(MAX_SCORE, score)


# =============================================================================
# AGGREGATES
# =============================================================================

def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _percent(passing: int, total: int) -> int:
    return int(_round_half_up(passing / total * 100)) if total else 0


def signal_score_stats(ideas: list[Idea]) -> SignalScoreStats:
    """Average score, top-decile score and rule pass rates.

    The top decile is the score at rank ``floor(n * 0.1)`` of the scores
    sorted high to low, not an average of the top 10%.

    Args:
        ideas: Ideas in scope.

    Returns:
        SignalScoreStats; all zeros for no ideas.
    """
    if not ideas:
        return SignalScoreStats()

    scores = sorted((calculate_signal_score(idea) for idea in ideas), reverse=True)
    total = len(ideas)
    average = sum(scores) / total
    top_decile = scores[math.floor(total * TOP_DECILE)]

    return SignalScoreStats(
        average=_round_half_up(average, 1),
        top_decile=_round_half_up(top_decile, 1),
        clear_problem=_percent(sum(1 for idea in ideas if has_clear_problem(idea)), total),
        named_competitor=_percent(sum(1 for idea in ideas if names_competitor(idea)), total),
        concise_description=_percent(sum(1 for idea in ideas if has_concise_description(idea)), total),
    )


def validation_stats(ideas: list[Idea]) -> ValidationStats:
    """Share of ideas mentioning each lifecycle stage.

    ``mrr`` reuses the paying signal; there is no separate MRR source.
    """
    if not ideas:
        return ValidationStats()

    total = len(ideas)
    mvp = sum(1 for idea in ideas if _mentions(idea, MVP_KEYWORDS))
    paying = sum(1 for idea in ideas if _mentions(idea, PAYING_KEYWORDS))
    launched = sum(1 for idea in ideas if _mentions(idea, LAUNCHED_KEYWORDS))

    return ValidationStats(
        mvp=mvp / total,
        paying=paying / total,
        mrr=paying / total,
        launched=launched / total,
    )
