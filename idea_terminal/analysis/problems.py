"""Problem normalization, similarity and the problem heatmap.

Free-text problem statements are grouped without any taxonomy:
- ``normalize_problem_name`` gives the identity used across periods
- ``are_similar`` decides whether two statements describe the same problem
- ``group_similar_problems`` greedily buckets statements around seeds
- ``build_problem_heatmap`` turns buckets into ranked heatmap rows

When no idea carries a problem, ``build_problem_heatmap_from_chart`` derives
friction areas from low-scoring chart categories instead. Those rows name
market areas, not literal problem statements.
"""

import logging
import math
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from idea_terminal.config import HeatmapConfig
from idea_terminal.dates import calculate_wow_change
from idea_terminal.models import ChartEntry, Idea, ProblemBucket

logger = logging.getLogger(__name__)

NORMALIZED_LENGTH = 50
CONTAINMENT_MIN_LENGTH = 20
WORD_OVERLAP_RATIO = 0.6

# Short words that still carry meaning in a problem statement
SHORT_KEYWORD_WHITELIST = {"cost", "price", "paid", "free", "safe", "fast", "slow", "easy", "hard"}

# Generic words of five or more letters that say nothing about the problem
PROBLEM_STOPWORDS = {
    # Pronouns and determiners
    "their", "there", "these", "those", "which", "where", "whose", "other",
    "others", "every", "everyone", "everything", "someone", "something",
    "anyone", "anything", "nobody", "nothing", "yourself", "myself",
    "themselves", "itself",
    # Prepositions and connectives
    "about", "above", "after", "again", "against", "along", "among",
    "around", "before", "below", "between", "during", "since", "through",
    "under", "until", "within", "without", "while", "because", "though",
    "although", "however", "therefore",
    # Quantifiers and fillers
    "always", "never", "often", "really", "still", "quite", "rather",
    "several", "enough", "almost", "maybe", "actually", "basically",
    "little", "great", "whole",
    # Common verbs
    "could", "would", "should", "might", "being", "having", "doing",
    "getting", "making", "using", "trying", "looking", "going", "wants",
    "needs", "needed", "wanted", "think", "thinks", "know", "knows",
    "things", "thing", "people", "create", "build", "help", "helps",
}

_WORD_RE = re.compile(r"\b\w+\b")
_NON_WORD_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")
_PARENTHETICAL_RE = re.compile(r"\s*\([^)]*\)")


# =============================================================================
# NORMALIZATION AND SIMILARITY
# =============================================================================

def normalize_problem_name(problem: str | None) -> str:
    """Lowercase, strip punctuation, collapse whitespace, keep 50 chars.

    The result is the identity of a problem across periods: two statements
    sharing their first 50 normalized characters count as the same problem.
    """
    if not problem:
        return ""
    text = _NON_WORD_RE.sub(" ", problem.lower())
    text = _WHITESPACE_RE.sub(" ", text).strip()
    return text[:NORMALIZED_LENGTH].rstrip()


def extract_meaningful_keywords(problem: str | None) -> set[str]:
    """Keywords of a problem statement, minus generic words.

    Keeps word tokens of five or more letters plus a few meaningful
    four-letter words like ``cost`` and ``slow``.
    """
    if not problem:
        return set()
    keywords = set()
    for word in _WORD_RE.findall(problem.lower()):
        if len(word) >= 5 or word in SHORT_KEYWORD_WHITELIST:
            if word not in PROBLEM_STOPWORDS:
                keywords.add(word)
    return keywords


def _significant_words(text: str) -> list[str]:
    return list(dict.fromkeys(word for word in text.split() if len(word) > 3))


def _words_match(left: str, right: str) -> bool:
    # Plural forms only: "agent"/"agents" match, "data"/"database" do not
    if left == right:
        return True
    shorter, longer = sorted((left, right), key=len)
    return longer in (shorter + "s", shorter + "es")


def are_similar(a: str | None, b: str | None) -> bool:
    """Decide whether two problem strings describe the same problem.

    Args:
        a: First string, usually already normalized.
        b: Second string.

    Returns:
        True when identical, when one contains the other and both are longer
        than 20 chars, or when at least 60% of the shorter side's words
        (longer than 3 chars) also appear on the other side.
    """
    if a is None or b is None:
        return False
    if a == b:
        return True
    if len(a) > CONTAINMENT_MIN_LENGTH and len(b) > CONTAINMENT_MIN_LENGTH:
        if a in b or b in a:
            return True

    words_a = _significant_words(a)
    words_b = _significant_words(b)
    shorter, longer = (words_a, words_b) if len(words_a) <= len(words_b) else (words_b, words_a)
    if not shorter:
        return False

    common = sum(1 for word in shorter if any(_words_match(word, other) for other in longer))
    return common >= math.ceil(WORD_OVERLAP_RATIO * len(shorter))


def _keywords_overlap(left: set[str], right: set[str], config: HeatmapConfig) -> bool:
    common = left & right
    if len(common) < config.min_common_keywords:
        return False
    union = left | right
    return len(common) / len(union) >= config.min_jaccard


# =============================================================================
# GROUPING
# =============================================================================

@dataclass
class ProblemGroup:
    """Problems judged to be the same, seeded by ``members[0]``."""
    members: list[str] = field(default_factory=list)

    @property
    def seed(self) -> str:
        return self.members[0]

    @property
    def normalized(self) -> str:
        return normalize_problem_name(self.seed)

    @property
    def count(self) -> int:
        return len(self.members)


def group_similar_problems(
    problems: list[str],
    config: HeatmapConfig | None = None,
) -> list[ProblemGroup]:
    """Greedily group problem statements.

    Problems are visited in order. Each unassigned problem seeds a new group
    and absorbs every later unassigned problem similar to it, so the earliest
    problem always wins the members it matches.

    Args:
        problems: Raw problem statements.
        config: Keyword overlap thresholds.

    Returns:
        Groups in seed order.
    """
    config = config or HeatmapConfig()
    texts = [p for p in problems if p]
    normalized = [normalize_problem_name(p) for p in texts]
    keywords = [extract_meaningful_keywords(p) for p in texts]
    assigned = [False] * len(texts)

    groups = []
    for seed in range(len(texts)):
        if assigned[seed]:
            continue
        assigned[seed] = True
        group = ProblemGroup(members=[texts[seed]])

        for other in range(seed + 1, len(texts)):
            if assigned[other]:
                continue
            if are_similar(normalized[seed], normalized[other]) or _keywords_overlap(
                keywords[seed], keywords[other], config
            ):
                assigned[other] = True
                group.members.append(texts[other])

        groups.append(group)

    return groups


def _pick_examples(group: ProblemGroup, name: str, limit: int) -> list[str]:
    """Members most similar to the group name, input order otherwise."""
    target = normalize_problem_name(name)
    ranked = sorted(
        group.members,
        key=lambda member: 0 if are_similar(normalize_problem_name(member), target) else 1,
    )
    return ranked[:limit]


# =============================================================================
# HEATMAP
# =============================================================================

def _stated_problems(ideas: list[Idea], min_length: int) -> list[str]:
    return [idea.problem for idea in ideas if idea.problem and len(idea.problem) > min_length]


def build_problem_heatmap(
    ideas: list[Idea],
    previous_ideas: list[Idea],
    config: HeatmapConfig | None = None,
) -> list[ProblemBucket]:
    """Rank recurring problems stated in ideas.

    Args:
        ideas: Ideas in scope.
        previous_ideas: Previous-week ideas, for deltas.
        config: Heatmap thresholds.

    Returns:
        At most ``max_entries`` buckets sorted by count, descending.
    """
    config = config or HeatmapConfig()
    problems = _stated_problems(ideas, config.min_problem_length)
    if not problems:
        return []

    groups = group_similar_problems(problems, config)

    previous_counts = Counter(
        normalize_problem_name(p) for p in _stated_problems(previous_ideas, config.min_problem_length)
    )

    heatmap = []
    for group in groups:
        name = group.seed[:config.name_length]
        heatmap.append(ProblemBucket(
            problem=name,
            count=group.count,
            delta=calculate_wow_change(group.count, previous_counts.get(group.normalized, 0)),
            examples=_pick_examples(group, name, config.max_examples),
        ))

    heatmap.sort(key=lambda bucket: bucket.count, reverse=True)
    logger.debug(f"[Heatmap] {len(problems)} problems -> {len(groups)} groups")
    return heatmap[:config.max_entries]


def translate_heatmap(
    heatmap: list[ProblemBucket],
    translate: Callable[[str], str] | None,
) -> list[ProblemBucket]:
    """Apply a translation callback to problem names and examples.

    A failing callback leaves that text untranslated.
    """
    if translate is None:
        return heatmap

    def _safe(text: str) -> str:
        try:
            return translate(text)
        except Exception as e:
            logger.warning(f"[Heatmap] Translation failed, keeping original text: {e}")
            return text

    return [
        ProblemBucket(
            problem=_safe(bucket.problem),
            count=bucket.count,
            delta=bucket.delta,
            examples=[_safe(example) for example in bucket.examples],
        )
        for bucket in heatmap
    ]


def _problem_areas(category: str | None) -> list[str]:
    """Split a chart category into lowercase areas without parentheticals."""
    areas = []
    for part in (category or "general").split("/"):
        part = part.strip()
        if len(part) <= 2:
            continue
        cleaned = _PARENTHETICAL_RE.sub("", part).strip() or part
        area = cleaned.lower()
        if len(area) > 2:
            areas.append(area)
    return areas


def build_problem_heatmap_from_chart(
    entries: list[ChartEntry],
    config: HeatmapConfig | None = None,
) -> list[ProblemBucket]:
    """Friction areas from chart entries, for when no idea states a problem.

    Categories of low-scoring entries stand in for problems. With fewer than
    ``min_chart_proxies`` areas, the most common categories overall are
    added. Rows carry no delta and no examples.
    """
    config = config or HeatmapConfig()
    counts: Counter[str] = Counter()
    for entry in entries:
        if entry.score < config.low_score_threshold:
            counts.update(_problem_areas(entry.category))

    if len(counts) < config.min_chart_proxies:
        overall: Counter[str] = Counter()
        for entry in entries:
            overall.update(_problem_areas(entry.category))
        top = sorted(overall.items(), key=lambda item: item[1], reverse=True)[:10]
        for area, count in top:
            if area not in counts and count >= config.backfill_min_count:
                counts[area] = count

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [ProblemBucket(problem=area, count=count) for area, count in ranked[:config.max_entries]]
