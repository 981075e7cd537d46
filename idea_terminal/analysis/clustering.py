"""Idea clustering for Idea Terminal.

Clusters come from three strategies, in priority order:
- Keyword clusters: ideas sharing a keyword, above a minimum group size
- Category fallback: fast-growing categories, only when keyword clusters are scarce
- Problem fallback: heavily mentioned heatmap problems, only when still scarce

The lists are concatenated in that order and deduplicated by name, so a
keyword cluster beats a category or problem cluster of the same name.
"""

import logging
from collections import Counter

from idea_terminal.config import ClusteringConfig
from idea_terminal.dates import calculate_wow_change
from idea_terminal.models import CategoryStat, Cluster, Idea, ProblemBucket

logger = logging.getLogger(__name__)


def _keyword_counts(ideas: list[Idea], min_length: int) -> Counter:
    """Number of ideas carrying each keyword, in order of first appearance."""
    counts: Counter[str] = Counter()
    for idea in ideas:
        for keyword in dict.fromkeys(idea.keywords):
            if len(keyword) >= min_length:
                counts[keyword] += 1
    return counts


def keyword_clusters(
    ideas: list[Idea],
    previous_ideas: list[Idea],
    config: ClusteringConfig | None = None,
) -> list[Cluster]:
    """Group ideas by shared keyword.

    Args:
        ideas: Ideas in scope.
        previous_ideas: Previous-week ideas, for week-over-week change.
        config: Minimum cluster size and keyword length.

    Returns:
        One cluster per keyword shared by at least ``cluster_threshold`` ideas.
    """
    config = config or ClusteringConfig()
    current = _keyword_counts(ideas, config.min_keyword_length)
    previous = _keyword_counts(previous_ideas, config.min_keyword_length)

    return [
        Cluster(name=keyword, count=count, wow=calculate_wow_change(count, previous.get(keyword, 0)))
        for keyword, count in current.items()
        if count >= config.cluster_threshold
    ]


def category_fallback_clusters(
    categories: list[CategoryStat],
    config: ClusteringConfig | None = None,
) -> list[Cluster]:
    """Growing categories as pseudo-clusters."""
    config = config or ClusteringConfig()
    growing = [
        cat for cat in categories
        if cat.count >= config.category_min_count and cat.delta > config.category_min_delta
    ]
    return [Cluster(name=cat.name, count=cat.count, wow=cat.delta) for cat in growing[:config.category_limit]]


def problem_fallback_clusters(
    problem_heatmap: list[ProblemBucket],
    config: ClusteringConfig | None = None,
) -> list[Cluster]:
    """Frequently mentioned problems as pseudo-clusters."""
    config = config or ClusteringConfig()
    frequent = [bucket for bucket in problem_heatmap if bucket.count >= config.problem_min_count]
    return [
        Cluster(
            name=bucket.problem[:config.problem_name_length],
            count=bucket.count,
            wow=bucket.delta or 0,
        )
        for bucket in frequent[:config.problem_limit]
    ]


def get_clusters(
    ideas: list[Idea],
    previous_ideas: list[Idea],
    categories: list[CategoryStat] | None = None,
    problem_heatmap: list[ProblemBucket] | None = None,
    config: ClusteringConfig | None = None,
) -> list[Cluster]:
    """Build the report's cluster list.

    Fallback strategies only run when the earlier strategies produced fewer
    than ``min_clusters_before_fallback`` clusters.

    Args:
        ideas: Ideas in scope.
        previous_ideas: Previous-week ideas.
        categories: Category stats for the category fallback.
        problem_heatmap: Heatmap rows for the problem fallback.
        config: Clustering thresholds.

    Returns:
        At most ``max_clusters`` clusters, unique by name, sorted by count.
    """
    config = config or ClusteringConfig()
    categories = categories or []
    problem_heatmap = problem_heatmap or []

    by_keyword = keyword_clusters(ideas, previous_ideas, config)

    by_category: list[Cluster] = []
    if len(by_keyword) < config.min_clusters_before_fallback and categories:
        by_category = category_fallback_clusters(categories, config)

    by_problem: list[Cluster] = []
    if len(by_keyword) + len(by_category) < config.min_clusters_before_fallback and problem_heatmap:
        by_problem = problem_fallback_clusters(problem_heatmap, config)

    logger.debug(
        f"[Clusters] keyword={len(by_keyword)} category={len(by_category)} problem={len(by_problem)}"
    )

    unique = []
    seen = set()
    for cluster in [*by_keyword, *by_category, *by_problem]:
        key = cluster.name.lower().strip()
        if key in seen:
            continue
        seen.add(key)
        unique.append(cluster)

    unique.sort(key=lambda cluster: cluster.count, reverse=True)
    return unique[:config.max_clusters]
