"""Analysis module for Idea Terminal.

Provides problem grouping, clustering, category deltas, scoring and
daily report assembly over parsed idea records.
"""

from idea_terminal.analysis.problems import (
    ProblemGroup,
    normalize_problem_name,
    extract_meaningful_keywords,
    are_similar,
    group_similar_problems,
    build_problem_heatmap,
    build_problem_heatmap_from_chart,
    translate_heatmap,
)

from idea_terminal.analysis.categories import (
    split_categories,
    category_stats_from_chart,
    category_stats_from_ideas,
)

from idea_terminal.analysis.clustering import (
    keyword_clusters,
    category_fallback_clusters,
    problem_fallback_clusters,
    get_clusters,
)

from idea_terminal.analysis.scoring import (
    COMPETITOR_KEYWORDS,
    calculate_signal_score,
    signal_score_stats,
    validation_stats,
)

from idea_terminal.analysis.report import (
    ReportInputs,
    ReportNotFoundError,
    dedupe_ideas,
    dedupe_chart_entries,
    filter_ideas_by_range,
    filter_chart_by_range,
    build_daily_report,
    save_report,
    load_report,
)

__all__ = [
    # Problems
    "ProblemGroup",
    "normalize_problem_name",
    "extract_meaningful_keywords",
    "are_similar",
    "group_similar_problems",
    "build_problem_heatmap",
    "build_problem_heatmap_from_chart",
    "translate_heatmap",
    # Categories
    "split_categories",
    "category_stats_from_chart",
    "category_stats_from_ideas",
    # Clustering
    "keyword_clusters",
    "category_fallback_clusters",
    "problem_fallback_clusters",
    "get_clusters",
    # Scoring
    "COMPETITOR_KEYWORDS",
    "calculate_signal_score",
    "signal_score_stats",
    "validation_stats",
    # Report
    "ReportInputs",
    "ReportNotFoundError",
    "dedupe_ideas",
    "dedupe_chart_entries",
    "filter_ideas_by_range",
    "filter_chart_by_range",
    "build_daily_report",
    "save_report",
    "load_report",
]
