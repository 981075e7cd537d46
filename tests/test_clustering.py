"""Tests for idea clustering."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from idea_terminal.analysis import (
    category_fallback_clusters,
    get_clusters,
    keyword_clusters,
    problem_fallback_clusters,
)
from idea_terminal.config import ClusteringConfig
from idea_terminal.models import CategoryStat, Idea, ProblemBucket


def make_ideas(keyword_lists: list[list[str]], prefix: str = "idea") -> list[Idea]:
    return [Idea(title=f"{prefix} {i}", keywords=keywords) for i, keywords in enumerate(keyword_lists)]


@pytest.fixture
def growing_categories() -> list[CategoryStat]:
    return [
        CategoryStat(name="fintech", count=20, delta=0.5),
        CategoryStat(name="health", count=15, delta=0.05),
        CategoryStat(name="pets", count=9, delta=0.9),
        CategoryStat(name="food", count=12, delta=0.2),
    ]


class TestKeywordClusters:
    """Tests for keyword co-occurrence clusters."""

    def test_threshold(self):
        config = ClusteringConfig(cluster_threshold=3)
        ideas = make_ideas([["api"], ["api"], ["api"], ["bot"]])

        clusters = keyword_clusters(ideas, [], config)

        assert [(c.name, c.count) for c in clusters] == [("api", 3)]

    def test_short_keywords_ignored(self):
        config = ClusteringConfig(cluster_threshold=1)
        ideas = make_ideas([["ai", "saas"]])

        assert [c.name for c in keyword_clusters(ideas, [], config)] == ["saas"]

    def test_week_over_week(self):
        config = ClusteringConfig(cluster_threshold=3)
        ideas = make_ideas([["api"]] * 3)
        previous = make_ideas([["api"]] * 2, prefix="old")

        clusters = keyword_clusters(ideas, previous, config)

        assert clusters[0].wow == 0.5

    def test_new_keyword(self):
        config = ClusteringConfig(cluster_threshold=3)

        clusters = keyword_clusters(make_ideas([["api"]] * 3), [], config)

        assert clusters[0].wow == 1.0


class TestFallbacks:
    """Tests for category and problem fallbacks."""

    def test_category_fallback_filters(self, growing_categories):
        clusters = category_fallback_clusters(growing_categories)

        assert [(c.name, c.count, c.wow) for c in clusters] == [("fintech", 20, 0.5), ("food", 12, 0.2)]

    def test_problem_fallback_truncates(self):
        heatmap = [ProblemBucket(problem="p" * 80, count=25, delta=0.3), ProblemBucket(problem="rare", count=5)]

        clusters = problem_fallback_clusters(heatmap)

        assert len(clusters) == 1
        assert clusters[0].name == "p" * 60
        assert clusters[0].wow == 0.3


class TestGetClusters:
    """Tests for combined clustering."""

    def test_spec_threshold_example(self):
        config = ClusteringConfig(cluster_threshold=3)
        ideas = make_ideas([["api"], ["api"], ["api"], ["bot"]])

        clusters = get_clusters(ideas, [], config=config)

        assert [(c.name, c.count) for c in clusters] == [("api", 3)]

    def test_keyword_clusters_suppress_fallbacks(self, growing_categories):
        ideas = make_ideas([["alpha", "bravo", "charlie", "delta"]] * 5)
        heatmap = [ProblemBucket(problem="x" * 70, count=30)]

        clusters = get_clusters(ideas, [], growing_categories, heatmap)

        assert {c.name for c in clusters} == {"alpha", "bravo", "charlie", "delta"}

    def test_fallbacks_fill_gaps(self, growing_categories):
        heatmap = [ProblemBucket(problem="p" * 80, count=25, delta=0.3)]

        clusters = get_clusters([], [], growing_categories, heatmap)

        assert [(c.name, c.count) for c in clusters] == [("p" * 60, 25), ("fintech", 20), ("food", 12)]

    def test_problem_fallback_skipped_when_enough(self, growing_categories):
        categories = growing_categories + [CategoryStat(name="travel", count=11, delta=0.4)]
        heatmap = [ProblemBucket(problem="p" * 80, count=25)]

        clusters = get_clusters([], [], categories, heatmap)

        assert [c.name for c in clusters] == ["fintech", "food", "travel"]

    def test_keyword_beats_category_with_same_name(self, growing_categories):
        ideas = make_ideas([["fintech"]] * 5)

        clusters = get_clusters(ideas, [], growing_categories)

        fintech = [c for c in clusters if c.name == "fintech"]
        assert len(fintech) == 1
        assert fintech[0].count == 5

    def test_capped_at_twenty(self):
        ideas = make_ideas([[f"keyword{i}" for i in range(25)]] * 5)

        clusters = get_clusters(ideas, [])

        assert len(clusters) == 20

    def test_empty(self):
        assert get_clusters([], []) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
