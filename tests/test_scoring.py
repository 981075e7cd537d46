"""Tests for signal scoring and validation stats."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from idea_terminal.analysis import calculate_signal_score, signal_score_stats, validation_stats
from idea_terminal.models import Idea


@pytest.fixture
def paying_idea() -> Idea:
    """An idea with a stated problem, category, keywords and paying status."""
    return Idea(
        title="Support bot",
        description="",
        category="ai",
        keywords=["ai"],
        problem="teams drown in tickets",
        status="paying",
    )


class TestSignalScore:
    """Tests for the per-idea score."""

    def test_paying_idea(self, paying_idea):
        assert calculate_signal_score(paying_idea) == 60

    def test_concise_description_adds(self, paying_idea):
        paying_idea.description = "a" * 100

        assert calculate_signal_score(paying_idea) == 80

    def test_competitor(self):
        idea = Idea(title="Cheaper alternative to Zendesk")

        assert calculate_signal_score(idea) == 20

    def test_partial_problem_credit(self):
        idea = Idea(title="Notes", description="word " * 12)

        assert calculate_signal_score(idea) == 35

    def test_long_description(self):
        idea = Idea(title="Notes", description="x" * 300)

        assert calculate_signal_score(idea) == 25

    def test_very_long_description(self):
        idea = Idea(title="Notes", description="x" * 600)

        assert calculate_signal_score(idea) == 15

    def test_validation_in_text(self):
        idea = Idea(title="Notes", description="We launched")

        assert calculate_signal_score(idea) == 30

    def test_maximum(self):
        idea = Idea(
            title="Cheaper alternative to Zendesk",
            description="Helpdesk with an MVP already live",
            category="saas",
            keywords=["helpdesk"],
            problem="support tools cost too much",
        )

        assert calculate_signal_score(idea) == 100

    def test_bare_idea(self):
        assert calculate_signal_score(Idea(title="Notes")) == 0


class TestSignalScoreStats:
    """Tests for aggregate score stats."""

    def test_stats(self, paying_idea):
        ideas = [
            paying_idea,
            Idea(title="Notes", description="word " * 12),
            Idea(title="Drafts", description="x" * 300),
        ]

        stats = signal_score_stats(ideas)

        assert stats.average == 40.0
        assert stats.top_decile == 60
        assert stats.clear_problem == 33
        assert stats.named_competitor == 0
        assert stats.concise_description == 33

    def test_average_rounded(self, paying_idea):
        ideas = [paying_idea, Idea(title="a", description="word " * 12), Idea(title="b", description="word " * 12)]

        assert signal_score_stats(ideas).average == 43.3

    def test_rates_round_half_up(self, paying_idea):
        ideas = [paying_idea] + [Idea(title=f"idea {i}") for i in range(7)]

        assert signal_score_stats(ideas).clear_problem == 13

    def test_top_decile_rank(self):
        ideas = [Idea(title="idea 0", keywords=["tool"])] + [Idea(title=f"idea {i}") for i in range(1, 10)]

        stats = signal_score_stats(ideas)

        # Ten ideas: index 1 of the sorted scores, not the single best score.
        assert stats.top_decile == 0

    def test_empty(self):
        stats = signal_score_stats([])

        assert stats.average == 0
        assert stats.top_decile == 0
        assert stats.to_dict()["rules"] == {"clearProblem": 0, "namedCompetitor": 0, "conciseDescription": 0}


class TestValidationStats:
    """Tests for lifecycle shares."""

    def test_each_signal(self):
        ideas = [
            Idea(title="Prototype for X"),
            Idea(title="We have paying customers"),
            Idea(title="Launched last month"),
            Idea(title="nothing here"),
        ]

        stats = validation_stats(ideas)

        assert stats.mvp == 0.25
        assert stats.paying == 0.25
        assert stats.mrr == 0.25
        assert stats.launched == 0.25

    def test_status_counts(self):
        stats = validation_stats([Idea(title="Tool", status="MVP")])

        assert stats.mvp == 1.0

    def test_empty(self):
        assert validation_stats([]).to_dict() == {"mvp": 0.0, "paying": 0.0, "mrr": 0.0, "launched": 0.0}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
