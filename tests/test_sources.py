"""Tests for reading log files from disk."""

import sys
from datetime import date, datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from idea_terminal.config import Config
from idea_terminal.sources import LogSource


GENERATOR_ENTRY = """\
Date:2025-11-09
Email: founder@example.com
Industry you like to explore or are Knowledgeable about: healthcare staffing
What resources do you have?: nursing background and small savings
What problem do you want to solve?: nurses burn out from endless paperwork
Who needs a solution?: hospital nurses and clinic managers
"""


@pytest.fixture
def log_dir(tmp_path) -> Path:
    """A log directory with every kind of source file."""
    (tmp_path / "free_tool_log.txt").write_text(
        "Pet sitter finder|pets|Book sitters nearby\nInvoice chaser|fintech|Chase late invoices\n",
        encoding="utf-8",
    )
    (tmp_path / "free_tool_log251110.txt").write_text(
        "Meal planner|food|Plan weekly meals\n\nGym buddy|fitness|Find a training partner\n",
        encoding="utf-8",
    )
    (tmp_path / "free_tool_log251108.txt").write_text("Plant doctor|garden|Diagnose sick plants\n", encoding="utf-8")
    (tmp_path / "tool_chart.txt").write_text(
        "2025-11-08|ana@example.com|Pet app|72|SaaS\n2025-11-08|ana@example.com|Pet app|72|SaaS\n",
        encoding="utf-8",
    )
    (tmp_path / "gen-idea-log.txt").write_text(GENERATOR_ENTRY, encoding="utf-8")
    (tmp_path / "tool_advise_251110.txt").write_text(
        "2025-11-10|ana@example.com|Pet app|Talk to ten owners first\n"
        "2025-11-10|bo@example.com|Gym buddy|Short\n",
        encoding="utf-8",
    )
    (tmp_path / "tool_advise_251108.txt").write_text(
        "2025-11-08|cy@example.com|Pet app|talk to ten owners first\n"
        "Price the first plan at ten dollars\n",
        encoding="utf-8",
    )
    (tmp_path / "2025-11-10-base44.txt").write_text(
        "Email: ana@example.com | Keyword: pet app | IP: 203.0.113.7\n"
        "Email: ana@example.com | Keyword: pet app | IP: 203.0.113.7\n"
        "Email: bo@example.com | Keyword: crm | IP: 198.51.100.2\n",
        encoding="utf-8",
    )
    return tmp_path


class TestLogSource:
    """Tests for LogSource."""

    def test_directory_from_config(self):
        config = Config()
        config.sources.directory = "/srv/logs"

        assert LogSource(config=config).directory == Path("/srv/logs")

    def test_read_overall(self, log_dir):
        ideas = LogSource(log_dir).read_overall()

        assert [idea.title for idea in ideas] == ["Pet sitter finder", "Invoice chaser"]
        assert all(idea.date is None for idea in ideas)

    def test_read_daily_newest_first(self, log_dir):
        ideas = LogSource(log_dir).read_daily(days=3, end=date(2025, 11, 10))

        assert [idea.title for idea in ideas] == ["Meal planner", "Gym buddy", "Plant doctor"]
        assert [idea.date for idea in ideas] == ["2025-11-10", "2025-11-10", "2025-11-08"]
        assert ideas[0].created_at == "2025-11-10T00:00:00Z"

    def test_read_daily_accepts_datetime(self, log_dir):
        ideas = LogSource(log_dir).read_daily(days=1, end=datetime(2025, 11, 8, 23, 59))

        assert [idea.title for idea in ideas] == ["Plant doctor"]

    def test_read_daily_window(self, log_dir):
        assert LogSource(log_dir).read_daily(days=1, end=date(2025, 11, 9)) == []

    def test_read_chart(self, log_dir):
        entries = LogSource(log_dir).read_chart()

        assert len(entries) == 1
        assert entries[0].score == 72

    def test_read_idea_generator(self, log_dir):
        entries = LogSource(log_dir).read_idea_generator()

        assert len(entries) == 1
        assert entries[0].industry == "healthcare staffing"

    def test_read_advice_across_days(self, log_dir):
        entries = LogSource(log_dir).read_advice(days=3, end=date(2025, 11, 10))

        assert [entry.advice for entry in entries] == [
            "Talk to ten owners first",
            "Price the first plan at ten dollars",
        ]
        assert entries[0].email == "ana@example.com"

    def test_read_advice_window(self, log_dir):
        assert LogSource(log_dir).read_advice(days=1, end=date(2025, 11, 9)) == []

    def test_read_base44(self, log_dir):
        clicks = LogSource(log_dir).read_base44(days=3, end=date(2025, 11, 10))

        assert [click.keyword for click in clicks] == ["pet app", "crm"]
        assert all(click.date == "2025-11-10" for click in clicks)

    def test_missing_files(self, tmp_path):
        source = LogSource(tmp_path)

        assert source.read_overall() == []
        assert source.read_daily(days=5, end=date(2025, 11, 10)) == []
        assert source.read_chart() == []
        assert source.read_idea_generator() == []
        assert source.read_advice(days=5, end=date(2025, 11, 10)) == []
        assert source.read_base44(days=5, end=date(2025, 11, 10)) == []

    def test_unreadable_file(self, tmp_path):
        (tmp_path / "free_tool_log.txt").mkdir()

        assert LogSource(tmp_path).read_overall() == []

    def test_collect_inputs(self, log_dir):
        inputs = LogSource(log_dir).collect_inputs(day=date(2025, 11, 10), days=3)

        assert len(inputs.overall_ideas) == 2
        assert len(inputs.daily_ideas) == 3
        assert len(inputs.chart_entries) == 1
        assert len(inputs.idea_generator_entries) == 1
        assert len(inputs.advice_entries) == 2
        assert len(inputs.base44_clicks) == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
