"""Flat-file log sources for Idea Terminal.

The collectors drop their logs into one directory:
- ``free_tool_log.txt``: cumulative idea log
- ``free_tool_log<YYMMDD>.txt``: one idea log per day
- ``tool_chart.txt``: scored chart entries
- ``gen-idea-log.txt``: multi-line Idea Generator submissions
- ``tool_advise_<YYMMDD>.txt``: advice given to users, one log per day
- ``<YYYY-MM-DD>-base44.txt``: Base44 click-throughs, one log per day

Every read degrades to an empty list on failure so a report with partial
data can still be built.
"""

import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from idea_terminal.analysis.report import ReportInputs
from idea_terminal.config import Config
from idea_terminal.dates import date_string, get_log_filename
from idea_terminal.models import AdviceEntry, Base44Click, ChartEntry, Idea, IdeaGeneratorEntry
from idea_terminal.parsing import (
    dedupe_advice_entries,
    parse_advice_content,
    parse_base44_content,
    parse_chart_content,
    parse_idea_generator_content,
    parse_log_content,
)

logger = logging.getLogger(__name__)


def _days_back(end: date | datetime | None, days: int) -> list[date]:
    """``days`` dates ending at ``end`` (default today), newest first."""
    end = end or date.today()
    if isinstance(end, datetime):
        end = end.date()
    return [end - timedelta(days=offset) for offset in range(days)]


class LogSource:
    """Reads and parses the log files in one directory."""

    def __init__(self, directory: str | Path | None = None, config: Config | None = None):
        """Initialize the source.

        Args:
            directory: Log directory. Defaults to ``config.sources.directory``.
            config: Configuration; defaults when omitted.
        """
        self.config = config or Config()
        self.directory = Path(directory or self.config.sources.directory)

    def _read(self, name: str) -> str | None:
        """Read a log file, or None when it cannot be read."""
        path = self.directory / name
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            logger.info(f"[Sources] {path} not found, skipping")
            return None
        except OSError as e:
            logger.warning(f"[Sources] Could not read {path}: {e}")
            return None

    def read_overall(self) -> list[Idea]:
        """Ideas from the cumulative log."""
        content = self._read(self.config.sources.overall_log)
        ideas = parse_log_content(content)
        logger.info(f"[Sources] Overall log: {len(ideas)} ideas")
        return ideas

    def read_daily(self, days: int | None = None, end: date | datetime | None = None) -> list[Idea]:
        """Ideas from the daily logs of the last ``days`` days.

        Args:
            days: Number of daily logs, counting back from ``end``.
            end: Newest day to read. Defaults to today.

        Returns:
            Ideas stamped with their log's date, newest day first.
        """
        days = days if days is not None else self.config.collection.daily_log_days

        ideas = []
        for day in _days_back(end, days):
            filename = get_log_filename(day, self.config.sources.daily_log_prefix)
            content = self._read(filename)
            if content is None:
                continue
            day_ideas = parse_log_content(content, date_string(day))
            logger.debug(f"[Sources] {filename}: {len(day_ideas)} ideas")
            ideas.extend(day_ideas)

        logger.info(f"[Sources] Daily logs: {len(ideas)} ideas over {days} days")
        return ideas

    def read_chart(self) -> list[ChartEntry]:
        return parse_chart_content(self._read(self.config.sources.chart_log))

    def read_idea_generator(self) -> list[IdeaGeneratorEntry]:
        return parse_idea_generator_content(self._read(self.config.sources.idea_generator_log))

    def read_advice(self, days: int | None = None, end: date | datetime | None = None) -> list[AdviceEntry]:
        """Advice from the daily advice logs, deduplicated across days.

        Days without a log are skipped.
        """
        days = days if days is not None else self.config.collection.advice_days

        entries = []
        files_found = 0
        for day in _days_back(end, days):
            content = self._read(get_log_filename(day, self.config.sources.advice_log_prefix))
            if content is None:
                continue
            files_found += 1
            entries.extend(parse_advice_content(content))

        unique = dedupe_advice_entries(entries)
        logger.info(f"[Sources] Advice logs: {len(unique)} entries from {files_found} files")
        return unique

    def read_base44(self, days: int | None = None, end: date | datetime | None = None) -> list[Base44Click]:
        """Base44 clicks from the daily click logs, newest day first."""
        days = days if days is not None else self.config.collection.base44_days

        clicks = []
        for day in _days_back(end, days):
            stamp = date_string(day)
            content = self._read(f"{stamp}{self.config.sources.base44_log_suffix}")
            clicks.extend(parse_base44_content(content, stamp))

        logger.info(f"[Sources] Base44 logs: {len(clicks)} clicks over {days} days")
        return clicks

    def collect_inputs(self, day: date | datetime | None = None, days: int | None = None) -> ReportInputs:
        """Read every source for a report ending on ``day``."""
        return ReportInputs(
            overall_ideas=self.read_overall(),
            daily_ideas=self.read_daily(days, day),
            chart_entries=self.read_chart(),
            idea_generator_entries=self.read_idea_generator(),
            advice_entries=self.read_advice(end=day),
            base44_clicks=self.read_base44(end=day),
        )
