"""Daily report orchestration for Idea Terminal.

Merges the parsed sources, removes duplicates, and wires categories,
problem heatmap, clusters, validation and signal stats into one
``DailyReport`` snapshot persisted as ``<date>.json``.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

from idea_terminal.analysis.categories import category_stats_from_chart, category_stats_from_ideas
from idea_terminal.analysis.clustering import get_clusters
from idea_terminal.analysis.problems import (
    build_problem_heatmap,
    build_problem_heatmap_from_chart,
    translate_heatmap,
)
from idea_terminal.analysis.scoring import signal_score_stats, validation_stats
from idea_terminal.config import Config
from idea_terminal.dates import date_string, lookback_start, week_windows
from idea_terminal.models import AdviceEntry, Base44Click, ChartEntry, DailyReport, Idea, IdeaGeneratorEntry
from idea_terminal.parsing import dedupe_advice_entries, top_click_keywords

logger = logging.getLogger(__name__)


class ReportNotFoundError(LookupError):
    """No saved report exists for the requested date."""


@dataclass
class ReportInputs:
    """Parsed inputs for one report run."""
    overall_ideas: list[Idea] = field(default_factory=list)
    daily_ideas: list[Idea] = field(default_factory=list)
    chart_entries: list[ChartEntry] = field(default_factory=list)
    idea_generator_entries: list[IdeaGeneratorEntry] = field(default_factory=list)
    advice_entries: list[AdviceEntry] = field(default_factory=list)
    base44_clicks: list[Base44Click] = field(default_factory=list)


# =============================================================================
# DEDUPLICATION AND FILTERING
# =============================================================================

def dedupe_ideas(*sources: list[Idea]) -> list[Idea]:
    """Concatenate idea lists and keep the first idea per title.

    Titles compare lowercased and trimmed; ideas without a title are dropped.
    """
    unique = []
    seen = set()
    for ideas in sources:
        for idea in ideas:
            key = (idea.title or "").lower().strip()
            if not key or key in seen:
                continue
            seen.add(key)
            unique.append(idea)
    return unique


def dedupe_chart_entries(entries: list[ChartEntry]) -> list[ChartEntry]:
    unique = []
    seen = set()
    for entry in entries:
        key = entry.dedupe_key()
        if key not in seen:
            seen.add(key)
            unique.append(entry)
    return unique


def filter_ideas_by_range(ideas: list[Idea], accept: Callable[[datetime], bool]) -> list[Idea]:
    """Ideas whose timestamp passes ``accept``; undated ideas are excluded."""
    result = []
    for idea in ideas:
        moment = idea.timestamp()
        if moment is not None and accept(moment):
            result.append(idea)
    return result


def filter_chart_by_range(entries: list[ChartEntry], accept: Callable[[datetime], bool]) -> list[ChartEntry]:
    return [entry for entry in entries if entry.date_obj is not None and accept(entry.date_obj)]


# =============================================================================
# REPORT
# =============================================================================

def build_daily_report(
    inputs: ReportInputs,
    config: Config | None = None,
    now: datetime | None = None,
    translate: Callable[[str], str] | None = None,
) -> DailyReport:
    """Build the daily report from parsed inputs.

    Args:
        inputs: Parsed ideas, chart entries and Idea Generator entries.
        config: Thresholds and windows; defaults when omitted.
        now: End of the current window (naive UTC). Defaults to the current time.
        translate: Optional callback applied to problem heatmap text.

    Returns:
        DailyReport keyed by the date of ``now``.
    """
    config = config or Config()
    now = now or datetime.now(timezone.utc).replace(tzinfo=None)
    windows = week_windows(now, config.collection.current_window_days)

    unique_ideas = dedupe_ideas(inputs.overall_ideas, inputs.daily_ideas)
    chart_entries = dedupe_chart_entries(inputs.chart_entries)
    logger.info(f"[Report] {len(unique_ideas)} unique ideas, {len(chart_entries)} chart entries")

    current_chart = filter_chart_by_range(chart_entries, windows.in_current)
    previous_chart = filter_chart_by_range(chart_entries, windows.in_previous)
    current_ideas = filter_ideas_by_range(unique_ideas, windows.in_current)
    previous_ideas = filter_ideas_by_range(unique_ideas, windows.in_previous)

    start = lookback_start(now, config.collection.lookback_days)
    lookback_ideas = filter_ideas_by_range(unique_ideas, lambda moment: start <= moment <= now)

    logger.info(
        f"[Report] Current week: {len(current_ideas)} ideas, {len(current_chart)} chart entries; "
        f"previous week: {len(previous_ideas)} ideas, {len(previous_chart)} chart entries; "
        f"lookback: {len(lookback_ideas)} ideas"
    )

    if chart_entries:
        categories = category_stats_from_chart(current_chart, previous_chart)
    else:
        categories = category_stats_from_ideas(current_ideas, previous_ideas)

    heatmap = build_problem_heatmap(unique_ideas, previous_ideas, config.heatmap)
    heatmap_source = "ideas" if heatmap else "none"
    heatmap = translate_heatmap(heatmap, translate)
    if not heatmap and chart_entries:
        heatmap = build_problem_heatmap_from_chart(chart_entries, config.heatmap)
        heatmap_source = "chart" if heatmap else "none"
        logger.info(f"[Report] No stated problems; {len(heatmap)} friction areas from chart data")

    clusters = get_clusters(lookback_ideas, previous_ideas, categories, heatmap, config.clustering)

    return DailyReport(
        date=date_string(now),
        categories=categories,
        clusters=clusters,
        validation=validation_stats(unique_ideas),
        problem_heatmap=heatmap,
        signal_score=signal_score_stats(unique_ideas),
        ideas=unique_ideas[:config.collection.idea_sample_size],
        metadata={
            "collectedAt": now.isoformat(),
            "lookbackDays": config.collection.lookback_days,
            "totalIdeas": len(unique_ideas),
            "totalChartEntries": len(chart_entries),
            "currentWeekCount": len(current_ideas),
            "previousWeekCount": len(previous_ideas),
            "currentWeekChartCount": len(current_chart),
            "previousWeekChartCount": len(previous_chart),
            "problemHeatmapSource": heatmap_source,
            "ideaGeneratorEntries": len(inputs.idea_generator_entries),
            "adviceEntries": len(dedupe_advice_entries(inputs.advice_entries)),
            "base44Clicks": len(inputs.base44_clicks),
            "base44TopKeywords": top_click_keywords(inputs.base44_clicks),
        },
    )


# =============================================================================
# PERSISTENCE
# =============================================================================

def save_report(report: DailyReport, directory: str | Path) -> Path:
    """Write ``<date>.json``, replacing any earlier run for the same date."""
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{report.date}.json"
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info(f"[Report] Saved report to {path}")
    return path


def load_report(directory: str | Path, date: str) -> dict[str, Any]:
    """Read a saved report.

    Raises:
        ReportNotFoundError: No report file exists for ``date``.
    """
    path = Path(directory) / f"{date}.json"
    if not path.exists():
        raise ReportNotFoundError(f"No report for {date} in {directory}")
    with open(path, encoding="utf-8") as f:
        return json.load(f)
