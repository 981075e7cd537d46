"""Log parsing for Idea Terminal."""

from idea_terminal.parsing.advice import (
    dedupe_advice_entries,
    parse_advice_content,
    parse_advice_line,
)
from idea_terminal.parsing.chart import parse_chart_content, parse_chart_line
from idea_terminal.parsing.clicks import (
    parse_base44_content,
    parse_base44_line,
    top_click_keywords,
)
from idea_terminal.parsing.idea_generator import (
    is_clean_entry,
    parse_entry,
    parse_idea_generator_content,
    split_entries,
)
from idea_terminal.parsing.keywords import COMMON_KEYWORDS, extract_keywords
from idea_terminal.parsing.lines import (
    LINE_PARSERS,
    extract_problem,
    parse_idea_line,
    parse_log_content,
)

__all__ = [
    "COMMON_KEYWORDS",
    "LINE_PARSERS",
    "dedupe_advice_entries",
    "extract_keywords",
    "extract_problem",
    "is_clean_entry",
    "parse_advice_content",
    "parse_advice_line",
    "parse_base44_content",
    "parse_base44_line",
    "parse_chart_content",
    "parse_chart_line",
    "parse_entry",
    "parse_idea_generator_content",
    "parse_idea_line",
    "parse_log_content",
    "split_entries",
    "top_click_keywords",
]
