"""Tests for Idea Generator log parsing and cleaning."""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from idea_terminal.models import IdeaGeneratorEntry
from idea_terminal.parsing import (
    is_clean_entry,
    parse_entry,
    parse_idea_generator_content,
    split_entries,
)


SAMPLE_LOG = """\
Date:2025-10-29
Email: founder@example.com
Generate 10 business idea based on these criteria inputted by the user.
Industry you like to explore or are Knowledgeable about: healthcare staffing
What resources do you have?: nursing background and small savings
What problem do you want to solve?: nurses burn out from endless paperwork
Who needs a solution?: hospital nurses and clinic managers
1. Shift handover app
2. Paperwork autopilot
Date:2025-10-29 | Selected Idea: Shift handover app
Date:2025-10-30
Email: second@example.com
Industry you like to explore or are Knowledgeable about:
restaurants
What resources do you have?: cooking skills and a food truck
What problem do you want to solve?: food waste at the end of each day
Who needs a solution?: small restaurant owners
"""


@pytest.fixture
def clean_entry() -> IdeaGeneratorEntry:
    """An entry that passes every cleaning rule."""
    return IdeaGeneratorEntry(
        date="2025-10-29",
        industry="healthcare staffing",
        skills="nursing background and small savings",
        problem="nurses burn out from endless paperwork",
        customer="hospital nurses and clinic managers",
    )


class TestSplitEntries:
    """Tests for splitting a log into entries."""

    def test_split_on_date_marker(self):
        groups = split_entries(SAMPLE_LOG)

        assert len(groups) == 2
        assert groups[0][0] == "Date:2025-10-29"
        assert groups[1][0] == "Date:2025-10-30"

    def test_selected_idea_stays_with_entry(self):
        groups = split_entries(SAMPLE_LOG)

        assert groups[0][-1].startswith("Date:2025-10-29 | Selected Idea:")

    def test_preamble_ignored(self):
        groups = split_entries("header noise\nmore noise\n" + SAMPLE_LOG)

        assert len(groups) == 2
        assert groups[0][0] == "Date:2025-10-29"

    def test_empty(self):
        assert split_entries("") == []
        assert split_entries(None) == []


class TestParseEntry:
    """Tests for parsing a single entry."""

    def test_fields_on_same_line(self):
        entry = parse_entry(split_entries(SAMPLE_LOG)[0])

        assert entry.date == "2025-10-29"
        assert entry.email == "founder@example.com"
        assert entry.industry == "healthcare staffing"
        assert entry.skills == "nursing background and small savings"
        assert entry.problem == "nurses burn out from endless paperwork"
        assert entry.customer == "hospital nurses and clinic managers"

    def test_generated_and_selected_ideas(self):
        entry = parse_entry(split_entries(SAMPLE_LOG)[0])

        assert entry.ideas == ["1. Shift handover app", "2. Paperwork autopilot"]
        assert entry.selected_idea == "Shift handover app"

    def test_value_on_next_line(self):
        entry = parse_entry(split_entries(SAMPLE_LOG)[1])

        assert entry.industry == "restaurants"
        assert entry.skills == "cooking skills and a food truck"

    def test_missing_date_marker(self):
        assert parse_entry(["Email: a@b.com", "Who needs a solution?: nurses", "x"]) is None

    def test_too_few_lines(self):
        assert parse_entry(["Date:2025-10-29"]) is None

    def test_no_fields(self):
        assert parse_entry(["Date:2025-10-29", "Email: a@b.com", "just chatter"]) is None


class TestCleaning:
    """Tests for the noise filter."""

    def test_clean_entry_kept(self, clean_entry):
        assert is_clean_entry(clean_entry)

    def test_one_blank_field_allowed(self, clean_entry):
        clean_entry.skills = ""
        assert is_clean_entry(clean_entry)

    def test_two_blank_fields_rejected(self, clean_entry):
        clean_entry.skills = ""
        clean_entry.customer = "  "
        assert not is_clean_entry(clean_entry)

    @pytest.mark.parametrize("placeholder", ["N/A", "none", "IDK", "na", "n.a.", "null", "undefined"])
    def test_placeholder_rejected(self, clean_entry, placeholder):
        clean_entry.industry = placeholder
        assert not is_clean_entry(clean_entry)

    def test_non_english_rejected(self):
        entry = IdeaGeneratorEntry(
            industry="医疗保健行业",
            skills="护理背景和储蓄",
            problem="护士被文书工作压垮",
            customer="医院护士和诊所经理",
        )
        assert not is_clean_entry(entry)

    def test_emoji_noise_rejected(self, clean_entry):
        clean_entry.skills = "\U0001F680" * 11 + " coding"
        assert not is_clean_entry(clean_entry)

    def test_symbol_spam_rejected(self):
        entry = IdeaGeneratorEntry(
            industry="!!!!!!!!!!",
            skills="@@@@@@@@@@",
            problem="real problem here ###",
            customer="$$$$ people",
        )
        assert not is_clean_entry(entry)

    def test_too_short_rejected(self):
        entry = IdeaGeneratorEntry(industry="a", skills="b", problem="c", customer="d")
        assert not is_clean_entry(entry)

    def test_repeated_words_rejected(self):
        spam = "buy buy buy buy"
        entry = IdeaGeneratorEntry(industry=spam, skills=spam, problem=spam, customer=spam)
        assert not is_clean_entry(entry)

    def test_none_rejected(self):
        assert not is_clean_entry(None)


class TestParseContent:
    """Tests for whole-log parsing."""

    def test_parse_sample(self):
        entries = parse_idea_generator_content(SAMPLE_LOG)

        assert [entry.date for entry in entries] == ["2025-10-29", "2025-10-30"]

    def test_duplicates_removed(self):
        first_entry = "\n".join(split_entries(SAMPLE_LOG)[0])

        entries = parse_idea_generator_content(first_entry + "\n" + first_entry)

        assert len(entries) == 1

    def test_dirty_entries_dropped(self):
        content = SAMPLE_LOG + (
            "Date:2025-10-31\n"
            "Industry you like to explore or are Knowledgeable about: idk\n"
            "What resources do you have?: none\n"
            "What problem do you want to solve?: n/a\n"
        )

        entries = parse_idea_generator_content(content)

        assert len(entries) == 2

    def test_to_dict(self):
        entry = parse_idea_generator_content(SAMPLE_LOG)[0]

        data = entry.to_dict()
        assert data["selectedIdea"] == "Shift handover app"
        assert data["industry"] == "healthcare staffing"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
