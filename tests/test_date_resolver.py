"""Tests for relative due-date resolution (deterministic behavior)."""

import pytest
from datetime import datetime

from chatdo.recurrence.date_resolver import RELATIVE_DATE_RULES, resolve_relative_date


class TestRelativePhrases:
    """Each supported phrase resolves from the reference day."""

    def test_today_is_truncated_to_day(self, now):
        assert resolve_relative_date("today", now) == datetime(2024, 5, 15)

    def test_tomorrow(self, now):
        assert resolve_relative_date("tomorrow", now) == datetime(2024, 5, 16)

    def test_this_week_is_seven_days_out(self, now):
        assert resolve_relative_date("this week", now) == datetime(2024, 5, 22)

    def test_next_week_is_fourteen_days_out(self, now):
        assert resolve_relative_date("next week", now) == datetime(2024, 5, 29)

    def test_next_month_keeps_day_of_month(self, now):
        assert resolve_relative_date("next month", now) == datetime(2024, 6, 15)

    def test_next_month_clamps_at_month_end(self):
        assert resolve_relative_date("next month", datetime(2024, 1, 31, 9, 0)) == datetime(2024, 2, 29)

    def test_in_n_months_always_advances_one_month(self, now):
        """The number is matched but not applied."""
        assert resolve_relative_date("in 3 months", now) == datetime(2024, 6, 15)
        assert resolve_relative_date("in 1 month", now) == datetime(2024, 6, 15)

    def test_before_summer(self, now):
        assert resolve_relative_date("before summer", now) == datetime(2024, 6, 1)

    def test_by_spring(self, now):
        assert resolve_relative_date("by spring", now) == datetime(2024, 3, 20)

    def test_seasons_stay_in_current_year_when_passed(self):
        """September reference: both anchors are already behind, and still returned."""
        september = datetime(2024, 9, 10)
        assert resolve_relative_date("before summer", september) == datetime(2024, 6, 1)
        assert resolve_relative_date("by spring", september) == datetime(2024, 3, 20)

    def test_case_and_surrounding_whitespace_ignored(self, now):
        assert resolve_relative_date("  ToMorrow ", now) == datetime(2024, 5, 16)
        assert resolve_relative_date("THIS WEEKEND", now) == datetime(2024, 5, 18)


class TestWeekend:
    """'this weekend' resolves to the next Saturday, or today on a Saturday."""

    def test_from_wednesday(self, now):
        assert now.weekday() == 2
        assert resolve_relative_date("this weekend", now) == datetime(2024, 5, 18)

    def test_from_saturday_is_same_day(self):
        saturday = datetime(2024, 5, 18, 8, 0)
        assert resolve_relative_date("this weekend", saturday) == datetime(2024, 5, 18)

    def test_from_sunday_is_next_saturday(self):
        sunday = datetime(2024, 5, 19)
        assert resolve_relative_date("this weekend", sunday) == datetime(2024, 5, 25)


class TestWeekdays:
    """Weekday names resolve strictly after the reference day."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("thursday", datetime(2024, 5, 16)),
            ("friday", datetime(2024, 5, 17)),
            ("saturday", datetime(2024, 5, 18)),
            ("sunday", datetime(2024, 5, 19)),
            ("monday", datetime(2024, 5, 20)),
            ("tuesday", datetime(2024, 5, 21)),
        ],
    )
    def test_next_occurrence(self, now, name, expected):
        assert resolve_relative_date(name, now) == expected

    def test_same_weekday_is_a_week_out(self, now):
        assert resolve_relative_date("Wednesday", now) == datetime(2024, 5, 22)


class TestIsoFallback:
    """Unknown phrases are tried as ISO-8601 dates."""

    def test_iso_date(self, now):
        assert resolve_relative_date("2024-12-25", now) == datetime(2024, 12, 25)

    def test_iso_datetime(self, now):
        assert resolve_relative_date("2024-12-25T10:15:00", now) == datetime(2024, 12, 25, 10, 15)

    def test_offset_converted_to_naive_utc(self, now):
        assert resolve_relative_date("2024-12-25T10:00:00+02:00", now) == datetime(2024, 12, 25, 8, 0)

    def test_invalid_iso_returns_none(self, now):
        assert resolve_relative_date("2024-13-45", now) is None


class TestUnrecognized:
    """Unrecognized text is 'no due date', never an error."""

    @pytest.mark.parametrize("text", ["sometime maybe", "before winter", "tomorrow morning", "", "   ", None])
    def test_returns_none(self, now, text):
        assert resolve_relative_date(text, now) is None

    @pytest.mark.parametrize(
        "text, reference",
        [
            ("next month", datetime(9999, 12, 1)),
            ("in 3 months", datetime(9999, 12, 15)),
            ("tomorrow", datetime(9999, 12, 31, 12, 0)),
            ("next week", datetime(9999, 12, 25)),
            ("friday", datetime(9999, 12, 31)),
        ],
    )
    def test_past_last_representable_date_returns_none(self, text, reference):
        assert resolve_relative_date(text, reference) is None

    def test_offset_date_at_calendar_edge_returns_none(self, now):
        assert resolve_relative_date("9999-12-31T23:00:00-05:00", now) is None


class TestDeterminism:
    """Resolution depends only on (text, now)."""

    @pytest.mark.parametrize(
        "text",
        ["today", "tomorrow", "this week", "next week", "this weekend", "next month",
         "in 2 months", "before summer", "by spring", "friday", "2024-07-04"],
    )
    def test_same_inputs_same_output(self, now, text):
        assert resolve_relative_date(text, now) == resolve_relative_date(text, now)

    def test_time_of_day_does_not_matter(self):
        morning = datetime(2024, 5, 15, 0, 5)
        night = datetime(2024, 5, 15, 23, 55)
        assert resolve_relative_date("next week", morning) == resolve_relative_date("next week", night)


class TestRuleOrder:
    """The rule table is ordered and matched against the whole phrase."""

    def test_rule_order(self):
        phrases = [pattern.pattern for pattern, _ in RELATIVE_DATE_RULES]
        assert phrases[:9] == [
            "today",
            "tomorrow",
            "this week",
            "next week",
            "this weekend",
            "next month",
            r"in (\d+) months?",
            "before summer",
            "by spring",
        ]
        assert "monday" in phrases[9]

    def test_this_week_does_not_swallow_this_weekend(self, now):
        assert resolve_relative_date("this week", now) != resolve_relative_date("this weekend", now)
