"""Tests for numeric list notation helpers."""

from datetime import time

import pytest

from humancron.notation import (
    clock_hour,
    clock_time,
    collapse_values,
    compact_names,
    compact_values,
    expand_list_notation,
    ordinal,
    ordinal_list,
)
from humancron.patterns import MONTH_LABELS
from humancron.schedule import ValueList, ValueRange


class TestCompaction:
    """Tests for run compaction."""

    def test_compact_values(self):
        """Test collapsing consecutive runs."""
        assert compact_values([1, 2, 3, 4, 5, 6, 7, 15, 30]) == "1-7,15,30"

    def test_compact_unsorted_duplicates(self):
        """Test that input order and duplicates do not matter."""
        assert compact_values([17, 9, 10, 9, 11]) == "9-11,17"

    def test_compact_pair_is_a_run(self):
        """Test that two consecutive values are written as a run."""
        assert compact_values([0, 1]) == "0-1"

    def test_compact_names(self):
        """Test month names in runs."""
        assert compact_names([1, 2, 3, 7], MONTH_LABELS) == "january-march,july"

    def test_collapse_single_run(self):
        """Test that one run becomes a range."""
        assert collapse_values([3, 1, 2]) == ValueRange(1, 3)

    def test_collapse_several_runs(self):
        """Test that several runs stay a sorted list."""
        assert collapse_values([20, 1, 10]) == ValueList((1, 10, 20))

    def test_collapse_single_value(self):
        """Test that a single value stays a list."""
        assert collapse_values([5]) == ValueList((5,))


class TestExpansion:
    """Tests for list notation expansion."""

    def test_expand_mixed(self):
        """Test values, ranges and stepped ranges together."""
        assert expand_list_notation("0,15-20,40-50/5", 0, 59) == (
            0, 15, 16, 17, 18, 19, 20, 40, 45, 50,
        )

    def test_expand_drops_out_of_range(self):
        """Test that values outside the domain are dropped."""
        assert expand_list_notation("0,12,23,30", 0, 23) == (0, 12, 23)

    def test_expand_skips_malformed(self):
        """Test that malformed segments are skipped."""
        assert expand_list_notation("a,5,,7-x,9/0,10", 0, 59) == (5, 10)


class TestOrdinals:
    """Tests for English ordinals."""

    @pytest.mark.parametrize(
        "number,expected",
        [
            (1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"),
            (11, "11th"), (12, "12th"), (13, "13th"),
            (21, "21st"), (22, "22nd"), (23, "23rd"), (31, "31st"),
            (101, "101st"), (111, "111th"),
        ],
    )
    def test_ordinal(self, number, expected):
        """Test suffixes, including the teens."""
        assert ordinal(number) == expected

    def test_ordinal_list(self):
        """Test English list joining."""
        assert ordinal_list([1]) == "1st"
        assert ordinal_list([1, 15]) == "1st and 15th"
        assert ordinal_list([1, 10, 20]) == "1st, 10th and 20th"


class TestClock:
    """Tests for 12-hour clock rendering."""

    @pytest.mark.parametrize(
        "hour,expected",
        [(0, "12am"), (1, "1am"), (11, "11am"), (12, "12pm"), (13, "1pm"), (23, "11pm")],
    )
    def test_clock_hour(self, hour, expected):
        """Test midnight and noon edges."""
        assert clock_hour(hour) == expected

    def test_clock_time(self):
        """Test minutes are shown only when present."""
        assert clock_time(time(14, 0)) == "2pm"
        assert clock_time(time(14, 30)) == "2:30pm"
        assert clock_time(time(0, 5)) == "12:05am"
