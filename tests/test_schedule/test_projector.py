"""Tests for schedule projection."""

import math
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from bookbound.schedule.projector import (
    MAX_SCHEDULE_DAYS,
    percent_complete,
    project_schedule,
)


DAY_ZERO = date(2026, 3, 2)


class TestPercentComplete:
    """Tests for percent_complete rounding."""

    def test_exact_values(self):
        """Test values that need no rounding."""
        assert percent_complete(150, 300) == 50
        assert percent_complete(300, 300) == 100
        assert percent_complete(0, 300) == 0

    def test_rounds_to_nearest(self):
        """Test ordinary rounding up and down."""
        assert percent_complete(50, 300) == 17  # 16.67
        assert percent_complete(100, 300) == 33  # 33.33
        assert percent_complete(200, 300) == 67  # 66.67

    def test_half_rounds_up(self):
        """Test that exact halves round away from zero, not to even."""
        assert percent_complete(1, 8) == 13  # 12.5
        assert percent_complete(1, 40) == 3  # 2.5
        assert percent_complete(5, 200) == 3  # 2.5
        assert percent_complete(9, 200) == 5  # 4.5

    def test_zero_total(self):
        """Test that a missing book length gives zero percent."""
        assert percent_complete(10, 0) == 0


class TestProjectScheduleEmpty:
    """Tests for inputs that produce no schedule."""

    def test_nothing_left_to_read(self):
        """Test that a finished book has no schedule."""
        assert project_schedule(300, 300, 20, False, DAY_ZERO) == []

    def test_pages_read_exceeds_total(self):
        """Test that over-reading clamps to nothing left."""
        assert project_schedule(350, 300, 20, False, DAY_ZERO) == []

    def test_no_book_configured(self):
        """Test that zero total pages gives an empty schedule."""
        assert project_schedule(0, 0, 20, False, DAY_ZERO) == []

    @pytest.mark.parametrize("pace", [0, -1, -50])
    def test_non_positive_pace(self, pace):
        """Test that a zero or negative pace disables projection."""
        assert project_schedule(0, 300, pace, True, DAY_ZERO) == []


class TestProjectSchedule:
    """Tests for projected schedules."""

    def test_three_hundred_pages_at_fifty(self):
        """Test the standard six-day plan."""
        entries = project_schedule(0, 300, 50, False, DAY_ZERO)

        assert len(entries) == 6
        assert [e.date for e in entries] == [DAY_ZERO + timedelta(days=i) for i in range(1, 7)]
        assert [(e.start_page, e.end_page) for e in entries] == [
            (1, 50), (51, 100), (101, 150), (151, 200), (201, 250), (251, 300),
        ]
        assert [e.percent_complete for e in entries] == [17, 33, 50, 67, 83, 100]
        assert all(e.pages_planned_today == 50 for e in entries)

    def test_last_day_truncated(self):
        """Test that the final day covers only the remaining pages."""
        entries = project_schedule(90, 100, 7, False, DAY_ZERO)

        assert len(entries) == 2
        assert entries[0].pages_planned_today == 7
        assert (entries[0].start_page, entries[0].end_page) == (91, 97)
        assert entries[1].pages_planned_today == 3
        assert (entries[1].start_page, entries[1].end_page) == (98, 100)
        assert entries[-1].cumulative_pages_read == 100
        assert entries[-1].percent_complete == 100

    def test_pace_larger_than_remaining(self):
        """Test a single-day plan when pace covers the rest of the book."""
        entries = project_schedule(90, 100, 25, True, DAY_ZERO)

        assert len(entries) == 1
        assert entries[0].pages_planned_today == 10
        assert entries[0].percent_complete == 100

    def test_starts_today(self):
        """Test that the first entry is the reference date when starting today."""
        entries = project_schedule(0, 100, 10, True, DAY_ZERO)
        assert entries[0].date == DAY_ZERO

    def test_starts_tomorrow(self):
        """Test that the first entry is the next day by default."""
        entries = project_schedule(0, 100, 10, False, DAY_ZERO)
        assert entries[0].date == DAY_ZERO + timedelta(days=1)

    def test_continues_from_pages_read(self):
        """Test that page ranges pick up after pages already read."""
        entries = project_schedule(120, 200, 40, False, DAY_ZERO)

        assert entries[0].start_page == 121
        assert entries[0].cumulative_pages_read == 160
        assert entries[0].percent_complete == 80

    def test_crosses_month_and_year(self):
        """Test that every calendar day is used across boundaries."""
        entries = project_schedule(0, 50, 10, True, date(2026, 12, 30))
        assert [e.date for e in entries] == [
            date(2026, 12, 30),
            date(2026, 12, 31),
            date(2027, 1, 1),
            date(2027, 1, 2),
            date(2027, 1, 3),
        ]

    def test_entries_are_immutable(self):
        """Test that schedule entries cannot be modified."""
        entry = project_schedule(0, 10, 5, True, DAY_ZERO)[0]
        with pytest.raises(ValidationError):
            entry.pages_planned_today = 99


class TestProjectScheduleProperties:
    """Tests for invariants across a range of inputs."""

    @pytest.mark.parametrize(
        "pages_read,total_pages,pace",
        [
            (0, 1, 1),
            (0, 300, 50),
            (0, 301, 50),
            (17, 523, 23),
            (99, 100, 5),
            (0, 1000, 7),
        ],
    )
    def test_invariants(self, pages_read, total_pages, pace):
        """Test length, contiguity, pace and percentages."""
        entries = project_schedule(pages_read, total_pages, pace, False, DAY_ZERO)

        assert len(entries) == math.ceil((total_pages - pages_read) / pace)
        assert entries[-1].cumulative_pages_read == total_pages
        assert entries[-1].percent_complete == 100

        for entry in entries[:-1]:
            assert entry.pages_planned_today == pace
        assert 0 < entries[-1].pages_planned_today <= pace

        for previous, current in zip(entries, entries[1:]):
            assert current.start_page == previous.end_page + 1
            assert current.date == previous.date + timedelta(days=1)
            assert current.cumulative_pages_read > previous.cumulative_pages_read
            assert current.percent_complete >= previous.percent_complete

        for entry in entries:
            assert entry.end_page - entry.start_page + 1 == entry.pages_planned_today
            assert entry.end_page == entry.cumulative_pages_read


class TestSafetyCap:
    """Tests for the maximum schedule length."""

    def test_cap_value(self):
        """Test the documented cap of one year."""
        assert MAX_SCHEDULE_DAYS == 365

    def test_long_plan_is_capped(self):
        """Test that a huge book at one page a day stops at the cap."""
        entries = project_schedule(0, 5000, 1, True, DAY_ZERO)

        assert len(entries) == MAX_SCHEDULE_DAYS
        assert entries[-1].cumulative_pages_read == MAX_SCHEDULE_DAYS
        assert entries[-1].date == DAY_ZERO + timedelta(days=MAX_SCHEDULE_DAYS - 1)

    def test_plan_exactly_at_cap(self):
        """Test that a plan needing exactly the cap is complete."""
        entries = project_schedule(0, 365, 1, False, DAY_ZERO)

        assert len(entries) == 365
        assert entries[-1].cumulative_pages_read == 365
        assert entries[-1].percent_complete == 100
