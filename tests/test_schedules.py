"""Tests for weekly schedule expansion."""

from datetime import date

from clinic.services.api import build_upcoming_days

# Wednesday
START = date(2024, 5, 1)


class TestBuildUpcomingDays:
    """Test expanding weekly rows over a calendar window."""

    def test_each_weekday_occurrence_gets_its_own_entry(self):
        rows = [{"day": "Wed", "time": "10:00"}]
        days = build_upcoming_days(rows, START, 14)
        assert [d["date"] for d in days] == ["2024-05-01", "2024-05-08"]
        assert all(d["day_code"] == "Wed" for d in days)

    def test_times_sorted_chronologically(self):
        rows = [
            {"day": "Thu", "time": "18:00"},
            {"day": "Thu", "time": "9:00"},
            {"day": "Thu", "time": "10:30"},
        ]
        days = build_upcoming_days(rows, START, 7)
        assert days[0]["times"] == ["9:00", "10:30", "18:00"]

    def test_duplicate_times_collapsed(self):
        rows = [{"day": "Sat", "time": "12:00"}, {"day": "Sat", "time": "12:00:00"}]
        days = build_upcoming_days(rows, START, 7)
        assert days == [{"date": "2024-05-04", "day_code": "Sat", "times": ["12:00"]}]

    def test_invalid_rows_ignored(self):
        rows = [
            {"day": "Funday", "time": "10:00"},
            {"day": "Mon", "time": ""},
            {"day": None, "time": "10:00"},
        ]
        assert build_upcoming_days(rows, START, 7) == []

    def test_window_bounds(self):
        rows = [{"day": "Tue", "time": "10:00"}]
        assert build_upcoming_days(rows, START, 6) == []
        assert len(build_upcoming_days(rows, START, 7)) == 1

    def test_no_rows(self):
        assert build_upcoming_days([], START, 28) == []
