"""Tests for week helpers."""

from datetime import date, datetime

import pytest

from jar.capacity.weeks import (
    business_days,
    coerce_date,
    current_week_start,
    end_of_week,
    in_week,
    start_of_week,
    week_of,
)


class TestCoerceDate:
    def test_date_passes_through(self):
        assert coerce_date(date(2026, 10, 21)) == date(2026, 10, 21)

    def test_datetime_drops_time(self):
        assert coerce_date(datetime(2026, 10, 21, 23, 59)) == date(2026, 10, 21)

    def test_iso_string_and_timestamp(self):
        assert coerce_date("2026-10-21") == date(2026, 10, 21)
        assert coerce_date("2026-10-21T08:00:00+00:00") == date(2026, 10, 21)
        assert coerce_date("2026-10-21T08:00:00Z") == date(2026, 10, 21)

    @pytest.mark.parametrize(
        "value", [None, 3, "21/10/2026", "2026-10-19garbage", "2026-10-19T25:00"]
    )
    def test_rejects_other_values(self, value):
        with pytest.raises(ValueError):
            coerce_date(value)


class TestWeekBounds:
    @pytest.mark.parametrize(
        "day",
        [date(2026, 10, 19), date(2026, 10, 22), date(2026, 10, 25)],
    )
    def test_start_is_monday(self, day):
        assert start_of_week(day) == date(2026, 10, 19)

    def test_end_is_sunday(self):
        assert end_of_week("2026-10-21") == date(2026, 10, 25)

    def test_week_of_is_iso_monday(self):
        assert week_of(date(2026, 10, 23)) == "2026-10-19"

    def test_current_week_start(self):
        assert current_week_start(date(2026, 10, 24)) == date(2026, 10, 19)
        assert current_week_start().weekday() == 0


class TestBusinessDays:
    def test_monday_to_friday(self):
        days = business_days(date(2026, 10, 21))
        assert days[0] == date(2026, 10, 19)
        assert days[-1] == date(2026, 10, 23)
        assert [d.weekday() for d in days] == [0, 1, 2, 3, 4]


class TestInWeek:
    def test_covers_monday_through_sunday(self):
        assert in_week(date(2026, 10, 19), date(2026, 10, 19))
        assert in_week(date(2026, 10, 25), date(2026, 10, 19))

    def test_excludes_neighbouring_weeks(self):
        assert not in_week(date(2026, 10, 18), date(2026, 10, 19))
        assert not in_week(date(2026, 10, 26), date(2026, 10, 19))
