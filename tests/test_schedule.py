from datetime import datetime, timezone

import pytest

from vrshelf.schedule import CronSchedule, calc_end_time, format_cron_schedule


def test_without_range_uses_every():
    assert format_cron_schedule(CronSchedule(hour_interval=6)) == "@every 6h"


def test_daytime_range():
    schedule = CronSchedule(use_range=True, hour_interval=2, hour_start=8, hour_end=20, minute_start=15)
    assert format_cron_schedule(schedule) == "15 8-20/2 * * *"


def test_range_across_midnight():
    schedule = CronSchedule(use_range=True, hour_interval=3, hour_start=22, hour_end=4, minute_start=0)
    assert format_cron_schedule(schedule) == "0 1-4/3,22-23/3 * * *"


def test_zero_interval_has_no_step():
    schedule = CronSchedule(use_range=True, hour_interval=0, hour_start=9, hour_end=17, minute_start=0)
    result = format_cron_schedule(schedule)
    assert "/" not in result
    assert result.startswith("0 9-17")


def test_interval_too_large_after_midnight_keeps_only_evening():
    schedule = CronSchedule(use_range=True, hour_interval=5, hour_start=22, hour_end=1, minute_start=30)
    result = format_cron_schedule(schedule)
    assert "," not in result
    assert result.startswith("30 22-23/5")


def test_zero_interval_across_midnight_raises():
    schedule = CronSchedule(use_range=True, hour_interval=0, hour_start=22, hour_end=4)
    with pytest.raises(ZeroDivisionError):
        format_cron_schedule(schedule)


def test_end_time_before_midnight():
    now = datetime(2023, 5, 1, 23, 10, 42, tzinfo=timezone.utc)
    end = calc_end_time(22, 4, 30, now)
    assert (end.hour, end.minute, end.second) == (23, 59, 0)
    assert end.date() == now.date()
    assert end.tzinfo is now.tzinfo


def test_end_time_after_midnight():
    now = datetime(2023, 5, 1, 2, 0, tzinfo=timezone.utc)
    end = calc_end_time(22, 4, 30, now)
    assert (end.hour, end.minute) == (4, 30)


def test_end_time_same_day_window():
    now = datetime(2023, 5, 1, 10, 5)
    end = calc_end_time(8, 18, 45, now)
    assert (end.hour, end.minute) == (18, 45)
    assert end.date() == now.date()