"""Cron expressions for hourly task schedules, including windows across midnight."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class CronSchedule:
    """When a recurring task runs."""

    enabled: bool = False
    use_range: bool = False
    hour_interval: int = 0
    hour_start: int = 0
    hour_end: int = 23
    minute_start: int = 0


def format_cron_schedule(schedule: CronSchedule) -> str:
    """Build the cron expression for ``schedule``.

    A window whose start hour is after its end hour wraps past midnight; the
    part after midnight starts where the interval would fall next.
    """
    if not schedule.use_range:
        return f"@every {schedule.hour_interval}h"

    interval = f"/{schedule.hour_interval}" if schedule.hour_interval > 0 else ""
    if schedule.hour_start > schedule.hour_end:
        step = schedule.hour_interval
        after_midnight = (step - ((24 - schedule.hour_start) % step)) % step
        if after_midnight <= schedule.hour_end:
            hours = (
                f"{after_midnight}-{schedule.hour_end}{interval},"
                f"{schedule.hour_start}-23{interval}"
            )
        else:
            hours = f"{schedule.hour_start}-23{interval}"
    else:
        hours = f"{schedule.hour_start}-{schedule.hour_end}{interval}"
    return f"{schedule.minute_start} {hours} * * *"


def calc_end_time(
    start_hour: int, end_hour: int, minute_start: int, now: datetime | None = None
) -> datetime:
    """Time on ``now``'s day at which a windowed task should stop."""
    if now is None:
        now = datetime.now().astimezone()
    if start_hour > end_hour and now.hour > end_hour:
        return now.replace(hour=23, minute=59, second=0, microsecond=0)
    return now.replace(hour=end_hour, minute=minute_start, second=0, microsecond=0)