"""Recurrence calculator for recurring tasks"""
import calendar
from datetime import datetime, timedelta
from typing import Dict, Optional
import logging

from taskease.models.task import TaskFrequency
from taskease.utils.datetime_helper import app_timezone

logger = logging.getLogger(__name__)

SUNDAY = 6  # datetime.weekday(): 0=Monday, 6=Sunday

# Nominal cycle length used by the scheduled sweep. Monthly is a fixed
# 30 days here, unlike calculate_next_due_date which adds a calendar month.
SWEEP_PERIOD_DAYS: Dict[TaskFrequency, int] = {
    TaskFrequency.DAILY: 1,
    TaskFrequency.WEEKLY: 7,
    TaskFrequency.MONTHLY: 30,
}


def _parse_frequency(frequency) -> Optional[TaskFrequency]:
    if isinstance(frequency, TaskFrequency):
        return frequency
    try:
        return TaskFrequency(frequency)
    except ValueError:
        return None


def _local_weekday(moment: datetime) -> int:
    """Weekday as seen in the application time zone (naive values taken as is)"""
    if moment.tzinfo is None:
        return moment.weekday()
    return moment.astimezone(app_timezone()).weekday()


def add_month(base_date: datetime) -> datetime:
    """
    Move a datetime one calendar month forward.

    When the target month is shorter, the day is clamped to its last day
    (2024-01-31 -> 2024-02-29, 2023-01-31 -> 2023-02-28).
    Time of day and tzinfo are kept.
    """
    year = base_date.year
    month = base_date.month + 1
    if month > 12:
        month = 1
        year += 1

    last_day = calendar.monthrange(year, month)[1]
    return base_date.replace(year=year, month=month, day=min(base_date.day, last_day))


def calculate_next_due_date(base_date: datetime, frequency) -> Optional[datetime]:
    """
    Compute the next occurrence of a task, skipping Sundays.

    Args:
        base_date: the date the cycle starts from (usually the completion time)
        frequency: "Daily", "Weekly", "Monthly" or "OneTime"
            - "Daily": +1 day
            - "Weekly": +7 days
            - "Monthly": +1 calendar month (see add_month)
            - "OneTime" or anything unrecognized: no next date

    Returns:
        The next due date, pushed one day forward if it lands on a Sunday
        in the application time zone, or None when the task does not recur.
    """
    freq = _parse_frequency(frequency)

    if freq == TaskFrequency.DAILY:
        next_date = base_date + timedelta(days=1)
    elif freq == TaskFrequency.WEEKLY:
        next_date = base_date + timedelta(days=7)
    elif freq == TaskFrequency.MONTHLY:
        next_date = add_month(base_date)
    else:
        logger.debug(f"Frequency {frequency!r} does not recur")
        return None

    if _local_weekday(next_date) == SUNDAY:
        next_date += timedelta(days=1)

    return next_date


def elapsed_days(due_date: datetime, now: datetime) -> int:
    """Whole days between due_date and now (negative when due_date is ahead)"""
    return (now - due_date) // timedelta(days=1)


def is_cycle_elapsed(due_date: datetime, frequency, now: datetime) -> bool:
    """True when at least one nominal sweep period has passed since due_date"""
    freq = _parse_frequency(frequency)
    period = SWEEP_PERIOD_DAYS.get(freq) if freq else None
    if period is None:
        return False
    return elapsed_days(due_date, now) >= period
