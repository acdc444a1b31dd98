"""Calendar-day streaks over focus sessions.

A day *qualifies* when at least one session started on it (in the reference
timezone) is completed. Everything here is a pure function of the records,
the reference instant and the timezone.
"""

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo
from typing import NamedTuple, Protocol

from studysphere.core.modules.focus.models import StreakSummary
from studysphere.errors import ValidationError

ONE_DAY = timedelta(days=1)


class CompletionRecord(Protocol):
    @property
    def start_time(self) -> datetime: ...

    @property
    def is_completed(self) -> bool: ...


class SessionRecord(NamedTuple):
    """Minimal record for callers that only load the two fields streaks need."""

    start_time: datetime
    is_completed: bool


def local_day(moment: datetime, tz: tzinfo) -> date:
    """Calendar day of an aware timestamp in `tz`.

    Naive or non-datetime values raise ValidationError; guessing their zone
    could silently move sessions to the wrong day.
    """
    if not isinstance(moment, datetime):
        raise ValidationError(f"Invalid timestamp: {moment!r}")
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValidationError(f"Timestamp without timezone: {moment.isoformat()}")
    return moment.astimezone(tz).date()


def qualifying_days(records: Iterable[CompletionRecord], tz: tzinfo) -> set[date]:
    days: set[date] = set()
    for record in records:
        day = local_day(record.start_time, tz)  # validates every record, completed or not
        if record.is_completed:
            days.add(day)
    return days


def current_streak(days: set[date], today: date) -> int:
    """Count consecutive qualifying days ending today, or yesterday if today has none yet."""
    cursor = today if today in days else today - ONE_DAY
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= ONE_DAY
    return streak


def longest_streak(days: set[date]) -> int:
    longest = 0
    run = 0
    previous: date | None = None
    for day in sorted(days):
        run = run + 1 if previous is not None and day - previous == ONE_DAY else 1
        longest = max(longest, run)
        previous = day
    return longest


def calculate_streaks(records: Iterable[CompletionRecord], moment: datetime, tz: tzinfo) -> StreakSummary:
    """Compute current and longest streaks as seen at `moment`."""
    days = qualifying_days(records, tz)
    today = local_day(moment, tz)
    return StreakSummary(current_streak=current_streak(days, today), longest_streak=longest_streak(days))
