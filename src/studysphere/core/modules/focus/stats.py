from collections import defaultdict
from collections.abc import Sequence
from datetime import datetime, time, timedelta, tzinfo

from studysphere.core.modules.focus.models import (
    FocusSession,
    FocusSessionType,
    FocusStats,
    Mood,
    MoodStats,
    SessionTypeStats,
    StatsPeriod,
)
from studysphere.core.modules.focus.streaks import calculate_streaks, local_day


def period_start(period: StatsPeriod, moment: datetime, tz: tzinfo) -> datetime:
    """First instant of the reporting period containing `moment`.

    `day`, `month` and `year` start at local midnight; `week` is a rolling
    seven days.
    """
    today = local_day(moment, tz)
    if period == StatsPeriod.WEEK:
        return moment - timedelta(days=7)
    if period == StatsPeriod.DAY:
        start = today
    elif period == StatsPeriod.MONTH:
        start = today.replace(day=1)
    else:
        start = today.replace(month=1, day=1)
    return datetime.combine(start, time.min, tzinfo=tz)


def _average(values: list[int]) -> float | None:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def build_focus_stats(sessions: Sequence[FocusSession], period: StatsPeriod, moment: datetime, tz: tzinfo) -> FocusStats:
    """Aggregate a user's full session history into period statistics.

    Totals cover sessions started inside the period; duration, type and mood
    breakdowns only count completed ones. Streaks use every session.
    """
    streaks = calculate_streaks(sessions, moment, tz)
    start = period_start(period, moment, tz)
    in_period = [s for s in sessions if s.start_time >= start]
    completed = [s for s in in_period if s.is_completed]

    planned = sum(s.planned_duration for s in completed)
    actual = sum(s.actual_duration or 0 for s in completed)

    by_type: dict[FocusSessionType, list[FocusSession]] = defaultdict(list)
    by_mood: dict[Mood | None, list[FocusSession]] = defaultdict(list)
    for session in completed:
        by_type[session.session_type].append(session)
        by_mood[session.mood].append(session)

    return FocusStats(
        period=period,
        period_start=start,
        total_sessions=len(in_period),
        completed_sessions=len(completed),
        total_planned_minutes=planned,
        total_actual_minutes=actual,
        avg_productivity=_average([s.productivity for s in completed if s.productivity is not None]) or 0.0,
        efficiency=round(actual / planned * 100) if planned else 0,
        sessions_by_type=[
            SessionTypeStats(
                session_type=session_type,
                count=len(items),
                total_duration=sum(s.actual_duration or 0 for s in items),
            )
            for session_type, items in sorted(by_type.items())
        ],
        productivity_distribution=[
            MoodStats(
                mood=mood,
                count=len(items),
                avg_productivity=_average([s.productivity for s in items if s.productivity is not None]),
            )
            for mood, items in sorted(by_mood.items(), key=lambda item: (item[0] is None, item[0] or ""))
        ],
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
    )
