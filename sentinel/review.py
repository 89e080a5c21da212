"""Review aggregation — what happened on a day, in a week, or in a month.

Reviews read the day buckets of both indexes, hydrate the ids they find and
group the records by project.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, TypeVar

from sentinel.repository import hydrate_sessions, hydrate_tasks
from sentinel.storage.models import Session, SessionIndex, Task, TaskIndex
from sentinel.storage.paths import DataPaths
from sentinel.timeutil import end_of_month, end_of_week, session_duration, start_of_month, start_of_week

logger = logging.getLogger(__name__)

T = TypeVar("T")

SessionGroup = dict[str, list[Session]]
TaskGroup = dict[str, list[Task]]


@dataclass(frozen=True)
class ReviewInterval:
    """Inclusive range of calendar days."""

    start: date
    end: date

    def days(self) -> list[date]:
        count = (self.end - self.start).days + 1
        return [self.start + timedelta(days=offset) for offset in range(max(count, 0))]


@dataclass
class ReviewData:
    sessions: SessionGroup = field(default_factory=dict)
    created_tasks: TaskGroup = field(default_factory=dict)
    completed_tasks: TaskGroup = field(default_factory=dict)

    def for_project(self, project_name: str) -> "ReviewData":
        """Narrow every group to ``project_name``; missing projects become empty lists."""
        return ReviewData(
            sessions={project_name: self.sessions.get(project_name, [])},
            created_tasks={project_name: self.created_tasks.get(project_name, [])},
            completed_tasks={project_name: self.completed_tasks.get(project_name, [])},
        )

    def flat_sessions(self) -> list[Session]:
        return flatten(self.sessions)

    def flat_created_tasks(self) -> list[Task]:
        return flatten(self.created_tasks)

    def flat_completed_tasks(self) -> list[Task]:
        return flatten(self.completed_tasks)


def day_interval(reference: date) -> ReviewInterval:
    return ReviewInterval(reference, reference)


def week_interval(reference: date) -> ReviewInterval:
    return ReviewInterval(start_of_week(reference), end_of_week(reference))


def month_interval(reference: date) -> ReviewInterval:
    return ReviewInterval(start_of_month(reference), end_of_month(reference))


def day_keys_for_interval(interval: ReviewInterval) -> list[str]:
    """Day-string keys for every day in the interval, oldest first."""
    return [day.isoformat() for day in interval.days()]


def group_sessions(sessions: list[Session]) -> SessionGroup:
    grouped: SessionGroup = {}
    for session in sessions:
        grouped.setdefault(session.project_name, []).append(session)
    return grouped


def group_tasks(tasks: list[Task]) -> TaskGroup:
    grouped: TaskGroup = {}
    for task in tasks:
        grouped.setdefault(task.group_key, []).append(task)
    return grouped


def flatten(groups: dict[str, list[T]]) -> list[T]:
    return [item for items in groups.values() for item in items]


def sum_duration(sessions: list[Session], now: Optional[int] = None) -> int:
    """Total milliseconds across sessions; ongoing ones count up to ``now``."""
    return sum(session_duration(session, now) for session in sessions)


def _ids_for_days(buckets: dict[str, list[str]], days: list[str]) -> list[str]:
    return [item_id for day in days for item_id in buckets.get(day, [])]


async def review_data(
    interval: ReviewInterval,
    session_index: SessionIndex,
    task_index: TaskIndex,
    paths: Optional[DataPaths] = None,
) -> ReviewData:
    """Collect sessions started, tasks created and tasks completed in ``interval``."""
    days = day_keys_for_interval(interval)

    sessions = await hydrate_sessions(_ids_for_days(session_index.by_date, days), paths)
    created = await hydrate_tasks(_ids_for_days(task_index.by_creation_date, days), paths)
    completed = await hydrate_tasks(_ids_for_days(task_index.by_completion_date, days), paths)

    logger.debug(
        "Review %s..%s: %d sessions, %d created, %d completed",
        interval.start, interval.end, len(sessions), len(created), len(completed),
    )
    return ReviewData(
        sessions=group_sessions(sessions),
        created_tasks=group_tasks(created),
        completed_tasks=group_tasks(completed),
    )


# --- Interactive selection support ---

def _active_days(session_index: SessionIndex, task_index: TaskIndex) -> set[date]:
    keys = {
        *session_index.by_date,
        *task_index.by_creation_date,
        *task_index.by_completion_date,
    }
    return {date.fromisoformat(key) for key in keys}


def reviewable_days(session_index: SessionIndex, task_index: TaskIndex) -> list[date]:
    """Days with any recorded activity, newest first."""
    return sorted(_active_days(session_index, task_index), reverse=True)


def reviewable_weeks(session_index: SessionIndex, task_index: TaskIndex) -> list[ReviewInterval]:
    weeks = {week_interval(day) for day in _active_days(session_index, task_index)}
    return sorted(weeks, key=lambda interval: interval.start, reverse=True)


def reviewable_months(session_index: SessionIndex, task_index: TaskIndex) -> list[ReviewInterval]:
    months = {month_interval(day) for day in _active_days(session_index, task_index)}
    return sorted(months, key=lambda interval: interval.start, reverse=True)
