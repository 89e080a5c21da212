"""Tests for the task and session indexes.

The index functions are pure, so most of these run without touching disk.
"""

import json

import pytest

from sentinel.indexing import (
    deindex_task,
    index_new_session,
    index_new_task,
    load_session_index,
    load_task_index,
    modify_task_index,
    reindex_task,
)
from sentinel.storage.models import SessionIndex, TaskIndex
from tests.conftest import make_session, make_task, ms


def _membership_holds(index: TaskIndex, tasks) -> None:
    for task in tasks:
        assert index.all.count(task.id) == 1
        assert (task.id in index.incomplete) == (not task.is_done)
        assert (task.id in index.inbox) == (task.project_name is None)


class TestIndexNewTask:
    def test_inbox_task(self):
        index = TaskIndex()
        task = make_task()
        index_new_task(index, task)

        assert index.all == [task.id]
        assert index.inbox == [task.id]
        assert index.incomplete == [task.id]
        assert index.by_project == {}
        assert index.by_creation_date == {"2024-01-01": [task.id]}
        assert index.by_completion_date == {}

    def test_project_task_not_in_inbox(self):
        index = TaskIndex()
        task = make_task(project_name="alpha")
        index_new_task(index, task)

        assert index.inbox == []
        assert index.by_project == {"alpha": [task.id]}

    def test_completed_task(self):
        index = TaskIndex()
        task = make_task(is_done=True, completed=ms(2024, 1, 3, 18, 0))
        index_new_task(index, task)

        assert index.incomplete == []
        assert index.by_completion_date == {"2024-01-03": [task.id]}

    def test_newest_first(self):
        index = TaskIndex()
        first, second = make_task(project_name="alpha"), make_task(project_name="alpha")
        index_new_task(index, first)
        index_new_task(index, second)

        assert index.all == [second.id, first.id]
        assert index.by_project["alpha"] == [second.id, first.id]
        assert index.by_creation_date["2024-01-01"] == [second.id, first.id]

    def test_date_bucketing(self):
        index = TaskIndex()
        late = make_task(created=ms(2024, 1, 1, 23, 59, 59))
        early = make_task(created=ms(2024, 1, 1, 0, 0, 1))
        next_day = make_task(created=ms(2024, 1, 2, 0, 0, 1))
        for task in (late, early, next_day):
            index_new_task(index, task)

        assert set(index.by_creation_date["2024-01-01"]) == {late.id, early.id}
        assert index.by_creation_date["2024-01-02"] == [next_day.id]


class TestDeindexTask:
    def test_removes_from_every_list(self):
        index = TaskIndex()
        task = make_task(project_name="alpha", is_done=True, completed=ms(2024, 1, 2, 8, 0))
        index_new_task(index, task)
        deindex_task(index, task)

        assert index == TaskIndex()

    def test_preserves_other_entries_and_order(self):
        index = TaskIndex()
        tasks = [make_task(project_name="alpha") for _ in range(3)]
        for task in tasks:
            index_new_task(index, task)

        deindex_task(index, tasks[1])

        assert index.all == [tasks[2].id, tasks[0].id]
        assert index.by_project["alpha"] == [tasks[2].id, tasks[0].id]

    def test_removes_by_value_even_when_fields_changed(self):
        index = TaskIndex()
        task = make_task(project_name="alpha")
        index_new_task(index, task)

        moved = task.model_copy(update={"project_name": "beta", "created": ms(2024, 2, 1, 9, 0)})
        deindex_task(index, moved)

        assert task.id not in index.all
        assert "alpha" not in index.by_project
        assert index.by_creation_date == {}


class TestReindexTask:
    def test_toggle_to_done_moves_membership(self):
        index = TaskIndex()
        task = make_task(project_name="alpha")
        index_new_task(index, task)

        done = task.model_copy(update={"is_done": True, "completed": ms(2024, 1, 5, 12, 0)})
        reindex_task(index, done)

        assert index.incomplete == []
        assert index.by_completion_date == {"2024-01-05": [task.id]}
        assert index.by_project == {"alpha": [task.id]}
        _membership_holds(index, [done])

    def test_toggle_back_clears_completion(self):
        index = TaskIndex()
        task = make_task(is_done=True, completed=ms(2024, 1, 5, 12, 0))
        index_new_task(index, task)

        reopened = task.model_copy(update={"is_done": False, "completed": None})
        reindex_task(index, reopened)

        assert index.incomplete == [task.id]
        assert index.by_completion_date == {}

    def test_idempotent(self):
        index = TaskIndex()
        tasks = [make_task(), make_task(project_name="alpha", is_done=True, completed=ms(2024, 1, 2, 9, 0))]
        for task in tasks:
            index_new_task(index, task)

        reindex_task(index, tasks[1])
        once = index.model_copy(deep=True)
        reindex_task(index, tasks[1])

        assert index == once
        _membership_holds(index, tasks)


class TestIndexNewSession:
    def test_appends_in_creation_order(self):
        index = SessionIndex()
        first = make_session(session_start=ms(2024, 1, 1, 9, 0))
        second = make_session(session_start=ms(2024, 1, 1, 14, 0))
        index_new_session(index, first)
        index_new_session(index, second)

        assert index.ordered == [first.id, second.id]
        assert index.by_project == {"alpha": [first.id, second.id]}
        assert index.by_date == {"2024-01-01": [first.id, second.id]}

    def test_buckets_by_start_day_not_end_day(self):
        index = SessionIndex()
        overnight = make_session(
            session_start=ms(2024, 1, 1, 23, 0),
            session_end=ms(2024, 1, 2, 1, 0),
        )
        index_new_session(index, overnight)

        assert index.by_date == {"2024-01-01": [overnight.id]}


class TestIndexStorage:
    @pytest.mark.asyncio
    async def test_missing_index_is_materialized(self, data_dir):
        index = await load_task_index()

        assert index == TaskIndex()
        assert json.loads(data_dir.task_index.read_text()) == {
            "all": [],
            "inbox": [],
            "incomplete": [],
            "byProject": {},
            "byCreationDate": {},
            "byCompletionDate": {},
        }

    @pytest.mark.asyncio
    async def test_empty_session_index_file_uses_default(self, data_dir):
        data_dir.session_index.parent.mkdir(parents=True)
        data_dir.session_index.write_text("")

        index = await load_session_index()
        assert index == SessionIndex()

    @pytest.mark.asyncio
    async def test_modify_saves_once_on_exit(self, data_dir):
        task = make_task(project_name="alpha")
        async with modify_task_index() as index:
            index_new_task(index, task)

        on_disk = json.loads(data_dir.task_index.read_text())
        assert on_disk["byProject"] == {"alpha": [task.id]}

    @pytest.mark.asyncio
    async def test_modify_does_not_save_on_error(self, data_dir):
        await load_task_index()

        with pytest.raises(RuntimeError):
            async with modify_task_index() as index:
                index_new_task(index, make_task())
                raise RuntimeError("boom")

        assert (await load_task_index()).all == []
