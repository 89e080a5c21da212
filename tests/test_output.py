"""Tests for review rendering."""

from rich.console import Console

from sentinel.output.review import render_review, render_session
from sentinel.review import ReviewData
from tests.conftest import make_session, make_task, ms


def _console() -> Console:
    return Console(record=True, width=120, force_terminal=False)


class TestRenderReview:
    def test_groups_and_totals(self):
        review = ReviewData(
            sessions={
                "alpha": [make_session(session_start=0, session_end=3_600_000)],
                "beta": [make_session(project_name="beta", session_start=0, session_end=1_825_000)],
            },
            created_tasks={"inbox": [make_task(description="loose [end]")]},
            completed_tasks={},
        )
        console = _console()
        render_review(console, review, "Today")
        text = console.export_text()

        assert "2 Sessions:" in text
        assert "alpha:" in text and "beta:" in text
        assert "Total duration: 1h 30m 25s" in text
        assert "1 Created Tasks:" in text
        assert "loose [end]" in text
        assert "0 Completed Tasks:" in text

    def test_project_filter(self):
        review = ReviewData(
            sessions={"alpha": [make_session(focus="alpha work")], "beta": [make_session(focus="beta work")]},
        )
        console = _console()
        render_review(console, review, "Today", project_name="beta")
        text = console.export_text()

        assert "1 Sessions:" in text
        assert "beta work" in text
        assert "alpha work" not in text

    def test_hides_dates(self):
        review = ReviewData(created_tasks={"inbox": [make_task(completed=ms(2024, 1, 2, 9, 0), is_done=True)]})
        console = _console()
        render_review(console, review, "Today", show_dates=False)

        assert "Created on" not in console.export_text()


class TestRenderSession:
    def test_focus_and_duration(self):
        console = _console()
        render_session(console, make_session(focus="Refactor", session_start=0, session_end=5425000), "Done")
        text = console.export_text()

        assert "Focus: Refactor" in text
        assert "Duration: 1h 30m 25s" in text
