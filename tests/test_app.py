# tests/test_app.py

from __future__ import annotations

from app import MSG_ADDED, MSG_CLEARED, MSG_DELETED, MSG_UPDATED, TodoApp
from storage import Storage
from view import Notifier

from .conftest import TimerRecorder


def _app(storage: Storage, timers: TimerRecorder) -> TodoApp:
    return TodoApp(storage, notifier=Notifier(timer_factory=timers))


def test_add_notifies_and_shows_in_active_view(app: TodoApp) -> None:
    assert app.add("Buy milk", "urgent")

    assert app.message == MSG_ADDED
    assert app.active_count == 1
    assert app.filter == "active"
    assert [r.text for r in app.rows()] == ["Buy milk"]


def test_rejected_add_does_not_notify(app: TodoApp) -> None:
    assert app.add("   ", "normal") is False
    assert app.message == ""
    assert app.rows() == []


def test_toggle_does_not_notify(app: TodoApp) -> None:
    app.add("a")
    app.notifier.clear()
    row = app.rows()[0]

    assert app.toggle_complete(row.id)
    assert app.message == ""
    assert app.rows() == []  # moved out of the active view
    app.set_filter("done")
    assert [r.id for r in app.rows()] == [row.id]


def test_edit_flow_commits_draft(app: TodoApp) -> None:
    app.add("old")
    task_id = app.rows()[0].id

    assert app.start_edit(task_id)
    assert app.view.draft == "old"
    app.view.update_draft("new")
    assert app.save_edit()

    assert app.editing_id is None
    assert app.rows()[0].text == "new"
    assert app.message == MSG_UPDATED


def test_blank_edit_is_discarded_but_session_closes(app: TodoApp) -> None:
    app.add("old")
    app.notifier.clear()
    task_id = app.rows()[0].id

    app.start_edit(task_id)
    assert app.save_edit("   ") is False

    assert app.editing_id is None
    assert app.rows()[0].text == "old"
    assert app.message == ""


def test_cancel_edit(app: TodoApp) -> None:
    app.add("old")
    app.start_edit(app.rows()[0].id)
    app.cancel_edit()
    assert app.editing_id is None
    assert app.save_edit("ignored") is False


def test_start_edit_unknown_id(app: TodoApp) -> None:
    assert app.start_edit(42) is False
    assert app.editing_id is None


def test_delete_notifies(app: TodoApp) -> None:
    app.add("a")
    assert app.delete(app.rows()[0].id)
    assert app.message == MSG_DELETED
    assert app.summary() == "All clear! \U0001F60C"


def test_delete_unknown_id_is_silent(app: TodoApp) -> None:
    assert app.delete(7) is False
    assert app.message == ""


def test_clear_completed_in_done_filter_switches_to_active(app: TodoApp) -> None:
    app.add("a")
    app.add("b")
    for row in app.rows():
        app.toggle_complete(row.id)
    app.set_filter("done")

    assert app.clear_completed() == 2
    assert app.filter == "active"
    assert app.tasks.get_tasks() == []
    assert app.message == MSG_CLEARED


def test_clear_completed_keeps_other_filters(app: TodoApp) -> None:
    app.set_filter("all")
    app.clear_completed()
    assert app.filter == "all"


def test_theme_is_persisted(storage: Storage, timers: TimerRecorder) -> None:
    app = _app(storage, timers)
    assert app.dark is False

    app.toggle_theme()
    assert app.dark is True
    assert _app(storage, timers).dark is True

    app.set_theme(False)
    assert _app(storage, timers).dark is False


def test_state_survives_restart(storage: Storage, timers: TimerRecorder) -> None:
    first = _app(storage, timers)
    first.add("chill out", "chill")
    first.add("ship it", "urgent")
    first.toggle_complete(first.rows()[1].id)

    second = _app(storage, timers)
    second.set_filter("all")

    assert [(r.text, r.completed) for r in second.rows()] == [("ship it", False), ("chill out", True)]


def test_close_cancels_pending_toast(app: TodoApp, timers: TimerRecorder) -> None:
    app.add("a")
    app.close()
    assert timers.timers[-1].cancelled
