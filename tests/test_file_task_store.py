"""Tests for the file-based task store."""

import itertools
from dataclasses import replace
from datetime import datetime
from unittest.mock import patch

import pytest

from noted.adapters.file_task_store import FileTaskStore
from noted.adapters.monthly_file import MonthlyFileStore
from noted.core.status import Status
from noted.core.tasks import TaskRecord
from noted.errors import NotFoundError, ParseError, StorageError


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 15, 9, 30))


@pytest.fixture
def store(tmp_path, clock):
    counter = itertools.count(1)
    return FileTaskStore(tmp_path / "task", clock=clock, id_factory=lambda: f"id-{next(counter)}")


@pytest.fixture
def two_months(store):
    """2024-01 holds two tasks (one done), 2024-02 holds one todo."""
    files = MonthlyFileStore(store.task_dir)
    files.save(
        files.path_for(2024, 1),
        [
            TaskRecord(id="jan-1", created_at=datetime(2024, 1, 2), task="one", status=Status.DONE),
            TaskRecord(id="jan-2", created_at=datetime(2024, 1, 5), task="two"),
        ],
    )
    files.save(
        files.path_for(2024, 2),
        [TaskRecord(id="feb-1", created_at=datetime(2024, 2, 1), task="three")],
    )
    return store


class TestCreateTask:
    def test_create_then_list(self, store):
        due = datetime(2024, 1, 20)
        store.create_task("buy milk", "semi-skimmed", due)

        views = store.list_tasks()
        assert len(views) == 1
        view = views[0]
        assert view.task == "buy milk"
        assert view.detail == "semi-skimmed"
        assert view.due_at == due
        assert view.scheduled_for is None
        assert view.status == Status.TODO
        assert view.id == "id-1"
        assert view.created_at == datetime(2024, 1, 15, 9, 30)

    def test_lands_in_current_month_file(self, store, clock):
        view = store.create_task("a")
        assert view.file == store.task_dir / "2024-01.yaml"

        clock.now = datetime(2024, 2, 1, 0, 0)
        view = store.create_task("b")
        assert view.file == store.task_dir / "2024-02.yaml"

    def test_appends_to_existing_file(self, store):
        store.create_task("a")
        store.create_task("b")
        assert [v.task for v in store.list_tasks()] == ["a", "b"]

    def test_default_ids_are_unique(self, tmp_path):
        store = FileTaskStore(tmp_path, clock=lambda: datetime(2024, 1, 1))
        first = store.create_task("a")
        second = store.create_task("b")
        assert first.id
        assert first.id != second.id

    def test_corrupt_current_file_raises_storage_error(self, store):
        path = store.task_dir / "2024-01.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("entries: [unclosed")
        with pytest.raises(StorageError):
            store.create_task("a")
        assert path.read_text() == "entries: [unclosed"

    def test_undecodable_current_file_raises_storage_error(self, store):
        path = store.task_dir / "2024-01.yaml"
        path.parent.mkdir(parents=True)
        path.write_bytes(b"entries:\n- id: \xff\xfe\n")
        with pytest.raises(StorageError) as exc_info:
            store.create_task("a")
        assert isinstance(exc_info.value.__cause__, ParseError)
        assert path.read_bytes() == b"entries:\n- id: \xff\xfe\n"

    def test_write_failure_raises_storage_error(self, store):
        with patch.object(MonthlyFileStore, "save", side_effect=PermissionError("denied")):
            with pytest.raises(StorageError) as exc_info:
                store.create_task("a")
        assert isinstance(exc_info.value.__cause__, PermissionError)


class TestListTasks:
    def test_empty_store(self, store):
        assert store.list_tasks() == []

    @pytest.mark.parametrize("include_completed", [True, False])
    def test_union_in_file_order(self, two_months, include_completed):
        views = two_months.list_tasks(include_completed)
        assert [v.id for v in views] == ["jan-1", "jan-2", "feb-1"]

    def test_views_carry_owning_file(self, two_months):
        views = two_months.list_tasks()
        assert views[0].file.name == "2024-01.yaml"
        assert views[2].file.name == "2024-02.yaml"

    def test_corrupt_file_is_skipped(self, store):
        store.create_task("ok")
        (store.task_dir / "2023-12.yaml").write_text("entries: [unclosed")

        views = store.list_tasks()
        assert [v.task for v in views] == ["ok"]

    def test_scan_reports_failures(self, store):
        store.create_task("ok")
        bad = store.task_dir / "2023-12.yaml"
        bad.write_text("entries: [unclosed")

        scan = store.scan_tasks()
        assert len(scan.views) == 1
        assert [path for path, _ in scan.failures] == [bad]
        assert isinstance(scan.failures[0][1], ParseError)

    def test_undecodable_file_is_skipped(self, store):
        store.create_task("ok")
        bad = store.task_dir / "2023-12.yaml"
        bad.write_bytes(b"entries:\n- id: \xff\xfe\n")

        scan = store.scan_tasks()
        assert [v.task for v in scan.views] == ["ok"]
        assert [path for path, _ in scan.failures] == [bad]
        assert isinstance(scan.failures[0][1], ParseError)
        assert [v.task for v in store.list_tasks()] == ["ok"]

    def test_unknown_status_keeps_neighbours(self, store):
        path = store.task_dir / "2024-01.yaml"
        path.parent.mkdir(parents=True)
        path.write_text(
            "entries:\n"
            "- {id: a, created_at: '2024-01-01T10:00:00', task: odd, detail: d, status: 9}\n"
            "- {id: b, created_at: '2024-01-02T10:00:00', task: normal, status: 2}\n"
        )

        scan = store.scan_tasks()
        assert scan.failures == []
        assert [v.id for v in scan.views] == ["a", "b"]
        assert scan.views[0].status == 9
        assert scan.views[0].description == "UNK: d"
        assert scan.views[1].status == Status.IN_PROGRESS

    def test_unknown_status_rotates_to_todo(self, store):
        path = store.task_dir / "2024-01.yaml"
        path.parent.mkdir(parents=True)
        path.write_text("entries:\n- {id: a, created_at: '2024-01-01T10:00:00', task: odd, status: 9}\n")

        view = store.list_tasks()[0]
        assert store.rotate_task(view).status == Status.TODO
        assert store.list_tasks()[0].status == Status.TODO

    def test_non_monthly_files_in_task_dir_are_ignored(self, tmp_path, clock):
        store = FileTaskStore(tmp_path, clock=clock)
        (tmp_path / "noted.log").write_text("2024-01-15 - noted.cli - DEBUG - Logger configured\n")
        (tmp_path / "notes.yaml").write_text("not: tasks\n")
        store.create_task("ok")

        scan = store.scan_tasks()
        assert [v.task for v in scan.views] == ["ok"]
        assert scan.failures == []


class TestUpdateTask:
    def test_replaces_record_in_place(self, two_months):
        view = replace(two_months.list_tasks()[1], detail="updated")
        two_months.update_task(view.with_status(Status.PAUSED))

        views = two_months.list_tasks()
        assert [v.id for v in views] == ["jan-1", "jan-2", "feb-1"]
        assert views[1].status == Status.PAUSED
        assert views[1].detail == "updated"
        assert views[0].status == Status.DONE

    def test_idempotent(self, two_months):
        view = two_months.list_tasks()[0].with_status(Status.IN_PROGRESS)
        two_months.update_task(view)
        first = view.file.read_text()
        two_months.update_task(view)
        assert view.file.read_text() == first

    def test_missing_file_raises_not_found(self, two_months, tmp_path):
        view = replace(two_months.list_tasks()[0], file=tmp_path / "task" / "1999-01.yaml")
        with pytest.raises(NotFoundError) as exc_info:
            two_months.update_task(view)
        assert exc_info.value.file == view.file
        assert exc_info.value.task == "one"

    def test_unknown_id_raises_not_found(self, two_months):
        view = replace(two_months.list_tasks()[0], id="nope")
        before = view.file.read_text()
        with pytest.raises(NotFoundError):
            two_months.update_task(view)
        assert view.file.read_text() == before

    def test_corrupt_file_raises_parse_error(self, two_months):
        view = two_months.list_tasks()[0]
        view.file.write_text("entries: [unclosed")
        with pytest.raises(ParseError):
            two_months.update_task(view)

    def test_undecodable_file_raises_parse_error(self, two_months):
        view = two_months.list_tasks()[0]
        view.file.write_bytes(b"entries:\n- id: \xff\xfe\n")
        with pytest.raises(ParseError):
            two_months.update_task(view.with_status(Status.TODO))
        assert view.file.read_bytes() == b"entries:\n- id: \xff\xfe\n"

    def test_write_failure_surfaces_os_error(self, two_months):
        view = two_months.list_tasks()[0]
        with patch.object(MonthlyFileStore, "save", side_effect=PermissionError("denied")):
            with pytest.raises(PermissionError):
                two_months.update_task(view)


class TestTransitions:
    def test_rotate(self, two_months):
        view = two_months.list_tasks()[1]
        updated = two_months.rotate_task(view)
        assert updated.status == Status.SCHEDULED
        assert two_months.list_tasks()[1].status == Status.SCHEDULED

    def test_rotate_done_wraps(self, two_months):
        view = two_months.list_tasks()[0]
        assert two_months.rotate_task(view).status == Status.TODO

    def test_cancel_twice_stays_cancelled(self, two_months):
        view = two_months.list_tasks()[2]
        cancelled = two_months.cancel_task(view)
        again = two_months.cancel_task(cancelled)
        assert again.status == Status.CANCELLED
        assert two_months.list_tasks()[2].status == Status.CANCELLED
