from __future__ import annotations

import os
from pathlib import Path

from core.errors import MoveFailedError
from core.services import review_session
from core.services.interfaces import OutcomeKind
from core.services.review_session import ReviewSession
from infrastructure.move_service import MoveService


class RecordingMover:
    def __init__(self, fail_on: tuple[int, ...] = ()) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_on = fail_on
        self._inner = MoveService()

    def move(self, source: str, destination: str) -> None:
        self.calls.append((source, destination))
        if len(self.calls) in self.fail_on:
            raise PermissionError(13, "Permission denied", source)
        self._inner.move(source, destination)


def test_reject_then_undo_scenario(tmp_path: Path, make_files, session: ReviewSession) -> None:
    make_files(tmp_path, "b.jpg", "a.png", "c.cr2")

    outcome = session.open(str(tmp_path))
    assert outcome.ok
    assert [Path(p).name for p in session.catalog.paths] == ["a.png", "b.jpg", "c.cr2"]
    assert (outcome.view.position, outcome.view.total_count) == (1, 3)
    assert outcome.view.current_name == "a.png"
    assert not (tmp_path / "_rejected").exists()

    outcome = session.reject()
    assert outcome.ok
    assert (tmp_path / "_rejected" / "a.png").is_file()
    assert not (tmp_path / "a.png").exists()
    assert outcome.view.current_name == "b.jpg"
    assert outcome.view.status_text == "1 / 2"
    assert outcome.view.can_undo
    assert outcome.record is not None
    assert outcome.record.original_index == 0

    outcome = session.undo()
    assert outcome.ok
    assert (tmp_path / "a.png").is_file()
    assert outcome.restored_path == str(tmp_path / "a.png")
    assert outcome.view.current_name == "a.png"
    assert outcome.view.status_text == "1 / 3"
    assert not outcome.view.can_undo
    assert os.listdir(tmp_path / "_rejected") == []


def test_reject_collision_in_reject_dir_gets_suffix(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.png", "b.png")
    rejected = tmp_path / "_rejected"
    rejected.mkdir()
    (rejected / "a.png").write_bytes(b"older reject")

    session.open(str(tmp_path))
    outcome = session.reject()

    assert outcome.ok
    assert (rejected / "a_1.png").read_bytes() == b"image:a.png"
    assert (rejected / "a.png").read_bytes() == b"older reject"
    assert str(tmp_path / "a.png") not in session.catalog.paths
    assert outcome.view.total_count == 1


def test_reject_prunes_externally_deleted_current(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    a, _, _ = make_files(tmp_path, "a.jpg", "b.jpg", "c.jpg")
    session.open(str(tmp_path))
    a.unlink()

    outcome = session.reject()

    assert outcome.ok
    assert outcome.pruned == [str(a)]
    assert outcome.view.total_count == 2
    assert outcome.view.current_name == "b.jpg"
    assert session.history == ()
    assert not (tmp_path / "_rejected").exists()


def test_keep_advances_without_touching_count(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))

    first = session.keep()
    second = session.keep()
    third = session.keep()

    assert [o.view.position for o in (first, second, third)] == [2, 2, 2]
    assert all(o.view.total_count == 2 for o in (first, second, third))
    assert session.history == ()


def test_keep_on_empty_catalog_is_noop(tmp_path: Path, session: ReviewSession) -> None:
    session.open(str(tmp_path))
    outcome = session.keep()
    assert outcome.ok
    assert outcome.view.is_empty
    assert outcome.view.position == 0
    assert outcome.view.current_path is None


def test_keep_prunes_vanished_next_file(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    _, b, _ = make_files(tmp_path, "a.jpg", "b.jpg", "c.jpg")
    session.open(str(tmp_path))
    b.unlink()

    outcome = session.keep()

    assert outcome.pruned == [str(b)]
    assert outcome.view.current_name == "c.jpg"
    assert outcome.view.status_text == "2 / 2"


def test_undo_with_empty_history_makes_no_filesystem_call(tmp_path: Path, make_files) -> None:
    make_files(tmp_path, "a.jpg")
    mover = RecordingMover()
    session = ReviewSession(mover)
    before = session.open(str(tmp_path)).view

    outcome = session.undo()

    assert outcome.ok
    assert outcome.view == before
    assert mover.calls == []


def test_round_trip_restores_position_and_order(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg", "c.jpg")
    session.open(str(tmp_path))
    session.keep()
    before = list(session.catalog.paths)

    rejected = session.reject()
    assert rejected.view.current_name == "c.jpg"
    assert len(session.history) == 1

    restored = session.undo()
    assert session.catalog.paths == before
    assert restored.view.position == 2
    assert restored.view.current_name == "b.jpg"
    assert session.history == ()


def test_reject_last_entry_then_undo(tmp_path: Path, make_files, session: ReviewSession) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.keep()

    outcome = session.reject()
    assert outcome.view.current_name == "a.jpg"
    assert outcome.view.status_text == "1 / 1"

    outcome = session.undo()
    assert outcome.view.current_name == "b.jpg"
    assert outcome.view.status_text == "2 / 2"


def test_reject_everything_then_undo_lifo(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()
    outcome = session.reject()
    assert outcome.view.is_empty
    assert outcome.view.initial_count == 2
    assert len(session.history) == 2

    assert session.undo().view.current_name == "b.jpg"
    outcome = session.undo()
    assert outcome.view.current_name == "a.jpg"
    assert [Path(p).name for p in session.catalog.paths] == ["a.jpg", "b.jpg"]


def test_undo_uses_unique_name_when_original_is_occupied(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()
    (tmp_path / "a.jpg").write_bytes(b"newcomer")

    outcome = session.undo()

    assert outcome.ok
    assert outcome.restored_path == str(tmp_path / "a_1.jpg")
    assert (tmp_path / "a.jpg").read_bytes() == b"newcomer"
    assert session.catalog.paths[0] == str(tmp_path / "a_1.jpg")
    assert outcome.view.position == 1


def test_reject_move_failure_leaves_state_untouched(tmp_path: Path, make_files) -> None:
    a, _ = make_files(tmp_path, "a.jpg", "b.jpg")
    session = ReviewSession(RecordingMover(fail_on=(1,)))
    session.open(str(tmp_path))

    outcome = session.reject()

    assert outcome.kind is OutcomeKind.MOVE_FAILED
    assert isinstance(outcome.error, MoveFailedError)
    assert isinstance(outcome.error.cause, PermissionError)
    assert a.is_file()
    assert outcome.view.current_path == str(a)
    assert outcome.view.total_count == 2
    assert session.history == ()

    retry = session.reject()
    assert retry.ok
    assert retry.view.current_name == "b.jpg"


def test_undo_move_failure_consumes_record(tmp_path: Path, make_files) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session = ReviewSession(RecordingMover(fail_on=(2,)))
    session.open(str(tmp_path))
    session.reject()

    outcome = session.undo()

    assert outcome.kind is OutcomeKind.MOVE_FAILED
    assert outcome.record is not None
    assert session.history == ()
    assert (tmp_path / "_rejected" / "a.jpg").is_file()
    assert outcome.view.total_count == 1
    assert outcome.view.current_name == "b.jpg"
    assert not outcome.view.can_undo


def test_undo_restore_target_missing(tmp_path: Path, make_files, session: ReviewSession) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()
    (tmp_path / "_rejected" / "a.jpg").unlink()

    outcome = session.undo()

    assert outcome.kind is OutcomeKind.RESTORE_TARGET_MISSING
    assert outcome.error is not None
    assert session.history == ()
    assert outcome.view.total_count == 1
    assert not (tmp_path / "a.jpg").exists()


def test_reject_name_space_exhausted(
    tmp_path: Path, make_files, session: ReviewSession, monkeypatch
) -> None:
    make_files(tmp_path, "a.jpg")
    make_files(tmp_path / "_rejected", "a.jpg", "a_1.jpg")
    monkeypatch.setattr(review_session, "MAX_UNIQUE_ATTEMPTS", 1)
    session.open(str(tmp_path))

    outcome = session.reject()

    assert outcome.kind is OutcomeKind.NAME_SPACE_EXHAUSTED
    assert (tmp_path / "a.jpg").is_file()
    assert outcome.view.total_count == 1
    assert session.history == ()


def test_open_missing_folder_keeps_previous_session(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()

    outcome = session.open(str(tmp_path / "missing"))

    assert outcome.kind is OutcomeKind.FOLDER_NOT_FOUND
    assert session.folder == str(tmp_path)
    assert outcome.view.can_undo
    assert outcome.view.current_name == "b.jpg"


def test_open_unreadable_folder_keeps_previous_session(
    tmp_path: Path, make_files, session: ReviewSession, monkeypatch
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()

    def denied(path):
        raise PermissionError(13, "Permission denied", path)

    monkeypatch.setattr(os, "scandir", denied)
    outcome = session.open(str(tmp_path))

    assert outcome.kind is OutcomeKind.FOLDER_NOT_FOUND
    assert isinstance(outcome.error.__cause__, PermissionError)
    assert session.folder == str(tmp_path)
    assert outcome.view.can_undo
    assert outcome.view.current_name == "b.jpg"


def test_reopen_discards_history_and_skips_reject_dir(
    tmp_path: Path, make_files, session: ReviewSession
) -> None:
    make_files(tmp_path, "a.jpg", "b.jpg")
    session.open(str(tmp_path))
    session.reject()

    outcome = session.open(str(tmp_path))

    assert not outcome.view.can_undo
    assert [Path(p).name for p in session.catalog.paths] == ["b.jpg"]
    assert outcome.view.initial_count == 1
    assert session.reject_dir == str(tmp_path / "_rejected")


def test_reject_on_unopened_session_is_noop(session: ReviewSession) -> None:
    outcome = session.reject()
    assert outcome.ok
    assert outcome.view.is_empty
    assert session.folder is None
