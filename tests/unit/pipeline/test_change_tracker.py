"""Unit tests for source change detection."""

from __future__ import annotations

import json

from structlog.testing import capture_logs

from pipeline.change_tracker import detect_changes, select_changed_paths


def test_detect_changes_cold_start_reports_every_source(tmp_path) -> None:
    """Without a snapshot, every source is changed and all are persisted."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.ts").write_text("beta", encoding="utf-8")
    snapshot_path = tmp_path / "automation" / ".file-hashes.json"

    result = detect_changes(tmp_path, snapshot_path)

    expected = {str(tmp_path / "a.ts"), str(tmp_path / "b.ts")}
    assert set(result.changed_paths) == expected
    assert set(json.loads(snapshot_path.read_text(encoding="utf-8"))) == expected


def test_detect_changes_second_run_is_idempotent(tmp_path) -> None:
    """An unmodified source should be reported once, then never again."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    snapshot_path = tmp_path / "hashes.json"

    first = detect_changes(tmp_path, snapshot_path)
    stored = snapshot_path.read_text(encoding="utf-8")
    second = detect_changes(tmp_path, snapshot_path)

    assert (len(first.changed_paths), len(second.changed_paths)) == (1, 0)
    assert snapshot_path.read_text(encoding="utf-8") == stored


def test_detect_changes_reports_modified_source_only(tmp_path) -> None:
    """Only the edited file should be reported after a change."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.ts").write_text("beta", encoding="utf-8")
    snapshot_path = tmp_path / "hashes.json"
    detect_changes(tmp_path, snapshot_path)
    (tmp_path / "b.ts").write_text("beta v2", encoding="utf-8")

    result = detect_changes(tmp_path, snapshot_path)

    assert result.changed_paths == frozenset({str(tmp_path / "b.ts")})


def test_detect_changes_recovers_from_corrupt_snapshot(tmp_path) -> None:
    """A corrupt snapshot should mark all sources changed and be rewritten."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    snapshot_path = tmp_path / "hashes.json"
    snapshot_path.write_text("][", encoding="utf-8")

    result = detect_changes(tmp_path, snapshot_path)

    assert len(result.changed_paths) == 1
    assert json.loads(snapshot_path.read_text(encoding="utf-8")) == result.snapshot


def test_detect_changes_drops_deleted_sources_from_snapshot(tmp_path) -> None:
    """The new snapshot should only cover sources scanned in this run."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    (tmp_path / "b.ts").write_text("beta", encoding="utf-8")
    snapshot_path = tmp_path / "hashes.json"
    detect_changes(tmp_path, snapshot_path)
    (tmp_path / "b.ts").unlink()

    result = detect_changes(tmp_path, snapshot_path)

    assert set(result.snapshot) == {str(tmp_path / "a.ts")} and not result.changed_paths


def test_select_changed_paths_compares_fingerprints() -> None:
    """New and modified paths should be selected."""
    previous = {"a.ts": "1", "b.ts": "2"}
    current = {"a.ts": "1", "b.ts": "3", "c.ts": "4"}

    assert select_changed_paths(previous, current) == frozenset({"b.ts", "c.ts"})


def test_detect_changes_logs_snapshot_location(tmp_path) -> None:
    """The completion event should name the snapshot file that was written."""
    (tmp_path / "a.ts").write_text("alpha", encoding="utf-8")
    snapshot_path = tmp_path / "automation" / ".file-hashes.json"

    with capture_logs() as events:
        detect_changes(tmp_path, snapshot_path)

    complete = [event for event in events if event["event"] == "change_detection_complete"]
    assert complete == [
        {
            "event": "change_detection_complete",
            "log_level": "info",
            "scanned": 1,
            "changed": 1,
            "snapshot": str(snapshot_path),
        }
    ]
