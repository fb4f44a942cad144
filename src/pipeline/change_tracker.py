"""Source change detection against the stored fingerprint snapshot.

This module fingerprints every source in the flat source directory,
compares against the previous run, and always persists the new
snapshot so a repeated run with unchanged sources reports nothing.
"""

from __future__ import annotations

from pathlib import Path

from core.constants import DEFAULT_SOURCE_EXTENSION
from core.logging_config import get_logger
from core.types import ChangeDetectionResult, FingerprintSnapshot
from sources.source_reader import list_source_files
from store.fingerprint_store import FingerprintStore, compute_fingerprint

_LOGGER = get_logger(__name__)


def detect_changes(
    source_dir: Path,
    snapshot_path: Path,
    extension: str = DEFAULT_SOURCE_EXTENSION,
) -> ChangeDetectionResult:
    """Detect new or modified sources and persist the new snapshot.

    Args:
        source_dir: Flat directory of sources.
        snapshot_path: JSON snapshot file from the previous run.
        extension: Source file extension filter.

    Returns:
        Changed source paths and the snapshot that was persisted.
    """
    store = FingerprintStore(snapshot_path)
    with store.locked():
        previous = store.load()
        current = fingerprint_sources(list_source_files(source_dir, extension))
        changed_paths = select_changed_paths(previous, current)
        store.save(current)
    for path in sorted(changed_paths):
        _LOGGER.info("source_changed", path=path)
    _LOGGER.info(
        "change_detection_complete",
        scanned=len(current),
        changed=len(changed_paths),
        snapshot=str(store.snapshot_path),
    )
    return ChangeDetectionResult(changed_paths=changed_paths, snapshot=current)


def fingerprint_sources(source_paths: list[Path]) -> FingerprintSnapshot:
    """Fingerprint sources keyed by their path string."""
    return {str(path): compute_fingerprint(path) for path in source_paths}


def select_changed_paths(
    previous: FingerprintSnapshot,
    current: FingerprintSnapshot,
) -> frozenset[str]:
    """Return paths that are new or whose fingerprint differs."""
    return frozenset(
        path for path, fingerprint in current.items() if previous.get(path) != fingerprint
    )
