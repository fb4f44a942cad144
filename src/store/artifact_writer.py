"""Generated artifact persistence.

This module writes SuiteScript modules and SDF object manifests to
their output directories, deriving file names from the script id.
"""

from __future__ import annotations

from pathlib import Path

from core.errors import SourceProcessingError
from core.logging_config import get_logger
from core.types import GeneratedArtifacts
from manifests.client_script import manifest_file_name, module_file_name

_LOGGER = get_logger(__name__)


class ArtifactWriter:
    """Filesystem writer for module and manifest artifacts."""

    def __init__(self, scripts_dir: Path, objects_dir: Path) -> None:
        self._scripts_dir = scripts_dir
        self._objects_dir = objects_dir

    def ensure_directories(self) -> None:
        """Create output directories when missing."""
        for directory in (self._scripts_dir, self._objects_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def write(
        self,
        script_id: str,
        source_path: Path,
        module_text: str,
        manifest_text: str,
    ) -> GeneratedArtifacts:
        """Write one artifact pair.

        Args:
            script_id: Identity key used to derive file names.
            source_path: Source file the artifacts came from.
            module_text: Transformed SuiteScript module.
            manifest_text: Rendered SDF object XML.

        Returns:
            Paths of the written artifacts.

        Raises:
            SourceProcessingError: If either file cannot be written.
        """
        module_path = self._scripts_dir / module_file_name(script_id)
        manifest_path = self._objects_dir / manifest_file_name(script_id)
        _write_text(module_path, module_text)
        _LOGGER.info("artifact_written", kind="module", path=str(module_path))
        _write_text(manifest_path, manifest_text)
        _LOGGER.info("artifact_written", kind="manifest", path=str(manifest_path))
        return GeneratedArtifacts(
            script_id=script_id,
            source_path=source_path,
            module_path=module_path,
            manifest_path=manifest_path,
        )


def _write_text(target_path: Path, content: str) -> None:
    try:
        target_path.write_text(content, encoding="utf-8")
    except OSError as error:
        raise SourceProcessingError(
            f"Failed to write artifact {target_path}: {error}. "
            "Check that the output directory is writable."
        ) from error
