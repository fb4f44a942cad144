"""Full build orchestration.

This module visits every source file, extracts metadata, transforms
the source, renders the SDF manifest, and writes both artifacts. One
failing file is logged and never aborts the rest of the batch.
"""

from __future__ import annotations

from pathlib import Path

from core.config import BuildConfig
from core.errors import MissingIdentityError
from core.logging_config import get_logger
from core.types import BuildReport, GeneratedArtifacts
from manifests.client_script import build_client_script_fields, render_client_script_xml
from sources.source_reader import list_source_files, read_source_unit
from store.artifact_writer import ArtifactWriter
from transforms.annotation_reader import build_annotation_reader, find_duplicate_tags
from transforms.source_rewriter import (
    RegexSyntaxRewriter,
    SyntaxRewriter,
    missing_capabilities,
    transform_source,
)

_LOGGER = get_logger(__name__)


class BuildPipelineRunner:
    """Runner for one full build over the configured source directory."""

    def __init__(self, config: BuildConfig, rewriter: SyntaxRewriter | None = None) -> None:
        self._config = config
        self._reader = build_annotation_reader(config.annotation_reader)
        self._rewriter = rewriter or RegexSyntaxRewriter()
        self._writer = ArtifactWriter(config.scripts_dir, config.objects_dir)

    def run(self) -> BuildReport:
        """Build every source file and return the batch outcome."""
        _LOGGER.info("build_started", source_dir=str(self._config.source_dir))
        self._writer.ensure_directories()
        source_paths = list_source_files(self._config.source_dir, self._config.source_extension)
        if not source_paths:
            _LOGGER.warning(
                "no_sources_found",
                source_dir=str(self._config.source_dir),
                extension=self._config.source_extension,
            )
            return BuildReport(scanned_count=0)
        _LOGGER.info("sources_found", count=len(source_paths))
        artifacts: list[GeneratedArtifacts] = []
        skipped_paths: list[Path] = []
        failed_paths: list[Path] = []
        for source_path in source_paths:
            try:
                artifacts.append(self.process_file(source_path))
            except MissingIdentityError:
                _LOGGER.warning(
                    "source_skipped", path=str(source_path), reason="no @scriptid found"
                )
                skipped_paths.append(source_path)
            except Exception as error:
                _LOGGER.error(
                    "source_failed",
                    path=str(source_path),
                    error_type=type(error).__name__,
                    error=str(error),
                )
                failed_paths.append(source_path)
        report = BuildReport(
            scanned_count=len(source_paths),
            artifacts=tuple(artifacts),
            skipped_paths=tuple(skipped_paths),
            failed_paths=tuple(failed_paths),
        )
        _log_build_completion(report)
        return report

    def process_file(self, source_path: Path) -> GeneratedArtifacts:
        """Generate the module and manifest for one source file.

        Raises:
            MissingIdentityError: If the source has no ``@scriptid``.
            SourceProcessingError: If reading, transforming, or writing fails.
        """
        _LOGGER.info("source_processing", path=str(source_path))
        unit = read_source_unit(source_path, self._reader)
        fields = build_client_script_fields(unit.metadata)
        duplicates = find_duplicate_tags(unit.text, self._reader)
        if duplicates:
            _LOGGER.warning(
                "duplicate_annotations",
                path=str(source_path),
                tags=list(duplicates),
                resolution="last occurrence wins",
            )
        missing = missing_capabilities(unit.metadata)
        if missing and not self._config.strict_capabilities:
            _LOGGER.warning(
                "missing_capabilities",
                path=str(source_path),
                tags=list(missing),
                rendered_as="undefined",
            )
        module_text = transform_source(
            unit.text,
            unit.metadata,
            self._rewriter,
            strict_capabilities=self._config.strict_capabilities,
        )
        manifest_text = render_client_script_xml(fields)
        return self._writer.write(fields.script_id, source_path, module_text, manifest_text)


def run_build(config: BuildConfig) -> BuildReport:
    """Run a full build with default transform components."""
    return BuildPipelineRunner(config).run()


def _log_build_completion(report: BuildReport) -> None:
    _LOGGER.info(
        "build_complete",
        scanned=report.scanned_count,
        generated=len(report.artifacts),
        skipped=len(report.skipped_paths),
        failed=len(report.failed_paths),
    )
    for artifact in report.artifacts:
        _LOGGER.info(
            "build_artifact",
            script_id=artifact.script_id,
            module=str(artifact.module_path),
            manifest=str(artifact.manifest_path),
        )
