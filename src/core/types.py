"""Shared typed models.

This module defines immutable data models passed between the source
reader, transforms, manifest generator, artifact writer, and pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

MetadataMapping = Mapping[str, str]
FingerprintSnapshot = dict[str, str]


@dataclass(frozen=True)
class SourceUnit:
    """One annotated source file read for the current run.

    Attributes:
        path: Location of the source file.
        text: Raw text content.
        metadata: Annotation tags parsed from the text.
    """

    path: Path
    text: str
    metadata: MetadataMapping = field(default_factory=dict)


@dataclass(frozen=True)
class ClientScriptFields:
    """Field set rendered into a ``clientscript`` SDF object.

    Attributes:
        script_id: SDF script id, e.g. ``customscript_demo_cs``.
        deployment_id: SDF deployment id.
        name: Display name of the script record.
        description: Script record description.
        record_type: Record type the deployment is attached to.
        execution_context: Deployment execution context.
        log_level: Deployment log level.
        status: Deployment status.
        all_roles: ``T`` or ``F`` marker for audience.
    """

    script_id: str
    deployment_id: str
    name: str
    description: str
    record_type: str
    execution_context: str
    log_level: str
    status: str
    all_roles: str


@dataclass(frozen=True)
class GeneratedArtifacts:
    """Module and manifest written for one source unit.

    Attributes:
        script_id: Identity key of the source unit.
        source_path: Source file the artifacts were generated from.
        module_path: Written SuiteScript module path.
        manifest_path: Written SDF object XML path.
    """

    script_id: str
    source_path: Path
    module_path: Path
    manifest_path: Path


@dataclass(frozen=True)
class BuildReport:
    """Outcome of one full build.

    Attributes:
        scanned_count: Number of source files visited.
        artifacts: Artifact pairs generated successfully.
        skipped_paths: Sources without an identity key.
        failed_paths: Sources whose processing raised an error.
    """

    scanned_count: int
    artifacts: tuple[GeneratedArtifacts, ...] = ()
    skipped_paths: tuple[Path, ...] = ()
    failed_paths: tuple[Path, ...] = ()


@dataclass(frozen=True)
class ChangeDetectionResult:
    """Outcome of comparing current sources against the stored snapshot.

    Attributes:
        changed_paths: Sources that are new or whose fingerprint differs.
        snapshot: Fingerprints of every source scanned in this run.
    """

    changed_paths: frozenset[str]
    snapshot: FingerprintSnapshot


@dataclass(frozen=True)
class DeltaDeployResult:
    """Outcome of one delta deploy run.

    Attributes:
        changed_paths: Sources detected as changed.
        deployed: Whether build and deploy commands were executed.
    """

    changed_paths: frozenset[str]
    deployed: bool
