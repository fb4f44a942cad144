"""SuiteBuild exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each pipeline stage raises a specific error type so the orchestrator
can decide whether a failure skips a unit, a file, or the whole run.
"""

from __future__ import annotations


class SuiteBuildError(Exception):
    """Base exception for all SuiteBuild failures."""


class SuiteBuildConfigError(SuiteBuildError):
    """Raised for invalid runtime configuration."""


class BuildSpecError(SuiteBuildConfigError):
    """Raised for invalid or unsupported YAML project files."""


class SkippableUnitError(SuiteBuildError):
    """Raised when a source unit must be excluded from the build."""


class MissingIdentityError(SkippableUnitError):
    """Raised when a source unit has no @scriptid annotation."""


class SourceProcessingError(SuiteBuildError):
    """Raised for failures while reading, transforming, or writing one file."""


class MissingCapabilityError(SourceProcessingError):
    """Raised in strict mode when a SuiteScript capability tag is absent."""


class SnapshotLoadError(SuiteBuildError):
    """Raised when the persisted fingerprint snapshot cannot be read."""


class SuiteBuildStoreError(SuiteBuildError):
    """Raised for snapshot persistence and locking failures."""


class FatalPipelineError(SuiteBuildError):
    """Raised for failures that must abort the whole run."""


class PipelineCommandError(FatalPipelineError):
    """Raised when an external build or deploy command fails."""
