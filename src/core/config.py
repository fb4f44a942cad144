"""Runtime configuration model for SuiteBuild.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
import shlex

from core.constants import (
    DEFAULT_ANNOTATION_READER,
    DEFAULT_BUILD_COMMAND,
    DEFAULT_DEPLOY_COMMAND,
    DEFAULT_LOG_FORMAT,
    DEFAULT_OBJECTS_DIR,
    DEFAULT_SCRIPTS_DIR,
    DEFAULT_SNAPSHOT_FILE,
    DEFAULT_SOURCE_DIR,
    DEFAULT_SOURCE_EXTENSION,
    SUPPORTED_LOG_FORMATS,
)
from core.errors import SuiteBuildConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


@dataclass(frozen=True)
class BuildConfig:
    """Validated runtime configuration.

    Attributes:
        source_dir: Flat directory of annotated TypeScript sources.
        scripts_dir: Output directory for generated SuiteScript modules.
        objects_dir: Output directory for generated SDF object manifests.
        snapshot_path: JSON file holding fingerprints from the previous run.
        source_extension: File extension used to select source files.
        build_command: External build command run by delta deploys.
        deploy_command: External deploy command run after a build.
        annotation_reader: Name of the annotation reader implementation.
        strict_capabilities: Fail files missing SuiteScript capability tags.
        log_format: Log renderer, ``console`` or ``json``.
    """

    source_dir: Path
    scripts_dir: Path
    objects_dir: Path
    snapshot_path: Path
    source_extension: str
    build_command: tuple[str, ...]
    deploy_command: tuple[str, ...]
    annotation_reader: str = DEFAULT_ANNOTATION_READER
    strict_capabilities: bool = False
    log_format: str = DEFAULT_LOG_FORMAT

    @classmethod
    def from_env(cls) -> "BuildConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SuiteBuildConfigError: If environment values are invalid.
        """
        log_format = os.getenv("SUITEBUILD_LOG_FORMAT", DEFAULT_LOG_FORMAT)
        if log_format not in SUPPORTED_LOG_FORMATS:
            raise SuiteBuildConfigError(
                f"Invalid SUITEBUILD_LOG_FORMAT value '{log_format}'. "
                f"Use one of: {', '.join(SUPPORTED_LOG_FORMATS)}."
            )
        return cls(
            source_dir=_resolve_path(os.getenv("SUITEBUILD_SOURCE_DIR"), DEFAULT_SOURCE_DIR),
            scripts_dir=_resolve_path(os.getenv("SUITEBUILD_SCRIPTS_DIR"), DEFAULT_SCRIPTS_DIR),
            objects_dir=_resolve_path(os.getenv("SUITEBUILD_OBJECTS_DIR"), DEFAULT_OBJECTS_DIR),
            snapshot_path=_resolve_path(
                os.getenv("SUITEBUILD_SNAPSHOT_FILE"), DEFAULT_SNAPSHOT_FILE
            ),
            source_extension=parse_source_extension(
                os.getenv("SUITEBUILD_SOURCE_EXTENSION", DEFAULT_SOURCE_EXTENSION)
            ),
            build_command=parse_command(
                os.getenv("SUITEBUILD_BUILD_COMMAND", DEFAULT_BUILD_COMMAND),
                "SUITEBUILD_BUILD_COMMAND",
            ),
            deploy_command=parse_command(
                os.getenv("SUITEBUILD_DEPLOY_COMMAND", DEFAULT_DEPLOY_COMMAND),
                "SUITEBUILD_DEPLOY_COMMAND",
            ),
            annotation_reader=os.getenv("SUITEBUILD_ANNOTATION_READER", DEFAULT_ANNOTATION_READER),
            strict_capabilities=parse_flag(
                os.getenv("SUITEBUILD_STRICT_CAPABILITIES", "false"),
                "SUITEBUILD_STRICT_CAPABILITIES",
            ),
            log_format=log_format,
        )

    def to_env(self) -> dict[str, str]:
        """Render this config as ``SUITEBUILD_*`` environment variables.

        ``BuildConfig.from_env`` over the returned mapping yields an equal
        config, so child processes see the same resolved settings.
        """
        return {
            "SUITEBUILD_SOURCE_DIR": str(self.source_dir),
            "SUITEBUILD_SCRIPTS_DIR": str(self.scripts_dir),
            "SUITEBUILD_OBJECTS_DIR": str(self.objects_dir),
            "SUITEBUILD_SNAPSHOT_FILE": str(self.snapshot_path),
            "SUITEBUILD_SOURCE_EXTENSION": self.source_extension,
            "SUITEBUILD_BUILD_COMMAND": shlex.join(self.build_command),
            "SUITEBUILD_DEPLOY_COMMAND": shlex.join(self.deploy_command),
            "SUITEBUILD_ANNOTATION_READER": self.annotation_reader,
            "SUITEBUILD_STRICT_CAPABILITIES": "true" if self.strict_capabilities else "false",
            "SUITEBUILD_LOG_FORMAT": self.log_format,
        }


def parse_command(raw_value: str, setting_name: str) -> tuple[str, ...]:
    """Split a shell-style command string into an argument vector.

    Args:
        raw_value: Command string, e.g. ``suitecloud project:deploy``.
        setting_name: Setting name used in error messages.

    Returns:
        Non-empty argument tuple.

    Raises:
        SuiteBuildConfigError: If the value is empty or has unbalanced quotes.
    """
    try:
        argv = tuple(shlex.split(raw_value))
    except ValueError as error:
        raise SuiteBuildConfigError(
            f"Invalid {setting_name} value '{raw_value}': {error}. "
            "Check quoting in the command string."
        ) from error
    if not argv:
        raise SuiteBuildConfigError(
            f"Invalid {setting_name} value: command is empty. Provide an executable name."
        )
    return argv


def parse_flag(raw_value: str, setting_name: str) -> bool:
    """Parse a boolean-like setting value.

    Raises:
        SuiteBuildConfigError: If value is not a recognised boolean literal.
    """
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise SuiteBuildConfigError(
        f"Invalid {setting_name} value: expected true/false, got '{raw_value}'."
    )


def parse_source_extension(raw_value: str) -> str:
    """Normalize a source extension so it always starts with a dot."""
    extension = raw_value.strip()
    if not extension or extension == ".":
        raise SuiteBuildConfigError(
            "Invalid SUITEBUILD_SOURCE_EXTENSION value: extension is empty. Use e.g. '.ts'."
        )
    return extension if extension.startswith(".") else f".{extension}"


def _resolve_path(raw_value: str | None, default: Path) -> Path:
    value = Path(raw_value) if raw_value else default
    return value.expanduser().resolve()
