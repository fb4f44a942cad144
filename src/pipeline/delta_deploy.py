"""Delta deploy orchestration.

This module runs change detection and, only when sources changed,
invokes the external build command followed by the external deploy
command. Both commands receive the resolved config as ``SUITEBUILD_*``
environment variables. Failure of either command aborts the run.
"""

from __future__ import annotations

from core.config import BuildConfig
from core.logging_config import get_logger
from core.types import DeltaDeployResult
from pipeline.change_tracker import detect_changes
from pipeline.external_commands import run_external_command

_LOGGER = get_logger(__name__)


class DeltaDeployRunner:
    """Runner for change-gated build and deploy."""

    def __init__(self, config: BuildConfig) -> None:
        self._config = config

    def run(self) -> DeltaDeployResult:
        """Deploy only when sources changed since the previous run.

        Returns:
            Changed paths and whether commands were executed.

        Raises:
            PipelineCommandError: If the build or deploy command fails.
        """
        _LOGGER.info("delta_deploy_started", source_dir=str(self._config.source_dir))
        detection = detect_changes(
            self._config.source_dir,
            self._config.snapshot_path,
            self._config.source_extension,
        )
        if not detection.changed_paths:
            _LOGGER.info("no_changes_detected", action="skipping deployment")
            return DeltaDeployResult(changed_paths=detection.changed_paths, deployed=False)
        _LOGGER.info("changes_detected", count=len(detection.changed_paths))
        command_env = self._config.to_env()
        run_external_command("build", self._config.build_command, env=command_env)
        run_external_command("deploy", self._config.deploy_command, env=command_env)
        _LOGGER.info("delta_deploy_complete", changed=len(detection.changed_paths))
        return DeltaDeployResult(changed_paths=detection.changed_paths, deployed=True)
