"""External build and deploy command execution.

Commands inherit the console streams and are awaited without a
timeout; the exit code is the only success signal.
"""

from __future__ import annotations

import os
from pathlib import Path
import subprocess
from typing import Mapping, Sequence

from core.errors import PipelineCommandError
from core.logging_config import get_logger

_LOGGER = get_logger(__name__)


def run_external_command(
    label: str,
    argv: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> None:
    """Run one external command and fail on non-zero exit.

    Args:
        label: Step name used in logs and errors, e.g. ``build``.
        argv: Command argument vector.
        cwd: Optional working directory.
        env: Extra environment variables layered over the current process env.

    Raises:
        PipelineCommandError: If the executable is missing or exits non-zero.
    """
    command_line = " ".join(argv)
    _LOGGER.info("external_command_started", step=label, command=command_line)
    try:
        completed = subprocess.run(
            list(argv),
            cwd=cwd,
            env={**os.environ, **env} if env else None,
            check=False,
        )
    except OSError as error:
        raise PipelineCommandError(
            f"Failed to start {label} command '{command_line}': {error}. "
            "Check that the executable is installed and on PATH."
        ) from error
    if completed.returncode != 0:
        raise PipelineCommandError(
            f"{label.capitalize()} command '{command_line}' exited with status "
            f"{completed.returncode}."
        )
    _LOGGER.info("external_command_succeeded", step=label, command=command_line)
