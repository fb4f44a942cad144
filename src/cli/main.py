"""SuiteBuild CLI entry points.
This module exposes build, change detection, and delta deploy commands.
It maps argparse commands onto pipeline runners.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.build_spec import load_build_spec
from core.config import BuildConfig
from core.constants import SUPPORTED_LOG_FORMATS
from core.errors import PipelineCommandError, SuiteBuildError
from core.logging_config import configure_logging
from pipeline.build_pipeline import BuildPipelineRunner
from pipeline.change_tracker import detect_changes
from pipeline.delta_deploy import DeltaDeployRunner
from sources.source_reader import read_source_unit
from transforms.annotation_reader import build_annotation_reader, supported_annotation_readers


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="suitebuild",
        description="Build SuiteScript modules and SDF objects from annotated TypeScript",
    )
    parser.add_argument("--config", help="Optional suitebuild.yaml project file")
    parser.add_argument(
        "--log-format",
        choices=SUPPORTED_LOG_FORMATS,
        help="Override SUITEBUILD_LOG_FORMAT for this command",
    )
    parser.add_argument(
        "--annotation-reader",
        choices=supported_annotation_readers(),
        help="Override SUITEBUILD_ANNOTATION_READER for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_build_command(subparsers)
    _add_changes_command(subparsers)
    _add_deploy_command(subparsers)
    _add_metadata_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the SuiteBuild CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args)
        configure_logging(config.log_format)
        if args.command == "build":
            return _run_build_command(config, args)
        if args.command == "changes":
            return _run_changes_command(config)
        if args.command == "deploy":
            return _run_deploy_command(config)
        if args.command == "metadata":
            return _run_metadata_command(config, args)
    except PipelineCommandError as error:
        print(f"deployment_failed={error}")
        return 1
    except SuiteBuildError as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(args: argparse.Namespace) -> BuildConfig:
    """Build config from env, project file, and CLI overrides."""
    config = BuildConfig.from_env()
    if args.config:
        config = load_build_spec(args.config, config)
    if args.log_format:
        config = replace(config, log_format=args.log_format)
    if args.annotation_reader:
        config = replace(config, annotation_reader=args.annotation_reader)
    return config


def _run_build_command(config: BuildConfig, args: argparse.Namespace) -> int:
    """Handle build command."""
    report = BuildPipelineRunner(config).run()
    for artifact in report.artifacts:
        print(f"{artifact.script_id}\t{artifact.module_path}\t{artifact.manifest_path}")
    for skipped_path in report.skipped_paths:
        print(f"skipped\t{skipped_path}")
    for failed_path in report.failed_paths:
        print(f"failed\t{failed_path}")
    print(
        f"generated={len(report.artifacts)} "
        f"skipped={len(report.skipped_paths)} "
        f"failed={len(report.failed_paths)}"
    )
    if args.fail_on_error and report.failed_paths:
        return 1
    return 0


def _run_changes_command(config: BuildConfig) -> int:
    """Handle changes command."""
    result = detect_changes(config.source_dir, config.snapshot_path, config.source_extension)
    for path in sorted(result.changed_paths):
        print(path)
    print(f"changed={len(result.changed_paths)}")
    return 0


def _run_deploy_command(config: BuildConfig) -> int:
    """Handle deploy command."""
    result = DeltaDeployRunner(config).run()
    print(f"changed={len(result.changed_paths)} deployed={str(result.deployed).lower()}")
    return 0


def _run_metadata_command(config: BuildConfig, args: argparse.Namespace) -> int:
    """Handle metadata command."""
    reader = build_annotation_reader(config.annotation_reader)
    unit = read_source_unit(Path(args.source), reader)
    for key in sorted(unit.metadata):
        print(f"{key}={unit.metadata[key]}")
    return 0


def _add_build_command(subparsers: Any) -> None:
    """Register build subcommand."""
    parser = subparsers.add_parser("build", help="Generate modules and manifests for all sources")
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit non-zero when any source file fails to build",
    )


def _add_changes_command(subparsers: Any) -> None:
    """Register changes subcommand."""
    subparsers.add_parser("changes", help="List sources changed since the previous run")


def _add_deploy_command(subparsers: Any) -> None:
    """Register deploy subcommand."""
    subparsers.add_parser(
        "deploy",
        help="Build and deploy only when sources changed since the previous run",
    )


def _add_metadata_command(subparsers: Any) -> None:
    """Register metadata subcommand."""
    parser = subparsers.add_parser("metadata", help="Print annotation metadata of one source")
    parser.add_argument("source", help="Source file path")
