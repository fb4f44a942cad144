"""Public SDK surface for SuiteBuild.

This module provides a stable import path for scripted use.
It re-exports the pipeline runners and typed models.
"""

from __future__ import annotations

from core.build_spec import load_build_spec
from core.config import BuildConfig
from core.types import (
    BuildReport,
    ChangeDetectionResult,
    ClientScriptFields,
    DeltaDeployResult,
    GeneratedArtifacts,
    SourceUnit,
)
from manifests.client_script import build_client_script_fields, render_client_script_xml
from pipeline.build_pipeline import BuildPipelineRunner, run_build
from pipeline.change_tracker import detect_changes
from pipeline.delta_deploy import DeltaDeployRunner
from transforms.annotation_reader import build_annotation_reader
from transforms.source_rewriter import transform_source

__all__ = [
    "BuildConfig",
    "BuildPipelineRunner",
    "BuildReport",
    "ChangeDetectionResult",
    "ClientScriptFields",
    "DeltaDeployResult",
    "DeltaDeployRunner",
    "GeneratedArtifacts",
    "SourceUnit",
    "build_annotation_reader",
    "build_client_script_fields",
    "detect_changes",
    "load_build_spec",
    "render_client_script_xml",
    "run_build",
    "transform_source",
]
