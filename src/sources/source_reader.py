"""Annotated source file discovery.

This module lists TypeScript sources in a flat directory and loads
them into typed source units for the transform stages.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.errors import SourceProcessingError
from core.types import SourceUnit
from transforms.annotation_reader import AnnotationReader, NaiveAnnotationReader


def list_source_files(source_dir: Path, extension: str) -> list[Path]:
    """List source files directly inside a directory.

    The listing is not recursive and keeps directory enumeration order.

    Args:
        source_dir: Directory holding annotated sources.
        extension: File extension filter, e.g. ``.ts``.

    Returns:
        Matching file paths.

    Raises:
        SourceProcessingError: If the directory does not exist or cannot be listed.
    """
    if not source_dir.is_dir():
        raise SourceProcessingError(
            f"Source directory {source_dir} does not exist. "
            "Create it or set SUITEBUILD_SOURCE_DIR."
        )
    try:
        file_names = os.listdir(source_dir)
    except OSError as error:
        raise SourceProcessingError(
            f"Failed to list source directory {source_dir}: {error}."
        ) from error
    return [
        source_dir / file_name
        for file_name in file_names
        if file_name.endswith(extension) and (source_dir / file_name).is_file()
    ]


def read_source_unit(source_path: Path, reader: AnnotationReader | None = None) -> SourceUnit:
    """Read one source file and extract its metadata.

    Args:
        source_path: Source file path.
        reader: Annotation reader, naive scan when omitted.

    Returns:
        Source unit with parsed metadata.

    Raises:
        SourceProcessingError: If the file cannot be read as UTF-8 text.
    """
    try:
        text = source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        raise SourceProcessingError(f"Failed to read source {source_path}: {error}.") from error
    metadata = (reader or NaiveAnnotationReader()).extract_metadata(text)
    return SourceUnit(path=source_path, text=text, metadata=metadata)
