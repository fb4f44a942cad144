"""Annotation readers for SuiteScript source metadata.

This module extracts ``@tag value`` pairs that drive module headers,
file names, and SDF manifests. Readers share one small protocol so a
real TypeScript parser can replace the textual scan without touching
the pipeline.
"""

from __future__ import annotations

from collections import Counter
import re
from typing import Iterator, Protocol

from core.constants import DEFAULT_ANNOTATION_READER
from core.errors import SuiteBuildConfigError

_ANNOTATION_PATTERN = re.compile(r"@(\w+)\s+(.+)")
_DOC_COMMENT_PATTERN = re.compile(r"/\*\*.*?\*/", re.DOTALL)
# One tag per line; a closing ``*/`` on the same line is not part of the value.
_DOC_TAG_PATTERN = re.compile(r"@(\w+)[ \t]+(.+?)[ \t]*(?:\*/)?$", re.MULTILINE)


class AnnotationReader(Protocol):
    """Capability for pulling annotation tags out of source text."""

    def iter_annotations(self, text: str) -> Iterator[tuple[str, str]]:
        """Yield ``(tag, value)`` pairs in source order."""
        ...

    def extract_metadata(self, text: str) -> dict[str, str]:
        """Return a tag-to-value mapping for the text."""
        ...


class NaiveAnnotationReader:
    """Scan the whole text for ``@tag value`` matches.

    The scan does not understand comment grammar, so tag-like text in
    string literals is extracted too. When a tag repeats, the last
    occurrence wins.
    """

    def iter_annotations(self, text: str) -> Iterator[tuple[str, str]]:
        for match in _ANNOTATION_PATTERN.finditer(text):
            yield match.group(1), match.group(2).strip()

    def extract_metadata(self, text: str) -> dict[str, str]:
        metadata: dict[str, str] = {}
        for tag, value in self.iter_annotations(text):
            metadata[tag] = value
        return metadata


class DocCommentAnnotationReader(NaiveAnnotationReader):
    """Scan only inside ``/** ... */`` documentation blocks."""

    def iter_annotations(self, text: str) -> Iterator[tuple[str, str]]:
        for block in _DOC_COMMENT_PATTERN.finditer(text):
            for match in _DOC_TAG_PATTERN.finditer(block.group(0)):
                yield match.group(1), match.group(2).strip()


_READERS: dict[str, type[NaiveAnnotationReader]] = {
    "naive": NaiveAnnotationReader,
    "doc-comment": DocCommentAnnotationReader,
}


def supported_annotation_readers() -> tuple[str, ...]:
    """Return registered reader names."""
    return tuple(_READERS)


def build_annotation_reader(name: str = DEFAULT_ANNOTATION_READER) -> AnnotationReader:
    """Instantiate an annotation reader by name.

    Args:
        name: Registered reader name.

    Returns:
        Reader instance.

    Raises:
        SuiteBuildConfigError: If the name is not registered.
    """
    reader_type = _READERS.get(name)
    if reader_type is None:
        raise SuiteBuildConfigError(
            f"Unsupported annotation reader '{name}'. "
            f"Use one of: {', '.join(supported_annotation_readers())}."
        )
    return reader_type()


def find_duplicate_tags(text: str, reader: AnnotationReader) -> tuple[str, ...]:
    """Return tags that occur more than once, in first-seen order."""
    counts = Counter(tag for tag, _ in reader.iter_annotations(text))
    return tuple(tag for tag, count in counts.items() if count > 1)
