"""TypeScript to SuiteScript module transform.

This module strips TypeScript-only syntax with textual rewrites and
wraps the result in the SuiteScript 2.x ``define`` module convention.
It performs no filesystem or network access.
"""

from __future__ import annotations

import re
from typing import Protocol

from core.constants import (
    CAPABILITY_KEYS,
    DEFAULT_MODULE_DESCRIPTION,
    MISSING_CAPABILITY_VALUE,
    MODULE_DEPENDENCIES,
    MODULE_ENTRY_POINT,
)
from core.errors import MissingCapabilityError
from core.types import MetadataMapping

_IMPORT_PATTERN = re.compile(r"import\s+\{[^}]+\}\s+from\s+['\"][^'\"]+['\"];?\s*")
_INTERFACE_PATTERN = re.compile(r"interface\s+\w+\s*\{[^}]*\}")
_TYPE_ALIAS_PATTERN = re.compile(
    r"^[ \t]*(?:export[ \t]+)?type[ \t]+\w+[ \t]*=[^;]*;[ \t]*\n?", re.MULTILINE
)
_TYPE_ANNOTATION_PATTERN = re.compile(r":\s*\w+(\[\])?")
_EXPORT_LIST_PATTERN = re.compile(r"export\s+\{[^}]+\};?\s*\Z")
_UNTYPED_CAST_PATTERN = re.compile(r"\b(\w+)\s+as\s+any\b")


class SyntaxRewriter(Protocol):
    """Capability for rewriting source syntax into target runtime syntax."""

    def rewrite(self, text: str) -> str:
        """Return text with source-only syntax removed."""
        ...


class RegexSyntaxRewriter:
    """Pattern-based TypeScript syntax stripper.

    Rewrites apply in a fixed order: imports, interface and type alias
    declarations, type annotations, the trailing export list, and
    ``x as any`` casts.
    """

    def rewrite(self, text: str) -> str:
        rewritten = _IMPORT_PATTERN.sub("", text)
        rewritten = _INTERFACE_PATTERN.sub("", rewritten)
        rewritten = _TYPE_ALIAS_PATTERN.sub("", rewritten)
        rewritten = _TYPE_ANNOTATION_PATTERN.sub("", rewritten)
        rewritten = _EXPORT_LIST_PATTERN.sub("", rewritten)
        return _UNTYPED_CAST_PATTERN.sub(r"\1", rewritten)


def missing_capabilities(metadata: MetadataMapping) -> tuple[str, ...]:
    """Return SuiteScript capability tags absent from metadata."""
    return tuple(key for key in CAPABILITY_KEYS if key not in metadata)


def transform_source(
    text: str,
    metadata: MetadataMapping,
    rewriter: SyntaxRewriter | None = None,
    strict_capabilities: bool = False,
) -> str:
    """Transform TypeScript source into a loadable SuiteScript module.

    Args:
        text: Raw TypeScript source text.
        metadata: Annotation tags extracted from the same text.
        rewriter: Syntax rewriter, regex-based when omitted.
        strict_capabilities: Raise instead of rendering ``undefined``
            for missing capability tags.

    Returns:
        SuiteScript module text.

    Raises:
        MissingCapabilityError: In strict mode when a capability tag is absent.
    """
    missing = missing_capabilities(metadata)
    if strict_capabilities and missing:
        raise MissingCapabilityError(
            f"Source is missing SuiteScript capability tags: {', '.join(missing)}. "
            "Add them to the header comment or disable strict capabilities."
        )
    body = (rewriter or RegexSyntaxRewriter()).rewrite(text)
    return render_module(body, metadata)


def render_module(body: str, metadata: MetadataMapping) -> str:
    """Wrap a rewritten body in the SuiteScript module template."""
    description = metadata.get("description") or DEFAULT_MODULE_DESCRIPTION
    header_lines = ["/**", f" * {description}"]
    for key in CAPABILITY_KEYS:
        header_lines.append(f" * @{key} {metadata.get(key, MISSING_CAPABILITY_VALUE)}")
    header_lines.append(" */")
    module_paths = ", ".join(f"'{path}'" for path, _ in MODULE_DEPENDENCIES)
    parameters = ", ".join(name for _, name in MODULE_DEPENDENCIES)
    return "\n".join(
        [
            *header_lines,
            f"define([{module_paths}], function({parameters}) {{",
            "    ",
            body,
            "    ",
            "    return {",
            f"        {MODULE_ENTRY_POINT}: {MODULE_ENTRY_POINT}",
            "    };",
            "});",
        ]
    )
