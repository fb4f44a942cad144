"""SDF ``clientscript`` object generation.

This module maps annotation metadata onto an explicit field set with
named defaults and renders it as SDF object XML. Rendering is a pure
function of the field set so it can be tested in isolation.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from core.constants import (
    DEFAULT_DEPLOYMENT_STATUS,
    DEFAULT_EXECUTION_CONTEXT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MANIFEST_DESCRIPTION,
    DEFAULT_RECORD_TYPE,
    DEFAULT_SCRIPT_NAME,
    DEPLOYMENT_ID_PREFIX,
    FILE_CABINET_SCRIPT_ROOT,
    IDENTITY_KEY,
    MANIFEST_FILE_EXTENSION,
    MODULE_FILE_EXTENSION,
    SCRIPT_ID_PREFIX,
)
from core.errors import MissingIdentityError
from core.types import ClientScriptFields, MetadataMapping

_ATTRIBUTE_ENTITIES = {'"': "&quot;"}


def require_script_id(metadata: MetadataMapping) -> str:
    """Return the identity key value.

    Raises:
        MissingIdentityError: If ``@scriptid`` is absent or blank.
    """
    script_id = metadata.get(IDENTITY_KEY, "")
    if not script_id:
        raise MissingIdentityError(f"No @{IDENTITY_KEY} annotation found.")
    return script_id


def module_file_name(script_id: str) -> str:
    """Return the SuiteScript file name for a script id.

    ``customscript_demo_cs`` becomes ``demo_cs.js``.
    """
    return f"{script_id.removeprefix(SCRIPT_ID_PREFIX)}{MODULE_FILE_EXTENSION}"


def manifest_file_name(script_id: str) -> str:
    """Return the SDF object file name for a script id."""
    return f"{script_id}{MANIFEST_FILE_EXTENSION}"


def default_deployment_id(script_id: str) -> str:
    """Derive a deployment id when ``@deploymentid`` is not annotated."""
    return f"{DEPLOYMENT_ID_PREFIX}{script_id.removeprefix(SCRIPT_ID_PREFIX)}"


def build_client_script_fields(metadata: MetadataMapping) -> ClientScriptFields:
    """Resolve manifest fields from metadata, applying defaults.

    Args:
        metadata: Annotation tags of one source unit.

    Returns:
        Fully populated field set.

    Raises:
        MissingIdentityError: If ``@scriptid`` is absent.
    """
    script_id = require_script_id(metadata)
    return ClientScriptFields(
        script_id=script_id,
        deployment_id=metadata.get("deploymentid") or default_deployment_id(script_id),
        name=metadata.get("scriptname") or DEFAULT_SCRIPT_NAME,
        description=metadata.get("description") or DEFAULT_MANIFEST_DESCRIPTION,
        record_type=metadata.get("recordtype") or DEFAULT_RECORD_TYPE,
        execution_context=metadata.get("executioncontext") or DEFAULT_EXECUTION_CONTEXT,
        log_level=metadata.get("loglevel") or DEFAULT_LOG_LEVEL,
        status=metadata.get("status") or DEFAULT_DEPLOYMENT_STATUS,
        all_roles="T" if metadata.get("allroles") == "true" else "F",
    )


def render_client_script_xml(fields: ClientScriptFields) -> str:
    """Render a ``clientscript`` SDF object document.

    Args:
        fields: Resolved manifest fields.

    Returns:
        XML document text without a trailing newline.
    """
    script_file = f"[{FILE_CABINET_SCRIPT_ROOT}/{module_file_name(fields.script_id)}]"
    lines = [
        f'<clientscript scriptid="{_attr(fields.script_id)}">',
        f"  <description>{escape(fields.description)}</description>",
        "  <isinactive>F</isinactive>",
        f"  <name>{escape(fields.name)}</name>",
        "  <notifyadmins>F</notifyadmins>",
        "  <notifyemails></notifyemails>",
        "  <notifyowner>T</notifyowner>",
        "  <notifyuser>F</notifyuser>",
        f"  <scriptfile>{escape(script_file)}</scriptfile>",
        "  <scriptdeployments>",
        f'    <scriptdeployment scriptid="{_attr(fields.deployment_id)}">',
        "      <allemployees>F</allemployees>",
        "      <alllocalizationcontexts>T</alllocalizationcontexts>",
        "      <allpartners>F</allpartners>",
        f"      <allroles>{fields.all_roles}</allroles>",
        "      <audslctrole></audslctrole>",
        "      <eventtype></eventtype>",
        f"      <executioncontext>{escape(fields.execution_context)}</executioncontext>",
        "      <isdeployed>T</isdeployed>",
        f"      <loglevel>{escape(fields.log_level)}</loglevel>",
        f"      <recordtype>{escape(fields.record_type)}</recordtype>",
        f"      <status>{escape(fields.status)}</status>",
        "    </scriptdeployment>",
        "  </scriptdeployments>",
        "</clientscript>",
    ]
    return "\n".join(lines)


def _attr(value: str) -> str:
    return escape(value, _ATTRIBUTE_ENTITIES)
