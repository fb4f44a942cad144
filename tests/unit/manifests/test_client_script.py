"""Unit tests for clientscript manifest generation."""

from __future__ import annotations

from dataclasses import replace

import pytest

from core.errors import MissingIdentityError
from manifests.client_script import (
    build_client_script_fields,
    manifest_file_name,
    module_file_name,
    render_client_script_xml,
)
from tests.fixture_paths import fixture_path


def test_build_fields_applies_documented_defaults() -> None:
    """Only the identity key set should yield every default value."""
    fields = build_client_script_fields({"scriptid": "customscript_x"})

    assert fields.description == "Generated from TypeScript"
    assert fields.name == "Auto-generated Script"
    assert fields.record_type == "SALESORDER"
    assert fields.execution_context == "USERINTERFACE"
    assert fields.log_level == "DEBUG"
    assert fields.status == "RELEASED"
    assert fields.all_roles == "F"
    assert fields.deployment_id == "customdeploy_x"


def test_render_defaults_matches_expected_document() -> None:
    """An identity-only mapping should render the full default document."""
    expected = fixture_path("manifests/customscript_x_defaults.xml").read_text(encoding="utf-8")

    xml_text = render_client_script_xml(build_client_script_fields({"scriptid": "customscript_x"}))

    assert xml_text == expected.rstrip("\n")


def test_build_fields_prefers_metadata_values() -> None:
    """Annotated values should override defaults."""
    fields = build_client_script_fields(
        {
            "scriptid": "customscript_x",
            "deploymentid": "customdeploy_custom",
            "recordtype": "INVOICE",
            "allroles": "true",
        }
    )

    assert (fields.deployment_id, fields.record_type, fields.all_roles) == (
        "customdeploy_custom",
        "INVOICE",
        "T",
    )


def test_build_fields_only_literal_true_grants_all_roles() -> None:
    """Values other than the literal ``true`` should map to F."""
    fields = build_client_script_fields({"scriptid": "customscript_x", "allroles": "TRUE"})

    assert fields.all_roles == "F"


def test_build_fields_requires_script_id() -> None:
    """Metadata without @scriptid should be rejected."""
    with pytest.raises(MissingIdentityError):
        build_client_script_fields({"NApiVersion": "2.1"})


def test_render_xml_references_script_file() -> None:
    """Manifest should point to the module inside the SuiteScripts folder."""
    xml = render_client_script_xml(build_client_script_fields({"scriptid": "customscript_x"}))

    assert xml.startswith('<clientscript scriptid="customscript_x">')
    assert "<scriptfile>[/SuiteScripts/x.js]</scriptfile>" in xml
    assert "<recordtype>SALESORDER</recordtype>" in xml
    assert '<scriptdeployment scriptid="customdeploy_x">' in xml


def test_render_xml_escapes_text_values() -> None:
    """Markup characters in metadata should not break the document."""
    fields = replace(
        build_client_script_fields({"scriptid": "customscript_x"}),
        description="Orders & <Invoices>",
    )

    assert "<description>Orders &amp; &lt;Invoices&gt;</description>" in render_client_script_xml(
        fields
    )


def test_file_names_strip_prefix_for_module_only() -> None:
    """Module names drop the customscript_ prefix; manifests keep the id."""
    assert module_file_name("customscript_demo_cs") == "demo_cs.js"
    assert manifest_file_name("customscript_demo_cs") == "customscript_demo_cs.xml"
