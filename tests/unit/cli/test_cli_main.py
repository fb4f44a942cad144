"""Unit tests for CLI command handling."""

from __future__ import annotations

import shlex
import sys

import pytest
import yaml

from cli.main import main
from tests.fixture_paths import fixture_path


@pytest.fixture
def project_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point every SuiteBuild directory into a temporary project."""
    source_dir = tmp_path / "typescript" / "src"
    source_dir.mkdir(parents=True)
    monkeypatch.setenv("SUITEBUILD_SOURCE_DIR", str(source_dir))
    monkeypatch.setenv("SUITEBUILD_SCRIPTS_DIR", str(tmp_path / "scripts"))
    monkeypatch.setenv("SUITEBUILD_OBJECTS_DIR", str(tmp_path / "objects"))
    monkeypatch.setenv("SUITEBUILD_SNAPSHOT_FILE", str(tmp_path / "hashes.json"))
    monkeypatch.setenv("SUITEBUILD_BUILD_COMMAND", f'"{sys.executable}" -c pass')
    monkeypatch.setenv("SUITEBUILD_DEPLOY_COMMAND", f'"{sys.executable}" -c "raise SystemExit(2)"')
    return tmp_path


def test_cli_build_prints_summary(project_env, capsys) -> None:
    """CLI build should write artifacts and print a summary line."""
    (project_env / "typescript" / "src" / "x.ts").write_text(
        "@scriptid customscript_x\n", encoding="utf-8"
    )

    exit_code = main(["build"])
    output = capsys.readouterr().out

    assert exit_code == 0 and "generated=1 skipped=0 failed=0" in output
    assert (project_env / "objects" / "customscript_x.xml").exists()


def test_cli_changes_lists_changed_sources(project_env, capsys) -> None:
    """CLI changes should report new sources on a cold start."""
    (project_env / "typescript" / "src" / "x.ts").write_text("// x\n", encoding="utf-8")

    exit_code = main(["changes"])
    output = capsys.readouterr().out

    assert exit_code == 0 and "changed=1" in output


def test_cli_deploy_returns_error_when_deploy_fails(project_env, capsys) -> None:
    """A failing deploy command should make the CLI exit non-zero."""
    (project_env / "typescript" / "src" / "x.ts").write_text("// x\n", encoding="utf-8")

    exit_code = main(["deploy"])
    output = capsys.readouterr().out

    assert exit_code == 1 and "deployment_failed=" in output


def test_cli_deploy_without_changes_succeeds(project_env, capsys) -> None:
    """With nothing changed the deploy command is never invoked."""
    main(["changes"])
    capsys.readouterr()

    exit_code = main(["deploy"])

    assert exit_code == 0 and "deployed=false" in capsys.readouterr().out


def test_cli_metadata_prints_sorted_tags(capsys) -> None:
    """CLI metadata should print key=value lines in key order."""
    source = fixture_path("sources/automated_demo_client.ts")

    exit_code = main(["metadata", str(source)])
    lines = [line for line in capsys.readouterr().out.splitlines() if "=" in line]

    assert exit_code == 0
    assert "scriptid=customscript_automated_demo_cs" in lines


def test_cli_reports_config_errors(monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    """Invalid configuration should be reported with exit code 1."""
    monkeypatch.setenv("SUITEBUILD_STRICT_CAPABILITIES", "maybe")

    exit_code = main(["changes"])

    assert exit_code == 1 and "error=" in capsys.readouterr().out


def test_cli_deploy_passes_project_file_config_to_build(tmp_path, capsys) -> None:
    """The build step of a deploy should see paths from --config."""
    project_dir = tmp_path / "proj"
    (project_dir / "ts").mkdir(parents=True)
    (project_dir / "ts" / "x.ts").write_text("@scriptid customscript_x\n", encoding="utf-8")
    src_root = fixture_path("").parent.parent / "src"
    build_code = (
        f"import sys; sys.path.insert(0, {str(src_root)!r}); "
        "from cli.main import main; raise SystemExit(main(['build', '--fail-on-error']))"
    )
    spec_file = project_dir / "suitebuild.yaml"
    spec_file.write_text(
        yaml.safe_dump(
            {
                "version": 1,
                "paths": {
                    "source_dir": "ts",
                    "scripts_dir": "out/scripts",
                    "objects_dir": "out/objects",
                    "snapshot_file": "out/hashes.json",
                },
                "commands": {
                    "build": shlex.join([sys.executable, "-c", build_code]),
                    "deploy": shlex.join([sys.executable, "-c", "pass"]),
                },
            }
        ),
        encoding="utf-8",
    )

    exit_code = main(["--config", str(spec_file), "deploy"])

    assert exit_code == 0 and "deployed=true" in capsys.readouterr().out
    assert (project_dir / "out" / "scripts" / "x.js").exists()
    assert (project_dir / "out" / "objects" / "customscript_x.xml").exists()
