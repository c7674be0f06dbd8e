"""
Integration tests for the build_document.py command line.
"""

import importlib.util
import sys
from pathlib import Path

import pytest
from loguru import logger
from omegaconf import OmegaConf
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).parents[2] / "scripts" / "build_document.py"

runner = CliRunner()


def _load_cli():
    spec = importlib.util.spec_from_file_location("build_document_cli", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def cli(tmp_path, monkeypatch):
    module = _load_cli()
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module
    # setup_logger points a sink at the runner's captured stdout; restore the default
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def config_file(tmp_path, config_data):
    path = tmp_path / "config.yaml"
    OmegaConf.save(OmegaConf.create(config_data), path)
    return path


@pytest.mark.integration
def test_no_command_shows_help(cli):
    result = runner.invoke(cli.app, [])

    assert result.exit_code == 0
    assert "build" in result.output


@pytest.mark.integration
def test_build_command(cli, tmp_path, config_file, fixtures_path):
    output = tmp_path / "jane.pdf"

    result = runner.invoke(
        cli.app,
        ["build", str(config_file), str(fixtures_path / "content" / "jane_doe.yaml"), "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes().startswith(b"%PDF")
    assert list((tmp_path / "logs").glob("build_*/render.log"))


@pytest.mark.integration
def test_verbose_build_echoes_debug_records(cli, tmp_path, config_file, fixtures_path):
    content = str(fixtures_path / "content" / "jane_doe.yaml")

    quiet = runner.invoke(cli.app, ["build", str(config_file), content, "-o", str(tmp_path / "quiet.pdf")])
    verbose = runner.invoke(
        cli.app, ["build", str(config_file), content, "-o", str(tmp_path / "verbose.pdf"), "-v"]
    )

    assert quiet.exit_code == 0, quiet.output
    assert verbose.exit_code == 0, verbose.output
    assert "[compose] Skipping section 'hobbies'" not in quiet.output
    assert "[compose] Skipping section 'hobbies'" in verbose.output

    # The log file records debug output either way
    for log_file in (tmp_path / "logs").glob("build_*/render.log"):
        assert "[compose] Skipping section" in log_file.read_text()


@pytest.mark.integration
def test_build_command_legacy(cli, tmp_path, config_file, fixtures_path):
    output = tmp_path / "legacy.pdf"

    result = runner.invoke(
        cli.app,
        [
            "build",
            str(config_file),
            str(fixtures_path / "content" / "legacy_resume.json"),
            "--output",
            str(output),
            "--legacy",
        ],
    )

    assert result.exit_code == 0, result.output
    assert output.exists()


@pytest.mark.integration
def test_build_command_missing_config_exits_nonzero(cli, tmp_path, fixtures_path):
    output = tmp_path / "never.pdf"

    result = runner.invoke(
        cli.app,
        ["build", str(tmp_path / "missing.yaml"), str(fixtures_path / "content" / "jane_doe.yaml"), "-o", str(output)],
    )

    assert result.exit_code == 1
    assert not output.exists()


@pytest.mark.integration
def test_build_command_bad_content_exits_nonzero(cli, tmp_path, config_file):
    content = tmp_path / "content.yaml"
    content.write_text("- not\n- a mapping\n")

    result = runner.invoke(cli.app, ["build", str(config_file), str(content), "-o", str(tmp_path / "x.pdf")])

    assert result.exit_code == 1


@pytest.mark.integration
def test_icons_then_clear_icons(cli, config_file, icon_output_dir):
    result = runner.invoke(cli.app, ["icons", str(config_file)])

    assert result.exit_code == 0, result.output
    assert (icon_output_dir / "envelope_2C3E50_32px.png").exists()
    assert (icon_output_dir / "wide_2C3E50_32px.png").exists()

    result = runner.invoke(cli.app, ["clear-icons", str(config_file)])

    assert result.exit_code == 0
    assert list(icon_output_dir.glob("*.png")) == []


@pytest.mark.integration
def test_icons_with_size_and_color(cli, config_file, icon_output_dir):
    result = runner.invoke(cli.app, ["icons", str(config_file), "--size", "16", "--color", "accent"])

    assert result.exit_code == 0, result.output
    assert (icon_output_dir / "envelope_2980B9_16px.png").exists()


@pytest.mark.integration
def test_icons_missing_config_exits_nonzero(cli, tmp_path):
    result = runner.invoke(cli.app, ["icons", str(tmp_path / "missing.yaml")])
    assert result.exit_code == 1
