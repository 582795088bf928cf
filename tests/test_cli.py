from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest
from click.testing import CliRunner

from coffdump.cli import coffdump_cli

LABELS = ["[Header]", "[Sections]", "[Relocation information]", "[Symbol Table]"]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_text_dump(runner, minimal_path):
    result = runner.invoke(coffdump_cli, [str(minimal_path)])
    assert result.exit_code == 0, result.output
    out = result.stdout
    positions = [out.index(label) for label in LABELS]
    assert positions == sorted(positions)
    assert out.count("scnum 1\n") == 1
    assert out.count("  scnum : 1 ") == 2
    assert "_main" in out


def test_no_arguments_is_usage_error(runner):
    result = runner.invoke(coffdump_cli, [])
    assert result.exit_code == 2
    assert "[Header]" not in result.stdout


def test_extra_argument_is_usage_error(runner, minimal_path):
    result = runner.invoke(coffdump_cli, [str(minimal_path), str(minimal_path)])
    assert result.exit_code == 2
    assert "[Header]" not in result.stdout


def test_missing_file_fails_without_output(runner, tmp_path):
    result = runner.invoke(coffdump_cli, [str(tmp_path / "absent.o")])
    assert result.exit_code == 1
    assert result.stdout == ""
    assert "Cannot open" in result.stderr


def test_truncated_file_fails_without_partial_output(runner, tmp_path, minimal_object):
    path = tmp_path / "cut.o"
    path.write_bytes(minimal_object[:-10])
    result = runner.invoke(coffdump_cli, [str(path)])
    assert result.exit_code == 1
    assert result.stdout == ""
    assert "phase=symbols" in result.stderr


def test_json_format(runner, minimal_path):
    result = runner.invoke(coffdump_cli, [str(minimal_path), "--format", "json"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["image"]["header"]["num_sections"] == 1
    assert len(data["image"]["relocations"][0]) == 2


def test_table_format_from_config(runner, tmp_path, minimal_path):
    config = tmp_path / "config.toml"
    config.write_text('[coffdump]\noutput_format = "table"\n')
    result = runner.invoke(coffdump_cli, [str(minimal_path), "-c", str(config)])
    assert result.exit_code == 0, result.output
    assert "2 relocations" in result.stdout


def test_invalid_config_is_reported(runner, tmp_path, minimal_path):
    config = tmp_path / "config.toml"
    config.write_text('[coffdump]\noutput_format = "xml"\n')
    result = runner.invoke(coffdump_cli, [str(minimal_path), "-c", str(config)])
    assert result.exit_code == 1
    assert "Invalid configuration" in result.stderr


def test_output_report_written(runner, tmp_path, minimal_path):
    report = tmp_path / "report.json"
    result = runner.invoke(coffdump_cli, [str(minimal_path), "-o", str(report)])
    assert result.exit_code == 0, result.output
    assert "[Header]" in result.stdout
    assert json.loads(report.read_text())["image"]["symbols"][0]["name"]["text"] == "_main"


def test_bad_address_width_is_reported(runner, tmp_path, minimal_path):
    config = tmp_path / "config.toml"
    config.write_text('[coffdump]\naddress_width = "wide"\n')
    result = runner.invoke(coffdump_cli, [str(minimal_path), "-c", str(config)])
    assert result.exit_code == 1
    assert result.stdout == ""
    assert "address_width" in result.stderr


def test_log_file_has_single_handler(runner, tmp_path, minimal_path):
    log_path = tmp_path / "coffdump.log"
    config = tmp_path / "config.toml"
    config.write_text(
        f'[global]\nlog_file = "{log_path.as_posix()}"\nlog_json = true\n'
    )
    result = runner.invoke(coffdump_cli, [str(minimal_path), "-c", str(config), "-v"])
    assert result.exit_code == 0, result.output

    handlers = [
        handler
        for name, obj in logging.Logger.manager.loggerDict.items()
        if name.startswith("coffdump.") and isinstance(obj, logging.Logger)
        for handler in obj.handlers
        if isinstance(handler, RotatingFileHandler)
        and handler.baseFilename == str(log_path)
    ]
    assert len(handlers) == 1
    handlers[0].close()

    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    assert any(r["message"].startswith("Decoded 1 section headers") for r in records)
    assert {r["operation"] for r in records if "operation" in r} >= {"header", "symbols"}
