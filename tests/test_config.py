from __future__ import annotations

import tomllib

import pytest

from shared.config import CoffdumpConfig, DumpConfig, GlobalConfig


def test_defaults():
    config = CoffdumpConfig()
    assert config.dump == DumpConfig()
    assert config.dump.output_format == "text"
    assert config.dump.address_width == 6
    assert config.global_settings.log_level == "INFO"
    assert config.global_settings.log_file == ""


def test_load_tables(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(
        '[global]\nlog_level = "DEBUG"\nlog_json = true\n\n'
        '[coffdump]\noutput_format = "table"\nannotate = false\naddress_width = 8\n'
    )
    config = CoffdumpConfig.load(path)
    assert config.global_settings == GlobalConfig(log_level="DEBUG", log_json=True)
    assert config.dump.output_format == "table"
    assert config.dump.annotate is False
    assert config.dump.show_raw_names is True
    assert config.dump.address_width == 8


def test_unknown_keys_ignored(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[coffdump]\ncolour = "always"\n\n[other]\nkey = 1\n')
    assert CoffdumpConfig.load(path) == CoffdumpConfig()


def test_explicit_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CoffdumpConfig.load(tmp_path / "nope.toml")


def test_unknown_output_format(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[coffdump]\noutput_format = "html"\n')
    with pytest.raises(ValueError, match="html"):
        CoffdumpConfig.load(path)


def test_malformed_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[coffdump\n")
    with pytest.raises(tomllib.TOMLDecodeError):
        CoffdumpConfig.load(path)


def test_to_dict():
    data = CoffdumpConfig().to_dict()
    assert data["dump"]["output_format"] == "text"
    assert data["global_settings"]["log_json"] is False


@pytest.mark.parametrize(
    "table, line",
    [
        ("coffdump", 'address_width = "wide"'),
        ("coffdump", "address_width = true"),
        ("coffdump", 'annotate = "yes"'),
        ("coffdump", "show_raw_names = 1"),
        ("global", "log_json = 0"),
        ("global", "log_level = 10"),
    ],
)
def test_wrongly_typed_values_rejected(tmp_path, table, line):
    path = tmp_path / "config.toml"
    path.write_text(f"[{table}]\n{line}\n")
    key = line.split(" =")[0]
    with pytest.raises(ValueError, match=key):
        CoffdumpConfig.load(path)


def test_negative_address_width_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[coffdump]\naddress_width = -2\n")
    with pytest.raises(ValueError, match="address_width"):
        CoffdumpConfig.load(path)


def test_non_table_section_rejected(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('coffdump = "table"\n')
    with pytest.raises(ValueError):
        CoffdumpConfig.load(path)
