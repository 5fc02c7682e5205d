import json
from pathlib import Path

import pytest
import yaml

from faultline import ConfigurationError, FaultlineConfig, get_config, load_config, set_config


def test_defaults() -> None:
    config = load_config(environ={})

    assert config == FaultlineConfig()
    assert config.debug_checks is False
    assert config.diagnostic_value_max_length == 200
    assert config.log_level == "WARNING"


def test_yaml_file_with_faultline_section(tmp_path: Path) -> None:
    path = tmp_path / "faultline.yaml"
    path.write_text(yaml.safe_dump({"faultline": {"debug_checks": True, "log_level": "debug"}}))

    config = load_config(path, environ={})

    assert config.debug_checks is True
    assert config.log_level == "DEBUG"


def test_flat_json_file(tmp_path: Path) -> None:
    path = tmp_path / "faultline.json"
    path.write_text(json.dumps({"diagnostic_value_max_length": 50}))

    assert load_config(path, environ={}).diagnostic_value_max_length == 50


def test_environment_overrides_file(tmp_path: Path) -> None:
    path = tmp_path / "faultline.yml"
    path.write_text("debug_checks: true\ndiagnostic_value_max_length: 10\n")

    config = load_config(
        path,
        environ={"FAULTLINE_DEBUG_CHECKS": "off", "FAULTLINE_DIAGNOSTIC_MAX_LENGTH": "30"},
    )

    assert config.debug_checks is False
    assert config.diagnostic_value_max_length == 30


def test_unknown_keys_are_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "faultline.yaml"
    path.write_text("unexpected: 1\n")

    assert load_config(path, environ={}) == FaultlineConfig()
    assert "unexpected" in caplog.text


@pytest.mark.parametrize(
    "environ",
    [
        {"FAULTLINE_DEBUG_CHECKS": "maybe"},
        {"FAULTLINE_DIAGNOSTIC_MAX_LENGTH": "many"},
        {"FAULTLINE_DIAGNOSTIC_MAX_LENGTH": "0"},
        {"FAULTLINE_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_environment_values(environ: dict) -> None:
    with pytest.raises(ConfigurationError):
        load_config(environ=environ)


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError) as caught:
        load_config(tmp_path / "absent.yaml", environ={})

    assert caught.value.path.endswith("absent.yaml")


@pytest.mark.parametrize(
    "name, content",
    [
        ("bad.yaml", "key: [unclosed"),
        ("bad.json", "{not json"),
        ("list.yaml", "- 1\n- 2\n"),
        ("section.yaml", "faultline: 3\n"),
        ("config.toml", "debug_checks = true\n"),
    ],
)
def test_malformed_files(tmp_path: Path, name: str, content: str) -> None:
    path = tmp_path / name
    path.write_text(content)

    with pytest.raises(ConfigurationError):
        load_config(path, environ={})


def test_get_config_reads_environment_after_reset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FAULTLINE_DEBUG_CHECKS", "1")
    set_config(None)

    assert get_config().debug_checks is True

    set_config(FaultlineConfig(log_level="error"))
    assert get_config().log_level == "ERROR"
