from pathlib import Path

import pytest
import yaml

from recordnorm.config import get_settings, parse_bool, reset_settings, write_default_config


def test_defaults_without_environment() -> None:
    settings = get_settings(refresh=True)
    assert settings.input_path is None
    assert settings.output_path is None
    assert settings.delimiter == ","
    assert settings.include_header is True
    assert settings.sort_enabled is True
    assert settings.as_dict()["source"] == "environment"


def test_environment_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RECORDNORM_INPUT", str(tmp_path / "in.json"))
    monkeypatch.setenv("RECORDNORM_DELIMITER", ";")
    monkeypatch.setenv("RECORDNORM_INCLUDE_HEADER", "no")
    monkeypatch.setenv("RECORDNORM_SORT_ENABLED", "0")
    settings = get_settings(refresh=True)
    assert settings.input_path == tmp_path / "in.json"
    assert settings.delimiter == ";"
    assert settings.include_header is False
    assert settings.sort_enabled is False


def test_toml_file_with_relative_paths(tmp_path: Path) -> None:
    config = tmp_path / "recordnorm.toml"
    config.write_text(
        "\n".join(
            [
                "[paths]",
                'input = "data/in.json"',
                'output = "out/people.csv"',
                "[csv]",
                'delimiter = "|"',
                "include_header = false",
                "[conversion]",
                'sort_enabled = "yes"',
            ]
        ),
        encoding="utf-8",
    )
    settings = get_settings(config_file=config)
    assert settings.input_path == tmp_path.resolve() / "data" / "in.json"
    assert settings.output_path == tmp_path.resolve() / "out" / "people.csv"
    assert settings.delimiter == "|"
    assert settings.include_header is False
    assert settings.sort_enabled is True
    assert settings.source == config


def test_environment_wins_over_file(monkeypatch, tmp_path: Path) -> None:
    config = tmp_path / "settings.yaml"
    config.write_text("csv:\n  delimiter: '|'\n", encoding="utf-8")
    monkeypatch.setenv("RECORDNORM_CONFIG_FILE", str(config))
    assert get_settings(refresh=True).delimiter == "|"

    monkeypatch.setenv("RECORDNORM_DELIMITER", ";")
    reset_settings()
    assert get_settings().delimiter == ";"


def test_settings_are_cached(monkeypatch) -> None:
    first = get_settings(refresh=True)
    monkeypatch.setenv("RECORDNORM_DELIMITER", ";")
    assert get_settings() is first
    assert get_settings(refresh=True).delimiter == ";"


def test_default_config_round_trips(tmp_path: Path) -> None:
    target = write_default_config(tmp_path / "conf" / "recordnorm.yaml")
    text = target.read_text(encoding="utf-8")
    assert text.startswith("# recordnorm conversion settings")
    assert yaml.safe_load(text)["csv"] == {"delimiter": ",", "include_header": True}

    settings = get_settings(config_file=target)
    assert settings.input_path is None
    assert settings.delimiter == ","


@pytest.mark.parametrize(
    "raw, expected",
    [("true", True), ("YES", True), ("1", True), ("False", False), ("no", False), ("0", False), (True, True)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw, name="flag") is expected


def test_parse_bool_rejects_other_values(monkeypatch) -> None:
    with pytest.raises(ValueError):
        parse_bool("maybe", name="flag")
    monkeypatch.setenv("RECORDNORM_SORT_ENABLED", "sometimes")
    with pytest.raises(ValueError):
        get_settings(refresh=True)


def test_unsupported_config_format(tmp_path: Path) -> None:
    config = tmp_path / "settings.ini"
    config.write_text("[csv]\n", encoding="utf-8")
    with pytest.raises(ValueError):
        get_settings(config_file=config)
