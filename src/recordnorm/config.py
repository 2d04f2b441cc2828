"""Centralized configuration for recordnorm conversions.

This module exposes :func:`get_settings` returning the resolved conversion
options (input/output paths, CSV formatting, sorting, log destination).
Every option can be customized via environment variables or by pointing
``RECORDNORM_CONFIG_FILE`` to a TOML/YAML document; environment variables
win over the file, the file wins over the defaults.
"""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

__all__ = [
    "ConversionSettings",
    "get_settings",
    "parse_bool",
    "reset_settings",
    "write_default_config",
]

DEFAULT_DELIMITER = ","

_TRUE_VALUES = frozenset({"true", "yes", "1"})
_FALSE_VALUES = frozenset({"false", "no", "0"})

_CONFIG_CACHE: Optional["ConversionSettings"] = None
_CONFIG_SOURCE: Optional[Path] = None


@dataclass(frozen=True)
class ConversionSettings:
    """Resolved options for a JSON → CSV normalization run."""

    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    delimiter: str = DEFAULT_DELIMITER
    include_header: bool = True
    sort_enabled: bool = True
    log_file: Optional[Path] = None
    source: Optional[Path] = None

    def as_dict(self) -> Dict[str, Any]:
        """Expose the settings as JSON-friendly values (useful for logging)."""

        return {
            "input": str(self.input_path) if self.input_path else None,
            "output": str(self.output_path) if self.output_path else None,
            "delimiter": self.delimiter,
            "include_header": self.include_header,
            "sort_enabled": self.sort_enabled,
            "log_file": str(self.log_file) if self.log_file else None,
            "source": str(self.source) if self.source else "environment",
        }


def parse_bool(value: Any, *, name: str) -> bool:
    """Interpret ``true/false/yes/no/1/0`` (any case) as a boolean."""

    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")


def _normalize_path(value: Optional[str | Path], *, base: Optional[Path]) -> Optional[Path]:
    if value is None or value == "":
        return None
    candidate = Path(value).expanduser()
    if not candidate.is_absolute() and base is not None:
        candidate = base / candidate
    return candidate


def _load_config_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file '{path}' does not exist")
    suffix = path.suffix.lower()
    if suffix == ".toml":
        with path.open("rb") as handle:
            return tomllib.load(handle)
    if suffix in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            loaded = yaml.safe_load(handle)
            return loaded or {}
    raise ValueError(f"Unsupported config file format: '{suffix}'")


def _section(source: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = source.get(key)
    if not isinstance(value, Mapping):
        return {}
    return value


def _build_settings(config_file: Optional[Path]) -> ConversionSettings:
    config_data: Mapping[str, Any] = {}
    config_dir: Optional[Path] = None
    if config_file is not None:
        config_data = _load_config_file(config_file)
        config_dir = config_file.resolve().parent

    paths_section = _section(config_data, "paths")
    csv_section = _section(config_data, "csv")
    conversion_section = _section(config_data, "conversion")
    logging_section = _section(config_data, "logging")

    env = os.environ

    delimiter = env.get("RECORDNORM_DELIMITER") or csv_section.get("delimiter") or DEFAULT_DELIMITER

    include_header_raw = env.get("RECORDNORM_INCLUDE_HEADER", csv_section.get("include_header", True))
    sort_enabled_raw = env.get("RECORDNORM_SORT_ENABLED", conversion_section.get("sort_enabled", True))

    return ConversionSettings(
        input_path=_normalize_path(env.get("RECORDNORM_INPUT") or paths_section.get("input"), base=config_dir),
        output_path=_normalize_path(env.get("RECORDNORM_OUTPUT") or paths_section.get("output"), base=config_dir),
        delimiter=str(delimiter),
        include_header=parse_bool(include_header_raw, name="csv.include_header"),
        sort_enabled=parse_bool(sort_enabled_raw, name="conversion.sort_enabled"),
        log_file=_normalize_path(env.get("RECORDNORM_LOG_FILE") or logging_section.get("file"), base=config_dir),
        source=config_file,
    )


def get_settings(*, refresh: bool = False, config_file: str | Path | None = None) -> ConversionSettings:
    """Return the cached :class:`ConversionSettings`.

    Parameters
    ----------
    refresh:
        When ``True`` the cached configuration is discarded and recomputed.
    config_file:
        Optional explicit path to the configuration document. When provided the
        returned instance is not cached globally, allowing callers (e.g. tests)
        to override settings temporarily.
    """

    global _CONFIG_CACHE, _CONFIG_SOURCE

    if config_file is not None:
        return _build_settings(Path(config_file).expanduser())

    env_path = os.getenv("RECORDNORM_CONFIG_FILE")
    source_path = Path(env_path).expanduser() if env_path else None

    if refresh or _CONFIG_CACHE is None or _CONFIG_SOURCE != source_path:
        _CONFIG_CACHE = _build_settings(source_path)
        _CONFIG_SOURCE = source_path

    return _CONFIG_CACHE


def reset_settings() -> None:
    """Clear the cached configuration (mainly useful for tests)."""

    global _CONFIG_CACHE, _CONFIG_SOURCE
    _CONFIG_CACHE = None
    _CONFIG_SOURCE = None


def write_default_config(path: str | Path) -> Path:
    """Write a YAML configuration file populated with the defaults."""

    target = Path(path)
    payload = {
        "paths": {"input": "", "output": ""},
        "csv": {"delimiter": DEFAULT_DELIMITER, "include_header": True},
        "conversion": {"sort_enabled": True},
        "logging": {"file": ""},
    }
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        handle.write("# recordnorm conversion settings\n")
        yaml.safe_dump(payload, handle, sort_keys=False, allow_unicode=True)
    return target
