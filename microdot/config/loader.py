"""Helpers for loading microdot configuration from TOML/JSON sources.

`load_config` accepts:

* None -> default MicrodotConfig
* dict -> validated mapping
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Union

from pydantic import ValidationError

from microdot.config.schema import MicrodotConfig
from microdot.errors import ConfigurationError

logger = logging.getLogger("microdot.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], None]


def _detect_format(text: str) -> str:
    return "json" if text.lstrip().startswith(("{", "[")) else "toml"


def _looks_inline(source: Union[str, Path]) -> bool:
    if not isinstance(source, str):
        return False
    return "\n" in source or "=" in source or source.lstrip().startswith(("{", "["))


def _read_source(source: Union[str, Path]) -> Dict[str, Any]:
    if _looks_inline(source):
        text = str(source)
        fmt = _detect_format(text)
        logger.info("Loading configuration from inline %s string", fmt)
    else:
        path = Path(source)
        if not path.is_file():
            raise ConfigurationError(f"Configuration file not found: {path}")
        text = path.read_text(encoding="utf-8")
        suffix = path.suffix.lower()
        if suffix in {".toml", ".tml"}:
            fmt = "toml"
        elif suffix == ".json":
            fmt = "json"
        else:
            fmt = _detect_format(text)
        logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)

    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Could not parse {fmt} configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Top-level configuration must be a mapping/dict")
    return data


def load_config(source: ConfigSource = None) -> MicrodotConfig:
    """Load MicrodotConfig from various configuration sources.

    Args:
        source: One of:
            * None: returns MicrodotConfig.default()
            * dict: treated as already-parsed configuration mapping
            * str/Path: either a filesystem path to a .toml/.json file,
              or an inline TOML/JSON string (auto-detected)

    Returns:
        MicrodotConfig instance.

    Raises:
        ConfigurationError: If the source cannot be read, parsed or validated.
    """
    if source is None:
        logger.debug("No config source provided; using default MicrodotConfig")
        return MicrodotConfig.default()

    if isinstance(source, dict):
        logger.debug("Loading MicrodotConfig from provided dict")
        data = source
    elif isinstance(source, (str, Path)):
        try:
            data = _read_source(source)
        except OSError as exc:
            raise ConfigurationError(f"Could not read configuration: {exc}") from exc
    else:
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    try:
        return MicrodotConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc


__all__ = ["ConfigSource", "load_config"]
