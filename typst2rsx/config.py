"""User configuration for typst2rsx.

Settings live in a YAML file::

    typst_binary: /opt/typst/bin/typst
    compile_timeout: 30
    compile_args: ["--root", "."]
    indent: 2
    keep_whitespace: false
    log_level: INFO

Lookup order: explicit path, ``$TYPST2RSX_CONFIG``, then
``~/.config/typst2rsx/config.yaml``. A missing file yields the defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from typst2rsx.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TYPST2RSX_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/typst2rsx/config.yaml")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Conversion settings."""

    typst_binary: str = "typst"
    compile_timeout: float | None = 60.0
    compile_args: list[str] = field(default_factory=list)
    indent: int | None = 4
    keep_whitespace: bool = True
    log_level: str = "WARNING"

    @classmethod
    def load(cls, path: str | Path | None = None) -> Config:
        """Load configuration from YAML, falling back to defaults.

        Args:
            path: Explicit config file. When given, the file must exist.

        Raises:
            ConfigError: If the file cannot be read or has invalid values.
        """
        explicit = path is not None or CONFIG_ENV_VAR in os.environ
        if path is None:
            path = os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH
        path = Path(path).expanduser()

        if not path.exists():
            if explicit:
                raise ConfigError(f"Config file not found: {path}")
            return cls()

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        logger.debug("Loaded config from %s", path)
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a config from parsed YAML, validating every key."""
        if not isinstance(data, dict):
            raise ConfigError(f"config: expected mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"config: unknown keys: {', '.join(map(str, unknown))}")

        config = cls()
        if "typst_binary" in data:
            config.typst_binary = _expect_str(data, "typst_binary")
        if "compile_timeout" in data:
            timeout = data["compile_timeout"]
            if timeout is not None:
                if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                    raise ConfigError(
                        f"compile_timeout: expected number, got {type(timeout).__name__}"
                    )
                if timeout <= 0:
                    raise ConfigError(f"compile_timeout: must be positive, got {timeout}")
                timeout = float(timeout)
            config.compile_timeout = timeout
        if "compile_args" in data:
            args = data["compile_args"]
            if not isinstance(args, list):
                raise ConfigError(f"compile_args: expected list, got {type(args).__name__}")
            for i, arg in enumerate(args):
                if not isinstance(arg, str):
                    raise ConfigError(
                        f"compile_args[{i}]: expected string, got {type(arg).__name__}"
                    )
            config.compile_args = list(args)
        if "indent" in data:
            indent = data["indent"]
            if indent is not None:
                if isinstance(indent, bool) or not isinstance(indent, int):
                    raise ConfigError(f"indent: expected integer, got {type(indent).__name__}")
                if indent < 0:
                    raise ConfigError(f"indent: must be >= 0, got {indent}")
            config.indent = indent
        if "keep_whitespace" in data:
            keep = data["keep_whitespace"]
            if not isinstance(keep, bool):
                raise ConfigError(
                    f"keep_whitespace: expected boolean, got {type(keep).__name__}"
                )
            config.keep_whitespace = keep
        if "log_level" in data:
            level = _expect_str(data, "log_level").upper()
            if level not in LOG_LEVELS:
                raise ConfigError(f"log_level: expected one of {', '.join(LOG_LEVELS)}, got {level}")
            config.log_level = level
        return config


def _expect_str(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected string, got {type(value).__name__}")
    return value
