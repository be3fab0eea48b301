"""
Configuration loader for content fingerprinting.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = Path("config.yaml")
ENV_CONFIG_PATH = "CONTENT_FINGERPRINT_CONFIG"


@dataclass(frozen=True)
class AppConfig:
    """Raw configuration data plus the directory relative paths resolve against."""

    root_dir: Path
    raw: Dict[str, Any]

    @classmethod
    def load(cls, path: Path | None = None) -> "AppConfig":
        """Load configuration from YAML.

        An explicit ``path`` wins, then the ``CONTENT_FINGERPRINT_CONFIG``
        environment variable, then ``config.yaml`` in the working directory.
        """
        config_path = path
        if config_path is None:
            env_value = os.environ.get(ENV_CONFIG_PATH)
            config_path = Path(env_value) if env_value else DEFAULT_CONFIG_PATH
        config_path = config_path.expanduser()
        if not config_path.is_absolute():
            config_path = (Path.cwd() / config_path).resolve()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping: {config_path}")
        return cls(root_dir=config_path.parent, raw=data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root_dir: Optional[Path] = None) -> "AppConfig":
        return cls(root_dir=root_dir or Path.cwd(), raw=dict(data))

    def get(self, *keys: str, default: Any = None) -> Any:
        """Retrieve nested configuration values with an optional default."""
        node: Any = self.raw
        for key in keys:
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def get_int(self, *keys: str, default: int) -> int:
        """Retrieve an integer; strings such as ``"0x2A"`` are parsed with their prefix."""
        value = self.get(*keys, default=default)
        if isinstance(value, bool):
            raise ValueError(f"Expected an integer for {'.'.join(keys)}, got {value!r}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip().replace("_", ""), 0)
            except ValueError as exc:
                raise ValueError(f"Expected an integer for {'.'.join(keys)}, got {value!r}") from exc
        raise ValueError(f"Expected an integer for {'.'.join(keys)}, got {value!r}")

    def resolve_path(self, *keys: str, default: str | None = None) -> Path:
        """Resolve a path from configuration keys to an absolute Path."""
        value = self.get(*keys, default=default)
        if value is None:
            raise KeyError(f"Missing config path for {'.'.join(keys)}")
        path = Path(value)
        if not path.is_absolute():
            path = (self.root_dir / path).resolve()
        return path
