"""ConfigManager — environment profiles and typed updater settings."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from specparams import config as defaults

logger = logging.getLogger(__name__)

# All known configuration keys with defaults
_CONFIG_KEYS: dict[str, dict[str, Any]] = {
    "SPECPARAMS_ENV": {"default": "development", "description": "Environment profile"},
    "SPECPARAMS_LOG_LEVEL": {"default": "INFO", "description": "Logging level"},
    "SPECPARAMS_DOUBLE_TOLERANCE": {
        "default": defaults.DOUBLE_TOLERANCE,
        "description": "Absolute tolerance for float parameter comparison",
    },
    "SPECPARAMS_INCH_TOLERANCE": {
        "default": defaults.INCH_TOLERANCE,
        "description": "Nominal inch size matching window (mm)",
    },
    "SPECPARAMS_LENGTH_TO_METERS": {
        "default": "",
        "description": "Length unit to meters (empty: use the model's own unit)",
    },
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        "SPECPARAMS_ENV": "development",
        "SPECPARAMS_LOG_LEVEL": "DEBUG",
    },
    "production": {
        "SPECPARAMS_ENV": "production",
        "SPECPARAMS_LOG_LEVEL": "WARNING",
    },
    "testing": {
        "SPECPARAMS_ENV": "testing",
        "SPECPARAMS_LOG_LEVEL": "DEBUG",
    },
}


class UpdaterSettings(BaseModel):
    """Typed view of the merged configuration."""

    env: str = "development"
    log_level: str = "INFO"
    double_tolerance: float = Field(default=defaults.DOUBLE_TOLERANCE, ge=0)
    inch_tolerance: float = Field(default=defaults.INCH_TOLERANCE, ge=0)
    # None: use the document's own length unit
    length_to_meters: float | None = Field(default=None, gt=0)

    @field_validator("log_level")
    @classmethod
    def known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_config(cls, config: dict[str, str]) -> UpdaterSettings:
        """Build settings from a ``SPECPARAMS_*`` key map."""
        prefix = "SPECPARAMS_"
        values = {
            key[len(prefix):].lower(): value
            for key, value in config.items()
            if key.startswith(prefix) and key in _CONFIG_KEYS and str(value).strip()
        }
        return cls.model_validate(values)


class ConfigManager:
    """Manage specparams configuration across environments."""

    def generate_env_template(self, project_path: str | Path) -> Path:
        """Create .env.example with all config keys.

        Returns the path to the generated file.
        """
        root = Path(project_path)
        env_path = root / ".env.example"

        lines = ["# specparams configuration template", "# Copy to .env and fill in values", ""]
        for key, info in _CONFIG_KEYS.items():
            lines.append(f"# {info['description']}")
            lines.append(f"{key}={info['default']}")
            lines.append("")

        env_path.write_text("\n".join(lines), encoding="utf-8")
        return env_path

    def load_config(self, project_path: str | Path) -> dict[str, str]:
        """Load merged config: defaults -> profile -> config.json -> .env -> env vars.

        Returns a flat dict of configuration values.
        """
        root = Path(project_path)
        config: dict[str, str] = {}

        # 1. Defaults
        for key, info in _CONFIG_KEYS.items():
            config[key] = str(info["default"])

        # 2. Profile overrides
        env_name = os.environ.get("SPECPARAMS_ENV", config["SPECPARAMS_ENV"])
        config.update(_PROFILES.get(env_name, {}))

        # 3. .specparams/config.json
        config_json = root / ".specparams" / "config.json"
        if config_json.is_file():
            try:
                data = json.loads(config_json.read_text(encoding="utf-8"))
                for k, v in data.items():
                    config[k] = str(v)
            except (json.JSONDecodeError, OSError, AttributeError):
                logger.debug("Could not read config.json", exc_info=True)

        # 4. .env file
        env_file = root / ".env"
        if env_file.is_file():
            try:
                for line in env_file.read_text(encoding="utf-8").splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        config[k.strip()] = v.strip()
            except OSError:
                logger.debug("Could not read .env", exc_info=True)

        # 5. Environment variables override all
        for key in _CONFIG_KEYS:
            env_val = os.environ.get(key)
            if env_val is not None:
                config[key] = env_val

        return config

    def load_settings(self, project_path: str | Path) -> UpdaterSettings:
        """Merged configuration validated into :class:`UpdaterSettings`."""
        return UpdaterSettings.from_config(self.load_config(project_path))
