"""Runtime configuration helpers for logwrap."""
from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from .levels import SeverityLevel

DEFAULT_CONFIG_FILES = [
    Path.cwd() / ".logwrap.toml",
    Path.home() / ".config" / "logwrap" / "config.toml",
]

ENV_OVERRIDES = {
    "LOGWRAP_ENABLED": "enabled",
    "LOGWRAP_LOG_DIR": "output_directory",
    "LOGWRAP_DEFAULT_LEVEL": "default_level",
    "LOGWRAP_CONSOLE": "console",
}


class LogWrapSettings(BaseModel):
    enabled: bool = Field(default=False, description="Start a logging session on startup")
    output_directory: Optional[Path] = Field(default=None, description="Directory for session log files")
    default_level: SeverityLevel = Field(default=SeverityLevel.VERBOSE, description="Severity used by log(tag, message)")
    console: Literal["logging", "rich"] = Field(default="logging", description="Console sink implementation")

    @field_validator("default_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> SeverityLevel:
        return SeverityLevel.parse(value)

    @field_validator("output_directory", mode="before")
    @classmethod
    def _blank_directory(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="after")
    def _normalize_paths(self) -> "LogWrapSettings":
        if self.output_directory is not None:
            self.output_directory = self.output_directory.expanduser()
        return self

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data["output_directory"] = str(self.output_directory) if self.output_directory else None
        data["default_level"] = self.default_level.name
        return data


@dataclass
class ConfigLoadResult:
    settings: LogWrapSettings
    source: Optional[Path]
    searched: List[Path]


def _load_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as fh:
        data = tomllib.load(fh)
    return data.get("logwrap", data)


def _env_overrides() -> Dict[str, Any]:
    return {field: os.environ[name] for name, field in ENV_OVERRIDES.items() if os.environ.get(name)}


def load_config(explicit_path: Optional[Path] = None) -> ConfigLoadResult:
    """Load configuration from the first available location, then apply env overrides."""
    candidates: List[Path] = []
    if explicit_path is not None:
        candidates.append(explicit_path.expanduser())
    candidates.extend(DEFAULT_CONFIG_FILES)

    config_data: Dict[str, Any] = {}
    loaded_from: Optional[Path] = None
    for candidate in candidates:
        if candidate.is_file():
            config_data = _load_toml(candidate)
            loaded_from = candidate
            break

    config_data.update(_env_overrides())
    return ConfigLoadResult(settings=LogWrapSettings(**config_data), source=loaded_from, searched=candidates)


__all__ = ["ConfigLoadResult", "LogWrapSettings", "load_config"]
