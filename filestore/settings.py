"""Settings for the vdisk tools, read from a YAML/JSON file and VDISK_* variables."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

ENV_PREFIX = "VDISK_"


class Settings(BaseModel):
    """Process-level settings shared by the CLI and the daemon."""

    app_name: str = Field(default="vdisk", min_length=1)
    log_level: str = Field(default="INFO", description="Name of a logging level")
    log_file: str | None = Field(default=None, description="Log file path; ~/.<app_name>/log.txt if unset")
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=0, le=65535, description="0 picks a free port")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown logging level: {value!r}")
        return level

    def merge(self, patch: Mapping[str, Any]) -> Settings:
        """Return new Settings with ``patch`` applied."""
        payload = self.model_dump(mode="python")
        payload.update(patch)
        return Settings.model_validate(payload)


def load_settings(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from an optional file, then environment overrides.

    Raises ValueError if the file or the variables hold invalid values.
    """
    environ = os.environ if environ is None else environ
    payload: dict[str, Any] = {}
    if path is not None:
        payload.update(_load_text_payload(Path(path).read_text()))
    payload.update(_env_overrides(environ))
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid settings: {exc}") from exc


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    overrides = {}
    for name in Settings.model_fields:
        value = environ.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return overrides


def _load_text_payload(raw: str | bytes) -> dict[str, Any]:
    """Interpret raw text as YAML first, falling back to JSON."""
    text = raw.decode() if isinstance(raw, bytes) else raw
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = json.loads(text)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a mapping")
    return data


__all__ = ["ENV_PREFIX", "Settings", "load_settings"]
