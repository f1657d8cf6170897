"""Configuration system for subbatch.

Layered config loading (lowest to highest priority):
1. Built-in defaults (the models below)
2. ~/.config/subbatch/config.toml (user-level)
3. ./subbatch.toml (project-level)
4. Environment variables (SUBBATCH_WHISPER__MODEL, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

_USER_CONFIG = Path.home() / ".config" / "subbatch" / "config.toml"
_PROJECT_CONFIG = Path("subbatch.toml")


class WhisperConfig(BaseModel):
    model: str = "whisper-1"
    api_base: str | None = None  # Custom API endpoint (e.g. self-hosted Whisper)
    api_key_env: str = "OPENAI_API_KEY"
    timeout: float = 600.0  # seconds per request
    max_retries: int = 2


class TranscodeConfig(BaseModel):
    extension: str = ".mp4"
    codec: str = "libmp3lame"
    bitrate: int = 128  # kbps, constant bitrate
    temp_suffix: str = "_temp.mp3"
    timeout: float | None = None


class OutputConfig(BaseModel):
    vtt_width: int | None = None  # percent, emitted as " size:<width>%"


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class _TomlLayersSource(PydanticBaseSettingsSource):
    """User and project TOML files, merged in that order."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        # Unused: __call__ returns the whole merged mapping
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict = {}
        for path in (_USER_CONFIG, _PROJECT_CONFIG):
            data = _deep_merge(data, _load_toml(path))
        return data


class SubbatchConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SUBBATCH_",
        env_nested_delimiter="__",
    )

    whisper: WhisperConfig = WhisperConfig()
    transcode: TranscodeConfig = TranscodeConfig()
    output: OutputConfig = OutputConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Highest priority first: CLI overrides, env vars, then TOML files
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _TomlLayersSource(settings_cls),
            file_secret_settings,
        )


def load_config(**cli_overrides: object) -> SubbatchConfig:
    """Load configuration from all layers and merge.

    TOML files and env vars are read by the settings sources; only the
    CLI overrides are passed in directly.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. whisper.model="whisper-1").
    """
    config_data: dict = {}
    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    return SubbatchConfig(**config_data)
