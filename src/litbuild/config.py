"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments   (tests, embedding callers)
  2. Environment variables   (LITBUILD__EXAMPLES__DIR=./snippets)
  3. litbuild.yaml           (searched in cwd, then platform config dir)
  4. Hardcoded defaults

The config file is optional. Every path the pipeline touches comes from
here and is passed down explicitly; no module keeps its own path constants.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first litbuild.yaml found, or None."""
    candidates = [
        Path("litbuild.yaml"),
        Path(platformdirs.user_config_dir("litbuild")) / "litbuild.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ExamplesSettings(BaseModel):
    dir: Path = Path("examples")
    manifest: Path | None = None
    source_extension: str = "js"
    language: str = "javascript"
    # Leading lines excluded from segmentation (e.g. a shebang or summary header)
    header_lines: int = Field(default=0, ge=0)


class OutputSettings(BaseModel):
    dir: Path = Path("public")
    stylesheet_name: str = "code.css"
    templates_dir: Path | None = None


class CacheSettings(BaseModel):
    transcript_extension: str = "transcript"
    # Placeholders: {id} and {filename}
    prompt_template: str = "$ run {id}"

    @field_validator("prompt_template")
    @classmethod
    def validate_prompt_template(cls, v: str) -> str:
        try:
            v.format(id="example", filename="example.js")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(
                f"prompt_template {v!r} may only use the {{id}} and {{filename}} placeholders"
            ) from exc
        return v


class RunnerSettings(BaseModel):
    command: list[str] = Field(default=["deno", "run", "--allow-read"], min_length=1)
    timeout_seconds: float | None = None


class HighlightSettings(BaseModel):
    theme: str = "monokai"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: LITBUILD__OUTPUT__DIR=site
        env_prefix="LITBUILD__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    examples: ExamplesSettings = ExamplesSettings()
    output: OutputSettings = OutputSettings()
    cache: CacheSettings = CacheSettings()
    runner: RunnerSettings = RunnerSettings()
    highlight: HighlightSettings = HighlightSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
