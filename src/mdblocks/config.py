"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from mdblocks.core.models import ParseOptions


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDBLOCKS_"


class Settings(BaseModel):
    app_name:          str  = "mdblocks"
    start_index:       int  = Field(default=1, description="Number reported for the first line of a document")
    line_keys:         bool = Field(default=False, description="Key list items by their longest words")
    list_key_word_len: int  = Field(default=10, ge=1, description="Word count for line-derived list keys")
    output_dir:        str  = Field(default="dist",     description="Directory for extracted <slug>.blocks.json files")
    parser_config:     str  = Field(default="gfm-like", description="MarkdownIt parser preset name for link extraction")
    log_level:         str  = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    def parse_options(self) -> ParseOptions:
        return ParseOptions(
            start_index=self.start_index,
            line_keys=self.line_keys,
            list_key_word_len=self.list_key_word_len,
        )


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOCKS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid settings: {e}") from e
