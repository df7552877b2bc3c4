# buftabs/src/buftabs/core/config.py

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Label shown in the "Tab" column for documents outside every workspace
    none_label: str = Field(default="none")
    # Section title for documents no workspace group claims
    default_group_label: str = Field(default="Default")
    collapse_on_open: bool = Field(default=False)
    state_file: Optional[Path] = Field(default=None)
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="BUFTABS_",
        extra="ignore",
    )


# Instantiate settings
settings = Settings()
