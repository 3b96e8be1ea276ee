from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process settings loaded from BUNDLE_* environment variables.

    Only the command line reads these; library functions always take
    explicit paths.

    Directory layout
    ────────────────
    • BUNDLE_TARGET_DIR    archives land here   (default target/bundle)
    • BUNDLE_STAGING_DIR   staged tree          (default <target>/stage)
    """

    model_config = SettingsConfigDict(
        env_prefix="BUNDLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    target_dir: Path = Path("target") / "bundle"
    staging_dir: Optional[Path] = None

    # Console renderer + DEBUG level when set
    debug: bool = False

    @field_validator("staging_dir", mode="before")
    @classmethod
    def empty_staging_dir_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def resolved_staging_dir(self) -> Path:
        return self.staging_dir or self.target_dir / "stage"


def get_settings() -> Settings:
    return Settings()
