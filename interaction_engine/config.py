from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_SKILLS_DIR = Path(__file__).parent / "skills" / "catalog"


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ENGINE_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    executor_timeout_seconds: float = Field(default=10.0, gt=0)

    skills_dir: Path = BUNDLED_SKILLS_DIR
    autoload_skills: bool = True

    date_languages: list[str] = Field(default_factory=lambda: ["en"], min_length=1)
    prefer_dates_from: Literal["future", "past", "current_period"] = "future"

    sentry_dsn: str = ""

    environment: str = "development"
    allowed_origins: str = ""

    @field_validator("date_languages")
    @classmethod
    def normalize_languages(cls, value: list[str]) -> list[str]:
        languages = [lang.strip().lower() for lang in value if lang.strip()]
        if not languages:
            raise ValueError("at least one date language is required")
        return languages


settings = EngineSettings()
