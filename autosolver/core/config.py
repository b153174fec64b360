"""Application configuration settings."""

import json
from pathlib import Path
from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from autosolver.models.enums import Language, NoMatchPolicy


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "Lesson Autosolver"
    app_version: str = "1.0.0"

    # Logging Settings
    log_level: str = "info"
    log_file: Optional[str] = None

    # Session document (settings.json)
    headless: bool = True
    email: Optional[str] = None
    password: Optional[str] = None
    path_to_geckodriver: Optional[str] = None

    # Site Settings
    base_url: str = "https://www.duolingo.com/"
    learn_url: str = "https://www.duolingo.com/learn"
    lesson_url: str = "https://www.duolingo.com/lesson"

    # Translation Settings
    translation_provider: str = "google"  # Currently supports 'google'
    native_language: Language = Language.EN
    learning_language: Language = Language.NL
    detection_min_confidence: float = 0.0
    translation_workers: int = 4
    hold_lock_during_fetch: bool = False

    # Google Cloud Settings
    google_application_credentials: Optional[str] = "keys/google-credentials.json"

    # Solving Settings
    keystroke_delay: float = 0.05  # Seconds between typed characters
    ignore_pause: float = 1.0  # Seconds to wait on interstitial screens
    no_match_policy: NoMatchPolicy = NoMatchPolicy.FALLBACK
    skip_unsupported: bool = False  # Skip instead of stopping on unknown exercise types

    # Orchestration Settings
    lesson_workers: int = 1
    fail_fast: bool = False
    poll_interval: float = 0.1
    navigation_timeout: float = 30.0
    element_timeout: float = 10.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="AUTOSOLVER_",
        json_file="settings.json",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("keystroke_delay", "ignore_pause", "poll_interval")
    @classmethod
    def _non_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("delays must not be negative")
        return value

    @field_validator("translation_workers", "lesson_workers")
    @classmethod
    def _at_least_one_worker(cls, value: int) -> int:
        if value < 1:
            raise ValueError("worker counts must be at least 1")
        return value

    @model_validator(mode="after")
    def _check_language_pair(self):
        if self.native_language == self.learning_language:
            raise ValueError("native_language and learning_language must differ")
        return self

    @property
    def supported_languages(self) -> list[str]:
        """Language codes the detector is allowed to return."""
        return [self.native_language.value, self.learning_language.value]


def load_settings(path: str, **overrides) -> Settings:
    """Build settings from an explicit JSON session document."""
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    document.update(overrides)
    return Settings(**document)


# Global settings instance
settings = Settings()
