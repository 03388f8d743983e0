from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from facet.domain import constants as c
from facet.domain.parameters import MasteryParameters

CONFIG_FILES = [
    Path.home() / ".config/facet/config.toml",
    Path.home() / ".facet.toml",
]


class AppConfig(BaseSettings):
    """
    Configuration model for facet.
    Supports loading from:
    1. Environment variables (FACET_*)
    2. Config file (~/.config/facet/config.toml)
    3. Manual overrides (CLI / HTTP request)
    """

    model_config = SettingsConfigDict(
        env_prefix="FACET_",
        toml_file=CONFIG_FILES,
        extra="ignore",
    )

    # Event source
    event_log: Path | None = None
    recent_limit: int = Field(default=c.RECENT_EVENT_LIMIT, ge=1)
    default_days: int = Field(default=c.DEFAULT_WINDOW_DAYS, ge=1, le=c.MAX_WINDOW_DAYS)

    # EWMA
    live_alpha: float = Field(default=c.LIVE_EWMA_ALPHA, ge=0.0, le=1.0)
    timeline_alpha: float = Field(default=c.TIMELINE_EWMA_ALPHA, ge=0.0, le=1.0)

    # Combined score weights
    accuracy_weight: float = Field(default=c.ACCURACY_WEIGHT, ge=0.0, le=1.0)
    speed_weight: float = Field(default=c.SPEED_WEIGHT, ge=0.0, le=1.0)

    # Mastery level lower bounds
    developing_threshold: float = Field(default=c.DEVELOPING_THRESHOLD, ge=0.0, le=1.0)
    strong_threshold: float = Field(default=c.STRONG_THRESHOLD, ge=0.0, le=1.0)
    mastered_threshold: float = Field(default=c.MASTERED_THRESHOLD, ge=0.0, le=1.0)

    # Weakness severity upper bounds
    critical_threshold: float = Field(default=c.CRITICAL_THRESHOLD, ge=0.0, le=1.0)
    moderate_threshold: float = Field(default=c.MODERATE_THRESHOLD, ge=0.0, le=1.0)
    weakness_threshold: float = Field(default=c.WEAKNESS_THRESHOLD, ge=0.0, le=1.0)

    # Target response time per difficulty level (ms)
    target_times_ms: dict[int, int] = Field(default_factory=lambda: dict(c.TARGET_TIMES_MS))

    # Server
    host: str = "127.0.0.1"
    port: int = 8777

    # Logging: 0 warnings, 1 info, 2+ debug. The CLI uses the higher of this and -v.
    verbose: int = Field(default=0, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins
        toml_file = next((f for f in CONFIG_FILES if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("event_log", mode="before")
    @classmethod
    def resolve_event_log(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser().resolve()

    @field_validator("target_times_ms")
    @classmethod
    def check_target_times(cls, v: dict[int, int]) -> dict[int, int]:
        merged = {**c.TARGET_TIMES_MS, **v}
        unknown = sorted(set(merged) - set(c.TARGET_TIMES_MS))
        if unknown:
            raise ValueError(f"target_times_ms has levels outside 1-5: {unknown}")
        if any(ms <= 0 for ms in merged.values()):
            raise ValueError("target_times_ms values must be positive")
        return merged

    @model_validator(mode="after")
    def check_threshold_order(self) -> "AppConfig":
        if not self.developing_threshold <= self.strong_threshold <= self.mastered_threshold:
            raise ValueError("mastery thresholds must satisfy developing <= strong <= mastered")
        if not self.critical_threshold <= self.moderate_threshold <= self.weakness_threshold:
            raise ValueError("weakness thresholds must satisfy critical <= moderate <= weakness")
        return self

    def to_parameters(self) -> MasteryParameters:
        """Immutable engine parameters built from this configuration."""
        return MasteryParameters(
            live_alpha=self.live_alpha,
            timeline_alpha=self.timeline_alpha,
            accuracy_weight=self.accuracy_weight,
            speed_weight=self.speed_weight,
            developing_threshold=self.developing_threshold,
            strong_threshold=self.strong_threshold,
            mastered_threshold=self.mastered_threshold,
            critical_threshold=self.critical_threshold,
            moderate_threshold=self.moderate_threshold,
            weakness_threshold=self.weakness_threshold,
            target_times_ms=dict(self.target_times_ms),
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/facet/config.toml (if exists)
    3. Environment variables (FACET_*)
    4. cli_overrides (passed from Typer or the HTTP request)
    """
    # Typer passes None for options the user did not set.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
