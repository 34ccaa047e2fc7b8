# ─────────────────────────────────────────────────────────────────────────────
# Config — Pydantic v2 models for production / development logging
# ─────────────────────────────────────────────────────────────────────────────


from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from structlog_cloudlogging.encoder_config import (
    EncoderConfig,
    new_development_encoder_config,
    new_production_encoder_config,
)
from structlog_cloudlogging.fields import Encoding
from structlog_cloudlogging.levels import Level


class SamplingConfig(BaseModel):
    """Per-second sampling: log the first `initial` records, then 1 of every `thereafter`.

    thereafter=0 drops everything after the initial burst.
    """

    model_config = ConfigDict(frozen=True)

    initial: int = Field(100, ge=0)
    thereafter: int = Field(100, ge=0)


class Config(BaseModel):
    """Everything configure_logging() needs to set up structlog + stdlib logging."""

    model_config = ConfigDict(frozen=True)

    level: Level = Level.INFO
    development: bool = False
    sampling: SamplingConfig | None = Field(default_factory=SamplingConfig)
    encoding: Encoding = Encoding.json
    encoder_config: InstanceOf[EncoderConfig] = Field(default_factory=new_production_encoder_config)

    # "stderr", "stdout", a file path or a file:// URL.
    output_paths: tuple[str, ...] = ("stderr",)
    error_output_paths: tuple[str, ...] = ("stderr",)

    disable_caller: bool = False
    disable_stacktrace: bool = False
    # Stored as (key, value) pairs; a mapping is converted on validation.
    initial_fields: tuple[tuple[str, Any], ...] = ()

    @field_validator("level", mode="before")
    @classmethod
    def level_from_name(cls, v: Any) -> Any:
        if isinstance(v, str):
            return Level.parse(v)
        return v

    @field_validator("initial_fields", mode="before")
    @classmethod
    def fields_from_mapping(cls, v: Any) -> Any:
        if isinstance(v, Mapping):
            return tuple(v.items())
        return v

    @property
    def stacktrace_level(self) -> Level:
        """Records at or above this level get a stack trace attached."""
        return Level.WARN if self.development else Level.ERROR


def new_production_config() -> Config:
    """INFO and above, JSON to stderr, sampled 100/100."""
    return Config(
        level=Level.INFO,
        development=False,
        sampling=SamplingConfig(initial=100, thereafter=100),
        encoding=Encoding.json,
        encoder_config=new_production_encoder_config(),
        output_paths=("stderr",),
        error_output_paths=("stderr",),
    )


def new_development_config() -> Config:
    """Same as production, but DEBUG and above in development mode."""
    return Config(
        level=Level.DEBUG,
        development=True,
        sampling=SamplingConfig(initial=100, thereafter=100),
        encoding=Encoding.json,
        encoder_config=new_development_encoder_config(),
        output_paths=("stderr",),
        error_output_paths=("stderr",),
    )
