"""Centralized configuration using Pydantic Settings.

This module is the single source of truth for the engine's tunable
values: the location-matching thresholds, the gap confidence table and
threshold, the default cascade mode and logging.

Configuration can be overridden via environment variables:
- ITE_MATCH_COORDINATE_THRESHOLD_METERS=50
- ITE_GAP_CONFIDENCE_THRESHOLD=85
- ITE_CONFIDENCE_LOCAL_TRANSFER=75
- ITE_CASCADE_DEFAULT_MODE=dependencies-only
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MatchingConfig(BaseSettings):
    """Location matching thresholds.

    Environment variables prefixed with ITE_MATCH_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_MATCH_")

    coordinate_threshold_meters: float = Field(default=100.0, gt=0)
    word_overlap_threshold: float = Field(default=0.7, gt=0, le=1)


class ConfidenceTable(BaseSettings):
    """Confidence scores by segment-kind pattern and gap type.

    Environment variables prefixed with ITE_CONFIDENCE_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_CONFIDENCE_")

    airport_to_airport: int = Field(default=95, ge=0, le=100)
    airport_to_venue: int = Field(default=95, ge=0, le=100)
    hotel_to_hotel_cross_city: int = Field(default=90, ge=0, le=100)
    hotel_to_other: int = Field(default=85, ge=0, le=100)
    local_transfer: int = Field(default=80, ge=0, le=100)
    fallback: int = Field(default=60, ge=0, le=100)


class GapDetectionConfig(BaseSettings):
    """Gap detection configuration.

    Environment variables prefixed with ITE_GAP_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_GAP_")

    confidence_threshold: int = Field(default=80, ge=0, le=100)
    confidence: ConfidenceTable = Field(default_factory=ConfidenceTable)


class CascadeConfig(BaseSettings):
    """Cascade adjuster configuration.

    Environment variables prefixed with ITE_CASCADE_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_CASCADE_")

    default_mode: Literal["auto", "dependencies-only"] = "auto"


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with ITE_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main configuration aggregating all sub-configs.

        config = get_config()
        print(config.gaps.confidence_threshold)
        print(config.matching.coordinate_threshold_meters)

    Environment variables prefixed with ITE_.
    """

    model_config = SettingsConfigDict(env_prefix="ITE_")

    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    gaps: GapDetectionConfig = Field(default_factory=GapDetectionConfig)
    cascade: CascadeConfig = Field(default_factory=CascadeConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
