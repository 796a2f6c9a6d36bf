"""Configuration system using pydantic-settings with environment variable loading."""

from decimal import Decimal
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Signal scoring parameters for the indicator-to-signal pipeline.

    The defaults reproduce the dashboard's canonical formula:
    probability = clamp(65 + |deviation_from_forecast| * 3, 55, 95).
    All fields configurable via ANALYSIS_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    # Probability scoring
    base_probability: float = 65.0
    deviation_scale: float = 3.0  # Probability points per unit of forecast deviation
    probability_floor: float = 55.0
    probability_ceiling: float = 95.0

    # Price levels
    stop_distance_pct: Decimal = Decimal("0.002")  # 0.2% (~20 pips on majors)
    price_jitter_pct: Decimal = Decimal("0.001")  # Simulated live tick around base price

    # Continuation forecast
    continuation_factor: Decimal = Decimal("0.85")

    # Direction inference
    reserve_currency: str = "USD"
    cross_pair_policy: Literal["random", "sentiment", "historical"] = "random"

    # Pair set
    extended_pairs: bool = False  # Adds GBP/USD, AUD/USD, NZD/USD, EUR/GBP


class ScraperSettings(BaseSettings):
    """Headless browser scraping configuration for investing.com."""

    model_config = SettingsConfigDict(env_prefix="SCRAPER_")

    base_url: str = "https://www.investing.com"
    user_agent: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    headless: bool = True
    pool_size: int = 2  # Max concurrent browser contexts
    warm_start: bool = False  # Launch Chromium at startup instead of on first scrape
    navigation_timeout_ms: int = 30_000
    selector_timeout_ms: int = 10_000
    max_rows: int = 12  # Rows read from an indicator history table
    cache_ttl_seconds: float = 60.0


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    analysis: AnalysisSettings = AnalysisSettings()
    scraper: ScraperSettings = ScraperSettings()
    dashboard: DashboardSettings = DashboardSettings()
