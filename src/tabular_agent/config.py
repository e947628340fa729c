"""centralized configuration management using pydantic settings.

this module provides type-safe, validated configuration for the tabular agent.
configuration is loaded from environment variables and optional .env files.
"""

from functools import lru_cache
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """main settings class for the tabular agent.

    configuration is loaded from environment variables. a .env file in the
    working directory is also loaded if present.

    attributes:
        max_datasets: how many datasets a session registry may hold
        frequency_top_n: rows kept in a frequency table
        null_label: label used for null cells in frequency tables
        query_default_limit: rows returned by a query when no limit is given
        fill_default_value: value written by fill_value when none is supplied
        fill_mean_decimals: rounding applied to the fill_mean value
        chart_aggregation_min_rows: charts need more rows than this to aggregate
        chart_aggregation_ratio: distinct keys must stay below rows * ratio
        chart_aggregation_top_n: categories kept after aggregation
        chart_max_rows: hard cap on rows handed to the renderer
        max_file_size_mb: largest local file accepted by the loader
        catalog_domain: socrata domain used by the catalog client
        socrata_app_token: optional socrata app token
        catalog_default_limit: rows requested from the catalog by default
        catalog_timeout: http timeout for catalog requests, in seconds
        log_level: logging level (DEBUG, INFO, WARNING, ERROR)
        session_timeout: idle session expiry in seconds for the api server
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # registry
    max_datasets: int = Field(default=3, ge=1, alias="MAX_DATASETS")

    # analysis and query
    frequency_top_n: int = Field(default=20, ge=1)
    null_label: str = "Nulo"
    query_default_limit: int = Field(default=10, ge=0)

    # cleaning
    fill_default_value: str = "Desconocido"
    fill_mean_decimals: int = Field(default=2, ge=0)

    # chart heuristics
    chart_aggregation_min_rows: int = Field(default=20, ge=0)
    chart_aggregation_ratio: float = Field(default=0.8, gt=0, le=1)
    chart_aggregation_top_n: int = Field(default=20, ge=1)
    chart_max_rows: int = Field(default=1000, ge=1)

    # loaders and catalog
    max_file_size_mb: int = Field(default=10, ge=1)
    catalog_domain: str = Field(default="www.datos.gov.co", alias="CATALOG_DOMAIN")
    socrata_app_token: str | None = Field(default=None, alias="SOCRATA_TOKEN")
    catalog_default_limit: int = Field(default=10000, ge=1)
    catalog_timeout: float = Field(default=30.0, gt=0)

    # agent configuration
    log_level: str = Field(default="WARNING", alias="TABULAR_AGENT_LOG_LEVEL")
    session_timeout: int = Field(default=3600, ge=60)

    def chart_options(self) -> dict[str, Any]:
        """keyword arguments for resolve_chart built from these settings."""
        return {
            "aggregation_min_rows": self.chart_aggregation_min_rows,
            "aggregation_ratio": self.chart_aggregation_ratio,
            "aggregation_top_n": self.chart_aggregation_top_n,
            "max_rows": self.chart_max_rows,
        }


@lru_cache
def get_settings() -> Settings:
    """get the singleton settings instance.

    uses lru_cache to ensure only one instance is created.
    call get_settings.cache_clear() to reload settings if needed.

    returns:
        the settings instance
    """
    return Settings()
