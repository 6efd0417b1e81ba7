"""
Constants and configuration for the EpiTrend engine.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import List

from pydantic_settings import BaseSettings


EPITREND_DISEASE_API_URL = os.getenv("EPITREND_DISEASE_API_URL", "https://disease.sh/v3/covid-19").rstrip("/")
EPITREND_CONNECTOR_TIMEOUT = int(os.getenv("EPITREND_CONNECTOR_TIMEOUT", "30"))
EPITREND_LASTDAYS = int(os.getenv("EPITREND_LASTDAYS", "365"))

# accepted textual forms of a date key, tried in order
DATE_KEY_FORMATS = (
    "%Y-%m-%d",
    "%m/%d/%y",
    "%m/%d/%Y",
)

# column suffixes used by the comparison table
COMPARE_COLUMNS = {
    "cases": "Cases",
    "recovered": "Recovered",
    "vaccines": "Vaccinations",
}

DEFAULT_COUNTRY = "India"


class Settings(BaseSettings):
    disease_api_url: str = EPITREND_DISEASE_API_URL
    connector_timeout: int = EPITREND_CONNECTOR_TIMEOUT
    startup_timeout: int = int(os.getenv("EPITREND_STARTUP_TIMEOUT", "120"))

    # retry for provider calls that time out or cannot connect
    connector_retry_attempts: int = 3
    connector_retry_delay: float = 1.0
    connector_retry_backoff: float = 2.0

    # days of history requested from the provider
    lastdays: int = EPITREND_LASTDAYS

    # series alignment
    # "skip" drops malformed entries, "strict" rejects the whole series
    date_key_policy: str = "skip"

    # trend forecasting
    # below this many points a linear fit is not attempted
    forecast_min_history: int = 10
    forecast_default_horizon: int = 7
    # horizon used when building the dashboard report
    dashboard_forecast_horizon: int = 14
    forecast_max_horizon: int = 365

    # refresh scheduling
    refresh_interval_seconds: float = 300.0
    global_refresh_interval_seconds: float = 600.0
    refresh_countries: List[str] = [DEFAULT_COUNTRY]
    refresh_on_startup: bool = False

    model_config = {
        "env_prefix": "EPITREND_",
        "extra": "ignore",
    }


settings = Settings()
