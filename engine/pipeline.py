"""
Country refresh pipeline: fetches the provider's summary, historical and vaccine coverage payloads for one country, aligns the three series, forecasts the case trend and assembles the report consumed by the dashboard.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from datasources.base import StatisticsConnector
from engine.forecast import ForecastRecord, TimelinePoint, combine, forecast
from engine.series import AlignedRecord, align, latest_value
from config import settings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CountrySummary:
    cases: int = 0
    deaths: int = 0
    recovered: int = 0
    active_cases: int = 0
    new_cases_today: int = 0
    new_deaths_today: int = 0
    new_recovered_today: int = 0
    critical: int = 0
    cases_per_one_million: float = 0.0
    population: int = 0
    country_info: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "CountrySummary":
        data = payload or {}
        return cls(
            cases=data.get("cases") or 0,
            deaths=data.get("deaths") or 0,
            recovered=data.get("recovered") or 0,
            active_cases=data.get("active") or 0,
            new_cases_today=data.get("todayCases") or 0,
            new_deaths_today=data.get("todayDeaths") or 0,
            new_recovered_today=data.get("todayRecovered") or 0,
            critical=data.get("critical") or 0,
            cases_per_one_million=float(data.get("casesPerOneMillion") or 0.0),
            population=data.get("population") or 0,
            country_info=dict(data.get("countryInfo") or {}),
        )


@dataclass(frozen=True)
class CountryReport:
    country: str
    summary: CountrySummary
    aligned: List[AlignedRecord]
    forecast: List[ForecastRecord]
    timeline: List[TimelinePoint]
    total_vaccinated: int
    generated_at: float


def build_report(
    country: str,
    summary: Optional[Dict[str, Any]],
    timeline: Optional[Dict[str, Any]],
    vaccines: Optional[Dict[str, Any]],
    horizon: Optional[int] = None,
) -> CountryReport:
    if horizon is None:
        horizon = settings.dashboard_forecast_horizon
    timeline = timeline or {}

    aligned = align(timeline.get("cases"), timeline.get("recovered"), vaccines)
    projected = forecast(aligned, horizon)
    log.debug(
        "build_report country=%s points=%d forecast=%d",
        country, len(aligned), len(projected),
    )
    return CountryReport(
        country=country,
        summary=CountrySummary.from_payload(summary),
        aligned=aligned,
        forecast=projected,
        timeline=combine(aligned, projected),
        total_vaccinated=latest_value(vaccines),
        generated_at=time.time(),
    )


async def refresh_country(
    connector: StatisticsConnector,
    country: str,
    lastdays: Optional[int] = None,
    horizon: Optional[int] = None,
) -> CountryReport:
    # summary failures propagate; historical and vaccine fetches degrade to None
    summary = await connector.country(country)
    timeline, vaccines = await asyncio.gather(
        connector.historical(country, lastdays),
        connector.vaccine_coverage(country, lastdays),
    )
    return build_report(country, summary, timeline, vaccines, horizon)
