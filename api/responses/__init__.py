"""
Response models for API endpoints.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import datetime
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class AttrModel(BaseModel):

    model_config = ConfigDict(from_attributes=True)


class AlignedRecordOut(AttrModel):

    date: datetime.date
    cases: int
    recovered: int
    vaccines: int


class ForecastRecordOut(AttrModel):

    date: datetime.date
    cases: int
    is_forecast: bool = True


class TimelinePointOut(AttrModel):

    date: datetime.date
    cases: int
    is_forecast: bool = False


class AlignResponse(BaseModel):

    records: List[AlignedRecordOut] = Field(default_factory=list)


class ForecastResponse(BaseModel):

    forecast: List[ForecastRecordOut] = Field(default_factory=list)
    timeline: List[TimelinePointOut] = Field(default_factory=list)


class CountrySummaryOut(AttrModel):

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
    country_info: Dict[str, Any] = Field(default_factory=dict)


class CountryReportOut(AttrModel):

    country: str
    summary: CountrySummaryOut
    aligned: List[AlignedRecordOut] = Field(default_factory=list)
    forecast: List[ForecastRecordOut] = Field(default_factory=list)
    timeline: List[TimelinePointOut] = Field(default_factory=list)
    total_vaccinated: int = 0
    generated_at: float


class GlobalTotals(BaseModel):

    total_cases: int = 0
    total_deaths: int = 0
    total_recovered: int = 0
    total_tests: int = 0
