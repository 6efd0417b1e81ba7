"""
Shared utilities and dependencies for API route modules.

Provides a centralized place for the statistics connector and refresh
scheduler used by the routers, and for translating upstream provider errors
into HTTP responses. This keeps individual route files thin and avoids
repeating boilerplate logic.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Awaitable, Optional, TypeVar

from fastapi import HTTPException

from connectors.disease import DiseaseConnector
from datasources.base import StatisticsConnector
from datasources.exceptions import CountryNotFound
from services.refresh_service import RefreshScheduler


_T = TypeVar("_T")
_connector: Optional[StatisticsConnector] = None
_scheduler: Optional[RefreshScheduler] = None


def get_connector() -> StatisticsConnector:
    global _connector
    if _connector is None:
        _connector = DiseaseConnector()
    return _connector


def get_scheduler() -> Optional[RefreshScheduler]:
    return _scheduler


def set_scheduler(scheduler: Optional[RefreshScheduler]) -> None:
    global _scheduler
    _scheduler = scheduler


async def safe_call(coro: Awaitable[_T], status_code: int = 502) -> _T:
    try:
        return await coro
    except CountryNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
