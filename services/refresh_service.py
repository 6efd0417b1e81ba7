"""
Periodic refresh of country reports and global totals, publishing each fresh snapshot to subscriber callbacks.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
from __future__ import annotations

import asyncio
import contextlib
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from config import settings
from datasources.base import StatisticsConnector
from engine.pipeline import CountryReport, refresh_country

log = logging.getLogger(__name__)

Subscriber = Callable[[CountryReport], Union[None, Awaitable[None]]]


class RefreshScheduler:
    def __init__(
        self,
        connector: StatisticsConnector,
        countries: Optional[Sequence[str]] = None,
        interval_seconds: Optional[float] = None,
        global_interval_seconds: Optional[float] = None,
    ) -> None:
        self._connector = connector
        self._countries: List[str] = list(dict.fromkeys(countries or settings.refresh_countries))
        self._interval = float(interval_seconds or settings.refresh_interval_seconds)
        self._global_interval = float(global_interval_seconds or settings.global_refresh_interval_seconds)
        self._subscribers: List[Subscriber] = []
        self._latest: Dict[str, CountryReport] = {}
        self._global: Optional[Dict[str, Any]] = None
        self._tasks: List[asyncio.Task] = []

    @property
    def countries(self) -> List[str]:
        return list(self._countries)

    @property
    def running(self) -> bool:
        return any(not t.done() for t in self._tasks)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def latest(self, country: str) -> Optional[CountryReport]:
        return self._latest.get(country)

    def latest_global(self) -> Optional[Dict[str, Any]]:
        return self._global

    async def _publish(self, report: CountryReport) -> None:
        for callback in list(self._subscribers):
            try:
                result = callback(report)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                log.warning("refresh subscriber %r failed for %s: %s", callback, report.country, exc)

    async def refresh_once(self) -> List[CountryReport]:
        results = await asyncio.gather(
            *[refresh_country(self._connector, c) for c in self._countries],
            return_exceptions=True,
        )
        fresh: List[CountryReport] = []
        for country, result in zip(self._countries, results):
            # gather returns CancelledError, a BaseException, for cancelled refreshes
            if isinstance(result, BaseException):
                log.error("refresh for %s failed: %s", country, result)
                continue
            self._latest[country] = result
            fresh.append(result)
            await self._publish(result)
        log.info("refresh tick: %d/%d countries updated", len(fresh), len(self._countries))
        return fresh

    async def refresh_global(self) -> Optional[Dict[str, Any]]:
        try:
            self._global = await self._connector.global_totals()
        except Exception as exc:
            log.error("Error fetching global data: %s", exc)
        return self._global

    async def _loop(self, step: Callable[[], Awaitable[Any]], interval: float) -> None:
        while True:
            await step()
            await asyncio.sleep(interval)

    def start(self) -> None:
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._loop(self.refresh_once, self._interval)),
            asyncio.create_task(self._loop(self.refresh_global, self._global_interval)),
        ]
        log.info(
            "refresh scheduler started (countries=%s, interval=%.0fs, global=%.0fs)",
            self._countries, self._interval, self._global_interval,
        )

    async def stop(self) -> None:
        tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
