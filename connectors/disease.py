"""
disease.sh Connector

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from datasources.retry import retry

from datasources.base import StatisticsConnector
from datasources.helpers import fetch_json
from datasources.exceptions import CountryNotFound, DataSourceError, DataSourceUnavailable, InvalidRequest, QueryTimeout
from config import settings

log = logging.getLogger(__name__)

_TRANSIENT = (QueryTimeout, DataSourceUnavailable)


class DiseaseConnector(StatisticsConnector):
    # the provider has no dedicated probe; global totals is the cheapest call
    health_path = "/all"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(
            base_url or settings.disease_api_url,
            timeout if timeout is not None else settings.connector_timeout,
            headers,
        )

    async def _get(self, path: str, params: Optional[Dict[str, Any]] = None, what: str = "request") -> Any:
        return await fetch_json(
            f"{self.base_url}{path}",
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
            invalid_msg=f"disease.sh {what} failed",
            timeout_msg=f"disease.sh {what} timed out",
            unavailable_msg="Cannot reach disease.sh at",
        )

    @retry(exceptions=_TRANSIENT)
    async def global_totals(self) -> Dict[str, Any]:
        data = await self._get("/all", what="global totals")
        return {
            "total_cases": data.get("cases", 0),
            "total_deaths": data.get("deaths", 0),
            "total_recovered": data.get("recovered", 0),
            "total_tests": data.get("tests") or 0,
        }

    @retry(exceptions=_TRANSIENT)
    async def country(self, name: str) -> Dict[str, Any]:
        try:
            return await self._get(f"/countries/{quote(name, safe='')}", {"strict": "true"}, what="country")
        except InvalidRequest as e:
            if e.status_code == 404:
                raise CountryNotFound(
                    f'Country data not found for "{name}". Please check the country name.',
                    status_code=404,
                ) from e
            raise

    @retry(exceptions=_TRANSIENT)
    async def _historical(self, name: str, lastdays: int) -> Any:
        return await self._get(f"/historical/{quote(name, safe='')}", {"lastdays": lastdays}, what="historical")

    @retry(exceptions=_TRANSIENT)
    async def _vaccine_coverage(self, name: str, lastdays: int) -> Any:
        return await self._get(
            f"/vaccine/coverage/countries/{quote(name, safe='')}",
            {"lastdays": lastdays},
            what="vaccine coverage",
        )

    async def historical(self, name: str, lastdays: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Return the ``timeline`` object (``cases``/``deaths``/``recovered`` maps), or ``None``."""
        try:
            data = await self._historical(name, lastdays or settings.lastdays)
        except DataSourceError as e:
            log.warning("Failed to fetch historical data for %s: %s", name, e)
            return None
        timeline = data.get("timeline") if isinstance(data, dict) else None
        return timeline if isinstance(timeline, dict) else None

    async def vaccine_coverage(self, name: str, lastdays: Optional[int] = None) -> Optional[Dict[str, Any]]:
        """Return the coverage ``timeline`` date map, or ``None``."""
        try:
            data = await self._vaccine_coverage(name, lastdays or settings.lastdays)
        except DataSourceError as e:
            log.warning("Failed to fetch vaccination data for %s: %s", name, e)
            return None
        timeline = data.get("timeline") if isinstance(data, dict) else None
        return timeline if isinstance(timeline, dict) else None

    @retry(exceptions=_TRANSIENT)
    async def countries(self) -> List[str]:
        data = await self._get("/countries", what="country list")
        return sorted(str(row["country"]) for row in data if isinstance(row, dict) and row.get("country"))
