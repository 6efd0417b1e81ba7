"""
Entry point for the EpiTrend API server.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import sys
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse

from api.routes import router
from api.routes.common import get_connector, get_scheduler, set_scheduler
from config import settings
from datasources.exceptions import BackendStartupTimeout
from services.refresh_service import RefreshScheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    stream=sys.stdout,
)
log = logging.getLogger(__name__)

PROVIDER_NAME = "disease.sh"

_backend_ready = False
_backend_status: Dict[str, str] = {}


async def wait_for(
    name: str,
    url: str,
    timeout: float,
    headers: Optional[Dict[str, str]] = None,
    accept_status: tuple = (200,),
) -> None:
    deadline = time.monotonic() + timeout
    attempt = 0
    async with httpx.AsyncClient() as client:
        while time.monotonic() < deadline:
            attempt += 1
            try:
                resp = await client.get(url, headers=headers or {}, timeout=3.0)
                if resp.status_code in accept_status:
                    log.info("%s ready (attempt %d, status %d)", name, attempt, resp.status_code)
                    return
                log.debug("%s probe returned %d (attempt %d)", name, resp.status_code, attempt)
            except Exception as exc:
                log.debug("%s not reachable (attempt %d): %s", name, attempt, exc)
            await asyncio.sleep(2)
    raise BackendStartupTimeout(f"{name} did not become ready within {timeout}s")


async def _wait_for_provider_bg(health_url: str, timeout: float) -> None:
    global _backend_ready, _backend_status

    _backend_status[PROVIDER_NAME] = "waiting"
    log.info("Provider readiness check starting (timeout=%ds) ...", timeout)
    try:
        await wait_for(PROVIDER_NAME, health_url, timeout)
    except Exception as exc:
        log.error("%s failed readiness: %s", PROVIDER_NAME, exc)
        _backend_status[PROVIDER_NAME] = f"failed: {exc}"
        _backend_ready = False
        return

    _backend_status[PROVIDER_NAME] = "ready"
    _backend_ready = True
    log.info("Statistics provider ready, engine fully operational")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    connector = get_connector()
    scheduler = RefreshScheduler(connector)
    set_scheduler(scheduler)
    if settings.refresh_on_startup:
        scheduler.start()

    readiness_task = asyncio.create_task(
        _wait_for_provider_bg(connector.health_url, settings.startup_timeout)
    )
    try:
        yield
    finally:
        readiness_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await readiness_task
        await scheduler.stop()
        set_scheduler(None)


app = FastAPI(
    title="EpiTrend Engine",
    description="Time-series alignment and linear trend forecasting over public epidemiological statistics.",
    version="1.0.0",
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


@app.get("/api/v1/ready", tags=["health"], summary="Provider readiness probe")
async def ready() -> JSONResponse:
    code = 200 if _backend_ready else 503
    scheduler = get_scheduler()
    return JSONResponse(
        status_code=code,
        content={
            "ready": _backend_ready,
            "backends": _backend_status,
            "scheduler": bool(scheduler is not None and scheduler.running),
        },
    )


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=4322,
        log_level="info",
        access_log=True,
    )
