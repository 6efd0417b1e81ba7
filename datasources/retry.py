"""
Retry decorator for connector methods.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Type, TypeVar, Tuple, cast

from config import settings

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def retry(
    *,
    attempts: Optional[int] = None,
    delay: Optional[float] = None,
    backoff: Optional[float] = None,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
) -> Callable[[F], F]:
    """Re-invoke the wrapped callable when it raises one of ``exceptions``.

    Unset knobs are read from ``settings`` on every call, so tests and
    environment overrides apply without re-decorating.
    """

    def _knobs() -> Tuple[int, float, float]:
        return (
            attempts if attempts is not None else settings.connector_retry_attempts,
            delay if delay is not None else settings.connector_retry_delay,
            backoff if backoff is not None else settings.connector_retry_backoff,
        )

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                max_attempts, _delay, factor = _knobs()
                _attempt = 0
                while True:
                    try:
                        return await func(*args, **kwargs)
                    except exceptions as exc:
                        _attempt += 1
                        if _attempt >= max_attempts:
                            raise
                        log.debug("%s failed (attempt %d/%d): %s", func.__name__, _attempt, max_attempts, exc)
                        await asyncio.sleep(_delay)
                        _delay *= factor

            return cast(F, async_wrapper)

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            max_attempts, _delay, factor = _knobs()
            _attempt = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as exc:
                    _attempt += 1
                    if _attempt >= max_attempts:
                        raise
                    log.debug("%s failed (attempt %d/%d): %s", func.__name__, _attempt, max_attempts, exc)
                    time.sleep(_delay)
                    _delay *= factor

        return cast(F, sync_wrapper)

    return decorator
