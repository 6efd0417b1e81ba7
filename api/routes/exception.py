"""
Centralized exception handling decorator for API route functions.

The :func:`handle_exceptions` decorator wraps an endpoint handler and turns
anything it does not handle itself into an :class:`fastapi.HTTPException`.
HTTPExceptions raised by the handler (404 for unknown countries, 422 for
rejected series, 502 from ``safe_call``) pass through untouched. Other
exceptions are logged with their traceback and become a ``500`` with the
exception message as the response detail.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import inspect
import logging
from functools import wraps
from typing import Any, Callable, TypeVar, cast

from fastapi import HTTPException

log = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _internal_error(func: Callable[..., Any], exc: Exception) -> HTTPException:
    log.exception("unhandled error in %s: %s", func.__name__, exc)
    return HTTPException(status_code=500, detail=str(exc))


def handle_exceptions(func: F) -> F:
    """Decorator that converts uncaught exceptions to HTTP errors.

    Works with both regular and async handlers.
    """

    if inspect.iscoroutinefunction(func):
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as exc:
                raise _internal_error(func, exc) from exc

        return cast(F, async_wrapper)

    @wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as exc:
            raise _internal_error(func, exc) from exc

    return cast(F, sync_wrapper)
