from __future__ import annotations

import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from config import settings


class AlignRequest(BaseModel):
    cases: Optional[Dict[str, Any]] = None
    recovered: Optional[Dict[str, Any]] = None
    vaccines: Optional[Dict[str, Any]] = None
    strict: bool = False


class CasePoint(BaseModel):
    date: datetime.date
    cases: int = Field(ge=0)


class ForecastRequest(BaseModel):
    history: List[CasePoint] = Field(default_factory=list)
    horizon: Optional[int] = Field(default=None, ge=0)

    @field_validator("horizon")
    @classmethod
    def cap_horizon(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v > settings.forecast_max_horizon:
            raise ValueError(f"horizon must be <= {settings.forecast_max_horizon}")
        return v
