"""
Series alignment logic that merges the cases, recovered and vaccine coverage date maps returned by the statistics provider into one dense, date-ordered sequence of records, zero-filling any metric that is absent for a given day.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Union

from engine.enums import DateKeyPolicy, Metric
from config import DATE_KEY_FORMATS, settings

log = logging.getLogger(__name__)

MetricSeries = Mapping[str, Any]


class MalformedSeriesEntry(ValueError):
    pass


@dataclass(frozen=True)
class AlignedRecord:
    date: date
    cases: int = 0
    recovered: int = 0
    vaccines: int = 0


def parse_date_key(key: str) -> date:
    text = str(key).strip()
    for fmt in DATE_KEY_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise MalformedSeriesEntry(f"unrecognised date key: {key!r}")


def _coerce_value(key: str, value: Any) -> int:
    # the provider reports missing days as null
    if value is None:
        return 0
    if isinstance(value, bool):
        raise MalformedSeriesEntry(f"non-numeric value at {key!r}: {value!r}")
    if isinstance(value, int):
        count = value
    elif isinstance(value, float) and value.is_integer():
        count = int(value)
    else:
        raise MalformedSeriesEntry(f"non-integer value at {key!r}: {value!r}")
    if count < 0:
        raise MalformedSeriesEntry(f"negative value at {key!r}: {value!r}")
    return count


def _resolve_policy(policy: Union[DateKeyPolicy, str, None]) -> DateKeyPolicy:
    if policy is None:
        policy = settings.date_key_policy
    return DateKeyPolicy(str(getattr(policy, "value", policy)).strip().lower())


def normalize_series(
    metric: Metric,
    series: Optional[MetricSeries],
    policy: Union[DateKeyPolicy, str, None] = None,
) -> Dict[date, int]:
    """Parse one provider date map into ``{date: value}``.

    An absent series yields an empty mapping. Keys naming the same calendar
    day in different formats collapse, the later key in iteration order
    winning. Malformed keys or values are dropped with a warning under
    :attr:`DateKeyPolicy.skip` and raise :class:`MalformedSeriesEntry`
    under :attr:`DateKeyPolicy.strict`.
    """
    if series is None:
        return {}

    mode = _resolve_policy(policy)
    out: Dict[date, int] = {}
    skipped = 0
    for key, value in series.items():
        try:
            day = parse_date_key(key)
            out[day] = _coerce_value(key, value)
        except MalformedSeriesEntry:
            if mode is DateKeyPolicy.strict:
                raise
            skipped += 1
            log.warning("align: skipping malformed %s entry %r=%r", metric.value, key, value)

    if skipped:
        log.info("align: %s series dropped %d malformed entries", metric.value, skipped)
    return out


def align(
    cases: Optional[MetricSeries],
    recovered: Optional[MetricSeries],
    vaccines: Optional[MetricSeries],
    policy: Union[DateKeyPolicy, str, None] = None,
) -> List[AlignedRecord]:
    by_metric = {
        Metric.cases: normalize_series(Metric.cases, cases, policy),
        Metric.recovered: normalize_series(Metric.recovered, recovered, policy),
        Metric.vaccines: normalize_series(Metric.vaccines, vaccines, policy),
    }

    dates = set()
    for values in by_metric.values():
        dates.update(values)

    return [
        AlignedRecord(
            date=day,
            cases=by_metric[Metric.cases].get(day, 0),
            recovered=by_metric[Metric.recovered].get(day, 0),
            vaccines=by_metric[Metric.vaccines].get(day, 0),
        )
        for day in sorted(dates)
    ]


def latest_value(series: Optional[MetricSeries]) -> int:
    """Value at the most recent parsable date, or 0 when there is none."""
    values = normalize_series(Metric.vaccines, series, DateKeyPolicy.skip)
    if not values:
        return 0
    return values[max(values)]
