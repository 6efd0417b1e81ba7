"""
Series alignment for the provider's per-metric date maps, plus the two-country comparison table built from aligned records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.series.align import (
    AlignedRecord,
    MalformedSeriesEntry,
    MetricSeries,
    align,
    latest_value,
    normalize_series,
    parse_date_key,
)
from engine.series.compare import merge_comparison

__all__ = [
    "AlignedRecord",
    "MalformedSeriesEntry",
    "MetricSeries",
    "align",
    "latest_value",
    "normalize_series",
    "parse_date_key",
    "merge_comparison",
]
