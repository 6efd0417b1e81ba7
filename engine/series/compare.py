"""
Side-by-side comparison of two countries' aligned records, keyed by date, for display on a shared chart axis.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Sequence

from engine.series.align import AlignedRecord
from config import COMPARE_COLUMNS


def _columns(name: str, record: AlignedRecord) -> Dict[str, int]:
    return {f"{name} {suffix}": getattr(record, field) for field, suffix in COMPARE_COLUMNS.items()}


def merge_comparison(
    primary_name: str,
    primary: Sequence[AlignedRecord],
    other_name: str,
    other: Sequence[AlignedRecord],
) -> List[Dict[str, Any]]:
    rows: Dict[date, Dict[str, Any]] = {}
    for name, records in ((primary_name, primary), (other_name, other)):
        for record in records:
            row = rows.setdefault(record.date, {"date": record.date})
            row.update(_columns(name, record))
    return [rows[day] for day in sorted(rows)]
