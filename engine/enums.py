"""
Enumerations for series parsing policies and the metrics carried by aligned records.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum


class DateKeyPolicy(str, Enum):
    skip = "skip"
    strict = "strict"


class Metric(str, Enum):
    cases = "cases"
    recovered = "recovered"
    vaccines = "vaccines"
