"""
Forecasting logic for daily case counts: a least squares linear trend extrapolated over a fixed horizon, and the combined historical-plus-forecast timeline used for display.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


from engine.forecast.trend import ForecastRecord, TimelinePoint, combine, forecast

__all__ = ["ForecastRecord", "TimelinePoint", "combine", "forecast"]
