import os
import sys
import pytest

# ensure workspace root is on sys.path so our application packages can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import settings


@pytest.fixture(autouse=True)
def reset_route_state(monkeypatch):
    """Reset the shared connector/scheduler used by the routers and make
    connector retries immediate so failure paths do not sleep.
    """
    import api.routes.common as common

    monkeypatch.setattr(common, "_connector", None)
    monkeypatch.setattr(common, "_scheduler", None)
    monkeypatch.setattr(settings, "connector_retry_delay", 0.0)
    yield


@pytest.fixture
def linear_history():
    """Ten days of cases following 100 + 10*i, ending 2021-01-30."""
    from datetime import date, timedelta
    from engine.series import AlignedRecord

    start = date(2021, 1, 21)
    return [
        AlignedRecord(date=start + timedelta(days=i), cases=100 + 10 * i)
        for i in range(10)
    ]
