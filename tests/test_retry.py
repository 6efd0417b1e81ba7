import pytest

from config import settings
from datasources.retry import retry


@pytest.mark.asyncio
async def test_retry_async_success_after_failure():
    calls = []

    @retry(attempts=3, delay=0.01, backoff=1, exceptions=(ValueError,))
    async def flaky(x):
        calls.append(x)
        if len(calls) < 2:
            raise ValueError("temporary")
        return x * 2

    result = await flaky(5)
    assert result == 10
    assert len(calls) == 2


def test_retry_sync_success_after_failure():
    calls = []

    @retry(attempts=4, delay=0.01, backoff=1, exceptions=(ValueError,))
    def flaky(x):
        calls.append(x)
        if len(calls) < 3:
            raise ValueError("oops")
        return x + 1

    result = flaky(7)
    assert result == 8
    assert len(calls) == 3


def test_retry_exhausted():
    @retry(attempts=2, delay=0.01, backoff=1, exceptions=(ValueError,))
    def always_fail():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        always_fail()


def test_retry_ignores_unlisted_exceptions():
    calls = []

    @retry(attempts=5, delay=0.0, exceptions=(ValueError,))
    def wrong_kind():
        calls.append(1)
        raise KeyError("not retried")

    with pytest.raises(KeyError):
        wrong_kind()
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_retry_reads_attempts_from_settings(monkeypatch):
    monkeypatch.setattr(settings, "connector_retry_attempts", 2)
    calls = []

    @retry(exceptions=(RuntimeError,))
    async def always_fail():
        calls.append(1)
        raise RuntimeError("down")

    with pytest.raises(RuntimeError):
        await always_fail()
    assert len(calls) == 2
