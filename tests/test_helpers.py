"""
Test Suite for Helper Functions

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest
import httpx

from datasources.helpers import fetch_json
from datasources.exceptions import InvalidRequest, QueryTimeout, DataSourceUnavailable


class DummyResponse:
    def __init__(self, status_code=200, text="", json_data=None):
        self.status_code = status_code
        self.text = text
        self._json = json_data if json_data is not None else {}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise httpx.HTTPStatusError("err", request=None, response=self)

    def json(self):
        return self._json


class DummyClient:
    def __init__(self, resp: DummyResponse):
        self.resp = resp
        self.seen = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def get(self, url, params=None, headers=None):
        self.seen = (url, params, headers)
        return self.resp


@pytest.mark.asyncio
async def test_fetch_json_success(monkeypatch):
    resp = DummyResponse(status_code=200, json_data={"cases": 1})
    client = DummyClient(resp)
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    got = await fetch_json("url", params={"lastdays": 30}, headers={"Accept": "application/json"})
    assert got == {"cases": 1}
    assert client.seen == ("url", {"lastdays": 30}, {"Accept": "application/json"})


@pytest.mark.asyncio
async def test_fetch_json_returns_lists(monkeypatch):
    resp = DummyResponse(status_code=200, json_data=[{"country": "Chile"}])
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: DummyClient(resp))
    assert await fetch_json("url") == [{"country": "Chile"}]


@pytest.mark.asyncio
async def test_fetch_json_http_error_keeps_status(monkeypatch):
    resp = DummyResponse(status_code=404, text="not found")
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: DummyClient(resp))
    with pytest.raises(InvalidRequest) as exc:
        await fetch_json("url", invalid_msg="country failed")
    assert exc.value.status_code == 404
    assert "country failed [404]" in str(exc.value)


@pytest.mark.asyncio
async def test_fetch_json_timeout(monkeypatch):
    async def get(*args, **kwargs):
        raise httpx.TimeoutException("timeout")
    client = DummyClient(DummyResponse())
    client.get = get
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    with pytest.raises(QueryTimeout):
        await fetch_json("url")


@pytest.mark.asyncio
async def test_fetch_json_unreachable(monkeypatch):
    async def get(*args, **kwargs):
        raise httpx.ConnectError("refused")
    client = DummyClient(DummyResponse())
    client.get = get
    monkeypatch.setattr(httpx, "AsyncClient", lambda timeout: client)
    with pytest.raises(DataSourceUnavailable) as exc:
        await fetch_json("https://disease.test/all")
    assert "https://disease.test/all" in str(exc.value)
