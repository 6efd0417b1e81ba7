"""
Test Suite for the disease.sh connector

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

import connectors.disease as disease
from connectors.disease import DiseaseConnector
from datasources.exceptions import CountryNotFound, DataSourceUnavailable, InvalidRequest, QueryTimeout


class FakeFetch:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    async def __call__(self, url, params=None, headers=None, timeout=30, **kwargs):
        self.calls.append((url, params))
        for suffix, result in self.responses.items():
            if url.endswith(suffix):
                if isinstance(result, Exception):
                    raise result
                return result
        raise AssertionError(f"unexpected url {url}")


def _connector():
    return DiseaseConnector(base_url="https://disease.test/v3/covid-19/", timeout=5)


def test_base_url_and_health_url():
    c = _connector()
    assert c.base_url == "https://disease.test/v3/covid-19"
    assert c.health_url == "https://disease.test/v3/covid-19/all"


@pytest.mark.asyncio
async def test_global_totals_maps_fields(monkeypatch):
    fake = FakeFetch({"/all": {"cases": 10, "deaths": 2, "recovered": 5, "tests": None}})
    monkeypatch.setattr(disease, "fetch_json", fake)
    got = await _connector().global_totals()
    assert got == {"total_cases": 10, "total_deaths": 2, "total_recovered": 5, "total_tests": 0}


@pytest.mark.asyncio
async def test_country_uses_strict_match(monkeypatch):
    fake = FakeFetch({"/countries/South%20Korea": {"country": "S. Korea", "cases": 1}})
    monkeypatch.setattr(disease, "fetch_json", fake)
    got = await _connector().country("South Korea")
    assert got["cases"] == 1
    assert fake.calls[0][1] == {"strict": "true"}


@pytest.mark.asyncio
async def test_country_404_becomes_country_not_found(monkeypatch):
    fake = FakeFetch({"/countries/Atlantis": InvalidRequest("nope", status_code=404)})
    monkeypatch.setattr(disease, "fetch_json", fake)
    with pytest.raises(CountryNotFound) as exc:
        await _connector().country("Atlantis")
    assert exc.value.status_code == 404
    assert len(fake.calls) == 1


@pytest.mark.asyncio
async def test_country_other_status_propagates(monkeypatch):
    fake = FakeFetch({"/countries/India": InvalidRequest("boom", status_code=500)})
    monkeypatch.setattr(disease, "fetch_json", fake)
    with pytest.raises(InvalidRequest) as exc:
        await _connector().country("India")
    assert not isinstance(exc.value, CountryNotFound)


@pytest.mark.asyncio
async def test_transient_errors_are_retried(monkeypatch):
    calls = []

    async def flaky(url, params=None, headers=None, timeout=30, **kwargs):
        calls.append(url)
        if len(calls) < 3:
            raise QueryTimeout("slow")
        return {"cases": 1}

    monkeypatch.setattr(disease, "fetch_json", flaky)
    got = await _connector().country("India")
    assert got == {"cases": 1}
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_historical_returns_timeline(monkeypatch):
    timeline = {"cases": {"1/1/21": 1}, "deaths": {}, "recovered": {}}
    fake = FakeFetch({"/historical/India": {"country": "India", "timeline": timeline}})
    monkeypatch.setattr(disease, "fetch_json", fake)
    got = await _connector().historical("India", lastdays=30)
    assert got == timeline
    assert fake.calls[0][1] == {"lastdays": 30}


@pytest.mark.asyncio
async def test_historical_failure_degrades_to_none(monkeypatch):
    fake = FakeFetch({"/historical/India": DataSourceUnavailable("down")})
    monkeypatch.setattr(disease, "fetch_json", fake)
    assert await _connector().historical("India") is None


@pytest.mark.asyncio
async def test_vaccine_coverage_defaults_lastdays(monkeypatch):
    fake = FakeFetch({"/vaccine/coverage/countries/India": {"country": "India", "timeline": {"1/1/21": 7}}})
    monkeypatch.setattr(disease, "fetch_json", fake)
    monkeypatch.setattr(disease.settings, "lastdays", 90)
    got = await _connector().vaccine_coverage("India")
    assert got == {"1/1/21": 7}
    assert fake.calls[0][1] == {"lastdays": 90}


@pytest.mark.asyncio
async def test_vaccine_coverage_without_timeline(monkeypatch):
    fake = FakeFetch({"/vaccine/coverage/countries/India": {"message": "No vaccine data"}})
    monkeypatch.setattr(disease, "fetch_json", fake)
    assert await _connector().vaccine_coverage("India") is None


@pytest.mark.asyncio
async def test_countries_sorted(monkeypatch):
    fake = FakeFetch({"/countries": [{"country": "Peru"}, {"country": "Chile"}, {"other": 1}]})
    monkeypatch.setattr(disease, "fetch_json", fake)
    assert await _connector().countries() == ["Chile", "Peru"]
