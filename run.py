#!/usr/bin/env python3

"""
Smoke test runner for a live EpiTrend API.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import asyncio
import os
import sys
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List

import httpx

BASE_URL = os.getenv("EPITREND_BASE_URL", "http://localhost:4322/api/v1")
COUNTRY = os.getenv("EPITREND_SMOKE_COUNTRY", "India")
COMPARE = os.getenv("EPITREND_SMOKE_COMPARE", "Germany")
HEADERS = {"Content-Type": "application/json"}
START = date(2021, 1, 21)


@dataclass(frozen=True)
class Case:
    label: str
    method: str
    path: str
    body: Dict[str, Any] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    expect: int = 200
    section: str = ""


def linear_history(n: int = 10, base: int = 100, step: int = 10) -> List[Dict[str, Any]]:
    return [
        {"date": (START + timedelta(days=i)).isoformat(), "cases": base + step * i}
        for i in range(n)
    ]


CASES: list[Case] = [
    # ── Health ────────────────────────────────────────────
    Case("health", "GET", "/health", section="Health"),

    # ── Series ────────────────────────────────────────────
    Case("align mixed series", "POST", "/series/align", section="Series", body={
        "cases": {"1/22/20": 5, "1/23/20": 7},
        "recovered": {"2020-01-23": 1},
        "vaccines": None,
    }),
    Case("align all absent", "POST", "/series/align", section="Series", body={"strict": False}),
    Case("align strict malformed", "POST", "/series/align", section="Series",
         body={"cases": {"not-a-date": 1}, "strict": True}, expect=422),

    # ── Forecast ──────────────────────────────────────────
    Case("linear trend", "POST", "/forecast/trend", section="Forecast",
         body={"history": linear_history(), "horizon": 3}),
    Case("short history", "POST", "/forecast/trend", section="Forecast",
         body={"history": linear_history(n=5), "horizon": 3}),
    Case("negative horizon", "POST", "/forecast/trend", section="Forecast",
         body={"history": linear_history(), "horizon": -1}, expect=422),

    # ── Countries ─────────────────────────────────────────
    Case("country list", "GET", "/countries", section="Countries"),
    Case("global totals", "GET", "/global", section="Countries"),
    Case("country report", "GET", f"/countries/{COUNTRY}/report", section="Countries",
         params={"horizon": 14, "lastdays": 60}),
    Case("unknown country", "GET", "/countries/Atlantis/report", section="Countries", expect=404),
    Case("compare countries", "GET", f"/countries/{COUNTRY}/compare/{COMPARE}", section="Countries",
         params={"lastdays": 30}),
]


async def run_case(client: httpx.AsyncClient, case: Case) -> tuple[bool, str, Any]:
    attempt = 0
    last_exc: Exception | None = None
    while attempt < 2:
        try:
            if case.method == "GET":
                r = await client.get(case.path, params=case.params)
            else:
                r = await client.request(case.method, case.path, json=case.body or None,
                                         params=case.params)
            ok = r.status_code == case.expect
            body: Any = None
            try:
                body = r.json()
            except Exception:
                body = r.text
            if ok:
                return True, "", body
            # failure, include response in detail
            if isinstance(body, (dict, list)):
                detail = f"{r.status_code} {r.reason_phrase}: {body}"
            else:
                detail = f"{r.status_code} {r.reason_phrase}: {body}"
            return False, detail, body
        except httpx.TransportError as exc:
            last_exc = exc
            attempt += 1
            if attempt < 2:
                await asyncio.sleep(0.1)
                continue
            return False, f"transport error: {exc}", None
        except Exception as e:
            return False, str(e), None
    return False, str(last_exc), None


async def main():
    import json
    import argparse

    parser = argparse.ArgumentParser(description="Run EpiTrend API smoke cases")
    parser.add_argument("--section", help="only run cases from this section name")
    parser.add_argument("--label", help="only run the case with this exact label")
    args = parser.parse_args()
    selected: list[Case] = []
    for c in CASES:
        if args.section and c.section != args.section:
            continue
        if args.label and c.label != args.label:
            continue
        selected.append(c)
    if not selected:
        print("no matching cases (check --section or --label)")
        sys.exit(1)

    passed = failed = 0
    current_section = ""

    async with httpx.AsyncClient(base_url=BASE_URL, headers=HEADERS, timeout=30) as client:
        for case in selected:
            if case.section != current_section:
                current_section = case.section
                print(f"\n── {current_section} {'─' * max(0, 44 - len(current_section))}")

            ok, detail, body = await run_case(client, case)
            if body is not None:
                try:
                    pretty = json.dumps(body, indent=2)
                except Exception:
                    pretty = str(body)
            else:
                pretty = "<no response>"

            if ok:
                passed += 1
                print(f"  ✓ PASS  {case.method} {case.path} — {case.label}")
                print(f"         response:\n{pretty}")
            else:
                failed += 1
                print(f"  ✗ FAIL  {case.method} {case.path} — {case.label} (expected {case.expect})")
                if detail:
                    print(f"         {detail}")
                print(f"         response:\n{pretty}")

    total = passed + failed
    print(f"\n{'━' * 43}")
    print(f"  Results: {passed} passed / {failed} failed / {total} total")
    print(f"  {'All tests passed ✓' if failed == 0 else f'{failed} test(s) failed ✗'}")
    print(f"{'━' * 43}\n")
    sys.exit(0 if failed == 0 else 1)


if __name__ == "__main__":
    asyncio.run(main())
