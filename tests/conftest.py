"""Shared fixtures and the conformance fixture loader.

Conformance fixtures live in tests/fixtures/*.yaml, one YAML document per
case. Each document holds an ``exchange`` object in wire format and
either an ``expect`` block (field values after parsing and, optionally,
the re-serialized ``written`` form) or ``expect_error`` naming the
failing field.
"""

from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

EXCHANGE: dict[str, Any] = {
    "request": {
        "protocol": "https",
        "timestamp": "2018-11-13T20:20:39+02:00",
        "method": "post",
        "host": "example.com",
        "headers": {
            "accept": "*/*",
            "multi-value": ["value1", "value2"],
        },
        "body": "a request body",
        "path": "/a/path?a=b&v=1&v=2",
    },
    "response": {
        "timestamp": "2019-11-13T20:20:39+02:00",
        "statusCode": 404,
        "headers": {
            "content-length": "15",
            "Upper-Case": "yes",
        },
        "body": "a response body",
    },
}


@pytest.fixture
def exchange_dict() -> dict[str, Any]:
    """A fresh, mutable copy of a complete wire-format exchange."""
    return copy.deepcopy(EXCHANGE)


@pytest.fixture
def exchange_json() -> str:
    return json.dumps(EXCHANGE, indent=2)


@pytest.fixture
def exchange_json_line() -> str:
    return json.dumps(EXCHANGE)


# ─── Conformance fixture loading ────────────────────────────────────────────


@dataclass
class ConformanceCase:
    """A single case from a conformance fixture file."""

    source: str
    name: str
    exchange: dict[str, Any]
    expect: dict[str, Any] | None
    expect_error: str | None

    @property
    def id(self) -> str:
        return f"{self.source}::{self.name}"


def load_conformance_cases() -> list[ConformanceCase]:
    """Load every case from tests/fixtures/*.yaml."""
    cases: list[ConformanceCase] = []
    if not FIXTURES_DIR.exists():
        return cases
    for yaml_file in sorted(FIXTURES_DIR.glob("*.yaml")):
        with yaml_file.open() as f:
            for doc in yaml.safe_load_all(f):
                if doc is None:
                    continue
                cases.append(
                    ConformanceCase(
                        source=yaml_file.name,
                        name=doc["name"],
                        exchange=doc["exchange"],
                        expect=doc.get("expect"),
                        expect_error=doc.get("expect_error"),
                    )
                )
    return cases
