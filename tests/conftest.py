# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure project root importable
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


class FakeTxtSource:
    """
    In-memory stand-in for TxtResolver: maps hostname -> TXT values and
    records every hostname queried.
    """

    def __init__(self, zones: dict[str, list[str]] | None = None) -> None:
        self.zones = dict(zones or {})
        self.queried: list[str] = []

    def add(self, hostname: str, *values: str) -> None:
        self.zones.setdefault(hostname, []).extend(values)

    def query(self, hostname: str) -> list[str]:
        self.queried.append(hostname)
        return list(self.zones.get(hostname, []))


@pytest.fixture()
def fake_txt() -> FakeTxtSource:
    return FakeTxtSource()


@pytest.fixture(autouse=True)
def _isolate_podns_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Autouse: keep developer .env / shell overrides from leaking into tests.
    """
    for name in ("PODNS_DNS_TIMEOUT", "PODNS_DNS_LIFETIME", "PODNS_NAMESERVERS", "PODNS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
