"""Builders for registry doubles backed by `httpx.MockTransport`."""

from __future__ import annotations

import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx

from company_directory.clients.sec_edgar import SecEdgarClient
from company_directory.services.directory.cache import DirectoryCacheService
from company_directory.services.directory.synthesizer import RecordSynthesizer

REGISTRY_URL = "https://registry.test/files/company_tickers.json"


def registry_payload(count: int = 3) -> dict[str, dict[str, Any]]:
    return {
        str(index): {"cik_str": 1000 + index, "ticker": f"TK{index}", "title": f"Registry Co {index}"}
        for index in range(count)
    }


class RegistryStub:
    """Serves a canned registry response and counts requests."""

    def __init__(
        self,
        payload: Any = None,
        *,
        status_code: int = 200,
        error: Callable[[httpx.Request], Exception] | None = None,
    ) -> None:
        self.payload = registry_payload() if payload is None else payload
        self.status_code = status_code
        self.error = error
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, json=self.payload)

    def client(self) -> SecEdgarClient:
        http_client = httpx.Client(transport=httpx.MockTransport(self.handler))
        return SecEdgarClient(url=REGISTRY_URL, http_client=http_client)


def timeout_error(request: httpx.Request) -> Exception:
    return httpx.ConnectTimeout("timed out", request=request)


class FakeClock:
    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2025, 1, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


def build_service(
    stub: RegistryStub,
    *,
    clock: FakeClock | None = None,
    seed: int = 7,
    **kwargs: Any,
) -> DirectoryCacheService:
    kwargs.setdefault("ttl_seconds", 3600)
    kwargs.setdefault("registry_limit", 20)
    return DirectoryCacheService(
        registry=stub.client(),
        synthesizer=RecordSynthesizer(rng=random.Random(seed)),
        clock=clock or FakeClock(),
        **kwargs,
    )
