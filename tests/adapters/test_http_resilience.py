"""Resilient HTTP client wiring: retries, caching components and hooks."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, cast

import httpx
import pytest
from hishel import AsyncSqliteStorage, FilterPolicy

from sipster.adapters.cocktaildb.schema import has_drinks
from sipster.adapters.http_resilience import (
    ResilientClient,
    _build_cache_components,  # pyright: ignore[reportPrivateUsage]
    _ShouldCacheResponseFilter,  # pyright: ignore[reportPrivateUsage]
    build_retry,
)
from sipster.config.http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

if TYPE_CHECKING:
    from hishel import Response as HishelCacheResponse


def test_build_retry_copies_policy() -> None:
    retry = build_retry(RetryPolicy(total=5, backoff_factor=0.1, status_forcelist=frozenset({503})))

    assert retry.total == 5
    assert retry.backoff_factor == 0.1
    assert retry.is_retryable_status_code(503)
    assert not retry.is_retryable_status_code(500)


def test_cache_components_absent_without_config() -> None:
    assert _build_cache_components(None) == (None, None)
    assert _build_cache_components(CacheConfig(enabled=False)) == (None, None)


def test_memory_cache_without_predicate_has_no_filter_policy() -> None:
    storage, policy = _build_cache_components(CacheConfig(backend="memory"))

    assert isinstance(storage, AsyncSqliteStorage)
    assert policy is None


def test_cache_predicate_becomes_filter_policy() -> None:
    storage, policy = _build_cache_components(
        CacheConfig(backend="memory", should_cache=has_drinks)
    )

    assert storage is not None
    assert isinstance(policy, FilterPolicy)


def test_unknown_cache_backend_is_rejected() -> None:
    config = CacheConfig(backend="redis")  # type: ignore[arg-type]

    with pytest.raises(ValueError, match="Unsupported cache backend"):
        _build_cache_components(config)


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        (b'{"drinks": [{"idDrink": "1"}]}', True),
        (b'{"drinks": null}', False),
        (b"<html>", False),
        (b"\xff\xfe", False),
        (None, False),
    ],
)
def test_should_cache_filter_only_keeps_matching_json(body: bytes | None, expected: bool) -> None:
    response_filter = _ShouldCacheResponseFilter(has_drinks)
    item = cast("HishelCacheResponse", object())

    assert response_filter.needs_body()
    assert response_filter.apply(item, body) is expected


def test_client_applies_base_url_headers_and_hooks() -> None:
    seen: list[httpx.Request] = []
    hooked: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    async def record(response: httpx.Response) -> None:
        hooked.append(response.status_code)

    config = ResilienceConfig(
        name="test",
        base_url="https://api.test/v1/",
        retry=RetryPolicy(total=0),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        cache=None,
        response_hooks=(record,),
        default_headers={"X-Client": "sipster"},
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("search.php", params={"s": "gin"})

    response = asyncio.run(run())

    assert response.json() == {"ok": True}
    (request,) = seen
    assert str(request.url) == "https://api.test/v1/search.php?s=gin"
    assert request.headers["X-Client"] == "sipster"
    assert hooked == [200]


def test_client_retries_listed_status_codes() -> None:
    statuses = iter([503, 200])

    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses))

    config = ResilienceConfig(
        name="test",
        base_url="https://api.test/",
        retry=RetryPolicy(total=1, backoff_factor=0.0, backoff_jitter=0.0),
        cache=None,
    )

    async def run() -> httpx.Response:
        async with ResilientClient(config, transport=httpx.MockTransport(handler)) as client:
            return await client.get("ping")

    assert asyncio.run(run()).status_code == 200
