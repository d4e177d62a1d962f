"""HTTP client for TheCocktailDB search API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from sipster.adapters.http_resilience import ResilientClient
from sipster.config.cocktaildb import CocktailDbConfig, get_cocktaildb_config
from sipster.domain.errors import SourceUnavailable
from sipster.domain.ports.fetching import BeverageSearcher

from .schema import SearchResponse, has_drinks
from .translator import parse_beverages

if TYPE_CHECKING:
    from collections.abc import Callable

    from sipster.config.http_resilience import ResilienceConfig
    from sipster.domain.model import Beverage

log = getLogger(__name__)

SEARCH_PATH = "search.php"
SOURCE_NAME = "cocktaildb"


def _default_config() -> CocktailDbConfig:
    return get_cocktaildb_config(cache_predicate=has_drinks)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class CocktailDbAPIError(RuntimeError):
    """Raised when TheCocktailDB answers with something other than a search body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class CocktailDbSearcher:
    """Search TheCocktailDB by drink name.

    Every failure, from timeouts to malformed bodies, surfaces as
    ``SourceUnavailable`` so callers can degrade instead of fail.
    """

    config: CocktailDbConfig = field(default_factory=_default_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def source(self) -> str:
        return SOURCE_NAME

    async def search_by_name(self, term: str) -> list[Beverage]:
        try:
            response = await self._request_search(term)
        except (httpx.HTTPError, CocktailDbAPIError, ValidationError, ValueError) as exc:
            log.warning(f"TheCocktailDB search for {term!r} failed: {exc}")
            raise SourceUnavailable(SOURCE_NAME, str(exc) or type(exc).__name__, cause=exc) from exc
        beverages = parse_beverages(response.items)
        log.debug("TheCocktailDB returned %d drink(s) for %r", len(beverages), term)
        return beverages

    async def _request_search(self, term: str) -> SearchResponse:
        async with self.client_factory(self.config.resilience) as client:
            response = await client.get(SEARCH_PATH, params={"s": term})
        if response.status_code >= 400:
            raise CocktailDbAPIError(
                f"HTTP {response.status_code} from {SEARCH_PATH}",
                status_code=response.status_code,
            )

        payload = response.json()
        if not isinstance(payload, dict) or "drinks" not in payload:
            raise CocktailDbAPIError("Unexpected TheCocktailDB response payload")
        return SearchResponse.model_validate(payload)


if TYPE_CHECKING:
    _searcher_check: BeverageSearcher = CocktailDbSearcher()
