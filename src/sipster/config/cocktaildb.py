"""TheCocktailDB configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, ShouldCacheHook

COCKTAILDB_ROOT_URL = "https://www.thecocktaildb.com/api/json/v1"
COCKTAILDB_TEST_API_KEY = "1"
COCKTAILDB_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class CocktailDbConfig:
    """Holds TheCocktailDB API configuration values."""

    api_key: str
    resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or build_base_url(COCKTAILDB_ROOT_URL, self.api_key)


def build_base_url(root_url: str, api_key: str) -> str:
    return f"{root_url.rstrip('/')}/{api_key}/"


def get_cocktaildb_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_predicate: ShouldCacheHook | None = None,
) -> CocktailDbConfig:
    api_key = optional_env_var("COCKTAILDB_API_KEY", COCKTAILDB_TEST_API_KEY)
    root_url = optional_env_var("COCKTAILDB_BASE_URL", COCKTAILDB_ROOT_URL)
    return CocktailDbConfig(
        api_key=api_key,
        resilience=resilience
        or ResilienceConfig(
            name="cocktaildb",
            base_url=build_base_url(root_url, api_key),
            timeout_seconds=COCKTAILDB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            cache=CacheConfig(backend="memory", should_cache=cache_predicate),
        ),
    )
