"""Merge local and external search results into one response.

Both sources are queried concurrently. Local results always come first and
keep their storage order; external results follow in the order the source
returned them. Nothing is deduplicated and nothing fetched is persisted.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from sipster.domain.errors import SourceUnavailable, ValidationFailure

if TYPE_CHECKING:
    from collections.abc import Callable

    from sipster.domain.model import Beverage
    from sipster.domain.ports import BeverageSearcher


log = getLogger(__name__)

type LocalSearch = Callable[[str], list[Beverage]]


@dataclass(slots=True)
class SearchResult:
    """Unioned beverages, flagged when an external source failed."""

    beverages: list[Beverage] = field(default_factory=list["Beverage"])
    source_errors: list[SourceUnavailable] = field(default_factory=list["SourceUnavailable"])

    @property
    def degraded(self) -> bool:
        return bool(self.source_errors)

    def __len__(self) -> int:
        return len(self.beverages)


async def merge_search_results(
    term: str,
    *,
    local: LocalSearch,
    external: BeverageSearcher | None,
) -> SearchResult:
    """Query ``local`` in a worker thread and ``external`` concurrently.

    ``SourceUnavailable`` from the external source is recorded on the result
    and the local results are still returned. Any other error propagates.
    """

    if not isinstance(term, str) or not term.strip():
        raise ValidationFailure("term", "search term must not be blank")

    if external is None:
        local_results = await asyncio.to_thread(local, term)
        return SearchResult(beverages=list(local_results))

    local_results, (external_results, failure) = await asyncio.gather(
        asyncio.to_thread(local, term),
        _search_external(external, term),
    )
    result = SearchResult(beverages=[*local_results, *external_results])
    if failure is not None:
        result.source_errors.append(failure)
    log.debug(
        "Search %r: %d local, %d external%s",
        term,
        len(local_results),
        len(external_results),
        " (degraded)" if result.degraded else "",
    )
    return result


async def _search_external(
    searcher: BeverageSearcher,
    term: str,
) -> tuple[list[Beverage], SourceUnavailable | None]:
    try:
        return list(await searcher.search_by_name(term)), None
    except SourceUnavailable as exc:
        log.warning(
            "External source %s unavailable, returning local results only: %s",
            exc.source,
            exc,
        )
        return [], exc
