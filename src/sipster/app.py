"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from sipster.adapters.cocktaildb import CocktailDbSearcher
from sipster.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    is_started,
    startup,
)
from sipster.domain.bootstrap import bootstrap_catalog
from sipster.domain.catalog import (
    create_beverage,
    delete_beverage,
    get_beverage,
    search_beverages,
    update_beverage,
)
from sipster.domain.ports.unit_of_work import CatalogUnitOfWork

if TYPE_CHECKING:
    from sipster.domain.model import Beverage
    from sipster.domain.payloads import BeveragePayload
    from sipster.domain.ports.fetching import BeverageSearcher
    from sipster.domain.search import SearchResult

UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyCatalogUnitOfWork


def search(
    term: str,
    *,
    searcher: BeverageSearcher | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    include_external: bool = True,
) -> SearchResult:
    """Search local storage and TheCocktailDB, local results first."""

    effective_uow = _resolve_unit_of_work(unit_of_work_factory)
    effective_searcher = (searcher or CocktailDbSearcher()) if include_external else None
    result = asyncio.run(
        search_beverages(
            term,
            unit_of_work_factory=effective_uow,
            searcher=effective_searcher,
        )
    )
    log.info(
        f"Search {term!r}: {len(result)} result(s)"
        + (f", degraded ({len(result.source_errors)} source error(s))" if result.degraded else "")
    )
    return result


def get_by_id(
    beverage_id: int,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Beverage:
    return get_beverage(
        beverage_id,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )


def create(
    payload: BeveragePayload,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Beverage:
    return create_beverage(
        payload,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )


def update(
    beverage_id: int,
    payload: BeveragePayload,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> None:
    update_beverage(
        beverage_id,
        payload,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )


def delete(beverage_id: int, *, unit_of_work_factory: UnitOfWorkFactory | None = None) -> None:
    delete_beverage(beverage_id, unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory))


def bootstrap(*, unit_of_work_factory: UnitOfWorkFactory | None = None) -> bool:
    """Seed empty storage; returns whether anything was written."""

    return bootstrap_catalog(unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory))
