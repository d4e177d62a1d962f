"""Request handlers for the beverage catalog.

Each handler runs in its own unit of work. Callers are already authorized;
nothing here looks at credentials.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sipster.domain.errors import NotFound, ValidationFailure
from sipster.domain.reconciliation import persist_reconciliation, reconcile
from sipster.domain.search import SearchResult, merge_search_results

if TYPE_CHECKING:
    from collections.abc import Callable

    from sipster.domain.model import Beverage
    from sipster.domain.payloads import BeveragePayload
    from sipster.domain.ports import BeverageSearcher, CatalogUnitOfWork

    type UnitOfWorkFactory = Callable[[], CatalogUnitOfWork]


log = getLogger(__name__)


async def search_beverages(
    term: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    searcher: BeverageSearcher | None,
) -> SearchResult:
    """Local matches followed by external matches for ``term``."""

    def search_local(value: str) -> list[Beverage]:
        with unit_of_work_factory() as uow:
            return uow.repositories.beverages.search_by_name(value)

    return await merge_search_results(term, local=search_local, external=searcher)


def get_beverage(beverage_id: int, *, unit_of_work_factory: UnitOfWorkFactory) -> Beverage:
    with unit_of_work_factory() as uow:
        beverage = uow.repositories.beverages.get(beverage_id)
    if beverage is None:
        raise NotFound("Beverage", beverage_id)
    return beverage


def create_beverage(
    payload: BeveragePayload,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Beverage:
    """Create a beverage, reusing referenced ingredients and creating inline ones."""

    log.info("Creating beverage %r", payload.name)
    with unit_of_work_factory() as uow:
        result = reconcile(None, payload, repositories=uow.repositories)
        persisted = persist_reconciliation(result, uow=uow)
    beverage = result.beverage
    log.info(
        "Created beverage %r as id=%s (%d mutation(s))",
        beverage.name,
        beverage.id,
        persisted.apply_result.applied,
    )
    return beverage


def update_beverage(
    beverage_id: int,
    payload: BeveragePayload,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> None:
    """Replace a beverage's fields and, when the payload lists any, its links.

    Raises ``ValidationFailure`` when the payload names a different id,
    ``NotFound`` for an unknown id and ``DuplicateName`` when renaming onto
    another beverage.
    """

    if payload.beverage_id is not None and payload.beverage_id != beverage_id:
        raise ValidationFailure(
            "beverage_id",
            f"payload id {payload.beverage_id} does not match requested id {beverage_id}",
        )

    log.info("Updating beverage id=%s", beverage_id)
    with unit_of_work_factory() as uow:
        existing = uow.repositories.beverages.get(beverage_id)
        if existing is None:
            raise NotFound("Beverage", beverage_id)
        result = reconcile(existing, payload, repositories=uow.repositories)
        persisted = persist_reconciliation(result, uow=uow)
    log.info(
        "Updated beverage id=%s: applied=%d, committed=%s",
        beverage_id,
        persisted.apply_result.applied,
        persisted.committed,
    )


def delete_beverage(beverage_id: int, *, unit_of_work_factory: UnitOfWorkFactory) -> None:
    """Delete a beverage with its links and favorites; ingredients stay."""

    with unit_of_work_factory() as uow:
        beverage = uow.repositories.beverages.get(beverage_id)
        if beverage is None:
            raise NotFound("Beverage", beverage_id)
        uow.repositories.beverages.remove(beverage)
        uow.commit()
    log.info("Deleted beverage id=%s", beverage_id)
