"""Apply a reconciliation result and commit it in one unit of work."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .apply import apply_mutations

if TYPE_CHECKING:
    from sipster.domain.ports import CatalogUnitOfWork

    from .apply import ApplyResult
    from .plan import ReconciliationResult


log = getLogger(__name__)


@dataclass(slots=True)
class PersistenceResult:
    """Summary of persisted changes for one reconciliation run."""

    committed: bool
    apply_result: ApplyResult


def persist_reconciliation(
    result: ReconciliationResult,
    *,
    uow: CatalogUnitOfWork,
) -> PersistenceResult:
    """Apply every staged mutation, then commit atomically.

    Must run inside ``uow``'s ``with`` block. A failing commit leaves nothing
    behind: the unit of work rolls back and raises ``PersistenceFailure``.
    """

    apply_result = apply_mutations(result, repositories=uow.repositories)
    if result.is_noop:
        log.debug("Nothing to persist for %r", result.beverage.name)
        return PersistenceResult(committed=False, apply_result=apply_result)
    uow.commit()
    return PersistenceResult(committed=True, apply_result=apply_result)
