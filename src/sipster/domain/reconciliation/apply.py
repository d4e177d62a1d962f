"""Materialize staged mutations onto domain entities and repositories.

No commit or transaction control happens here; repositories only register new
records with the unit of work that owns them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .plan import (
    CreateBeverage,
    CreateIngredient,
    CreateLink,
    RemoveLink,
    UpdateBeverageFields,
    UpdateLinkMeasurement,
)

if TYPE_CHECKING:
    from sipster.domain.ports import CatalogRepositories

    from .plan import ReconciliationResult


@dataclass(slots=True)
class ApplyResult:
    """Summary of in-memory mutations performed by the applier."""

    applied: int = 0
    created: int = 0
    updated: int = 0
    removed: int = 0


def apply_mutations(
    result: ReconciliationResult,
    *,
    repositories: CatalogRepositories,
) -> ApplyResult:
    """Apply ``result.mutations`` in staging order."""

    beverage = result.beverage
    summary = ApplyResult()
    for mutation in result.mutations:
        if isinstance(mutation, CreateBeverage):
            repositories.beverages.add(mutation.beverage)
            summary.created += 1
        elif isinstance(mutation, UpdateBeverageFields):
            for name, value in mutation.changes.items():
                setattr(beverage, name, value)
            summary.updated += 1
        elif isinstance(mutation, CreateIngredient):
            repositories.ingredients.add(mutation.ingredient)
            summary.created += 1
        elif isinstance(mutation, CreateLink):
            beverage.add_ingredient(mutation.ingredient, measurement=mutation.measurement)
            summary.created += 1
        elif isinstance(mutation, UpdateLinkMeasurement):
            mutation.link.measurement = mutation.measurement
            summary.updated += 1
        elif isinstance(mutation, RemoveLink):
            beverage.remove_link(mutation.link)
            summary.removed += 1
        else:  # pragma: no cover - exhaustive over Mutation
            raise TypeError(f"Unsupported mutation: {mutation!r}")
        summary.applied += 1
    return summary
