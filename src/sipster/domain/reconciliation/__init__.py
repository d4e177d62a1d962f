"""Reconciliation of beverage write payloads against the catalog.

Flow:
1) ``reconcile`` checks the name, resolves ingredient references and stages
   mutations without writing
2) ``apply_mutations`` materializes them on entities and repositories
3) ``persist_reconciliation`` applies and commits through a unit of work
"""

from __future__ import annotations

from .apply import ApplyResult, apply_mutations
from .engine import reconcile
from .persist import PersistenceResult, persist_reconciliation
from .plan import (
    CreateBeverage,
    CreateIngredient,
    CreateLink,
    Mutation,
    MutationKind,
    ReconciliationResult,
    RemoveLink,
    UpdateBeverageFields,
    UpdateLinkMeasurement,
)

__all__ = [
    "ApplyResult",
    "CreateBeverage",
    "CreateIngredient",
    "CreateLink",
    "Mutation",
    "MutationKind",
    "PersistenceResult",
    "ReconciliationResult",
    "RemoveLink",
    "UpdateBeverageFields",
    "UpdateLinkMeasurement",
    "apply_mutations",
    "persist_reconciliation",
    "reconcile",
]
