"""Map a write payload onto existing or new storage identities.

Stages run strictly in order: name conflict check, ingredient resolution, then
link staging. The engine reads through repositories but never writes; the
result it returns is materialized by :mod:`.apply`.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sipster.domain.errors import DuplicateName, ValidationFailure
from sipster.domain.model import Beverage, Ingredient
from sipster.domain.payloads import BEVERAGE_SCALAR_FIELDS

from .plan import (
    CreateBeverage,
    CreateIngredient,
    CreateLink,
    ReconciliationResult,
    RemoveLink,
    UpdateBeverageFields,
    UpdateLinkMeasurement,
)

if TYPE_CHECKING:
    from collections.abc import Hashable

    from sipster.domain.model import BeverageIngredient
    from sipster.domain.payloads import BeveragePayload, IngredientReference
    from sipster.domain.ports import CatalogRepositories


log = getLogger(__name__)


def reconcile(
    existing: Beverage | None,
    payload: BeveragePayload,
    *,
    repositories: CatalogRepositories,
) -> ReconciliationResult:
    """Stage the mutations that turn ``existing`` (or nothing) into ``payload``.

    Raises ``DuplicateName`` before any ingredient lookup when the name collides
    with another beverage, and ``ValidationFailure`` for references that name
    an unknown ingredient without inline fields.
    """

    _check_name_conflict(existing, payload, repositories=repositories)

    if existing is None:
        beverage = Beverage(**payload.scalar_fields())
        result = ReconciliationResult(beverage=beverage)
        result.stage(CreateBeverage(beverage=beverage))
    else:
        result = ReconciliationResult(beverage=existing)
        changes = _changed_fields(existing, payload)
        if changes:
            result.stage(UpdateBeverageFields(changes=changes))

    if payload.ingredients is not None:
        desired = _resolve_ingredients(
            payload.ingredients, repositories=repositories, result=result
        )
        _stage_links(existing, desired, result=result)

    log.debug(
        "Reconciled %r into %d mutation(s)",
        payload.name,
        len(result.mutations),
    )
    return result


def _check_name_conflict(
    existing: Beverage | None,
    payload: BeveragePayload,
    *,
    repositories: CatalogRepositories,
) -> None:
    exclude_id = existing.id if existing is not None else None
    existing_id = repositories.beverages.find_id_by_name(payload.name, exclude_id=exclude_id)
    if existing_id is not None:
        raise DuplicateName(payload.name, existing_id=existing_id)


def _changed_fields(existing: Beverage, payload: BeveragePayload) -> dict[str, object]:
    changes: dict[str, object] = {}
    for name in BEVERAGE_SCALAR_FIELDS:
        value = getattr(payload, name)
        if getattr(existing, name) != value:
            changes[name] = value
    return changes


def _resolve_ingredients(
    references: tuple[IngredientReference, ...],
    *,
    repositories: CatalogRepositories,
    result: ReconciliationResult,
) -> dict[Hashable, tuple[Ingredient, str]]:
    # keyed by stored id so a repeated reference collapses to one link;
    # insertion order is first appearance, the value is the last measurement
    desired: dict[Hashable, tuple[Ingredient, str]] = {}
    for index, reference in enumerate(references):
        ingredient = _lookup(reference, repositories=repositories)
        if ingredient is not None:
            key: Hashable = ("stored", ingredient.id)
        else:
            ingredient = _draft_ingredient(reference, index=index)
            result.stage(CreateIngredient(ingredient=ingredient))
            key = ("new", index)
        desired[key] = (ingredient, reference.measurement)
    return desired


def _lookup(
    reference: IngredientReference,
    *,
    repositories: CatalogRepositories,
) -> Ingredient | None:
    if reference.ingredient_id is None:
        return None
    return repositories.ingredients.get(reference.ingredient_id)


def _draft_ingredient(reference: IngredientReference, *, index: int) -> Ingredient:
    draft = reference.ingredient
    if draft is None:
        raise ValidationFailure(
            f"ingredients[{index}].ingredient_id",
            f"unknown ingredient {reference.ingredient_id} and no inline fields to create it",
        )
    return Ingredient(name=draft.name, description=draft.description, image=draft.image)


def _stage_links(
    existing: Beverage | None,
    desired: dict[Hashable, tuple[Ingredient, str]],
    *,
    result: ReconciliationResult,
) -> None:
    kept: list[BeverageIngredient] = []
    for ingredient, measurement in desired.values():
        link = existing.link_for(ingredient) if existing is not None else None
        if link is None:
            result.stage(CreateLink(ingredient=ingredient, measurement=measurement))
            continue
        kept.append(link)
        if link.measurement != measurement:
            result.stage(UpdateLinkMeasurement(link=link, measurement=measurement))

    if existing is None:
        return
    for link in existing.links:
        if link not in kept:
            result.stage(RemoveLink(link=link))
