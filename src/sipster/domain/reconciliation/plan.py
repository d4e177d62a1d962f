"""Staged mutations shared by the engine, apply and persist stages.

The engine only produces these records; nothing here touches storage. Applying
them is the apply stage's job and committing them is the unit of work's.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from sipster.domain.model import Beverage, BeverageIngredient, Ingredient


class MutationKind(StrEnum):
    CREATE_BEVERAGE = "create_beverage"
    UPDATE_BEVERAGE_FIELDS = "update_beverage_fields"
    CREATE_INGREDIENT = "create_ingredient"
    CREATE_LINK = "create_link"
    UPDATE_LINK_MEASUREMENT = "update_link_measurement"
    REMOVE_LINK = "remove_link"


@dataclass(slots=True, kw_only=True)
class CreateBeverage:
    """Insert a beverage that carries its payload fields already."""

    beverage: Beverage
    kind: Literal[MutationKind.CREATE_BEVERAGE] = MutationKind.CREATE_BEVERAGE


@dataclass(slots=True, kw_only=True)
class UpdateBeverageFields:
    """Overwrite scalar fields whose values differ from the payload."""

    changes: dict[str, object]
    kind: Literal[MutationKind.UPDATE_BEVERAGE_FIELDS] = MutationKind.UPDATE_BEVERAGE_FIELDS


@dataclass(slots=True, kw_only=True)
class CreateIngredient:
    ingredient: Ingredient
    kind: Literal[MutationKind.CREATE_INGREDIENT] = MutationKind.CREATE_INGREDIENT


@dataclass(slots=True, kw_only=True)
class CreateLink:
    ingredient: Ingredient
    measurement: str
    kind: Literal[MutationKind.CREATE_LINK] = MutationKind.CREATE_LINK


@dataclass(slots=True, kw_only=True)
class UpdateLinkMeasurement:
    link: BeverageIngredient
    measurement: str
    kind: Literal[MutationKind.UPDATE_LINK_MEASUREMENT] = MutationKind.UPDATE_LINK_MEASUREMENT


@dataclass(slots=True, kw_only=True)
class RemoveLink:
    link: BeverageIngredient
    kind: Literal[MutationKind.REMOVE_LINK] = MutationKind.REMOVE_LINK


type Mutation = (
    CreateBeverage
    | UpdateBeverageFields
    | CreateIngredient
    | CreateLink
    | UpdateLinkMeasurement
    | RemoveLink
)


@dataclass(slots=True)
class ReconciliationResult:
    """Target beverage plus the mutations that bring storage in line with a payload."""

    beverage: Beverage
    mutations: list[Mutation] = field(default_factory=list["Mutation"])

    def stage(self, mutation: Mutation) -> None:
        self.mutations.append(mutation)

    def of_kind(self, kind: MutationKind) -> list[Mutation]:
        return [mutation for mutation in self.mutations if mutation.kind is kind]

    @property
    def is_noop(self) -> bool:
        return not self.mutations
