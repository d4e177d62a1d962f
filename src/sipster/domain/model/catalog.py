"""Catalog entities. Ownership lives on the aggregate root.

Aggregate root:
- Beverage owns its BeverageIngredient links

Ingredients are independent records shared by any number of beverages; a link
references one but never owns it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from sipster.domain.model.entity import Entity
from sipster.domain.model.enums import EntityType, Provenance

if TYPE_CHECKING:
    from sipster.domain.model.enums import GlassType


def name_key(name: str) -> str:
    """Comparison key for beverage names: trimmed and Unicode case-folded."""

    return name.strip().casefold()


@dataclass(eq=False, kw_only=True)
class Ingredient(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.INGREDIENT

    name: str
    description: str | None = None
    image: str | None = None


@dataclass(eq=False, kw_only=True)
class BeverageIngredient(Entity):
    """Join record: one beverage, one ingredient, one measurement."""

    ENTITY_TYPE: ClassVar[EntityType] = EntityType.BEVERAGE_INGREDIENT

    _beverage: Beverage = field(repr=False)
    _ingredient: Ingredient = field(repr=False)
    measurement: str | None = None

    @property
    def beverage(self) -> Beverage:
        return self._beverage

    @property
    def ingredient(self) -> Ingredient:
        return self._ingredient


@dataclass(eq=False, kw_only=True)
class Beverage(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.BEVERAGE

    name: str
    tag: str | None = None
    alcohol: bool = False
    glass: GlassType | None = None
    instruction: str | None = None
    image: str | None = None
    video: str | None = None
    image_attribution: str | None = None
    creative_commons_confirmed: bool = False

    # Not persisted: stored rows are local by definition
    provenance: Provenance = Provenance.LOCAL
    external_id: str | None = None

    # Optimistic concurrency token, maintained by the store
    version: int | None = field(default=None, repr=False)

    # Owned children
    _links: list[BeverageIngredient] = field(
        default_factory=list["BeverageIngredient"], repr=False
    )

    @property
    def links(self) -> tuple[BeverageIngredient, ...]:
        return tuple(self._links)

    @property
    def ingredients(self) -> tuple[Ingredient, ...]:
        return tuple(link.ingredient for link in self._links)

    @property
    def is_external(self) -> bool:
        return self.provenance is Provenance.EXTERNAL_CATALOG

    def link_for(self, ingredient: Ingredient) -> BeverageIngredient | None:
        for link in self._links:
            if link.ingredient.same_identity(ingredient):
                return link
        return None

    # Commands (ownership here)
    def add_ingredient(
        self,
        ingredient: Ingredient,
        *,
        measurement: str | None = None,
    ) -> BeverageIngredient:
        if self.link_for(ingredient) is not None:
            raise ValueError(f"ingredient {ingredient.name!r} already linked to {self.name!r}")
        link = BeverageIngredient(
            _beverage=self,
            _ingredient=ingredient,
            measurement=measurement,
        )
        # the ORM backref may already have appended it
        if link not in self._links:
            self._links.append(link)
        return link

    def remove_link(self, link: BeverageIngredient) -> None:
        if link not in self._links:
            raise ValueError("link does not belong to this beverage")
        self._links.remove(link)
