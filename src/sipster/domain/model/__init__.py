"""Public domain model surface."""

from __future__ import annotations

from sipster.domain.model.catalog import Beverage, BeverageIngredient, Ingredient, name_key
from sipster.domain.model.entity import Entity, EntityRef
from sipster.domain.model.enums import EntityType, GlassType, Provenance
from sipster.domain.model.user import Favorite, User

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "EntityRef",
    # catalog
    "Beverage",
    "BeverageIngredient",
    "Ingredient",
    "name_key",
    # user
    "User",
    "Favorite",
    # enums
    "EntityType",
    "GlassType",
    "Provenance",
]
