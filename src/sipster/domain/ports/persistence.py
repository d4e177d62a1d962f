"""Ports for persisting catalog records."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from sipster.domain.model import Beverage, Ingredient, User


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent record store.

    Missing keys yield ``None``; lookups never raise for absent records.
    """

    def get(self, entity_id: int) -> TEntity | None: ...

    def add(self, entity: TEntity) -> None: ...

    def count(self) -> int: ...


@runtime_checkable
class BeverageRepository(Repository[Beverage], Protocol):
    """Persistence contract for beverages and their ingredient links."""

    def search_by_name(self, term: str) -> list[Beverage]:
        """Beverages whose name contains ``term``, case-insensitively, in key order."""
        ...

    def find_id_by_name(self, name: str, *, exclude_id: int | None = None) -> int | None:
        """Key of another beverage whose name matches ``name`` ignoring case, if any."""
        ...

    def remove(self, beverage: Beverage) -> None: ...


@runtime_checkable
class IngredientRepository(Repository[Ingredient], Protocol):
    """Repository contract for ingredients."""


@runtime_checkable
class UserRepository(Repository[User], Protocol):
    """Repository contract for users."""
