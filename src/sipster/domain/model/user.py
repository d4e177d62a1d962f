"""User-facing entities.

Credentials belong to the external identity provider; ``credential_ref`` is an
opaque handle the catalog stores but never interprets.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from sipster.domain.model.entity import Entity
from sipster.domain.model.enums import EntityType

if TYPE_CHECKING:
    from sipster.domain.model.catalog import Beverage


@dataclass(eq=False, kw_only=True)
class User(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.USER

    user_name: str
    email: str | None = None
    credential_ref: str | None = field(default=None, repr=False)

    _favorites: list[Favorite] = field(default_factory=list["Favorite"], repr=False)

    @property
    def favorites(self) -> tuple[Favorite, ...]:
        return tuple(self._favorites)

    @property
    def favorite_beverages(self) -> tuple[Beverage, ...]:
        return tuple(favorite.beverage for favorite in self._favorites)

    def add_favorite(self, beverage: Beverage) -> Favorite:
        for favorite in self._favorites:
            if favorite.beverage.same_identity(beverage):
                return favorite
        favorite = Favorite(_user=self, _beverage=beverage)
        if favorite not in self._favorites:
            self._favorites.append(favorite)
        return favorite

    def remove_favorite(self, beverage: Beverage) -> None:
        for favorite in list(self._favorites):
            if favorite.beverage.same_identity(beverage):
                self._favorites.remove(favorite)
                return
        raise ValueError("beverage is not a favorite of this user")


@dataclass(eq=False, kw_only=True)
class Favorite(Entity):
    ENTITY_TYPE: ClassVar[EntityType] = EntityType.FAVORITE

    _user: User = field(repr=False)
    _beverage: Beverage = field(repr=False)

    @property
    def user(self) -> User:
        return self._user

    @property
    def beverage(self) -> Beverage:
        return self._beverage
