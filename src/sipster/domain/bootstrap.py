"""Seed an empty catalog with a small demonstration data set."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sipster.domain.model import Beverage, GlassType, Ingredient, User

if TYPE_CHECKING:
    from collections.abc import Callable

    from sipster.domain.ports import CatalogRepositories, CatalogUnitOfWork


log = getLogger(__name__)


def seed_ingredients() -> list[Ingredient]:
    return [
        Ingredient(
            name="Brocoli Liqueur",
            description="Great vegetable, quite bitter",
            image="http://brocoli.com",
        ),
        Ingredient(
            name="Potato",
            description="Saved nations from famine",
            image="http://potato.com",
        ),
        Ingredient(
            name="Tomato extract",
            description="The italian berry",
            image="http://tomato.com",
        ),
    ]


def seed_beverages() -> list[Beverage]:
    return [
        Beverage(
            name="Potato Margarita",
            tag="ordinary",
            alcohol=True,
            glass=GlassType.MARTINI,
            instruction="Shake it like a polaroid picture",
            image="http://potatomargarita.com",
        ),
        Beverage(
            name="Tomato Martini",
            tag="cocktail",
            alcohol=True,
            glass=GlassType.TUMBLER,
            instruction="Stir it up",
            image="http://tomatomartini.com",
        ),
        Beverage(
            name="Brocoli Old Fashioned",
            tag="ordinary",
            alcohol=False,
            glass=GlassType.LONG_GLASS,
            instruction="On the grind",
            image="http://brocolioldfashined.com",
        ),
    ]


def seed_users() -> list[User]:
    # credentials live with the identity provider
    return [
        User(user_name="ChuckNorris", email="kickass@gmail.com"),
        User(user_name="BruceLee", email="iiiiiijjjaaa@hotmail.com"),
    ]


SEED_MEASUREMENTS: tuple[str, ...] = ("60ml", "One Slice", "35ml")


def _is_empty(repositories: CatalogRepositories) -> bool:
    return (
        repositories.beverages.count() == 0
        and repositories.ingredients.count() == 0
        and repositories.users.count() == 0
    )


def bootstrap_catalog(*, unit_of_work_factory: Callable[[], CatalogUnitOfWork]) -> bool:
    """Write the seed set into empty storage.

    Returns ``True`` when data was written and ``False`` when storage already
    held records, so running it repeatedly is safe.
    """

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        if not _is_empty(repositories):
            log.info("Catalog already holds data, skipping bootstrap")
            return False

        ingredients = seed_ingredients()
        beverages = seed_beverages()
        users = seed_users()

        first = beverages[0]
        for ingredient, measurement in zip(ingredients, SEED_MEASUREMENTS, strict=True):
            first.add_ingredient(ingredient, measurement=measurement)
        for user, beverage in zip(users, beverages, strict=False):
            user.add_favorite(beverage)

        for ingredient in ingredients:
            repositories.ingredients.add(ingredient)
        for beverage in beverages:
            repositories.beverages.add(beverage)
        for user in users:
            repositories.users.add(user)
        uow.commit()

    log.info(
        "Bootstrapped catalog: %d beverages, %d ingredients, %d users",
        len(beverages),
        len(ingredients),
        len(users),
    )
    return True
