"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import BeverageSearcher
from .persistence import (
    BeverageRepository,
    IngredientRepository,
    Repository,
    UserRepository,
)
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "BeverageRepository",
    "BeverageSearcher",
    "CatalogRepositories",
    "CatalogUnitOfWork",
    "IngredientRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
    "UserRepository",
]
