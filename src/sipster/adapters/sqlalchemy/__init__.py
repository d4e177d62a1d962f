"""SQLAlchemy adapter package for the beverage catalog."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyBeverageRepository,
    SqlAlchemyIngredientRepository,
    SqlAlchemyUserRepository,
)
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyBeverageRepository",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyIngredientRepository",
    "SqlAlchemyUserRepository",
    "StartupError",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
