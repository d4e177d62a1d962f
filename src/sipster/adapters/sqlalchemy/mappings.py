"""SQLAlchemy mapping metadata for the catalog domain model."""

from __future__ import annotations

import logging
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    Enum,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    UniqueConstraint,
    event,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from sipster.domain.model import (
    Beverage,
    BeverageIngredient,
    Favorite,
    GlassType,
    Ingredient,
    User,
    name_key,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.orm import Mapper

log = logging.getLogger(__name__)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Catalog tables --------------------------------------------------------------

beverage_table = Table(
    "beverage",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    # name_key(name), written on every flush
    Column("name_key", String, nullable=False, index=True),
    Column("tag", String, nullable=True),
    Column("alcohol", Boolean, nullable=False, default=False),
    Column("glass", Enum(GlassType, native_enum=False), nullable=True),
    Column("instruction", Text, nullable=True),
    Column("image", String, nullable=True),
    Column("video", String, nullable=True),
    Column("image_attribution", String, nullable=True),
    Column("creative_commons_confirmed", Boolean, nullable=False, default=False),
    Column("version", Integer, nullable=False),
)

ingredient_table = Table(
    "ingredient",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String, nullable=False),
    Column("description", Text, nullable=True),
    Column("image", String, nullable=True),
)

beverage_ingredient_table = Table(
    "beverage_ingredient",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "beverage_id",
        Integer,
        ForeignKey("beverage.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("ingredient_id", Integer, ForeignKey("ingredient.id"), nullable=False),
    Column("measurement", String, nullable=True),
    UniqueConstraint("beverage_id", "ingredient_id"),
)

# Users -----------------------------------------------------------------------

user_table = Table(
    "user_account",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_name", String, nullable=False, unique=True),
    Column("email", String, nullable=True),
    Column("credential_ref", String, nullable=True),
)

favorite_table = Table(
    "favorite",
    mapper_registry.metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "beverage_id",
        Integer,
        ForeignKey("beverage.id", ondelete="CASCADE"),
        nullable=False,
    ),
    UniqueConstraint("user_id", "beverage_id"),
)


def _sync_name_key(mapper: Mapper[Beverage], connection: Connection, target: Beverage) -> None:
    _ = mapper, connection
    target._name_key = name_key(target.name)  # type: ignore[attr-defined]


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(
        Beverage,
        beverage_table,
        properties={
            "_links": relationship(
                BeverageIngredient,
                back_populates="_beverage",
                cascade="all, delete-orphan",
                order_by=beverage_ingredient_table.c.id,
                lazy="selectin",
            ),
            "_name_key": beverage_table.c.name_key,
        },
        version_id_col=beverage_table.c.version,
    )
    event.listen(Beverage, "before_insert", _sync_name_key)
    event.listen(Beverage, "before_update", _sync_name_key)

    mapper_registry.map_imperatively(
        Ingredient,
        ingredient_table,
    )

    mapper_registry.map_imperatively(
        BeverageIngredient,
        beverage_ingredient_table,
        properties={
            "_beverage": relationship(
                Beverage,
                back_populates="_links",
            ),
            "_ingredient": relationship(
                Ingredient,
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(
        User,
        user_table,
        properties={
            "_favorites": relationship(
                Favorite,
                back_populates="_user",
                cascade="all, delete-orphan",
                order_by=favorite_table.c.id,
                lazy="selectin",
            ),
        },
    )

    mapper_registry.map_imperatively(
        Favorite,
        favorite_table,
        properties={
            "_user": relationship(
                User,
                back_populates="_favorites",
            ),
            "_beverage": relationship(
                Beverage,
                lazy="selectin",
            ),
        },
    )

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
