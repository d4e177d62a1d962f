"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import func, select

from sipster.adapters.sqlalchemy.mappings import (
    beverage_table,
    ingredient_table,
    user_table,
)
from sipster.domain.model import Beverage, Ingredient, User, name_key

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.orm import Session

    from sipster.domain.model import Entity


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyRepository[TEntity: Entity]:
    """Shared key lookup, insert and count for one mapped table."""

    def __init__(self, session: Session, entity_cls: type[TEntity], table: Table) -> None:
        self.session = session
        self._entity_cls = entity_cls
        self._table = table

    def get(self, entity_id: int) -> TEntity | None:
        return self.session.get(self._entity_cls, entity_id)

    def add(self, entity: TEntity) -> None:
        self.session.add(entity)

    def count(self) -> int:
        stmt = select(func.count()).select_from(self._table)
        return self.session.execute(stmt).scalar_one()


class SqlAlchemyBeverageRepository(SqlAlchemyRepository[Beverage]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Beverage, beverage_table)

    def search_by_name(self, term: str) -> list[Beverage]:
        pattern = f"%{_escape_like(term.casefold())}%"
        stmt = (
            select(Beverage)
            .where(beverage_table.c.name_key.like(pattern, escape="\\"))
            .order_by(beverage_table.c.id)
        )
        return list(self.session.execute(stmt).scalars().all())

    def find_id_by_name(self, name: str, *, exclude_id: int | None = None) -> int | None:
        stmt = select(beverage_table.c.id).where(beverage_table.c.name_key == name_key(name))
        if exclude_id is not None:
            stmt = stmt.where(beverage_table.c.id != exclude_id)
        return self.session.execute(stmt.order_by(beverage_table.c.id).limit(1)).scalar()

    def remove(self, beverage: Beverage) -> None:
        self.session.delete(beverage)


class SqlAlchemyIngredientRepository(SqlAlchemyRepository[Ingredient]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, Ingredient, ingredient_table)


class SqlAlchemyUserRepository(SqlAlchemyRepository[User]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, User, user_table)
