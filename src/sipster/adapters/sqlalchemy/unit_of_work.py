"""SQLAlchemy-backed unit of work for the beverage catalog."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, object_session, sessionmaker
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from sipster.adapters.sqlalchemy.mappings import create_all_tables, start_mappers
from sipster.adapters.sqlalchemy.repositories import (
    SqlAlchemyBeverageRepository,
    SqlAlchemyIngredientRepository,
    SqlAlchemyUserRepository,
)
from sipster.config.storage import get_database_config
from sipster.domain.errors import ConcurrentModification, PersistenceFailure
from sipster.domain.model import Beverage, BeverageIngredient
from sipster.domain.ports.unit_of_work import CatalogRepositories, RepositoryCollection

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from sqlalchemy.engine import Engine
    from sqlalchemy.engine.interfaces import DBAPIConnection
    from sqlalchemy.pool import ConnectionPoolEntry


log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when a SQLAlchemy unit of work is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    _engine: Engine | None = None
    _session_factory: sessionmaker[Session] | None = None

    @property
    def engine(self) -> Engine | None:
        return self._engine

    @engine.setter
    def engine(self, value: Engine | None) -> None:
        self._session_factory = None
        self._engine = value

    @property
    def session_factory(self) -> sessionmaker[Session]:
        if self._engine is None:
            raise StartupError(
                "SQLAlchemy adapter not initialised. Call sipster.adapters.sqlalchemy."
                "unit_of_work.startup() before requesting a unit of work."
            )
        if self._session_factory is None:
            self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)
        return self._session_factory


_STATE = _AdapterState()


def _enable_sqlite_foreign_keys(
    dbapi_connection: DBAPIConnection,
    connection_record: ConnectionPoolEntry,
) -> None:
    _ = connection_record
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Initialise the SQLAlchemy engine, metadata, and session factory."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )

    if engine is None:
        database = get_database_config()
        engine = create_engine(database_uri or database.uri, echo=database.echo)
    if engine.dialect.name == "sqlite" and not event.contains(
        engine, "connect", _enable_sqlite_foreign_keys
    ):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    start_mappers()
    create_all_tables(engine)
    log.info("SQLAlchemy adapter started on %s", engine.url.render_as_string(hide_password=True))

    _STATE.engine = engine


def configured_engine() -> Engine | None:
    """Return the engine currently managed by the adapter (if any)."""

    return _STATE.engine


def is_started() -> bool:
    """Return whether the adapter has been initialised."""

    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None


def _bump_beverage_versions(
    session: Session,
    flush_context: object,
    instances: Iterable[object] | None,
) -> None:
    # link changes alone never touch the beverage row, so force an UPDATE to
    # run the version check against concurrent writers
    _ = flush_context, instances
    touched: list[Beverage] = []
    for obj in (*session.new, *session.dirty, *session.deleted):
        if isinstance(obj, BeverageIngredient):
            beverage = obj.beverage
        elif isinstance(obj, Beverage) and session.is_modified(obj):
            beverage = obj
        else:
            continue
        if (
            beverage is None
            or beverage in touched
            or beverage in session.new
            or beverage in session.deleted
            or object_session(beverage) is not session
        ):
            continue
        touched.append(beverage)
    for beverage in touched:
        flag_modified(beverage, "name")


class BaseSqlAlchemyUnitOfWork[TRepositories: RepositoryCollection](ABC):
    """Generic SQLAlchemy unit of work with pluggable repository collections.

    Library exceptions never leave the unit of work: a stale version becomes
    ``ConcurrentModification`` and any other SQLAlchemy error becomes
    ``PersistenceFailure`` after rolling back.
    """

    def __init__(self) -> None:
        self.session_factory: sessionmaker[Session] = _STATE.session_factory
        self._session: Session | None = None

    @abstractmethod
    def _build_repositories(self, session: Session) -> TRepositories: ...

    def _configure_session(self, session: Session) -> None:
        _ = session

    def __enter__(self) -> BaseSqlAlchemyUnitOfWork[TRepositories]:
        self.session = self.session_factory()
        self._configure_session(self.session)
        self._repositories = self._build_repositories(self.session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if exc_type is not None:
                self.rollback()
        finally:
            self.session.close()
            self.session = None
        if isinstance(exc_value, SQLAlchemyError):
            raise PersistenceFailure(str(exc_value), cause=exc_value) from exc_value
        return False

    def commit(self) -> None:
        try:
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            raise ConcurrentModification(
                "Record was changed by another writer; reload and retry", cause=exc
            ) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            log.error("Commit failed, rolled back: %s", exc)
            raise PersistenceFailure(f"Commit failed: {exc}", cause=exc) from exc

    def rollback(self) -> None:
        self.session.rollback()

    @property
    def repositories(self) -> TRepositories:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._repositories

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work session not initialised")
        return self._session

    @session.setter
    def session(self, session: Session | None) -> None:
        if self._session is not None and session is not None:
            raise StartupError("Unit of work session already initialised")
        self._session = session


class SqlAlchemyCatalogUnitOfWork(BaseSqlAlchemyUnitOfWork[CatalogRepositories]):
    """Unit of work managing SQLAlchemy sessions for the catalog."""

    def _configure_session(self, session: Session) -> None:
        event.listen(session, "before_flush", _bump_beverage_versions)

    def _build_repositories(self, session: Session) -> CatalogRepositories:
        return CatalogRepositories(
            beverages=SqlAlchemyBeverageRepository(session),
            ingredients=SqlAlchemyIngredientRepository(session),
            users=SqlAlchemyUserRepository(session),
        )


if TYPE_CHECKING:
    from sipster.domain.ports.unit_of_work import CatalogUnitOfWork

    _uow_check: CatalogUnitOfWork = SqlAlchemyCatalogUnitOfWork()
