"""Typed failures raised by the catalog core.

Handlers and adapters translate lower-level exceptions into these so callers can
react to the category of failure instead of a library-specific exception type.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog failures."""


class DuplicateName(CatalogError):
    """A beverage with the requested name already exists."""

    def __init__(self, name: str, *, existing_id: int | None = None) -> None:
        super().__init__(f"A beverage named {name!r} already exists")
        self.name = name
        self.existing_id = existing_id


class NotFound(CatalogError):
    """A lookup by key found nothing."""

    def __init__(self, entity: str, key: object) -> None:
        super().__init__(f"{entity} {key!r} not found")
        self.entity = entity
        self.key = key


class ValidationFailure(CatalogError, ValueError):
    """A payload or argument failed structural validation."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class PersistenceFailure(CatalogError):
    """The store rejected a query or the atomic save."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConcurrentModification(PersistenceFailure):
    """A concurrent writer changed the record between load and save."""


class SourceUnavailable(CatalogError):
    """An external catalog source could not deliver results."""

    def __init__(
        self,
        source: str,
        message: str,
        *,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.cause = cause
