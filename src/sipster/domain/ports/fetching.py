"""Ports for fetching beverages from external catalogs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sipster.domain.model import Beverage


@runtime_checkable
class BeverageSearcher(Protocol):
    """Async port returning external records in the local entity shape.

    Implementations raise ``SourceUnavailable`` for every transport, status or
    payload failure, and tag their records ``Provenance.EXTERNAL_CATALOG``.
    """

    @property
    def source(self) -> str: ...

    async def search_by_name(self, term: str) -> list[Beverage]: ...


__all__ = ["BeverageSearcher"]
