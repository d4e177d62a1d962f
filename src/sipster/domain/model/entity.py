"""
Base building blocks:
surrogate identity and the entity_type contract.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from sipster.domain.model.enums import EntityType


@runtime_checkable
class EntityRef(Protocol):
    """Reference to a typed entity by its surrogate key."""

    @property
    def entity_type(self) -> EntityType: ...

    @property
    def id(self) -> int | None: ...


@dataclass(eq=False, kw_only=True)
class Entity:
    """Surrogate keys are assigned by the store on first save; ``None`` until then."""

    id: int | None = None

    # class-level discriminator; subclasses must override
    ENTITY_TYPE: ClassVar[EntityType]

    @property
    def entity_type(self) -> EntityType:
        return self.ENTITY_TYPE

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

    def same_identity(self, other: Entity) -> bool:
        """Identity match: same object, or same type and same assigned key."""
        if other is self:
            return True
        if other.entity_type != self.entity_type:
            return False
        return self.is_persisted and self.id == other.id
