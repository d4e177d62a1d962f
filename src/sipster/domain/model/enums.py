"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Final

from sipster.domain.errors import ValidationFailure

if TYPE_CHECKING:
    from collections.abc import Mapping


class Provenance(StrEnum):
    """Where a beverage record came from."""

    LOCAL = "local"
    EXTERNAL_CATALOG = "external_catalog"


class EntityType(StrEnum):
    BEVERAGE = "beverage"
    INGREDIENT = "ingredient"
    BEVERAGE_INGREDIENT = "beverage_ingredient"
    USER = "user"
    FAVORITE = "favorite"


class GlassType(StrEnum):
    """Serving glass. Declaration order defines the ordinal accepted by ``parse``."""

    MARTINI = "martini"
    TUMBLER = "tumbler"
    LONG_GLASS = "long_glass"
    HIGHBALL = "highball"
    MARGARITA = "margarita"
    TALL_GLASS = "tall_glass"
    COCKTAIL = "cocktail"
    OLD_FASHIONED = "old_fashioned"
    COLLINS = "collins"
    SHOT = "shot"
    COUPE = "coupe"
    WINE = "wine"
    MUG = "mug"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_ordinal(cls, ordinal: int) -> GlassType:
        members = list(cls)
        if not 0 <= ordinal < len(members):
            raise ValidationFailure("glass", f"unknown glass type ordinal {ordinal}")
        return members[ordinal]

    @classmethod
    def from_label(cls, label: str) -> GlassType | None:
        """Match a human label such as ``"Highball glass"``; ``None`` when unknown."""

        key = _normalize_label(label)
        return _BY_LABEL.get(key)

    @classmethod
    def parse(cls, value: object, *, field: str = "glass") -> GlassType:
        """Parse a payload value, rejecting anything outside the enumeration."""

        if isinstance(value, GlassType):
            return value
        if isinstance(value, bool):
            raise ValidationFailure(field, "glass type must not be a boolean")
        if isinstance(value, int):
            try:
                return cls.from_ordinal(value)
            except ValidationFailure as exc:
                raise ValidationFailure(field, exc.message) from None
        if isinstance(value, str):
            stripped = value.strip()
            if stripped.isdigit():
                return cls.parse(int(stripped), field=field)
            matched = cls.from_label(stripped)
            if matched is not None:
                return matched
            raise ValidationFailure(field, f"unknown glass type {value!r}")
        raise ValidationFailure(field, f"unsupported glass type value {value!r}")


_LABELS: Final[Mapping[GlassType, str]] = {
    GlassType.MARTINI: "Martini glass",
    GlassType.TUMBLER: "Tumbler",
    GlassType.LONG_GLASS: "Long glass",
    GlassType.HIGHBALL: "Highball glass",
    GlassType.MARGARITA: "Margarita glass",
    GlassType.TALL_GLASS: "Tall glass",
    GlassType.COCKTAIL: "Cocktail glass",
    GlassType.OLD_FASHIONED: "Old-fashioned glass",
    GlassType.COLLINS: "Collins glass",
    GlassType.SHOT: "Shot glass",
    GlassType.COUPE: "Coupe glass",
    GlassType.WINE: "Wine glass",
    GlassType.MUG: "Coffee mug",
    GlassType.OTHER: "Other",
}


def _normalize_label(value: str) -> str:
    return " ".join(value.strip().lower().replace("-", " ").replace("_", " ").split())


# Values, labels and legacy spellings from seed data all resolve to a member.
_BY_LABEL: Final[dict[str, GlassType]] = {
    **{_normalize_label(member.value): member for member in GlassType},
    **{_normalize_label(label): member for member, label in _LABELS.items()},
    _normalize_label("Thumbler"): GlassType.TUMBLER,
}
