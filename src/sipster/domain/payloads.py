"""Write payloads accepted by the reconciliation engine.

Payloads validate their own structure on construction, so anything that reaches
the engine is well-formed; resolving keys against the store is the engine's job.
"""

from __future__ import annotations

from dataclasses import dataclass

from sipster.domain.errors import ValidationFailure
from sipster.domain.model import GlassType


def _require_text(value: object, *, field: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailure(field, "must be a non-empty string")


def _optional_text(value: object, *, field: str) -> None:
    if value is not None and not isinstance(value, str):
        raise ValidationFailure(field, "must be a string")


@dataclass(frozen=True, slots=True, kw_only=True)
class IngredientDraft:
    """Inline fields for creating an ingredient that does not exist yet."""

    name: str
    description: str | None = None
    image: str | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self, *, prefix: str = "ingredient") -> None:
        _require_text(self.name, field=f"{prefix}.name")
        _optional_text(self.description, field=f"{prefix}.description")
        _optional_text(self.image, field=f"{prefix}.image")


@dataclass(frozen=True, slots=True, kw_only=True)
class IngredientReference:
    """Either an existing ingredient key, inline creation fields, or both.

    When both are given the key wins if it resolves; the inline fields are the
    fallback for keys the store does not know.
    """

    measurement: str
    ingredient_id: int | None = None
    ingredient: IngredientDraft | None = None

    def __post_init__(self) -> None:
        self.validate()

    def validate(self, *, prefix: str = "ingredients[]") -> None:
        _require_text(self.measurement, field=f"{prefix}.measurement")
        if self.ingredient_id is not None and (
            isinstance(self.ingredient_id, bool)
            or not isinstance(self.ingredient_id, int)
            or self.ingredient_id <= 0
        ):
            raise ValidationFailure(f"{prefix}.ingredient_id", "must be a positive integer")
        if self.ingredient_id is None and self.ingredient is None:
            raise ValidationFailure(
                f"{prefix}.ingredient",
                "either an ingredient id or inline ingredient fields are required",
            )
        if self.ingredient is not None:
            self.ingredient.validate(prefix=f"{prefix}.ingredient")


@dataclass(frozen=True, slots=True, kw_only=True)
class BeveragePayload:
    """Full replacement of a beverage's fields.

    ``ingredients=None`` leaves existing links untouched on update; a sequence
    (even an empty one) makes the stored links match it.
    """

    name: str
    tag: str | None = None
    alcohol: bool = False
    glass: GlassType | None = None
    instruction: str | None = None
    image: str | None = None
    video: str | None = None
    image_attribution: str | None = None
    creative_commons_confirmed: bool = False
    ingredients: tuple[IngredientReference, ...] | None = None
    beverage_id: int | None = None

    def __post_init__(self) -> None:
        _require_text(self.name, field="name")
        object.__setattr__(self, "name", self.name.strip())
        for name in ("tag", "instruction", "image", "video", "image_attribution"):
            _optional_text(getattr(self, name), field=name)
        if not isinstance(self.alcohol, bool):
            raise ValidationFailure("alcohol", "must be a boolean")
        if not isinstance(self.creative_commons_confirmed, bool):
            raise ValidationFailure("creative_commons_confirmed", "must be a boolean")
        if self.glass is not None and not isinstance(self.glass, GlassType):
            raise ValidationFailure("glass", f"unknown glass type {self.glass!r}")
        if self.ingredients is not None:
            for index, reference in enumerate(self.ingredients):
                if not isinstance(reference, IngredientReference):
                    raise ValidationFailure(
                        f"ingredients[{index}]", "must be an ingredient reference"
                    )
                reference.validate(prefix=f"ingredients[{index}]")

    def scalar_fields(self) -> dict[str, object]:
        """Beverage columns this payload sets, keyed by attribute name."""

        return {name: getattr(self, name) for name in BEVERAGE_SCALAR_FIELDS}


BEVERAGE_SCALAR_FIELDS: tuple[str, ...] = (
    "name",
    "tag",
    "alcohol",
    "glass",
    "instruction",
    "image",
    "video",
    "image_attribution",
    "creative_commons_confirmed",
)

