"""JSON request and response models for the command-line and HTTP surfaces.

Requests accept snake_case or camelCase keys. Validation errors are reported as
``ValidationFailure`` with a dotted field path such as
``ingredients[0].measurement``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from sipster.domain.errors import ValidationFailure
from sipster.domain.model import GlassType
from sipster.domain.payloads import BeveragePayload, IngredientDraft, IngredientReference

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sipster.domain.model import Beverage, BeverageIngredient
    from sipster.domain.search import SearchResult


class RequestModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )


class IngredientDraftModel(RequestModel):
    name: str = Field(min_length=1)
    description: str | None = None
    image: str | None = None


class IngredientReferenceModel(RequestModel):
    ingredient_id: int | None = Field(default=None, gt=0)
    ingredient: IngredientDraftModel | None = None
    measurement: str = Field(min_length=1)

    @model_validator(mode="after")
    def _require_ingredient(self) -> IngredientReferenceModel:
        if self.ingredient_id is None and self.ingredient is None:
            raise ValueError("either ingredientId or inline ingredient fields are required")
        return self


class BeverageRequest(RequestModel):
    beverage_id: int | None = Field(default=None, gt=0)
    name: str = Field(min_length=1)
    tag: str | None = None
    alcohol: bool = False
    glass: GlassType | None = None
    instruction: str | None = None
    image: str | None = None
    video: str | None = None
    image_attribution: str | None = None
    creative_commons_confirmed: bool = False
    ingredients: list[IngredientReferenceModel] | None = None

    @field_validator("glass", mode="before")
    @classmethod
    def _parse_glass(cls, value: object) -> GlassType | None:
        if value is None:
            return None
        return GlassType.parse(value)

    def to_payload(self) -> BeveragePayload:
        ingredients = (
            None
            if self.ingredients is None
            else tuple(_to_reference(item) for item in self.ingredients)
        )
        return BeveragePayload(
            beverage_id=self.beverage_id,
            name=self.name,
            tag=self.tag,
            alcohol=self.alcohol,
            glass=self.glass,
            instruction=self.instruction,
            image=self.image,
            video=self.video,
            image_attribution=self.image_attribution,
            creative_commons_confirmed=self.creative_commons_confirmed,
            ingredients=ingredients,
        )


def _to_reference(item: IngredientReferenceModel) -> IngredientReference:
    draft = (
        None
        if item.ingredient is None
        else IngredientDraft(
            name=item.ingredient.name,
            description=item.ingredient.description,
            image=item.ingredient.image,
        )
    )
    return IngredientReference(
        ingredient_id=item.ingredient_id,
        ingredient=draft,
        measurement=item.measurement,
    )


def _field_path(location: Sequence[int | str]) -> str:
    path = ""
    for part in location:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "payload"


def parse_beverage_payload(data: Any) -> BeveragePayload:
    """Validate a decoded JSON body and convert it into a domain payload."""

    try:
        request = BeverageRequest.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise ValidationFailure(_field_path(first["loc"]), first["msg"]) from exc
    return request.to_payload()


# Responses -------------------------------------------------------------------


class ResponseModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkView(ResponseModel):
    ingredient_id: int | None
    name: str
    description: str | None = None
    measurement: str | None = None

    @classmethod
    def from_domain(cls, link: BeverageIngredient) -> LinkView:
        ingredient = link.ingredient
        return cls(
            ingredient_id=ingredient.id,
            name=ingredient.name,
            description=ingredient.description,
            measurement=link.measurement,
        )


class BeverageView(ResponseModel):
    id: int | None
    name: str
    tag: str | None = None
    alcohol: bool = False
    glass: str | None = None
    instruction: str | None = None
    image: str | None = None
    video: str | None = None
    image_attribution: str | None = None
    creative_commons_confirmed: bool = False
    provenance: str
    external_id: str | None = None
    ingredients: list[LinkView] = Field(default_factory=list["LinkView"])

    @classmethod
    def from_domain(cls, beverage: Beverage) -> BeverageView:
        return cls(
            id=beverage.id,
            name=beverage.name,
            tag=beverage.tag,
            alcohol=beverage.alcohol,
            glass=beverage.glass.label if beverage.glass is not None else None,
            instruction=beverage.instruction,
            image=beverage.image,
            video=beverage.video,
            image_attribution=beverage.image_attribution,
            creative_commons_confirmed=beverage.creative_commons_confirmed,
            provenance=str(beverage.provenance),
            external_id=beverage.external_id,
            ingredients=[LinkView.from_domain(link) for link in beverage.links],
        )


class SearchView(ResponseModel):
    beverages: list[BeverageView]
    degraded: bool = False
    unavailable_sources: list[str] = Field(default_factory=list[str])

    @classmethod
    def from_domain(cls, result: SearchResult) -> SearchView:
        return cls(
            beverages=[BeverageView.from_domain(beverage) for beverage in result.beverages],
            degraded=result.degraded,
            unavailable_sources=[error.source for error in result.source_errors],
        )
