"""Pydantic models describing TheCocktailDB search payloads."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

MAX_INGREDIENT_SLOTS = 15


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class CocktailDbBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class IngredientSlot(CocktailDbBaseModel):
    """One ``strIngredientN``/``strMeasureN`` pair."""

    name: str
    measure: str | None = None


class DrinkPayload(CocktailDbBaseModel):
    id: str = Field(alias="idDrink")
    name: str = Field(alias="strDrink")
    tags: str | None = Field(default=None, alias="strTags")
    category: str | None = Field(default=None, alias="strCategory")
    alcoholic: str | None = Field(default=None, alias="strAlcoholic")
    glass: str | None = Field(default=None, alias="strGlass")
    instructions: str | None = Field(default=None, alias="strInstructions")
    thumbnail: str | None = Field(default=None, alias="strDrinkThumb")
    video: str | None = Field(default=None, alias="strVideo")
    image_attribution: str | None = Field(default=None, alias="strImageAttribution")
    creative_commons_confirmed: str | None = Field(
        default=None, alias="strCreativeCommonsConfirmed"
    )
    ingredients: list[IngredientSlot] = Field(default_factory=list["IngredientSlot"])

    @model_validator(mode="before")
    @classmethod
    def _collect_ingredient_slots(cls, value: object) -> object:
        # the API flattens ingredients into numbered columns, empty ones null
        if not isinstance(value, Mapping):
            return value
        data: dict[str, object] = dict(cast(Mapping[str, object], value))
        if "ingredients" in data:
            return data
        slots: list[dict[str, object]] = []
        for index in range(1, MAX_INGREDIENT_SLOTS + 1):
            name = _blank_to_none(data.pop(f"strIngredient{index}", None))
            measure = _blank_to_none(data.pop(f"strMeasure{index}", None))
            if isinstance(name, str):
                slots.append({"name": name, "measure": measure})
        data["ingredients"] = slots
        return data

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    _normalize_optional = field_validator(
        "tags",
        "category",
        "alcoholic",
        "glass",
        "instructions",
        "thumbnail",
        "video",
        "image_attribution",
        "creative_commons_confirmed",
        mode="before",
    )(_blank_to_none)


class SearchResponse(CocktailDbBaseModel):
    """``search.php`` body; the API answers ``{"drinks": null}`` for no match."""

    drinks: list[DrinkPayload] | None = None

    @property
    def items(self) -> list[DrinkPayload]:
        return self.drinks or []


def has_drinks(payload: object) -> bool:
    """Cache predicate: only keep responses that matched something."""

    if not isinstance(payload, Mapping):
        return False
    drinks = cast(Mapping[str, object], payload).get("drinks")
    return isinstance(drinks, list) and bool(drinks)
