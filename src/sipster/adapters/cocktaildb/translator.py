"""Translate TheCocktailDB payloads into catalog entities.

Translated records are never persisted: they carry ``EXTERNAL_CATALOG``
provenance, no storage key, and the API's ``idDrink`` as ``external_id``.
"""

from __future__ import annotations

from logging import getLogger

from sipster.domain.model import Beverage, GlassType, Ingredient, Provenance

from .schema import DrinkPayload

log = getLogger(__name__)

NON_ALCOHOLIC = "non alcoholic"


def _is_alcoholic(value: str | None) -> bool:
    return value is not None and value.strip().lower() != NON_ALCOHOLIC


def _tag(payload: DrinkPayload) -> str | None:
    if payload.category:
        return payload.category
    if payload.tags:
        return payload.tags.split(",")[0].strip() or None
    return None


def _glass(payload: DrinkPayload) -> GlassType | None:
    if payload.glass is None:
        return None
    glass = GlassType.from_label(payload.glass)
    if glass is None:
        log.debug("Unmapped glass %r on drink %s", payload.glass, payload.id)
    return glass


def parse_beverage(payload: DrinkPayload | dict[str, object]) -> Beverage:
    drink = payload if isinstance(payload, DrinkPayload) else DrinkPayload.model_validate(payload)
    beverage = Beverage(
        name=drink.name,
        tag=_tag(drink),
        alcohol=_is_alcoholic(drink.alcoholic),
        glass=_glass(drink),
        instruction=drink.instructions,
        image=drink.thumbnail,
        video=drink.video,
        image_attribution=drink.image_attribution,
        creative_commons_confirmed=(drink.creative_commons_confirmed or "").lower() == "yes",
        provenance=Provenance.EXTERNAL_CATALOG,
        external_id=drink.id,
    )
    for slot in drink.ingredients:
        beverage.add_ingredient(Ingredient(name=slot.name), measurement=slot.measure)
    return beverage


def parse_beverages(payloads: list[DrinkPayload]) -> list[Beverage]:
    return [parse_beverage(payload) for payload in payloads]
