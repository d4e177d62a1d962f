"""Public interface for TheCocktailDB adapter."""

from __future__ import annotations

from .client import CocktailDbAPIError, CocktailDbSearcher
from .schema import DrinkPayload, SearchResponse, has_drinks
from .translator import parse_beverage, parse_beverages

__all__ = [
    "CocktailDbAPIError",
    "CocktailDbSearcher",
    "DrinkPayload",
    "SearchResponse",
    "has_drinks",
    "parse_beverage",
    "parse_beverages",
]
