"""Shared fixtures for TheCocktailDB adapter tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

CocktailDbPayload = dict[str, object]
FIXTURES = Path("tests/data/cocktaildb")


def load_fixture(name: str) -> CocktailDbPayload:
    return json.loads((FIXTURES / name).read_text())


@pytest.fixture
def margarita_search() -> CocktailDbPayload:
    return load_fixture("search_margarita.json")
