from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from sipster.domain.errors import DuplicateName, ValidationFailure
from sipster.domain.model import GlassType
from sipster.domain.payloads import IngredientReference
from sipster.domain.reconciliation import (
    CreateBeverage,
    CreateIngredient,
    CreateLink,
    MutationKind,
    RemoveLink,
    UpdateBeverageFields,
    UpdateLinkMeasurement,
    apply_mutations,
    reconcile,
)
from tests.helpers.catalog import FakeCatalogUnitOfWork, existing, inline, make_payload

if TYPE_CHECKING:
    from sipster.domain.ports import CatalogRepositories
    from tests.helpers.catalog import InMemoryCatalog


@pytest.fixture
def repositories(catalog: InMemoryCatalog) -> CatalogRepositories:
    return FakeCatalogUnitOfWork(catalog).repositories


def test_create_stages_beverage_then_links(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")

    result = reconcile(
        None,
        make_payload(ingredients=[existing(rum.id or 0, "50ml"), inline("Mint", "10 leaves")]),
        repositories=repositories,
    )

    kinds = [mutation.kind for mutation in result.mutations]
    assert kinds == [
        MutationKind.CREATE_BEVERAGE,
        MutationKind.CREATE_INGREDIENT,
        MutationKind.CREATE_LINK,
        MutationKind.CREATE_LINK,
    ]
    create = result.mutations[0]
    assert isinstance(create, CreateBeverage)
    assert create.beverage is result.beverage
    assert result.beverage.name == "Mojito"
    assert result.beverage.glass is GlassType.HIGHBALL
    # nothing is linked until the apply stage runs
    assert result.beverage.links == ()


def test_create_reuses_existing_ingredient_identity(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")

    result = reconcile(
        None,
        make_payload(ingredients=[existing(rum.id or 0, "50ml")]),
        repositories=repositories,
    )

    links = [m for m in result.mutations if isinstance(m, CreateLink)]
    assert [link.ingredient for link in links] == [rum]
    assert not result.of_kind(MutationKind.CREATE_INGREDIENT)


def test_create_with_duplicate_name_fails_before_resolution(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    stored = catalog.seed_beverage("mojito")

    # the unknown key would fail resolution if the name check did not run first
    payload = make_payload(ingredients=[existing(404, "50ml")])
    with pytest.raises(DuplicateName) as excinfo:
        reconcile(None, payload, repositories=repositories)

    assert excinfo.value.name == "Mojito"
    assert excinfo.value.existing_id == stored.id


def test_unknown_key_without_inline_fields_names_the_field(
    repositories: CatalogRepositories,
) -> None:
    payload = make_payload(ingredients=[inline("Mint", "10 leaves"), existing(404, "50ml")])

    with pytest.raises(ValidationFailure) as excinfo:
        reconcile(None, payload, repositories=repositories)

    assert excinfo.value.field == "ingredients[1].ingredient_id"


def test_unknown_key_with_inline_fields_creates_the_ingredient(
    repositories: CatalogRepositories,
) -> None:
    reference = IngredientReference(
        ingredient_id=404,
        ingredient=inline("Mint", "x").ingredient,
        measurement="10 leaves",
    )

    result = reconcile(None, make_payload(ingredients=[reference]), repositories=repositories)

    created = result.of_kind(MutationKind.CREATE_INGREDIENT)
    assert len(created) == 1
    assert isinstance(created[0], CreateIngredient)
    assert created[0].ingredient.name == "Mint"


def test_repeated_existing_ingredient_yields_one_link_with_last_measurement(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    key = rum.id or 0

    result = reconcile(
        None,
        make_payload(ingredients=[existing(key, "40ml"), existing(key, "60ml")]),
        repositories=repositories,
    )

    links = [m for m in result.mutations if isinstance(m, CreateLink)]
    assert len(links) == 1
    assert links[0].measurement == "60ml"


def test_update_never_conflicts_with_itself(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    stored = catalog.seed_beverage("Mojito", tag="cocktail")

    result = reconcile(
        stored,
        make_payload("MOJITO", tag="cocktail"),
        repositories=repositories,
    )

    assert result.beverage is stored
    changes = result.of_kind(MutationKind.UPDATE_BEVERAGE_FIELDS)
    assert len(changes) == 1
    assert isinstance(changes[0], UpdateBeverageFields)
    assert changes[0].changes["name"] == "MOJITO"
    assert "tag" not in changes[0].changes


def test_update_rejects_rename_onto_another_beverage(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    catalog.seed_beverage("Daiquiri")
    stored = catalog.seed_beverage("Mojito")

    with pytest.raises(DuplicateName):
        reconcile(stored, make_payload("daiquiri"), repositories=repositories)


def test_update_stages_measurement_change_and_removal(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    sugar = catalog.seed_ingredient("Sugar")
    stored = catalog.seed_beverage(
        "Mojito",
        links=[(rum, "50ml"), (sugar, "2 tsp")],
        tag="cocktail",
        alcohol=True,
        glass=GlassType.HIGHBALL,
        instruction="Muddle and top up",
    )

    result = reconcile(
        stored,
        make_payload(ingredients=[existing(rum.id or 0, "60ml")]),
        repositories=repositories,
    )

    assert [m.kind for m in result.mutations] == [
        MutationKind.UPDATE_LINK_MEASUREMENT,
        MutationKind.REMOVE_LINK,
    ]
    update, removal = result.mutations
    assert isinstance(update, UpdateLinkMeasurement)
    assert update.measurement == "60ml"
    assert isinstance(removal, RemoveLink)
    assert removal.link.ingredient is sugar


def test_update_without_ingredient_list_leaves_links_alone(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    stored = catalog.seed_beverage("Mojito", links=[(rum, "50ml")])

    result = reconcile(stored, make_payload(ingredients=None), repositories=repositories)

    assert not result.of_kind(MutationKind.REMOVE_LINK)
    assert not result.of_kind(MutationKind.CREATE_LINK)


def test_update_with_empty_ingredient_list_removes_every_link(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    mint = catalog.seed_ingredient("Mint")
    stored = catalog.seed_beverage("Mojito", links=[(rum, "50ml"), (mint, "10 leaves")])

    result = reconcile(stored, make_payload(ingredients=[]), repositories=repositories)

    removed = [m.link.ingredient for m in result.mutations if isinstance(m, RemoveLink)]
    assert removed == [rum, mint]
    assert not result.of_kind(MutationKind.CREATE_INGREDIENT)


def test_update_with_identical_payload_is_a_noop(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    stored = catalog.seed_beverage(
        "Mojito",
        links=[(rum, "50ml")],
        tag="cocktail",
        alcohol=True,
        glass=GlassType.HIGHBALL,
        instruction="Muddle and top up",
    )

    result = reconcile(
        stored,
        make_payload(ingredients=[existing(rum.id or 0, "50ml")]),
        repositories=repositories,
    )

    assert result.is_noop


def test_apply_materializes_staged_links(
    catalog: InMemoryCatalog,
    repositories: CatalogRepositories,
) -> None:
    rum = catalog.seed_ingredient("White rum")
    result = reconcile(
        None,
        make_payload(ingredients=[existing(rum.id or 0, "50ml"), inline("Mint", "10 leaves")]),
        repositories=repositories,
    )

    summary = apply_mutations(result, repositories=repositories)

    assert summary.applied == len(result.mutations)
    assert summary.created == 4
    assert [(link.ingredient.name, link.measurement) for link in result.beverage.links] == [
        ("White rum", "50ml"),
        ("Mint", "10 leaves"),
    ]
