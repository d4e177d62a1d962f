from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from sipster.domain.errors import (
    DuplicateName,
    NotFound,
    PersistenceFailure,
    SourceUnavailable,
)
from sipster.domain.model import Beverage, GlassType
from sipster.domain.search import SearchResult
from sipster.ui import cli as cli_module

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from sipster.domain.payloads import BeveragePayload


def _write(tmp_path: Path, body: object) -> str:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(body))
    return str(path)


def test_search_prints_merged_results(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    captured: dict[str, object] = {}

    def fake_search(term: str, **kwargs: object) -> SearchResult:
        captured["term"] = term
        captured.update(kwargs)
        return SearchResult(
            beverages=[Beverage(name="Mojito")],
            source_errors=[SourceUnavailable("cocktaildb", "timed out")],
        )

    monkeypatch.setattr(cli_module, "search", fake_search)

    cli_module.main(["search", "moj"])

    output = json.loads(capsys.readouterr().out)
    assert captured == {"term": "moj", "include_external": True}
    assert [item["name"] for item in output["beverages"]] == ["Mojito"]
    assert output["degraded"] is True
    assert output["unavailableSources"] == ["cocktaildb"]


def test_search_local_only_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_search(term: str, **kwargs: object) -> SearchResult:
        del term
        captured.update(kwargs)
        return SearchResult()

    monkeypatch.setattr(cli_module, "search", fake_search)

    cli_module.main(["search", "moj", "--local-only"])

    assert captured["include_external"] is False


def test_create_reads_payload_file(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    tmp_path: Path,
) -> None:
    received: list[BeveragePayload] = []

    def fake_create(payload: BeveragePayload) -> Beverage:
        received.append(payload)
        beverage = Beverage(name=payload.name, glass=payload.glass)
        beverage.id = 12
        return beverage

    monkeypatch.setattr(cli_module, "create", fake_create)

    cli_module.main(["create", "--file", _write(tmp_path, {"name": "Mojito", "glass": 3})])

    (payload,) = received
    assert payload.glass is GlassType.HIGHBALL
    output = json.loads(capsys.readouterr().out)
    assert output["id"] == 12
    assert output["glass"] == "Highball glass"


def test_update_passes_id_and_payload(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    captured: dict[str, object] = {}

    def fake_update(beverage_id: int, payload: BeveragePayload) -> None:
        captured["id"] = beverage_id
        captured["name"] = payload.name

    monkeypatch.setattr(cli_module, "update", fake_update)

    cli_module.main(["update", "5", "--file", _write(tmp_path, {"name": "Daiquiri"})])

    assert captured == {"id": 5, "name": "Daiquiri"}


def _raise(exc: BaseException) -> Callable[..., None]:
    def fake(*_: object, **__: object) -> None:
        raise exc

    return fake


@pytest.mark.parametrize(
    ("argv", "target", "error", "code"),
    [
        (["show", "9"], "get_by_id", NotFound("beverage", 9), cli_module.EXIT_NOT_FOUND),
        (["delete", "9"], "delete", NotFound("beverage", 9), cli_module.EXIT_NOT_FOUND),
        (["bootstrap"], "bootstrap", PersistenceFailure("disk full"), cli_module.EXIT_FAILURE),
        (["bootstrap"], "bootstrap", RuntimeError("boom"), cli_module.EXIT_FAILURE),
    ],
)
def test_failures_map_to_exit_codes(
    monkeypatch: pytest.MonkeyPatch,
    argv: list[str],
    target: str,
    error: BaseException,
    code: int,
) -> None:
    monkeypatch.setattr(cli_module, target, _raise(error))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(argv)

    assert excinfo.value.code == code


def test_duplicate_name_exits_with_duplicate_code(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(cli_module, "create", _raise(DuplicateName("Mojito", existing_id=1)))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["create", "--file", _write(tmp_path, {"name": "Mojito"})])

    assert excinfo.value.code == cli_module.EXIT_DUPLICATE


@pytest.mark.parametrize(
    "contents",
    ["{not json", json.dumps({"name": ""}), json.dumps({"name": "Mojito", "glass": "bucket"})],
)
def test_invalid_payload_files_exit_with_validation_code(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, contents: str
) -> None:
    monkeypatch.setattr(cli_module, "create", _raise(AssertionError("must not be called")))
    path = tmp_path / "payload.json"
    path.write_text(contents)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["create", "--file", str(path)])

    assert excinfo.value.code == cli_module.EXIT_VALIDATION


def test_missing_payload_file_exits_with_validation_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["create", "--file", str(tmp_path / "absent.json")])

    assert excinfo.value.code == cli_module.EXIT_VALIDATION


def test_unknown_command_is_rejected_by_argparse() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["shake"])

    assert excinfo.value.code == 2
