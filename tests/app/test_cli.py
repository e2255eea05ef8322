from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from mattergraph.app import build_mind_map, write_mind_map
from mattergraph.ui import cli as cli_module

if TYPE_CHECKING:
    from pathlib import Path

BATCH = {
    "matterId": "matter-1",
    "companies": [{"name": "Acme Pty Ltd", "acn": "123456789"}],
    "directors": [{"name": "Jane Doe", "dob": "1980-01-01", "companyAcn": "123456789"}],
    "shareholders": [
        {"name": "Jane Doe", "dob": "1980-01-01", "companyAcn": "123456789", "shares": 100}
    ],
}


@pytest.fixture
def batch_file(tmp_path: Path) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(BATCH))
    return path


def test_build_mind_map_from_payload() -> None:
    payload = build_mind_map(BATCH)

    assert payload["matterId"] == "matter-1"
    relationships = payload["relationships"]
    assert isinstance(relationships, list)
    assert [edge["label"] for edge in relationships] == ["Director", "100 shares"]


def test_write_mind_map_creates_parent_directories(batch_file: Path, tmp_path: Path) -> None:
    target = write_mind_map(batch_file, tmp_path / "out" / "map.json", indent=None)

    document = json.loads(target.read_text())
    assert document["stats"]["totalPersons"] == 1


def test_cli_build_writes_output_file(batch_file: Path, tmp_path: Path) -> None:
    output = tmp_path / "map.json"

    cli_module.main(["build", str(batch_file), "--output", str(output)])

    document = json.loads(output.read_text())
    assert document["matterId"] == "matter-1"
    assert document["stats"]["totalCompanies"] == 1


def test_cli_build_prints_to_stdout(
    batch_file: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    cli_module.main(["build", str(batch_file), "--indent", "0"])

    out = capsys.readouterr().out
    assert out.count("\n") == 1
    assert json.loads(out)["entities"]["persons"][0]["id"] == "person_jane_doe_1980-01-01"


def test_cli_missing_input_exits_with_usage_code(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["build", str(tmp_path / "missing.json")])

    assert excinfo.value.code == 2


def test_cli_invalid_log_level(batch_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["--log-level", "chatty", "build", str(batch_file)])

    assert excinfo.value.code == 2


def test_cli_negative_indent(batch_file: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["build", str(batch_file), "--indent", "-1"])

    assert excinfo.value.code == 2


def test_cli_unexpected_error_exits_with_failure(
    batch_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def boom(*_: object, **__: object) -> str:
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "build_mind_map_from_file", boom)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["build", str(batch_file)])

    assert excinfo.value.code == 1
