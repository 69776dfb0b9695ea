from __future__ import annotations

import json
from pathlib import Path

import pytest
import requests

from pos_import.cli import parse_args, run_command
from pos_import.common.constants import EXIT_DUPLICATE_NAME, EXIT_HARD_FAIL, EXIT_NOT_FOUND, EXIT_SUCCESS


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


def _args(tmp_path: Path, *argv: str):
    return parse_args(
        [
            *argv,
            "--config-dir",
            "config",
            "--db-path",
            str(tmp_path / "pos.sqlite3"),
            "--log-dir",
            str(tmp_path / "logs"),
            "--run-id",
            "run-test",
        ]
    )


@pytest.mark.integration
def test_cli_import_then_list(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture):
    body = Path("tests/fixtures/osm/node_5589879349.xml").read_text(encoding="utf-8")
    monkeypatch.setattr(requests.Session, "request", lambda self, **_kwargs: FakeResponse(200, body))

    assert run_command(_args(tmp_path, "import", "5589879349")) == EXIT_SUCCESS
    imported = json.loads(capsys.readouterr().out)
    assert imported["name"] == "Rada Coffee"
    assert imported["campus"] == "ALTSTADT"

    assert run_command(_args(tmp_path, "import", "5589879349")) == EXIT_DUPLICATE_NAME
    capsys.readouterr()

    assert run_command(_args(tmp_path, "list")) == EXIT_SUCCESS
    listed = json.loads(capsys.readouterr().out)
    assert [pos["name"] for pos in listed] == ["Rada Coffee"]
    assert (tmp_path / "logs" / "run-test.log.jsonl").exists()


@pytest.mark.integration
def test_cli_import_404_exits_not_found(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(requests.Session, "request", lambda self, **_kwargs: FakeResponse(404))

    assert run_command(_args(tmp_path, "import", "1")) == EXIT_NOT_FOUND


@pytest.mark.integration
def test_cli_get_unknown_id_exits_not_found(tmp_path: Path):
    assert run_command(_args(tmp_path, "get", "99")) == EXIT_NOT_FOUND


@pytest.mark.integration
def test_cli_unusable_db_path_exits_hard_fail(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    args = _args(tmp_path, "list")
    args.db_path = str(blocker / "pos.sqlite3")

    assert run_command(args) == EXIT_HARD_FAIL
