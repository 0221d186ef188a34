"""CLI tests: run main() against a temp database and read its JSON output."""

import json

import pytest

import backend.config
import backend.state
from backend.cli import build_parser, main
from backend.state import reset_state


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.delenv("CURATION_CONFIG_PATH", raising=False)
    monkeypatch.setattr(backend.config, "_config", None)
    monkeypatch.setattr(backend.state, "_state", None)
    yield tmp_path
    reset_state()


def _run(capsys, *argv):
    code = main(list(argv))
    return code, json.loads(capsys.readouterr().out)


@pytest.fixture
def items_file(cli_env):
    path = cli_env / "items.json"
    path.write_text(json.dumps({
        "items": [
            {"id": "v1", "title": "Pasta &amp; wine night", "channel_title": "Chef Anna", "view_count": 1000},
            {"id": "v2", "title": "Mountain hike diary"},
            {"id": "v3", "title": "Bread baking basics"},
            {"title": "no id, skipped"},
        ]
    }))
    return path


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_status_on_empty_database(cli_env, capsys):
    code, out = _run(capsys, "status")
    assert code == 0
    assert out["pool"]["count"] == 0
    assert out["feedback"] == {"positive": 0, "negative": 0}
    assert out["model_available"] is False


def test_seed_label_and_feed(cli_env, items_file, capsys):
    code, out = _run(capsys, "seed", str(items_file))
    assert code == 0
    assert out == {"added": 3, "total": 3}

    code, out = _run(capsys, "like", "v1")
    assert out == {"id": "v1", "sentiment": "positive"}
    record = backend.state.get_state().feedback_store.all_records()[0]
    assert record.metadata.title == "Pasta & wine night"
    assert record.metadata.view_count == "1000"

    code, out = _run(capsys, "feed", "--limit", "10")
    assert code == 0
    assert {i["id"] for i in out["items"]} == {"v2", "v3"}
    assert out["empty"] is False

    code, out = _run(capsys, "search", "pasta")
    assert out == {"items": [], "empty": True}

    code, out = _run(capsys, "unlabel", "v1")
    assert out == {"id": "v1", "removed": True}
    code, out = _run(capsys, "search", "pasta")
    assert [i["id"] for i in out["items"]] == ["v1"]


def test_train_without_feedback_fails(cli_env, capsys):
    code, out = _run(capsys, "train")
    assert code == 1
    assert out["success"] is False
    assert out["positive_count"] == 0


def test_feed_filter_flag(cli_env, items_file, capsys):
    _run(capsys, "seed", str(items_file))
    code, out = _run(capsys, "feed", "--filter", "--threshold", "1.0")
    assert code == 0
    assert out == {"items": [], "empty": True}
    code, out = _run(capsys, "feed", "--filter", "--threshold", "0.0")
    assert {i["id"] for i in out["items"]} == {"v1", "v2", "v3"}


def test_unsupported_database_fails_at_startup(cli_env, monkeypatch, capsys):
    monkeypatch.setenv("DATABASE_URL", "mysql://user@localhost/curator")
    assert main(["status"]) == 2
    assert "Unsupported database backend: mysql" in capsys.readouterr().err
