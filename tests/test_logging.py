import json
import logging

from dungeonpath import app
from dungeonpath.dungeon import Dungeon, DungeonConfig
from dungeonpath.logging_utils import _format, get_logger
from dungeonpath.server import _configure_logging


def test_key_value_format():
    line = _format("info", event="dungeon_generated", seed=3, note="two words", skipped=None)
    parts = line.split(" ")
    assert parts[0] == "level=info"
    assert parts[1].startswith("ts=")
    assert "event=dungeon_generated" in parts
    assert "seed=3" in parts
    assert "note=two_words" in parts
    assert not any(p.startswith("skipped=") for p in parts)


def test_json_mode(monkeypatch):
    monkeypatch.setenv("DUNGEONPATH_LOG_JSON", "1")
    rec = json.loads(_format("warn", event="x", seed=1))
    assert rec["level"] == "warn"
    assert rec["event"] == "x"
    assert rec["seed"] == 1


def test_level_threshold(monkeypatch, capsys):
    log = get_logger("threshold_test")
    monkeypatch.setenv("DUNGEONPATH_LOG_LEVEL", "info")
    log.debug(event="hidden")
    log.info(event="shown")
    log.error(event="failed")
    captured = capsys.readouterr()
    assert "hidden" not in captured.out
    assert "event=shown" in captured.out
    assert "logger=threshold_test" in captured.out
    assert "event=failed" in captured.err


def test_get_logger_cached():
    assert get_logger("dungeon") is get_logger("dungeon")


def test_generation_emits_event(monkeypatch, capsys):
    monkeypatch.setenv("DUNGEONPATH_LOG_LEVEL", "info")
    Dungeon(DungeonConfig(min_main_path_length=3, max_main_path_length=3), seed=21)
    out = capsys.readouterr().out
    assert "event=dungeon_generated" in out
    assert "seed=21" in out
    assert "main_rooms=3" in out


def test_skipped_branch_logged_at_debug(monkeypatch, capsys):
    monkeypatch.setenv("DUNGEONPATH_LOG_LEVEL", "debug")
    Dungeon(DungeonConfig(min_secondary_path_length=0, max_secondary_path_length=0), seed=4)
    out = capsys.readouterr().out
    assert "event=secondary_path_skipped" in out
    assert "reason=zero_length" in out


def test_configure_logging_idempotent(tmp_path, monkeypatch):
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        _configure_logging()
        _configure_logging()
        assert len(root.handlers) == 2
        logging.getLogger("dungeonpath.test").info("hello")
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
    log_file = tmp_path / "app.log"
    assert log_file.exists()
    assert "hello" in log_file.read_text()


def test_bound_context_added_to_records(monkeypatch, capsys):
    monkeypatch.setenv("DUNGEONPATH_LOG_LEVEL", "info")
    bound = get_logger("bind_test").bind(seed=9, phase="branch_scan")
    bound.info(event="tick", phase="place_locks")
    out = capsys.readouterr().out
    assert "seed=9" in out
    assert "phase=place_locks" in out
    assert "phase=branch_scan" not in out
    assert get_logger("bind_test").context == {}
