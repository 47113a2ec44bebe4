import io
import json
import logging

from delve.logging_utils import get_logger
from delve.server import configure_logging


def test_key_value_format_and_threshold():
    buf = io.StringIO()
    log = get_logger("delve.test", level="info", stream=buf)
    log.debug(event="hidden")
    log.info(event="shown", seed=42, note="two words", skipped=None)
    lines = buf.getvalue().strip().splitlines()
    assert len(lines) == 1
    line = lines[0]
    assert line.startswith("level=info ts=")
    assert "event=shown" in line and "seed=42" in line
    assert "note=two_words" in line
    assert "skipped" not in line
    assert "logger=delve.test" in line


def test_json_mode():
    buf = io.StringIO()
    log = get_logger("delve.test", level="debug", json_mode=True, stream=buf)
    log.warn(event="attempt_failed", attempt=2)
    rec = json.loads(buf.getvalue())
    assert rec["event"] == "attempt_failed"
    assert rec["attempt"] == 2
    assert rec["level"] == "warn"
    assert rec["logger"] == "delve.test"


def test_env_level(monkeypatch):
    monkeypatch.setenv("DELVE_LOG_LEVEL", "error")
    buf = io.StringIO()
    log = get_logger("delve.test", stream=buf)
    log.warn(event="quiet")
    log.error(event="loud")
    assert "quiet" not in buf.getvalue()
    assert "event=loud" in buf.getvalue()


def test_loggers_are_independent_values():
    a, b = io.StringIO(), io.StringIO()
    get_logger("delve.x", stream=a).info(event="one")
    get_logger("delve.x", stream=b).info(event="two")
    assert "one" in a.getvalue() and "two" not in a.getvalue()
    assert "two" in b.getvalue()


def test_configure_logging_creates_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        # Run twice to exercise the handler replacement path
        configure_logging(str(tmp_path))
        path = configure_logging(str(tmp_path))
        assert len(root.handlers) == 2
        logging.getLogger("delve.test").info("hello file")
        for h in root.handlers:
            h.flush()
        assert path == str(tmp_path / "delve.log")
        assert "hello file" in (tmp_path / "delve.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
