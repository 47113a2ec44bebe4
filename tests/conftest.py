import io
import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delve import create_app  # noqa: E402
from delve.logging_utils import get_logger  # noqa: E402
from delve.routes.dungeon_api import _graph_cache, _graph_cache_lock  # noqa: E402


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "DELVE_DISABLE_CACHE": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def cached_client():
    """Client with the in-process graph cache enabled (and emptied)."""
    with _graph_cache_lock:
        _graph_cache.clear()
    app = create_app({"TESTING": True, "DELVE_DISABLE_CACHE": False})
    yield app.test_client()
    with _graph_cache_lock:
        _graph_cache.clear()


@pytest.fixture()
def log_stream():
    return io.StringIO()


@pytest.fixture()
def quiet_log(log_stream):
    """Debug-level logger writing into ``log_stream`` instead of stdout."""
    return get_logger("delve.test", level="debug", stream=log_stream)
