"""
Fixtures that run the application on a real uvicorn server
"""
import socket
import threading
import time

import pytest
import requests
import uvicorn

from src.index import create_app
from src.services.cache import Cache
from tests.constants import SERVER_POLL_INTERVAL, SERVER_STARTUP_TIMEOUT


def _find_free_port():
    """Return a port number that is available on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture(scope="module")
def live_server():
    """Start uvicorn in a background thread and yield its base URL."""
    port = _find_free_port()
    app = create_app(Cache(), port)
    config = uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning")
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    deadline = time.monotonic() + SERVER_STARTUP_TIMEOUT
    while not server.started:
        if time.monotonic() > deadline:
            server.should_exit = True
            pytest.fail("Server startup timeout")
        time.sleep(SERVER_POLL_INTERVAL)

    yield f"http://127.0.0.1:{port}", app

    server.should_exit = True
    thread.join(timeout=SERVER_STARTUP_TIMEOUT)


@pytest.fixture
def base_url(live_server):
    url, app = live_server
    app.state.cache.clear()
    return url


@pytest.fixture
def session():
    with requests.Session() as s:
        yield s
