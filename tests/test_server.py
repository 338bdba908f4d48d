import threading
import time
import urllib.request
from wsgiref.util import setup_testing_defaults

import pytest

from healthboard.server import Controller
from healthboard.web import WebConfig


def call(app, path):
    environ = {}
    setup_testing_defaults(environ)
    environ.update(REQUEST_METHOD="GET", PATH_INFO=path)
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = int(status.split()[0])
        captured["headers"] = dict(headers)
        return lambda data: None

    body = b"".join(app(environ, start_response))
    return captured["status"], captured["headers"], body


@pytest.fixture
def static(tmp_path):
    (tmp_path / "index.html").write_text("<title>{{ .Title }}</title>", encoding="utf-8")
    return tmp_path


def test_handle_in_router_test_mode(static):
    controller = Controller(str(static), {"ROUTER_TEST": "true", "ENVIRONMENT": "dev"})
    controller.handle(None, WebConfig(address="0.0.0.0", port=8080), None)
    status, headers, body = call(controller.app, "/health")
    assert status == 200
    assert body == b'{"status":"UP"}'
    assert headers["Access-Control-Allow-Origin"] == "http://localhost:8081"
    assert controller.server is None


def test_handle_without_development_cors(static):
    controller = Controller(str(static), {"ROUTER_TEST": "true"})
    controller.handle(None, WebConfig(address="0.0.0.0", port=8080), None)
    status, headers, _ = call(controller.app, "/health")
    assert status == 200
    assert "Access-Control-Allow-Origin" not in headers


def test_shutdown_clears_application(static):
    controller = Controller(str(static), {"ROUTER_TEST": "true"})
    controller.handle(None, WebConfig(address="0.0.0.0", port=8080), None)
    controller.shutdown()
    assert controller.app is None
    assert controller.server is None


def test_serves_until_shutdown(static):
    controller = Controller(str(static), {})
    thread = threading.Thread(
        target=controller.handle,
        args=(None, WebConfig(address="127.0.0.1", port=0), None),
        daemon=True,
    )
    thread.start()
    deadline = time.monotonic() + 5
    while controller.server is None and time.monotonic() < deadline:
        time.sleep(0.01)
    assert controller.server is not None
    port = controller.server.server_port
    with urllib.request.urlopen(f"http://127.0.0.1:{port}/health", timeout=5) as response:
        assert response.status == 200
        assert response.read() == b'{"status":"UP"}'
    controller.shutdown()
    thread.join(5)
    assert not thread.is_alive()
    assert controller.server is None