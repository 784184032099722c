"""Shared fixtures: live collectors served on ephemeral ports."""

import threading

import pytest
from flask import Flask, request
from werkzeug.serving import make_server

from src.collector import RecordStore, create_app


class LiveServer:
    """Serves a WSGI app on 127.0.0.1 in a daemon thread."""

    def __init__(self, app):
        self._server = make_server("127.0.0.1", 0, app, threaded=True)
        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)

    @property
    def port(self) -> int:
        return self._server.server_port

    def url(self, path: str = "/upload") -> str:
        return f"http://127.0.0.1:{self.port}{path}"

    def start(self):
        self._thread.start()

    def stop(self):
        self._server.shutdown()
        self._thread.join(timeout=5)


@pytest.fixture
def serve_app():
    """Start any Flask app on an ephemeral port; stopped at teardown."""
    servers: list[LiveServer] = []

    def _serve(app) -> LiveServer:
        server = LiveServer(app)
        server.start()
        servers.append(server)
        return server

    yield _serve
    for server in servers:
        server.stop()


@pytest.fixture
def store():
    return RecordStore()


@pytest.fixture
def collector(serve_app, store):
    """A running collector; received payloads land in the ``store`` fixture."""
    return serve_app(create_app(store=store))


@pytest.fixture
def failing_collector(serve_app):
    """A collector that answers every POST with 500 'internal error'.

    Bodies it was sent are kept on ``.hits``.
    """
    app = Flask(__name__)
    hits: list[dict] = []

    @app.route("/upload", methods=["POST"])
    def upload():
        hits.append(request.get_json(force=True))
        return "internal error", 500

    server = serve_app(app)
    server.hits = hits
    return server


@pytest.fixture
def write_log(tmp_path):
    """Write lines to tmp_path/<name> and return the path as a string."""

    def _write(name: str, *lines: str) -> str:
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        return str(path)

    return _write
