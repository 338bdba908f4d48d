"""Starting and stopping the HTTP server of the dashboard."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from socketserver import ThreadingMixIn
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from .app import WSGIApp, create_app, development_cors
from .ui import DEFAULT_STATIC_FOLDER, UIConfig
from .web import WebConfig

log = logging.getLogger(__name__)

_TIMEOUT_SECONDS = 15


class _Server(ThreadingMixIn, WSGIServer):
    daemon_threads = True


class _RequestHandler(WSGIRequestHandler):
    timeout = _TIMEOUT_SECONDS

    def log_message(self, format: str, *args: Any) -> None:
        log.debug(format, *args)


class Controller:
    """Owns the application and the server that serves it."""

    def __init__(
        self,
        static_folder: str = DEFAULT_STATIC_FOLDER,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.static_folder = static_folder
        self.environ = os.environ if environ is None else environ
        self.app: WSGIApp | None = None
        self.server: WSGIServer | None = None

    def handle(self, security: Any, web_config: WebConfig, ui_config: UIConfig | None) -> None:
        """Build the application and serve it until shutdown is called."""
        app: WSGIApp = create_app(self.static_folder, security, ui_config)
        if self.environ.get("ENVIRONMENT") == "dev":
            app = development_cors(app)
        self.app = app
        log.info("Listening on %s", web_config.socket_address())
        if self.environ.get("ROUTER_TEST") == "true":
            return
        try:
            server = make_server(
                web_config.address,
                web_config.port,
                app,
                server_class=_Server,
                handler_class=_RequestHandler,
            )
        except OSError as error:
            log.error("Failed to start server: %s", error)
            return
        self.server = server
        try:
            server.serve_forever()
        finally:
            server.server_close()

    def shutdown(self) -> None:
        """Stop the server if it is running."""
        server, self.server = self.server, None
        self.app = None
        if server is not None:
            server.shutdown()