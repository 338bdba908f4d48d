"""WSGI application serving the dashboard, its configuration API and static files."""

from __future__ import annotations

import gzip
import html
import json
import logging
import mimetypes
import posixpath
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from email.utils import formatdate
from http import HTTPStatus
from pathlib import Path
from typing import Any, Optional, Protocol
from urllib.parse import quote

from .ui import DEFAULT_STATIC_FOLDER, TemplateError, UIConfig, render_index

log = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]

DEVELOPMENT_ORIGIN = "http://localhost:8081"
_HEALTH_BODY = b'{"status":"UP"}'
_SPA_ROUTE = re.compile(r"/(?:endpoints|services)/[^/]+")
_CHARSET_TYPES = {"application/javascript", "application/json", "application/xml"}


class _Security(Protocol):
    oidc: Any

    def is_authenticated(self, environ: dict) -> bool: ...


@dataclass
class _Response:
    status: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def start(self, start_response: Callable[..., Any]) -> list[bytes]:
        start_response(f"{self.status} {HTTPStatus(self.status).phrase}", self.headers)
        return [self.body]


def _error(status: int, message: str) -> _Response:
    headers = [
        ("Content-Type", "text/plain; charset=utf-8"),
        ("X-Content-Type-Options", "nosniff"),
    ]
    return _Response(status, headers, (message + "\n").encode("utf-8"))


def _redirect(location: str, query: str) -> _Response:
    if query:
        location = f"{location}?{query}"
    return _Response(301, [("Location", location)])


def _request_path(environ: dict) -> str:
    raw = environ.get("PATH_INFO") or "/"
    return raw.encode("latin-1", "replace").decode("utf-8", "replace")


def _clean_path(path: str) -> str:
    """Canonical form of a URL path, keeping a trailing slash."""
    if not path.startswith("/"):
        path = "/" + path
    cleaned = "/" + posixpath.normpath(path).lstrip("/")
    if path.endswith("/") and cleaned != "/":
        cleaned += "/"
    return cleaned


def _content_type(name: str, content: bytes) -> str:
    guessed, _ = mimetypes.guess_type(name)
    if guessed is None:
        try:
            text = content[:512].decode("utf-8")
        except UnicodeDecodeError:
            return "application/octet-stream"
        return "application/octet-stream" if "\x00" in text else "text/plain; charset=utf-8"
    if guessed.startswith("text/") or guessed in _CHARSET_TYPES:
        return f"{guessed}; charset=utf-8"
    return guessed


def _directory_listing(directory: Path) -> bytes:
    lines = ["<pre>"]
    for entry in sorted(directory.iterdir(), key=lambda item: item.name):
        name = entry.name + ("/" if entry.is_dir() else "")
        lines.append(f'<a href="{html.escape(quote(name))}">{html.escape(name)}</a>')
    lines.append("</pre>")
    return ("\n".join(lines) + "\n").encode("utf-8")


def _read(target: Path) -> bytes | _Response:
    try:
        return target.read_bytes()
    except PermissionError:
        return _error(403, "403 Forbidden")
    except OSError:
        return _error(500, "500 Internal Server Error")


class StatusApp:
    """Routes requests to the configuration API, the dashboard page or static files."""

    def __init__(
        self,
        static_folder: str | Path = DEFAULT_STATIC_FOLDER,
        security: Optional[_Security] = None,
        ui_config: UIConfig | None = None,
    ) -> None:
        self.static_folder = Path(static_folder)
        self.security = security
        self.ui_config = ui_config
        self._static = gzip_middleware(self._serve_static)

    def __call__(self, environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = _request_path(environ)
        cleaned = _clean_path(path)
        if cleaned != path:
            return _redirect(cleaned, environ.get("QUERY_STRING", "")).start(start_response)
        if environ.get("REQUEST_METHOD", "GET") == "GET":
            response = self._route(cleaned, environ)
            if response is not None:
                return response.start(start_response)
        return self._static(environ, start_response)

    def _route(self, path: str, environ: dict) -> _Response | None:
        if path == "/api/v1/config":
            return self._config(environ)
        if path == "/health":
            return _Response(200, [("Content-Type", "application/json")], _HEALTH_BODY)
        if path == "/favicon.ico":
            return self._serve_path(environ, self.static_folder / "favicon.ico", path, redirect=False)
        if path == "/" or _SPA_ROUTE.fullmatch(path):
            return self._single_page_application(environ, path)
        return None

    def _config(self, environ: dict) -> _Response:
        has_oidc = False
        authenticated = True
        if self.security is not None:
            has_oidc = getattr(self.security, "oidc", None) is not None
            authenticated = bool(self.security.is_authenticated(environ))
        body = json.dumps({"oidc": has_oidc, "authenticated": authenticated}, separators=(",", ":"))
        return _Response(200, [("Content-Type", "application/json")], body.encode("utf-8"))

    def _single_page_application(self, environ: dict, path: str) -> _Response:
        try:
            page = render_index(str(self.static_folder), self.ui_config)
        except (OSError, TemplateError) as error:
            log.warning("Failed to parse template: %s", error)
            return self._serve_path(
                environ,
                self.static_folder / "index.html",
                path,
                redirect=False,
                content_type="text/html",
            )
        return _Response(200, [("Content-Type", "text/html")], page.encode("utf-8"))

    def _serve_static(self, environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        path = _clean_path(_request_path(environ))
        target = self.static_folder / path.lstrip("/")
        response = self._serve_path(environ, target, path, redirect=True)
        if environ.get("REQUEST_METHOD") == "HEAD":
            response.body = b""
        return response.start(start_response)

    def _serve_path(
        self,
        environ: dict,
        target: Path,
        request_path: str,
        *,
        redirect: bool,
        content_type: str | None = None,
    ) -> _Response:
        query = environ.get("QUERY_STRING", "")
        if request_path.endswith("/index.html"):
            return _redirect("./", query)
        if not target.exists():
            return _error(404, "404 page not found")
        is_dir = target.is_dir()
        if redirect:
            if is_dir and not request_path.endswith("/"):
                return _redirect(posixpath.basename(request_path) + "/", query)
            if not is_dir and request_path.endswith("/"):
                return _redirect("../" + posixpath.basename(request_path.rstrip("/")), query)
        if is_dir:
            index = target / "index.html"
            if not index.is_file():
                try:
                    listing = _directory_listing(target)
                except OSError:
                    return _error(500, "500 Internal Server Error")
                return _Response(200, [("Content-Type", "text/html; charset=utf-8")], listing)
            target = index
        content = _read(target)
        if isinstance(content, _Response):
            return content
        headers = [
            ("Content-Type", content_type or _content_type(target.name, content)),
            ("Last-Modified", formatdate(target.stat().st_mtime, usegmt=True)),
            ("Content-Length", str(len(content))),
        ]
        return _Response(200, headers, content)


def gzip_middleware(app: WSGIApp) -> WSGIApp:
    """Compress responses of ``app`` for clients that accept gzip encoding."""

    def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        if "gzip" not in environ.get("HTTP_ACCEPT_ENCODING", ""):
            return app(environ, start_response)
        captured: dict[str, Any] = {}
        chunks: list[bytes] = []

        def capture(status: str, headers: list[tuple[str, str]], exc_info: Any = None):
            captured.update(status=status, headers=headers, exc_info=exc_info)
            return chunks.append

        result = app(environ, capture)
        try:
            for chunk in result:
                chunks.append(chunk)
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()
        headers = [
            (name, value)
            for name, value in captured["headers"]
            if name.lower() not in ("content-length", "content-encoding")
        ]
        headers.append(("Content-Encoding", "gzip"))
        start_response(captured["status"], headers, captured["exc_info"])
        return [gzip.compress(b"".join(chunks))]

    return wrapped


def development_cors(app: WSGIApp) -> WSGIApp:
    """Allow credentialed cross-origin requests from the development frontend."""
    cors_headers = [
        ("Access-Control-Allow-Credentials", "true"),
        ("Access-Control-Allow-Origin", DEVELOPMENT_ORIGIN),
    ]
    cors_names = {name.lower() for name, _ in cors_headers}

    def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("REQUEST_METHOD") == "OPTIONS":
            start_response("200 OK", list(cors_headers))
            return [b""]

        def start(status: str, headers: list[tuple[str, str]], exc_info: Any = None):
            merged = [(n, v) for n, v in headers if n.lower() not in cors_names]
            return start_response(status, merged + cors_headers, exc_info)

        return app(environ, start)

    return wrapped


def create_app(
    static_folder: str | Path = DEFAULT_STATIC_FOLDER,
    security: Optional[_Security] = None,
    ui_config: UIConfig | None = None,
) -> StatusApp:
    """Build the application serving the dashboard from ``static_folder``."""
    return StatusApp(static_folder, security, ui_config)