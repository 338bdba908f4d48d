"""Extraction of the page and page size query parameters of a request."""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import parse_qs

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAXIMUM_PAGE_SIZE = 100

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_int(text: str) -> int | None:
    if not _INTEGER.fullmatch(text):
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


def _first(query: str | Mapping[str, object], name: str) -> str:
    if isinstance(query, str):
        values = parse_qs(query.lstrip("?")).get(name)
        return values[0] if values else ""
    value = query.get(name, "")
    if isinstance(value, (list, tuple)):
        return str(value[0]) if value else ""
    return str(value)


def page_and_page_size(query: str | Mapping[str, object]) -> tuple[int, int]:
    """Return ``(page, page_size)`` from a query string or mapping.

    Missing or invalid values fall back to the defaults, and the page size
    is capped at MAXIMUM_PAGE_SIZE.
    """
    page_text = _first(query, "page")
    page = _parse_int(page_text) if page_text else None
    if page is None or page < 1:
        page = DEFAULT_PAGE

    size_text = _first(query, "pageSize")
    page_size = _parse_int(size_text) if size_text else None
    if page_size is None:
        page_size = DEFAULT_PAGE_SIZE
    if page_size > MAXIMUM_PAGE_SIZE:
        page_size = MAXIMUM_PAGE_SIZE
    elif page_size < 1:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size