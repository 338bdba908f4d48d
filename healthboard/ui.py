"""Configuration of the dashboard page and rendering of its HTML template."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_TITLE = "Health Dashboard | Gatus"
DEFAULT_HEADER = "Health Status"
DEFAULT_LOGO = ""
DEFAULT_LINK = ""
DEFAULT_STATIC_FOLDER = "./web/static"

_ACTION = re.compile(
    r"\{\{(?P<ltrim>-[ \t\r\n])?(?P<body>.*?)(?P<rtrim>[ \t\r\n]-)?\}\}",
    re.DOTALL,
)
_FIELD = re.compile(r"\.([A-Za-z_][A-Za-z0-9_]*)")


class TemplateError(Exception):
    """Raised when a page template cannot be parsed or executed."""


@dataclass
class UIConfig:
    """Texts and logo shown on the dashboard."""

    title: str = ""
    header: str = ""
    logo: str = ""
    link: str = ""

    def validate_and_set_defaults(self, static_folder: str = DEFAULT_STATIC_FOLDER) -> None:
        """Fill in defaults and check that the index page renders with them."""
        if not self.title:
            self.title = DEFAULT_TITLE
        if not self.header:
            self.header = DEFAULT_HEADER
        render_index(static_folder, self)


_FIELD_NAMES = {f.name.capitalize(): f.name for f in fields(UIConfig)}


def default_ui_config() -> UIConfig:
    """Return the configuration used when none is given."""
    return UIConfig(
        title=DEFAULT_TITLE,
        header=DEFAULT_HEADER,
        logo=DEFAULT_LOGO,
        link=DEFAULT_LINK,
    )


def _evaluate(body: str, config: UIConfig | None) -> str:
    if body.startswith("/*") and body.endswith("*/"):
        return ""
    if not body:
        raise TemplateError("missing value for command")
    match = _FIELD.fullmatch(body)
    if match is None:
        raise TemplateError(f"unsupported action: {body!r}")
    name = match.group(1)
    if config is None:
        raise TemplateError(f"nil data; cannot evaluate field {name}")
    attribute = _FIELD_NAMES.get(name)
    if attribute is None:
        raise TemplateError(f"can't evaluate field {name}")
    return html.escape(str(getattr(config, attribute)))


def _check_text(text: str) -> str:
    if "{{" in text:
        raise TemplateError("unclosed action")
    return text


def render_template(template: str, config: UIConfig | None) -> str:
    """Render ``{{ .Field }}`` actions of a page template with HTML escaping."""
    parts: list[str] = []
    position = 0
    trim_next = False
    for match in _ACTION.finditer(template):
        text = template[position:match.start()]
        if trim_next:
            text = text.lstrip()
        if match.group("ltrim"):
            text = text.rstrip()
        parts.append(_check_text(text))
        parts.append(_evaluate(match.group("body").strip(), config))
        trim_next = bool(match.group("rtrim"))
        position = match.end()
    tail = template[position:]
    if trim_next:
        tail = tail.lstrip()
    parts.append(_check_text(tail))
    return "".join(parts)


def render_index(static_folder: str, config: UIConfig | None) -> str:
    """Render ``index.html`` from the static folder; raises OSError or TemplateError."""
    template = (Path(static_folder) / "index.html").read_text(encoding="utf-8")
    return render_template(template, config)