"""Template Resolver: per-event-kind message templates rendered with jinja2."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import jinja2
import structlog

from src.core.exceptions import RenderError, TemplateNotFound
from src.core.types import EventKind
from src.notify.types import RenderedMessage

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "templates"

DEFAULT_TIME_FORMAT = "%A, %B %d %Y %I:%M %p UTC"

_DEFAULT_TITLES: dict[EventKind, str] = {
    EventKind.UP: '[Up] Check "{{ entity.name }}" went back up',
    EventKind.DOWN: '[Down] Check "{{ entity.name }}" just went down',
    EventKind.PAUSED: '[Paused] Check "{{ entity.name }}" was paused',
    EventKind.RESTARTED: '[Restarted] Check "{{ entity.name }}" was restarted',
}


def format_time(timestamp: float, fmt: str = DEFAULT_TIME_FORMAT) -> str:
    """Format an epoch timestamp in UTC."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime(fmt)


def load_template_dir(path: str | Path) -> dict[EventKind, str]:
    """Read ``<kind>.txt`` body templates from *path*; missing kinds are skipped."""
    directory = Path(path)
    sources: dict[EventKind, str] = {}
    for kind in EventKind:
        file = directory / f"{kind.value}.txt"
        if file.is_file():
            sources[kind] = file.read_text(encoding="utf-8")
    return sources


class TemplateResolver:
    """Maps an event kind to its templates and renders RenderedMessages.

    Templates are compiled once at construction. Each render receives the
    caller's context plus ``url`` (base URL for links) and ``format_time``,
    which is also registered as the ``datetime`` filter.
    """

    def __init__(
        self,
        base_url: str = "",
        templates: Mapping[EventKind | str, str] | None = None,
        templates_dir: str | Path | None = None,
        titles: Mapping[EventKind | str, str] | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._env = jinja2.Environment(
            undefined=jinja2.StrictUndefined,
            autoescape=False,
            keep_trailing_newline=False,
        )
        self._env.filters["datetime"] = format_time

        if templates is None:
            templates = load_template_dir(templates_dir or DEFAULT_TEMPLATES_DIR)

        self._bodies = {EventKind(k): self._compile(k, src) for k, src in templates.items()}
        title_sources = {**_DEFAULT_TITLES, **{EventKind(k): v for k, v in (titles or {}).items()}}
        self._titles = {k: self._compile(k, src) for k, src in title_sources.items()}

        logger.debug("templates_loaded", kinds=sorted(self._bodies))

    def _compile(self, kind: EventKind | str, source: str) -> jinja2.Template:
        try:
            return self._env.from_string(source)
        except jinja2.TemplateSyntaxError as exc:
            raise RenderError(f"invalid template for {kind}: {exc}") from exc

    @property
    def kinds(self) -> frozenset[EventKind]:
        return frozenset(self._bodies)

    def render(self, kind: EventKind | str, context: Mapping[str, Any]) -> RenderedMessage:
        """Render the templates registered for *kind*.

        Raises:
            TemplateNotFound: no body template is registered for *kind*.
            RenderError: the context does not satisfy the template.
        """
        try:
            kind = EventKind(kind)
        except ValueError as exc:
            raise TemplateNotFound(f"no template for event kind {kind!r}") from exc

        body = self._bodies.get(kind)
        if body is None:
            raise TemplateNotFound(f"no template for event kind {kind.value!r}")

        full_context = {"url": self._base_url, "format_time": format_time, **context}
        try:
            rendered = body.render(full_context)
            title_template = self._titles.get(kind)
            title = title_template.render(full_context).strip() if title_template else kind.value
        except jinja2.TemplateError as exc:
            raise RenderError(f"cannot render {kind.value!r} template: {exc}") from exc
        except (TypeError, ValueError, OverflowError) as exc:
            raise RenderError(f"cannot render {kind.value!r} template: {exc}") from exc

        lines = rendered.splitlines()
        while lines and not lines[-1].strip():
            lines.pop()
        return RenderedMessage(title=title, lines=lines)
