"""Kida environment setup and entry-view rendering.

Creates a kida Environment over the views directory and renders the
template the entry route picks. When the dashboard is mounted under a
sub-path, static asset URLs in the rendered HTML are rewritten to sit
under that base path.
"""

import logging
import re
from pathlib import Path
from typing import Any

import anyio
import anyio.to_thread
from kida import Environment, FileSystemLoader

from roost._internal.invoke import invoke
from roost.http.response import Response
from roost.routing.route import EntryRoute
from roost.templating.returns import Template

logger = logging.getLogger("roost.templating")

_ABSOLUTE_STATIC = re.compile(r'(src|href)="/static/')
_RELATIVE_STATIC = re.compile(r'(src|href)="static/')


def create_environment(views_dir: str | Path) -> Environment:
    """Create a kida Environment for the views directory.

    ``auto_reload`` keeps edits to templates visible on the next request.
    The on-disk bytecode cache is disabled so nothing is written next to
    the views.
    """
    return Environment(
        loader=FileSystemLoader(str(views_dir)),
        autoescape=True,
        auto_reload=True,
        bytecode_cache=False,
    )


def render_template(env: Environment, tpl: Template) -> str:
    """Render a full template to string."""
    template = env.get_template(tpl.name)
    return template.render(tpl.context)


def rewrite_static_urls(html: str, base_path: str) -> str:
    """Prefix ``/static/`` and ``static/`` asset URLs with *base_path*.

    Only ``src="..."`` and ``href="..."`` attributes are touched. A root
    base path leaves the HTML unchanged.
    """
    if base_path == "/":
        return html
    prefixed = f"{base_path}/static/"
    html = _ABSOLUTE_STATIC.sub(lambda m: f'{m[1]}="{prefixed}', html)
    return _RELATIVE_STATIC.sub(lambda m: f'{m[1]}="{prefixed}', html)


class ViewRenderer:
    """Renders the dashboard's entry view.

    Usage::

        renderer = ViewRenderer(entry_route, views_dir="ui/views",
                                base_path="/admin", ui_config={})
        response = await renderer.render()
    """

    __slots__ = ("_base_path", "_entry_route", "_env", "_ui_config")

    def __init__(
        self,
        entry_route: EntryRoute,
        *,
        views_dir: str | Path,
        base_path: str = "/",
        ui_config: Any = None,
    ) -> None:
        self._entry_route = entry_route
        self._env = create_environment(views_dir)
        self._base_path = base_path
        self._ui_config = ui_config if ui_config is not None else {}

    @property
    def entry_route(self) -> EntryRoute:
        return self._entry_route

    async def render(self) -> Response:
        """Render the entry view; 500 on any failure."""
        try:
            tpl = await invoke(
                self._entry_route.handler,
                base_path=self._base_path,
                ui_config=self._ui_config,
            )
            html = await anyio.to_thread.run_sync(render_template, self._env, tpl)
        except Exception:
            logger.exception("Entry view render failed")
            return Response.text("Internal Server Error", status=500)

        return Response(body=rewrite_static_urls(html, self._base_path))
