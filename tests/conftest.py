"""Shared fixtures: a dashboard bundle on disk and a configured adapter."""

from pathlib import Path

import pytest

from roost.adapter import Adapter
from roost.controller import ControllerResult, RequestContext, default_error_handler
from roost.errors import NotFound
from roost.routing.route import ApiRoute, EntryRoute
from roost.templating.returns import Template

INDEX_HTML = """<!doctype html>
<html>
<head>
<link rel="stylesheet" href="/static/css/main.css">
<script src="static/app.js"></script>
</head>
<body data-base-path="{{ base_path }}">{{ title }}</body>
</html>
"""


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A built UI bundle with a few asset types."""
    dist = tmp_path / "ui" / "dist"
    dist.mkdir(parents=True)
    (dist / "app.js").write_text("console.log('board');")
    (dist / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (dist / "data.bin").write_bytes(b"\x00\x01\x02")
    css = dist / "css"
    css.mkdir()
    (css / "main.css").write_text("body { margin: 0; }")
    (tmp_path / "ui" / "secret.txt").write_text("outside the bundle")
    return dist


@pytest.fixture
def views_dir(tmp_path: Path) -> Path:
    views = tmp_path / "views"
    views.mkdir()
    (views / "index.html").write_text(INDEX_HTML)
    return views


class FakeQueue:
    def __init__(self, name: str) -> None:
        self.name = name
        self.paused = False
        self.jobs: list[dict] = []


def entry(*, base_path: str, ui_config: dict) -> Template:
    return Template("index.html", base_path=base_path, title="Queues")


def list_queues(ctx: RequestContext) -> ControllerResult:
    return ControllerResult({"queues": sorted(ctx.queues)})


def get_queue(ctx: RequestContext) -> ControllerResult:
    name = ctx.params["name"]
    if name not in ctx.queues:
        raise NotFound(f"No queue named {name}")
    return ControllerResult({"name": name, "params": ctx.params})


async def pause_queue(ctx: RequestContext) -> ControllerResult:
    ctx.queues[ctx.params["name"]].paused = True
    return ControllerResult(status=204)


def add_job(ctx: RequestContext) -> ControllerResult:
    ctx.queues[ctx.params["name"]].jobs.append(ctx.body)
    return ControllerResult({"added": ctx.body}, status=201)


def get_job(ctx: RequestContext) -> ControllerResult:
    return ControllerResult({"queue": ctx.params["name"], "id": ctx.params["id"]})


def fail(ctx: RequestContext) -> ControllerResult:
    raise ValueError("bad request")


def board_error_handler(exc: Exception) -> ControllerResult:
    if isinstance(exc, ValueError):
        return ControllerResult(str(exc), status=400)
    return default_error_handler(exc)


API_ROUTES = [
    ApiRoute("get", "/api/queues", list_queues),
    ApiRoute("get", "/api/queues/:name", get_queue),
    ApiRoute(["put", "post"], "/api/queues/:name/pause", pause_queue),
    ApiRoute("post", "/api/queues/:name/jobs", add_job),
    ApiRoute("get", "/api/queues/:name/jobs/:id", get_job),
    ApiRoute("get", "/api/fail", fail),
]


@pytest.fixture
def queues() -> dict[str, FakeQueue]:
    return {"default": FakeQueue("default"), "mail": FakeQueue("mail")}


@pytest.fixture
def make_adapter(static_dir: Path, views_dir: Path, queues: dict[str, FakeQueue]):
    """Factory for a fully configured adapter mounted at *base_path*."""

    def _make(base_path: str = "/admin") -> Adapter:
        return (
            Adapter()
            .set_base_path(base_path)
            .set_static_path("/static", static_dir)
            .set_views_path(views_dir)
            .set_ui_config({"theme": "dark"})
            .set_queues(queues)
            .set_error_handler(board_error_handler)
            .set_api_routes(API_ROUTES)
            .set_entry_route(EntryRoute(["/", "/queue/:name"], entry))
        )

    return _make


@pytest.fixture
def adapter(make_adapter) -> Adapter:
    return make_adapter()
