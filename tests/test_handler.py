"""End-to-end tests for roost.server.handler: the request ladder over ASGI."""

import json

import pytest

from roost.adapter import Adapter
from roost.controller import ControllerResult
from roost.http.request import Request
from roost.routing.route import EntryRoute
from roost.server.handler import strip_base_path
from roost.templating.returns import Template
from roost.testing import TestClient


class TestStripBasePath:
    def test_strips_prefix(self) -> None:
        assert strip_base_path("/admin/api/queues", "/admin") == "/api/queues"

    def test_nothing_left_is_root(self) -> None:
        assert strip_base_path("/admin", "/admin") == "/"

    def test_root_base(self) -> None:
        assert strip_base_path("/api/queues", "/") == "/api/queues"

    def test_not_under_base(self) -> None:
        assert strip_base_path("/elsewhere", "/admin") == "/elsewhere"

    def test_only_leading_occurrence(self) -> None:
        assert strip_base_path("/x/admin", "/admin") == "/x/admin"


class TestMountedBoard:
    async def test_static_asset_under_base(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/static/app.js")
        assert response.status == 200
        assert response.content_type == "application/javascript"
        assert response.body == b"console.log('board');"

    async def test_raw_static_prefix(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/static/css/main.css")
        assert response.status == 200
        assert response.content_type == "text/css"

    async def test_missing_static_asset(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/static/nope.js")
        assert response.status == 404
        assert response.body_text == "Not Found"

    async def test_api_route_params(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues/default")
        assert response.status == 200
        assert response.content_type == "application/json"
        assert json.loads(response.body_text) == {
            "name": "default",
            "params": {"name": "default"},
        }

    async def test_api_list(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues")
        assert json.loads(response.body_text) == {"queues": ["default", "mail"]}

    async def test_api_204(self, adapter, queues) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.put("/admin/api/queues/mail/pause")
        assert response.status == 204
        assert response.body == b""
        assert queues["mail"].paused is True

    async def test_api_json_body(self, adapter, queues) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.post("/admin/api/queues/mail/jobs", json={"to": "a@b.c"})
        assert response.status == 201
        assert json.loads(response.body_text) == {"added": {"to": "a@b.c"}}
        assert queues["mail"].jobs == [{"to": "a@b.c"}]

    async def test_api_malformed_body_is_empty(self, adapter, queues) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.post("/admin/api/queues/mail/jobs", body=b"{oops")
        assert response.status == 201
        assert queues["mail"].jobs == [{}]

    async def test_encoded_slash_stays_in_its_segment(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues/mail/jobs/a%2Fb")
        assert response.status == 200
        assert json.loads(response.body_text) == {"queue": "mail", "id": "a/b"}

    async def test_encoded_space_in_param(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues/mail/jobs/job%201")
        assert json.loads(response.body_text)["id"] == "job 1"

    async def test_error_handler_text_response(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/fail")
        assert response.status == 400
        assert response.content_type.startswith("text/plain")
        assert response.body_text == "bad request"

    async def test_error_handler_json_response(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues/missing")
        assert response.status == 404
        assert json.loads(response.body_text) == {"error": "No queue named missing"}

    async def test_entry_view(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/")
        assert response.status == 200
        assert response.content_type.startswith("text/html")
        assert 'href="/admin/static/css/main.css"' in response.body_text
        assert 'src="/admin/static/app.js"' in response.body_text

    async def test_entry_view_without_trailing_slash(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin")
        assert response.status == 200
        assert "Queues" in response.body_text

    async def test_client_side_route_falls_back_to_entry_view(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/queue/mail/jobs")
        assert response.status == 200
        assert response.content_type.startswith("text/html")

    async def test_unknown_api_path_is_404(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/unknown")
        assert response.status == 404

    async def test_wrong_method_on_api_path_is_404(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.delete("/admin/api/queues")
        assert response.status == 404

    async def test_outside_base_is_404(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/elsewhere")
        assert response.status == 404
        assert response.content_type.startswith("text/plain")
        assert response.body_text == "Not Found"


class TestRootBoard:
    @pytest.fixture
    def handler(self, make_adapter):
        return make_adapter("/").get_handler()

    async def test_api(self, handler) -> None:
        async with TestClient(handler) as client:
            response = await client.get("/api/queues")
        assert response.status == 200

    async def test_entry_keeps_urls(self, handler) -> None:
        async with TestClient(handler) as client:
            response = await client.get("/")
        assert 'src="static/app.js"' in response.body_text

    async def test_any_non_api_path_renders_entry(self, handler) -> None:
        async with TestClient(handler) as client:
            response = await client.get("/jobs/failed")
        assert response.status == 200

    async def test_unknown_api_path_is_404(self, handler) -> None:
        async with TestClient(handler) as client:
            response = await client.get("/api/nope")
        assert response.status == 404


class TestHandle:
    async def test_direct_handle(self, adapter) -> None:
        handler = adapter.get_handler()
        response = await handler.handle(Request.build("GET", "/admin/api/queues"))
        assert response.status == 200

    async def test_error_without_handler_propagates(self, static_dir, views_dir) -> None:
        def broken(ctx) -> ControllerResult:
            raise KeyError("gone")

        def entry(*, base_path: str, ui_config: dict) -> Template:
            return Template("index.html", base_path=base_path, title="t")

        adapter = (
            Adapter()
            .set_base_path("/admin")
            .set_static_path("/static", static_dir)
            .set_views_path(views_dir)
            .set_ui_config({})
            .set_queues({})
            .register_route("/api/broken", "get", broken)
            .set_entry_route(EntryRoute("/", entry))
        )
        with pytest.raises(KeyError):
            await adapter.get_handler().handle(Request.build("GET", "/admin/api/broken"))


class TestAsgi:
    async def test_lifespan_is_acknowledged(self, adapter) -> None:
        handler = adapter.get_handler()
        incoming = iter([{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}])
        sent: list[dict] = []

        async def receive() -> dict:
            return next(incoming)

        async def send(message: dict) -> None:
            sent.append(message)

        await handler({"type": "lifespan"}, receive, send)
        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]

    async def test_websocket_scope_is_ignored(self, adapter) -> None:
        sent: list[dict] = []

        async def receive() -> dict:
            return {"type": "websocket.connect"}

        async def send(message: dict) -> None:
            sent.append(message)

        await adapter.get_handler()({"type": "websocket"}, receive, send)
        assert sent == []

    async def test_query_string_reaches_handler(self, adapter) -> None:
        async with TestClient(adapter.get_handler()) as client:
            response = await client.get("/admin/api/queues?state=failed")
        assert response.status == 200
