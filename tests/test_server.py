"""Tests for the MCP stdio protocol layer: direct request handling, no subprocess."""
import json

import pytest

from design_guidance import server as server_module
from design_guidance.config import GuidanceConfig
from design_guidance.server import DesignGuidanceServer

pytestmark = pytest.mark.asyncio


@pytest.fixture
def srv(dispatcher):
    return DesignGuidanceServer(dispatcher=dispatcher, config=GuidanceConfig())


def call(name, arguments=None, id=1):
    return {
        "jsonrpc": "2.0",
        "id": id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments or {}},
    }


class TestHandshake:
    async def test_initialize(self, srv):
        resp = await srv.handle_request({"jsonrpc": "2.0", "id": 0, "method": "initialize", "params": {}})
        result = resp["result"]
        assert resp["id"] == 0
        assert result["protocolVersion"] == "2024-11-05"
        assert result["serverInfo"]["name"] == "design-guidance-server"
        assert "tools" in result["capabilities"]

    async def test_initialized_notification(self, srv):
        resp = await srv.handle_request({"jsonrpc": "2.0", "method": "notifications/initialized"})
        assert resp is None

    async def test_ping(self, srv):
        resp = await srv.handle_request({"jsonrpc": "2.0", "id": 7, "method": "ping"})
        assert resp == {"jsonrpc": "2.0", "id": 7, "result": {}}

    async def test_non_dict_client_info(self, srv):
        msg = {"jsonrpc": "2.0", "id": 0, "method": "initialize", "params": {"clientInfo": "cli"}}
        resp = await srv.handle_request(msg)
        assert resp["result"]["protocolVersion"] == "2024-11-05"

    async def test_non_dict_params(self, srv):
        msg = {"jsonrpc": "2.0", "id": 4, "method": "tools/call", "params": ["get_modern_trends"]}
        resp = await srv.handle_request(msg)
        assert resp["error"]["code"] == -32603

    async def test_unknown_method(self, srv):
        resp = await srv.handle_request({"jsonrpc": "2.0", "id": 3, "method": "resources/list"})
        assert resp["error"]["code"] == -32601


class TestToolsList:
    async def test_lists_all(self, srv):
        resp = await srv.handle_request({"jsonrpc": "2.0", "id": 1, "method": "tools/list"})
        tools = resp["result"]["tools"]
        assert len(tools) == 13
        assert tools[0]["name"] == "get_component_guidance"
        assert tools[0]["inputSchema"]["properties"]["component"]["enum"] == [
            "buttons", "cards", "forms", "navigation",
        ]


class TestToolsCall:
    async def test_text_content(self, srv):
        resp = await srv.handle_request(call("get_design_principles", {"category": "whitespace"}))
        content = resp["result"]["content"]
        assert len(content) == 1
        assert content[0]["type"] == "text"
        data = json.loads(content[0]["text"])
        assert data["filtered"] == "whitespace"
        assert [p["principle"] for p in data["principles"]] == ["Whitespace"]

    async def test_missing_arguments(self, srv):
        msg = {"jsonrpc": "2.0", "id": 2, "method": "tools/call", "params": {"name": "get_modern_trends"}}
        resp = await srv.handle_request(msg)
        data = json.loads(resp["result"]["content"][0]["text"])
        assert "currentTrends2026" in data

    async def test_unknown_tool(self, srv):
        resp = await srv.handle_request(call("unknown_tool_name", id=9))
        assert resp["id"] == 9
        assert resp["error"]["code"] == -32603
        assert resp["error"]["message"] == "Unknown tool: unknown_tool_name"

    async def test_handler_failure_is_contained(self, srv, monkeypatch):
        def boom(value):
            raise RuntimeError("boom")

        monkeypatch.setitem(srv.dispatcher.routes, "get_modern_trends", boom)
        resp = await srv.handle_request(call("get_modern_trends"))
        assert resp["error"] == {"code": -32603, "message": "boom"}


class TestRunLoop:
    async def test_stdio_roundtrip(self, srv, monkeypatch, capsys):
        lines = iter([
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}) + "\n",
            json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}) + "\n",
            "\n",
            "{not json\n",
            json.dumps(call("unknown_tool_name", id=2)) + "\n",
            json.dumps(call("get_section_guidance", {"section": "faq"}, id=3)) + "\n",
        ])

        async def fake_read_line():
            return next(lines, None)

        monkeypatch.setattr(server_module, "read_line", fake_read_line)
        await server_module.run(srv)

        out = [json.loads(l) for l in capsys.readouterr().out.splitlines()]
        assert [m["id"] for m in out] == [1, None, 2, 3]
        assert out[1]["error"]["code"] == -32700
        assert out[2]["error"]["message"] == "Unknown tool: unknown_tool_name"
        faq = json.loads(out[3]["result"]["content"][0]["text"])
        assert faq["section"] == "faq"

    async def test_malformed_params_do_not_stop_loop(self, srv, monkeypatch, capsys):
        lines = iter([
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": ["x"]}) + "\n",
            json.dumps({"jsonrpc": "2.0", "id": 2, "method": "initialize", "params": {"clientInfo": "cli"}}) + "\n",
            json.dumps({"jsonrpc": "2.0", "id": 3, "method": "ping"}) + "\n",
        ])

        async def fake_read_line():
            return next(lines, None)

        monkeypatch.setattr(server_module, "read_line", fake_read_line)
        await server_module.run(srv)

        out = [json.loads(l) for l in capsys.readouterr().out.splitlines()]
        assert [m["id"] for m in out] == [1, 2, 3]
        assert out[0]["error"] == {"code": -32603, "message": "Unknown tool: "}
        assert out[1]["result"]["serverInfo"]["name"] == "design-guidance-server"
        assert out[2]["result"] == {}

    async def test_request_failure_is_contained(self, srv, monkeypatch, capsys):
        lines = iter([
            json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}) + "\n",
            json.dumps({"jsonrpc": "2.0", "id": 2, "method": "ping"}) + "\n",
        ])

        async def fake_read_line():
            return next(lines, None)

        def broken_info():
            raise RuntimeError("server info unavailable")

        monkeypatch.setattr(server_module, "read_line", fake_read_line)
        monkeypatch.setattr(srv, "server_info", broken_info)
        await server_module.run(srv)

        out = [json.loads(l) for l in capsys.readouterr().out.splitlines()]
        assert out[0] == {
            "jsonrpc": "2.0",
            "id": 1,
            "error": {"code": -32603, "message": "server info unavailable"},
        }
        assert out[1]["result"] == {}
