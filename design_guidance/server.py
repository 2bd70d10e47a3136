#!/usr/bin/env python3
"""
Design Guidance MCP Server
==========================
Exposes a fixed UI/UX design knowledge base (components, sections, palettes,
principles, layouts, color, typography, responsive, accessibility, trends,
animation, inspiration) as MCP tools over stdio JSON-RPC.

Methods:
- initialize / notifications/initialized
- ping
- tools/list
- tools/call

Usage:
    python -m design_guidance.server

    # Print sample tool output and exit
    python -m design_guidance.server --test

    # With file logging
    DESIGN_GUIDANCE_LOG_DIR=/tmp/dg python -m design_guidance.server
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, Optional

from .config import GuidanceConfig, get_config
from .dispatcher import Dispatcher
from .errors import UnknownOperation
from .knowledge import KnowledgeBase
from .log import configure_logging, get_logger
from .registry import operation_names, tool_schemas

logger = get_logger("server")

PARSE_ERROR = -32700
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


# ─── JSON-RPC helpers ─────────────────────────────────────────────────────────


async def read_line() -> Optional[str]:
    """Next stdin line, or None at EOF."""
    loop = asyncio.get_event_loop()
    line = await loop.run_in_executor(None, sys.stdin.readline)
    return line or None


def write_message(msg: Dict):
    sys.stdout.write(json.dumps(msg, ensure_ascii=False) + "\n")
    sys.stdout.flush()


def ok(id: Any, result: Any) -> Dict:
    return {"jsonrpc": "2.0", "id": id, "result": result}


def err(id: Any, code: int, message: str) -> Dict:
    return {"jsonrpc": "2.0", "id": id, "error": {"code": code, "message": message}}


def text_content(text: str) -> Dict:
    return {"content": [{"type": "text", "text": text}]}


# ─── MCP Server ───────────────────────────────────────────────────────────────


class DesignGuidanceServer:
    """Protocol layer: turns JSON-RPC requests into dispatcher calls."""

    def __init__(
        self,
        dispatcher: Optional[Dispatcher] = None,
        config: Optional[GuidanceConfig] = None,
    ):
        self.config = config or get_config()
        if dispatcher is None:
            kb = KnowledgeBase.load(self.config.knowledge.data_dir)
            dispatcher = Dispatcher(kb)
        self.dispatcher = dispatcher

    def server_info(self) -> Dict:
        return {
            "protocolVersion": self.config.server.protocol_version,
            "serverInfo": {
                "name": self.config.server.name,
                "version": self.config.server.version,
            },
            "capabilities": {"tools": {}},
        }

    def tools(self) -> list:
        return tool_schemas(self.dispatcher.list_operations())

    async def handle_request(self, msg: Dict) -> Optional[Dict]:
        """Response for one message, or None for notifications."""
        method = msg.get("method", "")
        msg_id = msg.get("id")
        params = msg.get("params")
        if not isinstance(params, dict):
            params = {}

        if "id" not in msg:
            logger.debug("notification %s", method)
            return None

        if method == "initialize":
            client_info = params.get("clientInfo")
            client = client_info.get("name", "unknown") if isinstance(client_info, dict) else "unknown"
            logger.info("initialize from %s", client)
            return ok(msg_id, self.server_info())

        if method == "ping":
            return ok(msg_id, {})

        if method == "tools/list":
            return ok(msg_id, {"tools": self.tools()})

        if method == "tools/call":
            name = params.get("name", "")
            arguments = params.get("arguments") or {}
            try:
                text = self.dispatcher.call(name, arguments)
            except UnknownOperation as e:
                logger.warning("%s", e)
                return err(msg_id, INTERNAL_ERROR, str(e))
            except Exception as e:
                logger.exception("tools/call %s failed", name)
                return err(msg_id, INTERNAL_ERROR, str(e))
            return ok(msg_id, text_content(text))

        return err(msg_id, METHOD_NOT_FOUND, f"Method not found: {method}")


async def run(server: DesignGuidanceServer):
    logger.info("Design Guidance MCP Server starting")
    logger.info("  Knowledge: %s", server.config.knowledge.data_dir)
    logger.info("  Tools: %d", len(server.tools()))

    while True:
        line = await read_line()
        if line is None:
            break
        if not line.strip():
            continue
        try:
            msg = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Parse error: %s", e)
            write_message(err(None, PARSE_ERROR, "Parse error"))
            continue
        if not isinstance(msg, dict):
            write_message(err(None, PARSE_ERROR, "Parse error"))
            continue

        try:
            response = await server.handle_request(msg)
        except Exception as e:
            logger.exception("request %r failed", msg.get("method"))
            response = err(msg.get("id"), INTERNAL_ERROR, str(e))
        if response is not None:
            write_message(response)

    logger.info("stdin closed, shutting down")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Design guidance MCP server (stdio)")
    parser.add_argument("--test", action="store_true", help="print sample tool output and exit")
    parser.add_argument("--list", action="store_true", help="print tool names and exit")
    args = parser.parse_args(argv)

    cfg = get_config()
    configure_logging(cfg.logging.level, cfg.logging.log_dir)
    server = DesignGuidanceServer(config=cfg)

    if args.list:
        for name in operation_names():
            print(name)
        return

    if args.test:
        d = server.dispatcher
        print("=== get_component_guidance (buttons) ===")
        print(d.call("get_component_guidance", {"component": "buttons"}))
        print("\n=== get_design_principles (whitespace) ===")
        print(d.call("get_design_principles", {"category": "whitespace"}))
        print("\n=== get_inspiration_by_mood (minimal) ===")
        print(d.call("get_inspiration_by_mood", {"mood": "minimal"}))
        print("\n=== get_holistic_design_review ===")
        print(d.call("get_holistic_design_review", {}))
        return

    asyncio.run(run(server))


if __name__ == "__main__":
    main()
