"""FastAPI application exposing the Solana MCP tools over a JSON-RPC gateway."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from solana_rpc_mcp import mcp, prompts, resources
from solana_rpc_mcp.stdio import SERVER_NAME, SERVER_VERSION

logger = logging.getLogger(__name__)

HEALTH_STATUS = {"status": "ok"}
DEFAULT_PROTOCOL_VERSION = "2025-03-26"


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    await mcp.close_clients()


app = FastAPI(
    title=SERVER_NAME,
    description="Solana RPC tool surface for LLM agents.",
    version=SERVER_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    Minimal JSON-RPC gateway for MCP clients that speak HTTP.

    Supported methods:
      - initialize
      - tools/list, tools/call
      - resources/list, resources/read
      - prompts/list, prompts/get
      - notifications/initialized (no response body)
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(
        payload: Dict[str, Any],
        status_code: int = 200,
        *,
        outcome: str,
        method_label: Optional[str] = None,
        error_code: Optional[int] = None,
    ) -> JSONResponse:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            payload.get("id"),
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    def _error(rpc_id: Any, code: int, message: str, *, method_label: Optional[str] = None, status_code: int = 200):
        return _respond(
            _jsonrpc_error_payload(rpc_id, code, message),
            status_code=status_code,
            outcome="error",
            method_label=method_label,
            error_code=code,
        )

    def _success(rpc_id: Any, result: Any, *, method_label: str) -> JSONResponse:
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method_label)

    try:
        body = await request.json()
    except Exception:
        return _error(None, -32700, "Parse error", status_code=400)

    if not isinstance(body, dict):
        return _error(None, -32600, "Invalid request", status_code=400)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return _error(rpc_id, -32602, "Invalid params", method_label=method)

    if not method or not isinstance(method, str):
        return _error(rpc_id, -32600, "Invalid request")

    if method in ("notifications/initialized", "initialized"):
        # Notifications do not get a JSON-RPC response body.
        return Response(status_code=204)

    if method == "initialize":
        protocol_version = params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION
        if not isinstance(protocol_version, str):
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
            "capabilities": {
                "tools": {"listChanged": False},
                "resources": {"listChanged": False},
                "prompts": {"listChanged": False},
            },
        }
        return _success(rpc_id, result, method_label=method)

    if method == "tools/list":
        return _success(rpc_id, {"tools": mcp.list_tools()}, method_label=method)

    if method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if not isinstance(tool_name, str) or not tool_name.strip():
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        # Argument shape problems are reported in-band by the dispatcher.
        result = await mcp.call_tool(tool_name, arguments)
        return _success(rpc_id, result, method_label=method)

    if method == "resources/list":
        return _success(rpc_id, {"resources": resources.list_resources()}, method_label=method)

    if method == "resources/read":
        uri = params.get("uri")
        if not isinstance(uri, str) or not uri:
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        return _success(rpc_id, await resources.read_resource(uri), method_label=method)

    if method == "prompts/list":
        return _success(rpc_id, {"prompts": prompts.list_prompts()}, method_label=method)

    if method == "prompts/get":
        name = params.get("name")
        if not isinstance(name, str) or not name:
            return _error(rpc_id, -32602, "Invalid params", method_label=method)
        try:
            result = prompts.get_prompt(name, params.get("arguments"))
        except prompts.PromptError as exc:
            return _error(rpc_id, -32602, str(exc), method_label=method)
        return _success(rpc_id, result, method_label=method)

    return _error(rpc_id, -32601, "Method not found", method_label=method)


# Run with: python -m solana_rpc_mcp --http


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}
