from fastapi.testclient import TestClient

from solana_rpc_mcp import resources
from solana_rpc_mcp.config import ServerConfig
from solana_rpc_mcp.mcp import build_registry
from solana_rpc_mcp.server import app
from solana_rpc_mcp.stdio import SERVER_NAME, SERVER_VERSION


class StubClient:
    async def get_balance(self, public_key):
        return 2_500_000_000


def _rpc(client, method, params=None, rpc_id=1):
    body = {"jsonrpc": "2.0", "id": rpc_id, "method": method}
    if params is not None:
        body["params"] = params
    return client.post("/mcp", json=body)


def test_health_endpoint():
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
    assert resp.headers.get("X-Request-ID")


def test_mcp_initialize():
    client = TestClient(app)
    resp = _rpc(client, "initialize", {"protocolVersion": "2025-03-26", "capabilities": {}}, rpc_id=10)
    assert resp.status_code == 200
    result = resp.json()["result"]
    assert result["protocolVersion"] == "2025-03-26"
    assert result["serverInfo"] == {"name": SERVER_NAME, "version": SERVER_VERSION}
    assert result["capabilities"]["tools"]["listChanged"] is False
    assert result["capabilities"]["prompts"]["listChanged"] is False


def test_mcp_initialized_notification_has_no_body():
    client = TestClient(app)
    resp = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert resp.status_code == 204
    assert resp.content == b""


def test_mcp_tools_list():
    client = TestClient(app)
    resp = _rpc(client, "tools/list", rpc_id=3)
    data = resp.json()
    assert data["id"] == 3
    names = [tool["name"] for tool in data["result"]["tools"]]
    assert "getBalance" in names
    assert all("inputSchema" in tool for tool in data["result"]["tools"])


def test_mcp_tools_call(monkeypatch, address):
    monkeypatch.setattr("solana_rpc_mcp.mcp.TOOL_REGISTRY", build_registry(ServerConfig(), client=StubClient()))
    client = TestClient(app)
    resp = _rpc(client, "tools/call", {"name": "getBalance", "arguments": {"publicKey": address}}, rpc_id=4)
    assert resp.status_code == 200
    assert resp.json()["result"] == {"content": [{"type": "text", "text": "2.5 SOL (2500000000 lamports)"}]}


def test_mcp_tools_call_errors_stay_in_band():
    client = TestClient(app)
    unknown = _rpc(client, "tools/call", {"name": "getSupply", "arguments": {}})
    invalid = _rpc(client, "tools/call", {"name": "getBalance", "arguments": {}})

    assert unknown.json()["result"]["content"][0]["text"] == "Error: Unknown tool: getSupply"
    assert invalid.json()["result"]["content"][0]["text"] == "Error: Missing required argument: publicKey"
    assert "error" not in unknown.json()


def test_mcp_tools_call_requires_name():
    client = TestClient(app)
    resp = _rpc(client, "tools/call", {"arguments": {}})
    assert resp.json()["error"]["code"] == -32602


def test_mcp_resources_read(monkeypatch):
    async def fake_fetch(url):
        return "docs body"

    monkeypatch.setattr(resources, "fetch_text", fake_fetch)
    client = TestClient(app)
    listed = _rpc(client, "resources/list").json()["result"]["resources"]
    uri = listed[0]["uri"]
    resp = _rpc(client, "resources/read", {"uri": uri})
    assert resp.json()["result"] == {"contents": [{"uri": uri, "text": "docs body"}]}


def test_mcp_prompts_get():
    client = TestClient(app)
    listed = _rpc(client, "prompts/list").json()["result"]["prompts"]
    assert any(prompt["name"] == "calculate-storage-deposit" for prompt in listed)

    resp = _rpc(client, "prompts/get", {"name": "calculate-storage-deposit", "arguments": {"bytes": "42"}})
    text = resp.json()["result"]["messages"][0]["content"]["text"]
    assert "42 bytes" in text


def test_mcp_prompts_get_missing_argument():
    client = TestClient(app)
    resp = _rpc(client, "prompts/get", {"name": "why-did-my-transaction-fail", "arguments": {}})
    error = resp.json()["error"]
    assert error["code"] == -32602
    assert error["message"] == "Missing required argument: signature"


def test_mcp_parse_error():
    client = TestClient(app)
    resp = client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == -32700


def test_mcp_invalid_request_shape():
    client = TestClient(app)
    resp = client.post("/mcp", json=[1, 2, 3])
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == -32600


def test_mcp_unknown_method():
    client = TestClient(app)
    resp = _rpc(client, "sampling/createMessage", rpc_id=9)
    data = resp.json()
    assert data["id"] == 9
    assert data["error"]["code"] == -32601
