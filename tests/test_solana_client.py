import httpx
import pytest

from solana_rpc_mcp.config import ServerConfig
from solana_rpc_mcp.solana_api.client import (
    RpcUnreachableError,
    SolanaRpcClient,
    SolanaRpcError,
)


class MockResponse:
    def __init__(self, status_code: int, json_body):
        self.status_code = status_code
        self._json = json_body

    def json(self):
        if isinstance(self._json, Exception):
            raise self._json
        return self._json


class MockAsyncClient:
    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    async def post(self, url, json=None):
        self.calls.append({"url": url, "json": json})
        if not self.responses:
            raise RuntimeError("No mock responses")
        return self.responses.pop(0)

    async def aclose(self):
        return None


class FailingAsyncClient:
    def __init__(self, exc: Exception):
        self.exc = exc

    async def post(self, *_args, **_kwargs):
        raise self.exc

    async def aclose(self):
        return None


def _ok(result):
    return MockResponse(200, {"jsonrpc": "2.0", "id": 1, "result": result})


@pytest.mark.asyncio
async def test_get_balance_sends_jsonrpc_body():
    mock = MockAsyncClient([_ok({"context": {"slot": 1}, "value": 42})])
    config = ServerConfig(rpc_url="https://rpc.test", commitment="finalized")
    client = SolanaRpcClient(config, async_client=mock)

    assert await client.get_balance("addr") == 42
    call = mock.calls[0]
    assert call["url"] == "https://rpc.test"
    assert call["json"]["method"] == "getBalance"
    assert call["json"]["params"] == ["addr", {"commitment": "finalized"}]


@pytest.mark.asyncio
async def test_get_account_info_unwraps_null_value():
    mock = MockAsyncClient([_ok({"context": {"slot": 1}, "value": None})])
    client = SolanaRpcClient(async_client=mock)
    assert await client.get_account_info("addr") is None
    assert mock.calls[0]["json"]["params"][1]["encoding"] == "base64"


@pytest.mark.asyncio
async def test_get_transaction_requests_parsed_v0():
    mock = MockAsyncClient([_ok(None)])
    client = SolanaRpcClient(async_client=mock)
    assert await client.get_transaction("sig") is None
    options = mock.calls[0]["json"]["params"][1]
    assert options["encoding"] == "jsonParsed"
    assert options["maxSupportedTransactionVersion"] == 0


@pytest.mark.asyncio
async def test_rent_exemption_returns_int():
    mock = MockAsyncClient([_ok(890880)])
    client = SolanaRpcClient(async_client=mock)
    assert await client.get_minimum_balance_for_rent_exemption(0) == 890880
    assert mock.calls[0]["json"]["params"][0] == 0


@pytest.mark.asyncio
async def test_latest_blockhash():
    mock = MockAsyncClient([_ok({"context": {"slot": 1}, "value": {"blockhash": "hash", "lastValidBlockHeight": 9}})])
    client = SolanaRpcClient(async_client=mock)
    assert await client.get_latest_blockhash() == "hash"


@pytest.mark.asyncio
async def test_rpc_error_object_maps_message_and_code():
    mock = MockAsyncClient(
        [MockResponse(200, {"jsonrpc": "2.0", "id": 1, "error": {"code": -32602, "message": "Invalid param: WrongSize"}})]
    )
    client = SolanaRpcClient(async_client=mock)
    with pytest.raises(SolanaRpcError) as excinfo:
        await client.get_balance("addr")
    assert str(excinfo.value) == "Invalid param: WrongSize"
    assert excinfo.value.code == -32602


@pytest.mark.asyncio
async def test_http_error_without_body_is_unreachable():
    mock = MockAsyncClient([MockResponse(503, ValueError("no json"))])
    client = SolanaRpcClient(async_client=mock)
    with pytest.raises(RpcUnreachableError) as excinfo:
        await client.get_balance("addr")
    assert excinfo.value.status_code == 503


@pytest.mark.asyncio
async def test_unexpected_payload():
    mock = MockAsyncClient([MockResponse(200, ["unexpected"])])
    client = SolanaRpcClient(async_client=mock)
    with pytest.raises(SolanaRpcError):
        await client.get_balance("addr")


@pytest.mark.asyncio
async def test_transport_error_maps_to_unreachable():
    client = SolanaRpcClient(async_client=FailingAsyncClient(httpx.ConnectError("boom")))
    with pytest.raises(RpcUnreachableError):
        await client.get_account_info("addr")


@pytest.mark.asyncio
async def test_aclose_closes_owned_client():
    client = SolanaRpcClient(async_client=None)
    await client._get_client()
    await client.aclose()
    assert client._client is None
