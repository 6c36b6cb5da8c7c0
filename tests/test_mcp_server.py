import asyncio
import functools
import json

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from core.config import VERSION
from core.items import get_items
from tools import mcp_server
from tools.mcp_server import handle_get_items

from tests.helpers import TEST_BASE_URL, FakeQiita, sample_item


def _handle(fake, arguments):
    async def call():
        async with fake.client() as client:
            return await handle_get_items(
                arguments, client=client, base_url=TEST_BASE_URL, access_token="secret"
            )

    return asyncio.run(call())


def test_success_is_pretty_printed_json():
    fake = FakeQiita(payload=[sample_item(title="日本語のタイトル")])
    text = _handle(fake, {"page": "1", "per_page": ""})

    assert json.loads(text) == [
        {
            "title": "日本語のタイトル",
            "url": "https://qiita.com/test/items/1",
            "created_at": "2023-01-01T00:00:00Z",
            "user": {"name": "Test User"},
        }
    ]
    assert "日本語のタイトル" in text
    assert text.startswith("[\n  {")
    assert fake.requests[0].url.params.get("per_page") is None


def test_http_failure_becomes_error_text():
    fake = FakeQiita(status_code=404)
    with pytest.raises(ToolError) as excinfo:
        _handle(fake, {})
    assert str(excinfo.value) == "Error: HTTP error! status: 404"


def test_validation_failure_becomes_error_text():
    fake = FakeQiita()
    with pytest.raises(ToolError) as excinfo:
        _handle(fake, {"page": 1.5, "per_page": 0})
    message = str(excinfo.value)
    assert message.startswith("Error: Invalid parameters: ")
    assert "page" in message
    assert "per_page: must be >= 1" in message
    assert fake.requests == []


def test_transport_failure_becomes_error_text():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def call():
        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            return await handle_get_items({}, client=client, base_url=TEST_BASE_URL)

    with pytest.raises(ToolError, match="^Error: connection refused"):
        asyncio.run(call())


def _call_tool(monkeypatch, fake, arguments):
    """Call the registered get_items tool through an in-memory MCP client."""

    async def call():
        async with fake.client() as http_client:
            monkeypatch.setattr(
                mcp_server,
                "fetch_and_project_items",
                functools.partial(
                    get_items, client=http_client, base_url=TEST_BASE_URL, access_token="secret"
                ),
            )
            async with Client(mcp_server.mcp) as client:
                return await client.call_tool("get_items", arguments, raise_on_error=False)

    return asyncio.run(call())


def test_server_identity():
    assert mcp_server.mcp.name == "qiita-api-mcp"
    assert mcp_server.mcp._mcp_server.version == VERSION


def test_get_items_is_the_only_tool():
    async def list_tools():
        async with Client(mcp_server.mcp) as client:
            return await client.list_tools()

    tools = asyncio.run(list_tools())
    assert [tool.name for tool in tools] == ["get_items"]
    properties = tools[0].inputSchema["properties"]
    assert set(properties) == {
        "page",
        "per_page",
        "created_from",
        "created_to",
        "tags",
        "additional_fields",
    }


def test_tool_success_returns_json_text(monkeypatch):
    fake = FakeQiita(payload=[sample_item()])
    result = _call_tool(
        monkeypatch,
        fake,
        {"page": 2, "tags": ["Ruby", "Rails"], "additional_fields": ["user.id"]},
    )

    assert result.is_error is False
    items = json.loads(result.content[0].text)
    assert items[0]["user"] == {"name": "Test User", "id": "user1"}

    request = fake.requests[0]
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.url.params["page"] == "2"
    assert request.url.params["query"] == "tag:Ruby,Rails"


def test_tool_http_failure_is_flagged(monkeypatch):
    result = _call_tool(monkeypatch, FakeQiita(status_code=404), {})
    assert result.is_error is True
    assert [block.text for block in result.content] == ["Error: HTTP error! status: 404"]


def test_tool_rejects_boolean_page(monkeypatch):
    fake = FakeQiita()
    result = _call_tool(monkeypatch, fake, {"page": True})
    assert result.is_error is True
    assert result.content[0].text == "Error: Invalid parameters: page: must be an integer"
    assert fake.requests == []


def test_tool_null_body_keeps_error_format(monkeypatch):
    result = _call_tool(monkeypatch, FakeQiita(payload=None), {})
    assert result.is_error is True
    assert result.content[0].text == "Error: Expected a JSON array of items, got NoneType"
