"""Tests for the remote persistence client"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from specweaver.core import RemoteCreationFailed
from specweaver.models import (
    HTTPMethod,
    ImportedBody,
    ImportedEndpoint,
    ImportedHeader,
    ImportedParameter,
    ImportedResponse,
    ParameterLocation,
)
from specweaver.services import RemotePersistenceClient


def _response(payload) -> MagicMock:
    response = MagicMock(spec=httpx.Response)
    response.json.return_value = payload
    return response


@pytest.fixture
def http_client() -> MagicMock:
    """Mock HTTP client returning a created entity"""
    client = MagicMock()
    client.post = AsyncMock(return_value=_response({"id": "abc"}))
    return client


@pytest.fixture
def persistence(http_client) -> RemotePersistenceClient:
    return RemotePersistenceClient(base_url="https://workspace.example.com/", http_client=http_client)


class TestRemotePersistenceClientInitialization:
    """Tests for client construction"""

    def test_defaults_from_settings(self, monkeypatch) -> None:
        """Test base URL and token come from the environment"""
        monkeypatch.setenv("PERSISTENCE_BASE_URL", "https://docs.internal")
        monkeypatch.setenv("PERSISTENCE_API_TOKEN", "secret")

        client = RemotePersistenceClient()

        assert client.base_url == "https://docs.internal"
        assert client.http_client.default_headers["Authorization"] == "Bearer secret"
        assert client.http_client.default_headers["Content-Type"] == "application/json"

    def test_no_token_no_authorization(self) -> None:
        client = RemotePersistenceClient(base_url="https://x", api_token="")
        assert "Authorization" not in client.http_client.default_headers


class TestCreationCalls:
    """Tests for request paths and payloads"""

    @pytest.mark.asyncio
    async def test_create_folder(self, persistence, http_client) -> None:
        folder_id = await persistence.create_folder("proj 1", "pets", "Endpoints from pets tag")

        assert folder_id == "abc"
        http_client.post.assert_awaited_once_with(
            "https://workspace.example.com/api/projects/proj%201/folders",
            json={"name": "pets", "description": "Endpoints from pets tag"},
        )

    @pytest.mark.asyncio
    async def test_create_endpoint(self, persistence, http_client) -> None:
        endpoint = ImportedEndpoint(
            name="List pets", method=HTTPMethod.GET, path="/pets", folder_id="f1"
        )
        await persistence.create_endpoint("p1", endpoint)

        url = http_client.post.call_args.args[0]
        payload = http_client.post.call_args.kwargs["json"]
        assert url == "https://workspace.example.com/api/projects/p1/endpoints"
        assert payload == {
            "name": "List pets",
            "description": None,
            "method": "GET",
            "path": "/pets",
            "folderId": "f1",
        }

    @pytest.mark.asyncio
    async def test_create_parameter(self, persistence, http_client) -> None:
        parameter = ImportedParameter(name="id", location=ParameterLocation.PATH, required=True)
        await persistence.create_parameter("e1", parameter)

        assert http_client.post.call_args.args[0].endswith("/api/endpoints/e1/parameters")
        assert http_client.post.call_args.kwargs["json"]["location"] == "PATH"
        assert http_client.post.call_args.kwargs["json"]["required"] is True

    @pytest.mark.asyncio
    async def test_create_header_body_response(self, persistence, http_client) -> None:
        await persistence.create_header("e1", ImportedHeader(key="Content-Type", value="application/json"))
        await persistence.create_body(
            "e1", ImportedBody(content_type="application/json", example="{}", raw_schema={"type": "object"})
        )
        await persistence.create_response("e1", ImportedResponse(status_code=404, status_key="404"))

        urls = [call.args[0] for call in http_client.post.call_args_list]
        payloads = [call.kwargs["json"] for call in http_client.post.call_args_list]
        assert [url.rsplit("/", 1)[1] for url in urls] == ["headers", "body", "responses"]
        assert payloads[1]["schema"] == {"type": "object"}
        assert payloads[2]["statusCode"] == 404

    @pytest.mark.asyncio
    async def test_numeric_id_stringified(self, persistence, http_client) -> None:
        http_client.post.return_value = _response({"id": 17})
        assert await persistence.create_folder("p", "f", None) == "17"


class TestCreationFailures:
    """Tests for error wrapping"""

    @pytest.mark.asyncio
    async def test_http_error_wrapped(self, persistence, http_client) -> None:
        request = httpx.Request("POST", "https://workspace.example.com")
        http_client.post.side_effect = httpx.HTTPStatusError(
            "403 Forbidden", request=request, response=httpx.Response(403, request=request)
        )

        with pytest.raises(RemoteCreationFailed) as exc_info:
            await persistence.create_folder("p", "pets", None)

        assert exc_info.value.entity_type == "folder"
        assert exc_info.value.entity_name == "pets"
        assert "Failed to create folder: pets" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_id(self, persistence, http_client) -> None:
        http_client.post.return_value = _response({"name": "pets"})
        with pytest.raises(RemoteCreationFailed):
            await persistence.create_folder("p", "pets", None)

    @pytest.mark.asyncio
    async def test_non_json_response(self, persistence, http_client) -> None:
        response = MagicMock(spec=httpx.Response)
        response.json.side_effect = ValueError("not json")
        http_client.post.return_value = response

        with pytest.raises(RemoteCreationFailed):
            await persistence.create_endpoint(
                "p", ImportedEndpoint(name="x", method=HTTPMethod.GET, path="/x")
            )
