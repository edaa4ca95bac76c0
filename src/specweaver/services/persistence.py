"""Remote persistence boundary

The engine only ever creates entities remotely and keeps the identifiers it
gets back; it never reads them back within the same import.
"""

import logging
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from specweaver.config import get_settings
from specweaver.core.errors import RemoteCreationFailed
from specweaver.models import (
    ImportedBody,
    ImportedEndpoint,
    ImportedHeader,
    ImportedParameter,
    ImportedResponse,
)
from specweaver.services.http_client import HTTPClient
from specweaver.utils.url_helpers import build_api_url

logger = logging.getLogger(__name__)


class PersistenceBoundary(Protocol):
    """Creation API of the system of record. Every call returns the new entity's id."""

    async def create_folder(self, project_id: str, name: str, description: str | None) -> str: ...

    async def create_endpoint(self, project_id: str, endpoint: ImportedEndpoint) -> str: ...

    async def create_parameter(self, endpoint_id: str, parameter: ImportedParameter) -> str: ...

    async def create_header(self, endpoint_id: str, header: ImportedHeader) -> str: ...

    async def create_body(self, endpoint_id: str, body: ImportedBody) -> str: ...

    async def create_response(self, endpoint_id: str, response: ImportedResponse) -> str: ...


class RemotePersistenceClient:
    """PersistenceBoundary over the workspace's JSON HTTP API"""

    def __init__(
        self,
        base_url: str | None = None,
        api_token: str | None = None,
        http_client: HTTPClient | None = None,
    ) -> None:
        """
        Initialize the persistence client.

        Args:
            base_url: Root of the persistence API (default from settings)
            api_token: Bearer token (default from settings)
            http_client: HTTP client to use (created if not provided)
        """
        self.settings = get_settings()
        self.base_url = base_url or self.settings.persistence_base_url
        token = api_token if api_token is not None else self.settings.persistence_api_token

        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.http_client = http_client if http_client is not None else HTTPClient(headers=headers)

    async def create_folder(self, project_id: str, name: str, description: str | None) -> str:
        return await self._create(
            f"/api/projects/{quote(project_id, safe='')}/folders",
            {"name": name, "description": description},
            "folder",
            name,
        )

    async def create_endpoint(self, project_id: str, endpoint: ImportedEndpoint) -> str:
        return await self._create(
            f"/api/projects/{quote(project_id, safe='')}/endpoints",
            {
                "name": endpoint.name,
                "description": endpoint.description,
                "method": endpoint.method.value,
                "path": endpoint.path,
                "folderId": endpoint.folder_id,
            },
            "endpoint",
            endpoint.name,
        )

    async def create_parameter(self, endpoint_id: str, parameter: ImportedParameter) -> str:
        return await self._create(
            f"/api/endpoints/{quote(endpoint_id, safe='')}/parameters",
            {
                "name": parameter.name,
                "location": parameter.location.value,
                "required": parameter.required,
                "description": parameter.description,
                "type": parameter.type,
                "example": parameter.example,
            },
            "parameter",
            parameter.name,
        )

    async def create_header(self, endpoint_id: str, header: ImportedHeader) -> str:
        return await self._create(
            f"/api/endpoints/{quote(endpoint_id, safe='')}/headers",
            {"key": header.key, "value": header.value, "description": header.description},
            "header",
            header.key,
        )

    async def create_body(self, endpoint_id: str, body: ImportedBody) -> str:
        return await self._create(
            f"/api/endpoints/{quote(endpoint_id, safe='')}/body",
            {"contentType": body.content_type, "example": body.example, "schema": body.raw_schema},
            "body",
            body.content_type,
        )

    async def create_response(self, endpoint_id: str, response: ImportedResponse) -> str:
        return await self._create(
            f"/api/endpoints/{quote(endpoint_id, safe='')}/responses",
            {
                "statusCode": response.status_code,
                "description": response.description,
                "contentType": response.content_type,
                "example": response.example,
            },
            "response",
            response.status_key,
        )

    async def _create(
        self,
        path: str,
        payload: dict[str, Any],
        entity_type: str,
        entity_name: str,
    ) -> str:
        url = build_api_url(self.base_url, path)

        try:
            response = await self.http_client.post(url, json=payload)
            data = response.json()
        except httpx.HTTPError as e:
            logger.error(f"❌ POST {url} failed: {e}")
            raise RemoteCreationFailed(entity_type, entity_name, e) from e
        except ValueError as e:
            raise RemoteCreationFailed(entity_type, entity_name, "response was not JSON") from e

        remote_id = data.get("id") if isinstance(data, dict) else None
        if remote_id is None:
            raise RemoteCreationFailed(entity_type, entity_name, "response did not include an id")

        return str(remote_id)
