"""One-call import: load a source, parse it, and materialize it"""

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from specweaver.core import count_endpoints, parse_document
from specweaver.models import ImportReport, ParsedImport
from specweaver.services.orchestrator import CancellationToken, ImportOrchestrator
from specweaver.services.persistence import PersistenceBoundary, RemotePersistenceClient
from specweaver.services.source_loader import (
    load_source_from_file,
    load_source_from_text,
    load_source_from_url,
)

logger = logging.getLogger(__name__)


class OpenAPIImporter:
    """
    Imports OpenAPI/Swagger documents into a project.

    The document is fully validated and parsed before the first creation
    call, so a malformed document never produces remote entities.
    """

    def __init__(
        self,
        client: PersistenceBoundary | None = None,
        max_concurrency: int | None = None,
        preferred_content_types: Sequence[str] | None = None,
    ) -> None:
        """
        Initialize the importer.

        Args:
            client: Persistence boundary (HTTP client from settings if not provided)
            max_concurrency: Top-level units in flight (default from settings)
            preferred_content_types: Media-type priority list (default from settings)
        """
        self.client = client if client is not None else RemotePersistenceClient()
        self.orchestrator = ImportOrchestrator(self.client, max_concurrency=max_concurrency)
        self.preferred_content_types = preferred_content_types

    def parse(self, spec: dict[str, Any]) -> ParsedImport:
        """Validate and parse a document without creating anything"""
        logger.info(f"Parsing document with {count_endpoints(spec)} operations")
        return parse_document(spec, preferred_content_types=self.preferred_content_types)

    async def import_document(
        self,
        project_id: str,
        spec: dict[str, Any],
        cancel_token: CancellationToken | None = None,
    ) -> ImportReport:
        """
        Import an already parsed JSON/YAML document into a project.

        Raises:
            MalformedDocument: Before any remote call, if the document is invalid
            RemoteCreationFailed: If a creation call fails
        """
        parsed = self.parse(spec)
        return await self.orchestrator.import_into(
            project_id,
            parsed.folders,
            parsed.uncategorized,
            cancel_token=cancel_token,
        )

    async def import_text(
        self, project_id: str, text: str, cancel_token: CancellationToken | None = None
    ) -> ImportReport:
        """Import pasted JSON/YAML text"""
        return await self.import_document(project_id, load_source_from_text(text), cancel_token)

    async def import_file(
        self, project_id: str, file_path: str | Path, cancel_token: CancellationToken | None = None
    ) -> ImportReport:
        """Import an uploaded document file"""
        return await self.import_document(project_id, load_source_from_file(file_path), cancel_token)

    async def import_url(
        self, project_id: str, url: str, cancel_token: CancellationToken | None = None
    ) -> ImportReport:
        """Fetch a document from a URL and import it"""
        spec = await load_source_from_url(url)
        return await self.import_document(project_id, spec, cancel_token)
