"""Document parsing and tag-based taxonomy building"""

import logging
from collections.abc import Sequence
from typing import Any

from specweaver.core.openapi_validator import get_openapi_version, load_document
from specweaver.core.operation_extractor import extract_operation
from specweaver.models import ImportedEndpoint, ImportedFolder, ParsedImport, SourceDocument

logger = logging.getLogger(__name__)


class TaxonomyBuilder:
    """
    Groups endpoints into folders by their primary tag.

    A folder is created the first time its tag is seen and reused for every
    later endpoint sharing that first tag. Endpoints without tags stay
    uncategorized. Order follows insertion order.
    """

    def __init__(self) -> None:
        self._folders: dict[str, ImportedFolder] = {}
        self.uncategorized: list[ImportedEndpoint] = []

    def add(self, endpoint: ImportedEndpoint, tags: Sequence[str]) -> None:
        """Place an endpoint by the first of its source operation's tags"""
        if not tags:
            self.uncategorized.append(endpoint)
            return

        folder_name = tags[0]
        folder = self._folders.get(folder_name)
        if folder is None:
            folder = ImportedFolder(
                name=folder_name,
                description=f"Endpoints from {folder_name} tag",
            )
            self._folders[folder_name] = folder
        folder.endpoints.append(endpoint)

    @property
    def folders(self) -> list[ImportedFolder]:
        return list(self._folders.values())


def parse_document(
    spec: SourceDocument | dict[str, Any],
    preferred_content_types: Sequence[str] | None = None,
) -> ParsedImport:
    """
    Parse an OpenAPI/Swagger document into folders and uncategorized endpoints.

    Paths are visited in document order and, within a path, verbs in
    document order. Non-verb keys under a path (path-level ``parameters``,
    vendor extensions) are ignored.

    Args:
        spec: Raw parsed document or an already validated SourceDocument
        preferred_content_types: Media-type priority list (default from settings)

    Returns:
        ParsedImport with folders, uncategorized endpoints and document metadata

    Raises:
        MalformedDocument: If the document has no version marker or no paths

    Example:
        >>> parsed = parse_document({"openapi": "3.0.0", "paths": {"/ping": {"get": {}}}})
        >>> parsed.uncategorized[0].name
        'GET /ping'
    """
    document = spec if isinstance(spec, SourceDocument) else load_document(spec)
    builder = TaxonomyBuilder()

    for path, verb, operation in document.operations:
        endpoint = extract_operation(
            path,
            verb,
            operation,
            document,
            preferred_content_types=preferred_content_types,
        )
        builder.add(endpoint, operation.tags)

    parsed = ParsedImport(
        title=document.info.title,
        api_version=document.info.version,
        spec_version=get_openapi_version(
            {"openapi": document.openapi, "swagger": document.swagger}
        ),
        servers=document.server_urls,
        folders=builder.folders,
        uncategorized=builder.uncategorized,
    )

    logger.info(
        f"✅ Parsed '{parsed.title or 'untitled'}': {parsed.endpoint_count} endpoints, "
        f"{len(parsed.folders)} folders, {len(parsed.uncategorized)} uncategorized"
    )
    return parsed
