"""Data models for the import engine"""

from .imported import (
    CreatedEntity,
    CreationFailure,
    HTTPMethod,
    ImportedBody,
    ImportedEndpoint,
    ImportedFolder,
    ImportedHeader,
    ImportedParameter,
    ImportedResponse,
    ImportReport,
    ParameterLocation,
    ParsedImport,
)
from .source import (
    DocumentInfo,
    OpenAPIVersion,
    ServerInfo,
    SourceComponents,
    SourceDocument,
    SourceOperation,
)

__all__ = [
    "SourceDocument",
    "SourceOperation",
    "SourceComponents",
    "DocumentInfo",
    "ServerInfo",
    "OpenAPIVersion",
    "HTTPMethod",
    "ParameterLocation",
    "ImportedParameter",
    "ImportedHeader",
    "ImportedBody",
    "ImportedResponse",
    "ImportedEndpoint",
    "ImportedFolder",
    "ParsedImport",
    "CreatedEntity",
    "CreationFailure",
    "ImportReport",
]
