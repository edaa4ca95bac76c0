"""specweaver - OpenAPI/Swagger import engine for API documentation workspaces

This is the core library that provides:
- parse_document: turns a source document into folders and endpoints
- synthesize: builds example payloads from (possibly cyclic) schema graphs
- ImportOrchestrator: creates the parsed taxonomy against the persistence API
- OpenAPIImporter: load, parse and import in one call
"""

from specweaver.core import (
    MalformedDocument,
    RemoteCreationFailed,
    SynthesisDegraded,
    parse_document,
    synthesize,
)
from specweaver.services import CancellationToken, ImportOrchestrator, OpenAPIImporter

__version__ = "0.1.0"

__all__ = [
    "parse_document",
    "synthesize",
    "ImportOrchestrator",
    "OpenAPIImporter",
    "CancellationToken",
    "MalformedDocument",
    "SynthesisDegraded",
    "RemoteCreationFailed",
]
