"""Services talking to the outside world"""

from .http_client import HTTPClient
from .importer import OpenAPIImporter
from .orchestrator import CancellationToken, ImportOrchestrator
from .persistence import PersistenceBoundary, RemotePersistenceClient
from .source_loader import load_source_from_file, load_source_from_text, load_source_from_url

__all__ = [
    "HTTPClient",
    "PersistenceBoundary",
    "RemotePersistenceClient",
    "CancellationToken",
    "ImportOrchestrator",
    "OpenAPIImporter",
    "load_source_from_text",
    "load_source_from_file",
    "load_source_from_url",
]
