"""
Loading of source documents from a URL, a file, or pasted text.

All three sources are reduced to the same parsed in-memory document (a dict)
before reaching the import engine. JSON is tried first, then YAML.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml

from specweaver.core.errors import MalformedDocument
from specweaver.services.http_client import HTTPClient
from specweaver.utils.url_helpers import is_valid_url, looks_like_yaml_source

logger = logging.getLogger(__name__)


def load_source_from_text(text: str, prefer_yaml: bool = False) -> dict[str, Any]:
    """
    Parse pasted or uploaded document text.

    Args:
        text: JSON or YAML text
        prefer_yaml: Skip the JSON attempt (for .yaml/.yml sources)

    Returns:
        Parsed document

    Raises:
        MalformedDocument: If the text is empty or not a JSON/YAML object

    Examples:
        >>> load_source_from_text('{"openapi": "3.0.0"}')
        {'openapi': '3.0.0'}
    """
    if not text or not text.strip():
        raise MalformedDocument("Please enter OpenAPI specification")

    data: Any = None
    if not prefer_yaml:
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None

    if data is None:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise MalformedDocument(f"Document is neither valid JSON nor YAML: {e}") from e

    if not isinstance(data, dict):
        raise MalformedDocument("Specification must be a dictionary/object")

    return data


def load_source_from_file(file_path: str | Path) -> dict[str, Any]:
    """
    Read and parse an uploaded document file.

    Raises:
        MalformedDocument: If the file cannot be read or parsed
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedDocument(f"Could not read {path.name}: {e}") from e

    logger.debug(f"Loaded {path.name} ({len(text) / 1024:.1f}KB)")
    return load_source_from_text(text, prefer_yaml=looks_like_yaml_source(path.name))


async def load_source_from_url(url: str, http_client: HTTPClient | None = None) -> dict[str, Any]:
    """
    Fetch and parse a document from a URL.

    Args:
        url: http(s) URL of the document
        http_client: HTTP client to use (created if not provided)

    Returns:
        Parsed document

    Raises:
        MalformedDocument: If the URL is invalid, unreachable, or the content unparseable
    """
    if not url or not is_valid_url(url.strip()):
        raise MalformedDocument("Please enter a valid URL")

    url = url.strip()
    client = http_client if http_client is not None else HTTPClient()

    try:
        text = await client.fetch_text(url)
    except httpx.HTTPError as e:
        logger.error(f"Failed to fetch OpenAPI spec from {url}: {e}")
        raise MalformedDocument(f"Failed to fetch from URL: {e}") from e

    logger.info(f"🔍 Fetched OpenAPI spec from {url}")
    return load_source_from_text(text, prefer_yaml=looks_like_yaml_source(url))
