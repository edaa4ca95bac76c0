"""URL validation and joining utilities"""

from urllib.parse import urlparse


def is_valid_url(url: str) -> bool:
    """
    Check if a URL is a fetchable http(s) URL.

    Args:
        url: URL to validate

    Returns:
        True if URL has an http/https scheme and a netloc

    Examples:
        >>> is_valid_url("https://example.com/openapi.json")
        True
        >>> is_valid_url("not a url")
        False
    """
    try:
        result = urlparse(url)
        return result.scheme in ("http", "https") and bool(result.netloc)
    except Exception:
        return False


def build_api_url(base_url: str, path: str) -> str:
    """
    Append an API path to a base URL, keeping any path prefix of the base.

    Args:
        base_url: Root of the API, possibly with a path prefix
        path: API path (with or without leading slash)

    Returns:
        Complete URL

    Examples:
        >>> build_api_url("https://example.com", "/api/projects")
        'https://example.com/api/projects'
        >>> build_api_url("https://example.com/workspace/", "api/projects")
        'https://example.com/workspace/api/projects'
    """
    if path.startswith(("http://", "https://")):
        return path

    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def looks_like_yaml_source(location: str) -> bool:
    """Check whether a file name or URL points at a YAML document"""
    return urlparse(location).path.lower().endswith((".yaml", ".yml"))
