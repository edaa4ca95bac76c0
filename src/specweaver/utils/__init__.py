"""Utility functions"""

from .url_helpers import build_api_url, is_valid_url, looks_like_yaml_source

__all__ = [
    "is_valid_url",
    "build_api_url",
    "looks_like_yaml_source",
]
