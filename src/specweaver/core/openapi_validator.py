"""OpenAPI/Swagger document validation and version detection"""

import logging
from typing import Any

from pydantic import ValidationError

from specweaver.core.errors import MalformedDocument
from specweaver.models.source import OpenAPIVersion, SourceDocument

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options")


class ValidationResult:
    """Result of OpenAPI validation"""

    def __init__(
        self,
        is_valid: bool,
        version: OpenAPIVersion = OpenAPIVersion.UNKNOWN,
        errors: list[str] | None = None,
    ) -> None:
        self.is_valid = is_valid
        self.version = version
        self.errors = errors or []

    def __repr__(self) -> str:
        return (
            f"ValidationResult(is_valid={self.is_valid}, "
            f"version={self.version}, errors={len(self.errors)})"
        )


def get_openapi_version(spec: dict) -> OpenAPIVersion:
    """
    Detect the OpenAPI/Swagger version from a specification.

    Args:
        spec: OpenAPI specification dictionary

    Returns:
        Detected OpenAPI version

    Examples:
        >>> get_openapi_version({"openapi": "3.0.0"})
        OpenAPIVersion.OPENAPI_3_0
        >>> get_openapi_version({"swagger": "2.0"})
        OpenAPIVersion.SWAGGER_2_0
    """
    if spec.get("openapi") is not None:
        version_str = str(spec["openapi"])

        if version_str.startswith("3.1"):
            return OpenAPIVersion.OPENAPI_3_1
        elif version_str.startswith("3.0"):
            return OpenAPIVersion.OPENAPI_3_0
        elif version_str.startswith("3."):
            # Future 3.x versions, default to 3.1
            return OpenAPIVersion.OPENAPI_3_1

    if spec.get("swagger") is not None:
        version_str = str(spec["swagger"])
        if version_str.startswith("2."):
            return OpenAPIVersion.SWAGGER_2_0

    return OpenAPIVersion.UNKNOWN


def validate_openapi_structure(spec: Any) -> ValidationResult:
    """
    Validate the parts of a document the import engine depends on.

    A version marker and a non-empty `paths` mapping are required. An
    unrecognised version string is accepted; the document is imported on a
    best-effort basis.

    Args:
        spec: Parsed document

    Returns:
        ValidationResult with detailed validation information

    Examples:
        >>> validate_openapi_structure({"openapi": "3.0.0", "paths": {"/a": {}}}).is_valid
        True
    """
    errors: list[str] = []

    if not isinstance(spec, dict):
        return ValidationResult(
            is_valid=False, errors=["Specification must be a dictionary/object"]
        )

    if not (spec.get("openapi") or spec.get("swagger")):
        errors.append("Missing 'openapi' or 'swagger' version field")

    paths = spec.get("paths")
    if paths is None:
        errors.append("Missing 'paths' field")
    elif not isinstance(paths, dict):
        errors.append("'paths' must be an object")
    elif not paths:
        errors.append("'paths' must contain at least one path")

    version = get_openapi_version(spec)
    if not errors and version == OpenAPIVersion.UNKNOWN:
        logger.warning(f"Unrecognised specification version: {spec.get('openapi') or spec.get('swagger')}")

    return ValidationResult(
        is_valid=len(errors) == 0,
        version=version,
        errors=errors,
    )


def load_document(spec: Any) -> SourceDocument:
    """
    Validate a parsed document and build the typed SourceDocument.

    Args:
        spec: Parsed JSON/YAML document

    Returns:
        Validated SourceDocument

    Raises:
        MalformedDocument: If the document cannot be imported
    """
    result = validate_openapi_structure(spec)
    if not result.is_valid:
        raise MalformedDocument(
            f"Invalid OpenAPI specification: {'; '.join(result.errors)}",
            errors=result.errors,
        )

    try:
        return SourceDocument.model_validate(spec)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise MalformedDocument(
            f"Invalid OpenAPI specification: {'; '.join(errors)}", errors=errors
        ) from e


def count_endpoints(spec: dict) -> int:
    """
    Count the importable path+verb combinations in a document.

    Examples:
        >>> count_endpoints({"paths": {"/users": {"get": {}, "post": {}}}})
        2
    """
    if not isinstance(spec, dict):
        return 0

    paths = spec.get("paths", {})
    if not isinstance(paths, dict):
        return 0

    count = 0
    for path_item in paths.values():
        if not isinstance(path_item, dict):
            continue
        count += sum(1 for method in path_item if str(method).lower() in HTTP_METHODS)

    return count
