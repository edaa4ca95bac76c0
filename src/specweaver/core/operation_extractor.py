"""Conversion of one source operation into an ImportedEndpoint"""

import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from specweaver.config import get_settings
from specweaver.core.errors import SynthesisDegraded
from specweaver.core.example_synthesizer import synthesize
from specweaver.core.ref_resolver import is_reference, reference_name
from specweaver.models import (
    HTTPMethod,
    ImportedBody,
    ImportedEndpoint,
    ImportedHeader,
    ImportedParameter,
    ImportedResponse,
    ParameterLocation,
    SourceDocument,
    SourceOperation,
)
from specweaver.models.source import HTTP_METHODS

logger = logging.getLogger(__name__)

LOCATIONS = {
    "query": ParameterLocation.QUERY,
    "path": ParameterLocation.PATH,
    "header": ParameterLocation.HEADER,
    "cookie": ParameterLocation.COOKIE,
}

DEFAULT_CONTENT_TYPE = "application/json"


def is_eligible_method(key: str) -> bool:
    """Check whether a path-item key is an importable HTTP verb"""
    return str(key).lower() in HTTP_METHODS


def choose_content_type(
    available: Iterable[str],
    preferred: Sequence[str] = (),
) -> str | None:
    """
    Pick the content type to import from a content map.

    The first preferred media type present wins (parameters such as
    ``charset`` are ignored when matching); otherwise the first declared
    key in document order.

    Examples:
        >>> choose_content_type(["application/xml", "application/json"], ["application/json"])
        'application/json'
        >>> choose_content_type(["text/plain", "application/xml"], ["application/json"])
        'text/plain'
    """
    keys = [str(key) for key in available]
    if not keys:
        return None

    for media_type in preferred:
        wanted = media_type.lower()
        for key in keys:
            if key.split(";")[0].strip().lower() == wanted:
                return key

    return keys[0]


def render_example(schema: Any, components: Mapping[str, Any]) -> str | None:
    """
    Synthesize an example for a schema and serialize it as JSON text.

    Synthesis is best-effort: a malformed schema yields ``None``.
    """
    if schema is None:
        return None

    try:
        example = synthesize(schema, components)
    except SynthesisDegraded as e:
        logger.debug(f"Example synthesis degraded: {e}")
        return None

    return json.dumps(example, indent=2, ensure_ascii=False, default=str)


def extract_operation(
    path: str,
    verb: str,
    operation: SourceOperation | Mapping[str, Any],
    document: SourceDocument,
    preferred_content_types: Sequence[str] | None = None,
) -> ImportedEndpoint:
    """
    Convert one path+verb entry into an ImportedEndpoint.

    Args:
        path: Path template, e.g. ``/users/{id}``
        verb: HTTP verb key from the path item
        operation: The source operation
        document: The validated document (for reference resolution)
        preferred_content_types: Media-type priority list (default from settings)

    Returns:
        ImportedEndpoint with parameters, headers, body and responses

    Raises:
        ValueError: If the verb is not importable
    """
    if not is_eligible_method(verb):
        raise ValueError(f"Unsupported HTTP method: {verb}")

    if not isinstance(operation, SourceOperation):
        operation = SourceOperation.model_validate(operation)

    if preferred_content_types is None:
        preferred_content_types = get_settings().preferred_content_types

    method = HTTPMethod(verb.upper())
    components = document.schemas

    body = _extract_body(operation, document, components, preferred_content_types)
    headers = []
    if body is not None:
        headers.append(
            ImportedHeader(
                key="Content-Type",
                value=body.content_type,
                description="Request body content type",
            )
        )

    return ImportedEndpoint(
        name=operation.summary or operation.operation_id or f"{method.value} {path}",
        description=operation.description,
        method=method,
        path=path,
        parameters=_extract_parameters(operation, document),
        headers=headers,
        body=body,
        responses=_extract_responses(operation, document, components, preferred_content_types),
    )


def _resolve_component(node: Any, document: SourceDocument, section: str) -> Any:
    """Follow a `$ref` into components.<section> (or top-level <section> in Swagger 2.0)"""
    if not is_reference(node):
        return node

    ref = node["$ref"]
    if not isinstance(ref, str):
        return None

    name = ref.rsplit("/", 1)[-1]
    extras = document.components.model_extra or {}
    pool = extras.get(section) or (document.model_extra or {}).get(section) or {}
    target = pool.get(name) if isinstance(pool, Mapping) else None
    if target is None:
        logger.debug(f"Unresolvable {section} reference '{reference_name(ref)}'")
    return target


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def _is_required(value: Any) -> bool:
    # `required: "false"` must not read as truthy
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def _media_example(media: Mapping[str, Any], components: Mapping[str, Any]) -> str | None:
    """Media-level `example` wins over synthesis from the media schema"""
    if "example" in media:
        return json.dumps(media["example"], indent=2, ensure_ascii=False, default=str)
    return render_example(media.get("schema"), components)


def _parameter_example(param: Mapping[str, Any], schema: Mapping[str, Any]) -> str | None:
    example = param.get("example")
    if example is None:
        example = schema.get("example")
    if example is None or isinstance(example, str):
        return example
    return json.dumps(example, ensure_ascii=False, default=str)


def _parameter_type(param: Mapping[str, Any], schema: Mapping[str, Any]) -> str:
    declared = schema.get("type") or param.get("type")
    if isinstance(declared, list):
        declared = next((t for t in declared if t != "null"), None)
    return str(declared) if declared else "string"


def _extract_parameters(
    operation: SourceOperation, document: SourceDocument
) -> list[ImportedParameter]:
    parameters = []

    for raw in operation.parameters:
        param = _resolve_component(raw, document, "parameters")
        if not isinstance(param, Mapping):
            continue

        location = str(param.get("in") or "").lower()
        if location == "body":
            # Swagger 2.0 body parameters become the request body
            continue

        name = param.get("name")
        if not name:
            logger.debug(f"Skipping unnamed parameter on operation '{operation.operation_id}'")
            continue

        schema = param.get("schema")
        if not isinstance(schema, Mapping):
            schema = {}

        parameters.append(
            ImportedParameter(
                name=str(name),
                location=LOCATIONS.get(location, ParameterLocation.QUERY),
                required=_is_required(param.get("required")),
                description=_text(param.get("description")),
                type=_parameter_type(param, schema),
                example=_parameter_example(param, schema),
            )
        )

    return parameters


def _extract_body(
    operation: SourceOperation,
    document: SourceDocument,
    components: Mapping[str, Any],
    preferred: Sequence[str],
) -> ImportedBody | None:
    request_body = _resolve_component(operation.request_body, document, "requestBodies")

    if isinstance(request_body, Mapping):
        content = request_body.get("content")
        if not isinstance(content, Mapping):
            return None

        content_type = choose_content_type(content.keys(), preferred)
        if content_type is None:
            return None

        media = content.get(content_type)
        if not isinstance(media, Mapping):
            media = {}
        schema = media.get("schema")

        return ImportedBody(
            content_type=content_type,
            example=_media_example(media, components),
            raw_schema=schema if isinstance(schema, Mapping) else None,
        )

    # Swagger 2.0: `in: body` parameter
    for param in operation.parameters:
        if isinstance(param, Mapping) and str(param.get("in", "")).lower() == "body":
            schema = param.get("schema")
            consumes = operation.consumes or document.consumes
            return ImportedBody(
                content_type=choose_content_type(consumes, preferred) or DEFAULT_CONTENT_TYPE,
                example=render_example(schema, components),
                raw_schema=schema if isinstance(schema, Mapping) else None,
            )

    return None


def _status_code(status_key: str) -> int | None:
    return int(status_key) if status_key.isdigit() else None


def _extract_responses(
    operation: SourceOperation,
    document: SourceDocument,
    components: Mapping[str, Any],
    preferred: Sequence[str],
) -> list[ImportedResponse]:
    responses = []

    for status_key, raw in operation.responses.items():
        response = _resolve_component(raw, document, "responses")
        if not isinstance(response, Mapping):
            response = {}

        content_type = None
        example = None
        content = response.get("content")

        if isinstance(content, Mapping) and content:
            content_type = choose_content_type(content.keys(), preferred)
            media = content.get(content_type)
            if not isinstance(media, Mapping):
                media = {}
            example = _media_example(media, components)
        elif "schema" in response:
            # Swagger 2.0
            produces = operation.produces or document.produces
            content_type = choose_content_type(produces, preferred) or DEFAULT_CONTENT_TYPE
            example = render_example(response.get("schema"), components)

        responses.append(
            ImportedResponse(
                status_code=_status_code(status_key),
                status_key=status_key,
                description=_text(response.get("description")),
                content_type=content_type,
                example=example,
            )
        )

    return responses
