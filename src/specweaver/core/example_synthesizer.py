"""Example payload synthesis from JSON Schema nodes"""

import copy
from collections.abc import Mapping
from typing import Any

from specweaver.core.errors import SynthesisDegraded
from specweaver.core.ref_resolver import UNRESOLVED, is_reference, resolve_schema


def synthesize(
    schema: Any,
    components: Mapping[str, Any] | None = None,
    visited: frozenset[str] | set[str] = frozenset(),
) -> Any:
    """
    Produce a representative sample value for a schema node.

    Policy, in priority order:
    1. Missing schema -> ``None``
    2. Reference -> resolved and recursed into; cyclic or dangling -> ``{}``
    3. Explicit ``example`` -> returned verbatim
    4. Dispatch on ``type`` (string, number/integer, boolean, array, object);
       unknown or absent type -> ``None``

    The result is a plain structured value; turning it into text is up to
    the caller.

    Args:
        schema: Schema node
        components: Named schemas addressable by reference
        visited: Reference names already on the resolution path (normally empty)

    Returns:
        Synthesized example value

    Raises:
        SynthesisDegraded: If the schema graph contains a malformed node

    Examples:
        >>> synthesize({"type": "object", "properties": {"id": {"type": "integer"}}})
        {'id': 0}
        >>> synthesize({"type": "string", "example": "foo"})
        'foo'
    """
    try:
        return _synthesize(schema, components or {}, frozenset(visited))
    except SynthesisDegraded:
        raise
    except (TypeError, AttributeError, KeyError, IndexError, RecursionError) as e:
        raise SynthesisDegraded(f"Could not synthesize example: {e}") from e


def _synthesize(schema: Any, components: Mapping[str, Any], visited: frozenset[str]) -> Any:
    if schema is None:
        return None
    if not isinstance(schema, Mapping):
        raise SynthesisDegraded(f"Schema node must be an object, got {type(schema).__name__}")

    if is_reference(schema):
        schema, visited = resolve_schema(schema, components, visited)
        if schema is UNRESOLVED:
            return {}

    if "example" in schema:
        return copy.deepcopy(schema["example"])

    schema_type = _declared_type(schema)
    enum = schema.get("enum")

    if schema_type == "string":
        return enum[0] if enum else "string"
    if schema_type in ("number", "integer"):
        return enum[0] if enum else 0
    if schema_type == "boolean":
        return True
    if schema_type == "array":
        items = schema.get("items")
        if items is None:
            return []
        return [_synthesize(items, components, visited)]
    if schema_type == "object":
        properties = schema.get("properties") or {}
        if not isinstance(properties, Mapping):
            raise SynthesisDegraded("'properties' must be an object")
        return {
            name: _synthesize(prop, components, visited)
            for name, prop in properties.items()
        }

    return None


def _declared_type(schema: Mapping[str, Any]) -> str | None:
    schema_type = schema.get("type")
    # OpenAPI 3.1 allows ["string", "null"]
    if isinstance(schema_type, list):
        non_null = [t for t in schema_type if t != "null"]
        return non_null[0] if non_null else None
    return schema_type
