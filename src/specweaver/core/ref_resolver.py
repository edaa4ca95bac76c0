"""Schema reference resolution with cycle protection

A reference is only followed when its target name is not already on the
current resolution path. The path is an immutable ``frozenset`` so sibling
branches of one synthesis never see each other's references.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from specweaver.core.errors import SynthesisDegraded

logger = logging.getLogger(__name__)

REF_PREFIXES = ("#/components/schemas/", "#/definitions/")

# Returned for cyclic or dangling references; synthesizes to {}
UNRESOLVED: Mapping[str, Any] = MappingProxyType({"type": "object"})


def is_reference(schema: Any) -> bool:
    """Check whether a schema node is a `$ref` pointer"""
    return isinstance(schema, Mapping) and "$ref" in schema


def reference_name(ref: str) -> str:
    """
    Extract the schema name a `$ref` points to.

    Examples:
        >>> reference_name("#/components/schemas/User")
        'User'
        >>> reference_name("#/definitions/Pet")
        'Pet'
    """
    for prefix in REF_PREFIXES:
        if ref.startswith(prefix):
            name = ref[len(prefix):]
            # JSON pointer escapes
            return name.replace("~1", "/").replace("~0", "~")
    return ref


def resolve_schema(
    schema: Mapping[str, Any],
    components: Mapping[str, Any],
    visited: frozenset[str] = frozenset(),
) -> tuple[Mapping[str, Any], frozenset[str]]:
    """
    Resolve a possibly-referencing schema node to a concrete node.

    Chains of references (A -> B -> C) are followed until a non-reference
    node is reached.

    Args:
        schema: Schema node, possibly a `$ref`
        components: Named schemas addressable by reference
        visited: Reference names already on the current resolution path

    Returns:
        Tuple of (concrete node, visited set extended with every name followed).
        The node is ``UNRESOLVED`` when a reference is cyclic or dangling.

    Raises:
        SynthesisDegraded: If a reference or its target is malformed
    """
    current = schema
    path = visited

    while is_reference(current):
        ref = current["$ref"]
        if not isinstance(ref, str):
            raise SynthesisDegraded(f"Malformed $ref: {ref!r}")

        name = reference_name(ref)
        if name in path:
            logger.debug(f"Cycle detected at reference '{name}'")
            return UNRESOLVED, path
        if name not in components:
            logger.debug(f"Unresolvable reference '{ref}'")
            return UNRESOLVED, path

        target = components[name]
        if not isinstance(target, Mapping):
            raise SynthesisDegraded(f"Schema '{name}' is not an object")

        path = path | {name}
        current = target

    return current, path
