"""Core document parsing and example synthesis"""

from .document_parser import TaxonomyBuilder, parse_document
from .errors import MalformedDocument, RemoteCreationFailed, SynthesisDegraded
from .example_synthesizer import synthesize
from .openapi_validator import (
    OpenAPIVersion,
    ValidationResult,
    count_endpoints,
    get_openapi_version,
    load_document,
    validate_openapi_structure,
)
from .operation_extractor import choose_content_type, extract_operation, is_eligible_method
from .ref_resolver import UNRESOLVED, is_reference, reference_name, resolve_schema

__all__ = [
    "MalformedDocument",
    "SynthesisDegraded",
    "RemoteCreationFailed",
    "OpenAPIVersion",
    "ValidationResult",
    "get_openapi_version",
    "validate_openapi_structure",
    "load_document",
    "count_endpoints",
    "UNRESOLVED",
    "is_reference",
    "reference_name",
    "resolve_schema",
    "synthesize",
    "choose_content_type",
    "extract_operation",
    "is_eligible_method",
    "TaxonomyBuilder",
    "parse_document",
]
