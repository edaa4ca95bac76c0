"""Source document data models

The externally authored OpenAPI/Swagger document is validated into these
models once, at the boundary. Schema nodes stay plain dictionaries because
they are arbitrary, possibly cyclic JSON Schema graphs.
"""

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from specweaver.core.errors import MalformedDocument

HTTP_METHODS = ("get", "post", "put", "delete", "patch", "head", "options")


class OpenAPIVersion(str, Enum):
    """OpenAPI specification versions"""

    SWAGGER_2_0 = "2.0"
    OPENAPI_3_0 = "3.0"
    OPENAPI_3_1 = "3.1"
    UNKNOWN = "unknown"


def _stringify_keys(value: Any) -> Any:
    # YAML turns `200:` into an int key
    if isinstance(value, dict):
        return {str(key): item for key, item in value.items()}
    return value


class DocumentInfo(BaseModel):
    """The document's `info` block"""

    title: str = ""
    version: str = ""
    description: str | None = None

    @field_validator("title", "version", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return str(value)


class ServerInfo(BaseModel):
    """A declared server"""

    url: str
    description: str | None = None


class SourceComponents(BaseModel):
    """The `components` block (only schemas are consumed)"""

    model_config = ConfigDict(extra="allow")

    schemas: dict[str, Any] = Field(default_factory=dict)


class SourceOperation(BaseModel):
    """One path+verb entry of the source document. Read-only."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    summary: str | None = None
    description: str | None = None
    operation_id: str | None = Field(default=None, alias="operationId")
    tags: list[str] = Field(default_factory=list)
    parameters: list[dict[str, Any]] = Field(default_factory=list)
    request_body: dict[str, Any] | None = Field(default=None, alias="requestBody")
    responses: dict[str, dict[str, Any]] = Field(default_factory=dict)

    # Swagger 2.0
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(tag) for tag in value]
        return value

    @field_validator("parameters", mode="before")
    @classmethod
    def _coerce_parameters(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("responses", mode="before")
    @classmethod
    def _coerce_responses(cls, value: Any) -> Any:
        if value is None:
            return {}
        return _stringify_keys(value)


class SourceDocument(BaseModel):
    """Validated OpenAPI 3.x / Swagger 2.0 document"""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    openapi: str | None = None
    swagger: str | None = None
    info: DocumentInfo = Field(default_factory=DocumentInfo)
    servers: list[ServerInfo] = Field(default_factory=list)
    paths: dict[str, dict[str, Any]] = Field(default_factory=dict)
    components: SourceComponents = Field(default_factory=SourceComponents)

    # Swagger 2.0
    definitions: dict[str, Any] = Field(default_factory=dict)
    consumes: list[str] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    host: str | None = None
    base_path: str = Field(default="", alias="basePath")
    schemes: list[str] = Field(default_factory=list)

    _operations: list[tuple[str, str, SourceOperation]] = PrivateAttr(default_factory=list)

    @field_validator("openapi", "swagger", mode="before")
    @classmethod
    def _coerce_version(cls, value: Any) -> Any:
        # `swagger: 2.0` is a float in YAML
        if value is None:
            return None
        return str(value)

    @field_validator("paths", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Any:
        return _stringify_keys(value)

    @model_validator(mode="after")
    def _validate_structure(self) -> "SourceDocument":
        if not self.version_marker:
            raise MalformedDocument("Missing 'openapi' or 'swagger' version field")
        if not self.paths:
            raise MalformedDocument("'paths' must contain at least one path")
        return self

    @model_validator(mode="after")
    def _validate_operations(self) -> "SourceDocument":
        # Path-level `parameters` and vendor extensions are not operations
        operations = []
        for path, path_item in self.paths.items():
            for method, raw in path_item.items():
                if str(method).lower() not in HTTP_METHODS:
                    continue
                try:
                    operation = SourceOperation.model_validate(raw)
                except ValidationError as e:
                    details = "; ".join(
                        f"{'.'.join(str(part) for part in error['loc']) or 'operation'}: {error['msg']}"
                        for error in e.errors()
                    )
                    raise ValueError(f"Invalid operation {method.upper()} {path}: {details}") from e
                operations.append((path, method.lower(), operation))
        self._operations = operations
        return self

    @property
    def operations(self) -> list[tuple[str, str, SourceOperation]]:
        """Eligible (path, verb, operation) entries in document order"""
        return list(self._operations)

    @property
    def version_marker(self) -> str:
        """The declared `openapi` or `swagger` version string"""
        return self.openapi or self.swagger or ""

    @property
    def schemas(self) -> dict[str, Any]:
        """Named schemas addressable by reference (3.x components + 2.0 definitions)"""
        return {**self.definitions, **self.components.schemas}

    @property
    def server_urls(self) -> list[str]:
        """Server base URLs, falling back to Swagger 2.0 host/basePath"""
        if self.servers:
            return [server.url for server in self.servers]
        if self.host:
            scheme = self.schemes[0] if self.schemes else "https"
            return [f"{scheme}://{self.host}{self.base_path}"]
        return []
