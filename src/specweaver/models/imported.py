"""Imported taxonomy data models

These are the engine's normalized output: folders and endpoints ready to be
materialized against the remote persistence boundary.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from specweaver.models.source import OpenAPIVersion


class HTTPMethod(str, Enum):
    """HTTP request methods eligible for import"""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


class ParameterLocation(str, Enum):
    """Parameter location in request"""

    QUERY = "QUERY"
    PATH = "PATH"
    HEADER = "HEADER"
    COOKIE = "COOKIE"


class ImportedParameter(BaseModel):
    """A parameter of an imported endpoint"""

    model_config = ConfigDict(frozen=True)

    name: str
    location: ParameterLocation = ParameterLocation.QUERY
    required: bool = False
    description: str | None = None
    type: str = "string"
    example: str | None = None


class ImportedHeader(BaseModel):
    """A request header of an imported endpoint"""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    description: str | None = None


class ImportedBody(BaseModel):
    """Request body with its synthesized example (JSON text)"""

    model_config = ConfigDict(frozen=True)

    content_type: str
    example: str | None = None
    raw_schema: dict | None = None


class ImportedResponse(BaseModel):
    """A documented response of an imported endpoint"""

    model_config = ConfigDict(frozen=True)

    status_code: int | None  # None for `default` and ranges like `2XX`
    status_key: str
    description: str | None = None
    content_type: str | None = None
    example: str | None = None


class ImportedEndpoint(BaseModel):
    """Normalized endpoint produced from one source operation"""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str | None = None
    method: HTTPMethod
    path: str
    folder_id: str | None = None
    parameters: list[ImportedParameter] = Field(default_factory=list)
    headers: list[ImportedHeader] = Field(default_factory=list)
    body: ImportedBody | None = None
    responses: list[ImportedResponse] = Field(default_factory=list)


class ImportedFolder(BaseModel):
    """Folder derived from a primary tag"""

    name: str
    description: str | None = None
    endpoints: list[ImportedEndpoint] = Field(default_factory=list)


class ParsedImport(BaseModel):
    """Result of parsing a source document"""

    title: str = ""
    api_version: str = ""
    spec_version: OpenAPIVersion = OpenAPIVersion.UNKNOWN
    servers: list[str] = Field(default_factory=list)
    folders: list[ImportedFolder] = Field(default_factory=list)
    uncategorized: list[ImportedEndpoint] = Field(default_factory=list)

    @property
    def endpoint_count(self) -> int:
        """Total number of endpoints across folders and uncategorized"""
        return sum(len(folder.endpoints) for folder in self.folders) + len(self.uncategorized)


class CreatedEntity(BaseModel):
    """A remote entity the orchestrator created"""

    entity_type: str  # folder / endpoint
    name: str
    remote_id: str


class CreationFailure(BaseModel):
    """A creation call that failed"""

    entity_type: str
    entity_name: str
    error: str


class ImportReport(BaseModel):
    """Outcome of one orchestrated import"""

    project_id: str
    created: list[CreatedEntity] = Field(default_factory=list)
    failures: list[CreationFailure] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)  # top-level units never dispatched
    cancelled: bool = False

    @property
    def succeeded(self) -> bool:
        """True when every unit was dispatched and nothing failed"""
        return not self.failures and not self.skipped and not self.cancelled

    @property
    def folders_created(self) -> list[CreatedEntity]:
        return [entity for entity in self.created if entity.entity_type == "folder"]

    @property
    def endpoints_created(self) -> list[CreatedEntity]:
        return [entity for entity in self.created if entity.entity_type == "endpoint"]

    def get_summary_text(self) -> str:
        """Generate human-readable summary of the import"""
        status = "completed" if self.succeeded else "incomplete"
        return f"""Import into project {self.project_id}: {status}
- Folders created: {len(self.folders_created)}
- Endpoints created: {len(self.endpoints_created)}
- Failures: {len(self.failures)}
- Skipped units: {len(self.skipped)}"""
