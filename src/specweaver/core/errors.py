"""Import engine error taxonomy"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from specweaver.models import ImportReport


class MalformedDocument(Exception):
    """The source document cannot be imported at all"""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


class SynthesisDegraded(Exception):
    """A schema node could not be synthesized; never leaves the extractor"""


class RemoteCreationFailed(Exception):
    """A creation call against the persistence boundary failed"""

    def __init__(
        self,
        entity_type: str,
        entity_name: str,
        cause: BaseException | str | None = None,
    ) -> None:
        self.entity_type = entity_type
        self.entity_name = entity_name
        self.cause = cause
        self.report: "ImportReport | None" = None
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to create {entity_type}: {entity_name}{detail}")
