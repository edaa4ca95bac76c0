"""Ordered creation of imported folders and endpoints

Dependency order:
- a folder is created, and its id observed, before any of its endpoints
- an endpoint is created, and its id observed, before its parameters,
  headers, body and responses (which run concurrently with each other)

Folders and the uncategorized list are independent top-level units and may
run concurrently, bounded by ``import_max_concurrency``.
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable
from functools import partial
from typing import Any, Callable

from specweaver.config import get_settings
from specweaver.core.errors import RemoteCreationFailed
from specweaver.models import (
    CreatedEntity,
    CreationFailure,
    ImportedEndpoint,
    ImportedFolder,
    ImportReport,
)
from specweaver.services.persistence import PersistenceBoundary

logger = logging.getLogger(__name__)

UNCATEGORIZED_UNIT = "uncategorized"


class CancellationToken:
    """Stops an import from dispatching new top-level units; in-flight calls finish"""

    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled


class ImportOrchestrator:
    """Materializes a parsed taxonomy against the persistence boundary"""

    def __init__(
        self,
        client: PersistenceBoundary,
        max_concurrency: int | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            client: Persistence boundary to create entities against
            max_concurrency: Top-level units in flight (default from settings)
        """
        self.settings = get_settings()
        self.client = client
        self.max_concurrency = max(1, max_concurrency or self.settings.import_max_concurrency)

    async def import_into(
        self,
        project_id: str,
        folders: list[ImportedFolder],
        uncategorized: list[ImportedEndpoint],
        cancel_token: CancellationToken | None = None,
    ) -> ImportReport:
        """
        Create every folder and endpoint of an import.

        After the first failed creation call no new top-level unit is
        dispatched. Entities already created remotely are left in place.

        Args:
            project_id: Target project
            folders: Folders with their endpoints
            uncategorized: Endpoints without a folder
            cancel_token: Optional token to stop dispatching new units

        Returns:
            ImportReport listing what was created

        Raises:
            RemoteCreationFailed: The first failure, with ``report`` attached
        """
        report = ImportReport(project_id=project_id)
        token = cancel_token or CancellationToken()
        abort = CancellationToken()
        semaphore = asyncio.Semaphore(self.max_concurrency)
        errors: list[RemoteCreationFailed] = []

        async def run_unit(label: str, work: Callable[[], Awaitable[Any]]) -> None:
            async with semaphore:
                if token.is_cancelled or abort.is_cancelled:
                    report.skipped.append(label)
                    report.cancelled = report.cancelled or token.is_cancelled
                    logger.warning(f"⚠️  Skipping {label}: import stopped")
                    return
                try:
                    await work()
                except RemoteCreationFailed as e:
                    errors.append(e)
                    abort.cancel()

        units = [
            run_unit(f"folder:{folder.name}", partial(self._import_folder, project_id, folder, report))
            for folder in folders
        ]
        if uncategorized:
            units.append(
                run_unit(
                    UNCATEGORIZED_UNIT,
                    partial(self._import_endpoints, project_id, uncategorized, None, report),
                )
            )

        await asyncio.gather(*units)

        if errors:
            error = errors[0]
            error.report = report
            logger.error(f"❌ Import into project {project_id} failed: {error}")
            raise error

        logger.info(
            f"✅ Imported {len(report.folders_created)} folders and "
            f"{len(report.endpoints_created)} endpoints into project {project_id}"
        )
        return report

    async def _import_folder(
        self, project_id: str, folder: ImportedFolder, report: ImportReport
    ) -> None:
        folder_id = await self._create(
            report,
            "folder",
            folder.name,
            partial(self.client.create_folder, project_id, folder.name, folder.description),
        )
        report.created.append(CreatedEntity(entity_type="folder", name=folder.name, remote_id=folder_id))
        logger.info(f"📁 Created folder '{folder.name}' ({len(folder.endpoints)} endpoints)")

        await self._import_endpoints(project_id, folder.endpoints, folder_id, report)

    async def _import_endpoints(
        self,
        project_id: str,
        endpoints: list[ImportedEndpoint],
        folder_id: str | None,
        report: ImportReport,
    ) -> None:
        if folder_id is not None:
            endpoints = [endpoint.model_copy(update={"folder_id": folder_id}) for endpoint in endpoints]

        await self._gather(self._import_endpoint(project_id, endpoint, report) for endpoint in endpoints)

    async def _import_endpoint(
        self, project_id: str, endpoint: ImportedEndpoint, report: ImportReport
    ) -> None:
        endpoint_id = await self._create(
            report,
            "endpoint",
            endpoint.name,
            partial(self.client.create_endpoint, project_id, endpoint),
        )
        report.created.append(
            CreatedEntity(entity_type="endpoint", name=endpoint.name, remote_id=endpoint_id)
        )

        calls = [
            self._create(report, "parameter", f"{endpoint.name}: {parameter.name}",
                         partial(self.client.create_parameter, endpoint_id, parameter))
            for parameter in endpoint.parameters
        ]
        calls += [
            self._create(report, "header", f"{endpoint.name}: {header.key}",
                         partial(self.client.create_header, endpoint_id, header))
            for header in endpoint.headers
        ]
        if endpoint.body is not None:
            calls.append(
                self._create(report, "body", endpoint.name,
                             partial(self.client.create_body, endpoint_id, endpoint.body))
            )
        calls += [
            self._create(report, "response", f"{endpoint.name}: {response.status_key}",
                         partial(self.client.create_response, endpoint_id, response))
            for response in endpoint.responses
        ]

        await self._gather(calls)
        logger.debug(f"Created endpoint '{endpoint.name}' with {len(calls)} sub-resources")

    async def _create(
        self,
        report: ImportReport,
        entity_type: str,
        entity_name: str,
        call: Callable[[], Awaitable[str]],
    ) -> str:
        try:
            return await call()
        except RemoteCreationFailed as e:
            self._record_failure(report, e)
            raise
        except Exception as e:
            error = RemoteCreationFailed(entity_type, entity_name, e)
            self._record_failure(report, error)
            raise error from e

    @staticmethod
    def _record_failure(report: ImportReport, error: RemoteCreationFailed) -> None:
        report.failures.append(
            CreationFailure(
                entity_type=error.entity_type,
                entity_name=error.entity_name,
                error=str(error),
            )
        )

    @staticmethod
    async def _gather(coros: Iterable[Awaitable[Any]]) -> None:
        """Await sibling calls; let all of them finish, then raise the first failure"""
        results = await asyncio.gather(*coros, return_exceptions=True)
        failures = [result for result in results if isinstance(result, BaseException)]
        for failure in failures:
            if not isinstance(failure, RemoteCreationFailed):
                raise failure
        if failures:
            raise failures[0]
