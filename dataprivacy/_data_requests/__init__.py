"""Data request workflow.

Users ask for their personal data to be exported or deleted, or send a
general inquiry. Site data protection officers approve or deny requests.
The host platform supplies persistence, role lookups, background tasks
and message delivery through the protocols in this package; in-memory
implementations are provided for tests and local tooling.

The data registry records why personal data is processed (purposes), what
kind of data it is (categories) and which purpose and category apply to
each context.

Usage:
    from dataprivacy._data_requests import create_service

    service = create_service(directory=StaticOfficerDirectory(admin_id=2))
    request = service.create_data_request(user_id=5, request_type=RequestType.EXPORT)
"""

from typing import Optional

from .data_registry import DataRegistryService
from .models import (
    COMPONENT,
    FINAL_STATUSES,
    FORMAT_HTML,
    FORMAT_PLAIN,
    Category,
    ContextInstance,
    DataRequest,
    DpoMessage,
    Purpose,
    RequestStatus,
    RequestType,
)
from .protocol import DataRegistryStore, DataRequestStore, Messenger, OfficerDirectory, TaskQueue
from .service import DEFAULT_STRINGS, INITIATE_TASK, PROCESS_TASK, DataRequestService
from .settings import DataRequestSettings
from .store import (
    InMemoryDataRegistryStore,
    InMemoryDataRequestStore,
    InMemoryTaskQueue,
    QueuedTask,
    RecordingMessenger,
    StaticOfficerDirectory,
)

__all__ = [
    # Models
    "COMPONENT",
    "FINAL_STATUSES",
    "FORMAT_HTML",
    "FORMAT_PLAIN",
    "Category",
    "ContextInstance",
    "DataRequest",
    "DpoMessage",
    "Purpose",
    "RequestStatus",
    "RequestType",
    # Protocols
    "DataRegistryStore",
    "DataRequestStore",
    "Messenger",
    "OfficerDirectory",
    "TaskQueue",
    # Service
    "DEFAULT_STRINGS",
    "INITIATE_TASK",
    "PROCESS_TASK",
    "DataRegistryService",
    "DataRequestService",
    "DataRequestSettings",
    # In-memory collaborators
    "InMemoryDataRegistryStore",
    "InMemoryDataRequestStore",
    "InMemoryTaskQueue",
    "QueuedTask",
    "RecordingMessenger",
    "StaticOfficerDirectory",
    "create_data_registry_service",
    "create_service",
]


def create_service(
    directory: OfficerDirectory,
    store: Optional[DataRequestStore] = None,
    tasks: Optional[TaskQueue] = None,
    messenger: Optional[Messenger] = None,
    settings: Optional[DataRequestSettings] = None,
) -> DataRequestService:
    """
    Create a DataRequestService, filling unset collaborators with in-memory ones.

    Settings default to the DATAPRIVACY_* environment variables.

    Args:
        directory: User and role lookups
        store: Request persistence (default: InMemoryDataRequestStore)
        tasks: Background task queue (default: InMemoryTaskQueue)
        messenger: Message delivery (default: RecordingMessenger)
        settings: Workflow settings (default: DataRequestSettings.from_env())

    Returns:
        Configured DataRequestService
    """
    return DataRequestService(
        store=store if store is not None else InMemoryDataRequestStore(),
        directory=directory,
        tasks=tasks if tasks is not None else InMemoryTaskQueue(),
        messenger=messenger if messenger is not None else RecordingMessenger(),
        settings=settings if settings is not None else DataRequestSettings.from_env(),
    )


def create_data_registry_service(
    directory: OfficerDirectory,
    store: Optional[DataRegistryStore] = None,
) -> DataRegistryService:
    """
    Create a DataRegistryService, using an in-memory store unless one is given.

    Args:
        directory: User and capability lookups
        store: Purpose, category and context instance persistence

    Returns:
        Configured DataRegistryService
    """
    return DataRegistryService(
        store=store if store is not None else InMemoryDataRegistryStore(),
        directory=directory,
    )
