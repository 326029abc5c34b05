"""
Public API for the data request workflow.

Usage:
    from dataprivacy.data_requests import (
        Purpose,
        RequestType,
        StaticOfficerDirectory,
        create_data_registry_service,
        create_service,
    )

    directory = StaticOfficerDirectory(admin_id=2)
    service = create_service(directory)
    request = service.create_data_request(user_id=5, request_type=RequestType.DELETE)

    registry = create_data_registry_service(directory)
    purpose = registry.create_purpose(Purpose(name="Teaching", retention_period=3600), actor_id=2)
"""

from ._data_requests import (
    Category,
    ContextInstance,
    DataRegistryService,
    DataRequest,
    DataRequestService,
    DataRequestSettings,
    DpoMessage,
    InMemoryDataRegistryStore,
    InMemoryDataRequestStore,
    InMemoryTaskQueue,
    Purpose,
    RecordingMessenger,
    RequestStatus,
    RequestType,
    StaticOfficerDirectory,
    create_data_registry_service,
    create_service,
)

__all__ = [
    "Category",
    "ContextInstance",
    "DataRegistryService",
    "DataRequest",
    "DataRequestService",
    "DataRequestSettings",
    "DpoMessage",
    "InMemoryDataRegistryStore",
    "InMemoryDataRequestStore",
    "InMemoryTaskQueue",
    "Purpose",
    "RecordingMessenger",
    "RequestStatus",
    "RequestType",
    "StaticOfficerDirectory",
    "create_data_registry_service",
    "create_service",
]
