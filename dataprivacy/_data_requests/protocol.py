"""Collaborator protocols for the data request workflow.

Persistence, role storage, background job execution and message transport
belong to the host platform; the workflow only talks to them through these
interfaces.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, Type, TypeVar

from .models import Category, ContextInstance, DataRequest, DpoMessage, Purpose

# Entities kept by a DataRegistryStore
E = TypeVar("E", Purpose, Category, ContextInstance)


class DataRequestStore(Protocol):
    """Persistence for data requests."""

    def create(self, request: DataRequest) -> DataRequest:
        """Save a new request and return it with its ID assigned."""
        ...

    def get(self, request_id: int) -> Optional[DataRequest]:
        """Return a request by ID, or None if it does not exist."""
        ...

    def update(self, request: DataRequest) -> None:
        """Save changes to an existing request."""
        ...

    def list(self, user_id: Optional[int] = None) -> List[DataRequest]:
        """Return all requests, or only those about one user, oldest first."""
        ...


class OfficerDirectory(Protocol):
    """
    Read-only view of users, roles and capabilities.

    Example:
        class PlatformDirectory:
            def get_admin(self) -> int:
                return 2

            def users_with_roles(self, role_ids: Iterable[int]) -> List[int]:
                return db.role_assignments(role_ids)
            ...
    """

    def get_admin(self) -> int:
        """Return the ID of the primary site administrator."""
        ...

    def users_with_roles(self, role_ids: Iterable[int]) -> List[int]:
        """Return IDs of users holding any of the roles at site level."""
        ...

    def has_manage_capability(self, user_id: int) -> bool:
        """Check if the user holds the capability to manage data requests."""
        ...

    def full_name(self, user_id: int) -> str:
        """Return the user's display name."""
        ...


class TaskQueue(Protocol):
    """Queue for background tasks run by the host platform."""

    def queue(self, task_name: str, payload: Dict[str, Any]) -> None:
        """Queue a task to run once."""
        ...


class Messenger(Protocol):
    """Message delivery to users."""

    def send(self, message: DpoMessage) -> int:
        """Send a message and return its ID."""
        ...


class DataRegistryStore(Protocol):
    """
    Persistence for purposes, categories and context instances.

    Each entity class is its own table; IDs are unique within a table.
    """

    def save(self, entity: E) -> E:
        """Insert an entity with id 0, or replace the stored one with the same id. Returns the saved entity."""
        ...

    def get(self, kind: Type[E], entity_id: int) -> Optional[E]:
        """Return an entity by ID, or None if it does not exist."""
        ...

    def delete(self, kind: Type[E], entity_id: int) -> bool:
        """Delete an entity. Returns False if it did not exist."""
        ...

    def list(self, kind: Type[E]) -> List[E]:
        """Return every entity of a kind, in insertion order."""
        ...
