"""In-memory implementations of the data request collaborators."""

import copy
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Type

from dataprivacy.logging_config import logger

from .models import DataRequest, DpoMessage
from .protocol import E


class InMemoryDataRequestStore:
    """DataRequestStore keeping requests in a dict. Returned requests are copies."""

    def __init__(self) -> None:
        self._requests: Dict[int, DataRequest] = {}
        self._ids = itertools.count(1)

    def create(self, request: DataRequest) -> DataRequest:
        request = copy.copy(request)
        request.id = next(self._ids)
        self._requests[request.id] = request
        return copy.copy(request)

    def get(self, request_id: int) -> Optional[DataRequest]:
        request = self._requests.get(request_id)
        return copy.copy(request) if request else None

    def update(self, request: DataRequest) -> None:
        if request.id not in self._requests:
            raise KeyError(request.id)
        self._requests[request.id] = copy.copy(request)

    def list(self, user_id: Optional[int] = None) -> List[DataRequest]:
        return [
            copy.copy(r)
            for r in sorted(self._requests.values(), key=lambda r: (r.time_created, r.id))
            if user_id is None or r.user_id == user_id
        ]


class InMemoryDataRegistryStore:
    """DataRegistryStore keeping one dict per entity class. Returned entities are copies."""

    def __init__(self) -> None:
        self._tables: Dict[type, Dict[int, Any]] = {}
        self._ids: Dict[type, Iterator[int]] = {}

    def _table(self, kind: type) -> Dict[int, Any]:
        if kind not in self._tables:
            self._tables[kind] = {}
            self._ids[kind] = itertools.count(1)
        return self._tables[kind]

    def save(self, entity: E) -> E:
        table = self._table(type(entity))
        entity = copy.copy(entity)
        if not entity.id:
            entity.id = next(self._ids[type(entity)])
        elif entity.id not in table:
            raise KeyError(entity.id)
        table[entity.id] = entity
        return copy.copy(entity)

    def get(self, kind: Type[E], entity_id: int) -> Optional[E]:
        entity = self._table(kind).get(entity_id)
        return copy.copy(entity) if entity else None

    def delete(self, kind: Type[E], entity_id: int) -> bool:
        return self._table(kind).pop(entity_id, None) is not None

    def list(self, kind: Type[E]) -> List[E]:
        return [copy.copy(e) for e in self._table(kind).values()]


@dataclass
class QueuedTask:
    """A task recorded by InMemoryTaskQueue."""

    name: str
    payload: Dict[str, Any]


class InMemoryTaskQueue:
    """TaskQueue that records tasks instead of running them."""

    def __init__(self) -> None:
        self.tasks: List[QueuedTask] = []

    def queue(self, task_name: str, payload: Dict[str, Any]) -> None:
        self.tasks.append(QueuedTask(name=task_name, payload=dict(payload)))
        logger.debug(f"Queued task {task_name}: {payload}")

    def get_tasks(self, task_name: str) -> List[QueuedTask]:
        return [t for t in self.tasks if t.name == task_name]


class RecordingMessenger:
    """Messenger that keeps sent messages in a list."""

    def __init__(self) -> None:
        self.messages: List[DpoMessage] = []

    def send(self, message: DpoMessage) -> int:
        self.messages.append(message)
        return len(self.messages)


@dataclass
class StaticOfficerDirectory:
    """
    OfficerDirectory over fixed role assignments.

    Attributes:
        admin_id: Primary site administrator (always holds every capability)
        role_assignments: Role ID -> user IDs assigned that role
        capable_roles: Role IDs granted the capability to manage data requests
        names: User ID -> full name
    """

    admin_id: int
    role_assignments: Dict[int, Set[int]] = field(default_factory=dict)
    capable_roles: Set[int] = field(default_factory=set)
    names: Dict[int, str] = field(default_factory=dict)

    def assign(self, role_id: int, user_id: int) -> None:
        self.role_assignments.setdefault(role_id, set()).add(user_id)

    def get_admin(self) -> int:
        return self.admin_id

    def users_with_roles(self, role_ids: Iterable[int]) -> List[int]:
        users: Set[int] = set()
        for role_id in role_ids:
            users |= self.role_assignments.get(role_id, set())
        return sorted(users)

    def has_manage_capability(self, user_id: int) -> bool:
        if user_id == self.admin_id:
            return True
        return any(user_id in self.role_assignments.get(role_id, set()) for role_id in self.capable_roles)

    def full_name(self, user_id: int) -> str:
        return self.names.get(user_id, f"User {user_id}")
