"""Data request models."""

import time
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Mapping, Optional

# Component owning data request strings and messages
COMPONENT = "tool_dataprivacy"


class RequestType(IntEnum):
    """Kinds of data request a user can submit."""

    EXPORT = 1
    DELETE = 2
    OTHERS = 3

    @property
    def string_id(self) -> str:
        """Language string identifier, e.g. "requesttypeexport"."""
        return f"requesttype{self.name.lower()}"


class RequestStatus(IntEnum):
    """Lifecycle states of a data request."""

    PENDING = 0
    PREPROCESSING = 1
    AWAITING_APPROVAL = 2
    APPROVED = 3
    PROCESSING = 4
    COMPLETE = 5
    CANCELLED = 6
    REJECTED = 7


# Statuses after which a request needs no further action
FINAL_STATUSES = frozenset({RequestStatus.COMPLETE, RequestStatus.CANCELLED, RequestStatus.REJECTED})


@dataclass
class DataRequest:
    """
    A user's request to export, delete or otherwise act on their personal data.

    Attributes:
        id: Request ID (assigned by the store, 0 until saved)
        user_id: User the request is about
        requested_by: User who submitted the request
        type: Request type
        status: Current status
        comments: Comments from the requester
        dpo: ID of the officer who approved or denied the request
        dpo_comment: Comment from the officer
        time_created: Unix timestamp of creation
        time_modified: Unix timestamp of the last change
    """

    user_id: int
    requested_by: int
    type: RequestType
    status: RequestStatus = RequestStatus.PENDING
    comments: str = ""
    id: int = 0
    dpo: Optional[int] = None
    dpo_comment: str = ""
    time_created: int = field(default_factory=lambda: int(time.time()))
    time_modified: int = field(default_factory=lambda: int(time.time()))

    def __post_init__(self) -> None:
        self.type = RequestType(self.type)
        self.status = RequestStatus(self.status)

    @property
    def is_active(self) -> bool:
        return self.status not in FINAL_STATUSES

    def to_record(self) -> Dict[str, Any]:
        """Convert to a flat record with enum values as ints."""
        return {
            "id": self.id,
            "userid": self.user_id,
            "requestedby": self.requested_by,
            "type": int(self.type),
            "status": int(self.status),
            "comments": self.comments,
            "dpo": self.dpo,
            "dpocomment": self.dpo_comment,
            "timecreated": self.time_created,
            "timemodified": self.time_modified,
        }


@dataclass
class DpoMessage:
    """A notification telling an officer about a new data request."""

    user_from: int
    user_to: int
    subject: str
    full_message: str
    component: str = COMPONENT
    event_type: str = "contactdataprotectionofficer"
    request_id: Optional[int] = None


# Description formats of purposes and categories
FORMAT_PLAIN = 0
FORMAT_HTML = 1


def _now() -> int:
    return int(time.time())


@dataclass
class Purpose:
    """
    Why personal data is processed and how long it is kept.

    Attributes:
        name: Purpose name
        retention_period: Retention period in seconds
        description: Description text
        description_format: FORMAT_PLAIN or FORMAT_HTML
        id: Purpose ID (assigned by the store, 0 until saved)
        user_modified: ID of the user who last changed the purpose
    """

    name: str
    retention_period: int
    description: str = ""
    description_format: int = FORMAT_HTML
    id: int = 0
    user_modified: Optional[int] = None
    time_created: int = field(default_factory=_now)
    time_modified: int = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Purpose name is required")
        if self.retention_period < 0:
            raise ValueError(f"Retention period must not be negative: {self.retention_period}")

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "descriptionformat": self.description_format,
            "retentionperiod": self.retention_period,
            "usermodified": self.user_modified,
            "timecreated": self.time_created,
            "timemodified": self.time_modified,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Purpose":
        """Create a purpose from a flat record; missing optional keys take their defaults."""
        return cls(
            name=record["name"],
            retention_period=int(record["retentionperiod"]),
            description=record.get("description", ""),
            description_format=int(record.get("descriptionformat", FORMAT_HTML)),
            id=int(record.get("id", 0)),
            user_modified=record.get("usermodified"),
        )


@dataclass
class Category:
    """A kind of personal data, e.g. "Contact details"."""

    name: str
    description: str = ""
    description_format: int = FORMAT_HTML
    id: int = 0
    user_modified: Optional[int] = None
    time_created: int = field(default_factory=_now)
    time_modified: int = field(default_factory=_now)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Category name is required")

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "descriptionformat": self.description_format,
            "usermodified": self.user_modified,
            "timecreated": self.time_created,
            "timemodified": self.time_modified,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Category":
        return cls(
            name=record["name"],
            description=record.get("description", ""),
            description_format=int(record.get("descriptionformat", FORMAT_HTML)),
            id=int(record.get("id", 0)),
            user_modified=record.get("usermodified"),
        )


@dataclass
class ContextInstance:
    """
    Purpose and category assigned to one context (a course, a module, ...).

    A context has at most one instance.
    """

    context_id: int
    purpose_id: int
    category_id: int
    id: int = 0
    user_modified: Optional[int] = None
    time_created: int = field(default_factory=_now)
    time_modified: int = field(default_factory=_now)

    def to_record(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "contextid": self.context_id,
            "purposeid": self.purpose_id,
            "categoryid": self.category_id,
            "usermodified": self.user_modified,
            "timecreated": self.time_created,
            "timemodified": self.time_modified,
        }

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ContextInstance":
        return cls(
            context_id=int(record["contextid"]),
            purpose_id=int(record["purposeid"]),
            category_id=int(record["categoryid"]),
            id=int(record.get("id", 0)),
            user_modified=record.get("usermodified"),
        )
