"""Collaborator implementations for the privacy metadata registry."""

from .remote import RemoteSnapshotSource
from .snapshot import DEFAULT_NULL_PROVIDER_REASON, CatalogSnapshot
from .strings import StringTable

__all__ = [
    "CatalogSnapshot",
    "DEFAULT_NULL_PROVIDER_REASON",
    "RemoteSnapshotSource",
    "StringTable",
]
