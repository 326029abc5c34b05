"""
Public API for building the privacy metadata tree.

Usage:
    from dataprivacy.metadata import build_metadata_tree

    # From a local snapshot (JSON or YAML), strings embedded or separate
    tree = build_metadata_tree("catalog.yaml", strings_file="strings.yaml")

    # From a platform API
    tree = build_metadata_tree_from_api("https://lms.example.com", token="...")
"""

from typing import List, Optional

from ._registry import (
    CatalogSnapshot,
    ComponentTypeGroup,
    MetadataRegistry,
    RemoteSnapshotSource,
    StringTable,
    create_registry,
)

__all__ = [
    "build_metadata_tree",
    "build_metadata_tree_from_api",
    "create_registry",
    "load_registry",
]


def load_registry(
    snapshot_file: Optional[str] = None,
    strings_file: Optional[str] = None,
    api_base_url: Optional[str] = None,
    token: Optional[str] = None,
) -> MetadataRegistry:
    """
    Create a registry from a snapshot file or a platform API.

    Exactly one of snapshot_file and api_base_url must be given.

    Raises:
        ValueError: If neither or both sources are given
        ConfigurationError: If a file cannot be read
        SnapshotValidationError: If the snapshot or string table is invalid
        CollaboratorUnavailableError: If the API cannot be reached
    """
    if bool(snapshot_file) == bool(api_base_url):
        raise ValueError("Provide exactly one of snapshot_file or api_base_url")

    if snapshot_file:
        snapshot = CatalogSnapshot.from_file(snapshot_file)
    else:
        snapshot = RemoteSnapshotSource(api_base_url, token=token).fetch()

    strings = StringTable.from_file(strings_file) if strings_file else None
    return create_registry(snapshot, strings)


def build_metadata_tree(snapshot_file: str, strings_file: Optional[str] = None) -> List[ComponentTypeGroup]:
    """
    Build the privacy metadata tree from a local snapshot file.

    Args:
        snapshot_file: Path to a JSON or YAML catalog snapshot
        strings_file: Optional path to a JSON or YAML string table

    Returns:
        One ComponentTypeGroup per plugin type, followed by the core group
    """
    return load_registry(snapshot_file=snapshot_file, strings_file=strings_file).build_registry_tree()


def build_metadata_tree_from_api(
    api_base_url: str,
    token: Optional[str] = None,
    strings_file: Optional[str] = None,
) -> List[ComponentTypeGroup]:
    """
    Build the privacy metadata tree from a snapshot served by a platform API.

    Args:
        api_base_url: Base URL of the platform
        token: Optional bearer token
        strings_file: Optional path to a JSON or YAML string table

    Returns:
        One ComponentTypeGroup per plugin type, followed by the core group
    """
    return load_registry(api_base_url=api_base_url, token=token, strings_file=strings_file).build_registry_tree()
