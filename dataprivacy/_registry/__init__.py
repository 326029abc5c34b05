"""Privacy metadata registry.

This module builds a tree describing, for every installed plugin and core
subsystem, what personal data it stores. Data comes from five injected
collaborators:

- CatalogSource: plugin types, installed plugins, core subsystems, display names
- ComplianceOracle: whether a component implements the privacy API
- MetadataCollectionSource: declared metadata (database tables, links, ...)
- ContributedPluginIndex: plugins not shipped with the core distribution
- Translator: language strings for summaries and null provider reasons

A CatalogSnapshot implements the first four from a single JSON/YAML
document; StringTable implements the Translator.

Usage:
    from dataprivacy._registry import create_registry

    snapshot = CatalogSnapshot.from_file("catalog.yaml")
    registry = create_registry(snapshot)
    tree = registry.build_registry_tree()
"""

from typing import Optional

from .formatter import format_item, format_metadata, is_link_kind, strip_namespace
from .models import (
    CORE_PLUGIN_TYPE,
    LINK_KIND_PREFIXES,
    ComponentRecord,
    ComponentTypeGroup,
    MetadataDeclaration,
    MetadataField,
    MetadataItem,
    MetadataKind,
)
from .protocol import CatalogSource, ComplianceOracle, ContributedPluginIndex, MetadataCollectionSource, Translator
from .registry import MetadataRegistry, short_name, summarize_tree
from .sources import DEFAULT_NULL_PROVIDER_REASON, CatalogSnapshot, RemoteSnapshotSource, StringTable

__all__ = [
    # Models
    "CORE_PLUGIN_TYPE",
    "LINK_KIND_PREFIXES",
    "ComponentRecord",
    "ComponentTypeGroup",
    "MetadataDeclaration",
    "MetadataField",
    "MetadataItem",
    "MetadataKind",
    # Protocols
    "CatalogSource",
    "ComplianceOracle",
    "ContributedPluginIndex",
    "MetadataCollectionSource",
    "Translator",
    # Registry and formatting
    "MetadataRegistry",
    "format_item",
    "format_metadata",
    "is_link_kind",
    "short_name",
    "strip_namespace",
    "summarize_tree",
    # Sources
    "CatalogSnapshot",
    "DEFAULT_NULL_PROVIDER_REASON",
    "RemoteSnapshotSource",
    "StringTable",
    "create_registry",
]


def create_registry(snapshot: CatalogSnapshot, strings: Optional[StringTable] = None) -> MetadataRegistry:
    """
    Create a registry whose catalog-side collaborators are all one snapshot.

    Strings embedded in the snapshot are used as a fallback for any key the
    given string table does not define.

    Args:
        snapshot: Snapshot implementing catalog, compliance, metadata and contributed index
        strings: Optional string table

    Returns:
        MetadataRegistry ready to build the tree
    """
    translator = StringTable.from_snapshot(snapshot.data)
    if strings is not None:
        translator = strings.merge(translator)

    return MetadataRegistry(
        catalog=snapshot,
        compliance=snapshot,
        metadata_source=snapshot,
        contributed_index=snapshot,
        translator=translator,
    )
