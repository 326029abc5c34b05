"""Catalog snapshot source: all registry collaborators backed by one document."""

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Union

from dataprivacy.logging_config import logger
from dataprivacy.validation import load_document, validate_snapshot_data

from ..models import CORE_PLUGIN_TYPE, MetadataDeclaration

# Language string key used when a null provider gives no reason of its own
DEFAULT_NULL_PROVIDER_REASON = "privacy:metadata"

DEFAULT_CORE_TYPE_NAME = "Core"


class CatalogSnapshot:
    """
    Registry collaborators backed by a catalog snapshot document.

    One instance implements CatalogSource, ComplianceOracle,
    MetadataCollectionSource and ContributedPluginIndex. The document
    shape is described by schemas/catalog-snapshot.schema.json:

        plugin_types:
          mod:
            name: Activity modules
            plugins:
              forum: {name: Forum}
              customcert: {name: Custom certificate, standard: false}
        core_subsystems: {files: /lib/files, grades: null}
        compliance:
          mod_forum:
            compliant: true
            metadata:
              - name: forum_posts
                kind: database_table
                fields: {userid: "privacy:metadata:forum_posts:userid"}
                summary: "privacy:metadata:forum_posts"
          core_files: {compliant: true, null_provider_reason: "privacy:metadata"}

    Components missing from "compliance" are treated as non-compliant.
    """

    def __init__(self, data: Dict[str, Any], source: str = "snapshot") -> None:
        self._data = data
        self.source = source

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "snapshot", validate: bool = True) -> "CatalogSnapshot":
        """
        Create a snapshot from an already parsed document.

        Raises:
            SnapshotValidationError: If validate is True and the document is invalid
        """
        if validate:
            validate_snapshot_data(data).raise_for_failure()
        return cls(data, source=source)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "CatalogSnapshot":
        """
        Load and validate a JSON or YAML snapshot file.

        Raises:
            ConfigurationError: If the file cannot be read
            SnapshotValidationError: If the file is not a valid snapshot
        """
        data = load_document(path)
        snapshot = cls.from_dict(data, source=Path(path).name)
        logger.info(f"Loaded catalog snapshot from {Path(path).name}")
        return snapshot

    @property
    def data(self) -> Dict[str, Any]:
        return self._data

    def _plugin_types(self) -> Dict[str, Any]:
        return self._data.get("plugin_types") or {}

    def _plugins(self, plugin_type: str) -> Dict[str, Any]:
        return self._plugin_types()[plugin_type].get("plugins") or {}

    def _compliance(self, raw_component: str) -> Optional[Dict[str, Any]]:
        return (self._data.get("compliance") or {}).get(raw_component)

    # CatalogSource

    def list_plugin_types(self) -> Sequence[str]:
        return list(self._plugin_types().keys())

    def list_plugins(self, plugin_type: str) -> Sequence[str]:
        return list(self._plugins(plugin_type).keys())

    def list_core_subsystems(self) -> Mapping[str, Optional[str]]:
        return dict(self._data.get("core_subsystems") or {})

    def resolve_plugin_display_name(self, raw_component: str) -> str:
        """
        Return the plugin's display name.

        Raises:
            KeyError: If no plugin type/plugin pair matches the identifier
        """
        plugin_type, _, plugin_name = raw_component.partition("_")
        plugins = self._plugins(plugin_type) if plugin_type in self._plugin_types() else {}
        if plugin_name not in plugins:
            raise KeyError(raw_component)
        return (plugins[plugin_name] or {}).get("name", "")

    def resolve_plugin_type_display_name(self, plugin_type: str) -> str:
        if plugin_type == CORE_PLUGIN_TYPE:
            return self._data.get("core_type_name", DEFAULT_CORE_TYPE_NAME)
        return self._plugin_types()[plugin_type]["name"]

    # ComplianceOracle

    def is_component_compliant(self, raw_component: str) -> bool:
        entry = self._compliance(raw_component)
        return bool(entry and entry.get("compliant"))

    def null_provider_reason_key(self, raw_component: str) -> str:
        entry = self._compliance(raw_component) or {}
        return entry.get("null_provider_reason") or DEFAULT_NULL_PROVIDER_REASON

    # MetadataCollectionSource

    def get_declared_metadata(self, raw_component: str) -> Optional[Sequence[MetadataDeclaration]]:
        entry = self._compliance(raw_component)
        if not entry or "metadata" not in entry:
            return None
        return [
            MetadataDeclaration(
                name=item["name"],
                kind=item["kind"],
                fields=dict(item.get("fields") or {}),
                summary_key=item["summary"],
            )
            for item in entry["metadata"]
        ]

    # ContributedPluginIndex

    def list_contributed_plugins(self) -> Mapping[str, Set[str]]:
        contributed: Dict[str, Set[str]] = {}
        for plugin_type in self._plugin_types():
            plugins = self._plugins(plugin_type)
            names = {name for name, info in plugins.items() if not (info or {}).get("standard", True)}
            if names:
                contributed[plugin_type] = names
        return contributed

    def summary(self) -> Dict[str, int]:
        """Count plugin types, plugins and compliance entries in the snapshot."""
        plugin_counts: List[int] = [len(self._plugins(t)) for t in self._plugin_types()]
        return {
            "plugin_types": len(plugin_counts),
            "plugins": sum(plugin_counts),
            "core_subsystems": sum(1 for path in self.list_core_subsystems().values() if path is not None),
            "compliance_entries": len(self._data.get("compliance") or {}),
        }
