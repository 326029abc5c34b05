"""Privacy metadata registry: builds the per-plugin-type component tree."""

from typing import Any, Callable, Dict, List, Mapping, Set, Tuple, TypeVar

from dataprivacy.exceptions import CollaboratorUnavailableError, DataPrivacyError
from dataprivacy.logging_config import logger

from .formatter import format_item, format_metadata
from .models import CORE_PLUGIN_TYPE, ComponentRecord, ComponentTypeGroup, MetadataDeclaration, MetadataItem
from .protocol import CatalogSource, ComplianceOracle, ContributedPluginIndex, MetadataCollectionSource, Translator

T = TypeVar("T")


def _query(collaborator: str, func: Callable[..., T], *args: Any) -> T:
    """
    Call a collaborator, turning unexpected failures into CollaboratorUnavailableError.

    DataPrivacyError subclasses (e.g. MissingTranslationError) pass through unchanged.
    """
    try:
        return func(*args)
    except DataPrivacyError:
        raise
    except Exception as e:
        raise CollaboratorUnavailableError(collaborator, str(e) or type(e).__name__) from e


def short_name(raw_component: str) -> str:
    """Return the plugin short name: the last underscore-delimited segment."""
    return raw_component.rsplit("_", 1)[-1]


def summarize_tree(tree: List[ComponentTypeGroup]) -> Dict[str, int]:
    """Count components in the tree by enrichment outcome."""
    records = [record for group in tree for record in group.components]
    return {
        "plugin_types": len(tree),
        "components": len(records),
        "noncompliant": sum(1 for r in records if r.outcome == "noncompliant"),
        "nullprovider": sum(1 for r in records if r.outcome == "nullprovider"),
        "with_metadata": sum(1 for r in records if r.outcome == "metadata"),
        "external": sum(1 for r in records if r.external),
        "metadata_items": sum(len(r.metadata) for r in records),
    }


class MetadataRegistry:
    """
    Builds the privacy metadata tree from the installed component catalog.

    The tree has one group per plugin type plus a synthetic "core" group for
    core subsystems. Each component is annotated with its display name,
    compliance status, formatted metadata or null provider reason, and
    whether it is a contributed plugin.

    Nothing is cached: every call reads the collaborators again.

    Example:
        registry = MetadataRegistry(
            catalog=snapshot,
            compliance=snapshot,
            metadata_source=snapshot,
            contributed_index=snapshot,
            translator=strings,
        )
        for group in registry.build_registry_tree():
            print(group.plugin_type, len(group.components))
    """

    def __init__(
        self,
        catalog: CatalogSource,
        compliance: ComplianceOracle,
        metadata_source: MetadataCollectionSource,
        contributed_index: ContributedPluginIndex,
        translator: Translator,
    ) -> None:
        self._catalog = catalog
        self._compliance = compliance
        self._metadata_source = metadata_source
        self._contributed_index = contributed_index
        self._translator = translator

    def build_registry_tree(self) -> List[ComponentTypeGroup]:
        """
        Build the full registry tree.

        Returns:
            One ComponentTypeGroup per plugin type, followed by the core group

        Raises:
            CollaboratorUnavailableError: If any collaborator fails
            MissingTranslationError: If a language string does not resolve
        """
        contributed = self.get_contrib_list()
        tree: List[ComponentTypeGroup] = []

        for plugin_type, components in self.get_full_component_list():
            records = [self._build_record(plugin_type, raw, contributed) for raw in components]
            tree.append(
                ComponentTypeGroup(
                    plugin_type=_query("catalog", self._catalog.resolve_plugin_type_display_name, plugin_type),
                    plugin_type_raw=plugin_type,
                    components=records,
                )
            )

        total = sum(len(group.components) for group in tree)
        logger.info(f"Built privacy registry: {len(tree)} plugin types, {total} components")
        return tree

    def format_item(self, item: MetadataDeclaration, owning_component: str) -> MetadataItem:
        """Format one declaration with this registry's translator."""
        return format_item(item, owning_component, self._translator)

    def get_full_component_list(self) -> List[Tuple[str, List[str]]]:
        """
        List every component identifier grouped by plugin type.

        Plugins become "<type>_<name>"; core subsystems with a path become
        "core_<name>" in a final "core" group.

        Raises:
            CollaboratorUnavailableError: If the catalog lists a "core" plugin type
        """
        root: List[Tuple[str, List[str]]] = []
        for plugin_type in _query("catalog", self._catalog.list_plugin_types):
            if plugin_type == CORE_PLUGIN_TYPE:
                raise CollaboratorUnavailableError("catalog", f"'{CORE_PLUGIN_TYPE}' is reserved for core subsystems")
            plugins = _query("catalog", self._catalog.list_plugins, plugin_type)
            root.append((plugin_type, [f"{plugin_type}_{name}" for name in plugins]))

        subsystems = _query("catalog", self._catalog.list_core_subsystems)
        root.append((CORE_PLUGIN_TYPE, [f"core_{name}" for name, path in subsystems.items() if path is not None]))
        return root

    def get_contrib_list(self) -> Mapping[str, Set[str]]:
        """Return plugin type -> contributed plugin short names."""
        return _query("contributed plugin index", self._contributed_index.list_contributed_plugins)

    def _resolve_display_name(self, plugin_type: str, raw_component: str) -> str:
        # Core subsystems are shown by identifier
        if plugin_type == CORE_PLUGIN_TYPE:
            return raw_component
        try:
            name = self._catalog.resolve_plugin_display_name(raw_component)
        except LookupError:
            name = None
        except DataPrivacyError:
            raise
        except Exception as e:
            raise CollaboratorUnavailableError("catalog", str(e) or type(e).__name__) from e
        if not name:
            logger.debug(f"No display name for {raw_component}, using identifier")
            return raw_component
        return name

    def _build_record(
        self, plugin_type: str, raw_component: str, contributed: Mapping[str, Set[str]]
    ) -> ComponentRecord:
        display_name = self._resolve_display_name(plugin_type, raw_component)
        external = short_name(raw_component) in contributed.get(plugin_type, ())

        if not _query("compliance oracle", self._compliance.is_component_compliant, raw_component):
            logger.debug(f"{raw_component}: not compliant")
            return ComponentRecord(
                component=display_name,
                raw_component=raw_component,
                compliant=False,
                external=external,
            )

        collection = _query("metadata source", self._metadata_source.get_declared_metadata, raw_component)
        if collection:
            logger.debug(f"{raw_component}: {len(collection)} metadata items")
            return ComponentRecord(
                component=display_name,
                raw_component=raw_component,
                compliant=True,
                external=external,
                metadata=_query("translator", format_metadata, collection, raw_component, self._translator),
            )

        reason_key = _query("compliance oracle", self._compliance.null_provider_reason_key, raw_component)
        logger.debug(f"{raw_component}: null provider ({reason_key})")
        return ComponentRecord(
            component=display_name,
            raw_component=raw_component,
            compliant=True,
            external=external,
            null_provider_reason=_query("translator", self._translator.translate, reason_key, raw_component),
        )
