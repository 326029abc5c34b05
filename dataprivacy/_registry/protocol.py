"""Collaborator protocols consumed by the privacy metadata registry."""

from typing import Any, Dict, Mapping, Optional, Protocol, Sequence, Set

from .models import MetadataDeclaration


class CatalogSource(Protocol):
    """
    Protocol for the installed component catalog.

    Supplies plugin types, the plugins installed for each type, core
    subsystems, and human readable names for plugins and plugin types.

    Example:
        class StaticCatalog:
            def list_plugin_types(self) -> Sequence[str]:
                return ["mod", "block"]

            def list_plugins(self, plugin_type: str) -> Sequence[str]:
                return {"mod": ["forum"], "block": ["html"]}[plugin_type]
            ...
    """

    def list_plugin_types(self) -> Sequence[str]:
        """Return plugin type keys in catalog order (e.g. "mod", "block")."""
        ...

    def list_plugins(self, plugin_type: str) -> Sequence[str]:
        """Return plugin short names installed for a plugin type, in catalog order."""
        ...

    def list_core_subsystems(self) -> Mapping[str, Optional[str]]:
        """
        Return core subsystem names mapped to their path.

        Subsystems without a path (None) have no code of their own and are
        not part of the registry.
        """
        ...

    def resolve_plugin_display_name(self, raw_component: str) -> str:
        """
        Return the human readable name of a plugin.

        Args:
            raw_component: Component identifier, e.g. "mod_forum"

        Raises:
            KeyError: If the catalog does not know the component
        """
        ...

    def resolve_plugin_type_display_name(self, plugin_type: str) -> str:
        """Return the human readable name of a plugin type (e.g. "Activity modules")."""
        ...


class ComplianceOracle(Protocol):
    """Protocol reporting whether components implement the privacy API."""

    def is_component_compliant(self, raw_component: str) -> bool:
        """Check if the component declares its privacy metadata."""
        ...

    def null_provider_reason_key(self, raw_component: str) -> str:
        """
        Return the language string key explaining why a compliant component
        stores no personal data.
        """
        ...


class MetadataCollectionSource(Protocol):
    """Protocol returning the metadata collection declared by each component."""

    def get_declared_metadata(self, raw_component: str) -> Optional[Sequence[MetadataDeclaration]]:
        """
        Return the component's declared metadata collection.

        Returns:
            Declarations in declaration order, or None if the component is a
            null provider (declares nothing)
        """
        ...


class ContributedPluginIndex(Protocol):
    """Protocol identifying installed plugins not shipped with the core distribution."""

    def list_contributed_plugins(self) -> Mapping[str, Set[str]]:
        """Return plugin type -> set of contributed plugin short names."""
        ...


class Translator(Protocol):
    """Protocol for the localization service."""

    def translate(self, key: str, component: str, args: Optional[Dict[str, Any]] = None) -> str:
        """
        Resolve a language string scoped to a component.

        Args:
            key: Language string identifier
            component: Component owning the string, e.g. "mod_forum"
            args: Optional placeholder values

        Raises:
            MissingTranslationError: If the key does not resolve
        """
        ...
