"""Dataclasses for the privacy metadata registry tree."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

# Prefixes of metadata kinds that point at another component's storage
LINK_KIND_PREFIXES = ("subsystem_link", "plugintype_link")

# Plugin type key of the synthetic group holding core subsystems
CORE_PLUGIN_TYPE = "core"


class MetadataKind(str, Enum):
    """Known kinds of privacy metadata declarations."""

    DATABASE_TABLE = "database_table"
    EXTERNAL_LOCATION = "external_location"
    SUBSYSTEM_LINK = "subsystem_link"
    PLUGINTYPE_LINK = "plugintype_link"
    USER_PREFERENCE = "user_preference"


@dataclass
class MetadataDeclaration:
    """
    A single privacy metadata entry declared by a component.

    The kind is carried as data rather than inferred from a class. Known
    kinds may be passed as MetadataKind members; any other string is kept
    verbatim so that namespaced or provider-specific kinds still work.

    Attributes:
        name: Name of the store or linked component (e.g. "forum_posts")
        kind: Declaration kind (e.g. "database_table", "subsystem_link")
        fields: Ordered mapping of field name -> language string key
        summary_key: Language string key describing the declaration
    """

    name: str
    kind: Union[MetadataKind, str]
    fields: Dict[str, str] = field(default_factory=dict)
    summary_key: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.kind, MetadataKind):
            self.kind = self.kind.value
        if not self.name:
            raise ValueError("name is required")
        if not self.kind:
            raise ValueError("kind is required")


@dataclass
class MetadataField:
    """A declared personal data field and its localized description."""

    field_name: str
    field_summary: str

    def to_dict(self) -> Dict[str, Any]:
        return {"field_name": self.field_name, "field_summary": self.field_summary}


@dataclass
class MetadataItem:
    """
    A formatted metadata declaration ready for presentation.

    Attributes:
        name: Declaration name
        type: Declaration kind with namespace qualification removed
        fields: Formatted fields, in declaration order
        summary: Localized summary text
        link: True if the data actually lives in another component
    """

    name: str
    type: str
    fields: List[MetadataField] = field(default_factory=list)
    summary: str = ""
    link: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "fields": [f.to_dict() for f in self.fields],
            "summary": self.summary,
            "link": self.link,
        }


@dataclass
class ComponentRecord:
    """
    Privacy information about one plugin or core subsystem.

    Exactly one of these holds for every record:
    - compliant is False
    - null_provider_reason is set (compliant, declares no personal data)
    - metadata is non-empty (compliant, declares personal data)

    Attributes:
        component: Display name (raw identifier for core subsystems)
        raw_component: Frankenstyle identifier, e.g. "mod_forum" or "core_files"
        compliant: Whether the component implements the privacy API
        external: True for contributed (non-standard) plugins
        null_provider_reason: Localized reason for declaring no personal data
        metadata: Formatted metadata declarations
    """

    component: str
    raw_component: str
    compliant: bool
    external: bool = False
    null_provider_reason: Optional[str] = None
    metadata: List[MetadataItem] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate the record state."""
        if not self.raw_component:
            raise ValueError("raw_component is required")
        if not self.compliant and (self.null_provider_reason is not None or self.metadata):
            raise ValueError("Non-compliant component cannot carry metadata or a null provider reason")
        if self.compliant and (self.null_provider_reason is None) == (not self.metadata):
            raise ValueError("Compliant component needs exactly one of metadata or null_provider_reason")

    @property
    def outcome(self) -> str:
        """Which branch of the enrichment decision produced this record."""
        if not self.compliant:
            return "noncompliant"
        if self.null_provider_reason is not None:
            return "nullprovider"
        return "metadata"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict, leaving out absent optional keys."""
        result: Dict[str, Any] = {
            "component": self.component,
            "raw_component": self.raw_component,
            "compliant": self.compliant,
        }
        if self.external:
            result["external"] = True
        if self.null_provider_reason is not None:
            result["nullprovider"] = self.null_provider_reason
        if self.metadata:
            result["metadata"] = [item.to_dict() for item in self.metadata]
        return result


@dataclass
class ComponentTypeGroup:
    """
    All components of one plugin type.

    Attributes:
        plugin_type: Human readable plugin type name
        plugin_type_raw: Machine readable plugin type key (e.g. "mod", "core")
        components: Component records in catalog order
    """

    plugin_type: str
    plugin_type_raw: str
    components: List[ComponentRecord] = field(default_factory=list)

    @property
    def is_core(self) -> bool:
        return self.plugin_type_raw == CORE_PLUGIN_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "plugin_type": self.plugin_type,
            "plugin_type_raw": self.plugin_type_raw,
            "plugins": [c.to_dict() for c in self.components],
        }
