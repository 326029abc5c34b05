"""Formatting of declared privacy metadata into presentation items."""

import re
from typing import List, Sequence

from .models import LINK_KIND_PREFIXES, MetadataDeclaration, MetadataField, MetadataItem
from .protocol import Translator

# Separators used by namespaced kinds, e.g. "core_privacy\\local\\metadata\\types\\database_table"
_NAMESPACE_SEPARATORS = re.compile(r"[\\.:/]")


def strip_namespace(kind: str) -> str:
    """Return the last segment of a namespaced kind."""
    return _NAMESPACE_SEPARATORS.split(kind)[-1]


def is_link_kind(kind: str) -> bool:
    """Check if a metadata kind says the data is stored by another component."""
    return kind.startswith(LINK_KIND_PREFIXES)


def format_item(item: MetadataDeclaration, owning_component: str, translator: Translator) -> MetadataItem:
    """
    Turn one metadata declaration into a MetadataItem.

    Field descriptions and the summary are resolved as language strings
    scoped to the owning component.

    Args:
        item: Declaration from the metadata collection source
        owning_component: Component that declared the item, e.g. "mod_forum"
        translator: Localization service

    Returns:
        Formatted MetadataItem

    Raises:
        MissingTranslationError: If any language string does not resolve
    """
    fields = [
        MetadataField(field_name=field_name, field_summary=translator.translate(description_key, owning_component))
        for field_name, description_key in item.fields.items()
    ]
    kind = strip_namespace(str(item.kind))

    return MetadataItem(
        name=item.name,
        type=kind,
        fields=fields,
        summary=translator.translate(item.summary_key, owning_component),
        link=is_link_kind(kind),
    )


def format_metadata(
    collection: Sequence[MetadataDeclaration], owning_component: str, translator: Translator
) -> List[MetadataItem]:
    """Format a component's whole metadata collection, keeping declaration order."""
    return [format_item(item, owning_component, translator) for item in collection]
