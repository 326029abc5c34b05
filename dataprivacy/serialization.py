"""
Registry tree serialization.

This module turns the registry tree into a plain document for presentation
layers, in JSON or YAML.
"""

import json
from typing import Any, Dict, List, Literal

import yaml

from ._registry.models import ComponentTypeGroup
from .logging_config import logger

OutputFormat = Literal["json", "yaml"]

SUPPORTED_FORMATS = ("json", "yaml")


def tree_to_dict(tree: List[ComponentTypeGroup]) -> List[Dict[str, Any]]:
    """
    Convert the registry tree into plain lists and dicts.

    Optional record keys ("external", "nullprovider", "metadata") are only
    present when they apply, matching what templates expect.
    """
    return [group.to_dict() for group in tree]


def serialize_tree(tree: List[ComponentTypeGroup], output_format: OutputFormat = "json", indent: int = 2) -> str:
    """
    Serialize the registry tree.

    Args:
        tree: Groups returned by MetadataRegistry.build_registry_tree()
        output_format: "json" or "yaml"
        indent: Indentation width

    Returns:
        Serialized document as a string

    Raises:
        ValueError: If the format is not supported
    """
    document = tree_to_dict(tree)

    if output_format == "json":
        output = json.dumps(document, indent=indent, ensure_ascii=False)
    elif output_format == "yaml":
        output = yaml.safe_dump(document, indent=indent, sort_keys=False, allow_unicode=True)
    else:
        raise ValueError(f"Unsupported output format: {output_format}. Supported: {', '.join(SUPPORTED_FORMATS)}")

    logger.debug(f"Serialized registry tree as {output_format} ({len(output)} characters)")
    return output


def write_tree(tree: List[ComponentTypeGroup], output_file: str, output_format: OutputFormat = "json") -> None:
    """Serialize the registry tree to a file."""
    with open(output_file, "w", encoding="utf-8") as f:
        f.write(serialize_tree(tree, output_format))
        f.write("\n")
    logger.info(f"Wrote registry tree to {output_file}")
