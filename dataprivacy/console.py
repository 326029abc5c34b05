"""Rich console utilities for dataprivacy.

This module provides a shared Rich Console instance and helper functions
for CLI output, including a tree view of the privacy metadata registry.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text
from rich.theme import Theme
from rich.tree import Tree

from ._registry.models import ComponentRecord, ComponentTypeGroup

# Detect CI environments
IS_GITHUB_ACTIONS = os.getenv("GITHUB_ACTIONS") == "true"
IS_CI = os.getenv("CI") == "true" or IS_GITHUB_ACTIONS

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "component": "bold",
        "external": "yellow",
        "noncompliant": "bold red",
        "nullprovider": "green",
        "link": "blue",
    }
)

# Shared console instance
console = Console(
    theme=custom_theme,
    force_terminal=IS_GITHUB_ACTIONS or None,
    color_system="auto",
)


def print_banner(version: str = "unknown") -> None:
    """Print the tool name and version."""
    banner = Text()
    banner.append("dataprivacy", style="bold magenta")
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style="cyan")
    banner.append(" - Privacy metadata registry\n", style="dim")
    console.print(banner)


def print_error(message: str, title: Optional[str] = None) -> None:
    """
    Print an error. In GitHub Actions the error becomes a job annotation.

    Args:
        message: Error message
        title: Optional title for the error
    """
    if IS_GITHUB_ACTIONS:
        if title:
            print(f"::error title={title}::{message}")
        else:
            print(f"::error::{message}")
    elif title:
        console.print(f"[error]Error ({escape(title)}):[/error] {escape(message)}")
    else:
        console.print(f"[error]Error:[/error] {escape(message)}")


def print_summary_table(
    title: str,
    data: List[Tuple[str, Any]],
    show_if_empty: bool = False,
) -> None:
    """
    Print a summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
        show_if_empty: Whether to show the table if all values are 0/empty
    """
    if not show_if_empty:
        data = [(label, value) for label, value in data if value]

    if not data:
        return

    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_registry_summary(stats: Dict[str, int]) -> None:
    """
    Print registry counts as a Rich table.

    Args:
        stats: Counts from summarize_tree()
    """
    data = [
        ("Plugin types", stats.get("plugin_types", 0)),
        ("Components", stats.get("components", 0)),
        ("With metadata", stats.get("with_metadata", 0)),
        ("Null providers", stats.get("nullprovider", 0)),
        ("Non-compliant", stats.get("noncompliant", 0)),
        ("Additional plugins", stats.get("external", 0)),
        ("Metadata items", stats.get("metadata_items", 0)),
    ]
    print_summary_table("Privacy Registry Summary", data)


def _component_label(record: ComponentRecord) -> Text:
    label = Text(record.component, style="component")
    if record.component != record.raw_component:
        label.append(f" ({record.raw_component})", style="dim")
    if record.external:
        label.append(" [additional]", style="external")
    if not record.compliant:
        label.append(" non-compliant", style="noncompliant")
    return label


def build_registry_tree_view(tree: List[ComponentTypeGroup]) -> Tree:
    """
    Build a Rich Tree for the registry.

    Args:
        tree: Groups from MetadataRegistry.build_registry_tree()

    Returns:
        Rich Tree with one branch per plugin type and one per component
    """
    root = Tree("[bold]Privacy metadata registry[/bold]")
    for group in tree:
        group_branch = root.add(Text(f"{group.plugin_type} ({len(group.components)})", style="highlight"))
        for record in group.components:
            branch = group_branch.add(_component_label(record))
            if record.null_provider_reason is not None:
                branch.add(Text(record.null_provider_reason, style="nullprovider"))
            for item in record.metadata:
                item_label = Text(f"{item.type}: {item.name}")
                if item.link:
                    item_label.stylize("link")
                item_branch = branch.add(item_label)
                if item.summary:
                    item_branch.add(Text(item.summary, style="dim"))
                for metadata_field in item.fields:
                    item_branch.add(Text(f"{metadata_field.field_name}: {metadata_field.field_summary}"))
    return root


def print_registry_tree(tree: List[ComponentTypeGroup]) -> None:
    """Print the registry as a Rich tree."""
    console.print(build_registry_tree_view(tree))
