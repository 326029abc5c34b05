"""Language string table translator."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from dataprivacy.exceptions import InvalidTranslationError, MissingTranslationError, SnapshotValidationError
from dataprivacy.logging_config import logger
from dataprivacy.validation import load_document


class _Placeholders(dict):
    """format_map mapping that leaves unknown placeholders untouched."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class StringTable:
    """
    Translator over a table of component -> {string key -> template}.

    Templates may contain {name} placeholders filled from the args passed
    to translate(). Positional placeholders are not supported; literal
    braces are written as {{ and }}. Unknown keys raise MissingTranslationError.

    Example:
        strings = StringTable({"mod_forum": {"privacy:metadata": "The forum stores posts."}})
        strings.translate("privacy:metadata", "mod_forum")
    """

    def __init__(self, strings: Optional[Dict[str, Dict[str, str]]] = None) -> None:
        self._strings: Dict[str, Dict[str, str]] = {c: dict(table) for c, table in (strings or {}).items()}

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "StringTable":
        """
        Load a JSON or YAML string table file.

        Raises:
            ConfigurationError: If the file cannot be read
            SnapshotValidationError: If the table is not component -> key -> string
        """
        data = load_document(path)
        for component, table in data.items():
            if not isinstance(table, dict) or not all(isinstance(v, str) for v in table.values()):
                raise SnapshotValidationError(f"Invalid string table for component '{component}'", str(component))
        logger.info(f"Loaded language strings for {len(data)} components from {Path(path).name}")
        return cls(data)

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "StringTable":
        """Build a string table from the "strings" section of a snapshot document."""
        return cls(data.get("strings") or {})

    def add(self, component: str, key: str, template: str) -> None:
        """Add or replace one string."""
        self._strings.setdefault(component, {})[key] = template

    def merge(self, other: "StringTable") -> "StringTable":
        """Return a new table with other's strings filling in missing keys."""
        merged = StringTable(other._strings)
        for component, table in self._strings.items():
            for key, template in table.items():
                merged.add(component, key, template)
        return merged

    def has_string(self, key: str, component: str) -> bool:
        return key in self._strings.get(component, {})

    def translate(self, key: str, component: str, args: Optional[Dict[str, Any]] = None) -> str:
        """
        Resolve a language string for a component.

        Raises:
            MissingTranslationError: If the component has no such string
            InvalidTranslationError: If the template cannot be filled from args
        """
        try:
            template = self._strings[component][key]
        except KeyError:
            raise MissingTranslationError(key, component) from None
        if args:
            try:
                return template.format_map(_Placeholders({k: str(v) for k, v in args.items()}))
            except (ValueError, IndexError, AttributeError, TypeError) as e:
                raise InvalidTranslationError(key, component, str(e)) from e
        return template

    def __len__(self) -> int:
        return sum(len(table) for table in self._strings.values())
