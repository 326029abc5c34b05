"""Catalog snapshot loading and validation using JSON schemas.

This module loads snapshot documents (JSON or YAML) and validates them
against the bundled catalog snapshot schema.

Usage:
    from dataprivacy.validation import validate_snapshot_file

    result = validate_snapshot_file("catalog.yaml")
    if not result.valid:
        print(f"Validation failed: {result.error_message}")
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import jsonschema
import yaml

from dataprivacy.exceptions import ConfigurationError, SnapshotValidationError
from dataprivacy.logging_config import logger

# Path to schemas within the package directory
PACKAGE_DIR = Path(__file__).parent
SNAPSHOT_SCHEMA_PATH = PACKAGE_DIR / "schemas" / "catalog-snapshot.schema.json"

YAML_SUFFIXES = (".yaml", ".yml")

# Cache for loaded schemas
_schema_cache: dict[str, dict] = {}


@dataclass
class ValidationResult:
    """Result of snapshot validation."""

    valid: bool
    error_message: Optional[str] = None
    error_path: Optional[str] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(valid=True)

    @classmethod
    def failure(cls, error_message: str, error_path: Optional[str] = None) -> "ValidationResult":
        """Create a failed validation result."""
        return cls(valid=False, error_message=error_message, error_path=error_path)

    def raise_for_failure(self) -> None:
        """Raise SnapshotValidationError if validation failed."""
        if not self.valid:
            raise SnapshotValidationError(self.error_message or "Invalid snapshot", self.error_path)


def _load_schema(schema_path: Path) -> dict:
    """Load a JSON schema from disk with caching."""
    cache_key = str(schema_path)
    if cache_key in _schema_cache:
        return _schema_cache[cache_key]

    with open(schema_path) as f:
        schema = json.load(f)
        _schema_cache[cache_key] = schema
        return schema


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a JSON or YAML document with an object at its root.

    The format is chosen by file extension; anything other than .yaml/.yml
    is parsed as JSON.

    Raises:
        ConfigurationError: If the file does not exist or cannot be read
        SnapshotValidationError: If the file is not valid JSON/YAML or not an object
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(f"File not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            if file_path.suffix.lower() in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except json.JSONDecodeError as e:
        raise SnapshotValidationError(f"Invalid JSON in {file_path.name}: {e}")
    except yaml.YAMLError as e:
        raise SnapshotValidationError(f"Invalid YAML in {file_path.name}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Failed to read {file_path}: {e}")

    if not isinstance(data, dict):
        raise SnapshotValidationError(f"Invalid format in {file_path.name}: expected object at root")

    logger.debug(f"Loaded {file_path.name} ({len(data)} top-level keys)")
    return data


def validate_snapshot_data(data: Dict[str, Any]) -> ValidationResult:
    """
    Validate snapshot data against the catalog snapshot schema.

    Args:
        data: The parsed snapshot document

    Returns:
        ValidationResult with validation status and any errors
    """
    schema = _load_schema(SNAPSHOT_SCHEMA_PATH)

    try:
        jsonschema.validate(instance=data, schema=schema)
        logger.debug("Catalog snapshot validated successfully")
        return ValidationResult.success()
    except jsonschema.ValidationError as e:
        error_path = ".".join(str(p) for p in e.absolute_path) if e.absolute_path else None
        logger.error(f"Catalog snapshot validation failed: {e.message}")
        if error_path:
            logger.error(f"Error at path: {error_path}")
        return ValidationResult.failure(error_message=e.message, error_path=error_path)


def validate_snapshot_file(file_path: Union[str, Path]) -> ValidationResult:
    """
    Validate a snapshot file against the catalog snapshot schema.

    Unreadable or unparsable files are reported as failures rather than raised.

    Args:
        file_path: Path to a JSON or YAML snapshot

    Returns:
        ValidationResult with validation status and any errors
    """
    try:
        data = load_document(file_path)
    except (ConfigurationError, SnapshotValidationError) as e:
        return ValidationResult.failure(error_message=str(e))
    return validate_snapshot_data(data)
