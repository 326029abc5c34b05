"""Custom exceptions for dataprivacy."""

from typing import Optional


class DataPrivacyError(Exception):
    """Base exception for all dataprivacy operations."""


class ConfigurationError(DataPrivacyError):
    """Raised when configuration validation fails."""


class CollaboratorUnavailableError(DataPrivacyError):
    """Raised when a catalog, compliance, metadata or contributed-plugin source fails."""

    def __init__(self, collaborator: str, message: str) -> None:
        super().__init__(f"{collaborator}: {message}")
        self.collaborator = collaborator


class MissingTranslationError(DataPrivacyError):
    """Raised when a language string cannot be resolved for a component."""

    def __init__(self, key: str, component: str) -> None:
        super().__init__(f"Missing language string '{key}' for component '{component}'")
        self.key = key
        self.component = component


class InvalidTranslationError(DataPrivacyError):
    """Raised when a language string template cannot be filled with its arguments."""

    def __init__(self, key: str, component: str, reason: str) -> None:
        super().__init__(f"Invalid language string '{key}' for component '{component}': {reason}")
        self.key = key
        self.component = component


class SnapshotValidationError(DataPrivacyError):
    """Raised when a catalog snapshot document fails schema validation."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(f"{message} (at {path})" if path else message)
        self.path = path


class DataRequestError(DataPrivacyError):
    """Raised when a data request operation is invalid for the request's state."""


class PermissionDeniedError(DataPrivacyError):
    """Raised when the acting user lacks the capability for an operation."""


class DataRegistryError(DataPrivacyError):
    """Raised when a purpose, category or context instance operation is invalid."""
