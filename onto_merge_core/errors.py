"""Custom exception hierarchy for onto-merge."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class OntoMergeError(Exception):
    """Base exception for all onto-merge errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        """Initialize error with message and optional details.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of error."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# Ontology Errors

class OntologyError(OntoMergeError):
    """Base class for errors raised by the ontology store."""
    pass


class OntologyAlreadyExistsError(OntologyError):
    """Raised when a manager already holds an ontology with the same identity."""

    def __init__(self, ontology_iri: str, version_iri: Optional[str] = None) -> None:
        details = {"ontology_iri": ontology_iri}
        if version_iri:
            details["version_iri"] = version_iri
        super().__init__("Ontology already exists in manager", details)


class OntologyLoadError(OntologyError):
    """Raised when an ontology document cannot be read."""

    def __init__(self, message: str, path: Optional[str] = None, format: Optional[str] = None) -> None:
        details = {}
        if path:
            details["path"] = path
        if format:
            details["format"] = format
        super().__init__(message, details)


# Merge Errors

class MergeError(OntoMergeError):
    """Raised when a merge cannot be performed."""

    def __init__(self, message: str, source_count: Optional[int] = None) -> None:
        details = {}
        if source_count is not None:
            details["source_count"] = source_count
        super().__init__(message, details)


# Validation Errors

class ValidationError(OntoMergeError):
    """Base class for validation errors."""
    pass


class ManifestValidationError(ValidationError):
    """Raised when manifest validation fails."""

    def __init__(self, message: str, manifest_path: Optional[str] = None, errors: Optional[List[str]] = None) -> None:
        details = {}
        if manifest_path:
            details["manifest_path"] = manifest_path
        if errors:
            details["validation_errors"] = errors
        super().__init__(message, details)


class PreflightCheckError(ValidationError):
    """Raised when pre-flight checks fail."""

    def __init__(self, message: str, check_name: str, suggestion: Optional[str] = None) -> None:
        details = {"check_name": check_name}
        if suggestion:
            details["suggestion"] = suggestion
        super().__init__(message, details)


# Resource Errors

class ResourceError(OntoMergeError):
    """Base class for resource-related errors."""
    pass


class ResourceAccessError(ResourceError):
    """Raised when resource access fails due to permissions."""

    def __init__(self, message: str, resource_path: str, operation: str) -> None:
        super().__init__(message, {"resource_path": resource_path, "operation": operation})
