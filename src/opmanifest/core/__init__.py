"""opmanifest core: data model, errors and reference resolution.

This package is intentionally standalone and must not import bundle/io/cli
to avoid circular dependencies.
"""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    ManifestError,
    ManifestIOError,
    MissingVersionError,
    SerializationError,
    UnresolvedReferenceError,
    UnsafePathError,
)
from .model import PackageModel, ReleaseModel, ResourceDefinitionKey, ResourceDefinitionModel
from .resolve import index_resource_definitions, resolve_owned

__all__ = [
    "ConfigurationError",
    "ManifestError",
    "ManifestIOError",
    "MissingVersionError",
    "SerializationError",
    "UnresolvedReferenceError",
    "UnsafePathError",
    "PackageModel",
    "ReleaseModel",
    "ResourceDefinitionKey",
    "ResourceDefinitionModel",
    "index_resource_definitions",
    "resolve_owned",
]
