"""opmanifest: operator-registry manifest writer.

Turns an in-memory operator package (package descriptor, CSVs and CRDs) into
the operator-registry manifest directory format.
"""

from __future__ import annotations

from opmanifest.bundle import DirectoryManifest, Manifest, new_manifest
from opmanifest.core import (
    ConfigurationError,
    ManifestError,
    ManifestIOError,
    MissingVersionError,
    PackageModel,
    ReleaseModel,
    ResourceDefinitionKey,
    ResourceDefinitionModel,
    SerializationError,
    UnresolvedReferenceError,
    UnsafePathError,
)
from opmanifest.io import read_manifest_tree, read_operator_metadata, read_package

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "DirectoryManifest",
    "Manifest",
    "new_manifest",
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
    "read_manifest_tree",
    "read_operator_metadata",
    "read_package",
]
