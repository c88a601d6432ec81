"""opmanifest I/O helpers.

- operator metadata YAML -> PackageModel in [`read_operator_metadata()`](metadata.py:1)
- manifest tree on disk -> PackageModel in [`read_manifest_tree()`](tree.py:1)
"""

from __future__ import annotations

from .metadata import packages_from_metadata, read_operator_metadata, read_package
from .tree import read_manifest_tree

__all__ = [
    "packages_from_metadata",
    "read_manifest_tree",
    "read_operator_metadata",
    "read_package",
]
