"""opmanifest bundle writer (manifest-on-disk format).

Scope:
- Create `<registry_dir>/<package>/` with the package file
- One bundle directory per CSV version holding the CSV and its owned CRDs
- `delete()` removes the whole package directory
"""

from __future__ import annotations

from .fs import create_dir, read_yaml, render_yaml, write_yaml
from .manifest import DirectoryManifest, Manifest, new_manifest

__all__ = [
    "DirectoryManifest",
    "Manifest",
    "new_manifest",
    "create_dir",
    "read_yaml",
    "render_yaml",
    "write_yaml",
]
