"""On-disk layout of an operator-registry manifest tree.

```
<registry_dir>/<package_id>/
    <package_id>.package.yaml
    <version>/
        <csv name>.csv.yaml
        <crd name>.crd.yaml
```

Package ids, versions and document names become single path components; any
value that would resolve elsewhere (separators, `.`, `..`) is rejected.
"""

from __future__ import annotations

import os
from pathlib import Path

from opmanifest.core.errors import UnsafePathError

PACKAGE_SUFFIX = ".package.yaml"
RELEASE_SUFFIX = ".csv.yaml"
CRD_SUFFIX = ".crd.yaml"

DIR_MODE = 0o700
FILE_MODE = 0o644

_SEPARATORS = {"/", os.sep} | ({os.altsep} if os.altsep else set())


def path_component(value: str, *, what: str) -> str:
    """Return `value` if it names exactly one entry inside its parent directory."""
    if value in ("", ".", "..") or "\x00" in value or any(sep in value for sep in _SEPARATORS):
        raise UnsafePathError(what, value)
    return value


def package_root(registry_dir: Path, package_id: str) -> Path:
    return Path(registry_dir) / path_component(package_id, what="package id")


def package_file(root: Path, package_id: str) -> Path:
    return root / f"{path_component(package_id, what='package id')}{PACKAGE_SUFFIX}"


def bundle_dir(root: Path, version: str) -> Path:
    return root / path_component(version, what="CSV version")


def release_file(bundle: Path, release_name: str) -> Path:
    return bundle / f"{path_component(release_name, what='CSV name')}{RELEASE_SUFFIX}"


def crd_file(bundle: Path, crd_name: str) -> Path:
    return bundle / f"{path_component(crd_name, what='CRD name')}{CRD_SUFFIX}"
