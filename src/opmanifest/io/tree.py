"""Read a manifest tree back from disk into a PackageModel.

The tree is expected to follow `opmanifest.bundle.layout`. Bundle directories
are read in version order (numeric runs compared as numbers, so 0.9.0 comes
before 0.10.0); CRD files repeated across bundles are kept once
(first occurrence wins).
"""

from __future__ import annotations

import re
from pathlib import Path

from opmanifest.bundle import layout
from opmanifest.bundle.fs import read_yaml
from opmanifest.core.model import PackageModel, ReleaseModel, ResourceDefinitionModel


def _version_sort_key(path: Path) -> tuple[object, ...]:
    # re.split with a capture group alternates text, digits, text, ...
    parts = re.split(r"(\d+)", path.name)
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


def read_manifest_tree(root: str | Path) -> PackageModel:
    """Parse `<registry_dir>/<package_id>/` into a PackageModel."""
    r = Path(root)
    if not r.is_dir():
        raise ValueError(f"{r}: not a directory")

    package_files = sorted(r.glob(f"*{layout.PACKAGE_SUFFIX}"))
    if len(package_files) != 1:
        raise ValueError(f"{r}: expected exactly one *{layout.PACKAGE_SUFFIX} file, found {len(package_files)}")
    package_doc = read_yaml(package_files[0])

    releases: list[ReleaseModel] = []
    crds: dict[str, ResourceDefinitionModel] = {}
    for bundle in sorted((p for p in r.iterdir() if p.is_dir()), key=_version_sort_key):
        csv_files = sorted(bundle.glob(f"*{layout.RELEASE_SUFFIX}"))
        if len(csv_files) != 1:
            raise ValueError(f"{bundle}: expected exactly one *{layout.RELEASE_SUFFIX} file, found {len(csv_files)}")
        releases.append(ReleaseModel(read_yaml(csv_files[0])))
        for crd_path in sorted(bundle.glob(f"*{layout.CRD_SUFFIX}")):
            crd = ResourceDefinitionModel(read_yaml(crd_path))
            crds.setdefault(crd.name, crd)

    return PackageModel(package_doc, releases=tuple(releases), resource_definitions=tuple(crds.values()))


__all__ = ["read_manifest_tree"]
