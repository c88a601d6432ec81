"""Operator metadata YAML -> PackageModel.

Accepted input (the registry ConfigMap shape):

```yaml
data:
  packages: |-
    - packageName: etcd
      channels: [{name: alpha, currentCSV: etcdoperator.v0.9.2}]
  clusterServiceVersions: |-
    - {apiVersion: operators.coreos.com/v1alpha1, kind: ClusterServiceVersion, ...}
  customResourceDefinitions: |-
    - {apiVersion: apiextensions.k8s.io/v1beta1, kind: CustomResourceDefinition, ...}
```

Each of the three sections may also be a plain YAML list, and the `data` wrapper
is optional.

Package assembly:
- releases are the CSVs reachable from the package's channel heads (`currentCSV`)
  by following `spec.replaces`, kept in document order
- resource definitions are the CRDs owned or required by those releases
- a channel head that names an unknown CSV is a hard error; a `replaces` link to
  an unknown CSV ends the chain
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from opmanifest.core.model import PackageModel, ReleaseModel, ResourceDefinitionKey, ResourceDefinitionModel

logger = logging.getLogger(__name__)

SECTIONS = ("packages", "clusterServiceVersions", "customResourceDefinitions")


def _section(data: Mapping[str, Any], key: str, *, where: str) -> list[Any]:
    raw = data.get(key)
    if raw is None:
        return []
    if isinstance(raw, str):
        try:
            raw = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"{where}.{key}: invalid embedded YAML: {e}") from e
        if raw is None:
            return []
    if not isinstance(raw, list):
        raise ValueError(f"{where}.{key}: expected list, got {type(raw).__name__}")
    return raw


def _reachable_csv_names(package: PackageModel, by_name: Mapping[str, ReleaseModel]) -> set[str]:
    names: set[str] = set()
    for channel, head in package.channels.items():
        if head is None:
            continue
        if head not in by_name:
            raise ValueError(
                f"package {package.package_id}: channel {channel} currentCSV {head} not found"
            )
        current: str | None = head
        while current is not None and current in by_name and current not in names:
            names.add(current)
            current = by_name[current].replaces
    return names


def packages_from_metadata(data: Any, *, where: str = "metadata") -> dict[str, PackageModel]:
    """Build one PackageModel per package described in parsed operator metadata."""
    if not isinstance(data, Mapping):
        raise ValueError(f"{where}: expected mapping, got {type(data).__name__}")
    if isinstance(data.get("data"), Mapping):
        data = data["data"]
        where = f"{where}.data"

    packages, csvs, crds = (_section(data, key, where=where) for key in SECTIONS)

    releases = [ReleaseModel(doc) for doc in csvs]
    definitions = [ResourceDefinitionModel(doc) for doc in crds]
    by_name: dict[str, ReleaseModel] = {}
    for r in releases:
        if r.name in by_name:
            raise ValueError(f"{where}.clusterServiceVersions: duplicate CSV {r.name}")
        by_name[r.name] = r

    out: dict[str, PackageModel] = {}
    for doc in packages:
        shell = PackageModel(doc)
        if shell.package_id in out:
            raise ValueError(f"{where}.packages: duplicate package {shell.package_id}")

        selected_names = _reachable_csv_names(shell, by_name)
        selected = tuple(r for r in releases if r.name in selected_names)

        wanted: set[ResourceDefinitionKey] = set()
        for r in selected:
            wanted.update(r.owned_keys)
            wanted.update(r.required_keys)
        owned_crds = tuple(c for c in definitions if wanted.intersection(c.keys))

        out[shell.package_id] = PackageModel(doc, releases=selected, resource_definitions=owned_crds)
        logger.debug(
            "loaded package %s: %d CSVs, %d CRDs", shell.package_id, len(selected), len(owned_crds)
        )
    return out


def read_operator_metadata(path: str | Path) -> dict[str, PackageModel]:
    """Read an operator metadata YAML file and return its packages by id."""
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{p.name}: invalid YAML: {e}") from e
    return packages_from_metadata(data, where=p.name)


def read_package(path: str | Path, package_id: str) -> PackageModel:
    """Read one package from an operator metadata file.

    Raises:
        KeyError: if the file does not describe `package_id`.
    """
    packages = read_operator_metadata(path)
    try:
        return packages[package_id]
    except KeyError:
        raise KeyError(f"package {package_id} not found in {Path(path).name}") from None


__all__ = ["packages_from_metadata", "read_operator_metadata", "read_package"]
