"""Pytest configuration.

This repo follows the `src/` layout. Some environments may invoke a `pytest`
entrypoint from a different Python install than the one used for
`python -m pip install -e ...`, which can cause `import opmanifest` to fail.

To keep the suite robust, we ensure `src/` is on `sys.path` during tests.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest


def pytest_configure() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    sys.path.insert(0, str(src_dir))


# =============================================================================
# Shared document factories
# =============================================================================

ETCD_GROUP = "etcd.database.coreos.com"


def make_crd(plural: str, kind: str, *, group: str = ETCD_GROUP, version: str = "v1beta2") -> dict[str, Any]:
    """Create a minimal CustomResourceDefinition document."""
    return {
        "apiVersion": "apiextensions.k8s.io/v1beta1",
        "kind": "CustomResourceDefinition",
        "metadata": {"name": f"{plural}.{group}"},
        "spec": {
            "group": group,
            "version": version,
            "scope": "Namespaced",
            "names": {"kind": kind, "listKind": f"{kind}List", "plural": plural, "singular": plural[:-1]},
        },
    }


def make_csv(
    name: str,
    version: str | None,
    owned: list[tuple[str, str]] | None = None,
    *,
    replaces: str | None = None,
    required: list[tuple[str, str]] | None = None,
    group: str = ETCD_GROUP,
    crd_version: str = "v1beta2",
) -> dict[str, Any]:
    """Create a minimal ClusterServiceVersion document.

    `owned`/`required` are (plural, kind) pairs in `group`.
    """

    def _refs(pairs: list[tuple[str, str]] | None) -> list[dict[str, Any]]:
        return [
            {"name": f"{plural}.{group}", "version": crd_version, "kind": kind, "displayName": kind}
            for plural, kind in (pairs or [])
        ]

    spec: dict[str, Any] = {
        "displayName": "etcd",
        "customresourcedefinitions": {"owned": _refs(owned)},
    }
    if required:
        spec["customresourcedefinitions"]["required"] = _refs(required)
    if version is not None:
        spec["version"] = version
    if replaces is not None:
        spec["replaces"] = replaces
    return {
        "apiVersion": "operators.coreos.com/v1alpha1",
        "kind": "ClusterServiceVersion",
        "metadata": {"name": name, "namespace": "placeholder"},
        "spec": spec,
    }


def make_package(package_name: str, channels: dict[str, str], default: str | None = None) -> dict[str, Any]:
    """Create a package descriptor document."""
    doc: dict[str, Any] = {
        "packageName": package_name,
        "channels": [{"name": ch, "currentCSV": head} for ch, head in channels.items()],
    }
    if default is not None:
        doc["defaultChannel"] = default
    return doc


ETCD_CLUSTER = ("etcdclusters", "EtcdCluster")
ETCD_BACKUP = ("etcdbackups", "EtcdBackup")
ETCD_RESTORE = ("etcdrestores", "EtcdRestore")


def etcd_documents() -> dict[str, list[dict[str, Any]]]:
    """Documents for the etcd package: three releases, three CRDs."""
    all_three = [ETCD_CLUSTER, ETCD_BACKUP, ETCD_RESTORE]
    return {
        "packages": [make_package("etcd", {"alpha": "etcdoperator.v0.9.2"}, default="alpha")],
        "clusterServiceVersions": [
            make_csv("etcdoperator.v0.6.1", "0.6.1", [ETCD_CLUSTER]),
            make_csv("etcdoperator.v0.9.0", "0.9.0", all_three, replaces="etcdoperator.v0.6.1"),
            make_csv("etcdoperator.v0.9.2", "0.9.2", all_three, replaces="etcdoperator.v0.9.0"),
        ],
        "customResourceDefinitions": [make_crd(plural, kind) for plural, kind in all_three],
    }


@pytest.fixture()
def etcd_docs() -> dict[str, list[dict[str, Any]]]:
    return etcd_documents()


@pytest.fixture()
def etcd_package(etcd_docs: dict[str, list[dict[str, Any]]]):
    from opmanifest.core.model import PackageModel, ReleaseModel, ResourceDefinitionModel

    return PackageModel(
        etcd_docs["packages"][0],
        releases=tuple(ReleaseModel(d) for d in etcd_docs["clusterServiceVersions"]),
        resource_definitions=tuple(ResourceDefinitionModel(d) for d in etcd_docs["customResourceDefinitions"]),
    )
