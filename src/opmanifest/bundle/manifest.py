"""Operator-registry manifest tree creation.

`Manifest.create()` writes a package to disk in the operator-registry manifest
format:

```
<registry_dir>/etcd/
    etcd.package.yaml
    0.6.1/
        etcdoperator.v0.6.1.csv.yaml
        etcdclusters.etcd.database.coreos.com.crd.yaml
```

Creation is fail-fast: it returns on the first error and never tries to produce
a partially valid tree. If CSV v1 is valid but CSV v2 is not, `create()` raises
and the caller must call `delete()` to remove what was written. There is no
internal rollback.
"""

from __future__ import annotations

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path

from opmanifest.bundle import layout
from opmanifest.bundle.fs import create_dir, write_yaml
from opmanifest.core.errors import ConfigurationError, ManifestError, ManifestIOError, MissingVersionError
from opmanifest.core.model import PackageModel, ReleaseModel, ResourceDefinitionKey, ResourceDefinitionModel
from opmanifest.core.resolve import index_resource_definitions, resolve_owned

logger = logging.getLogger(__name__)

# Errors from creating the package root that mean the registry dir itself is unusable.
_CONFIGURATION_CAUSES = (FileNotFoundError, NotADirectoryError, PermissionError)


class Manifest(ABC):
    """Creates and removes the on-disk manifest for one operator package."""

    @abstractmethod
    def create(self) -> None:
        """Generate the package directory, package file and one bundle per release.

        Raises the first `ManifestError` encountered. It is up to the caller to
        call `delete()` on any error.
        """

    @abstractmethod
    def delete(self) -> None:
        """Remove everything `create()` wrote. Safe to call more than once."""


class DirectoryManifest(Manifest):
    """Writes the manifest as a plain directory tree under `registry_dir`.

    The registry directory must already exist and is never removed; only the
    `<registry_dir>/<package_id>` subtree belongs to this instance.
    """

    def __init__(self, package: PackageModel, registry_dir: Path | str) -> None:
        if not isinstance(package, PackageModel):
            raise TypeError(f"DirectoryManifest: package must be PackageModel, got {type(package).__name__}")
        self.package = package
        self.registry_dir = Path(registry_dir)
        self._root: Path | None = None
        self._index: dict[ResourceDefinitionKey, ResourceDefinitionModel] | None = None

    @property
    def root(self) -> Path | None:
        """The package directory, once `create()` has computed it."""
        return self._root

    def create(self) -> None:
        root = self._create_package_dir()
        self._create_package_yaml(root)
        self._create_bundles(root)
        logger.info("created manifest for package %s at %s", self.package.package_id, root)

    def delete(self) -> None:
        if self._root is None:
            return
        try:
            shutil.rmtree(self._root)
        except (FileNotFoundError, NotADirectoryError):
            # Nothing was created there: missing path or a file in place of the registry dir.
            return
        except OSError as e:
            raise ManifestIOError(operation="remove directory", path=self._root, cause=e) from e
        logger.info("deleted manifest for package %s at %s", self.package.package_id, self._root)

    # ------------------------
    # package level
    # ------------------------

    def _create_package_dir(self) -> Path:
        """Create the package directory. Example: registry_dir/etcd"""
        root = layout.package_root(self.registry_dir, self.package.package_id)
        self._root = root
        try:
            return create_dir(root)
        except ManifestIOError as e:
            if isinstance(e.cause, _CONFIGURATION_CAUSES):
                raise ConfigurationError(operation=e.operation, path=e.path, cause=e.cause) from e.cause
            raise

    def _create_package_yaml(self, root: Path) -> None:
        """Write the package file. Example: etcd.package.yaml"""
        write_yaml(self.package, layout.package_file(root, self.package.package_id))

    def _create_bundles(self, root: Path) -> None:
        for release in self.package.releases:
            self._create_bundle(root, release)

    # ------------------------
    # bundle level
    # ------------------------

    def _create_bundle(self, root: Path, release: ReleaseModel) -> None:
        """Create the bundle directory, owned CRD files, then the CSV file."""
        try:
            bundle = self._create_bundle_dir(root, release)
            csv_path = layout.release_file(bundle, release.name)
            self._create_crd_yamls(release, bundle)
            write_yaml(release, csv_path)
        except ManifestError as e:
            if e.release is None:
                e.release = release.name
            raise
        logger.debug("created bundle %s for CSV %s", release.version, release.name)

    def _create_bundle_dir(self, root: Path, release: ReleaseModel) -> Path:
        """Create the bundle directory named after the CSV version."""
        if not release.version:
            raise MissingVersionError(release.name)
        return create_dir(layout.bundle_dir(root, release.version))

    def _create_crd_yamls(self, release: ReleaseModel, bundle: Path) -> None:
        """Write a CRD file for each CRD in the CSV's owned section.

        Every owned reference is resolved before the first file is written.
        """
        if self._index is None:
            self._index = index_resource_definitions(self.package.resource_definitions)
        for crd in resolve_owned(release, self._index):
            write_yaml(crd, layout.crd_file(bundle, crd.name))


def new_manifest(package: PackageModel, registry_dir: Path | str) -> Manifest:
    """Return the default `Manifest` implementation for `package`."""
    return DirectoryManifest(package, registry_dir)


__all__ = ["DirectoryManifest", "Manifest", "new_manifest"]
