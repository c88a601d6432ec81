"""Resolver: match a release's owned CRD references against the package's CRDs.

Hard-error on the first reference that has no matching definition; no partial
results are returned.
"""

from __future__ import annotations

from typing import Iterable

from opmanifest.core.errors import UnresolvedReferenceError
from opmanifest.core.model import ReleaseModel, ResourceDefinitionKey, ResourceDefinitionModel


def index_resource_definitions(
    crds: Iterable[ResourceDefinitionModel],
) -> dict[ResourceDefinitionKey, ResourceDefinitionModel]:
    """Map every served (group, version, kind) to its definition.

    When two definitions claim the same key the first one wins, matching the
    order of the package's collection.
    """
    index: dict[ResourceDefinitionKey, ResourceDefinitionModel] = {}
    for crd in crds:
        for key in crd.keys:
            index.setdefault(key, crd)
    return index


def resolve_owned(
    release: ReleaseModel,
    index: dict[ResourceDefinitionKey, ResourceDefinitionModel],
) -> list[ResourceDefinitionModel]:
    """Return the definitions owned by `release`, in declaration order.

    Raises:
        UnresolvedReferenceError: for the first owned key missing from `index`.
    """
    out: list[ResourceDefinitionModel] = []
    for key in release.owned_keys:
        crd = index.get(key)
        if crd is None:
            raise UnresolvedReferenceError(key, release.name)
        out.append(crd)
    return out


__all__ = ["index_resource_definitions", "resolve_owned"]
