"""Core data model for operator packages.

A package is made of three kinds of documents:
- the package descriptor (`packageName`, `channels`, `defaultChannel`)
- ClusterServiceVersions (one per release)
- CustomResourceDefinitions

The models wrap the raw documents (plain mappings as parsed from YAML) and expose
only what manifest creation needs. Validation is structural: required fields
must be present and non-empty, nothing else is checked.

This module must not import bundle/io/cli.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping


def _norm_str(value: Any, *, where: str) -> str:
    """Normalize a required string: strip and reject empty/whitespace."""
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    s = value.strip()
    if not s:
        raise ValueError(f"{where}: must be a non-empty string")
    return s


def _opt_str(value: Any, *, where: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{where}: expected str, got {type(value).__name__}")
    return value.strip() or None


def _require_mapping(value: Any, *, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}: expected mapping, got {type(value).__name__}")
    return value


def _get_mapping(doc: Mapping[str, Any], key: str, *, where: str) -> Mapping[str, Any]:
    """Return doc[key] as a mapping; a missing or null value reads as {}."""
    value = doc.get(key)
    if value is None:
        return {}
    return _require_mapping(value, where=f"{where}.{key}")


def _get_list(doc: Mapping[str, Any], key: str, *, where: str) -> list[Any]:
    value = doc.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{where}.{key}: expected list, got {type(value).__name__}")
    return value


def _metadata_name(doc: Mapping[str, Any], *, where: str) -> str:
    meta = _get_mapping(doc, "metadata", where=where)
    return _norm_str(meta.get("name"), where=f"{where}.metadata.name")


@dataclass(frozen=True, order=True)
class ResourceDefinitionKey:
    """Identity of a CRD version: (group, version, kind)."""

    group: str
    version: str
    kind: str

    def __str__(self) -> str:
        return f"{self.kind}.{self.group}/{self.version}"


@dataclass(frozen=True)
class ResourceDefinitionModel:
    """A CustomResourceDefinition document.

    A CRD may serve several versions (`spec.version` and/or `spec.versions[*].name`);
    it is addressable by one key per version.
    """

    document: Mapping[str, Any]
    name: str = field(init=False)
    group: str = field(init=False)
    kind: str = field(init=False)
    versions: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        doc = copy.deepcopy(dict(_require_mapping(self.document, where="crd")))
        name = _metadata_name(doc, where="crd")
        where = f"crd {name}"
        spec = _get_mapping(doc, "spec", where=where)
        group = _norm_str(spec.get("group"), where=f"{where}.spec.group")
        names = _get_mapping(spec, "names", where=f"{where}.spec")
        kind = _norm_str(names.get("kind"), where=f"{where}.spec.names.kind")

        versions: list[str] = []
        single = _opt_str(spec.get("version"), where=f"{where}.spec.version")
        if single:
            versions.append(single)
        for i, item in enumerate(_get_list(spec, "versions", where=f"{where}.spec")):
            item = _require_mapping(item, where=f"{where}.spec.versions[{i}]")
            v = _norm_str(item.get("name"), where=f"{where}.spec.versions[{i}].name")
            if v not in versions:
                versions.append(v)
        if not versions:
            raise ValueError(f"{where}: spec.version or spec.versions is required")

        object.__setattr__(self, "document", doc)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "group", group)
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "versions", tuple(versions))

    @property
    def keys(self) -> tuple[ResourceDefinitionKey, ...]:
        return tuple(ResourceDefinitionKey(self.group, v, self.kind) for v in self.versions)

    @property
    def key(self) -> ResourceDefinitionKey:
        return self.keys[0]

    def to_document(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.document))


def _reference_keys(refs: Iterable[Any], *, where: str) -> tuple[ResourceDefinitionKey, ...]:
    """Keys for the `owned`/`required` CRD descriptions of a CSV.

    Descriptions carry the CRD name (`<plural>.<group>`), so the group is what
    follows the first dot.
    """
    keys: list[ResourceDefinitionKey] = []
    for i, ref in enumerate(refs):
        ref = _require_mapping(ref, where=f"{where}[{i}]")
        name = _norm_str(ref.get("name"), where=f"{where}[{i}].name")
        version = _norm_str(ref.get("version"), where=f"{where}[{i}].version")
        kind = _norm_str(ref.get("kind"), where=f"{where}[{i}].kind")
        keys.append(ResourceDefinitionKey(name.partition(".")[2], version, kind))
    return tuple(keys)


@dataclass(frozen=True)
class ReleaseModel:
    """A ClusterServiceVersion document: one release of a package.

    `version` is None when `spec.version` is absent or blank. That is not a
    construction error; the manifest builder reports it when it needs the
    version to name the bundle directory.
    """

    document: Mapping[str, Any]
    name: str = field(init=False)
    version: str | None = field(init=False)
    replaces: str | None = field(init=False)
    owned_keys: tuple[ResourceDefinitionKey, ...] = field(init=False)
    required_keys: tuple[ResourceDefinitionKey, ...] = field(init=False)

    def __post_init__(self) -> None:
        doc = copy.deepcopy(dict(_require_mapping(self.document, where="csv")))
        name = _metadata_name(doc, where="csv")
        where = f"csv {name}"
        spec = _get_mapping(doc, "spec", where=where)
        crds = _get_mapping(spec, "customresourcedefinitions", where=f"{where}.spec")
        crds_where = f"{where}.spec.customresourcedefinitions"

        object.__setattr__(self, "document", doc)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "version", _opt_str(spec.get("version"), where=f"{where}.spec.version"))
        object.__setattr__(self, "replaces", _opt_str(spec.get("replaces"), where=f"{where}.spec.replaces"))
        object.__setattr__(
            self,
            "owned_keys",
            _reference_keys(_get_list(crds, "owned", where=crds_where), where=f"{crds_where}.owned"),
        )
        object.__setattr__(
            self,
            "required_keys",
            _reference_keys(_get_list(crds, "required", where=crds_where), where=f"{crds_where}.required"),
        )

    def to_document(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.document))


@dataclass(frozen=True)
class PackageModel:
    """One operator package: descriptor, ordered releases and CRD collection."""

    package: Mapping[str, Any]
    releases: tuple[ReleaseModel, ...] = ()
    resource_definitions: tuple[ResourceDefinitionModel, ...] = ()
    package_id: str = field(init=False)

    def __post_init__(self) -> None:
        doc = copy.deepcopy(dict(_require_mapping(self.package, where="package")))
        package_id = _norm_str(doc.get("packageName"), where="package.packageName")

        releases = tuple(self.releases)
        for r in releases:
            if not isinstance(r, ReleaseModel):
                raise TypeError(f"package {package_id}: releases must be ReleaseModel, got {type(r).__name__}")
        crds = tuple(self.resource_definitions)
        for c in crds:
            if not isinstance(c, ResourceDefinitionModel):
                raise TypeError(
                    f"package {package_id}: resource_definitions must be ResourceDefinitionModel, "
                    f"got {type(c).__name__}"
                )

        object.__setattr__(self, "package", doc)
        object.__setattr__(self, "package_id", package_id)
        object.__setattr__(self, "releases", releases)
        object.__setattr__(self, "resource_definitions", crds)

    @property
    def channels(self) -> dict[str, str | None]:
        """Channel name -> currentCSV."""
        out: dict[str, str | None] = {}
        for i, ch in enumerate(_get_list(self.package, "channels", where=f"package {self.package_id}")):
            ch = _require_mapping(ch, where=f"package {self.package_id}.channels[{i}]")
            ch_name = _norm_str(ch.get("name"), where=f"package {self.package_id}.channels[{i}].name")
            out[ch_name] = _opt_str(ch.get("currentCSV"), where=f"package {self.package_id}.channels[{i}].currentCSV")
        return out

    @property
    def default_channel(self) -> str | None:
        return _opt_str(self.package.get("defaultChannel"), where=f"package {self.package_id}.defaultChannel")

    def to_document(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.package))


__all__ = [
    "PackageModel",
    "ReleaseModel",
    "ResourceDefinitionKey",
    "ResourceDefinitionModel",
]
