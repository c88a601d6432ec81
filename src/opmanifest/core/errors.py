"""Typed errors raised while materializing a manifest tree.

Every error derives from `ManifestError` so callers can catch one type, clean up
with `Manifest.delete()` and still assert on the concrete kind in tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from opmanifest.core.model import ResourceDefinitionKey


class ManifestError(Exception):
    """Base class for manifest creation failures.

    `release` is filled in by the bundle materializer so the message always names
    the release being written when the failure happened.
    """

    def __init__(self, message: str, *, release: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.release = release

    def __str__(self) -> str:
        if self.release and self.release not in self.message:
            return f"release {self.release}: {self.message}"
        return self.message


class ManifestIOError(ManifestError):
    """A file-system operation failed; `cause` is the original OSError."""

    def __init__(
        self,
        *,
        operation: str,
        path: Path | str,
        cause: BaseException,
        release: str | None = None,
    ) -> None:
        super().__init__(f"error {cause} while trying to {operation} {path}", release=release)
        self.operation = operation
        self.path = Path(path)
        self.cause = cause


class ConfigurationError(ManifestIOError):
    """The package root cannot be created under the supplied registry directory."""


class MissingVersionError(ManifestError, ValueError):
    def __init__(self, release: str) -> None:
        super().__init__(f"unable to create bundle directory: CSV {release} is missing spec.version", release=release)


class UnresolvedReferenceError(ManifestError, LookupError):
    """An owned CRD reference has no matching definition in the package."""

    def __init__(self, key: "ResourceDefinitionKey", release: str) -> None:
        super().__init__(f"owned CRD {key} for CSV {release} not found", release=release)
        self.key = key


class SerializationError(ManifestError, ValueError):
    """An object could not be rendered as YAML."""


class UnsafePathError(ManifestError, ValueError):
    """A package id, version or document name is not a single path component."""

    def __init__(self, what: str, value: str) -> None:
        super().__init__(f"{what} {value!r} is not a valid file or directory name")
        self.what = what
        self.value = value


__all__ = [
    "ConfigurationError",
    "ManifestError",
    "ManifestIOError",
    "MissingVersionError",
    "SerializationError",
    "UnresolvedReferenceError",
    "UnsafePathError",
]
