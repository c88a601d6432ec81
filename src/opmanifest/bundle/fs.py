"""Directory creation and YAML document writing.

Rules:
- Directories are created one level at a time with mode 0700; an existing
  target or a missing parent is an error.
- Documents are rendered before anything touches the disk, then written to a
  temporary file beside the destination and moved into place, so a failure never
  leaves a truncated or partially written file behind.
- Output is stable: block style, sorted keys, UTF-8, newline-terminated.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping

import yaml

from opmanifest.bundle.layout import DIR_MODE, FILE_MODE
from opmanifest.core.errors import ManifestIOError, SerializationError

logger = logging.getLogger(__name__)


def create_dir(path: Path) -> Path:
    """Create exactly one directory at `path` (owner rwx only)."""
    p = Path(path)
    try:
        os.mkdir(p, DIR_MODE)
    except OSError as e:
        raise ManifestIOError(operation="create directory", path=p, cause=e) from e
    logger.debug("created directory %s", p)
    return p


def _to_plain(obj: Any) -> Any:
    # Models expose to_document(); everything else must already be plain data.
    to_document = getattr(obj, "to_document", None)
    if callable(to_document):
        return to_document()
    if isinstance(obj, Mapping):
        return {k: _to_plain(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_plain(v) for v in obj]
    return obj


def render_yaml(obj: Any) -> str:
    """Render `obj` as YAML text.

    Raises:
        SerializationError: if the object graph holds values YAML cannot represent.
    """
    try:
        text = yaml.safe_dump(_to_plain(obj), default_flow_style=False, sort_keys=True, allow_unicode=True)
    except (yaml.YAMLError, TypeError) as e:
        raise SerializationError(f"error {e} marshaling {type(obj).__name__} into YAML") from e
    if not text.endswith("\n"):
        text += "\n"
    return text


def write_yaml(obj: Any, path: Path) -> Path:
    """Serialize `obj` and write it as the complete contents of `path` (mode 0644)."""
    p = Path(path)
    text = render_yaml(obj)

    tmp_name: str | None = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        os.chmod(tmp_name, FILE_MODE)
        os.replace(tmp_name, p)
        tmp_name = None
    except OSError as e:
        raise ManifestIOError(operation="write file", path=p, cause=e) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
    logger.debug("wrote %s", p)
    return p


def read_yaml(path: Path) -> Any:
    p = Path(path)
    with p.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


__all__ = ["create_dir", "read_yaml", "render_yaml", "write_yaml"]
