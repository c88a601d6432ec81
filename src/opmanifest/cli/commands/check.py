"""`opmanifest check` command.

Re-reads a manifest tree and verifies that every CSV has a version and that
every owned CRD reference resolves to a CRD present in the tree.
"""

from __future__ import annotations

from pathlib import Path

import typer

from opmanifest.core.errors import ManifestError, MissingVersionError
from opmanifest.core.resolve import index_resource_definitions, resolve_owned
from opmanifest.io.tree import read_manifest_tree


def register(app: typer.Typer) -> None:
    @app.command("check")
    def check(
        path: str = typer.Option(..., "--path", help="Path to a package directory (<registry>/<package>)."),
    ) -> None:
        """Check a manifest tree for missing versions and unresolved CRDs."""
        try:
            pkg = read_manifest_tree(Path(path))
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="--path") from e

        index = index_resource_definitions(pkg.resource_definitions)
        try:
            for release in pkg.releases:
                if not release.version:
                    raise MissingVersionError(release.name)
                resolve_owned(release, index)
        except ManifestError as e:
            typer.echo(f"error: {e}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo("OK")
