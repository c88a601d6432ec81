"""`opmanifest build` command.

Writes one package from an operator metadata file as a manifest tree:
- loads the package via opmanifest.io.metadata.read_package()
- creates `<out-dir>/<package>/` via opmanifest.bundle.manifest
- on failure removes the partial tree unless `--keep-on-error` is given
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from opmanifest.bundle.manifest import new_manifest
from opmanifest.core.errors import ManifestError
from opmanifest.io.metadata import read_package

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    @app.command("build")
    def build(
        metadata_path: str = typer.Argument(..., help="Path to an operator metadata YAML file."),
        package: str = typer.Option(..., "--package", help="Package id to write (packageName)."),
        out_dir: str = typer.Option(
            ".",
            "--out-dir",
            envvar="OPMANIFEST_OUT_DIR",
            help="Existing registry directory; the package directory is created inside it.",
        ),
        keep_on_error: bool = typer.Option(
            False, "--keep-on-error", help="Leave the partially written tree in place on failure."
        ),
    ) -> None:
        """Write a package's manifest tree under --out-dir."""
        try:
            pkg = read_package(Path(metadata_path), package)
        except KeyError as e:
            raise typer.BadParameter(str(e.args[0]), param_hint="--package") from e
        except (OSError, ValueError) as e:
            raise typer.BadParameter(str(e), param_hint="METADATA_PATH") from e

        manifest = new_manifest(pkg, Path(out_dir))
        try:
            manifest.create()
        except ManifestError as e:
            typer.echo(f"error: {e}", err=True)
            if not keep_on_error:
                logger.info("removing partial manifest for %s", pkg.package_id)
                try:
                    manifest.delete()
                except ManifestError as cleanup:
                    typer.echo(f"error: cleanup failed: {cleanup}", err=True)
            raise typer.Exit(code=1) from e

        typer.echo(str(Path(out_dir) / pkg.package_id))
