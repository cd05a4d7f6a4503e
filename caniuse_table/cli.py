"""Console script for caniuse-table."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

from ._version import __version__
from .config import BuildSettings
from .exceptions import CaniuseTableError
from .pipeline import build
from .util.log import configure_logging


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for the download cache and the generated module (default: $OUT_DIR).",
)
@click.option(
    "--package-version",
    metavar="SEMVER",
    help="caniuse-db release to build from (default: this package's version).",
)
@click.option("--output-name", metavar="FILE", help="File name of the generated module.")
@click.option("--registry-url", metavar="TEMPLATE", help="Registry URL with {package} and {version}.")
@click.option("--dataset-url", metavar="TEMPLATE", help="Dataset URL with {revision}.")
@click.option("--timeout", type=click.FloatRange(min=0, min_open=True), help="HTTP timeout in seconds.")
@click.option("--verbose", is_flag=True, help="Log cache and HTTP activity.")
@click.version_option(__version__, "-v", "--version")
def main(
    out_dir: Path | None,
    package_version: str | None,
    output_name: str | None,
    registry_url: str | None,
    dataset_url: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """
    Generate the static caniuse feature table

    \b
    Example usages:
      caniuse-table --out-dir build/
      OUT_DIR=build caniuse-table --package-version 1.0.30001559
    """
    configure_logging(verbose)
    console = Console()

    try:
        settings = BuildSettings.from_env(
            out_dir=out_dir,
            package_version=package_version,
            output_name=output_name,
            registry_url=registry_url,
            dataset_url=dataset_url,
            timeout=timeout,
        )
        result = build(settings)
    except CaniuseTableError as exc:
        raise click.ClickException(str(exc)) from exc

    if result.skipped:
        console.print("[dim]Feature table generation is disabled.[/dim]")
        return
    console.print(
        f"[green]Wrote {result.feature_count} features[/green] "
        f"from revision {result.revision} to {result.output_path}",
        highlight=False,
    )
