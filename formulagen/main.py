"""
formulagen — CLI entrypoint.

Usage:
    python -m formulagen.main --help
    python -m formulagen.main generate ./Cargo.toml
    python -m formulagen.main classify frobber-aarch64-apple-darwin.tar.gz
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from formulagen import __version__
from formulagen.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="formulagen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .formulagen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """formulagen — generate Homebrew formulas for Rust release binaries."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    level: str | None = None  # FORMULAGEN_LOG_LEVEL or WARNING
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"

    setup_logging(level)


@cli.command()
@click.argument("manifest", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--gh-cli-strategy", "-g", "gh_strategy", is_flag=True,
    help="Use the `gh` cli download strategy; useful for private tap repos.",
)
@click.option(
    "--no-perms", "-n", "no_perms", is_flag=True,
    help="Build assets from the local dist/ directory instead of the release API.",
)
@click.option(
    "--output-dir", "-o", "output_dir", type=click.Path(file_okay=False), default=None,
    help="Directory for the formula file (default: current directory).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    manifest: str | None,
    gh_strategy: bool,
    no_perms: bool,
    output_dir: str | None,
    as_json: bool,
) -> None:
    """Generate <executable>.rb from MANIFEST (default: ./Cargo.toml).

    Requires a GitHub token in GITHUB_ACCESS_TOKEN or GITHUB_TOKEN unless
    --no-perms is given.
    """
    from formulagen.core.config.loader import ConfigError, load_config
    from formulagen.core.config.manifest import DEFAULT_MANIFEST
    from formulagen.core.errors import CredentialsError
    from formulagen.core.models.formula import FormulaStrategy
    from formulagen.core.services.credentials import find_token
    from formulagen.core.use_cases.generate import GenerateResult, generate_formula

    try:
        config = load_config(ctx.obj.get("config_path"))
    except ConfigError as e:
        _fail(str(e), as_json)
        return

    strategy = FormulaStrategy.GH_CLI if gh_strategy else config.strategy
    use_local = no_perms or config.no_perms
    manifest_path = Path(manifest or config.manifest or DEFAULT_MANIFEST)
    out = output_dir or config.output_dir

    token: str | None = None
    if not use_local:
        try:
            token = find_token()
        except CredentialsError as e:
            _fail(str(e), as_json)
            return

    result: GenerateResult = generate_formula(
        manifest_path,
        strategy=strategy,
        no_perms=use_local,
        token=token,
        output_dir=Path(out) if out else None,
        api_url=config.api_url,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ok else 1)
        return

    if not result.ok:
        _fail(result.error or "formula generation failed", as_json)
        return

    if not ctx.obj.get("quiet") and result.skipped:
        for skipped in result.skipped:
            click.secho(f"⚠️  skipped {skipped.name or '<unnamed>'}: {skipped.reason}", fg="yellow", err=True)

    click.echo(str(result.formula_path))


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def classify(names: tuple[str, ...], as_json: bool) -> None:
    """Show the OS and CPU tags for artifact names or URLs."""
    from formulagen.core.services.classifier import classify as classify_name

    rows = []
    for name in names:
        os_tag, cpu_tag = classify_name(name)
        rows.append({"name": name, "os": os_tag, "cpu": cpu_tag})

    if as_json:
        click.echo(json.dumps(rows, indent=2))
        return

    for row in rows:
        click.echo(f"{row['os']:<8} {row['cpu']:<8} {row['name']}")


@cli.command()
@click.argument("filename")
@click.option("--url", default="", help="Download URL used when nothing local is usable.")
def digest(filename: str, url: str) -> None:
    """Resolve the SHA-256 digest of a release tarball.

    Looks at FILENAME.sha256, then FILENAME, then downloads --url.
    """
    from formulagen.core.errors import DigestError
    from formulagen.core.services.checksum import resolve_digest

    try:
        click.echo(resolve_digest(filename, url))
    except DigestError as e:
        _fail(str(e), False)


def _fail(message: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def main() -> None:
    """Entry point for ``python -m formulagen.main`` and the console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
