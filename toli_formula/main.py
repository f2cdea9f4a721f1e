"""
toli-formula — CLI entrypoint.

Usage:
    toli-formula --help
    toli-formula install --prefix /usr/local
    toli-formula release check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from toli_formula import __version__
from toli_formula.core.observability.logging_config import setup_logging


def _fail(err: Exception, as_json: bool = False) -> None:
    """Report a fatal step failure and exit 1."""
    step = getattr(err, "step", "install")
    if as_json:
        click.echo(json.dumps({"ok": False, "step": step, "error": str(err)}, indent=2))
    else:
        click.secho(f"❌ [{step}] {err}", fg="red")
    sys.exit(1)


def _load_release(ctx: click.Context):
    from toli_formula.core.config.loader import resolve_release

    return resolve_release(ctx.obj.get("release_path"))


@click.group()
@click.version_option(version=__version__, prog_name="toli-formula")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--release",
    "-r",
    "release_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to release.yml (default: auto-detect, then built-in).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    release_path: str | None,
) -> None:
    """toli-formula — install prebuilt toli releases."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["release_path"] = Path(release_path) if release_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("TOLI_FORMULA_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("TOLI_FORMULA_LOG_FILE"),
        log_file_level=os.environ.get("TOLI_FORMULA_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option(
    "--prefix",
    type=click.Path(file_okay=False),
    default=None,
    help="Destination prefix (default: $TOLI_FORMULA_PREFIX, $HOMEBREW_PREFIX, /usr/local).",
)
@click.option("--version", "version", default=None, help="Version to install (default: release version).")
@click.option("--os", "host_os", default=None, help="Override detected OS.")
@click.option("--arch", "host_arch", default=None, help="Override detected architecture.")
@click.option("--timeout", type=click.IntRange(min=1), default=None, help="Fetch timeout in seconds.")
@click.option("--no-verify", "skip_verify", is_flag=True, help="Skip the --version smoke test.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    prefix: str | None,
    version: str | None,
    host_os: str | None,
    host_arch: str | None,
    timeout: int | None,
    skip_verify: bool,
    as_json: bool,
) -> None:
    """Download, verify, and install the release for this platform."""
    from toli_formula.core.config.loader import ConfigError, default_prefix, default_timeout
    from toli_formula.core.services.formula import FormulaError, run_install

    try:
        release = _load_release(ctx)
        result = run_install(
            release,
            Path(prefix) if prefix else default_prefix(),
            host_os=host_os,
            host_arch=host_arch,
            version=version,
            timeout=timeout if timeout is not None else default_timeout(),
            smoke_test=not skip_verify,
        )
    except (FormulaError, ConfigError) as e:
        _fail(e, as_json)
        return

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    quiet = ctx.obj.get("quiet", False)
    click.secho(
        f"✅ {release.name} {version or release.version} ({result.platform})",
        fg="green", bold=True,
    )
    for path in result.layout.files:
        click.echo(f"   → {path}")

    if result.verified is False:
        click.secho(
            f"⚠️  `{release.binary_name} --version` did not report the expected version",
            fg="yellow",
        )

    if not quiet and result.caveats:
        click.echo()
        click.secho("==> Caveats", fg="cyan", bold=True)
        click.echo(result.caveats)


@cli.command()
@click.option("--prefix", type=click.Path(file_okay=False), default=None, help="Destination prefix.")
@click.option("--version", "version", default=None, help="Expected version (default: release version).")
@click.pass_context
def verify(ctx: click.Context, prefix: str | None, version: str | None) -> None:
    """Smoke-test an installed binary with --version."""
    from toli_formula.core.config.loader import ConfigError, default_prefix
    from toli_formula.core.services.formula import get_installed_version
    from toli_formula.core.services.formula import verify as verify_install

    try:
        release = _load_release(ctx)
    except ConfigError as e:
        _fail(e)
        return

    root = Path(prefix) if prefix else default_prefix()
    expected = version or release.version

    if verify_install(root, release.binary_name, expected):
        click.secho(f"✅ {release.binary_name} {expected}", fg="green")
        return

    found = get_installed_version(root, release.binary_name)
    click.secho(
        f"❌ {release.binary_name}: expected {expected}, found {found or 'nothing'}",
        fg="red",
    )
    sys.exit(1)


@cli.command()
@click.pass_context
def caveats(ctx: click.Context) -> None:
    """Print the post-install caveats (shell alias hints)."""
    from toli_formula.core.config.loader import ConfigError
    from toli_formula.core.services.formula import render_caveats

    try:
        release = _load_release(ctx)
    except ConfigError as e:
        _fail(e)
        return

    text = render_caveats(release.binary_name, release.aliases)
    click.echo(text or "No caveats.")


@cli.command()
@click.option("--os", "host_os", default=None, help="Override detected OS.")
@click.option("--arch", "host_arch", default=None, help="Override detected architecture.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def platform(
    ctx: click.Context, host_os: str | None, host_arch: str | None, as_json: bool,
) -> None:
    """Show which platform key this host resolves to."""
    from toli_formula.core.config.loader import ConfigError
    from toli_formula.core.services.formula import FormulaError, detect_host, resolve

    detected_os, detected_arch = detect_host()
    host_os = host_os or detected_os
    host_arch = host_arch or detected_arch

    try:
        release = _load_release(ctx)
        key = resolve(host_os, host_arch, supported=release.platforms)
    except (FormulaError, ConfigError) as e:
        _fail(e, as_json)
        return

    if as_json:
        click.echo(json.dumps({"ok": True, "os": host_os, "arch": host_arch, "platform": key}))
        return
    click.echo(f"{host_os}/{host_arch} → {key}")


# ── Register sub-groups ─────────────────────────────────────────

from toli_formula.ui.cli.release import release  # noqa: E402

cli.add_command(release)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
