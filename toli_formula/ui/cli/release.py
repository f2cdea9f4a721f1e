"""
CLI commands for release descriptors.

Thin wrappers over ``toli_formula.core.use_cases.release_check`` and
the formula resolver.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click


@click.group()
def release() -> None:
    """Release descriptor — show, check, locate, checksum."""


@release.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show the active release descriptor."""
    from toli_formula.core.config.loader import ConfigError, resolve_release

    try:
        rel = resolve_release(ctx.obj.get("release_path"))
    except ConfigError as e:
        click.secho(f"❌ [{e.step}] {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(rel.model_dump(), indent=2))
        return

    click.secho(f"\n📦 {rel.name} {rel.version}", fg="cyan", bold=True)
    if rel.description:
        click.echo(f"   {rel.description}")
    if rel.homepage:
        click.echo(f"   🔗 {rel.homepage}")
    click.echo()
    click.secho(f"   Platforms: {len(rel.platforms)}", fg="white", bold=True)
    for key in rel.platform_keys():
        click.echo(f"     • {key}  sha256:{rel.platforms[key].sha256}")
    if rel.aliases:
        click.echo()
        click.secho("   Aliases:", fg="white", bold=True)
        for name, flag in rel.aliases.items():
            click.echo(f"     • {name} → {rel.binary_name} {flag}")
    click.echo()


@release.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate the release descriptor (checksums, platforms, template)."""
    from toli_formula.core.use_cases.release_check import check_release

    result = check_release(ctx.obj.get("release_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.valid:
            sys.exit(1)
        return

    if result.release:
        source = result.config_path or "built-in"
        click.secho(f"📦 {result.release.name} {result.release.version}", fg="cyan", bold=True, nl=False)
        click.echo(f"  ({source})")

    for err in result.errors:
        click.secho(f"   ❌ {err}", fg="red")
    for warn in result.warnings:
        click.secho(f"   ⚠️  {warn}", fg="yellow")

    if result.valid:
        click.secho("✅ Release descriptor is valid", fg="green")
    else:
        click.secho(f"❌ {len(result.errors)} error(s)", fg="red", bold=True)
        sys.exit(1)


@release.command()
@click.option("--os", "host_os", default=None, help="Override detected OS.")
@click.option("--arch", "host_arch", default=None, help="Override detected architecture.")
@click.option("--all", "show_all", is_flag=True, help="Locate every published platform.")
@click.option("--version", "version", default=None, help="Version to substitute.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def locate(
    ctx: click.Context,
    host_os: str | None,
    host_arch: str | None,
    show_all: bool,
    version: str | None,
    as_json: bool,
) -> None:
    """Print the archive URL and checksum for a platform."""
    from toli_formula.core.config.loader import ConfigError, resolve_release
    from toli_formula.core.services.formula import FormulaError, detect_host, locate_all, resolve
    from toli_formula.core.services.formula import locate as locate_artifact

    try:
        rel = resolve_release(ctx.obj.get("release_path"))
    except ConfigError as e:
        click.secho(f"❌ [{e.step}] {e}", fg="red")
        sys.exit(1)

    if show_all:
        entries = locate_all(rel)
        if as_json:
            click.echo(json.dumps(entries, indent=2))
        else:
            for entry in entries:
                if entry["ok"]:
                    click.echo(f"{entry['platform']}  {entry['url']}")
                    click.echo(f"{'':>{len(entry['platform'])}}  sha256:{entry['sha256']}")
                else:
                    click.secho(f"{entry['platform']}  ❌ {entry['error']}", fg="red")
        if not all(e["ok"] for e in entries):
            sys.exit(1)
        return

    detected_os, detected_arch = detect_host()
    try:
        key = resolve(host_os or detected_os, host_arch or detected_arch, supported=rel.platforms)
        artifact = locate_artifact(rel, key, version)
    except FormulaError as e:
        if as_json:
            click.echo(json.dumps({"ok": False, "step": e.step, "error": str(e)}, indent=2))
        else:
            click.secho(f"❌ [{e.step}] {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps({"ok": True, **artifact.model_dump()}, indent=2))
        return
    click.echo(f"{artifact.platform}  {artifact.url}")
    click.echo(f"sha256:{artifact.sha256}")


@release.command()
@click.argument("archive", type=click.Path(exists=True, dir_okay=False))
def checksum(archive: str) -> None:
    """Compute the SHA-256 of a built release archive."""
    from toli_formula.core.services.formula import compute_sha256

    path = Path(archive)
    click.echo(f"{compute_sha256(path)}  {path.name}")
