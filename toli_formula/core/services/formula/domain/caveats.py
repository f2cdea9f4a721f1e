"""
L1 Domain — Post-install caveats rendering (pure).

Caveats are advisory text shown after a successful install.  They
carry no machine-readable contract.
"""

from __future__ import annotations

from collections.abc import Mapping

from toli_formula.core.models.layout import InstalledLayout

# Shell label → rc file the alias lines belong in.
_RC_FILES: tuple[tuple[str, str], ...] = (
    ("bash", "~/.bashrc"),
    ("zsh", "~/.zshrc"),
    ("fish", "~/.config/fish/config.fish"),
)


def render_caveats(product_name: str, aliases: Mapping[str, str]) -> str:
    """Render the alias hints for every supported shell.

    Args:
        product_name: Executable name, e.g. ``"toli"``.
        aliases: Alias name → product flag, e.g. ``{"howto": "--how"}``.

    Returns:
        Multi-line text, empty if there are no aliases.
    """
    if not aliases:
        return ""

    alias_lines = [
        f"  alias {name}='{product_name} {flag}'" for name, flag in aliases.items()
    ]

    lines = ["To enable command aliases, add the following to your shell configuration file:"]
    for shell, rc_file in _RC_FILES:
        lines.append("")
        lines.append(f"For {shell} ({rc_file}):")
        lines.extend(alias_lines)
    return "\n".join(lines) + "\n"


def report(
    layout: InstalledLayout,
    product_name: str,
    aliases: Mapping[str, str] | None = None,
) -> str:
    """Format the post-install summary for a completed layout."""
    lines = [f"{product_name} was installed to {layout.executable}"]
    if layout.shells:
        lines.append(f"Shell completions installed for: {', '.join(layout.shells)}")
    else:
        lines.append("No shell completions were shipped with this release.")

    text = "\n".join(lines) + "\n"
    caveats = render_caveats(product_name, aliases or {})
    if caveats:
        text += "\n" + caveats
    return text
