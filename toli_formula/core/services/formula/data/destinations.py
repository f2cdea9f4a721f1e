"""
L0 Data — Where each installed file lands under the prefix.

Pure data.  Paths are relative to the destination prefix; ``{name}``
is the executable name.
"""

from __future__ import annotations

BIN_DIR = "bin"

# shell → (directory, file name).  zsh autoloads ``_<name>`` functions;
# bash keeps the bare executable name.
COMPLETION_DESTINATIONS: dict[str, tuple[str, str]] = {
    "bash": ("etc/bash_completion.d", "{name}"),
    "zsh": ("share/zsh/site-functions", "_{name}"),
    "fish": ("share/fish/vendor_completions.d", "{name}.fish"),
}

EXECUTABLE_MODE = 0o755
COMPLETION_MODE = 0o644
