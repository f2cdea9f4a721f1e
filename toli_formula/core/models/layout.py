"""
Installed layout — the files written by one install run.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field

SHELLS: tuple[str, ...] = ("bash", "zsh", "fish")


class InstalledLayout(BaseModel):
    """Destination paths produced by a successful install.

    One executable plus up to three completion scripts.  The prefix
    owns the files; nothing here manages them after install.
    """

    prefix: Path
    executable: Path
    completions: dict[str, Path] = Field(default_factory=dict)

    @property
    def files(self) -> list[Path]:
        """Every written path, executable first, then shells in order."""
        paths = [self.executable]
        for shell in SHELLS:
            if shell in self.completions:
                paths.append(self.completions[shell])
        return paths

    @property
    def shells(self) -> list[str]:
        """Shells that received a completion script."""
        return [s for s in SHELLS if s in self.completions]

    def to_dict(self) -> dict:
        return {
            "prefix": str(self.prefix),
            "executable": str(self.executable),
            "completions": {k: str(v) for k, v in self.completions.items()},
        }
