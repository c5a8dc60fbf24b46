"""Table and structured output for dotfile listings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

_STATE_ICONS = {"managed": "✓", "missing": "⚠", "untracked": "?"}


@dataclass
class DotfileListSummary:
    """Counts shown at the top of a dotfile listing."""

    total: int = 0
    managed: int = 0
    missing: int = 0
    untracked: int = 0
    verbose: bool = False


@dataclass
class DotfileInfo:
    """One dotfile in a listing."""

    name: str
    state: str
    target: str = ""
    source: str = ""


@dataclass
class DotfileListOutput:
    """A dotfile listing with its summary."""

    summary: DotfileListSummary = field(default_factory=DotfileListSummary)
    dotfiles: list[DotfileInfo] = field(default_factory=list)

    def table_output(self) -> str:
        """Render the listing as a human-friendly table."""
        output = "Dotfiles Summary\n================\n"
        summary = self.summary
        if summary.total == 0:
            return output + "No dotfiles found\n"

        output += f"Total: {summary.total} files"
        if not summary.verbose:
            if summary.managed > 0:
                output += f" | ✓ Managed: {summary.managed}"
            if summary.missing > 0:
                output += f" | ⚠ Missing: {summary.missing}"
            if summary.untracked > 0:
                output += f" | ? Untracked: {summary.untracked}"
        output += "\n\n"

        if not self.dotfiles:
            return output + "No dotfiles to display\n"

        output += "  Status Target                                    Source\n"
        output += (
            "  ------ ----------------------------------------- "
            "--------------------------------------\n"
        )
        for dotfile in self.dotfiles:
            icon = _STATE_ICONS.get(dotfile.state, "-")
            target = dotfile.target or "-"
            source = dotfile.source or "-"
            output += f"  {icon:<6} {target:<41} {source}\n"

        if not summary.verbose and summary.untracked > 0:
            output += (
                f"\n{summary.untracked} untracked files "
                "(use --verbose to show details)\n"
            )
        return output

    def structured_data(self) -> dict[str, Any]:
        """Return the listing as plain data for JSON or YAML output."""
        return asdict(self)