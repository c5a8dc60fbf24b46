"""Combined result of syncing packages and dotfiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from plonkit.applying import ApplyOutput, DotfileApplyOutput


def sync_scope(packages_only: bool, dotfiles_only: bool) -> str:
    """Describe what a sync covers: packages, dotfiles or all."""
    if packages_only:
        return "packages"
    if dotfiles_only:
        return "dotfiles"
    return "all"


@dataclass
class CombinedSyncOutput:
    """The outcome of a sync, with the package and dotfile parts it ran."""

    dry_run: bool = False
    scope: str = "all"
    packages: ApplyOutput | None = None
    dotfiles: DotfileApplyOutput | None = None

    def table_output(self) -> str:
        """Render the result as human-friendly text."""
        if self.dry_run:
            output = "Plonk Sync (Dry Run)\n====================\n\n"
        else:
            output = "Plonk Sync\n==========\n\n"

        if self.scope == "packages":
            output += "📦 Syncing packages only\n\n"
        elif self.scope == "dotfiles":
            output += "📄 Syncing dotfiles only\n\n"
        else:
            output += "📦📄 Syncing packages and dotfiles\n\n"

        if isinstance(self.packages, ApplyOutput):
            pkg = self.packages
            if self.dry_run:
                output += f"📦 Packages: {pkg.total_would_install} would be installed\n"
            else:
                output += (
                    f"📦 Packages: {pkg.total_installed} installed, "
                    f"{pkg.total_failed} failed\n"
                )

        if isinstance(self.dotfiles, DotfileApplyOutput):
            dot = self.dotfiles
            if self.dry_run:
                output += (
                    f"📄 Dotfiles: {dot.deployed} would be deployed, "
                    f"{dot.skipped} would be skipped\n"
                )
            else:
                output += f"📄 Dotfiles: {dot.deployed} deployed, {dot.skipped} skipped\n"

        if self.dry_run:
            output += "\nUse 'plonk sync' without --dry-run to apply these changes\n"
        return output

    def structured_data(self) -> dict[str, Any]:
        """Return the result as plain data for JSON or YAML output."""
        data: dict[str, Any] = {"dry_run": self.dry_run, "scope": self.scope}
        if self.packages is not None:
            data["packages"] = self.packages.structured_data()
        if self.dotfiles is not None:
            data["dotfiles"] = self.dotfiles.structured_data()
        return data