"""Results of applying package and dotfile configuration, and their rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

_DRY_RUN_ICONS = {"would-deploy": "🚀", "skipped": "⏭️", "error": "❌"}
_APPLY_ICONS = {"deployed": "✅", "skipped": "⏭️", "error": "❌"}
_UNKNOWN_ICON = "❓"


@dataclass
class PackageApplyResult:
    """The outcome for one package."""

    name: str
    status: str
    error: str = ""

    def structured_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "status": self.status}
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class ManagerApplyResult:
    """The outcome for every package of one manager."""

    name: str
    missing_count: int = 0
    packages: list[PackageApplyResult] = field(default_factory=list)

    def structured_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "missing_count": self.missing_count,
            "packages": [package.structured_data() for package in self.packages],
        }


@dataclass
class ApplyOutput:
    """The outcome of applying package configuration."""

    dry_run: bool = False
    total_missing: int = 0
    total_installed: int = 0
    total_failed: int = 0
    total_would_install: int = 0
    managers: list[ManagerApplyResult] = field(default_factory=list)

    def table_output(self) -> str:
        """Return the table text; package summaries are printed by the command itself."""
        return ""

    def structured_data(self) -> dict[str, Any]:
        """Return the result as plain data for JSON or YAML output."""
        return {
            "dry_run": self.dry_run,
            "total_missing": self.total_missing,
            "total_installed": self.total_installed,
            "total_failed": self.total_failed,
            "total_would_install": self.total_would_install,
            "managers": [manager.structured_data() for manager in self.managers],
        }


@dataclass
class DotfileAction:
    """A single dotfile deployment action."""

    source: str
    destination: str
    status: str
    reason: str = ""

    def structured_data(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "source": self.source,
            "destination": self.destination,
            "status": self.status,
        }
        if self.reason:
            data["reason"] = self.reason
        return data


@dataclass
class DotfileApplyOutput:
    """The outcome of applying dotfile configuration."""

    dry_run: bool = False
    deployed: int = 0
    skipped: int = 0
    actions: list[DotfileAction] = field(default_factory=list)

    def _render_actions(self, icons: dict[str, str]) -> str:
        if not self.actions:
            return ""
        lines = ["\nActions:\n"]
        for action in self.actions:
            icon = icons.get(action.status, _UNKNOWN_ICON)
            line = f"  {icon} {action.source} -> {action.destination}"
            if action.reason:
                line += f" ({action.reason})"
            lines.append(line + "\n")
        return "".join(lines)

    def table_output(self) -> str:
        """Render the result as human-friendly text."""
        if self.dry_run:
            output = "Dotfile Apply (Dry Run)\n========================\n\n"
            if self.deployed == 0 and self.skipped == 0:
                return output + "No dotfiles configured\n"
            output += f"Would deploy: {self.deployed}\n"
            output += f"Would skip: {self.skipped}\n"
            return output + self._render_actions(_DRY_RUN_ICONS)

        output = "Dotfile Apply\n=============\n\n"
        if self.deployed == 0 and self.skipped == 0:
            return output + "No dotfiles configured\n"
        if self.deployed > 0:
            output += f"✅ Deployed: {self.deployed} dotfiles\n"
        if self.skipped > 0:
            output += f"⏭️ Skipped: {self.skipped} dotfiles\n"
        return output + self._render_actions(_APPLY_ICONS)

    def structured_data(self) -> dict[str, Any]:
        """Return the result as plain data for JSON or YAML output."""
        return {
            "dry_run": self.dry_run,
            "deployed": self.deployed,
            "skipped": self.skipped,
            "actions": [action.structured_data() for action in self.actions],
        }