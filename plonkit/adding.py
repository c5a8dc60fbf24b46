"""Results of adding dotfiles to the configuration, and their rendering."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

_KNOWN_ACTIONS = frozenset({"added", "updated", "would-add", "would-update"})

_ACTION_TEXT = {
    "would-add": "Would add dotfile to plonk configuration",
    "would-update": "Would update existing dotfile in plonk configuration",
    "updated": "Updated existing dotfile in plonk configuration",
    "added": "Added dotfile to plonk configuration",
}

_BATCH_INDICATORS = {
    "updated": "↻",
    "added": "+",
    "would-update": "↻",
    "would-add": "+",
}


def map_status_to_action(status: str) -> str:
    """Map an operation status to the action shown to the user."""
    return status if status in _KNOWN_ACTIONS else "failed"


def copy_file_with_attributes(
    src: str | os.PathLike[str], dst: str | os.PathLike[str]
) -> None:
    """Copy a file, giving a new copy the source's permissions and its timestamps.

    Raises OSError when the source cannot be read or the target written.
    """
    info = os.stat(src)
    with open(src, "rb") as handle:
        content = handle.read()
    fd = os.open(dst, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, info.st_mode & 0o7777)
    with os.fdopen(fd, "wb") as handle:
        handle.write(content)
    os.utime(dst, ns=(info.st_mtime_ns, info.st_mtime_ns))


@dataclass
class DotfileAddOutput:
    """The outcome of adding one dotfile."""

    source: str = ""
    destination: str = ""
    action: str = ""
    path: str = ""
    error: str = ""

    def table_output(self) -> str:
        """Render the result as human-friendly text."""
        output = "Dotfile Add\n===========\n\n"
        if self.action == "failed":
            return output + f"✗ {self.path} - {self.error}\n"

        action_text = _ACTION_TEXT.get(self.action, self.action)
        is_dry_run = self.action in ("would-add", "would-update")

        if is_dry_run:
            output += f"🔍 {action_text} (dry-run)\n"
        else:
            output += f"✅ {action_text}\n"
        output += f"   Source: {self.source}\n"
        output += f"   Destination: {self.destination}\n"
        output += f"   Original: {self.path}\n"

        if not is_dry_run:
            if self.action == "updated":
                output += (
                    "\nThe system file has been copied to your plonk config "
                    "directory, overwriting the previous version\n"
                )
            else:
                output += "\nThe dotfile has been copied to your plonk config directory\n"
        return output

    def structured_data(self) -> dict[str, Any]:
        """Return the result as plain data for JSON or YAML output."""
        data: dict[str, Any] = {
            "source": self.source,
            "destination": self.destination,
            "action": self.action,
            "path": self.path,
        }
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class DotfileBatchAddOutput:
    """The outcome of adding several dotfiles, such as a whole directory."""

    total_files: int = 0
    added_files: list[DotfileAddOutput] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def table_output(self) -> str:
        """Render the result as human-friendly text."""
        output = "Dotfile Directory Add\n=====================\n\n"

        actions = [file.action for file in self.added_files]
        added = actions.count("added")
        updated = actions.count("updated")
        would_add = actions.count("would-add")
        would_update = actions.count("would-update")
        is_dry_run = would_add > 0 or would_update > 0
        total = self.total_files

        if is_dry_run:
            if would_add > 0 and would_update > 0:
                output += (
                    f"🔍 Would process {total} files ({would_add} add, "
                    f"{would_update} update) - dry-run\n\n"
                )
            elif would_update > 0:
                output += f"🔍 Would update {total} files in plonk configuration - dry-run\n\n"
            else:
                output += f"🔍 Would add {total} files to plonk configuration - dry-run\n\n"
        elif added > 0 and updated > 0:
            output += f"✅ Processed {total} files ({added} added, {updated} updated)\n\n"
        elif updated > 0:
            output += f"✅ Updated {total} files in plonk configuration\n\n"
        else:
            output += f"✅ Added {total} files to plonk configuration\n\n"

        for file in self.added_files:
            indicator = _BATCH_INDICATORS.get(file.action, "")
            output += f"   {indicator} {file.destination} → {file.source}\n"

        if self.errors:
            output += "\n⚠️  Warnings:\n"
            for error in self.errors:
                output += f"   {error}\n"

        if not is_dry_run:
            output += "\nAll files have been copied to your plonk config directory\n"
        return output

    def structured_data(self) -> dict[str, Any]:
        """Return the result as plain data for JSON or YAML output."""
        data: dict[str, Any] = {
            "total_files": self.total_files,
            "added_files": [file.structured_data() for file in self.added_files],
        }
        if self.errors:
            data["errors"] = list(self.errors)
        return data