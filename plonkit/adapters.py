"""Narrow views of configuration for consumers that track system state."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from plonkit.model import PackageConfigItem
from plonkit.service import ConfigAdapter


@runtime_checkable
class PackageConfigReader(Protocol):
    """Something that lists configured packages for a manager."""

    def packages_for_manager(self, manager_name: str) -> list[PackageConfigItem]:
        ...


@runtime_checkable
class DotfileConfigReader(Protocol):
    """Something that maps dotfile sources to their targets."""

    def dotfile_targets(self) -> dict[str, str]:
        ...


class StatePackageConfigAdapter:
    """Package view of a ConfigAdapter."""

    def __init__(self, config_adapter: ConfigAdapter) -> None:
        self._config_adapter = config_adapter

    def packages_for_manager(self, manager_name: str) -> list[PackageConfigItem]:
        """Return configured packages for a manager as plain items."""
        return [
            PackageConfigItem(name=item.name)
            for item in self._config_adapter.packages_for_manager(manager_name)
        ]


class StateDotfileConfigAdapter:
    """Dotfile view of a ConfigAdapter."""

    def __init__(self, config_adapter: ConfigAdapter) -> None:
        self._config_adapter = config_adapter

    def dotfile_targets(self) -> dict[str, str]:
        """Return the discovered source-to-target dotfile mapping."""
        return self._config_adapter.dotfile_targets()

    def ignore_patterns(self) -> list[str]:
        """Return the resolved ignore patterns."""
        return self._config_adapter.config.resolve().ignore_patterns

    def expand_directories(self) -> list[str]:
        """Return the resolved directories to expand."""
        return self._config_adapter.config.resolve().expand_directories