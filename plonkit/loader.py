"""Consistent loading and saving of configuration with zero-config behaviour."""

from __future__ import annotations

import os

from plonkit.model import CONFIG_FILE_NAME, Config, ConfigError, default_config_directory
from plonkit.service import YAMLConfigService, get_or_create_config, load_config
from plonkit.validator import SimpleValidator, ValidationResult

_DIR_MODE = 0o750


class ConfigLoader:
    """Loads the configuration of one directory the same way for every command."""

    def __init__(self, config_dir: str | os.PathLike[str]) -> None:
        self.config_dir = os.fspath(config_dir)
        self._validator = SimpleValidator()

    def load(self) -> Config:
        """Load the configuration; a missing file gives an empty Config.

        Raises ConfigError on parse or validation failures.
        """
        return load_config(self.config_dir)

    def load_or_default(self) -> Config:
        """Load the configuration, or return an empty Config on any error."""
        try:
            return self.load()
        except ConfigError:
            return Config()

    def load_or_create(self) -> Config:
        """Load the configuration and make sure the config directory exists."""
        return get_or_create_config(self.config_dir)

    def ensure_config_dir(self) -> None:
        """Create the configuration directory if it does not exist."""
        os.makedirs(self.config_dir, mode=_DIR_MODE, exist_ok=True)

    def config_path(self) -> str:
        """Return the full path of the plonk.yaml file."""
        return os.path.join(self.config_dir, CONFIG_FILE_NAME)

    def exists(self) -> bool:
        """Tell whether the configuration file exists."""
        return os.path.exists(self.config_path())

    def validate(self) -> ValidationResult:
        """Validate the configuration stored in the directory."""
        try:
            config = self.load()
        except ConfigError as exc:
            return ValidationResult(valid=False, errors=[str(exc)])
        return self._validator.validate_config(config)


def default_config_loader() -> ConfigLoader:
    """Return a loader for the default configuration directory."""
    return ConfigLoader(default_config_directory())


def load_config_with_defaults(config_dir: str | os.PathLike[str]) -> Config:
    """Load the configuration of a directory, falling back to an empty Config."""
    return ConfigLoader(config_dir).load_or_default()


class ConfigManager:
    """High-level configuration operations for one directory."""

    def __init__(self, config_dir: str | os.PathLike[str]) -> None:
        self._loader = ConfigLoader(config_dir)
        self._service = YAMLConfigService()

    @property
    def config_dir(self) -> str:
        return self._loader.config_dir

    def load(self) -> Config:
        """Load the configuration, raising ConfigError on parse or validation failures."""
        return self._loader.load()

    def load_or_default(self) -> Config:
        """Load the configuration, or return an empty Config on any error."""
        return self._loader.load_or_default()

    def load_or_create(self) -> Config:
        """Load the configuration and make sure the config directory exists."""
        return self._loader.load_or_create()

    def save(self, cfg: Config) -> None:
        """Save the configuration into the config directory."""
        try:
            self._loader.ensure_config_dir()
        except OSError as exc:
            raise ConfigError(
                "failed to create config directory",
                code="DIRECTORY_CREATE",
                operation="save",
                item=self._loader.config_dir,
            ) from exc
        self._service.save_config(self._loader.config_dir, cfg)

    def create_default(self) -> None:
        """Write an empty configuration file."""
        self.save(Config())


def default_config_manager() -> ConfigManager:
    """Return a manager for the default configuration directory."""
    return ConfigManager(default_config_directory())