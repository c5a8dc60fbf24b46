"""Loading, saving and validating YAML configuration, plus dotfile discovery."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import IO, Any, Mapping

import yaml

from plonkit.model import (
    CONFIG_FILE_NAME,
    KNOWN_MANAGERS,
    Config,
    ConfigError,
    PackageConfigItem,
    default_config_directory,
    get_defaults,
    should_skip_dotfile,
    source_to_target,
)
from plonkit.validator import SimpleValidator, ValidationResult

_DIR_MODE = 0o750
_FILE_MODE = 0o644


def _parse_yaml(data: bytes | str) -> Config:
    """Decode YAML text into a Config, raising ConfigError on any problem."""
    try:
        decoded = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise ConfigError(
            "failed to parse YAML", code="CONFIG_PARSE_FAILURE", operation="load"
        ) from exc
    try:
        return Config.from_mapping(decoded)
    except ConfigError as exc:
        raise ConfigError(
            "failed to parse YAML", code="CONFIG_PARSE_FAILURE", operation="load"
        ) from exc


def _dump_yaml(config: Config) -> str:
    return yaml.safe_dump(
        config.to_mapping(),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def _check_valid(
    result: ValidationResult, metadata: Mapping[str, Any] | None = None
) -> None:
    if result.valid:
        return
    raise ConfigError(
        "config validation failed: " + "; ".join(result.errors),
        code="CONFIG_VALIDATION",
        operation="validate",
        metadata={"errors": list(result.errors), **dict(metadata or {})},
    )


def load_config(config_dir: str | os.PathLike[str]) -> Config:
    """Load plonk.yaml from a directory; a missing file gives an empty Config."""
    config_path = os.path.join(config_dir, CONFIG_FILE_NAME)
    try:
        data = Path(config_path).read_bytes()
    except FileNotFoundError:
        config = Config()
    except OSError as exc:
        raise ConfigError(
            "failed to load config",
            code="CONFIG_PARSE_FAILURE",
            operation="load",
            metadata={"path": config_path},
        ) from exc
    else:
        try:
            config = _parse_yaml(data)
        except ConfigError as exc:
            raise ConfigError(
                "failed to load config",
                code="CONFIG_PARSE_FAILURE",
                operation="load",
                metadata={"path": config_path},
            ) from exc

    _check_valid(
        SimpleValidator().validate_config(config), {"config_dir": str(config_dir)}
    )
    return config


def get_or_create_config(config_dir: str | os.PathLike[str]) -> Config:
    """Load the configuration and make sure its directory exists for later saves."""
    config = load_config(config_dir)
    try:
        os.makedirs(config_dir, mode=_DIR_MODE, exist_ok=True)
    except OSError as exc:
        raise ConfigError(
            "failed to create config directory",
            code="DIRECTORY_CREATE",
            operation="create",
            item=str(config_dir),
        ) from exc
    return config


def atomic_write(
    path: str | os.PathLike[str], data: bytes | str, mode: int = _FILE_MODE
) -> None:
    """Write data to path through a temporary file that replaces it in one step."""
    target = Path(path)
    payload = data.encode("utf-8") if isinstance(data, str) else data
    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class YAMLConfigService:
    """Reads, writes and validates configuration stored as YAML."""

    def __init__(self) -> None:
        self._validator = SimpleValidator()

    def load_config(self, config_dir: str | os.PathLike[str]) -> Config:
        """Load plonk.yaml from a directory."""
        return load_config(config_dir)

    def load_config_from_file(self, file_path: str | os.PathLike[str]) -> Config:
        """Load configuration from a specific file; the file must exist."""
        try:
            data = Path(file_path).read_bytes()
        except OSError as exc:
            raise ConfigError(
                "failed to read config file",
                code="CONFIG_NOT_FOUND",
                operation="load",
                item=str(file_path),
            ) from exc
        return self._load_from_data(data)

    def load_config_from_reader(self, reader: IO[Any]) -> Config:
        """Load configuration from a readable text or binary stream."""
        try:
            data = reader.read()
        except OSError as exc:
            raise ConfigError(
                "failed to read config data",
                code="CONFIG_PARSE_FAILURE",
                operation="load",
            ) from exc
        return self._load_from_data(data)

    def _load_from_data(self, data: bytes | str) -> Config:
        config = _parse_yaml(data)
        _check_valid(self.validate_config(config))
        return config

    def save_config(self, config_dir: str | os.PathLike[str], config: Config) -> None:
        """Save configuration as plonk.yaml inside a directory, creating it if needed."""
        try:
            os.makedirs(config_dir, mode=_DIR_MODE, exist_ok=True)
        except OSError as exc:
            raise ConfigError(
                "failed to create config directory",
                code="DIRECTORY_CREATE",
                operation="save",
                item=str(config_dir),
            ) from exc
        self.save_config_to_file(os.path.join(config_dir, CONFIG_FILE_NAME), config)

    def save_config_to_file(
        self, file_path: str | os.PathLike[str], config: Config
    ) -> None:
        """Save configuration to a file atomically."""
        text = _dump_yaml(config)
        try:
            atomic_write(file_path, text, _FILE_MODE)
        except OSError as exc:
            raise ConfigError(
                "failed to write config file",
                code="FILE_IO",
                operation="save",
                item=str(file_path),
            ) from exc

    def save_config_to_writer(self, writer: IO[str], config: Config) -> None:
        """Write configuration as YAML to a text stream."""
        text = _dump_yaml(config)
        try:
            writer.write(text)
        except OSError as exc:
            raise ConfigError(
                "failed to write config data", code="FILE_IO", operation="save"
            ) from exc

    def validate_config(self, config: Config) -> ValidationResult:
        """Validate a configuration object."""
        return self._validator.validate_config(config)

    def validate_config_from_reader(self, reader: IO[Any]) -> None:
        """Raise ConfigError unless the stream holds a valid configuration."""
        config = self.load_config_from_reader(reader)
        _check_valid(self.validate_config(config))

    def default_config(self) -> Config:
        """Return a configuration with every field set to its default."""
        defaults = get_defaults()
        return Config(
            default_manager=defaults.default_manager,
            operation_timeout=defaults.operation_timeout,
            package_timeout=defaults.package_timeout,
            dotfile_timeout=defaults.dotfile_timeout,
            expand_directories=list(defaults.expand_directories),
            ignore_patterns=list(defaults.ignore_patterns),
        )


class ConfigAdapter:
    """Domain views over a loaded configuration."""

    def __init__(self, config: Config) -> None:
        self.config = config

    def dotfile_targets(self) -> dict[str, str]:
        """Discover dotfiles in the config directory, mapping source to target."""
        root = default_config_directory()
        patterns = self.config.resolve().ignore_patterns
        result: dict[str, str] = {}

        if not os.path.isdir(root) or should_skip_dotfile(".", True, patterns):
            return result

        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = os.path.relpath(dirpath, root)

            def relative(name: str) -> str:
                return name if rel_dir == "." else os.path.join(rel_dir, name)

            kept: list[str] = []
            for name in sorted(dirnames):
                rel = relative(name)
                if os.path.islink(os.path.join(dirpath, name)):
                    # Links are not followed; they count as entries of their own.
                    if not should_skip_dotfile(rel, False, patterns):
                        result[rel] = source_to_target(rel)
                    continue
                if not should_skip_dotfile(rel, True, patterns):
                    kept.append(name)
            dirnames[:] = kept

            for name in filenames:
                rel = relative(name)
                if not should_skip_dotfile(rel, False, patterns):
                    result[rel] = source_to_target(rel)
        return result

    def packages_for_manager(self, manager_name: str) -> list[PackageConfigItem]:
        """Return configured packages for a manager; packages live in the lock file."""
        if manager_name in KNOWN_MANAGERS:
            return []
        raise ConfigError(
            f"unknown package manager: {manager_name}",
            code="INVALID_INPUT",
            operation="get-packages",
            item=manager_name,
        )