"""Configuration model: user overrides, defaults and the resolved view."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

KNOWN_MANAGERS = ("homebrew", "npm", "cargo")
CONFIG_FILE_NAME = "plonk.yaml"


class ConfigError(Exception):
    """Raised when configuration cannot be read, parsed, validated or written."""

    def __init__(
        self,
        message: str,
        *,
        code: str = "",
        operation: str = "",
        item: str = "",
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.operation = operation
        self.item = item
        self.metadata = dict(metadata or {})

    def __str__(self) -> str:
        text = self.message
        if self.__cause__ is not None:
            text = f"{text}: {self.__cause__}"
        return text


@dataclass(frozen=True)
class PackageConfigItem:
    """A package entry as seen by configuration consumers."""

    name: str


@dataclass(frozen=True)
class ConfigDefaults:
    """The built-in default value of every setting."""

    default_manager: str
    operation_timeout: int
    package_timeout: int
    dotfile_timeout: int
    expand_directories: tuple[str, ...]
    ignore_patterns: tuple[str, ...]


def get_defaults() -> ConfigDefaults:
    """Return the default configuration values."""
    return ConfigDefaults(
        default_manager="homebrew",
        operation_timeout=300,
        package_timeout=180,
        dotfile_timeout=60,
        expand_directories=(
            ".config",
            ".ssh",
            ".aws",
            ".kube",
            ".docker",
            ".gnupg",
            ".local",
        ),
        ignore_patterns=(
            ".DS_Store",
            ".git",
            "*.backup",
            "*.tmp",
            "*.swp",
            "plonk.lock",
        ),
    )


@dataclass
class ResolvedConfig:
    """Final configuration values after merging user overrides with defaults."""

    default_manager: str
    operation_timeout: int
    package_timeout: int
    dotfile_timeout: int
    expand_directories: list[str]
    ignore_patterns: list[str]


def _as_string(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(
        f"cannot read {key}: expected a string, got {type(value).__name__}",
        code="CONFIG_PARSE_FAILURE",
        operation="parse",
        item=key,
    )


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise ConfigError(
        f"cannot read {key}: expected an integer, got {value!r}",
        code="CONFIG_PARSE_FAILURE",
        operation="parse",
        item=key,
    )


def _as_string_list(key: str, value: Any) -> list[str]:
    if not isinstance(value, list):
        raise ConfigError(
            f"cannot read {key}: expected a list, got {type(value).__name__}",
            code="CONFIG_PARSE_FAILURE",
            operation="parse",
            item=key,
        )
    return [_as_string(key, element) for element in value]


@dataclass
class Config:
    """User configuration overrides; unset fields fall back to defaults."""

    default_manager: str | None = None
    operation_timeout: int | None = None
    package_timeout: int | None = None
    dotfile_timeout: int | None = None
    expand_directories: list[str] | None = None
    ignore_patterns: list[str] = field(default_factory=list)

    def resolve(self) -> ResolvedConfig:
        """Merge these overrides with the defaults."""
        defaults = get_defaults()

        def pick(value: Any, default: Any) -> Any:
            return default if value is None else value

        return ResolvedConfig(
            default_manager=pick(self.default_manager, defaults.default_manager),
            operation_timeout=pick(self.operation_timeout, defaults.operation_timeout),
            package_timeout=pick(self.package_timeout, defaults.package_timeout),
            dotfile_timeout=pick(self.dotfile_timeout, defaults.dotfile_timeout),
            expand_directories=list(
                pick(self.expand_directories, defaults.expand_directories)
            ),
            ignore_patterns=list(self.ignore_patterns or defaults.ignore_patterns),
        )

    @classmethod
    def from_mapping(cls, data: Any) -> "Config":
        """Build a Config from decoded YAML; unknown keys are ignored."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigError(
                f"cannot read configuration: expected a mapping, got {type(data).__name__}",
                code="CONFIG_PARSE_FAILURE",
                operation="parse",
            )

        config = cls()
        if data.get("default_manager") is not None:
            config.default_manager = _as_string(
                "default_manager", data["default_manager"]
            )
        for key in ("operation_timeout", "package_timeout", "dotfile_timeout"):
            if data.get(key) is not None:
                setattr(config, key, _as_int(key, data[key]))
        if data.get("expand_directories") is not None:
            config.expand_directories = _as_string_list(
                "expand_directories", data["expand_directories"]
            )
        if data.get("ignore_patterns") is not None:
            config.ignore_patterns = _as_string_list(
                "ignore_patterns", data["ignore_patterns"]
            )
        return config

    def to_mapping(self) -> dict[str, Any]:
        """Return the set fields as a plain mapping, ready for YAML output."""
        result: dict[str, Any] = {}
        if self.default_manager is not None:
            result["default_manager"] = self.default_manager
        for key in ("operation_timeout", "package_timeout", "dotfile_timeout"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.expand_directories is not None:
            result["expand_directories"] = list(self.expand_directories)
        if self.ignore_patterns:
            result["ignore_patterns"] = list(self.ignore_patterns)
        return result


def source_to_target(source: str) -> str:
    """Map a path in the config directory to its home-relative target."""
    return "~/." + source


def target_to_source(target: str) -> str:
    """Map a home-relative target back to its path in the config directory."""
    if len(target) > 3 and target.startswith("~/."):
        return target[3:]
    if len(target) > 2 and target.startswith("~/"):
        return target[2:]
    return target


def default_config_directory() -> str:
    """Return the config directory, honouring the PLONK_DIR variable."""
    env_dir = os.environ.get("PLONK_DIR", "")
    home = os.environ.get("HOME", "")
    if env_dir:
        if env_dir.startswith("~/"):
            return os.path.join(home, env_dir[2:])
        return env_dir
    return os.path.join(home, ".config", "plonk")


class _BadPattern(ValueError):
    pass


def _class_char(pattern: str, pos: int) -> tuple[str, int]:
    if pos >= len(pattern) or pattern[pos] in "-]":
        raise _BadPattern(pattern)
    char = pattern[pos]
    if char == "\\":
        pos += 1
        if pos >= len(pattern):
            raise _BadPattern(pattern)
        char = pattern[pos]
    return char, pos + 1


def _glob_regex(pattern: str) -> re.Pattern[str]:
    parts: list[str] = []
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        if char == "*":
            parts.append("[^/]*")
            pos += 1
        elif char == "?":
            parts.append("[^/]")
            pos += 1
        elif char == "\\":
            if pos + 1 >= len(pattern):
                raise _BadPattern(pattern)
            parts.append(re.escape(pattern[pos + 1]))
            pos += 2
        elif char == "[":
            pos += 1
            negate = pos < len(pattern) and pattern[pos] == "^"
            if negate:
                pos += 1
            ranges: list[str] = []
            while True:
                if pos < len(pattern) and pattern[pos] == "]" and ranges:
                    pos += 1
                    break
                low, pos = _class_char(pattern, pos)
                high = low
                if pos < len(pattern) and pattern[pos] == "-":
                    high, pos = _class_char(pattern, pos + 1)
                    if high < low:
                        raise _BadPattern(pattern)
                ranges.append(f"{re.escape(low)}-{re.escape(high)}")
            parts.append(("[^" if negate else "[") + "".join(ranges) + "]")
        else:
            parts.append(re.escape(char))
            pos += 1
    return re.compile("".join(parts), re.DOTALL)


def _glob_match(pattern: str, name: str) -> bool:
    """Shell-style match where wildcards never cross '/'; bad patterns never match."""
    try:
        return _glob_regex(pattern).fullmatch(name) is not None
    except _BadPattern:
        return False


def should_skip_dotfile(rel_path: str, is_dir: bool, ignore_patterns: list[str]) -> bool:
    """Decide whether a path under the config directory is left out of discovery."""
    if rel_path == CONFIG_FILE_NAME:
        return True

    name = os.path.basename(rel_path.rstrip("/")) or rel_path
    for pattern in ignore_patterns:
        if pattern in (name, rel_path):
            return True
        if _glob_match(pattern, name) or _glob_match(pattern, rel_path):
            return True
        if pattern.endswith("/") and is_dir:
            dir_pattern = pattern[:-1]
            if dir_pattern in (name, rel_path):
                return True
        if rel_path.startswith(pattern + "/"):
            return True
    return False