"""Validation of configuration objects and raw YAML configuration text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from plonkit.model import KNOWN_MANAGERS, Config, ConfigError

# Field rules in declaration order; only the first failing rule of a field is reported.
_FIELD_RULES: tuple[tuple[str, tuple[tuple[str, Any], ...]], ...] = (
    ("default_manager", (("oneof", KNOWN_MANAGERS),)),
    ("operation_timeout", (("min", 0), ("max", 3600))),
    ("package_timeout", (("min", 0), ("max", 1800))),
    ("dotfile_timeout", (("min", 0), ("max", 600))),
)

_PACKAGE_NAME_EXTRA = frozenset("-_.@/")


@dataclass
class ValidationResult:
    """Outcome of validating a configuration."""

    valid: bool = True
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def summary(self) -> str:
        """Return a one-line human-readable summary."""
        if self.valid:
            return "Configuration is valid"
        parts = []
        if self.errors:
            parts.append(f"{len(self.errors)} errors")
        if self.warnings:
            parts.append(f"{len(self.warnings)} warnings")
        return "Configuration has " + ", ".join(parts)

    def messages(self) -> list[str]:
        """Return every error and warning, each with its severity prefix."""
        return [f"ERROR: {error}" for error in self.errors] + [
            f"WARNING: {warning}" for warning in self.warnings
        ]


def _rule_fails(rule: str, param: Any, value: Any) -> bool:
    if rule == "oneof":
        return value not in param
    if rule == "min":
        return value < param
    if rule == "max":
        return value > param
    raise ValueError(f"unknown validation rule: {rule}")


def _format_error(name: str, rule: str, param: Any, value: Any) -> str:
    if rule == "oneof":
        return f"{name} must be one of: {' '.join(param)} (got: {value})"
    return f"{name} validation failed for tag '{rule}': {value}"


class SimpleValidator:
    """Checks configuration values against their allowed ranges and choices."""

    def validate_config(self, config: Config) -> ValidationResult:
        """Validate a parsed configuration."""
        result = ValidationResult()
        for name, rules in _FIELD_RULES:
            value = getattr(config, name)
            # Unset and empty values are not checked.
            if value is None or value == "" or value == 0:
                continue
            for rule, param in rules:
                if _rule_fails(rule, param, value):
                    result.valid = False
                    result.errors.append(_format_error(name, rule, param, value))
                    break

        if config.default_manager == "npm":
            result.warnings.append(
                "Using npm as default manager may be slower than homebrew for most packages"
            )
        return result

    def validate_config_from_yaml(self, content: bytes | str) -> ValidationResult:
        """Validate YAML text: syntax first, then structure, then values."""
        result = ValidationResult()
        try:
            validate_yaml(content)
        except ConfigError as exc:
            result.valid = False
            result.errors.append(f"YAML syntax error: {exc}")
            return result

        try:
            config = Config.from_mapping(yaml.safe_load(content))
        except (ConfigError, yaml.YAMLError) as exc:
            result.valid = False
            result.errors.append(f"Failed to parse config: {exc}")
            return result

        checked = self.validate_config(config)
        result.valid = checked.valid
        result.errors.extend(checked.errors)
        result.warnings.extend(checked.warnings)
        return result


def validate_yaml(content: bytes | str) -> None:
    """Raise ConfigError if the content is not well-formed YAML; empty text is fine."""
    text = content.decode("utf-8") if isinstance(content, bytes) else content
    if not text.strip():
        return
    try:
        yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(
            str(exc), code="CONFIG_PARSE_FAILURE", operation="validate"
        ) from None


def validate_package_name(name: str) -> None:
    """Raise ValueError unless the name uses only letters, digits and - _ . @ /."""
    trimmed = name.strip()
    if not trimmed:
        raise ValueError("package name cannot be empty")
    for char in trimmed:
        if not (
            ("a" <= char <= "z")
            or ("A" <= char <= "Z")
            or ("0" <= char <= "9")
            or char in _PACKAGE_NAME_EXTRA
        ):
            raise ValueError(
                f"invalid package name contains invalid character {char!r}: {name!r}"
            )


def validate_file_path(path: str) -> None:
    """Raise ValueError unless the path is non-empty, relative and has no spaces."""
    trimmed = path.strip()
    if not trimmed:
        raise ValueError("file path cannot be empty")
    if trimmed.startswith("/"):
        raise ValueError(f"file path cannot be absolute: {path!r}")
    if " " in trimmed:
        raise ValueError(f"file path cannot contain spaces: {path!r}")