"""JSON schema and field documentation for the configuration file."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from plonkit.model import KNOWN_MANAGERS, Config


@dataclass
class SchemaProperty:
    """One property of a JSON schema."""

    type: str = ""
    description: str = ""
    items: SchemaProperty | None = None
    properties: dict[str, SchemaProperty] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)
    default: Any = None
    examples: list[Any] = field(default_factory=list)

    def _as_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.type:
            data["type"] = self.type
        if self.description:
            data["description"] = self.description
        if self.items is not None:
            data["items"] = self.items._as_dict()
        if self.properties:
            data["properties"] = {
                key: self.properties[key]._as_dict() for key in sorted(self.properties)
            }
        if self.required:
            data["required"] = list(self.required)
        if self.default is not None:
            data["default"] = self.default
        if self.examples:
            data["examples"] = list(self.examples)
        return data


@dataclass
class Schema:
    """A top-level JSON schema document."""

    schema: str
    type: str
    title: str
    description: str
    properties: dict[str, SchemaProperty] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    def to_json(self) -> str:
        """Serialise the schema as indented JSON."""
        data: dict[str, Any] = {
            "$schema": self.schema,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "properties": {
                key: self.properties[key]._as_dict() for key in sorted(self.properties)
            },
        }
        if self.required:
            data["required"] = list(self.required)
        return json.dumps(data, indent=2, ensure_ascii=False)


def generate_config_schema() -> Schema:
    """Build the JSON schema describing the configuration file."""
    schema = Schema(
        schema="https://json-schema.org/draft/2020-12/schema",
        type="object",
        title="Plonk Configuration",
        description="Configuration file for plonk package and dotfile manager",
    )
    schema.properties["default_manager"] = SchemaProperty(
        type="string",
        description="Default package manager to use when none is specified",
        examples=["homebrew", "npm", "cargo"],
    )
    schema.properties["operation_timeout"] = SchemaProperty(
        type="integer",
        description="Timeout in seconds for general operations (0 for unlimited, 1-3600 seconds)",
        default=60,
        examples=[60, 120, 300],
    )
    schema.properties["package_timeout"] = SchemaProperty(
        type="integer",
        description="Timeout in seconds for package operations (0 for unlimited, 1-1800 seconds)",
        default=300,
        examples=[120, 300, 600],
    )
    schema.properties["dotfile_timeout"] = SchemaProperty(
        type="integer",
        description="Timeout in seconds for dotfile operations (0 for unlimited, 1-600 seconds)",
        default=30,
        examples=[30, 60, 120],
    )
    schema.properties["expand_directories"] = SchemaProperty(
        type="array",
        description="Directories to expand in dot list output",
        items=SchemaProperty(type="string"),
        examples=[["~/.config", "~/.local"]],
    )
    schema.properties["ignore_patterns"] = SchemaProperty(
        type="array",
        description="Glob patterns for files to ignore during dotfile discovery",
        items=SchemaProperty(type="string"),
        default=[".git", ".DS_Store", "*.tmp"],
        examples=[[".git", ".DS_Store", "*.tmp", "node_modules"]],
    )
    return schema


def config_field_documentation() -> dict[str, str]:
    """Return human-readable documentation for every configuration field."""
    return {
        "default_manager": (
            "The default package manager to use when installing packages without specifying a manager.\n"
            'Supported values: "homebrew", "npm", "cargo"\n'
            'Example: default_manager: "homebrew"'
        ),
        "operation_timeout": (
            "Timeout in seconds for general operations.\n"
            "Set to 0 for unlimited timeout, or 1-3600 seconds.\n"
            "Default: 60 seconds\n"
            "Example: operation_timeout: 120"
        ),
        "package_timeout": (
            "Timeout in seconds for package manager operations.\n"
            "Set to 0 for unlimited timeout, or 1-1800 seconds.\n"
            "Default: 300 seconds\n"
            "Example: package_timeout: 600"
        ),
        "dotfile_timeout": (
            "Timeout in seconds for dotfile operations.\n"
            "Set to 0 for unlimited timeout, or 1-600 seconds.\n"
            "Default: 30 seconds\n"
            "Example: dotfile_timeout: 60"
        ),
        "expand_directories": (
            "Directories to expand when listing dotfiles.\n"
            "Useful for organizing dotfile output by directory.\n"
            "Example:\n"
            "expand_directories:\n"
            "  - ~/.config\n"
            "  - ~/.local"
        ),
        "ignore_patterns": (
            "Glob patterns for files and directories to ignore during dotfile discovery.\n"
            "Useful for excluding temporary files, version control directories, etc.\n"
            'Default: [".git", ".DS_Store", "*.tmp"]\n'
            "Example:\n"
            "ignore_patterns:\n"
            "  - .git\n"
            "  - .DS_Store\n"
            '  - "*.tmp"\n'
            "  - node_modules"
        ),
    }


def validate_against_schema(cfg: Config) -> list[str]:
    """Check a configuration against the schema limits and return the problems found."""
    problems: list[str] = []
    if cfg.default_manager is not None and cfg.default_manager not in KNOWN_MANAGERS:
        problems.append("default_manager must be one of: " + ", ".join(KNOWN_MANAGERS))

    limits = (
        ("operation_timeout", 3600),
        ("package_timeout", 1800),
        ("dotfile_timeout", 600),
    )
    for name, upper in limits:
        value = getattr(cfg, name)
        if value is not None and not 0 <= value <= upper:
            problems.append(f"{name} must be between 0 and {upper} seconds")
    return problems