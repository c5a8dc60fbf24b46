import pytest

from plonkit.model import Config, ConfigError
from plonkit.validator import (
    SimpleValidator,
    ValidationResult,
    validate_file_path,
    validate_package_name,
    validate_yaml,
)


@pytest.mark.parametrize(
    "config",
    [
        Config(default_manager="homebrew"),
        Config(default_manager="homebrew", ignore_patterns=[".DS_Store", "*.log"]),
    ],
)
def test_valid_configs(config):
    result = SimpleValidator().validate_config(config)
    assert result.valid
    assert result.errors == []


@pytest.mark.parametrize(
    "config, expect_error",
    [
        (Config(), ""),
        (Config(default_manager="invalid"), "must be one of: homebrew npm"),
        (Config(default_manager="homebrew", operation_timeout=-1), "min"),
    ],
)
def test_invalid_configs(config, expect_error):
    result = SimpleValidator().validate_config(config)
    if not expect_error:
        assert result.valid
        assert result.errors == []
    else:
        assert not result.valid
        assert any(expect_error.lower() in err.lower() for err in result.errors)


def test_max_timeout_rejected():
    result = SimpleValidator().validate_config(Config(dotfile_timeout=601))
    assert not result.valid
    assert any("max" in err for err in result.errors)


@pytest.mark.parametrize(
    "text",
    [
        "default_manager: homebrew",
        "default_manager: homebrew\noperation_timeout: 600\n\nignore_patterns:\n"
        '  - .DS_Store\n  - "*.log"',
    ],
)
def test_valid_yaml(text):
    result = SimpleValidator().validate_config_from_yaml(text.encode())
    assert result.valid, result.errors


@pytest.mark.parametrize(
    "text, expect_error",
    [
        ("default_manager: homebrew\n    invalid_indent: value", "YAML syntax error"),
        ("default_manager: invalid", "must be one of"),
        ("default_manager: homebrew\noperation_timeout: -1", "min"),
    ],
)
def test_invalid_yaml(text, expect_error):
    result = SimpleValidator().validate_config_from_yaml(text.encode())
    assert not result.valid
    assert any(expect_error.lower() in err.lower() for err in result.errors)


def test_yaml_with_wrong_structure_fails_to_parse():
    result = SimpleValidator().validate_config_from_yaml("- a\n- b\n")
    assert not result.valid
    assert result.errors[0].startswith("Failed to parse config")


def test_npm_warning():
    result = SimpleValidator().validate_config(Config(default_manager="npm"))
    assert result.warnings
    assert "npm as default manager may be slower" in result.warnings[0]
    assert result.valid


@pytest.mark.parametrize(
    "result, expect",
    [
        (ValidationResult(valid=True), "Configuration is valid"),
        (ValidationResult(valid=False, errors=["error1", "error2"]), "2 errors"),
        (
            ValidationResult(valid=False, errors=["error1"], warnings=["warning1"]),
            "1 errors, 1 warnings",
        ),
    ],
)
def test_summary(result, expect):
    assert expect in result.summary()


def test_messages_order_and_prefixes():
    result = ValidationResult(valid=False, errors=["error1"], warnings=["warning1"])
    assert result.messages() == ["ERROR: error1", "WARNING: warning1"]


def test_validate_yaml_empty_and_bad():
    validate_yaml(b"   \n")
    with pytest.raises(ConfigError):
        validate_yaml("invalid: yaml: content: [")


@pytest.mark.parametrize("name", ["ripgrep", "@scope/pkg", "node_js-1.2"])
def test_package_name_accepted(name):
    assert validate_package_name(name) is None


@pytest.mark.parametrize("name", ["", "   ", "bad name", "pkg!"])
def test_package_name_rejected(name):
    with pytest.raises(ValueError):
        validate_package_name(name)


def test_file_path_rules():
    assert validate_file_path("config/nvim/init.lua") is None
    with pytest.raises(ValueError, match="absolute"):
        validate_file_path("/etc/hosts")
    with pytest.raises(ValueError, match="spaces"):
        validate_file_path("my file")
    with pytest.raises(ValueError, match="empty"):
        validate_file_path("  ")