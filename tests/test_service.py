import io
import os

import pytest

from plonkit.model import Config, ConfigError, get_defaults
from plonkit.service import (
    ConfigAdapter,
    YAMLConfigService,
    atomic_write,
    get_or_create_config,
    load_config,
)


def _write_config(directory, content):
    path = directory / "plonk.yaml"
    path.write_text(content)
    return path


def test_load_from_file_nested_settings_are_ignored(tmp_path):
    path = _write_config(tmp_path, "\nsettings:\n  default_manager: homebrew\n")
    config = YAMLConfigService().load_config_from_file(path)
    assert config.default_manager is None
    assert config.resolve().default_manager == "homebrew"


def test_load_from_file_with_timeout_settings(tmp_path):
    path = _write_config(
        tmp_path,
        "\nsettings:\n  default_manager: homebrew\n  operation_timeout: 600\n"
        "  package_timeout: 300\n  dotfile_timeout: 120\n",
    )
    config = YAMLConfigService().load_config_from_file(path)
    assert config.operation_timeout is None
    assert config.resolve().operation_timeout == 300


def test_load_from_file_with_ignore_patterns(tmp_path):
    path = _write_config(
        tmp_path,
        "\nsettings:\n  default_manager: homebrew\n\nignore_patterns:\n"
        '  - .DS_Store\n  - "*.log"\n',
    )
    config = YAMLConfigService().load_config_from_file(path)
    assert config.ignore_patterns == [".DS_Store", "*.log"]


def test_load_from_file_missing_default_manager_uses_default(tmp_path):
    path = _write_config(tmp_path, "\nsettings:\n  operation_timeout: 600\n")
    config = YAMLConfigService().load_config_from_file(path)
    assert config.resolve().default_manager == "homebrew"


def test_service_load_config_from_directory(tmp_path):
    _write_config(tmp_path, "\nsettings:\n  default_manager: homebrew\n")
    config = YAMLConfigService().load_config(tmp_path)
    assert config.resolve().default_manager == "homebrew"


def test_load_config_from_file_not_found():
    with pytest.raises(ConfigError) as info:
        YAMLConfigService().load_config_from_file(
            "/path/that/does/not/exist/plonk.yaml"
        )
    assert info.value.code == "CONFIG_NOT_FOUND"


def test_save_config_to_writer():
    buffer = io.StringIO()
    YAMLConfigService().save_config_to_writer(buffer, Config(default_manager="homebrew"))
    assert "default_manager: homebrew" in buffer.getvalue()


def test_save_config_to_file_round_trip(tmp_path):
    service = YAMLConfigService()
    path = tmp_path / "plonk.yaml"
    service.save_config_to_file(path, Config(default_manager="homebrew"))
    loaded = service.load_config_from_file(path)
    assert loaded.default_manager == "homebrew"


def test_save_config_creates_directory(tmp_path):
    service = YAMLConfigService()
    target = tmp_path / "a" / "b"
    original = Config(default_manager="cargo", package_timeout=90, ignore_patterns=["x"])
    service.save_config(target, original)
    assert service.load_config(target) == original


def test_validate_config_valid_and_invalid():
    service = YAMLConfigService()
    assert service.validate_config(Config(default_manager="homebrew")).valid is True
    assert service.validate_config(Config(default_manager="invalid_manager")).valid is False


def test_load_config_from_reader_rejects_invalid_manager():
    with pytest.raises(ConfigError) as info:
        YAMLConfigService().load_config_from_reader(
            io.StringIO("default_manager: invalid_manager\n")
        )
    assert info.value.code == "CONFIG_VALIDATION"


def test_load_config_from_reader_accepts_bytes():
    config = YAMLConfigService().load_config_from_reader(
        io.BytesIO(b"default_manager: npm\n")
    )
    assert config.default_manager == "npm"


def test_validate_config_from_reader_raises_on_bad_yaml():
    with pytest.raises(ConfigError) as info:
        YAMLConfigService().validate_config_from_reader(io.StringIO("a: ["))
    assert info.value.code == "CONFIG_PARSE_FAILURE"


def test_default_config_values():
    config = YAMLConfigService().default_config()
    assert config.default_manager == "homebrew"
    assert config.ignore_patterns == list(get_defaults().ignore_patterns)
    assert config.operation_timeout == 300


def test_load_config_basic_structure(tmp_path):
    _write_config(
        tmp_path,
        "default_manager: homebrew\noperation_timeout: 600\n\nignore_patterns:\n"
        '  - .DS_Store\n  - "*.tmp"\n',
    )
    config = load_config(tmp_path)
    assert config.default_manager == "homebrew"
    assert config.operation_timeout == 600
    assert config.ignore_patterns == [".DS_Store", "*.tmp"]


def test_load_config_non_existent_file_gives_defaults(tmp_path):
    config = load_config(tmp_path)
    assert config == Config()
    assert config.resolve().default_manager == "homebrew"


def test_load_config_invalid_manager_raises(tmp_path):
    _write_config(tmp_path, "default_manager: invalid_manager\n")
    with pytest.raises(ConfigError) as info:
        load_config(tmp_path)
    assert "config validation failed" in str(info.value)


def test_load_config_missing_directory(tmp_path):
    config = load_config(tmp_path / "does-not-exist")
    assert config.resolve().default_manager == "homebrew"


def test_load_config_corrupted_file_raises(tmp_path):
    _write_config(tmp_path, "invalid: yaml: content: [")
    with pytest.raises(ConfigError) as info:
        load_config(tmp_path)
    assert info.value.code == "CONFIG_PARSE_FAILURE"


def test_get_or_create_config_creates_directory(tmp_path):
    target = tmp_path / "nested" / "plonk"
    config = get_or_create_config(target)
    assert target.is_dir()
    assert config.resolve().default_manager == "homebrew"


def test_atomic_write_replaces_content(tmp_path):
    path = tmp_path / "file.txt"
    path.write_text("old")
    atomic_write(path, "new content", 0o600)
    assert path.read_text() == "new content"
    assert os.stat(path).st_mode & 0o777 == 0o600
    assert sorted(p.name for p in tmp_path.iterdir()) == ["file.txt"]


def test_adapter_packages_for_known_managers():
    adapter = ConfigAdapter(Config())
    assert [adapter.packages_for_manager(m) for m in ("homebrew", "npm", "cargo")] == [
        [],
        [],
        [],
    ]


def test_adapter_packages_for_unknown_manager():
    with pytest.raises(ConfigError) as info:
        ConfigAdapter(Config()).packages_for_manager("unknown")
    assert info.value.item == "unknown"


def test_adapter_dotfile_targets_discovers_files(tmp_path, monkeypatch):
    monkeypatch.setenv("PLONK_DIR", str(tmp_path))
    (tmp_path / "zshrc").write_text("x")
    (tmp_path / "plonk.yaml").write_text("")
    (tmp_path / "plonk.lock").write_text("")
    (tmp_path / "notes.tmp").write_text("")
    (tmp_path / "config" / "nvim").mkdir(parents=True)
    (tmp_path / "config" / "nvim" / "init.lua").write_text("")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("")

    targets = ConfigAdapter(Config()).dotfile_targets()
    assert targets == {
        "zshrc": "~/.zshrc",
        os.path.join("config", "nvim", "init.lua"): "~/.config/nvim/init.lua",
    }


def test_adapter_dotfile_targets_custom_patterns(tmp_path, monkeypatch):
    monkeypatch.setenv("PLONK_DIR", str(tmp_path))
    (tmp_path / "scratchpad").write_text("")
    (tmp_path / ".git").mkdir()
    (tmp_path / ".git" / "HEAD").write_text("")

    targets = ConfigAdapter(Config(ignore_patterns=["scratch*"])).dotfile_targets()
    assert targets == {os.path.join(".git", "HEAD"): "~/..git/HEAD"}


def test_adapter_dotfile_targets_missing_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("PLONK_DIR", str(tmp_path / "absent"))
    assert ConfigAdapter(Config()).dotfile_targets() == {}