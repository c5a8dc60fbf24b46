# plonkit

The configuration and reporting core of a package and dotfile manager. It
reads and writes a `plonk.yaml` configuration file, validates it, merges it
with the built-in defaults, and finds the dotfiles kept in the configuration
directory. It also builds the text and structured summaries for listing,
adding, applying and syncing dotfiles and packages.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Configuration

Every setting is optional. Anything left out takes its default value:

```yaml
default_manager: homebrew      # homebrew, npm or cargo
operation_timeout: 300         # seconds, 0-3600 (0 means unlimited)
package_timeout: 180           # seconds, 0-1800
dotfile_timeout: 60            # seconds, 0-600
expand_directories:
  - .config
  - .local
ignore_patterns:
  - .DS_Store
  - "*.tmp"
```

The configuration directory is `$PLONK_DIR` when that variable is set; a
leading `~/` in it is expanded against `$HOME`. Otherwise it is
`$HOME/.config/plonk`. `plonkit.model.default_config_directory()` returns it.

## Usage

```python
from plonkit.loader import ConfigManager, load_config_with_defaults
from plonkit.validator import SimpleValidator
from plonkit.service import ConfigAdapter

cfg = load_config_with_defaults("/path/to/config")   # empty Config on a bad or missing file
resolved = cfg.resolve()
print(resolved.default_manager, resolved.package_timeout)

result = SimpleValidator().validate_config(cfg)
print(result.summary())
for line in result.messages():
    print(line)

manager = ConfigManager("/path/to/config")
manager.save(cfg)                                    # writes plonk.yaml atomically

targets = ConfigAdapter(cfg).dotfile_targets()       # {"zshrc": "~/.zshrc", ...}
```

`ConfigAdapter.dotfile_targets()` walks the default configuration directory,
leaving out `plonk.yaml` and anything matching the resolved ignore patterns.

A file in the configuration directory maps to a hidden file in the home
directory. `plonkit.model.source_to_target` and
`plonkit.model.target_to_source` convert between the two, so that
`config/nvim/init.lua` maps to `~/.config/nvim/init.lua`.

`plonkit.schema.generate_config_schema()` returns a JSON Schema for the
configuration file (`Schema.to_json()` serialises it), and
`plonkit.schema.config_field_documentation()` returns help text for each
field.

Errors from loading or saving a configuration are raised as
`plonkit.model.ConfigError`.

## Reports

These classes hold the results of operations and render them, each with
`table_output()` for text and `structured_data()` for JSON or YAML output:

- `plonkit.listing.DotfileListOutput` — a dotfile listing with its summary.
- `plonkit.adding.DotfileAddOutput` and `DotfileBatchAddOutput` — the result
  of adding one dotfile or a whole directory.
- `plonkit.applying.ApplyOutput` and `DotfileApplyOutput` — the result of
  applying package and dotfile configuration.
- `plonkit.sync.CombinedSyncOutput` — the combined result of a sync;
  `sync_scope()` names what it covered.

`plonkit.adding.copy_file_with_attributes()` copies a file keeping its
permissions and modification time.

## What this package does not do

It has no command-line program. It does not install or uninstall packages,
deploy dotfiles, keep a lock file, or check the system's state; it only
configures those operations and reports their results.