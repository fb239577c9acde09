"""Unit tests for configuration resolution and loading."""

import os
from unittest.mock import MagicMock

import pytest

from action_builder.config import (
    CONFIG_FILENAMES,
    Config,
    ConfigLoader,
    LoadConfigResult,
    define_config,
    find_config_file,
    resolve,
)
from action_builder.errors import ConfigInvalid, ConfigLoadFailed, ConfigNotFound


class TestResolve:
    """Test default resolution of partial configuration."""

    def test_empty_input_uses_all_defaults(self):
        config = resolve({})

        assert config.entries.main == "src/main.ts"
        assert config.entries.pre is None
        assert config.entries.post is None
        assert config.build.minify is True
        assert config.build.target == "es2022"
        assert config.build.source_map is False
        assert config.build.externals == ()
        assert config.build.quiet is False
        assert config.validation.require_action_yml is True
        assert config.validation.max_bundle_size is None
        assert config.validation.strict is None

    def test_none_input_matches_empty_input(self):
        assert resolve(None) == resolve({}) == Config()

    def test_merges_per_section(self):
        config = resolve({"build": {"minify": False, "externals": ["@aws-sdk/client-s3"]}})

        assert config.build.minify is False
        assert config.build.externals == ("@aws-sdk/client-s3",)
        assert config.build.target == "es2022"
        assert config.entries.main == "src/main.ts"

    def test_full_input(self):
        config = resolve(
            {
                "entries": {"main": "src/action.ts", "pre": "src/setup.ts", "post": "src/cleanup.ts"},
                "build": {"target": "es2024", "sourceMap": True, "quiet": True},
                "validation": {"requireActionYml": False, "maxBundleSize": "10mb", "strict": True},
            }
        )

        assert config.entries.pre == "src/setup.ts"
        assert config.entries.post == "src/cleanup.ts"
        assert config.build.target == "es2024"
        assert config.build.source_map is True
        assert config.validation.require_action_yml is False
        assert config.validation.max_bundle_size == "10mb"
        assert config.validation.strict is True

    def test_none_values_fall_back_to_defaults(self):
        config = resolve({"entries": None, "validation": {"strict": None}})

        assert config.entries.main == "src/main.ts"
        assert config.validation.strict is None

    def test_resolve_is_idempotent(self):
        partial = {"build": {"sourceMap": True}, "validation": {"strict": False}}

        first = resolve(partial)
        second = resolve(partial)

        assert first == second
        assert resolve(first.to_dict()) == first
        assert resolve(first) is first

    def test_input_is_not_mutated(self):
        partial = {"build": {"minify": False}}
        resolve(partial)
        assert partial == {"build": {"minify": False}}

    def test_invalid_target_raises(self):
        with pytest.raises(ValueError) as exc_info:
            resolve({"build": {"target": "es5"}})
        assert "build.target" in str(exc_info.value)

    def test_invalid_bundle_size_raises(self):
        with pytest.raises(ValueError):
            resolve({"validation": {"maxBundleSize": "lots"}})

    def test_define_config_matches_resolve(self):
        assert define_config({"build": {"quiet": True}}) == resolve({"build": {"quiet": True}})


class TestConfigLoader:
    """Test configuration file discovery and loading."""

    def test_defaults_when_no_config_file(self, tmp_path):
        result = ConfigLoader().load(cwd=tmp_path)

        assert isinstance(result, LoadConfigResult)
        assert result.using_defaults is True
        assert result.config_path is None
        assert result.config == Config()

    def test_loads_python_config(self, tmp_path, write_file):
        write_file(
            tmp_path,
            "action.config.py",
            'config = {"entries": {"main": "src/custom.ts"}, "build": {"minify": False}}\n',
        )

        result = ConfigLoader().load(cwd=tmp_path)

        assert result.using_defaults is False
        assert result.config_path == os.path.join(str(tmp_path), "action.config.py")
        assert result.config.entries.main == "src/custom.ts"
        assert result.config.build.minify is False
        assert result.config.build.target == "es2022"

    def test_loads_python_config_built_with_define_config(self, tmp_path, write_file):
        write_file(
            tmp_path,
            "action.config.py",
            "from action_builder import define_config\n"
            'config = define_config({"validation": {"strict": True}})\n',
        )

        result = ConfigLoader().load(cwd=tmp_path)

        assert result.config.validation.strict is True

    def test_loads_yaml_config(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.yaml", "build:\n  sourceMap: true\n")

        result = ConfigLoader().load(cwd=tmp_path)

        assert result.config.build.source_map is True

    def test_candidate_order(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.json", '{"build": {"target": "es2020"}}')
        write_file(tmp_path, "action.config.yaml", "build:\n  target: es2023\n")

        assert CONFIG_FILENAMES.index("action.config.yaml") < CONFIG_FILENAMES.index(
            "action.config.json"
        )
        assert find_config_file(tmp_path).endswith("action.config.yaml")
        assert ConfigLoader().load(cwd=tmp_path).config.build.target == "es2023"

    def test_explicit_path_relative_to_cwd(self, tmp_path, write_file):
        write_file(tmp_path, "configs/release.json", '{"build": {"quiet": true}}')

        result = ConfigLoader().load(cwd=tmp_path, config_path="configs/release.json")

        assert result.config.build.quiet is True

    def test_explicit_missing_path_is_not_found(self, tmp_path):
        result = ConfigLoader().load(cwd=tmp_path, config_path="missing.config.py")

        assert isinstance(result, ConfigNotFound)
        assert result.path.endswith("missing.config.py")

    def test_syntax_error_is_load_failure(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.py", "config = {\n")

        result = ConfigLoader().load(cwd=tmp_path)

        assert isinstance(result, ConfigLoadFailed)
        assert result.cause

    def test_import_error_is_load_failure(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.py", "import module_that_does_not_exist\n")

        result = ConfigLoader().load(cwd=tmp_path)

        assert isinstance(result, ConfigLoadFailed)
        assert "module_that_does_not_exist" in result.cause

    def test_non_mapping_export_is_invalid(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.py", 'config = "src/main.ts"\n')

        result = ConfigLoader().load(cwd=tmp_path)

        assert isinstance(result, ConfigInvalid)
        assert "mapping" in result.errors[0]

    def test_missing_export_is_invalid(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.py", "settings = {}\n")

        assert isinstance(ConfigLoader().load(cwd=tmp_path), ConfigInvalid)

    def test_schema_violation_is_invalid(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.yaml", "build:\n  minify: sometimes\n")

        result = ConfigLoader().load(cwd=tmp_path)

        assert isinstance(result, ConfigInvalid)
        assert any(error.startswith("build.minify") for error in result.errors)

    def test_custom_module_loader(self, tmp_path, write_file):
        config_path = write_file(tmp_path, "action.config.py", "")
        module_loader = MagicMock(return_value={"entries": {"main": "lib/index.ts"}})

        result = ConfigLoader(module_loader).load(cwd=tmp_path)

        module_loader.assert_called_once_with(config_path)
        assert result.config.entries.main == "lib/index.ts"

    def test_loader_exception_becomes_load_failure(self, tmp_path, write_file):
        write_file(tmp_path, "action.config.py", "")
        module_loader = MagicMock(side_effect=RuntimeError("boom"))

        result = ConfigLoader(module_loader).load(cwd=tmp_path)

        assert result == ConfigLoadFailed(
            path=os.path.join(str(tmp_path), "action.config.py"), cause="boom"
        )
