"""Unit tests for action.yml validation."""

import os

import pytest

from action_builder.errors import (
    ActionYmlMissing,
    ActionYmlSchemaError,
    ActionYmlSyntaxError,
)
from action_builder.validation import (
    ActionManifest,
    ActionYmlResult,
    check_recommendations,
    validate_manifest,
)

MINIMAL_ACTION_YML = """
name: "Minimal"
description: "No extras"
runs:
  using: "node24"
  main: "dist/main.js"
"""


def codes(items):
    return [item.code for item in items]


class TestValidateManifest:
    """Test parsing and schema validation of action.yml."""

    def test_valid_manifest(self, project_dir):
        result = validate_manifest(project_dir / "action.yml")

        assert isinstance(result, ActionYmlResult)
        assert result.valid is True
        assert result.warnings == ()
        manifest = result.content
        assert isinstance(manifest, ActionManifest)
        assert manifest.name == "Test Action"
        assert manifest.runs.using == "node24"
        assert manifest.runs.main == "dist/main.js"
        assert manifest.inputs["token"].required is True
        assert manifest.outputs["result"].description == "The result"
        assert manifest.branding.icon == "zap"

    def test_hooks_and_conditions(self, tmp_path, write_file):
        path = write_file(
            tmp_path,
            "action.yml",
            MINIMAL_ACTION_YML
            + '  pre: "dist/pre.js"\n  pre-if: "runner.os == \'Linux\'"\n'
            + '  post: "dist/post.js"\n  post-if: "always()"\n',
        )

        result = validate_manifest(path)

        assert result.content.runs.pre == "dist/pre.js"
        assert result.content.runs.pre_if == "runner.os == 'Linux'"
        assert result.content.runs.post_if == "always()"

    def test_missing_file(self, tmp_path):
        path = os.path.join(str(tmp_path), "action.yml")

        assert validate_manifest(path) == ActionYmlMissing(path=path)

    def test_wrong_runtime(self, tmp_path, write_file):
        path = write_file(
            tmp_path, "action.yml", MINIMAL_ACTION_YML.replace("node24", "node20")
        )

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSchemaError)
        assert [v.path for v in result.errors] == ["runs.using"]

    def test_missing_required_fields(self, tmp_path, write_file):
        path = write_file(tmp_path, "action.yml", 'name: "Only a name"\n')

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSchemaError)
        assert {v.path for v in result.errors} == {"root"}
        messages = " ".join(v.message for v in result.errors)
        assert "description" in messages
        assert "runs" in messages

    def test_unknown_branding_icon(self, tmp_path, write_file):
        path = write_file(
            tmp_path,
            "action.yml",
            MINIMAL_ACTION_YML + 'branding:\n  icon: "rocket-ship"\n  color: "blue"\n',
        )

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSchemaError)
        assert [v.path for v in result.errors] == ["branding.icon"]

    def test_input_without_description_is_schema_error(self, tmp_path, write_file):
        path = write_file(
            tmp_path,
            "action.yml",
            MINIMAL_ACTION_YML + "inputs:\n  token:\n    required: true\n",
        )

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSchemaError)
        assert result.errors[0].path == "inputs.token"

    def test_unknown_top_level_keys_are_allowed(self, tmp_path, write_file):
        path = write_file(
            tmp_path, "action.yml", MINIMAL_ACTION_YML + 'x-internal: "yes"\n'
        )

        assert isinstance(validate_manifest(path), ActionYmlResult)

    def test_invalid_yaml(self, tmp_path, write_file):
        path = write_file(
            tmp_path, "action.yml", 'name: "Broken"\nruns:\n  using: [node24\n'
        )

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSyntaxError)
        assert result.message.startswith("Invalid YAML syntax")
        assert result.line is not None
        assert result.line >= 3

    def test_non_mapping_document(self, tmp_path, write_file):
        path = write_file(tmp_path, "action.yml", "- just\n- a list\n")

        result = validate_manifest(path)

        assert isinstance(result, ActionYmlSyntaxError)
        assert result.message == "action.yml must be a mapping"

    def test_empty_document(self, tmp_path, write_file):
        path = write_file(tmp_path, "action.yml", "")

        assert isinstance(validate_manifest(path), ActionYmlSyntaxError)


class TestRecommendations:
    """Test advisory warnings for a schema-valid manifest."""

    def test_no_branding(self, tmp_path, write_file):
        path = write_file(tmp_path, "action.yml", MINIMAL_ACTION_YML)

        result = validate_manifest(path)

        assert codes(result.warnings) == ["ACTION_YML_NO_BRANDING"]
        assert result.warnings[0].file == path

    @pytest.mark.parametrize(
        "branding,expected",
        [
            ({"color": "blue"}, ["ACTION_YML_NO_BRANDING_ICON"]),
            ({"icon": "zap"}, ["ACTION_YML_NO_BRANDING_COLOR"]),
            ({}, ["ACTION_YML_NO_BRANDING"]),
        ],
    )
    def test_partial_branding(self, branding, expected):
        content = {
            "name": "a",
            "description": "b",
            "runs": {"using": "node24", "main": "dist/main.js"},
            "branding": branding,
        }

        assert codes(check_recommendations(content)) == expected

    def test_empty_descriptions(self):
        content = {
            "inputs": {"token": {"description": ""}, "name": {"description": "Name"}},
            "outputs": {"result": {"description": ""}},
            "branding": {"icon": "zap", "color": "blue"},
        }

        warnings = check_recommendations(content, "action.yml")

        assert codes(warnings) == [
            "ACTION_YML_INPUT_NO_DESCRIPTION",
            "ACTION_YML_OUTPUT_NO_DESCRIPTION",
        ]
        assert warnings[0].message == "Input 'token' has no description"
        assert warnings[1].message == "Output 'result' has no description"
        assert all(w.file == "action.yml" for w in warnings)
