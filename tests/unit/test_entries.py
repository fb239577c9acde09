"""Unit tests for entry point detection."""

import os

from action_builder.config import (
    DetectEntriesResult,
    Entries,
    detect_entries,
    find_missing_explicit_entries,
    output_path_for,
)
from action_builder.errors import EntryFileMissing, MainEntryMissing


class TestDetectEntries:
    def test_missing_main_entry(self, tmp_path):
        result = detect_entries(tmp_path)

        assert isinstance(result, MainEntryMissing)
        assert result.expected_path == "src/main.ts"
        assert result.cwd == str(tmp_path)

    def test_main_only(self, tmp_path, write_file):
        write_file(tmp_path, "src/main.ts")

        result = detect_entries(tmp_path)

        assert isinstance(result, DetectEntriesResult)
        assert result.success is True
        assert len(result.entries) == 1
        entry = result.entries[0]
        assert entry.type == "main"
        assert entry.path == os.path.join(str(tmp_path), "src", "main.ts")
        assert entry.output == "dist/main.js"

    def test_all_entries_in_order(self, tmp_path, write_file):
        for name in ("post", "pre", "main"):
            write_file(tmp_path, f"src/{name}.ts")

        result = detect_entries(tmp_path)

        assert [e.type for e in result.entries] == ["main", "pre", "post"]
        assert [e.output for e in result.entries] == [
            "dist/main.js",
            "dist/pre.js",
            "dist/post.js",
        ]

    def test_optional_entry_left_out_when_missing(self, tmp_path, write_file):
        write_file(tmp_path, "src/main.ts")
        write_file(tmp_path, "src/post.ts")

        result = detect_entries(tmp_path)

        assert [e.type for e in result.entries] == ["main", "post"]

    def test_explicit_paths(self, tmp_path, write_file):
        write_file(tmp_path, "lib/index.ts")
        write_file(tmp_path, "lib/setup.ts")

        result = detect_entries(tmp_path, Entries(main="lib/index.ts", pre="lib/setup.ts"))

        assert [e.type for e in result.entries] == ["main", "pre"]
        assert result.entries[1].path == os.path.join(str(tmp_path), "lib", "setup.ts")
        assert result.entries[1].output == "dist/pre.js"

    def test_explicit_main_missing(self, tmp_path, write_file):
        write_file(tmp_path, "src/main.ts")

        result = detect_entries(tmp_path, Entries(main="lib/index.ts"))

        assert isinstance(result, MainEntryMissing)
        assert result.expected_path == "lib/index.ts"

    def test_directory_is_not_an_entry(self, tmp_path):
        os.makedirs(os.path.join(str(tmp_path), "src", "main.ts"))

        assert isinstance(detect_entries(tmp_path), MainEntryMissing)

    def test_output_path_for(self):
        assert output_path_for("pre") == "dist/pre.js"


class TestFindMissingExplicitEntries:
    def test_conventional_entries_are_never_reported(self, tmp_path):
        assert find_missing_explicit_entries(tmp_path, Entries()) == []

    def test_reports_missing_explicit_entries(self, tmp_path, write_file):
        write_file(tmp_path, "src/setup.ts")

        missing = find_missing_explicit_entries(
            tmp_path, Entries(pre="src/setup.ts", post="src/teardown.ts")
        )

        assert missing == [EntryFileMissing(entry_type="post", path="src/teardown.ts")]
