"""Shared fixtures for action builder unit tests."""

import os
from typing import Dict, Optional

import pytest

from action_builder.build import BundleOutput, BundlerError

VALID_ACTION_YML = """
name: "Test Action"
description: "A test action"
inputs:
  token:
    description: "GitHub token"
    required: true
outputs:
  result:
    description: "The result"
runs:
  using: "node24"
  main: "dist/main.js"
branding:
  icon: "zap"
  color: "blue"
"""


@pytest.fixture(autouse=True)
def no_ci_environment(monkeypatch):
    """Tests must not pick up strict mode from the machine running them."""
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)


def write(root, relative_path: str, content: str = "") -> str:
    path = os.path.join(str(root), relative_path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path


@pytest.fixture
def project_dir(tmp_path):
    """Project with src/main.ts and a complete action.yml."""
    write(tmp_path, "src/main.ts", 'console.log("main");\n')
    write(tmp_path, "action.yml", VALID_ACTION_YML)
    return tmp_path


class FakeBundler:
    """In-memory bundler recording every call."""

    def __init__(
        self,
        fail_for: Optional[str] = None,
        source_map: Optional[str] = None,
        assets: Optional[Dict[str, bytes]] = None,
    ):
        self.fail_for = fail_for
        self.source_map = source_map
        self.assets = assets or {}
        self.calls = []

    def bundle(self, entry_path, options):
        self.calls.append((entry_path, options))
        if self.fail_for and entry_path.endswith(self.fail_for):
            raise BundlerError(f"Cannot bundle {os.path.basename(entry_path)}")
        name = os.path.splitext(os.path.basename(entry_path))[0]
        return BundleOutput(
            code=f"// bundled {name}\n",
            source_map=self.source_map,
            assets=dict(self.assets),
        )


@pytest.fixture
def fake_bundler():
    return FakeBundler()


@pytest.fixture
def make_bundler():
    return FakeBundler


@pytest.fixture
def write_file():
    return write
