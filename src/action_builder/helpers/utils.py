"""Utility functions for the action builder."""

import json
import os
from typing import Any, Union

import yaml

PathArg = Union[str, os.PathLike]


def load_yaml(file_path: PathArg) -> Any:
    """
    Load and parse a YAML file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML content

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file contains invalid YAML
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"YAML file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_json(file_path: PathArg) -> Any:
    """Load and parse a JSON file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return json.load(f)


def to_path_string(path: PathArg) -> str:
    """Normalise str / PathLike / bytes paths to a plain string."""
    if isinstance(path, bytes):
        return path.decode("utf-8")
    return os.fspath(path)


def resolve_path(cwd: PathArg, path: PathArg) -> str:
    """Resolve ``path`` against ``cwd`` unless it is already absolute."""
    return os.path.abspath(os.path.join(to_path_string(cwd), to_path_string(path)))
