"""Configuration file discovery and loading."""

import importlib.util
import os
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Union

from ..errors import ConfigError, ConfigInvalid, ConfigLoadFailed, ConfigNotFound
from ..helpers.logger import get_logger
from ..helpers.utils import PathArg, load_json, load_yaml, resolve_path, to_path_string
from .models import Config, check_config_input, resolve

logger = get_logger("config.loader")

CONFIG_FILENAMES = (
    "action.config.py",
    "action.config.yaml",
    "action.config.yml",
    "action.config.json",
)

# Takes an absolute path and returns the value the file exports.
ModuleLoader = Callable[[str], Any]


@dataclass(frozen=True)
class LoadConfigResult:
    """Result of configuration loading."""

    config: Config
    config_path: Optional[str] = None
    using_defaults: bool = False


def _load_python_module(path: str) -> Any:
    module_name = f"_action_config_{uuid.uuid4().hex}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot import {path}")

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for attribute in ("config", "default"):
        if hasattr(module, attribute):
            return getattr(module, attribute)
    return None


def load_config_module(path: str) -> Any:
    """
    Load the value exported by a configuration file.

    ``.py`` files are executed and their ``config`` (or ``default``) attribute
    is returned; YAML and JSON files are parsed.
    """
    suffix = os.path.splitext(path)[1].lower()
    if suffix == ".py":
        return _load_python_module(path)
    if suffix in (".yaml", ".yml"):
        return load_yaml(path)
    if suffix == ".json":
        return load_json(path)
    raise ValueError(f"Unsupported config file type: {suffix or path}")


def find_config_file(cwd: PathArg) -> Optional[str]:
    """Return the first candidate config file that exists in ``cwd``."""
    for filename in CONFIG_FILENAMES:
        candidate = resolve_path(cwd, filename)
        if os.path.isfile(candidate):
            return candidate
    return None


class ConfigLoader:
    """Load configuration from a file or fall back to defaults."""

    def __init__(self, module_loader: Optional[ModuleLoader] = None):
        self.module_loader = module_loader or load_config_module

    def load(
        self, cwd: Optional[PathArg] = None, config_path: Optional[PathArg] = None
    ) -> Union[LoadConfigResult, ConfigError]:
        """
        Load configuration for a project.

        Args:
            cwd: Project directory searched for a config file
            config_path: Explicit config file, relative to ``cwd``

        Returns:
            LoadConfigResult, or ConfigNotFound / ConfigLoadFailed /
            ConfigInvalid describing why loading failed
        """
        cwd = to_path_string(cwd) if cwd is not None else os.getcwd()

        if config_path is None:
            found = find_config_file(cwd)
            if found is None:
                logger.debug(f"No config file in {cwd}, using defaults")
                return LoadConfigResult(config=resolve({}), using_defaults=True)
            path = found
        else:
            path = resolve_path(cwd, config_path)

        if not os.path.exists(path):
            return ConfigNotFound(path=path)

        logger.debug(f"Loading config from {path}")
        try:
            exported = self.module_loader(path)
        except Exception as e:
            logger.debug(f"Config load failed for {path}: {e}")
            return ConfigLoadFailed(path=path, cause=str(e) or type(e).__name__)

        if isinstance(exported, Config):
            return LoadConfigResult(config=exported, config_path=path)

        if not isinstance(exported, Mapping):
            return ConfigInvalid(
                path=path,
                errors=("Config file must export a configuration mapping",),
            )

        data, violations = check_config_input(exported)
        if violations:
            return ConfigInvalid(
                path=path,
                errors=tuple(f"{v.path}: {v.message}" for v in violations),
            )

        return LoadConfigResult(config=Config.from_dict(data), config_path=path)
