"""
High level entry point composing load -> validate -> build.

``GitHubAction`` owns a single-worker thread pool and runs each pipeline
step on it, so the async methods never block the event loop while steps
still execute one at a time. Every failure is returned inside a result
envelope; nothing raises across this boundary::

    async with GitHubAction.create(cwd="my-action") as action:
        result = await action.build()
        if not result.success:
            print(result.error)
"""

import asyncio
import functools
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .build import Builder, BuildResult, Bundler, NccBundler
from .config import Config, ConfigLoader, ModuleLoader, resolve
from .errors import PipelineFailure
from .helpers.logger import get_logger
from .helpers.utils import PathArg, to_path_string
from .validation import ValidationResult, Validator, is_ci

logger = get_logger("github_action")

T = TypeVar("T")

ConfigSource = Union[Mapping[str, Any], Config, str, os.PathLike, None]


@dataclass(frozen=True)
class ConfigOutcome:
    success: bool
    config: Optional[Config] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ActionValidateResult:
    success: bool
    validation: Optional[ValidationResult] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class ActionBuildResult:
    """Combined validation and build outcome."""

    success: bool
    build: Optional[BuildResult] = None
    validation: Optional[ValidationResult] = None
    error: Optional[str] = None


class GitHubAction:
    """Stateful load/validate/build lifecycle for one project directory."""

    def __init__(
        self,
        config: ConfigSource = None,
        cwd: Optional[PathArg] = None,
        skip_validation: bool = False,
        clean: bool = True,
        bundler: Optional[Bundler] = None,
        module_loader: Optional[ModuleLoader] = None,
        ci_detector: Optional[Callable[[], bool]] = None,
    ):
        self.config_source = config
        self.cwd = to_path_string(cwd) if cwd is not None else os.getcwd()
        self.skip_validation = skip_validation
        self.clean = clean

        self.loader = ConfigLoader(module_loader)
        self.validator = Validator(ci_detector=ci_detector or is_ci)
        self.builder = Builder(bundler or NccBundler())

        self._config: Optional[Config] = None
        self._executor: Optional[ThreadPoolExecutor] = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="action-builder"
        )

    @classmethod
    def create(cls, **options: Any) -> "GitHubAction":
        return cls(**options)

    async def __aenter__(self) -> "GitHubAction":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.dispose()

    async def _run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        if self._executor is None:
            raise RuntimeError("GitHubAction has been disposed")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            self._executor, functools.partial(func, *args, **kwargs)
        )

    def _load_config_sync(self) -> Union[Config, PipelineFailure]:
        source = self.config_source
        if isinstance(source, Config):
            return source
        if isinstance(source, Mapping):
            return resolve(source)

        config_path = None if source is None else to_path_string(source)
        result = self.loader.load(cwd=self.cwd, config_path=config_path)
        if isinstance(result, PipelineFailure):
            return result
        if result.using_defaults:
            logger.debug("No config file found, using defaults")
        return result.config

    async def load_config(self) -> ConfigOutcome:
        """Load the configuration once; later calls reuse it."""
        if self._config is not None:
            return ConfigOutcome(success=True, config=self._config)

        try:
            loaded = await self._run(self._load_config_sync)
        except Exception as e:
            return ConfigOutcome(success=False, error=str(e) or type(e).__name__)

        if isinstance(loaded, PipelineFailure):
            return ConfigOutcome(success=False, error=loaded.describe())

        self._config = loaded
        return ConfigOutcome(success=True, config=loaded)

    async def validate(self, strict: Optional[bool] = None) -> ActionValidateResult:
        """Validate the project with the cached configuration."""
        outcome = await self.load_config()
        if not outcome.success:
            return ActionValidateResult(success=False, error=outcome.error)

        try:
            result = await self._run(
                self.validator.validate, outcome.config, cwd=self.cwd, strict=strict
            )
        except Exception as e:
            return ActionValidateResult(success=False, error=str(e) or type(e).__name__)

        if isinstance(result, PipelineFailure):
            return ActionValidateResult(success=False, error=result.describe())
        if not result.valid:
            return ActionValidateResult(
                success=False, validation=result, error="Validation failed"
            )
        return ActionValidateResult(success=True, validation=result)

    async def build(self) -> ActionBuildResult:
        """Load config, validate unless skipped, then build every entry."""
        outcome = await self.load_config()
        if not outcome.success:
            return ActionBuildResult(success=False, error=outcome.error)

        validation = None
        if not self.skip_validation:
            checked = await self.validate()
            validation = checked.validation
            if not checked.success:
                return ActionBuildResult(
                    success=False, validation=validation, error=checked.error
                )

        try:
            result = await self._run(
                self.builder.build, outcome.config, cwd=self.cwd, clean=self.clean
            )
        except Exception as e:
            return ActionBuildResult(
                success=False, validation=validation, error=str(e) or type(e).__name__
            )

        if isinstance(result, PipelineFailure):
            return ActionBuildResult(
                success=False, validation=validation, error=result.describe()
            )
        if not result.success:
            return ActionBuildResult(
                success=False,
                build=result,
                validation=validation,
                error=result.error or "Build failed",
            )
        return ActionBuildResult(success=True, build=result, validation=validation)

    async def dispose(self) -> None:
        """Shut down the worker pool. Safe to call more than once.

        A step still running on the pool is awaited off the event loop.
        """
        executor, self._executor = self._executor, None
        if executor is not None:
            await asyncio.get_running_loop().run_in_executor(None, executor.shutdown)
