"""SiteBuilder, the entry points a host calls to build and publish a site."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Union

from federalist_build.callbacks.handler import BuildCallbackHandler
from federalist_build.core.config import BuildConfig
from federalist_build.core.constants import Engine
from federalist_build.core.types import BuildRequest, BuildResult
from federalist_build.pipeline.pipeline import BuildPipeline
from federalist_build.process.runner import ProcessRunner, Runner
from federalist_build.publish.dispatcher import PublishDispatcher
from federalist_build.publish.remote import RemoteSync
from federalist_build.tokens.credentials import CredentialStore
from federalist_build.tokens.resolver import TokenResolver
from federalist_build.utils.async_helpers import run_sync

BuildDone = Callable[[Union[Exception, None], BuildRequest], Union[Awaitable[Any], Any]]


class SiteBuilder:
    """Build a site with one of the engines and publish it.

    Usage::

        builder = SiteBuilder(BuildConfig.from_env(), credentials=store)
        result = await builder.jekyll(request)
        if not result.success:
            print(result.error)

    Each entry point also accepts a ``done(error, request)`` callable (plain
    function or coroutine function) that is invoked exactly once when the
    run finishes.

    Args:
        config: Static build configuration.
        credentials: Looks up the requesting user's access token.
        runner: Command executor, defaults to a :class:`ProcessRunner` in
            ``config.work_dir``.
        remote: Remote synchronisation client; required when
            ``config.remote_sync`` is set.
        callbacks: Optional build lifecycle observer.
    """

    def __init__(
        self,
        config: BuildConfig,
        credentials: CredentialStore,
        *,
        runner: Runner | None = None,
        remote: RemoteSync | None = None,
        callbacks: BuildCallbackHandler | None = None,
    ) -> None:
        self._config = config
        self._runner = runner or ProcessRunner(cwd=config.work_dir, timeout=config.command_timeout)
        self._pipeline = BuildPipeline(
            config,
            self._runner,
            TokenResolver(config, credentials),
            PublishDispatcher(config, self._runner, remote),
            callbacks,
        )

    def __repr__(self) -> str:
        return f"SiteBuilder(pipeline={self._pipeline!r})"

    @property
    def config(self) -> BuildConfig:
        return self._config

    @property
    def pipeline(self) -> BuildPipeline:
        return self._pipeline

    async def static(self, request: BuildRequest, done: BuildDone | None = None) -> BuildResult:
        """Copy the repository as-is."""
        return await self._build(Engine.STATIC, request, done)

    async def jekyll(self, request: BuildRequest, done: BuildDone | None = None) -> BuildResult:
        """Build the repository with Jekyll."""
        return await self._build(Engine.JEKYLL, request, done)

    async def hugo(self, request: BuildRequest, done: BuildDone | None = None) -> BuildResult:
        """Build the repository with Hugo."""
        return await self._build(Engine.HUGO, request, done)

    async def build(self, request: BuildRequest, done: BuildDone | None = None) -> BuildResult:
        """Build with the engine configured on ``request.site``."""
        return await self._build(request.site.engine, request, done)

    def build_sync(self, request: BuildRequest) -> BuildResult:
        """Blocking variant of :meth:`build` for synchronous hosts."""
        return run_sync(self.build(request))

    async def _build(
        self,
        engine: Engine,
        request: BuildRequest,
        done: BuildDone | None,
    ) -> BuildResult:
        result = await self._pipeline.run(engine, request)
        if done is not None:
            outcome = done(result.error, result.request)
            if inspect.isawaitable(outcome):
                await outcome
        return result
