from __future__ import annotations

import asyncio
import time
from pathlib import Path

import structlog

from federalist_build.callbacks.handler import BuildCallbackHandler
from federalist_build.commands.git import auth_environment
from federalist_build.commands.templates import expand
from federalist_build.core.config import BuildConfig
from federalist_build.core.constants import Engine
from federalist_build.core.exceptions import BuildError
from federalist_build.core.types import BuildRequest, BuildResult, StepRecord, TokenSet
from federalist_build.pipeline.engines import BuildStep, CommandStep, WriteFileStep, engine_steps
from federalist_build.process.runner import Runner
from federalist_build.publish.dispatcher import PublishDispatcher
from federalist_build.tokens.resolver import TokenResolver

logger = structlog.get_logger(__name__)


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


class BuildPipeline:
    """Drive one engine's steps for a request, then publish the result.

    Steps run strictly in order. The first failing step ends the run:
    remaining steps and publishing are skipped and the error is returned
    together with the request. Build failures never raise out of :meth:`run`.

    Args:
        config: Static build configuration.
        runner: Executes command steps (see :class:`~federalist_build.process.runner.Runner`).
        resolver: Produces the tokens for each request.
        publisher: Publishes the destination directory after a successful build.
        callbacks: Optional lifecycle observer.
    """

    def __init__(
        self,
        config: BuildConfig,
        runner: Runner,
        resolver: TokenResolver,
        publisher: PublishDispatcher,
        callbacks: BuildCallbackHandler | None = None,
    ) -> None:
        self._config = config
        self._runner = runner
        self._resolver = resolver
        self._publisher = publisher
        self._callbacks = callbacks or BuildCallbackHandler()

    def __repr__(self) -> str:
        return f"BuildPipeline(platform={self._config.platform!r}, publisher={self._publisher!r})"

    def steps_for(self, engine: Engine | str) -> tuple[BuildStep, ...]:
        return engine_steps(engine, self._config.platform, self._config.git_host)

    async def run(self, engine: Engine | str, request: BuildRequest) -> BuildResult:
        """Build *request* with *engine* and publish it.

        Returns:
            A :class:`BuildResult`; ``result.error`` holds the first failure.
        """
        engine = Engine(engine)
        steps = self.steps_for(engine)
        result = BuildResult(request=request)
        log = logger.bind(
            build_id=request.id,
            engine=str(engine),
            owner=request.site.owner,
            repository=request.site.repository,
            branch=request.branch,
        )
        start_ms = _now_ms()
        await self._callbacks.on_build_start(request, engine)
        log.info("build_start", steps=len(steps))

        try:
            tokens = await self._resolver.resolve(request)
            for step in steps:
                await self._run_step(step, tokens, request, result)
            await self._callbacks.on_publish(request, self._publisher.target(tokens))
            await self._publisher.publish(tokens, request)
            result.published = True
        except BuildError as exc:
            result.error = exc
            log.warning("build_failed", error=str(exc), steps_run=len(result.steps))
            await self._callbacks.on_error(request, exc)

        result.duration_ms = _now_ms() - start_ms
        if result.success:
            log.info("build_complete", duration_ms=result.duration_ms)
        await self._callbacks.on_build_end(result)
        return result

    async def _run_step(
        self,
        step: BuildStep,
        tokens: TokenSet,
        request: BuildRequest,
        result: BuildResult,
    ) -> None:
        await self._callbacks.on_step_start(request, step.name)
        start_ms = _now_ms()
        try:
            if isinstance(step, CommandStep):
                env = (
                    auth_environment(tokens.access_token, self._config.git_host)
                    if step.authenticated
                    else None
                )
                await self._runner.run(step.command.render(tokens), env=env)
            else:
                await self._write_file(step, tokens)
        except BuildError:
            record = StepRecord(
                name=step.name, kind=step.kind, success=False, duration_ms=_now_ms() - start_ms
            )
            result.steps.append(record)
            logger.warning("build_step_failed", build_id=request.id, step=step.name)
            await self._callbacks.on_step_end(request, record)
            raise

        record = StepRecord(
            name=step.name, kind=step.kind, success=True, duration_ms=_now_ms() - start_ms
        )
        result.steps.append(record)
        logger.debug("build_step", build_id=request.id, step=step.name, duration_ms=record.duration_ms)
        await self._callbacks.on_step_end(request, record)

    async def _write_file(self, step: WriteFileStep, tokens: TokenSet) -> None:
        relative = expand(step.path, tokens)
        path = Path(self._config.work_dir) / relative if self._config.work_dir else Path(relative)
        content = expand(step.content, tokens)
        try:
            await asyncio.to_thread(path.write_text, content, encoding="utf-8")
        except OSError as exc:
            raise BuildError(
                f"Could not write {relative!r}: {exc}",
                code="ERR_WRITE",
                details={"path": relative},
            ) from exc
