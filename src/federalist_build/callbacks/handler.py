from __future__ import annotations

from abc import ABC

import structlog

from federalist_build.core.constants import Engine
from federalist_build.core.types import BuildRequest, BuildResult, StepRecord, SyncDescriptor

logger = structlog.get_logger(__name__)


class BuildCallbackHandler(ABC):
    """Override any methods to observe a build. All have default no-op implementations."""

    async def on_build_start(self, request: BuildRequest, engine: Engine) -> None:
        pass

    async def on_step_start(self, request: BuildRequest, step_name: str) -> None:
        pass

    async def on_step_end(self, request: BuildRequest, record: StepRecord) -> None:
        pass

    async def on_publish(self, request: BuildRequest, target: str | SyncDescriptor) -> None:
        pass

    async def on_build_end(self, result: BuildResult) -> None:
        pass

    async def on_error(self, request: BuildRequest, error: Exception) -> None:
        pass


class LoggingBuildCallbackHandler(BuildCallbackHandler):
    """Logs all build events via structlog."""

    async def on_build_start(self, request: BuildRequest, engine: Engine) -> None:
        logger.info(
            "build_start",
            build_id=request.id,
            engine=str(engine),
            owner=request.site.owner,
            repository=request.site.repository,
            branch=request.branch,
        )

    async def on_step_start(self, request: BuildRequest, step_name: str) -> None:
        logger.debug("step_start", build_id=request.id, step=step_name)

    async def on_step_end(self, request: BuildRequest, record: StepRecord) -> None:
        logger.info(
            "step_end",
            build_id=request.id,
            step=record.name,
            kind=str(record.kind),
            success=record.success,
            duration_ms=record.duration_ms,
        )

    async def on_publish(self, request: BuildRequest, target: str | SyncDescriptor) -> None:
        if isinstance(target, SyncDescriptor):
            logger.info(
                "publish",
                build_id=request.id,
                prefix=target.prefix,
                directory=target.directory,
            )
        else:
            logger.info("publish", build_id=request.id, publish_path=target)

    async def on_build_end(self, result: BuildResult) -> None:
        logger.info(
            "build_end",
            build_id=result.request.id,
            success=result.success,
            published=result.published,
            steps=len(result.steps),
            duration_ms=result.duration_ms,
        )

    async def on_error(self, request: BuildRequest, error: Exception) -> None:
        logger.error("build_error", build_id=request.id, error=str(error), exc_info=error)


class CompositeBuildCallbackHandler(BuildCallbackHandler):
    """Fans out all callback calls to multiple handlers.

    Each handler is called in order. Exceptions from individual handlers are
    caught and logged so one failing handler does not block the others or
    the build itself.
    """

    def __init__(self, handlers: list[BuildCallbackHandler]) -> None:
        self._handlers = list(handlers)

    def _report(self, event: str, handler: BuildCallbackHandler, exc: Exception) -> None:
        logger.warning(
            "callback_handler_error",
            callback_event=event,
            handler=type(handler).__name__,
            error=str(exc),
        )

    async def on_build_start(self, request: BuildRequest, engine: Engine) -> None:
        for handler in self._handlers:
            try:
                await handler.on_build_start(request, engine)
            except Exception as exc:  # noqa: BLE001
                self._report("on_build_start", handler, exc)

    async def on_step_start(self, request: BuildRequest, step_name: str) -> None:
        for handler in self._handlers:
            try:
                await handler.on_step_start(request, step_name)
            except Exception as exc:  # noqa: BLE001
                self._report("on_step_start", handler, exc)

    async def on_step_end(self, request: BuildRequest, record: StepRecord) -> None:
        for handler in self._handlers:
            try:
                await handler.on_step_end(request, record)
            except Exception as exc:  # noqa: BLE001
                self._report("on_step_end", handler, exc)

    async def on_publish(self, request: BuildRequest, target: str | SyncDescriptor) -> None:
        for handler in self._handlers:
            try:
                await handler.on_publish(request, target)
            except Exception as exc:  # noqa: BLE001
                self._report("on_publish", handler, exc)

    async def on_build_end(self, result: BuildResult) -> None:
        for handler in self._handlers:
            try:
                await handler.on_build_end(result)
            except Exception as exc:  # noqa: BLE001
                self._report("on_build_end", handler, exc)

    async def on_error(self, request: BuildRequest, error: Exception) -> None:
        for handler in self._handlers:
            try:
                await handler.on_error(request, error)
            except Exception as exc:  # noqa: BLE001
                self._report("on_error", handler, exc)
