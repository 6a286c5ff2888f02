"""Tests for callbacks/handler.py."""
from __future__ import annotations

import pytest

from federalist_build.callbacks.handler import (
    BuildCallbackHandler,
    CompositeBuildCallbackHandler,
    LoggingBuildCallbackHandler,
)
from federalist_build.core.constants import Engine, StepKind
from federalist_build.core.types import BuildResult, StepRecord, SyncDescriptor


def _record(success: bool = True) -> StepRecord:
    return StepRecord(name="clone", kind=StepKind.FETCH, success=success, duration_ms=12)


class ConcreteHandler(BuildCallbackHandler):
    """Minimal concrete subclass — uses all default no-op implementations."""


class RecordingHandler(BuildCallbackHandler):
    def __init__(self) -> None:
        self.events: list[str] = []

    async def on_build_start(self, request, engine) -> None:
        self.events.append(f"start:{engine}")

    async def on_step_end(self, request, record) -> None:
        self.events.append(f"step:{record.name}")

    async def on_build_end(self, result) -> None:
        self.events.append(f"end:{result.success}")


class ExplodingHandler(BuildCallbackHandler):
    async def on_build_start(self, request, engine) -> None:
        raise RuntimeError("handler bug")

    async def on_error(self, request, error) -> None:
        raise RuntimeError("handler bug")


# ---------------------------------------------------------------------------
# BuildCallbackHandler — default no-op implementations
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_default_noops(make_request) -> None:
    h = ConcreteHandler()
    request = make_request()
    await h.on_build_start(request, Engine.STATIC)
    await h.on_step_start(request, "clone")
    await h.on_step_end(request, _record())
    await h.on_publish(request, "publish/site/acme/site1")
    await h.on_build_end(BuildResult(request=request))
    await h.on_error(request, RuntimeError("x"))


# ---------------------------------------------------------------------------
# LoggingBuildCallbackHandler
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_logging_handler_does_not_raise(make_request) -> None:
    h = LoggingBuildCallbackHandler()
    request = make_request()
    await h.on_build_start(request, Engine.JEKYLL)
    await h.on_step_start(request, "clone")
    await h.on_step_end(request, _record(success=False))
    await h.on_publish(request, "publish/site/acme/site1")
    await h.on_publish(request, SyncDescriptor(prefix="site/acme/site1", directory="d"))
    await h.on_build_end(BuildResult(request=request, error=RuntimeError("x")))
    await h.on_error(request, RuntimeError("x"))


# ---------------------------------------------------------------------------
# CompositeBuildCallbackHandler
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_composite_fans_out_in_order(make_request) -> None:
    first, second = RecordingHandler(), RecordingHandler()
    composite = CompositeBuildCallbackHandler([first, second])
    request = make_request()

    await composite.on_build_start(request, Engine.HUGO)
    await composite.on_step_end(request, _record())
    await composite.on_build_end(BuildResult(request=request))

    assert first.events == ["start:hugo", "step:clone", "end:True"]
    assert second.events == first.events


@pytest.mark.asyncio
async def test_composite_isolates_failing_handler(make_request) -> None:
    recorder = RecordingHandler()
    composite = CompositeBuildCallbackHandler([ExplodingHandler(), recorder])
    request = make_request()

    await composite.on_build_start(request, Engine.STATIC)
    await composite.on_error(request, RuntimeError("boom"))

    assert recorder.events == ["start:static"]


@pytest.mark.asyncio
async def test_composite_with_no_handlers(make_request) -> None:
    composite = CompositeBuildCallbackHandler([])
    await composite.on_step_start(make_request(), "clone")
