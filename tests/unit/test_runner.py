"""Tests for process/runner.py — runs real child processes via the current interpreter."""
from __future__ import annotations

import asyncio
import sys

import pytest

from federalist_build.core.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    CommandTimeoutError,
    ProcessError,
)
from federalist_build.core.types import ProcessResult
from federalist_build.process.runner import ProcessRunner, Runner


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


# ---------------------------------------------------------------------------
# Success
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_run_captures_stdout() -> None:
    result = await ProcessRunner().run(_py("print('hello')"))
    assert isinstance(result, ProcessResult)
    assert result.ok is True
    assert result.returncode == 0
    assert result.stdout.strip() == "hello"
    assert result.duration_ms >= 0


@pytest.mark.asyncio
async def test_stderr_alone_is_not_a_failure() -> None:
    result = await ProcessRunner().run(_py("import sys; sys.stderr.write('warning')"))
    assert result.ok is True
    assert result.stderr == "warning"


@pytest.mark.asyncio
async def test_env_is_merged_into_parent_environment() -> None:
    code = "import os; print(os.environ['FB_TEST'], 'PATH' in os.environ)"
    result = await ProcessRunner().run(_py(code), env={"FB_TEST": "value"})
    assert result.stdout.split() == ["value", "True"]


@pytest.mark.asyncio
async def test_cwd_is_used(tmp_path) -> None:
    result = await ProcessRunner(cwd=tmp_path).run(_py("import os; print(os.getcwd())"))
    assert result.stdout.strip() == str(tmp_path.resolve())


def test_process_runner_satisfies_runner_protocol() -> None:
    assert isinstance(ProcessRunner(), Runner)


def test_repr() -> None:
    assert repr(ProcessRunner(cwd="w", timeout=5)) == "ProcessRunner(cwd='w', timeout=5)"


# ---------------------------------------------------------------------------
# Failure
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_non_zero_exit_raises_with_streams() -> None:
    code = "import sys; print('out'); sys.stderr.write('err'); sys.exit(3)"
    with pytest.raises(CommandFailedError) as exc_info:
        await ProcessRunner().run(_py(code))
    error = exc_info.value
    assert error.returncode == 3
    assert error.stdout.strip() == "out"
    assert error.stderr == "err"
    assert error.argv[0] == sys.executable
    assert error.code == "ERR_EXIT"
    assert "status 3" in str(error)


@pytest.mark.asyncio
async def test_missing_executable_raises_spawn_error() -> None:
    with pytest.raises(CommandSpawnError) as exc_info:
        await ProcessRunner().run(["definitely-not-a-real-binary-fb"])
    assert exc_info.value.returncode is None
    assert isinstance(exc_info.value, ProcessError)


@pytest.mark.asyncio
async def test_timeout_kills_process() -> None:
    runner = ProcessRunner(timeout=0.2)
    with pytest.raises(CommandTimeoutError) as exc_info:
        await runner.run(_py("import time; time.sleep(30)"))
    assert exc_info.value.code == "ERR_TIMEOUT"


@pytest.mark.asyncio
async def test_timeout_tolerates_child_exiting_before_kill(monkeypatch) -> None:
    real_kill = asyncio.subprocess.Process.kill

    def kill_after_exit(self) -> None:
        real_kill(self)
        raise ProcessLookupError

    monkeypatch.setattr(asyncio.subprocess.Process, "kill", kill_after_exit)
    with pytest.raises(CommandTimeoutError):
        await ProcessRunner(timeout=0.2).run(_py("import time; time.sleep(30)"))


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_concurrent_runs_do_not_block_each_other() -> None:
    runner = ProcessRunner()
    loop = asyncio.get_running_loop()
    start = loop.time()
    results = await asyncio.gather(
        *(runner.run(_py("import time; time.sleep(0.5)")) for _ in range(4))
    )
    elapsed = loop.time() - start
    assert all(r.ok for r in results)
    assert elapsed < 1.9
