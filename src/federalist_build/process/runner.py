from __future__ import annotations

import asyncio
import contextlib
import os
import time
from pathlib import Path
from typing import Mapping, Protocol, Sequence, runtime_checkable

import structlog

from federalist_build.core.exceptions import (
    CommandFailedError,
    CommandSpawnError,
    CommandTimeoutError,
)
from federalist_build.core.types import ProcessResult
from federalist_build.utils.async_helpers import with_timeout

logger = structlog.get_logger(__name__)


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


@runtime_checkable
class Runner(Protocol):
    async def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult: ...


class ProcessRunner:
    """Run one command in a child process and capture its output.

    Commands are executed directly from their argument vector; no shell is
    involved. Only a non-zero exit, a failure to spawn or an exceeded deadline
    count as failure. Output on stderr alone does not.

    Args:
        cwd: Working directory for every command (defaults to the current one).
        timeout: Optional deadline in seconds per command.
    """

    def __init__(self, cwd: Path | str | None = None, timeout: float | None = None) -> None:
        self._cwd = cwd
        self._timeout = timeout

    def __repr__(self) -> str:
        return f"ProcessRunner(cwd={self._cwd!r}, timeout={self._timeout!r})"

    async def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        """Execute *argv* and wait for it to exit.

        *env* entries are added on top of the parent environment. They are
        never logged.

        Raises:
            CommandSpawnError: If the process cannot be started.
            CommandFailedError: If the process exits with a non-zero status.
            CommandTimeoutError: If the configured deadline is exceeded.
        """
        args = list(argv)
        child_env = {**os.environ, **env} if env else None
        start_ms = _now_ms()
        logger.debug("process_start", argv=args, cwd=str(self._cwd) if self._cwd else None)

        try:
            proc = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self._cwd,
                env=child_env,
            )
        except OSError as exc:
            logger.warning("process_spawn_failed", argv=args, error=str(exc))
            raise CommandSpawnError(
                f"Could not start {args[0]!r}: {exc}", args, code="ERR_SPAWN"
            ) from exc

        try:
            out, err = await with_timeout(proc.communicate(), self._timeout)
        except asyncio.TimeoutError as exc:
            # the child may exit on its own before the kill lands
            with contextlib.suppress(ProcessLookupError):
                proc.kill()
            await proc.wait()
            logger.warning("process_timeout", argv=args, timeout=self._timeout)
            raise CommandTimeoutError(
                f"Command {args[0]!r} exceeded {self._timeout}s",
                args,
                code="ERR_TIMEOUT",
            ) from exc

        stdout = out.decode(errors="replace")
        stderr = err.decode(errors="replace")
        if stdout:
            logger.debug("process_stdout", argv=args, output=stdout)
        if stderr:
            logger.debug("process_stderr", argv=args, output=stderr)

        returncode = proc.returncode if proc.returncode is not None else -1
        if returncode != 0:
            raise CommandFailedError(
                f"Command {' '.join(args)!r} exited with status {returncode}",
                args,
                returncode=returncode,
                stdout=stdout,
                stderr=stderr,
                code="ERR_EXIT",
            )

        return ProcessResult(
            argv=args,
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
            duration_ms=_now_ms() - start_ms,
        )
