from __future__ import annotations

from typing import Any, Sequence


class BuildError(Exception):
    """Base exception for all build and publish errors.

    Attributes:
        code: Optional machine-readable error code (e.g. ``"ERR_CLONE"``).
        details: Arbitrary key/value context about the error.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}

    @property
    def is_retryable(self) -> bool:
        """Build failures are never retried automatically."""
        return False


class ConfigurationError(BuildError): ...


class CredentialLookupError(BuildError): ...


class TemplateError(BuildError): ...


class PublishError(BuildError): ...


class RemoteSyncError(PublishError): ...


# ---------------------------------------------------------------------------
# Process execution
# ---------------------------------------------------------------------------


class ProcessError(BuildError):
    """A child process could not be run to a successful exit.

    Attributes:
        argv: The argument vector that was executed.
        returncode: Exit status, ``None`` when the process never ran to exit.
        stdout: Captured standard output (may be empty).
        stderr: Captured standard error (may be empty).
    """

    def __init__(
        self,
        message: str,
        argv: Sequence[str],
        *,
        returncode: int | None = None,
        stdout: str = "",
        stderr: str = "",
        code: str | None = None,
    ) -> None:
        super().__init__(
            message,
            code=code,
            details={"argv": list(argv), "returncode": returncode},
        )
        self.argv = list(argv)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class CommandFailedError(ProcessError):
    """The process exited with a non-zero status."""


class CommandSpawnError(ProcessError):
    """The process could not be started (missing executable, permissions)."""


class CommandTimeoutError(ProcessError):
    """The process exceeded the configured deadline and was killed."""
