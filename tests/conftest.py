"""Shared test fixtures."""
from __future__ import annotations

from typing import Callable, Mapping, Sequence

import pytest

from federalist_build.core.config import BuildConfig, RemoteSyncTarget
from federalist_build.core.constants import Platform
from federalist_build.core.exceptions import CommandFailedError
from federalist_build.core.types import BuildRequest, ProcessResult, Site, User
from federalist_build.tokens.credentials import InMemoryCredentialStore


class RecordingRunner:
    """Runner stub that records every command instead of executing it.

    ``fail_at`` makes the N-th call (1-based) raise :class:`CommandFailedError`.
    """

    def __init__(self, fail_at: int | None = None) -> None:
        self.calls: list[list[str]] = []
        self.envs: list[dict[str, str] | None] = []
        self.fail_at = fail_at
        self.error: CommandFailedError | None = None

    async def run(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        self.calls.append(list(argv))
        self.envs.append(dict(env) if env is not None else None)
        if self.fail_at is not None and len(self.calls) == self.fail_at:
            self.error = CommandFailedError(
                f"step {self.fail_at} failed", argv, returncode=1, stderr="boom"
            )
            raise self.error
        return ProcessResult(argv=list(argv), returncode=0)


class FailingCredentialStore:
    def __init__(self, error: Exception) -> None:
        self.error = error

    async def get_credential(self, user_id: str) -> None:
        raise self.error


@pytest.fixture
def config() -> BuildConfig:
    return BuildConfig(temp_dir="/tmp/build", publish_dir="/srv/publish", platform=Platform.POSIX)


@pytest.fixture
def remote_config() -> BuildConfig:
    return BuildConfig(
        temp_dir="/tmp/build",
        publish_dir="/srv/publish",
        platform=Platform.POSIX,
        remote_sync=RemoteSyncTarget(name="webapp"),
    )


@pytest.fixture
def credentials() -> InMemoryCredentialStore:
    return InMemoryCredentialStore({"u1": "secret-token"})


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def make_request() -> Callable[..., BuildRequest]:
    def _make(
        branch: str = "main",
        default_branch: str = "main",
        domain: str | None = None,
        config: str = "",
        user_id: str = "u1",
        engine: str = "static",
    ) -> BuildRequest:
        return BuildRequest(
            id="job-1",
            site=Site(
                owner="acme",
                repository="site1",
                default_branch=default_branch,
                domain=domain,
                config=config,
                engine=engine,
            ),
            branch=branch,
            user=User(id=user_id),
        )

    return _make


@pytest.fixture
def make_runner() -> Callable[..., RecordingRunner]:
    return RecordingRunner


@pytest.fixture
def make_failing_store() -> Callable[[Exception], FailingCredentialStore]:
    return FailingCredentialStore
