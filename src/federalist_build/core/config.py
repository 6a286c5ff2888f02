from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field

from federalist_build.core.constants import DEFAULT_GIT_HOST, Platform


def _host_platform() -> Platform:
    return Platform.WINDOWS if os.name == "nt" else Platform.POSIX


class RemoteSyncTarget(BaseModel):
    """Opaque descriptor of a remote hosting target.

    Only its presence matters to the build core: it switches publishing from
    the local publish tree to the remote synchronisation client.
    """

    name: str
    settings: dict[str, Any] = Field(default_factory=dict)


class BuildConfig(BaseModel):
    temp_dir: str = "tmp"
    publish_dir: str = "publish"
    work_dir: Path | None = None
    """Working directory for every subprocess; token paths are relative to it."""
    remote_sync: RemoteSyncTarget | None = None
    platform: Platform = Field(default_factory=_host_platform)
    git_host: str = DEFAULT_GIT_HOST
    command_timeout: float | None = Field(default=None, ge=1)
    """Per-process deadline in seconds. ``None`` waits for the process indefinitely."""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def publishes_remotely(self) -> bool:
        return self.remote_sync is not None

    @classmethod
    def from_env(cls) -> BuildConfig:
        """Create a :class:`BuildConfig` from ``FEDERALIST_*`` environment variables.

        Reads the following env vars (all optional):

        * ``FEDERALIST_TEMP_DIR`` → ``temp_dir``
        * ``FEDERALIST_PUBLISH_DIR`` → ``publish_dir``
        * ``FEDERALIST_WORK_DIR`` → ``work_dir``
        * ``FEDERALIST_REMOTE_SYNC`` → ``remote_sync`` (target name; enables remote publishing)
        * ``FEDERALIST_PLATFORM`` → ``platform`` (``posix`` or ``windows``)
        * ``FEDERALIST_GIT_HOST`` → ``git_host``
        * ``FEDERALIST_COMMAND_TIMEOUT`` → ``command_timeout`` (seconds)
        * ``FEDERALIST_LOG_LEVEL`` → ``log_level``

        Any variable that is not set or is empty is left at its default value.
        """
        kwargs: dict[str, Any] = {}

        temp_dir = os.environ.get("FEDERALIST_TEMP_DIR")
        if temp_dir:
            kwargs["temp_dir"] = temp_dir

        publish_dir = os.environ.get("FEDERALIST_PUBLISH_DIR")
        if publish_dir:
            kwargs["publish_dir"] = publish_dir

        work_dir = os.environ.get("FEDERALIST_WORK_DIR")
        if work_dir:
            kwargs["work_dir"] = Path(work_dir)

        remote = os.environ.get("FEDERALIST_REMOTE_SYNC")
        if remote:
            kwargs["remote_sync"] = RemoteSyncTarget(name=remote)

        platform = os.environ.get("FEDERALIST_PLATFORM")
        if platform:
            kwargs["platform"] = platform

        git_host = os.environ.get("FEDERALIST_GIT_HOST")
        if git_host:
            kwargs["git_host"] = git_host

        timeout_str = os.environ.get("FEDERALIST_COMMAND_TIMEOUT")
        if timeout_str:
            kwargs["command_timeout"] = float(timeout_str)

        log_level = os.environ.get("FEDERALIST_LOG_LEVEL")
        if log_level:
            kwargs["log_level"] = log_level

        return cls(**kwargs)
