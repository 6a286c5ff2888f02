"""Publishing of a built site.

Two mutually exclusive policies, chosen once from :class:`BuildConfig`:

* **remote** (``config.remote_sync`` set): hand the destination directory to
  the :class:`RemoteSync` client under the site's publish prefix.
* **local**: replace the site's directory in the local publish tree with a
  copy of the destination directory.

Nothing is cleaned up when publishing fails; the next build of the same
branch starts by cleaning its working directories.
"""

from __future__ import annotations

import structlog

from federalist_build.commands.platform import filesystem_commands
from federalist_build.commands.templates import CommandTemplate
from federalist_build.core.config import BuildConfig
from federalist_build.core.exceptions import BuildError, ConfigurationError, RemoteSyncError
from federalist_build.core.types import BuildRequest, SyncDescriptor, TokenSet
from federalist_build.process.runner import Runner
from federalist_build.publish.remote import RemoteSync

logger = structlog.get_logger(__name__)


class PublishDispatcher:
    def __init__(
        self,
        config: BuildConfig,
        runner: Runner,
        remote: RemoteSync | None = None,
    ) -> None:
        if config.publishes_remotely and remote is None:
            raise ConfigurationError(
                "Remote sync target is configured but no RemoteSync client was provided",
                details={"target": config.remote_sync.name if config.remote_sync else None},
            )
        self._config = config
        self._runner = runner
        self._remote = remote

    def __repr__(self) -> str:
        policy = "remote" if self._config.publishes_remotely else "local"
        return f"PublishDispatcher(policy={policy!r})"

    @property
    def is_remote(self) -> bool:
        return self._config.publishes_remotely

    def target(self, tokens: TokenSet) -> str | SyncDescriptor:
        """Where *tokens*' build will be published under the active policy."""
        if self.is_remote:
            return SyncDescriptor(prefix=tokens.publish_prefix, directory=tokens.destination_path)
        return tokens.publish_path

    def local_commands(self) -> list[CommandTemplate]:
        fs = filesystem_commands(self._config.platform)
        return [
            fs.clean("${publishPath}"),
            fs.make("${publishPath}"),
            fs.copy("${destinationPath}", "${publishPath}"),
        ]

    async def publish(self, tokens: TokenSet, request: BuildRequest) -> None:
        """Publish the destination directory of a successful build.

        Raises:
            RemoteSyncError: If the remote synchronisation client fails.
            ProcessError: If a local publish command fails.
        """
        if self.is_remote:
            await self._publish_remote(tokens, request)
        else:
            await self._publish_local(tokens, request)

    async def _publish_remote(self, tokens: TokenSet, request: BuildRequest) -> None:
        assert self._remote is not None  # guaranteed by __init__
        descriptor = SyncDescriptor(
            prefix=tokens.publish_prefix,
            directory=tokens.destination_path,
        )
        target = self._config.remote_sync.name if self._config.remote_sync else None
        logger.info("publish_start", build_id=request.id, target=target, prefix=descriptor.prefix)
        try:
            await self._remote.sync(descriptor)
        except BuildError:
            raise
        except Exception as exc:
            raise RemoteSyncError(
                f"Remote sync of {descriptor.prefix!r} failed: {exc}",
                details={"prefix": descriptor.prefix, "directory": descriptor.directory},
            ) from exc
        logger.info("publish_complete", build_id=request.id, target=target)

    async def _publish_local(self, tokens: TokenSet, request: BuildRequest) -> None:
        logger.info("publish_start", build_id=request.id, target=tokens.publish_path)
        for command in self.local_commands():
            await self._runner.run(command.render(tokens))
        logger.info("publish_complete", build_id=request.id, target=tokens.publish_path)
