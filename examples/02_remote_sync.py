# RUN: python examples/02_remote_sync.py
"""Remote sync — publish through a RemoteSync client instead of a local tree.

Demonstrates: RemoteSyncTarget in BuildConfig, a custom RemoteSync client,
and a preview (non-default branch) build. Build commands are only printed.
"""

import asyncio
from typing import Mapping, Sequence

from federalist_build import (
    BuildConfig,
    BuildRequest,
    InMemoryCredentialStore,
    ProcessResult,
    RemoteSyncTarget,
    Site,
    SiteBuilder,
    SyncDescriptor,
    User,
)


class PrintingRunner:
    """Prints each command instead of running it."""

    async def run(
        self, argv: Sequence[str], *, env: Mapping[str, str] | None = None
    ) -> ProcessResult:
        print("  $", " ".join(argv))
        return ProcessResult(argv=list(argv), returncode=0)


class PrintingSync:
    async def sync(self, descriptor: SyncDescriptor) -> None:
        print(f"  sync {descriptor.directory} -> {descriptor.prefix}")


async def main() -> None:
    config = BuildConfig(remote_sync=RemoteSyncTarget(name="webapp"))
    builder = SiteBuilder(
        config,
        credentials=InMemoryCredentialStore({"u1": "ghp_example"}),
        runner=PrintingRunner(),
        remote=PrintingSync(),
    )

    request = BuildRequest(
        site=Site(owner="acme", repository="site1", default_branch="main", engine="hugo"),
        branch="redesign",
        user=User(id="u1"),
    )

    print("Building preview of acme/site1@redesign with Hugo")
    result = await builder.build(request)
    print(f"Success: {result.success}, published: {result.published}")


if __name__ == "__main__":
    asyncio.run(main())
