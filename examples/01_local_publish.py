# RUN: python examples/01_local_publish.py
"""Local publish — build a public repository and copy it into ./publish.

Demonstrates: SiteBuilder with an InMemoryCredentialStore, a done-callback,
and console logging. Requires git on PATH.
"""

import asyncio

from federalist_build import (
    BuildConfig,
    BuildRequest,
    InMemoryCredentialStore,
    LoggingBuildCallbackHandler,
    Site,
    SiteBuilder,
    User,
    configure_logging_from_config,
)


def _done(error: Exception | None, request: BuildRequest) -> None:
    status = f"failed: {error}" if error else "published"
    print(f"Build {request.id} for {request.site.owner}/{request.site.repository} {status}")


async def main() -> None:
    config = BuildConfig(temp_dir="build-tmp", publish_dir="publish")
    configure_logging_from_config(config, json=False)
    builder = SiteBuilder(
        config,
        credentials=InMemoryCredentialStore(),  # anonymous: public repositories only
        callbacks=LoggingBuildCallbackHandler(),
    )

    request = BuildRequest(
        site=Site(owner="18F", repository="federalist-docs", default_branch="main"),
        branch="main",
        user=User(id="anonymous"),
    )

    result = await builder.static(request, _done)
    print(f"Steps run : {[step.name for step in result.steps]}")
    print(f"Published : {result.published}")


if __name__ == "__main__":
    asyncio.run(main())
