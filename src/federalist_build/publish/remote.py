from __future__ import annotations

from typing import Protocol, runtime_checkable

from federalist_build.core.types import SyncDescriptor


@runtime_checkable
class RemoteSync(Protocol):
    """Client of the remote hosting synchronisation service.

    Uploads the contents of ``descriptor.directory`` under
    ``descriptor.prefix``. Raises on failure; returning means success.
    """

    async def sync(self, descriptor: SyncDescriptor) -> None: ...
