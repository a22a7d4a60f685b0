"""Port for removing stale extracted artifacts."""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class ArtifactCleanupPort(Protocol):
    async def cleanup(self, directory: Path) -> int: ...
    def schedule(self, directory: Path) -> Optional[str]: ...
