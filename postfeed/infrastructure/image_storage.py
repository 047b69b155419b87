"""Local Image Storage — writes uploaded images to the configured directory.

Invariants:
    - Stored name is <epoch-millis><original basename> (directory parts stripped)
    - A file over max_bytes is never left on disk: partial writes are removed
    - The spooled upload is copied to disk in fixed-size chunks; copying stops
      as soon as max_bytes is exceeded

Design Decisions:
    - Same naming scheme as the existing web client expects; two uploads of the
      same filename in the same millisecond collide and the later one wins
"""

import logging
import time
from pathlib import Path
from typing import Protocol

from postfeed.core.errors import StorageError, UploadTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 64 * 1024


class UploadSource(Protocol):
    """The subset of fastapi.UploadFile used here."""
    filename: str | None

    async def read(self, size: int = -1) -> bytes: ...


def stored_filename(original: str | None, now_ms: int | None = None) -> str:
    """Build the on-disk name for an upload."""
    basename = Path(original or "").name or "upload"
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{stamp}{basename}"


class LocalImageStorage:
    """Stores uploads under a single directory on the local filesystem."""

    def __init__(self, upload_dir: str | Path, max_bytes: int):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes

    async def save(self, upload: UploadSource) -> Path:
        """Stream upload to disk. Raises UploadTooLargeError past max_bytes."""
        target = self.upload_dir / stored_filename(upload.filename)
        written = 0
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with target.open("wb") as out:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        break
                    out.write(chunk)
        except OSError as e:
            target.unlink(missing_ok=True)
            logger.error(f"Failed to store upload: {e}", extra={"stored_name": target.name})
            raise StorageError(str(e))

        if written > self.max_bytes:
            target.unlink(missing_ok=True)
            logger.warning(
                f"Upload rejected, over {self.max_bytes} bytes",
                extra={"stored_name": target.name},
            )
            raise UploadTooLargeError(self.max_bytes)

        logger.info(f"Stored upload ({written} bytes)", extra={"stored_name": target.name})
        return target
