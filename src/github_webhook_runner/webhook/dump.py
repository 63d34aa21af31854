"""Debug helper: persist every verified payload body to disk.

Plug it into `WebhookHandler(on_verified=PayloadDumper(dir))`. Files are named
`<event>-<UTC timestamp>.json` and hold the raw body exactly as received.
"""

from __future__ import annotations

import logging
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def _now() -> str:
    stamp = datetime.now(tz=UTC)
    return stamp.strftime("%Y-%m-%d at %I.%M.%S.") + f"{stamp.microsecond // 1000:03d}"


def _write_file(path: Path, data: bytes) -> None:
    with path.open("wb") as f:
        f.write(data)
        f.flush()
        os.fsync(f.fileno())


class PayloadDumper:
    """Writes `(event, body)` pairs into `directory`.

    An empty directory means a fresh temporary one. A relative directory is made
    absolute and created if needed; failures there are raised immediately.
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        if not directory:
            self.directory = Path(tempfile.mkdtemp(prefix="webhook"))
        else:
            self.directory = Path(directory).resolve()
            self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, event: str) -> Path:
        if event:
            return self.directory / f"{event}-{_now()}.json"
        return self.directory / _now()

    def __call__(self, event: str, body: bytes) -> None:
        path = self.path_for(event)
        try:
            _write_file(path, body)
        except OSError:
            logger.exception("Error writing payload dump", extra={"path": str(path)})
            return
        logger.info("Payload dump written", extra={"path": str(path), "event": event})
