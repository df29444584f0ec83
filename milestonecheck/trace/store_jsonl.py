"""JSONL trace store implementation."""

import json
import sys
from pathlib import Path
from typing import IO, Iterator, Optional

from milestonecheck.trace.schema import Event

if sys.platform != "win32":
    import fcntl
else:
    fcntl = None


class JsonlTraceStore:
    """Append-only store of trace events, one JSON object per line."""

    def __init__(self, path: Path):
        """Initialize trace store.

        Args:
            path: Path to JSONL file. Parent directories will be created if needed.
        """
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._file: Optional[IO[str]] = None
        self.skipped = 0

    def open(self) -> IO[str]:
        """Open the trace file for appending, if not already open."""
        if self._file is None:
            self._file = open(self.path, "a", encoding="utf-8")
        return self._file

    def append(self, event: Event):
        """Append an event, holding an exclusive lock on Unix while writing.

        Args:
            event: Event to append.
        """
        f = self.open()
        if fcntl is not None:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
        try:
            f.write(json.dumps(event.model_dump(), ensure_ascii=False) + "\n")
            f.flush()
        finally:
            if fcntl is not None:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)

    def iter_events(self) -> Iterator[Event]:
        """Iterate over all events in the store.

        Malformed lines are skipped and counted in ``skipped``.

        Yields:
            Event objects from the trace store.
        """
        if not self.path.exists():
            return

        with open(self.path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    event = Event(**json.loads(line))
                except (TypeError, ValueError):
                    self.skipped += 1
                    continue
                yield event

    def close(self):
        """Close the trace store file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
