"""
Module 04 - Migration Ledger
File: store.py

Purpose: Storage backends for the ledger document.

- InMemoryLedgerStore: process-local, for tests and previews
- JsonFileLedgerStore: durable; every save writes a complete canonical
  JSON snapshot to a temp file in the same directory, fsyncs it and
  atomically replaces the previous file. A crash leaves either the old
  or the new snapshot on disk, never a mix.

Every store also hands out a lock through `locked()`. The ledger holds
it around each load-modify-save, so all processes sharing one store
see a single serial history. For the JSON store it is an flock on a
`<ledger>.lock` file next to the ledger.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import ContextManager, Iterator, Protocol

from pydantic import ValidationError

from core.ledger.state import LedgerState
from core.schemas.canonical import dumps_canonical
from core.schemas.errors import LedgerStorageException
from core.schemas.versioning import (
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
)


logger = logging.getLogger(__name__)


class LedgerStore(Protocol):
    """Persistence backend for LedgerState."""

    def load(self) -> LedgerState:
        """Return the last saved state (empty state if none)."""
        ...

    def save(self, state: LedgerState) -> None:
        """Durably replace the saved state."""
        ...

    def locked(self, exclusive: bool = True) -> ContextManager[None]:
        """Hold the store lock; shared for readers, exclusive for writers."""
        ...


class InMemoryLedgerStore:
    """Keeps the snapshot in memory. Nothing survives the process."""

    def __init__(self, initial: LedgerState | None = None) -> None:
        self._state = (initial or LedgerState()).model_copy(deep=True)
        self._lock = threading.RLock()

    def load(self) -> LedgerState:
        return self._state.model_copy(deep=True)

    def save(self, state: LedgerState) -> None:
        self._state = state.model_copy(deep=True)

    @contextmanager
    def locked(self, exclusive: bool = True) -> Iterator[None]:
        with self._lock:
            yield


class JsonFileLedgerStore:
    """Durable single-file JSON store with atomic replacement."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    @contextmanager
    def locked(self, exclusive: bool = True) -> Iterator[None]:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(self.lock_path, "a")
        except OSError as e:
            raise LedgerStorageException(
                f"Failed to open ledger lock: {e}",
                path=str(self.lock_path),
            ) from e

        with handle:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX if exclusive else fcntl.LOCK_SH)
            try:
                yield
            finally:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


    def load(self) -> LedgerState:
        if not self.path.exists():
            logger.debug(f"No ledger at {self.path}, starting empty")
            return LedgerState()

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("ledger file must hold a JSON object")
            assert_supported_schema_version(data.get("schema_version", ""))
            return LedgerState.model_validate(data)
        except (OSError, ValueError, ValidationError, UnsupportedSchemaVersionError) as e:
            raise LedgerStorageException(
                f"Failed to load ledger: {e}",
                path=str(self.path),
            ) from e

    def save(self, state: LedgerState) -> None:
        content = dumps_canonical(state, indent=2) + "\n"
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise LedgerStorageException(
                f"Failed to save ledger: {e}",
                path=str(self.path),
            ) from e
