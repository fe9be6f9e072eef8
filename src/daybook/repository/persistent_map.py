# SPDX-License-Identifier: MIT

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

logger = logging.getLogger(__name__)


class PersistentJsonMap:
    """A JSON document on disk that is always rewritten as a whole.

    Reads are best-effort: a missing or corrupt file reads as empty. Writes go
    to a temp file in the same directory which then replaces the target, so a
    crash mid-write leaves the previous file in place.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._loading = False

    @property
    def is_loading(self) -> bool:
        return self._loading

    @contextmanager
    def loading(self) -> Iterator[None]:
        """Suppress saves while in-memory state is being repopulated from disk."""
        previous = self._loading
        self._loading = True
        try:
            yield
        finally:
            self._loading = previous

    def read(self) -> Optional[Any]:
        if not self.path.is_file():
            return None
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Could not read %s", self.path, exc_info=True)
            return None

    def load(self) -> dict[str, Any]:
        document = self.read()
        if not isinstance(document, dict):
            if document is not None:
                logger.warning("Ignoring %s: top-level value is not an object", self.path)
            return {}
        return document

    def save(self, document: Any) -> bool:
        if self._loading:
            logger.debug("Save of %s suppressed while loading", self.path)
            return False

        tmp_name: Optional[str] = None
        try:
            text = json.dumps(document, indent=2, sort_keys=True, ensure_ascii=False)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.stem}-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(text + "\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
            return True
        except (OSError, TypeError, ValueError):
            logger.warning("Could not save %s", self.path, exc_info=True)
            return False
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
