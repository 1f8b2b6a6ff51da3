"""Local save file: where snapshot bytes live between runs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class SaveStore:
    """Reads and atomically writes one JSON save file."""

    __slots__ = ("_path",)

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> str | None:
        """Return the saved text, or None if there is nothing readable."""
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read save file %s: %s", self._path, exc)
            return None

    def write(self, text: str) -> None:
        """Write via a temp file and rename so a crash never leaves half a save."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, self._path)
        logger.info("Game saved to %s (%d bytes)", self._path, len(text))
