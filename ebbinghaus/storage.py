"""
ebbinghaus.storage
------------------

Key-value slots that hold the serialized progress store.

Every write replaces the whole value stored under a key.

Classes:
    Storage: Protocol implemented by every storage backend.
    MemoryStorage: A storage backed by a dictionary.
    JSONFileStorage: A storage backed by a single JSON file on disk.
"""

from __future__ import annotations
import json
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    """
    A durable key-value slot store.
    """

    def get(self, key: str) -> str | None:
        """Returns the value stored under `key`, or None if nothing is stored."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replaces the value stored under `key`."""
        ...


class MemoryStorage:
    """
    Storage kept in a dictionary for the lifetime of the object.
    """

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def __repr__(self) -> str:
        return f"MemoryStorage(keys={sorted(self._values)})"


class JSONFileStorage:
    """
    Storage kept in one JSON object file, mapping each key to its string value.

    The whole file is rewritten on every `set`. A missing file reads as empty.
    A file that cannot be parsed also reads as empty and is overwritten on the next `set`.

    Attributes:
        path: Location of the JSON file.
    """

    path: Path

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            values = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Discarding unreadable storage file %s: %s", self.path, e)
            return {}

        if not isinstance(values, dict):
            logger.warning(
                "Discarding storage file %s: expected a JSON object, got %s",
                self.path,
                type(values).__name__,
            )
            return {}

        return values

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is not None and not isinstance(value, str):
            return json.dumps(value)
        return value

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(
            json.dumps(values, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        os.replace(tmp_path, self.path)

    def __repr__(self) -> str:
        return f"JSONFileStorage(path={str(self.path)!r})"


__all__ = ["Storage", "MemoryStorage", "JSONFileStorage"]
