"""
ebbinghaus.word
---------------

This module defines the WordEntry class and the helpers that build a word catalog.

Classes:
    WordEntry: A single vocabulary entry in a catalog.

Functions:
    load_catalog: Builds an ordered, id-unique catalog of WordEntry objects.
"""

from __future__ import annotations
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
import json
import logging
import os
from pathlib import Path
from typing import Any, TypedDict, Union
from typing_extensions import NotRequired, Self

logger = logging.getLogger(__name__)

WordId = Union[int, str]


class WordEntryDict(TypedDict):
    """
    JSON-serializable dictionary representation of a WordEntry object.
    """

    id: WordId
    word: str
    phonetic: NotRequired[str | None]
    pos: NotRequired[str | None]
    meaningZh: str


@dataclass(frozen=True)
class WordEntry:
    """
    Represents a vocabulary entry.

    Attributes:
        id: Unique, stable identifier of the entry. Used as the key for its review progress,
            so ids must also stay unique once converted to strings.
        word: The word being learned.
        meaning_zh: The translated meaning shown on the back of the card.
        phonetic: The phonetic transcription, if any.
        pos: The part of speech, if any.
    """

    id: WordId
    word: str
    meaning_zh: str
    phonetic: str | None = None
    pos: str | None = None

    def to_dict(self) -> WordEntryDict:
        """
        Returns a JSON-serializable dictionary representation of the WordEntry object.

        Returns:
            A dictionary representation of the WordEntry object.
        """

        return {
            "id": self.id,
            "word": self.word,
            "phonetic": self.phonetic,
            "pos": self.pos,
            "meaningZh": self.meaning_zh,
        }

    @classmethod
    def from_dict(cls, source_dict: WordEntryDict | Mapping[str, Any]) -> Self:
        """
        Creates a WordEntry object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing WordEntry object.

        Returns:
            A WordEntry object created from the provided dictionary.
        """

        return cls(
            id=source_dict["id"],
            word=source_dict["word"],
            meaning_zh=source_dict["meaningZh"],
            phonetic=source_dict.get("phonetic") or None,
            pos=source_dict.get("pos") or None,
        )

    def to_json(self, indent: int | str | None = None) -> str:
        """
        Returns a JSON-serialized string of the WordEntry object.

        Args:
            indent: Equivalent argument to the indent in json.dumps()

        Returns:
            str: A JSON-serialized string of the WordEntry object.
        """

        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        """
        Creates a WordEntry object from a JSON-serialized string.

        Args:
            source_json: A JSON-serialized string of an existing WordEntry object.

        Returns:
            Self: A WordEntry object created from the JSON string.
        """

        source_dict: WordEntryDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)


def load_catalog(
    source: Iterable[WordEntry | Mapping[str, Any]] | str | os.PathLike[str],
) -> tuple[WordEntry, ...]:
    """
    Builds an ordered word catalog.

    Args:
        source: Either an iterable of WordEntry objects or word dictionaries, a JSON string
            holding a list of word dictionaries, or the path to a JSON file holding such a list.

    Returns:
        tuple[WordEntry, ...]: The catalog, in source order.

    Raises:
        ValueError: If two entries share the same id, or ids that are equal as strings.
    """

    if isinstance(source, os.PathLike):
        source = json.loads(Path(source).read_text(encoding="utf-8"))
    elif isinstance(source, str):
        if source.lstrip().startswith("["):
            source = json.loads(source)
        else:
            source = json.loads(Path(source).read_text(encoding="utf-8"))

    catalog = tuple(
        entry if isinstance(entry, WordEntry) else WordEntry.from_dict(entry)
        for entry in source
    )

    # ids are stored as JSON object keys, so 1 and "1" collide
    seen: set[str] = set()
    duplicates = []
    for entry in catalog:
        if str(entry.id) in seen:
            duplicates.append(entry.id)
        seen.add(str(entry.id))

    if len(duplicates) > 0:
        raise ValueError(f"Duplicate word ids in catalog: {duplicates}")

    logger.debug("Loaded catalog of %d words", len(catalog))

    return catalog


__all__ = ["WordEntry", "WordId", "load_catalog"]
