"""
ebbinghaus.progress
-------------------

This module defines the ProgressRecord class.

Classes:
    ProgressRecord: The review progress of a single word.
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
import json
from typing import Any, TypedDict
from typing_extensions import Self
from ebbinghaus.dates import current_date, parse_date
from ebbinghaus.word import WordId


class ProgressRecordDict(TypedDict):
    """
    JSON-serializable dictionary representation of a ProgressRecord object.
    """

    id: WordId
    stageIndex: int
    nextReviewDate: str


@dataclass(init=False)
class ProgressRecord:
    """
    Represents the review progress of one word.

    Attributes:
        id: The id of the word this record belongs to.
        stage_index: Index into the scheduler's interval ladder.
        next_review_date: The day the word is due for review next.
    """

    id: WordId
    stage_index: int
    next_review_date: date

    def __init__(
        self,
        id: WordId,
        stage_index: int = 0,
        next_review_date: date | str | None = None,
    ) -> None:
        self.id = id
        self.stage_index = stage_index

        if next_review_date is None:
            next_review_date = current_date()
        self.next_review_date = parse_date(next_review_date)

    def is_due(self, today: date | str | None = None) -> bool:
        """
        Whether the word is due for review on the given day.

        A word is due when its next review date is on or before that day.
        """

        if today is None:
            today = current_date()

        return self.next_review_date <= parse_date(today)

    def to_dict(self) -> ProgressRecordDict:
        """
        Returns a JSON-serializable dictionary representation of the ProgressRecord object.

        The review date is written as a zero-padded YYYY-MM-DD string.

        Returns:
            A dictionary representation of the ProgressRecord object.
        """

        return {
            "id": self.id,
            "stageIndex": self.stage_index,
            "nextReviewDate": self.next_review_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, source_dict: ProgressRecordDict | Mapping[str, Any]) -> Self:
        """
        Creates a ProgressRecord object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing ProgressRecord object.

        Returns:
            A ProgressRecord object created from the provided dictionary.
        """

        return cls(
            id=source_dict["id"],
            stage_index=int(source_dict["stageIndex"]),
            next_review_date=parse_date(source_dict["nextReviewDate"]),
        )

    def to_json(self, indent: int | str | None = None) -> str:
        """
        Returns a JSON-serialized string of the ProgressRecord object.

        Args:
            indent: Equivalent argument to the indent in json.dumps()

        Returns:
            str: A JSON-serialized string of the ProgressRecord object.
        """

        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str) -> Self:
        """
        Creates a ProgressRecord object from a JSON-serialized string.

        Args:
            source_json: A JSON-serialized string of an existing ProgressRecord object.

        Returns:
            Self: A ProgressRecord object created from the JSON string.
        """

        source_dict: ProgressRecordDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict)


__all__ = ["ProgressRecord"]
