"""
ebbinghaus.scheduler
--------------------

This module defines the Scheduler class as well as the interval ladder it schedules with.

Classes:
    Scheduler: The Ebbinghaus spaced-repetition review scheduler.
    DueWord: A word due for review, paired with its progress record.
"""

from __future__ import annotations
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import date
import json
import logging
from typing import Any, NamedTuple, TypedDict
from typing_extensions import Self
from ebbinghaus import dates
from ebbinghaus.progress import ProgressRecord
from ebbinghaus.storage import MemoryStorage, Storage
from ebbinghaus.word import WordEntry, WordId

logger = logging.getLogger(__name__)

# review intervals in days, indexed by stage
DEFAULT_INTERVALS = (0, 1, 2, 4, 7, 15, 30)

STORAGE_KEY = "ebb_vocab_progress"

ProgressStore = dict[WordId, ProgressRecord]


class DueWord(NamedTuple):
    """
    A word due for review together with its current progress.
    """

    word: WordEntry
    progress: ProgressRecord


class SchedulerDict(TypedDict):
    """
    JSON-serializable dictionary representation of a Scheduler object's settings.
    """

    intervals: list[int]
    storage_key: str
    additive_reconcile: bool


@dataclass(init=False)
class Scheduler:
    """
    The Ebbinghaus review scheduler.

    Keeps one progress record per catalog word, selects the words due on a given day,
    and moves a word one stage up or down the interval ladder after each review.

    Attributes:
        intervals: The interval ladder. The number of days until the next review for each stage.
        storage: Where the progress store is persisted.
        storage_key: The key the progress store is persisted under.
        additive_reconcile: Add records for catalog words that have none instead of resetting every
            word's progress when the stored record count differs from the catalog size.
    """

    intervals: tuple[int, ...]
    storage: Storage = field(compare=False)
    storage_key: str
    additive_reconcile: bool

    def __init__(
        self,
        storage: Storage | None = None,
        intervals: Sequence[int] = DEFAULT_INTERVALS,
        storage_key: str = STORAGE_KEY,
        additive_reconcile: bool = False,
    ) -> None:
        self._validate_intervals(intervals=intervals)

        self.intervals = tuple(intervals)
        self.storage = storage if storage is not None else MemoryStorage()
        self.storage_key = storage_key
        self.additive_reconcile = additive_reconcile

    def _validate_intervals(self, *, intervals: Sequence[int]) -> None:
        if len(intervals) == 0:
            raise ValueError("Expected at least one interval, got none.")

        error_messages = []
        for index, interval in enumerate(intervals):
            if not isinstance(interval, int) or interval < 0:
                error_messages.append(
                    f"intervals[{index}] = {interval!r} is not a non-negative integer"
                )
            elif index > 0 and interval <= intervals[index - 1]:
                error_messages.append(
                    f"intervals[{index}] = {interval} is not greater than intervals[{index - 1}] = {intervals[index - 1]}"
                )

        if len(error_messages) > 0:
            raise ValueError(
                "The interval ladder is invalid:\n" + "\n".join(error_messages)
            )

    @property
    def last_stage(self) -> int:
        """The highest stage index on the ladder."""
        return len(self.intervals) - 1

    @staticmethod
    def current_date() -> date:
        """
        Returns today's date in the local timezone.
        """

        return dates.current_date()

    @staticmethod
    def add_days(day: date | str, days: int) -> date | str:
        """
        Calendar-correct day addition. See `ebbinghaus.dates.add_days`.
        """

        return dates.add_days(day, days)

    def load_progress(self) -> ProgressStore:
        """
        Reads the whole progress store from storage.

        A missing or malformed value is treated as an empty store.

        Returns:
            ProgressStore: The stored progress records keyed by word id.
        """

        source_json = self.storage.get(self.storage_key)
        if not source_json:
            return {}

        try:
            source_dict = json.loads(source_json)
            if not isinstance(source_dict, Mapping):
                raise TypeError(
                    f"expected a JSON object, got {type(source_dict).__name__}"
                )
            records = [
                ProgressRecord.from_dict(record) for record in source_dict.values()
            ]
            progress = {record.id: record for record in records}
        except (ValueError, TypeError, KeyError, OverflowError) as e:
            logger.warning(
                "Discarding malformed progress store under %r: %s", self.storage_key, e
            )
            return {}

        return progress

    def save_progress(self, progress: Mapping[WordId, ProgressRecord]) -> None:
        """
        Replaces the persisted progress store with `progress`.
        """

        source_dict = {str(word_id): record.to_dict() for word_id, record in progress.items()}
        self.storage.set(self.storage_key, json.dumps(source_dict, ensure_ascii=False))

    def ensure_initialized(
        self, catalog: Sequence[WordEntry], today: date | str | None = None
    ) -> ProgressStore:
        """
        Loads the progress store, rebuilding it when it does not match the catalog.

        If the number of stored records differs from the number of catalog words, every word's
        progress is reset to stage 0, due today, and persisted. With `additive_reconcile` set,
        records are added for every catalog word that has none, whatever the counts, and
        existing records are kept.

        Args:
            catalog: The word catalog.
            today: The current day. Defaults to today's date.

        Returns:
            ProgressStore: The progress store, keyed by word id.
        """

        today = dates.current_date() if today is None else dates.parse_date(today)

        progress = self.load_progress()

        if self.additive_reconcile:
            missing = [word for word in catalog if word.id not in progress]
            if len(missing) == 0:
                return progress

            for word in missing:
                progress[word.id] = ProgressRecord(
                    id=word.id, stage_index=0, next_review_date=today
                )
            logger.info(
                "Added progress for %d new words (%d stored, %d in catalog)",
                len(missing),
                len(progress) - len(missing),
                len(catalog),
            )

        else:
            if len(progress) == len(catalog):
                return progress

            logger.info(
                "Resetting progress: %d stored records, %d words in catalog",
                len(progress),
                len(catalog),
            )
            progress = {
                word.id: ProgressRecord(id=word.id, stage_index=0, next_review_date=today)
                for word in catalog
            }

        self.save_progress(progress)

        return progress

    def get_due_words(
        self, catalog: Sequence[WordEntry], today: date | str | None = None
    ) -> list[DueWord]:
        """
        Selects the catalog words due for review on a given day.

        Args:
            catalog: The word catalog.
            today: The current day. Defaults to today's date.

        Returns:
            list[DueWord]: The due words with their progress, in catalog order.
        """

        today = dates.current_date() if today is None else dates.parse_date(today)

        progress = self.ensure_initialized(catalog, today=today)

        due_words = []
        for word in catalog:
            record = progress.get(word.id)
            if record is not None and record.is_due(today):
                due_words.append(DueWord(word=word, progress=record))

        return due_words

    def record_outcome(
        self, word_id: WordId, remembered: bool, today: date | str | None = None
    ) -> None:
        """
        Records one review of a word and reschedules it.

        The stage moves one step up the ladder if the word was remembered and one step down
        if it was forgotten, clamped to the ends of the ladder. The word is next due the
        number of days after `today` given by its new stage. The progress store is re-read
        from storage before the update and written back whole afterwards.

        Args:
            word_id: The id of the reviewed word. Unknown ids start from stage 0.
            remembered: Whether the learner remembered the word.
            today: The day of the review. Defaults to today's date.
        """

        today = dates.current_date() if today is None else dates.parse_date(today)

        progress = self.load_progress()

        record = progress.get(word_id)
        if record is None:
            record = ProgressRecord(id=word_id, stage_index=0, next_review_date=today)

        previous_stage = record.stage_index
        if remembered:
            stage_index = min(previous_stage + 1, self.last_stage)
        else:
            stage_index = max(previous_stage - 1, 0)

        # records written under a different ladder can sit outside this one
        stage_index = min(max(stage_index, 0), self.last_stage)

        progress[word_id] = ProgressRecord(
            id=word_id,
            stage_index=stage_index,
            next_review_date=dates.add_days(today, self.intervals[stage_index]),
        )
        self.save_progress(progress)

        logger.debug(
            "Word %r %s: stage %d -> %d, next review %s",
            word_id,
            "remembered" if remembered else "forgotten",
            previous_stage,
            stage_index,
            progress[word_id].next_review_date.isoformat(),
        )

    def get_today_review_words(self, catalog: Sequence[WordEntry]) -> list[DueWord]:
        """
        Returns today's due words, in catalog order.
        """

        return self.get_due_words(catalog)

    def update_progress_after_review(self, word_id: WordId, remembered: bool) -> None:
        """
        Records today's review outcome for a word.
        """

        self.record_outcome(word_id, remembered)

    def to_dict(self) -> SchedulerDict:
        """
        Returns a dictionary representation of the Scheduler object's settings.

        The storage backend is not included.

        Returns:
            SchedulerDict: A dictionary representation of the Scheduler object.
        """

        return {
            "intervals": list(self.intervals),
            "storage_key": self.storage_key,
            "additive_reconcile": self.additive_reconcile,
        }

    @classmethod
    def from_dict(
        cls, source_dict: SchedulerDict | Mapping[str, Any], storage: Storage | None = None
    ) -> Self:
        """
        Creates a Scheduler object from an existing dictionary.

        Args:
            source_dict: A dictionary representing an existing Scheduler object.
            storage: The storage backend for the new scheduler.

        Returns:
            Self: A Scheduler object created from the provided dictionary.
        """

        return cls(
            storage=storage,
            intervals=source_dict.get("intervals", DEFAULT_INTERVALS),
            storage_key=source_dict.get("storage_key", STORAGE_KEY),
            additive_reconcile=source_dict.get("additive_reconcile", False),
        )

    def to_json(self, indent: int | str | None = None) -> str:
        """
        Returns a JSON-serialized string of the Scheduler object's settings.

        Args:
            indent: Equivalent argument to the indent in json.dumps()

        Returns:
            str: A JSON-serialized string of the Scheduler object.
        """

        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, source_json: str, storage: Storage | None = None) -> Self:
        """
        Creates a Scheduler object from a JSON-serialized string.

        Args:
            source_json: A JSON-serialized string of an existing Scheduler object.
            storage: The storage backend for the new scheduler.

        Returns:
            Self: A Scheduler object created from the JSON string.
        """

        source_dict: SchedulerDict = json.loads(source_json)
        return cls.from_dict(source_dict=source_dict, storage=storage)


__all__ = ["Scheduler", "DueWord", "DEFAULT_INTERVALS", "STORAGE_KEY"]
