"""
ebbinghaus.session
------------------

This module defines the ReviewSession class.

A review session takes the words due at its start and walks through them one at a
time. The list is fixed for the whole session, even if the date changes while it runs.
"""

from __future__ import annotations
from collections.abc import Sequence
from datetime import date
import logging
import random
from ebbinghaus import dates
from ebbinghaus.errors import SessionFinishedError
from ebbinghaus.quiz import QuizQuestion
from ebbinghaus.scheduler import DueWord, Scheduler
from ebbinghaus.word import WordEntry

logger = logging.getLogger(__name__)


class ReviewSession:
    """
    One pass over the words due for review.

    Attributes:
        scheduler: The scheduler outcomes are recorded with.
        catalog: The word catalog. Quiz options are drawn from it.
        today: The day the session reviews for.
        due_words: The words due at the start of the session, in catalog order.
        completed: How many words have been answered.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        catalog: Sequence[WordEntry],
        today: date | str | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.catalog = tuple(catalog)
        self.today = dates.current_date() if today is None else dates.parse_date(today)

        self.due_words: tuple[DueWord, ...] = tuple(
            scheduler.get_due_words(self.catalog, today=self.today)
        )
        self.completed = 0

        logger.info(
            "Review session for %s: %d of %d words due",
            self.today.isoformat(),
            len(self.due_words),
            len(self.catalog),
        )

    @property
    def total(self) -> int:
        return len(self.due_words)

    @property
    def finished(self) -> bool:
        return self.completed >= self.total

    @property
    def current(self) -> DueWord | None:
        """The word under review, or None once the session is finished."""
        if self.finished:
            return None
        return self.due_words[self.completed]

    @property
    def position(self) -> int:
        """1-based position of the current word."""
        return min(self.completed + 1, self.total)

    @property
    def progress_percent(self) -> int:
        if self.total == 0:
            return 0
        return round(self.completed / self.total * 100)

    def answer(self, remembered: bool) -> DueWord | None:
        """
        Records the outcome for the current word and moves on to the next one.

        Args:
            remembered: Whether the learner remembered the current word.

        Returns:
            DueWord | None: The next word, or None if the session is now finished.

        Raises:
            SessionFinishedError: If every word has already been answered.
        """

        current = self.current
        if current is None:
            raise SessionFinishedError("Every word in this session has been answered")

        self.scheduler.record_outcome(current.word.id, remembered, today=self.today)
        self.completed += 1

        if self.finished:
            logger.info("Review session for %s finished", self.today.isoformat())

        return self.current

    def quiz_question(self, rng: random.Random | None = None) -> QuizQuestion:
        """
        Builds a multiple-choice question for the current word.

        Raises:
            SessionFinishedError: If every word has already been answered.
        """

        current = self.current
        if current is None:
            raise SessionFinishedError("Every word in this session has been answered")

        return QuizQuestion.build(current.word, self.catalog, rng=rng)

    def answer_quiz(self, question: QuizQuestion, index: int) -> bool:
        """
        Selects an option of a question about the current word and records the outcome.

        Returns:
            bool: Whether the selected option was correct.
        """

        current = self.current
        if current is None:
            raise SessionFinishedError("Every word in this session has been answered")
        if question.word.id != current.word.id:
            raise ValueError(
                f"Question is about word {question.word.id!r}, current word is {current.word.id!r}"
            )

        is_correct = question.select(index)
        self.answer(is_correct)

        return is_correct

    def __repr__(self) -> str:
        return (
            f"ReviewSession(today={self.today.isoformat()!r}, "
            f"completed={self.completed}, total={self.total})"
        )


__all__ = ["ReviewSession"]
