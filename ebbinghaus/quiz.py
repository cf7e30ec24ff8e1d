"""
ebbinghaus.quiz
---------------

Multiple-choice quiz questions built from a word catalog.

A question shows one word and asks for its meaning. The wrong options are the
meanings of other catalog words. The answer is reported to the scheduler like any
other review outcome.

Classes:
    QuizOption: One answer option.
    QuizQuestion: A multiple-choice question about one word.
"""

from __future__ import annotations
from collections.abc import Sequence
from dataclasses import dataclass, field
import random
from typing_extensions import Self
from ebbinghaus.errors import QuizLockedError
from ebbinghaus.word import WordEntry

DEFAULT_DISTRACTOR_COUNT = 3


def choose_distractors(
    word: WordEntry,
    catalog: Sequence[WordEntry],
    count: int = DEFAULT_DISTRACTOR_COUNT,
    rng: random.Random | None = None,
) -> list[WordEntry]:
    """
    Picks up to `count` other catalog words at random to serve as wrong answers.

    Args:
        word: The word being asked about. It is never picked.
        catalog: The word catalog to draw from.
        count: The maximum number of words to pick.
        rng: Source of randomness. Defaults to a fresh, unseeded random.Random.

    Returns:
        list[WordEntry]: The picked words. Shorter than `count` if the catalog is too small.
    """

    rng = rng or random.Random()

    others = [entry for entry in catalog if entry.id != word.id]
    rng.shuffle(others)

    return others[:count]


@dataclass(frozen=True)
class QuizOption:
    """
    An answer option of a quiz question.

    Attributes:
        text: The meaning shown to the learner.
        is_correct: Whether this is the meaning of the word being asked about.
    """

    text: str
    is_correct: bool


@dataclass
class QuizQuestion:
    """
    A multiple-choice question asking for the meaning of a word.

    A question accepts exactly one answer. Once an option is selected the question is locked.

    Attributes:
        word: The word being asked about.
        options: The answer options, in display order. Exactly one is correct.
        selected_index: The index of the selected option, or None before an answer.
    """

    word: WordEntry
    options: tuple[QuizOption, ...]
    selected_index: int | None = field(default=None)

    @classmethod
    def build(
        cls,
        word: WordEntry,
        catalog: Sequence[WordEntry],
        rng: random.Random | None = None,
        distractor_count: int = DEFAULT_DISTRACTOR_COUNT,
    ) -> Self:
        """
        Builds a question about `word` with wrong options drawn from `catalog`.

        With a catalog of one word the question has a single, correct option.
        """

        rng = rng or random.Random()

        distractors = choose_distractors(word, catalog, count=distractor_count, rng=rng)

        options = [QuizOption(text=word.meaning_zh, is_correct=True)]
        options.extend(
            QuizOption(text=other.meaning_zh, is_correct=False) for other in distractors
        )
        rng.shuffle(options)

        return cls(word=word, options=tuple(options))

    @property
    def correct_index(self) -> int:
        return next(index for index, option in enumerate(self.options) if option.is_correct)

    @property
    def correct_option(self) -> QuizOption:
        return self.options[self.correct_index]

    @property
    def is_answered(self) -> bool:
        return self.selected_index is not None

    @property
    def is_correct(self) -> bool | None:
        """Whether the selected option is correct, or None before an answer."""
        if self.selected_index is None:
            return None
        return self.options[self.selected_index].is_correct

    def select(self, index: int) -> bool:
        """
        Answers the question with the option at `index`.

        Args:
            index: Display index of the chosen option.

        Returns:
            bool: Whether the chosen option is correct.

        Raises:
            QuizLockedError: If the question has already been answered.
            IndexError: If `index` does not refer to an option.
        """

        if self.is_answered:
            raise QuizLockedError(
                f"Question about {self.word.word!r} has already been answered"
            )

        if not 0 <= index < len(self.options):
            raise IndexError(
                f"Option index {index} out of range for {len(self.options)} options"
            )

        self.selected_index = index

        return self.options[index].is_correct

    @property
    def feedback(self) -> str | None:
        """
        A message describing the answer, or None before an answer.
        """

        if self.is_correct is None:
            return None

        if self.is_correct:
            return "Correct!"

        return (
            f"Wrong. The correct answer is: {self.correct_option.text}. "
            "This word has been scheduled as forgotten."
        )


__all__ = ["QuizOption", "QuizQuestion", "choose_distractors"]
