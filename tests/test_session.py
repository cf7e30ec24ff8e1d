from ebbinghaus.session import ReviewSession
from ebbinghaus.scheduler import Scheduler
from ebbinghaus.progress import ProgressRecord
from ebbinghaus.errors import SessionFinishedError
from ebbinghaus.word import WordEntry

from datetime import date, timedelta
import random
import pytest

TODAY = date(2024, 1, 10)

CATALOG = (
    WordEntry(id=1, word="abandon", meaning_zh="放弃"),
    WordEntry(id=2, word="benefit", meaning_zh="好处"),
    WordEntry(id=3, word="candid", meaning_zh="坦率的"),
    WordEntry(id=4, word="diligent", meaning_zh="勤奋的"),
)


class TestReviewSession:
    def test_walks_through_due_words(self):
        scheduler = Scheduler()
        session = ReviewSession(scheduler, CATALOG, today=TODAY)

        assert session.total == 4
        assert session.position == 1
        assert session.progress_percent == 0
        assert session.current.word == CATALOG[0]

        next_word = session.answer(True)
        assert next_word.word == CATALOG[1]
        assert session.position == 2
        assert session.progress_percent == 25

        session.answer(False)
        session.answer(True)
        assert session.progress_percent == 75

        assert session.answer(True) is None
        assert session.finished
        assert session.current is None
        assert session.progress_percent == 100

        progress = scheduler.load_progress()
        assert [progress[word.id].stage_index for word in CATALOG] == [1, 0, 1, 1]
        assert progress[2].next_review_date == TODAY
        assert progress[1].next_review_date == TODAY + timedelta(days=1)

    def test_due_list_is_fixed_for_the_session(self):
        scheduler = Scheduler()
        session = ReviewSession(scheduler, CATALOG, today=TODAY)

        # a forgotten word at stage 0 is due again today but is not re-added
        for _ in range(4):
            session.answer(False)

        assert session.finished
        assert len(scheduler.get_due_words(CATALOG, today=TODAY)) == 4

    def test_only_due_words(self):
        scheduler = Scheduler()
        scheduler.save_progress(
            {
                1: ProgressRecord(id=1, stage_index=3, next_review_date=TODAY + timedelta(days=2)),
                2: ProgressRecord(id=2, stage_index=1, next_review_date=TODAY),
                3: ProgressRecord(id=3, stage_index=2, next_review_date=TODAY + timedelta(days=1)),
                4: ProgressRecord(id=4, stage_index=0, next_review_date=TODAY - timedelta(days=1)),
            }
        )

        session = ReviewSession(scheduler, CATALOG, today=TODAY)

        assert [due.word.id for due in session.due_words] == [2, 4]

    def test_empty_session(self):
        scheduler = Scheduler()
        scheduler.get_due_words(CATALOG, today=TODAY)
        for word in CATALOG:
            scheduler.record_outcome(word.id, remembered=True, today=TODAY)

        session = ReviewSession(scheduler, CATALOG, today=TODAY)

        assert session.total == 0
        assert session.finished
        assert session.current is None
        assert session.progress_percent == 0

        with pytest.raises(SessionFinishedError):
            session.answer(True)

        with pytest.raises(SessionFinishedError):
            session.quiz_question()

    def test_quiz_mode(self):
        scheduler = Scheduler()
        session = ReviewSession(scheduler, CATALOG, today=TODAY)
        rng = random.Random(7)

        question = session.quiz_question(rng=rng)
        assert question.word == CATALOG[0]
        assert len(question.options) == 4
        assert session.answer_quiz(question, question.correct_index) is True

        question = session.quiz_question(rng=rng)
        assert question.word == CATALOG[1]
        wrong_index = (question.correct_index + 1) % len(question.options)
        assert session.answer_quiz(question, wrong_index) is False

        progress = scheduler.load_progress()
        assert progress[1].stage_index == 1
        assert progress[2].stage_index == 0
        assert session.completed == 2

    def test_quiz_for_wrong_word_is_rejected(self):
        session = ReviewSession(Scheduler(), CATALOG, today=TODAY)
        question = session.quiz_question(rng=random.Random(0))
        session.answer(True)

        with pytest.raises(ValueError):
            session.answer_quiz(question, question.correct_index)

        assert not question.is_answered

    def test_class_repr(self):
        session = ReviewSession(Scheduler(), CATALOG, today=TODAY)

        assert repr(session) == "ReviewSession(today='2024-01-10', completed=0, total=4)"
