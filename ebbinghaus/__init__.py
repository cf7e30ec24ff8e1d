"""
ebbinghaus
----------

Ebbinghaus-style spaced repetition for vocabulary flashcards. Selects the words due for
review each day and moves each word along a fixed ladder of review intervals.
"""

from ebbinghaus.scheduler import Scheduler, DueWord, DEFAULT_INTERVALS, STORAGE_KEY
from ebbinghaus.word import WordEntry, load_catalog
from ebbinghaus.progress import ProgressRecord
from ebbinghaus.storage import Storage, MemoryStorage, JSONFileStorage
from ebbinghaus.quiz import QuizOption, QuizQuestion, choose_distractors
from ebbinghaus.session import ReviewSession
from ebbinghaus.dates import add_days, current_date
from ebbinghaus.errors import EbbinghausError, QuizLockedError, SessionFinishedError

__all__ = [
    "Scheduler",
    "DueWord",
    "DEFAULT_INTERVALS",
    "STORAGE_KEY",
    "WordEntry",
    "load_catalog",
    "ProgressRecord",
    "Storage",
    "MemoryStorage",
    "JSONFileStorage",
    "QuizOption",
    "QuizQuestion",
    "choose_distractors",
    "ReviewSession",
    "add_days",
    "current_date",
    "EbbinghausError",
    "QuizLockedError",
    "SessionFinishedError",
]
