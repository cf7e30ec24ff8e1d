"""
ebbinghaus.errors
-----------------

This module defines the exceptions raised by the ebbinghaus package.
"""


class EbbinghausError(Exception):
    """
    Base class for errors raised by this package.
    """


class QuizLockedError(EbbinghausError):
    """
    Raised when an option is selected on a quiz question that has already been answered.
    """


class SessionFinishedError(EbbinghausError):
    """
    Raised when a review session is answered after its last word.
    """


__all__ = ["EbbinghausError", "QuizLockedError", "SessionFinishedError"]
