"""
Domain Exceptions

Raised by the assessment engine and mapped to HTTP errors by the API layer.
"""


class ReadGapError(Exception):
    """Base class for assessment errors."""

    pass


class CatalogEmptyError(ReadGapError):
    """No question is available for the requested language."""

    def __init__(self, language: str):
        super().__init__(f"No questions available for language '{language}'")
        self.language = language


class AttemptCompletedError(ReadGapError):
    """The attempt is already completed; no further answers or scores accepted."""

    pass


class QuestionOutOfPhaseError(ReadGapError):
    """The answered question does not belong to the attempt's current phase."""

    pass


class InvalidPhaseTransitionError(ReadGapError):
    """A phase change not permitted by the attempt state machine."""

    pass


class SessionCodeError(ReadGapError):
    """Session code could not be generated or is malformed."""

    pass
