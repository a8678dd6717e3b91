"""
Assessment Module

Adaptive question selection, attempt phase tracking, and gap scoring.
"""

from .catalog import DatabaseQuestionCatalog, QuestionCatalog
from .scorer import Band, QuestionResult, Scorer, ScoreResult
from .selector import DifficultySelector
from .tracker import AnsweredQuestion, AttemptTracker, Phase, StepOutcome

__all__ = [
    "AnsweredQuestion",
    "AttemptTracker",
    "Band",
    "DatabaseQuestionCatalog",
    "DifficultySelector",
    "Phase",
    "QuestionCatalog",
    "QuestionResult",
    "ScoreResult",
    "Scorer",
    "StepOutcome",
]
