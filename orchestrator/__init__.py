"""Research pipeline engines."""

from .refresh import AnswerRefreshEngine
from .structured_output import StructuredOutputPolicy, StructuredOutputRunner
from .synthesis import ReportSynthesisEngine, SynthesisOutcome

__all__ = [
    "AnswerRefreshEngine",
    "ReportSynthesisEngine",
    "StructuredOutputPolicy",
    "StructuredOutputRunner",
    "SynthesisOutcome",
]
