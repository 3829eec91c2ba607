from .analyzer import IntentAnalyzer, AnalysisBuilder, validate_sentence
from .circle_validator import CircleValidator, ValidationThresholds, ValidationResult
from .history import AnalysisHistory
from .models import (
    AnalysisResult,
    Filter,
    SlotOutcome,
    ValidationPath,
    ValidationTraceEntry,
)

__all__ = [
    "IntentAnalyzer",
    "AnalysisBuilder",
    "validate_sentence",
    "CircleValidator",
    "ValidationThresholds",
    "ValidationResult",
    "AnalysisHistory",
    "AnalysisResult",
    "Filter",
    "SlotOutcome",
    "ValidationPath",
    "ValidationTraceEntry",
]
