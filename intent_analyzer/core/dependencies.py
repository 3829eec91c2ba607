"""
FastAPI dependencies.

The analyzer and history are process-wide singletons built from settings on
first use. Tests swap them through app.dependency_overrides.
"""

from typing import Optional

from intent_analyzer.core.config import get_settings
from intent_analyzer.modules.analysis import (
    AnalysisHistory,
    CircleValidator,
    IntentAnalyzer,
    ValidationThresholds,
)
from intent_analyzer.modules.lexicon import LexiconStore, get_default_lexicon
from intent_analyzer.modules.similarity.service import SimilarityService, get_similarity_service

_analyzer: Optional[IntentAnalyzer] = None
_history: Optional[AnalysisHistory] = None


def get_lexicon() -> LexiconStore:
    return get_default_lexicon()


def get_similarity() -> SimilarityService:
    return get_similarity_service()


def get_analyzer() -> IntentAnalyzer:
    global _analyzer
    if _analyzer is None:
        settings = get_settings()
        lexicon = get_default_lexicon()
        validator = CircleValidator(
            get_similarity_service(),
            lexicon,
            thresholds=ValidationThresholds.from_settings(settings),
            search_limit=settings.SEARCH_LIMIT,
        )
        _analyzer = IntentAnalyzer(lexicon, validator, max_sentence_length=settings.MAX_SENTENCE_LENGTH)
    return _analyzer


def get_history() -> AnalysisHistory:
    global _history
    if _history is None:
        _history = AnalysisHistory(max_size=get_settings().LOG_HISTORY_SIZE)
    return _history
