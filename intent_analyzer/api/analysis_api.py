"""
Analysis API endpoints.
Utterance analysis, recent analysis log and runtime phrase additions.
"""

import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from intent_analyzer.core.dependencies import get_analyzer, get_history, get_lexicon, get_similarity
from intent_analyzer.core.exceptions import AnalyzerException, InputValidationError
from intent_analyzer.core.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    LogsResponse,
    PhraseUpsertRequest,
    PhraseUpsertResponse,
)
from intent_analyzer.modules.analysis import AnalysisHistory, IntentAnalyzer
from intent_analyzer.modules.lexicon import Category, LexiconStore
from intent_analyzer.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Analysis"])


def _error(status_code: int, error: str, message: str, details: Optional[dict] = None) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error=error,
            message=message,
            details=details,
            timestamp=datetime.now(timezone.utc).isoformat(),
        ).model_dump(),
    )


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(
    request: AnalyzeRequest,
    analyzer: IntentAnalyzer = Depends(get_analyzer),
    history: AnalysisHistory = Depends(get_history),
):
    """
    Analyze one utterance.

    Resolves intent, process, action and filters and returns the clarity
    verdict together with the circle validation log.
    """
    start_time = time.time()

    try:
        result = await analyzer.analyze(request.sentence)
    except InputValidationError as e:
        raise _error(400, type(e).__name__, e.message, e.details)
    except AnalyzerException as e:
        logger.error(f"[API] Analysis failed: {e.message}")
        raise _error(500, type(e).__name__, e.message, e.details)
    except Exception as e:
        logger.exception(f"[API] Unexpected error analyzing '{request.sentence}'")
        raise _error(
            500,
            "InternalServerError",
            "An unexpected error occurred analyzing your sentence",
            {"error": str(e)},
        )

    history.add(result)
    elapsed_ms = (time.time() - start_time) * 1000
    logger.info(f"[API] Analyzed in {elapsed_ms:.1f}ms, proceed={result.proceed}")
    return result.to_dict()


@router.get("/logs", response_model=LogsResponse)
async def get_logs(
    limit: Optional[int] = Query(default=None, ge=1),
    history: AnalysisHistory = Depends(get_history),
):
    """Recent analyses, newest first."""
    logs = history.recent(limit)
    return {"count": len(logs), "logs": logs}


@router.delete("/logs")
async def clear_logs(history: AnalysisHistory = Depends(get_history)):
    cleared = history.clear()
    logger.info(f"[API] Cleared {cleared} analysis log entries")
    return {"success": True, "cleared": cleared}


@router.post("/phrases", response_model=PhraseUpsertResponse)
async def upsert_phrase(
    request: PhraseUpsertRequest,
    lexicon: LexiconStore = Depends(get_lexicon),
    similarity=Depends(get_similarity),
):
    """
    Add (or update) a phrase in the vector index.

    The value must be one of the category's standard values with a
    reference row, otherwise circle validation could never accept a match
    on the new phrase.
    """
    try:
        category = Category(request.category.strip().lower())
    except ValueError:
        raise _error(
            400,
            "InputValidationError",
            f"Unknown category '{request.category}'",
            {"categories": [c.value for c in Category]},
        )

    value = request.value.strip().lower()
    known_values = lexicon.canonical_values(category)
    if value not in known_values:
        raise _error(
            400,
            "InputValidationError",
            f"Unknown {category.label} value '{request.value}'",
            {"values": known_values},
        )
    if lexicon.reference_for(category, None, value) is None:
        raise _error(
            400,
            "InputValidationError",
            f"{category.label.capitalize()} value '{value}' has no reference phrases for semantic matching",
            {"value": value},
        )

    try:
        point_id = await similarity.upsert(category, request.text, value)
    except AnalyzerException as e:
        logger.error(f"[API] Phrase upsert failed: {e.message}")
        raise _error(500, type(e).__name__, e.message, e.details)

    logger.info(f"[API] Upserted {category.value} phrase '{request.text}' -> {value} (id {point_id})")
    return PhraseUpsertResponse(
        id=point_id,
        category=category.value,
        text=request.text.strip().lower(),
        value=value,
    )
