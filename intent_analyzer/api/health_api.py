"""
Health check endpoint.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from intent_analyzer.core.config import get_settings
from intent_analyzer.core.dependencies import get_lexicon, get_similarity
from intent_analyzer.core.exceptions import SimilarityServiceError
from intent_analyzer.modules.lexicon import LexiconStore
from intent_analyzer.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("/")
async def health_check(
    lexicon: LexiconStore = Depends(get_lexicon),
    similarity=Depends(get_similarity),
):
    """
    Service status, indexed point count and lexicon version.

    Reports "degraded" instead of failing when the vector index is unreachable.
    """
    settings = get_settings()
    status = "healthy"
    point_count = None
    try:
        info = await similarity.collection_info()
        point_count = info.get("point_count")
    except SimilarityServiceError as e:
        logger.warning(f"[HEALTH] Similarity service unavailable: {e.message}")
        status = "degraded"

    return {
        "status": status,
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "point_count": point_count,
        "lexicon_version": lexicon.version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
