"""
FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intent_analyzer.api import analysis_router, health_router
from intent_analyzer.core.config import get_settings
from intent_analyzer.core.exceptions import ConfigurationError, SimilarityServiceError
from intent_analyzer.modules.analysis import ValidationThresholds
from intent_analyzer.modules.lexicon import get_default_lexicon
from intent_analyzer.modules.observability.logging_config import get_logger, setup_logging
from intent_analyzer.modules.similarity.service import get_similarity_service

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Utterance clarity analyzer - dictionary, phrase and circle-validated semantic matching",
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Register API routers
app.include_router(health_router)
app.include_router(analysis_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "redoc": "/redoc"
    }


async def prepare_similarity_index() -> int:
    """
    Check the vector index is reachable and index the lexicon when it is empty.

    Raises ConfigurationError when the index cannot be reached; the server
    must not start without its similarity collaborator.
    """
    service = get_similarity_service()
    try:
        info = await service.collection_info()
    except SimilarityServiceError as e:
        raise ConfigurationError("Similarity service unavailable at startup", e.details) from e

    point_count = info["point_count"]
    if point_count == 0 and settings.AUTO_INDEX_ON_STARTUP:
        lexicon = get_default_lexicon()
        logger.info(f"[STARTUP] Collection '{info['collection']}' is empty, indexing lexicon {lexicon.version}")
        try:
            point_count = await service.index_lexicon(lexicon)
        except SimilarityServiceError as e:
            raise ConfigurationError("Indexing the lexicon failed at startup", e.details) from e
    return point_count


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info(f"[{settings.APP_NAME}] Starting up...")
    logger.info(f"  Version: {settings.APP_VERSION}")
    logger.info(f"  Environment: {settings.ENVIRONMENT}")
    logger.info(f"  Debug: {settings.DEBUG}")
    logger.info(f"  Host: {settings.HOST}:{settings.PORT}")

    thresholds = ValidationThresholds.from_settings(settings)
    logger.info(f"  Thresholds: {thresholds}")

    if settings.TEST_MODE:
        logger.info(f"[{settings.APP_NAME}] Test mode, skipping similarity index checks")
        return

    point_count = await prepare_similarity_index()
    logger.info(f"[{settings.APP_NAME}] Similarity index ready ({point_count} points)")


@app.on_event("shutdown")
async def shutdown_event():
    """Application shutdown event"""
    logger.info(f"[{settings.APP_NAME}] Shutting down...")


def run():
    import uvicorn
    uvicorn.run(
        "intent_analyzer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
