"""
Similarity Service

Async facade over the embedding encoder and the phrase vector index. The
encoder and ChromaDB calls are blocking, so they run in worker threads.
Transient failures (connection drops, timeouts) are retried with a linear
backoff; anything else fails fast.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

from intent_analyzer.core.config import Settings, get_settings
from intent_analyzer.core.exceptions import SimilarityServiceError, TransientSimilarityError
from intent_analyzer.modules.lexicon import Category, LexiconStore
from intent_analyzer.modules.observability.logging_config import get_logger

from .encoder import EmbeddingEncoder
from .models import SimilarityMatch
from .vector_index import PhraseVectorIndex

logger = get_logger(__name__)

TRANSIENT_ERRORS = (ConnectionError, TimeoutError, OSError)


class SimilarityService:
    def __init__(
        self,
        encoder: EmbeddingEncoder,
        index: PhraseVectorIndex,
        max_attempts: int = 2,
        retry_delay: float = 0.5,
    ):
        self.encoder = encoder
        self.index = index
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay

    async def _call(self, operation: str, func: Callable, *args):
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await asyncio.to_thread(func, *args)
            except TRANSIENT_ERRORS as e:
                if attempt >= self.max_attempts:
                    raise TransientSimilarityError(
                        f"Similarity service unavailable during {operation}",
                        {"operation": operation, "attempts": attempt, "error": str(e)},
                    ) from e
                logger.warning(f"[SIMILARITY] {operation} attempt {attempt} failed: {e}; retrying")
                await asyncio.sleep(self.retry_delay * attempt)
            except Exception as e:
                raise SimilarityServiceError(
                    f"Similarity service error during {operation}",
                    {"operation": operation, "error": str(e)},
                ) from e

    async def embed(self, text: str) -> List[float]:
        return await self._call("embed", self.encoder.embed, text)

    async def search(
        self,
        text: str,
        category: Category,
        limit: int = 10,
        threshold: float = 0.0,
    ) -> List[SimilarityMatch]:
        """Nearest lexicon phrases for `text` within `category`, best first."""
        embedding = await self.embed(text)
        hits = await self._call("search", self.index.search, embedding, category.value, limit)

        matches = [
            SimilarityMatch(
                value=hit["value"],
                score=hit["score"],
                text=hit["text"],
                is_primary=hit["is_primary"],
            )
            for hit in hits
            if hit["score"] >= threshold
        ]
        if matches:
            logger.debug(
                f"[SIMILARITY] '{text}' in {category.value}: top '{matches[0].text}' "
                f"({matches[0].score:.3f}) of {len(matches)}"
            )
        return matches

    async def similarity(self, text: str, phrase: str) -> float:
        """Cosine similarity between two strings."""
        vectors = await self._call("similarity", self.encoder.embed_batch, [text, phrase])
        return EmbeddingEncoder.cosine(vectors[0], vectors[1])

    async def upsert(self, category: Category, text: str, value: str) -> int:
        text = text.strip().lower()
        embedding = await self.embed(text)
        return await self._call("upsert", self.index.upsert_phrase, category.value, text, value, embedding)

    async def collection_info(self) -> Dict[str, Any]:
        count = await self._call("collection_info", self.index.get_count)
        return {
            "collection": self.index.collection_name,
            "point_count": count,
            "embedding_model": self.encoder.model_name,
        }

    async def index_lexicon(self, lexicon: LexiconStore, reset: bool = True) -> int:
        """Embed and bulk-load every dictionary term and phrase of the lexicon."""
        points = list(lexicon.index_points())
        if reset:
            await self._call("clear", self.index.clear)
        logger.info(f"[SIMILARITY] Embedding {len(points)} lexicon points (lexicon {lexicon.version})")
        embeddings = await self._call("embed_batch", self.encoder.embed_batch, [p.text for p in points])
        return await self._call("add_points", self.index.add_points, points, embeddings)


def create_similarity_service(settings: Optional[Settings] = None) -> SimilarityService:
    settings = settings or get_settings()
    return SimilarityService(
        encoder=EmbeddingEncoder(settings.EMBEDDING_MODEL),
        index=PhraseVectorIndex(settings.COLLECTION_NAME, settings.CHROMA_DIR),
        max_attempts=settings.SIMILARITY_MAX_ATTEMPTS,
        retry_delay=settings.SIMILARITY_RETRY_DELAY_SECONDS,
    )


_similarity_service: Optional[SimilarityService] = None


def get_similarity_service() -> SimilarityService:
    global _similarity_service
    if _similarity_service is None:
        _similarity_service = create_similarity_service()
    return _similarity_service
