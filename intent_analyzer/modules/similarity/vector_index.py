"""
Phrase Vector Index

Category-tagged lexicon phrases stored in a persistent ChromaDB collection
with cosine distance. Bulk-loaded phrases use ids 1..N; phrases added at
runtime get ids from DYNAMIC_ID_OFFSET upwards so the two ranges never meet.
"""

from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Sequence

import chromadb
from chromadb.config import Settings
from tqdm import tqdm

from intent_analyzer.modules.lexicon import IndexPoint
from intent_analyzer.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

DYNAMIC_ID_OFFSET = 1_000_000
BULK_BATCH_SIZE = 50


class PhraseVectorIndex:
    """ChromaDB collection of embedded lexicon phrases."""

    def __init__(self, collection_name: str, persist_dir: Path):
        self.collection_name = collection_name
        Path(persist_dir).mkdir(parents=True, exist_ok=True)

        self.client = chromadb.PersistentClient(
            path=str(persist_dir),
            settings=Settings(anonymized_telemetry=False, allow_reset=True),
        )
        self.collection = self._get_or_create()
        # Serialises id assignment for concurrent upserts of the same phrase
        self._lock = Lock()
        self._next_dynamic_id = self._load_next_dynamic_id()
        logger.info(f"[Vector] Initialized collection: {collection_name} ({self.get_count()} points)")

    def _get_or_create(self):
        return self.client.get_or_create_collection(
            name=self.collection_name,
            metadata={"hnsw:space": "cosine"},
        )

    def _load_next_dynamic_id(self) -> int:
        existing = self.collection.get(where={"source": "dynamic"}, include=["metadatas"])
        ids = [int(point_id) for point_id in existing["ids"]] if existing["ids"] else []
        return max(ids) + 1 if ids else DYNAMIC_ID_OFFSET

    def add_points(self, points: Sequence[IndexPoint], embeddings: Sequence[List[float]]) -> int:
        """Upsert the static lexicon with ids 1..N, in batches."""
        if len(points) != len(embeddings):
            raise ValueError("points and embeddings must have the same length")
        if len(points) >= DYNAMIC_ID_OFFSET:
            raise ValueError(f"bulk load of {len(points)} points would overlap dynamic ids")

        for start in tqdm(range(0, len(points), BULK_BATCH_SIZE), desc="Indexing"):
            batch = points[start:start + BULK_BATCH_SIZE]
            self.collection.upsert(
                ids=[str(start + offset + 1) for offset in range(len(batch))],
                embeddings=list(embeddings[start:start + BULK_BATCH_SIZE]),
                documents=[point.text for point in batch],
                metadatas=[
                    {
                        "category": point.category.value,
                        "value": point.value,
                        "text": point.text,
                        "is_primary": point.is_primary,
                        "source": "lexicon",
                    }
                    for point in batch
                ],
            )

        logger.info(f"[Vector] Indexed {len(points)} lexicon points")
        return len(points)

    def find_id(self, category: str, text: str) -> Optional[str]:
        existing = self.collection.get(
            where={"$and": [{"category": category}, {"text": text}]},
            include=["metadatas"],
        )
        return existing["ids"][0] if existing["ids"] else None

    def upsert_phrase(self, category: str, text: str, value: str, embedding: List[float]) -> int:
        """Add or update a runtime phrase; the same (category, text) keeps its id."""
        with self._lock:
            point_id = self.find_id(category, text)
            if point_id is None:
                point_id = str(self._next_dynamic_id)
                self._next_dynamic_id += 1

            self.collection.upsert(
                ids=[point_id],
                embeddings=[embedding],
                documents=[text],
                metadatas=[{
                    "category": category,
                    "value": value,
                    "text": text,
                    "is_primary": False,
                    "source": "dynamic",
                }],
            )
        logger.info(f"[Vector] Upserted phrase '{text}' -> {category}:{value} (id {point_id})")
        return int(point_id)

    def search(self, embedding: List[float], category: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Nearest neighbours within one category, best first, score = cosine similarity."""
        results = self.collection.query(
            query_embeddings=[embedding],
            n_results=limit,
            where={"category": category},
        )

        formatted_results = []
        if results["ids"] and results["ids"][0]:
            for i, point_id in enumerate(results["ids"][0]):
                metadata = results["metadatas"][0][i] or {}
                formatted_results.append({
                    "id": point_id,
                    "score": 1.0 - float(results["distances"][0][i]),
                    "value": metadata.get("value", ""),
                    "text": metadata.get("text") or results["documents"][0][i],
                    "is_primary": bool(metadata.get("is_primary", False)),
                })

        formatted_results.sort(key=lambda hit: hit["score"], reverse=True)
        return formatted_results

    def get_count(self) -> int:
        return self.collection.count()

    def clear(self) -> None:
        with self._lock:
            self.client.delete_collection(name=self.collection_name)
            self.collection = self._get_or_create()
            self._next_dynamic_id = DYNAMIC_ID_OFFSET
        logger.info(f"[Vector] Cleared collection: {self.collection_name}")
