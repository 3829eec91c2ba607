"""
Sentence embedding encoder.

The SentenceTransformer model is loaded once per process and shared; every
vector it returns is L2-normalised so a dot product is the cosine similarity.
"""

from typing import List, Optional

import numpy as np
from sentence_transformers import SentenceTransformer

from intent_analyzer.modules.observability.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"

_GLOBAL_ENCODER: Optional[SentenceTransformer] = None
_GLOBAL_MODEL_NAME: Optional[str] = None


def get_global_encoder(model_name: str = DEFAULT_MODEL) -> SentenceTransformer:
    """Get or create the shared encoder; the model is only loaded once."""
    global _GLOBAL_ENCODER, _GLOBAL_MODEL_NAME
    if _GLOBAL_ENCODER is None or _GLOBAL_MODEL_NAME != model_name:
        logger.info(f"[Embeddings] Loading sentence transformer model: {model_name}")
        _GLOBAL_ENCODER = SentenceTransformer(model_name)
        _GLOBAL_MODEL_NAME = model_name
    return _GLOBAL_ENCODER


class EmbeddingEncoder:
    def __init__(self, model_name: str = DEFAULT_MODEL):
        self.model_name = model_name

    @property
    def model(self) -> SentenceTransformer:
        return get_global_encoder(self.model_name)

    def embed(self, text: str) -> List[float]:
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []
        vectors = self.model.encode(
            texts,
            normalize_embeddings=True,
            convert_to_numpy=True,
            show_progress_bar=False,
        )
        return vectors.tolist()

    @staticmethod
    def cosine(left: List[float], right: List[float]) -> float:
        """Cosine of two normalised vectors, clipped to [0, 1]."""
        score = float(np.dot(np.asarray(left), np.asarray(right)))
        return min(max(score, 0.0), 1.0)
