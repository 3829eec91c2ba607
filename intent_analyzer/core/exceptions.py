"""
Application exceptions.
"""

from typing import Any, Dict, Optional


class AnalyzerException(Exception):
    """Base exception carrying a user-facing message and optional details."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class InputValidationError(AnalyzerException):
    """Utterance rejected before entering the pipeline (empty or oversized)."""


class ConfigurationError(AnalyzerException):
    """Invalid configuration or collaborator unavailable at startup."""


class SimilarityServiceError(AnalyzerException):
    """Non-transient failure of the embedding / vector search collaborator."""


class TransientSimilarityError(SimilarityServiceError):
    """Similarity collaborator unavailable or timed out after all retries."""
