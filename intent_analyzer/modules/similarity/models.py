"""
Result types returned by the similarity service.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimilarityMatch:
    value: str
    score: float
    text: str
    is_primary: bool = False
