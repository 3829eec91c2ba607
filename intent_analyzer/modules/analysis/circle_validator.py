"""
Circle Validation

Decides whether a semantic (vector) match for a slot should be accepted.
Instead of a single similarity cutoff the top match has to enter the
"circle" (safety floor) and then pass one of three independently tuned
distance checks, tried in order:

  GOLD  distance_to_gold = 1 - score                       < MAX_DISTANCE_TO_GOLD
  REF1  distance_to_ref1 = |new->ref1 - gold->ref1|        < MAX_DISTANCE_TO_REF1
  REF2  distance_to_ref2 = |new->ref2 - gold->ref2|        < MAX_DISTANCE_TO_REF2

new->refN is the live similarity between the utterance text and the
reference phrase; gold->refN is the pre-computed constant from the
reference table. Once a check accepts, no further similarity calls are made.

Similarity service failures are logged and treated as a rejection.
"""

from dataclasses import dataclass
from typing import Optional

from intent_analyzer.core.config import Settings
from intent_analyzer.core.exceptions import ConfigurationError, SimilarityServiceError
from intent_analyzer.modules.lexicon import Category, LexiconStore
from intent_analyzer.modules.observability.logging_config import get_logger

from .models import ValidationPath, ValidationTraceEntry

logger = get_logger(__name__)


@dataclass(frozen=True)
class ValidationThresholds:
    safety_floor: float = 0.30
    max_distance_to_gold: float = 0.30
    max_distance_to_ref1: float = 0.15
    max_distance_to_ref2: float = 0.15

    def __post_init__(self):
        for name in ("safety_floor", "max_distance_to_gold", "max_distance_to_ref1", "max_distance_to_ref2"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(
                    f"Circle validation threshold {name} must be within [0, 1]",
                    {"threshold": name, "value": value},
                )

    @classmethod
    def from_settings(cls, settings: Settings) -> "ValidationThresholds":
        return cls(
            safety_floor=settings.SAFETY_FLOOR,
            max_distance_to_gold=settings.MAX_DISTANCE_TO_GOLD,
            max_distance_to_ref1=settings.MAX_DISTANCE_TO_REF1,
            max_distance_to_ref2=settings.MAX_DISTANCE_TO_REF2,
        )


@dataclass(frozen=True)
class ValidationResult:
    accepted: bool
    value: Optional[str]
    gold_standard: Optional[str]
    path: ValidationPath
    trace: ValidationTraceEntry


class CircleValidator:
    def __init__(
        self,
        similarity_service,
        lexicon: LexiconStore,
        thresholds: Optional[ValidationThresholds] = None,
        search_limit: int = 10,
    ):
        self.similarity = similarity_service
        self.lexicon = lexicon
        self.thresholds = thresholds or ValidationThresholds()
        self.search_limit = search_limit

    async def validate(self, text: str, category: Category) -> ValidationResult:
        logger.info(f"[CIRCLE] Validating {category.label}: '{text}'")
        trace = _TraceBuilder(category.value, text)

        try:
            matches = await self.similarity.search(text, category, limit=self.search_limit, threshold=0.0)
        except SimilarityServiceError as e:
            logger.error(f"[CIRCLE] Similarity search failed for {category.label}: {e.message}")
            return trace.reject("service_unavailable")

        if not matches:
            logger.info(f"[CIRCLE] No indexed match for {category.label}")
            return trace.reject("no_match")

        top = matches[0]
        trace.gold_standard = top.text
        trace.score = top.score
        trace.distance_to_gold = 1.0 - top.score
        value = self.lexicon.canonicalize(category, top.value, top.text)
        logger.info(f"[CIRCLE] Top match '{top.text}' -> {top.value} (score {top.score:.4f})")

        if top.score < self.thresholds.safety_floor:
            logger.info(f"[CIRCLE] C1 failed: {top.score:.4f} < {self.thresholds.safety_floor} (outside circle)")
            return trace.reject("below_safety_floor")

        reference = self.lexicon.reference_for(category, top.text, value)
        if reference is None:
            logger.warning(f"[CIRCLE] No reference phrases for '{top.text}' in {category.value}")
            return trace.reject("no_reference")
        value = value or reference.standard_value

        if trace.distance_to_gold < self.thresholds.max_distance_to_gold:
            logger.info(f"[CIRCLE] Accepted '{value}' via GOLD (distance {trace.distance_to_gold:.4f})")
            return trace.accept(ValidationPath.GOLD, value)

        try:
            new_to_ref1 = await self.similarity.similarity(text, reference.ref1)
            trace.distance_to_ref1 = abs(new_to_ref1 - reference.gold_to_ref1)
            if trace.distance_to_ref1 < self.thresholds.max_distance_to_ref1:
                logger.info(f"[CIRCLE] Accepted '{value}' via REF1 (distance {trace.distance_to_ref1:.4f})")
                return trace.accept(ValidationPath.REF1, value)

            new_to_ref2 = await self.similarity.similarity(text, reference.ref2)
            trace.distance_to_ref2 = abs(new_to_ref2 - reference.gold_to_ref2)
            if trace.distance_to_ref2 < self.thresholds.max_distance_to_ref2:
                logger.info(f"[CIRCLE] Accepted '{value}' via REF2 (distance {trace.distance_to_ref2:.4f})")
                return trace.accept(ValidationPath.REF2, value)
        except SimilarityServiceError as e:
            logger.error(f"[CIRCLE] Reference similarity failed for {category.label}: {e.message}")
            return trace.reject("service_unavailable")

        logger.info(
            f"[CIRCLE] Rejected '{top.text}': gold {trace.distance_to_gold:.4f}, "
            f"ref1 {trace.distance_to_ref1:.4f}, ref2 {trace.distance_to_ref2:.4f}"
        )
        return trace.reject("distance_checks_failed")


class _TraceBuilder:
    """Collects intermediate values for one validation and emits the result."""

    def __init__(self, component_type: str, new_value: str):
        self.component_type = component_type
        self.new_value = new_value
        self.gold_standard: Optional[str] = None
        self.score: Optional[float] = None
        self.distance_to_gold: Optional[float] = None
        self.distance_to_ref1: Optional[float] = None
        self.distance_to_ref2: Optional[float] = None

    def _entry(self, path: ValidationPath, accepted: bool, reason: str) -> ValidationTraceEntry:
        return ValidationTraceEntry(
            component_type=self.component_type,
            new_value=self.new_value,
            gold_standard=self.gold_standard,
            score=self.score,
            distance_to_gold=self.distance_to_gold,
            distance_to_ref1=self.distance_to_ref1,
            distance_to_ref2=self.distance_to_ref2,
            validation_path=path,
            accepted=accepted,
            reason=reason,
        )

    def accept(self, path: ValidationPath, value: str) -> ValidationResult:
        entry = self._entry(path, True, f"accepted_{path.value.lower()}")
        return ValidationResult(True, value, self.gold_standard, path, entry)

    def reject(self, reason: str) -> ValidationResult:
        entry = self._entry(ValidationPath.NONE, False, reason)
        return ValidationResult(False, None, self.gold_standard, ValidationPath.NONE, entry)
