"""
Slot resolvers.

Every resolver implements resolve(text, category) and returns a SlotOutcome
on success or None to let the next stage try. ResolverCascade runs the
stages in order and stops at the first outcome.

Main slots match terms anywhere in the utterance. When several terms match
the winner is chosen explicitly: earliest position in the text, then the
longest term, then declaration order (canonical value order, primary terms
before synonyms). Filter components are single clause tokens and must equal
a term exactly.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence, Tuple

from intent_analyzer.modules.lexicon import Category, LexiconStore, SlotStatus
from intent_analyzer.modules.observability.logging_config import get_logger

from .circle_validator import CircleValidator
from .models import SlotOutcome, ValidationTraceEntry

logger = get_logger(__name__)

_SUBJECTS = {
    Category.INTENT: "intent",
    Category.PROCESS: "process",
    Category.ACTION: "action",
    Category.FILTER_NAME: "filter name",
    Category.FILTER_OPERATOR: "filter operator",
    Category.FILTER_VALUE: "filter value",
}


def explain(category: Category, status: SlotStatus, value: str = "") -> str:
    """User-facing reply for one slot outcome."""
    subject = _SUBJECTS[category]
    if category == Category.INTENT:
        return {
            SlotStatus.CLEAR: "Your intent is clear.",
            SlotStatus.ADEQUATE: "Your intent seems somewhat clear.",
            SlotStatus.NOT_CLEAR: "Unable to determine your intent.",
            SlotStatus.NOT_FOUND: "No intent detected.",
            SlotStatus.NOT_APPLICABLE: "Intent not evaluated.",
        }[status]
    return {
        SlotStatus.CLEAR: f"Detected {subject} is clear: {value}",
        SlotStatus.ADEQUATE: f"Detected {subject} is somewhat clear: {value}",
        SlotStatus.NOT_CLEAR: f"Unable to determine the {subject}.",
        SlotStatus.NOT_FOUND: f"No {subject} detected.",
        SlotStatus.NOT_APPLICABLE: f"The {subject} is not applicable to this request.",
    }[status]


def best_term_match(
    text: str,
    candidates: Iterable[Tuple[str, str]],
    exact: bool = False,
) -> Optional[Tuple[str, str]]:
    """
    Pick the winning (standard_value, term) pair whose term occurs in text.

    With exact=True the term must be the whole text. Candidates must be
    given in declaration order.
    """
    best = None
    best_key = None
    for order, (value, term) in enumerate(candidates):
        if not term:
            continue
        if exact:
            position = 0 if text == term else -1
        else:
            position = text.find(term)
        if position < 0:
            continue
        key = (position, -len(term), order)
        if best_key is None or key < best_key:
            best, best_key = (value, term), key
    return best


class SlotResolver(ABC):
    stage: str = ""
    uses_extracted_text: bool = False

    @abstractmethod
    async def resolve(self, text: str, category: Category) -> Optional[SlotOutcome]:
        ...


class DictionaryResolver(SlotResolver):
    """Primary and synonym terms; a hit is Clear."""

    stage = "dictionary"

    def __init__(self, lexicon: LexiconStore):
        self.lexicon = lexicon

    async def resolve(self, text: str, category: Category) -> Optional[SlotOutcome]:
        candidates = [
            (entry.standard_value, term)
            for entry in self.lexicon.entries(category)
            for term in entry.terms
        ]
        hit = best_term_match(text, candidates, exact=category.is_filter_component)
        if not hit:
            return None
        value, term = hit
        logger.debug(f"[RESOLVER] {category.value} '{value}' via dictionary term '{term}'")
        return SlotOutcome(SlotStatus.CLEAR, value, explain(category, SlotStatus.CLEAR, value))


class PhraseResolver(SlotResolver):
    """Loose paraphrases; a hit is Adequate Clarity, never Clear."""

    stage = "phrase"

    def __init__(self, lexicon: LexiconStore):
        self.lexicon = lexicon

    async def resolve(self, text: str, category: Category) -> Optional[SlotOutcome]:
        candidates = [
            (entry.standard_value, phrase)
            for entry in self.lexicon.phrase_entries(category)
            for phrase in entry.phrases
        ]
        hit = best_term_match(text, candidates, exact=category.is_filter_component)
        if not hit:
            return None
        value, phrase = hit
        logger.debug(f"[RESOLVER] {category.value} '{value}' via phrase '{phrase}'")
        return SlotOutcome(SlotStatus.ADEQUATE, value, explain(category, SlotStatus.ADEQUATE, value))


class CircleResolver(SlotResolver):
    """Semantic match accepted by circle validation; records every invocation."""

    stage = "circle"
    uses_extracted_text = True

    def __init__(self, validator: CircleValidator, trace: List[ValidationTraceEntry]):
        self.validator = validator
        self.trace = trace

    async def resolve(self, text: str, category: Category) -> Optional[SlotOutcome]:
        if not text:
            return None
        result = await self.validator.validate(text, category)
        self.trace.append(result.trace)
        if not result.accepted:
            return None
        return SlotOutcome(SlotStatus.ADEQUATE, result.value, explain(category, SlotStatus.ADEQUATE, result.value))


class ResolverCascade:
    def __init__(self, resolvers: Sequence[SlotResolver]):
        self.resolvers = list(resolvers)

    async def resolve(
        self,
        text: str,
        category: Category,
        extracted_text: Optional[str] = None,
    ) -> Optional[SlotOutcome]:
        """
        Run each stage until one returns an outcome.

        Stages flagged uses_extracted_text receive extracted_text when it is
        given; the others always see the full text.
        """
        for resolver in self.resolvers:
            stage_text = text
            if resolver.uses_extracted_text and extracted_text is not None:
                stage_text = extracted_text
            outcome = await resolver.resolve(stage_text, category)
            if outcome is not None:
                logger.debug(f"[RESOLVER] {category.value} resolved at {resolver.stage} stage")
                return outcome
        return None
