"""
Intent Analyzer

Runs the slot pipeline for one utterance and aggregates the outcomes into a
verdict:

1. Intent, then process (dictionary -> phrase -> circle validation)
2. Help requests with a known process short-circuit to the process's help
   document; action and filters are not evaluated
3. Action, then filters (menu intent + modify/search action only)
4. Aggregation: proceed when every slot is usable, otherwise report which
   slots failed with a suggestion and an example query

The analyzer itself is stateless between requests; each call builds its own
AnalysisBuilder, trace list and resolver cascade.
"""

from typing import List, Optional, Tuple

from intent_analyzer.core.exceptions import InputValidationError
from intent_analyzer.modules.lexicon import (
    Category,
    FILTERABLE_ACTIONS,
    INTENT_HELP,
    INTENT_MENU,
    LexiconStore,
    SlotStatus,
)
from intent_analyzer.modules.observability.logging_config import get_logger

from .circle_validator import CircleValidator
from .extractors import (
    extract_action_text,
    extract_intent_text,
    extract_process_text,
    normalize_utterance,
)
from .filters import FilterExtractor
from .models import AnalysisResult, Filter, SlotOutcome, ValidationTraceEntry
from .resolvers import CircleResolver, DictionaryResolver, PhraseResolver, ResolverCascade, explain

logger = get_logger(__name__)

DEFAULT_MAX_SENTENCE_LENGTH = 500

# Suggested rephrasing per intent category when the command is unclear
SUGGESTIONS = {
    INTENT_MENU: (
        "Say which action (create, modify, search or delete) you want to perform on which record, "
        "for example an objective, key result, initiative, review meeting or key result checkin.",
        "I want to create an objective",
    ),
    INTENT_HELP: (
        "Name the record you need help with after your question, for example "
        "'How do I' followed by an action and a record.",
        "How do I create a key result?",
    ),
    "unknown": (
        "Start with what you want to do ('I want to' or 'How do I'), then an action and a record. "
        "Add filters after 'where', e.g. 'where priority = high'.",
        "I want to search objectives where priority = high",
    ),
}


def validate_sentence(sentence: Optional[str], max_length: int = DEFAULT_MAX_SENTENCE_LENGTH) -> str:
    """Normalise the utterance or reject it before it enters the pipeline."""
    text = normalize_utterance(sentence or "")
    if not text:
        raise InputValidationError("Please enter a sentence to analyze.")
    if len(text) > max_length:
        raise InputValidationError(
            f"Please keep your sentence under {max_length} characters.",
            {"length": len(text), "max_length": max_length},
        )
    return text


class AnalysisBuilder:
    """Mutable per-request state; build() freezes it into an AnalysisResult."""

    def __init__(self, user_input: str):
        self.user_input = user_input
        self.trace: List[ValidationTraceEntry] = []
        self.intent: Optional[SlotOutcome] = None
        self.process: Optional[SlotOutcome] = None
        self.action: Optional[SlotOutcome] = None
        self.filters_outcome: Optional[SlotOutcome] = None
        self.filters: List[Filter] = []

    def set_slot(self, slot: str, outcome: SlotOutcome) -> None:
        if getattr(self, slot) is not None:
            raise RuntimeError(f"Slot '{slot}' is already resolved")
        setattr(self, slot, outcome)

    def build(
        self,
        final_text: str,
        proceed: bool,
        redirect_target: Optional[str] = None,
        suggested_action: str = "",
        example_query: str = "",
    ) -> AnalysisResult:
        return AnalysisResult(
            user_input=self.user_input,
            intent=self.intent,
            process=self.process,
            action=self.action,
            filters_outcome=self.filters_outcome,
            filters=tuple(self.filters),
            final_text=final_text,
            proceed=proceed,
            redirect_target=redirect_target,
            suggested_action=suggested_action,
            example_query=example_query,
            validation_trace=tuple(self.trace),
        )


class IntentAnalyzer:
    def __init__(
        self,
        lexicon: LexiconStore,
        validator: CircleValidator,
        max_sentence_length: int = DEFAULT_MAX_SENTENCE_LENGTH,
    ):
        self.lexicon = lexicon
        self.validator = validator
        self.max_sentence_length = max_sentence_length
        self.filter_extractor = FilterExtractor(lexicon)

    def _cascade(self, trace: List[ValidationTraceEntry]) -> ResolverCascade:
        return ResolverCascade([
            DictionaryResolver(self.lexicon),
            PhraseResolver(self.lexicon),
            CircleResolver(self.validator, trace),
        ])

    async def analyze(self, sentence: str) -> AnalysisResult:
        text = validate_sentence(sentence, self.max_sentence_length)
        builder = AnalysisBuilder(text)
        cascade = self._cascade(builder.trace)
        logger.info(f"[ANALYZER] Analyzing: '{text}'")

        builder.set_slot("intent", await self._resolve_slot(
            cascade, text, Category.INTENT, extract_intent_text(text, self.lexicon)))
        builder.set_slot("process", await self._resolve_slot(
            cascade, text, Category.PROCESS, extract_process_text(text, self.lexicon)))

        redirect = self._help_redirect(builder.intent, builder.process)
        if redirect:
            builder.set_slot("action", _not_applicable("The action is"))
            builder.set_slot("filters_outcome", _not_applicable("Filters are"))
            final_text = f"Redirecting you to the {builder.process.value} help documentation."
            logger.info(f"[ANALYZER] Help redirect -> {redirect}")
            return builder.build(final_text, proceed=False, redirect_target=redirect)

        builder.set_slot("action", await self._resolve_slot(
            cascade, text, Category.ACTION, extract_action_text(text, self.lexicon)))

        if self._filters_apply(builder.intent, builder.action):
            builder.filters = await self.filter_extractor.extract(text, cascade)
            builder.set_slot("filters_outcome", _filters_outcome(builder.filters))
        else:
            builder.set_slot("filters_outcome", _not_applicable("Filters are"))

        return self._aggregate(builder)

    async def _resolve_slot(
        self,
        cascade: ResolverCascade,
        text: str,
        category: Category,
        extracted_text: str,
    ) -> SlotOutcome:
        outcome = await cascade.resolve(text, category, extracted_text=extracted_text)
        if outcome is not None:
            logger.info(f"[ANALYZER] {category.label}: {outcome.status.value} '{outcome.value}'")
            return outcome

        status = SlotStatus.NOT_CLEAR if self.lexicon.has_keyword(text) else SlotStatus.NOT_FOUND
        logger.info(f"[ANALYZER] {category.label}: {status.value}")
        return SlotOutcome(status, "", explain(category, status))

    def _help_redirect(self, intent: SlotOutcome, process: SlotOutcome) -> Optional[str]:
        if intent.value != INTENT_HELP or not (intent.is_resolved and process.is_resolved):
            return None
        return self.lexicon.help_document(process.value)

    @staticmethod
    def _filters_apply(intent: SlotOutcome, action: SlotOutcome) -> bool:
        return (
            intent.is_resolved and intent.value == INTENT_MENU
            and action.is_resolved and action.value in FILTERABLE_ACTIONS
        )

    def _aggregate(self, builder: AnalysisBuilder) -> AnalysisResult:
        checks: List[Tuple[str, bool]] = [
            ("intent", builder.intent.is_resolved),
            ("process", builder.process.is_resolved),
            ("action", builder.action.is_resolved),
            ("filters", builder.filters_outcome.status != SlotStatus.NOT_CLEAR),
        ]
        failed = [slot for slot, ok in checks if not ok]

        if not failed:
            final_text = f"Your intent is clear to {builder.action.value} on {builder.process.value}"
            if builder.filters_outcome.is_resolved:
                final_text += f" with {builder.filters_outcome.value}"
            final_text += "."
            logger.info(f"[ANALYZER] Proceed: {final_text}")
            return builder.build(final_text, proceed=True)

        intent_key = builder.intent.value if builder.intent.is_resolved else "unknown"
        suggested_action, example_query = SUGGESTIONS.get(intent_key, SUGGESTIONS["unknown"])
        final_text = f"Unable to determine: {', '.join(failed)}."
        logger.info(f"[ANALYZER] Not clear: {final_text}")
        return builder.build(
            final_text,
            proceed=False,
            suggested_action=suggested_action,
            example_query=example_query,
        )


def _not_applicable(subject: str) -> SlotOutcome:
    return SlotOutcome(SlotStatus.NOT_APPLICABLE, "", f"{subject} not applicable to this request.")


def _filters_outcome(filters: List[Filter]) -> SlotOutcome:
    if not filters:
        return SlotOutcome(SlotStatus.NOT_FOUND, "", "No filters detected.")

    statuses = [item.status for item in filters]
    if SlotStatus.NOT_CLEAR in statuses:
        status, reply = SlotStatus.NOT_CLEAR, "Unable to determine one or more filters."
    elif SlotStatus.ADEQUATE in statuses:
        status, reply = SlotStatus.ADEQUATE, "Detected filters are somewhat clear."
    else:
        status, reply = SlotStatus.CLEAR, "Detected filters are clear."
    return SlotOutcome(status, ", ".join(item.describe() for item in filters), reply)
