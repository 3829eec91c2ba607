"""
Filter Extractor

Finds `<name> <operator> <value>` clauses with an ordered list of pattern
rules, then resolves each component through the same resolver cascade as the
main slots. A later rule never claims text already matched by an earlier one,
and identical (name, operator, value) triples are kept once.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from intent_analyzer.modules.lexicon import Category, LexiconStore, SlotStatus
from intent_analyzer.modules.observability.logging_config import get_logger

from .models import Filter, SlotOutcome
from .resolvers import ResolverCascade, explain

logger = get_logger(__name__)

IMPLIED_OPERATOR = "="

_GREATER = r">|\bgreater than\b|\bmore than\b|\bhigher than\b|\babove\b|\bexceeds\b"
_LESS = r"<|\bless than\b|\bfewer than\b|\blower than\b|\bbelow\b|\bunder\b"
_EQUAL = r"=|\bequal to\b|\bequals\b|\bis exactly\b|\bsame as\b|\bmatches\b|\bis\b"
_OPERATOR_WORDS = (
    "is", "equals", "equal", "greater", "more", "higher", "above", "exceeds",
    "less", "fewer", "lower", "below", "under", "same", "matches",
)
# Words that never start a juxtaposed filter value ("priority of an objective")
_FUNCTION_WORDS = (
    "of", "for", "the", "a", "an", "to", "in", "on", "at", "by", "from", "with", "and", "or", "my", "all",
)
_TRAILING_PUNCTUATION = ".?!;:"


@dataclass(frozen=True)
class FilterRule:
    name: str
    pattern: re.Pattern
    # None when the pattern captures the operator itself
    implied_operator: Optional[str] = None

    def triples(self, text: str):
        for match in self.pattern.finditer(text):
            if self.implied_operator is None:
                name, operator, value = match.group(1), match.group(2), match.group(3)
            else:
                name, operator, value = match.group(1), self.implied_operator, match.group(2)
            yield match.span(), (name.strip(), operator.strip(), value.strip().rstrip(_TRAILING_PUNCTUATION))


def build_filter_rules(lexicon: LexiconStore, scoped: bool = True) -> List[FilterRule]:
    """
    Ordered rules; comparisons first so 'is greater than' is not read as equality.

    Inside a 'where' clause any word may name a filter so unknown names are
    still reported. Without one, only known filter names start a clause.
    """
    name_terms = sorted(
        {term for entry in lexicon.entries(Category.FILTER_NAME) for term in entry.terms},
        key=lambda term: (-len(term), term),
    )
    known = "|".join(re.escape(term) for term in name_terms)
    keywords = "|".join(re.escape(term) for term in name_terms if len(term) > 1)
    name = rf"((?:{known})\b|\w+)" if scoped else rf"((?:{known})\b)"
    not_value = "|".join(_OPERATOR_WORDS + _FUNCTION_WORDS)

    return [
        FilterRule("greater_than", re.compile(rf"\b{name}\s*(?:\bis\s+)?({_GREATER})\s*([^\s,]+)")),
        FilterRule("less_than", re.compile(rf"\b{name}\s*(?:\bis\s+)?({_LESS})\s*([^\s,]+)")),
        FilterRule("quarter_equals", re.compile(r"\b(quarter|q)\s*(=|\bequals\b|\bis\b|\bequal to\b)\s*(q?[1-4])\b")),
        FilterRule("for_quarter", re.compile(r"\bfor\s+(quarter|q)\s*(q?[1-4])\b"), IMPLIED_OPERATOR),
        FilterRule("equals", re.compile(rf"\b{name}\s*({_EQUAL})\s*([^\s,]+)")),
        FilterRule(
            "keyword_value",
            re.compile(rf"\b({keywords})\s+(?:to\s+)?(?!(?:{not_value})\b)([^\s,=<>]+)"),
            IMPLIED_OPERATOR,
        ),
    ]


def filter_scope(text: str) -> Tuple[str, bool]:
    """Text after the first 'where' and True, or the whole utterance and False."""
    match = re.search(r"\bwhere\b", text)
    if match:
        return text[match.end():].strip(), True
    return text, False


class FilterExtractor:
    def __init__(self, lexicon: LexiconStore):
        self.lexicon = lexicon
        self.scoped_rules = build_filter_rules(lexicon, scoped=True)
        self.open_rules = build_filter_rules(lexicon, scoped=False)

    def find_clauses(self, text: str) -> List[Tuple[str, str, str]]:
        """Raw (name, operator, value) triples in order of appearance."""
        scope, scoped = filter_scope(text)
        rules = self.scoped_rules if scoped else self.open_rules
        claimed: List[Tuple[int, int]] = []
        found: List[Tuple[int, Tuple[str, str, str]]] = []
        seen = set()

        for rule in rules:
            for span, triple in rule.triples(scope):
                if any(span[0] < end and start < span[1] for start, end in claimed):
                    continue
                claimed.append(span)
                if triple in seen:
                    continue
                seen.add(triple)
                found.append((span[0], triple))
                logger.debug(f"[FILTERS] {rule.name}: {triple}")

        return [triple for _, triple in sorted(found, key=lambda item: item[0])]

    async def extract(self, text: str, cascade: ResolverCascade) -> List[Filter]:
        filters = []
        for name, operator, value in self.find_clauses(text):
            filters.append(Filter(
                name=await self._resolve(cascade, name, Category.FILTER_NAME),
                operator=await self._resolve(cascade, operator, Category.FILTER_OPERATOR),
                value=await self._resolve(cascade, value, Category.FILTER_VALUE),
                raw=(name, operator, value),
            ))
        logger.info(f"[FILTERS] Extracted {len(filters)} filter(s)")
        return filters

    @staticmethod
    async def _resolve(cascade: ResolverCascade, text: str, category: Category) -> SlotOutcome:
        outcome = await cascade.resolve(text, category)
        if outcome is None:
            return SlotOutcome(SlotStatus.NOT_CLEAR, "", explain(category, SlotStatus.NOT_CLEAR))
        return outcome
