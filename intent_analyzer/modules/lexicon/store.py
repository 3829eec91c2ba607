"""
Lexicon Store

Immutable, versioned bundle of every category-scoped table the analyzer
reads: dictionaries, phrase lists, reference tables, help documents and the
keyword lists used by the slot text extractors. One instance is built at
startup and injected wherever it is needed.
"""

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from . import dictionaries as tables
from .categories import Category
from .references import REFERENCE_ENTRIES, REFERENCE_TABLE_VERSION, ReferenceEntry

LEXICON_VERSION = "1.2.0"

# Categories whose terms count as "keywords present" for Not Clear vs Not Found
_KEYWORD_CATEGORIES = (Category.INTENT, Category.PROCESS, Category.ACTION)


@dataclass(frozen=True)
class LexiconEntry:
    standard_value: str
    primary: Tuple[str, ...]
    synonyms: Tuple[str, ...] = ()

    @property
    def terms(self) -> Tuple[str, ...]:
        """Primary terms first, then synonyms."""
        return self.primary + self.synonyms


@dataclass(frozen=True)
class PhraseEntry:
    standard_value: str
    phrases: Tuple[str, ...]


@dataclass(frozen=True)
class IndexPoint:
    """One phrase to embed into the vector index."""
    category: Category
    text: str
    value: str
    is_primary: bool


@dataclass(frozen=True)
class LexiconStore:
    version: str
    dictionaries: Mapping[Category, Tuple[LexiconEntry, ...]]
    phrases: Mapping[Category, Tuple[PhraseEntry, ...]]
    references: Mapping[Category, Tuple[ReferenceEntry, ...]]
    help_documents: Mapping[str, str]
    intent_phrase_categories: Mapping[str, str]
    action_verbs: Tuple[str, ...]
    filter_keywords: Tuple[str, ...]
    process_stop_words: Tuple[str, ...]

    def entries(self, category: Category) -> Tuple[LexiconEntry, ...]:
        return self.dictionaries.get(category, ())

    def phrase_entries(self, category: Category) -> Tuple[PhraseEntry, ...]:
        return self.phrases.get(category, ())

    def canonical_values(self, category: Category) -> List[str]:
        return [entry.standard_value for entry in self.entries(category)]

    def multiword_values(self, category: Category) -> List[str]:
        """Canonical values made of more than one word, longest first."""
        values = [value for value in self.canonical_values(category) if " " in value]
        return sorted(values, key=lambda value: -len(value))

    def intent_lead_ins(self) -> List[str]:
        """Every intent term and phrase, longest first."""
        lead_ins = [term for entry in self.entries(Category.INTENT) for term in entry.terms]
        lead_ins += [phrase for entry in self.phrase_entries(Category.INTENT) for phrase in entry.phrases]
        return sorted(set(lead_ins), key=lambda term: (-len(term), term))

    def canonicalize(self, category: Category, value: str, text: Optional[str] = None) -> Optional[str]:
        """
        Map a vector-index hit to a canonical slot value.

        The index stores canonical values in its payload, but older points
        (and intent points) may only carry a surface phrase.
        """
        known = set(self.canonical_values(category))
        if value in known:
            return value
        if category == Category.INTENT:
            for candidate in (value, text):
                if candidate and candidate in self.intent_phrase_categories:
                    return self.intent_phrase_categories[candidate]
        if text and text in known:
            return text
        return None

    def reference_for(
        self,
        category: Category,
        gold_text: Optional[str],
        standard_value: Optional[str] = None,
    ) -> Optional[ReferenceEntry]:
        """
        Find the reference row for a gold phrase.

        Lookup order: exact gold phrase, gold phrase equal to the canonical
        value, then the first row declared for the canonical value.
        """
        rows = self.references.get(category, ())
        for key in (gold_text, standard_value):
            if not key:
                continue
            for row in rows:
                if row.gold == key:
                    return row
        if standard_value:
            for row in rows:
                if row.standard_value == standard_value:
                    return row
        return None

    def help_document(self, process: str) -> Optional[str]:
        return self.help_documents.get(process)

    def has_keyword(self, text: str) -> bool:
        """True when any intent/process/action term occurs as whole words."""
        for category in _KEYWORD_CATEGORIES:
            terms = [term for entry in self.entries(category) for term in entry.terms]
            terms += [phrase for entry in self.phrase_entries(category) for phrase in entry.phrases]
            for term in terms:
                if re.search(rf"(?<!\w){re.escape(term)}(?!\w)", text):
                    return True
        return False

    def index_points(self) -> Iterator[IndexPoint]:
        """Every dictionary term and phrase, in declaration order, for bulk indexing."""
        for category in Category:
            for entry in self.entries(category):
                for term in entry.terms:
                    yield IndexPoint(category, term, entry.standard_value, term in entry.primary)
            for entry in self.phrase_entries(category):
                for phrase in entry.phrases:
                    yield IndexPoint(category, phrase, entry.standard_value, False)


def _build_entries(raw: Dict[str, Dict[str, List[str]]]) -> Tuple[LexiconEntry, ...]:
    return tuple(
        LexiconEntry(
            standard_value=value,
            primary=tuple(term.lower() for term in table.get("primary", [])),
            synonyms=tuple(term.lower() for term in table.get("synonyms", [])),
        )
        for value, table in raw.items()
    )


def _build_phrases(raw: Dict[str, List[str]]) -> Tuple[PhraseEntry, ...]:
    return tuple(
        PhraseEntry(standard_value=value, phrases=tuple(phrase.lower() for phrase in phrases))
        for value, phrases in raw.items()
    )


def build_default_lexicon() -> LexiconStore:
    return LexiconStore(
        version=f"{LEXICON_VERSION}+refs.{REFERENCE_TABLE_VERSION}",
        dictionaries={category: _build_entries(raw) for category, raw in tables.DICTIONARIES.items()},
        phrases={category: _build_phrases(raw) for category, raw in tables.PHRASE_DICTIONARIES.items()},
        references={category: tuple(rows) for category, rows in REFERENCE_ENTRIES.items()},
        help_documents=dict(tables.PROCESS_REFERENCE_DOCUMENTS),
        intent_phrase_categories=dict(tables.INTENT_PHRASE_TO_CATEGORY),
        action_verbs=tuple(tables.ACTION_VERBS),
        filter_keywords=tuple(tables.FILTER_KEYWORDS),
        process_stop_words=tuple(tables.PROCESS_STOP_WORDS),
    )


@lru_cache()
def get_default_lexicon() -> LexiconStore:
    return build_default_lexicon()
