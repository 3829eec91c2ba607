from .categories import Category, SlotStatus, INTENT_MENU, INTENT_HELP, FILTERABLE_ACTIONS
from .references import ReferenceEntry
from .store import (
    LexiconEntry,
    PhraseEntry,
    IndexPoint,
    LexiconStore,
    build_default_lexicon,
    get_default_lexicon,
)

__all__ = [
    "Category",
    "SlotStatus",
    "INTENT_MENU",
    "INTENT_HELP",
    "FILTERABLE_ACTIONS",
    "ReferenceEntry",
    "LexiconEntry",
    "PhraseEntry",
    "IndexPoint",
    "LexiconStore",
    "build_default_lexicon",
    "get_default_lexicon",
]
