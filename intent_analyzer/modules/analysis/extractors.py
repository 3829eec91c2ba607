"""
Slot Text Extractor

Pure functions that cut the part of a normalised utterance relevant to one
slot. The extracted text is what circle validation embeds; an empty string
means circle validation is skipped for that slot.
"""

import re
from typing import Iterable, List, Optional, Tuple

from intent_analyzer.modules.lexicon import Category, LexiconStore

INTENT_FALLBACK_TOKENS = 4


def normalize_utterance(sentence: str) -> str:
    return re.sub(r"\s+", " ", sentence or "").strip().lower()


def find_earliest(text: str, terms: Iterable[str]) -> Optional[Tuple[int, str]]:
    """
    Earliest whole-word occurrence of any term.

    Ties at the same position go to the longest term, so "search for" wins
    over "search".
    """
    best: Optional[Tuple[int, int, str]] = None
    for term in terms:
        match = re.search(rf"(?<!\w){re.escape(term)}(?!\w)", text)
        if not match:
            continue
        key = (match.start(), -len(term), term)
        if best is None or key[:2] < best[:2]:
            best = key
    if best is None:
        return None
    return best[0], best[2]


def extract_intent_text(text: str, lexicon: LexiconStore) -> str:
    """Text before the first action verb, else the first four tokens."""
    hit = find_earliest(text, lexicon.action_verbs)
    if hit and hit[0] > 0:
        return text[:hit[0]].strip()
    return " ".join(text.split()[:INTENT_FALLBACK_TOKENS])


def extract_process_text(text: str, lexicon: LexiconStore) -> str:
    """
    Text after the earliest action verb, cut at the first filter keyword.

    Leading articles are dropped; a known multi-word process name is kept
    whole, otherwise only the first token is returned.
    """
    hit = find_earliest(text, lexicon.action_verbs)
    if not hit:
        return ""
    position, verb = hit
    after_verb = text[position + len(verb):].strip()

    keyword = find_earliest(after_verb, lexicon.filter_keywords)
    if keyword:
        after_verb = after_verb[:keyword[0]].strip()

    tokens = after_verb.split()
    while tokens and tokens[0] in lexicon.process_stop_words:
        tokens.pop(0)
    if not tokens:
        return ""

    for value in lexicon.multiword_values(Category.PROCESS):
        words = value.split()
        if _prefix_matches(tokens, words):
            return " ".join(tokens[:len(words)])
    return tokens[0]


def extract_action_text(text: str, lexicon: LexiconStore) -> str:
    """The earliest action verb, else the first token after an intent lead-in."""
    hit = find_earliest(text, lexicon.action_verbs)
    if hit:
        return hit[1]

    lead_in = find_earliest(text, lexicon.intent_lead_ins())
    if not lead_in:
        return ""
    position, phrase = lead_in
    remainder = text[position + len(phrase):].split()
    return remainder[0] if remainder else ""


def _prefix_matches(tokens: List[str], words: List[str]) -> bool:
    if len(tokens) < len(words):
        return False
    # plural tolerant: "key results" still names "key result"
    return all(token in (word, word + "s") for token, word in zip(tokens, words))
