"""
Reference phrases and pre-computed gold-to-reference scores for circle validation.

Every gold phrase has two alternate phrasings (ref1, ref2) and the cosine
similarity between the gold phrase and each reference. The scores were
computed offline with all-MiniLM-L6-v2 (mean pooling, L2-normalised) and are
configuration data: they are read as-is and never recomputed from the live
utterance. Re-run the offline calculation and bump REFERENCE_TABLE_VERSION
whenever a gold or reference phrase changes.

Notes on the source values:
  - filter_operator uses the symbolic operator for both references, so ref1
    and ref2 checks are identical for that category.
  - "key result checkin" ref2 ("intent") scores 0.1245 against its gold
    phrase; the REF2 check is effectively unreachable for that value.
  - filter_value rows other than today, high, pending and q1 reuse the
    measured pair with their group's gold phrase (cosine is symmetric), so
    ref1 and ref2 are the same phrase. q2, q3 and q4 have no measured pair
    and no row; the quarter rules and the dictionary resolve them, and
    runtime phrases cannot target them.
"""

from dataclasses import dataclass

from .categories import Category

REFERENCE_TABLE_VERSION = "2024.4"


@dataclass(frozen=True)
class ReferenceEntry:
    category: Category
    gold: str
    standard_value: str
    ref1: str
    ref2: str
    gold_to_ref1: float
    gold_to_ref2: float


# (gold phrase, canonical value, ref1, ref2, gold->ref1, gold->ref2)
_REFERENCE_ROWS = {
    Category.INTENT: [
        ("i want to", "menu", "i need to", "i would like to", 0.7774, 0.7732),
        ("how do i", "help", "how can i", "show me how", 0.9350, 0.5516),
    ],
    Category.ACTION: [
        ("create", "create", "add", "generate", 0.3091, 0.7006),
        ("modify", "modify", "update", "change", 0.6299, 0.7718),
        ("search", "search", "find", "locate", 0.6734, 0.6685),
        ("delete", "delete", "remove", "erase", 0.7576, 0.5458),
    ],
    Category.PROCESS: [
        ("objective", "objective", "goal", "target", 0.4860, 0.4323),
        ("key result", "key result", "kpi", "metric", 0.2255, 0.2717),
        ("initiative", "initiative", "action item", "task", 0.3236, 0.4775),
        ("review meeting", "review meeting", "meeting", "session", 0.6623, 0.2810),
        ("key result checkin", "key result checkin", "checkin", "intent", 0.4353, 0.1245),
    ],
    Category.FILTER_NAME: [
        ("due", "due", "deadline", "timing", 0.4843, 0.3741),
        ("priority", "priority", "importance", "ranking", 0.6234, 0.4828),
        ("status", "status", "state", "progress", 0.4275, 0.6076),
        ("assigned", "assigned", "owner", "responsible", 0.4233, 0.3655),
        ("quarter", "quarter", "q", "season", 0.3942, 0.3058),
    ],
    Category.FILTER_OPERATOR: [
        ("equal to", "equal to", "=", "=", 0.4684, 0.4684),
        ("greater than", "greater than", ">", ">", 0.4281, 0.4281),
        ("less than", "less than", "<", "<", 0.3261, 0.3261),
    ],
    Category.FILTER_VALUE: [
        ("today", "today", "tomorrow", "yesterday", 0.7743, 0.8571),
        ("tomorrow", "tomorrow", "today", "today", 0.7743, 0.7743),
        ("yesterday", "yesterday", "today", "today", 0.8571, 0.8571),
        ("high", "high", "medium", "low", 0.3951, 0.7103),
        ("medium", "medium", "high", "high", 0.3951, 0.3951),
        ("low", "low", "high", "high", 0.7103, 0.7103),
        ("pending", "pending", "completed", "finished", 0.5588, 0.5231),
        ("completed", "completed", "pending", "pending", 0.5588, 0.5588),
        ("q1", "q1", "quarter 1", "quarter 2", 0.3209, 0.3022),
    ],
}

REFERENCE_ENTRIES = {
    category: [ReferenceEntry(category, *row) for row in rows]
    for category, rows in _REFERENCE_ROWS.items()
}
