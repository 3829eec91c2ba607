"""
Slot categories and clarity statuses shared across the analyzer.
"""

from enum import Enum


class Category(str, Enum):
    INTENT = "intent"
    PROCESS = "process"
    ACTION = "action"
    FILTER_NAME = "filter_name"
    FILTER_OPERATOR = "filter_operator"
    FILTER_VALUE = "filter_value"

    @property
    def label(self) -> str:
        """Human readable name, e.g. 'filter name'."""
        return self.value.replace("_", " ")

    @property
    def is_filter_component(self) -> bool:
        """Filter components arrive as whole clause tokens, not as utterances."""
        return self in (Category.FILTER_NAME, Category.FILTER_OPERATOR, Category.FILTER_VALUE)


class SlotStatus(str, Enum):
    CLEAR = "Clear"
    ADEQUATE = "Adequate Clarity"
    NOT_CLEAR = "Not Clear"
    NOT_FOUND = "Not Found"
    NOT_APPLICABLE = "Not Applicable"

    @property
    def is_resolved(self) -> bool:
        return self in (SlotStatus.CLEAR, SlotStatus.ADEQUATE)


# Canonical intent values
INTENT_MENU = "menu"
INTENT_HELP = "help"

# Actions that accept filter clauses
FILTERABLE_ACTIONS = frozenset({"modify", "search"})
