"""
Analysis result data model.

Everything here is immutable once created; the per-request AnalysisBuilder
in analyzer.py is the only mutable piece and it is discarded after build().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from intent_analyzer.modules.lexicon import SlotStatus


@dataclass(frozen=True)
class SlotOutcome:
    status: SlotStatus
    value: str = ""
    explanation: str = ""

    @property
    def is_resolved(self) -> bool:
        return self.status.is_resolved

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "value": self.value, "reply": self.explanation}


@dataclass(frozen=True)
class Filter:
    name: SlotOutcome
    operator: SlotOutcome
    value: SlotOutcome
    raw: Tuple[str, str, str] = ("", "", "")

    @property
    def status(self) -> SlotStatus:
        """Worst component status."""
        statuses = (self.name.status, self.operator.status, self.value.status)
        if any(not status.is_resolved for status in statuses):
            return SlotStatus.NOT_CLEAR
        if SlotStatus.ADEQUATE in statuses:
            return SlotStatus.ADEQUATE
        return SlotStatus.CLEAR

    def describe(self) -> str:
        parts = []
        for outcome, raw in zip((self.name, self.operator, self.value), self.raw):
            parts.append(outcome.value if outcome.is_resolved else raw)
        return " ".join(part for part in parts if part)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name.value or self.raw[0],
            "operator": self.operator.value or self.raw[1],
            "value": self.value.value or self.raw[2],
            "name_status": self.name.status.value,
            "operator_status": self.operator.status.value,
            "value_status": self.value.status.value,
        }


class ValidationPath(str, Enum):
    GOLD = "GOLD"
    REF1 = "REF1"
    REF2 = "REF2"
    NONE = "NONE"


@dataclass(frozen=True)
class ValidationTraceEntry:
    component_type: str
    new_value: str
    gold_standard: Optional[str]
    score: Optional[float]
    distance_to_gold: Optional[float]
    distance_to_ref1: Optional[float]
    distance_to_ref2: Optional[float]
    validation_path: ValidationPath
    accepted: bool
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component_type": self.component_type,
            "new_value": self.new_value,
            "gold_standard": self.gold_standard,
            "score": _round(self.score),
            "distance_to_gold": _round(self.distance_to_gold),
            "distance_to_ref1": _round(self.distance_to_ref1),
            "distance_to_ref2": _round(self.distance_to_ref2),
            "validation_path": self.validation_path.value,
            "accepted": self.accepted,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class AnalysisResult:
    user_input: str
    intent: SlotOutcome
    process: SlotOutcome
    action: SlotOutcome
    filters_outcome: SlotOutcome
    filters: Tuple[Filter, ...] = ()
    final_text: str = ""
    proceed: bool = False
    redirect_target: Optional[str] = None
    suggested_action: str = ""
    example_query: str = ""
    validation_trace: Tuple[ValidationTraceEntry, ...] = field(default_factory=tuple)

    @property
    def redirect(self) -> bool:
        return self.redirect_target is not None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_input": self.user_input,
            "intent": self.intent.to_dict(),
            "process": self.process.to_dict(),
            "action": self.action.to_dict(),
            "filters_status": self.filters_outcome.to_dict(),
            "filters": [item.to_dict() for item in self.filters],
            "final_analysis": self.final_text,
            "proceed_button": self.proceed,
            "redirect_flag": self.redirect,
            "redirect_url": self.redirect_target,
            "suggested_action": self.suggested_action,
            "example_query": self.example_query,
            "validation_logs": [entry.to_dict() for entry in self.validation_trace],
        }


def _round(value: Optional[float]) -> Optional[float]:
    return None if value is None else round(value, 4)
