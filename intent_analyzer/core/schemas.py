"""
Request / response schemas for the HTTP API.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    """Utterance to analyze"""
    sentence: str = ""


class SlotReply(BaseModel):
    status: str
    value: str = ""
    reply: str = ""


class FilterReply(BaseModel):
    name: str
    operator: str
    value: str
    name_status: str
    operator_status: str
    value_status: str


class ValidationLogEntry(BaseModel):
    """One circle validation attempt"""
    component_type: str
    new_value: str
    gold_standard: Optional[str] = None
    score: Optional[float] = None
    distance_to_gold: Optional[float] = None
    distance_to_ref1: Optional[float] = None
    distance_to_ref2: Optional[float] = None
    validation_path: str
    accepted: bool
    reason: str


class AnalyzeResponse(BaseModel):
    """Clarity verdict for one utterance"""
    user_input: str
    intent: SlotReply
    process: SlotReply
    action: SlotReply
    filters_status: SlotReply
    filters: List[FilterReply] = []
    final_analysis: str
    proceed_button: bool
    redirect_flag: bool = False
    redirect_url: Optional[str] = None
    suggested_action: str = ""
    example_query: str = ""
    validation_logs: List[ValidationLogEntry] = []


class LogEntry(BaseModel):
    timestamp: str
    user_input: str
    result: AnalyzeResponse


class LogsResponse(BaseModel):
    count: int
    logs: List[LogEntry]


class PhraseUpsertRequest(BaseModel):
    """Phrase to add to the vector index at runtime"""
    category: str
    text: str = Field(..., min_length=1)
    value: str = Field(..., min_length=1)


class PhraseUpsertResponse(BaseModel):
    id: int
    category: str
    text: str
    value: str


class ErrorResponse(BaseModel):
    """Error response"""
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: str
