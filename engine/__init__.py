"""
Conversation engine - extractor, planner and turn driver.
"""
from .extract import (
    ExtractionResult,
    build_extractor_table,
    extract_fields,
    is_field_filled,
)
from .planner import (
    DialogueState,
    PlannerResult,
    get_missing_fields,
    get_next_field,
    decide_reply,
)
from .dialogue import advance

__all__ = [
    "ExtractionResult",
    "build_extractor_table",
    "extract_fields",
    "is_field_filled",
    "DialogueState",
    "PlannerResult",
    "get_missing_fields",
    "get_next_field",
    "decide_reply",
    "advance",
]
