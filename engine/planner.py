"""
Deterministic dialogue planner.

This module decides what the assistant says after each turn.
It uses BookingSpec to determine:
- Which required fields are still missing
- Which fields were filled by this turn
- Whether to greet, keep collecting, or confirm

All logic is deterministic and stateless; the caller passes the record
as it was before the turn and as it is after extraction.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, List
import logging

from booking.specs import BookingSpec, FieldSpec
from .extract import is_field_filled

logger = logging.getLogger(__name__)


class DialogueState(str, Enum):
    """Possible dialogue states after a turn."""
    GREETING = "GREETING"
    COLLECTING = "COLLECTING"
    CONFIRMATION = "CONFIRMATION"


@dataclass
class PlannerResult:
    """Result of the planner decision."""
    state: DialogueState
    missing_fields: List[str] = field(default_factory=list)
    newly_filled: List[str] = field(default_factory=list)
    next_field: Optional[str] = None
    assistant_message: str = ""


# =============================================================================
# FIELD CHECKING
# =============================================================================

def get_missing_fields(spec: BookingSpec, record: Dict[str, Any]) -> List[str]:
    """
    Get the required field names that are still empty.

    Always recomputed from the record, in summary order
    (service, name, email, phone, date, time).
    """
    return [
        name for name in spec.get_required_field_names()
        if not is_field_filled(record, name)
    ]


def get_newly_filled_fields(
    spec: BookingSpec,
    before: Dict[str, Any],
    after: Dict[str, Any],
) -> List[str]:
    """Get required fields that went from empty to filled between two records."""
    return [
        f.name for f in spec.get_required_fields()
        if is_field_filled(after, f.name) and not is_field_filled(before, f.name)
    ]


def get_next_field(spec: BookingSpec, record: Dict[str, Any]) -> Optional[FieldSpec]:
    """
    Get the field to prompt for next.

    Returns the first empty field by prompt priority
    (name > email > phone > date > time > service), or None.
    """
    for field_spec in spec.get_prompt_order():
        if not is_field_filled(record, field_spec.name):
            return field_spec
    return None


# =============================================================================
# MESSAGE BUILDING
# =============================================================================

def build_greeting(spec: BookingSpec) -> str:
    """Greeting with the numbered service catalog."""
    catalog = "\n".join(
        f"{i}. {service}" for i, service in enumerate(spec.services, start=1)
    )
    return f"{spec.greeting_intro}\n\n{catalog}\n\n{spec.greeting_question}"


def build_confirmation(spec: BookingSpec, record: Dict[str, Any]) -> str:
    """
    Build the confirmation summary for a complete record.

    Lists every required field, plus optional fields that have a value,
    followed by the closing line.
    """
    lines = []
    for field_spec in spec.fields_in_order:
        if not field_spec.required and not is_field_filled(record, field_spec.name):
            continue
        lines.append(f"{field_spec.icon} {field_spec.label}: {record.get(field_spec.name)}")

    return f"{spec.confirm_intro}\n\n" + "\n".join(lines) + f"\n\n{spec.confirm_closing}"


# =============================================================================
# MAIN PLANNER
# =============================================================================

def decide_reply(
    spec: BookingSpec,
    before: Dict[str, Any],
    after: Dict[str, Any],
) -> PlannerResult:
    """
    Decide the reply for a turn.

    Rules:
    1. No required field missing => CONFIRMATION (summary + closing)
    2. Every required field missing => GREETING (numbered catalog)
    3. Otherwise => COLLECTING: "Thank you! " if this turn filled anything,
       then the question for the next field by prompt priority

    Args:
        spec: The booking specification
        before: Record as received at the start of the turn
        after: Record after extraction

    Returns:
        PlannerResult with the state and the assistant message
    """
    missing = get_missing_fields(spec, after)
    newly_filled = get_newly_filled_fields(spec, before, after)

    if not missing:
        logger.info("Planner: all required fields filled => CONFIRMATION")
        return PlannerResult(
            state=DialogueState.CONFIRMATION,
            newly_filled=newly_filled,
            assistant_message=build_confirmation(spec, after),
        )

    if len(missing) == len(spec.get_required_field_names()):
        logger.info("Planner: nothing collected yet => GREETING")
        return PlannerResult(
            state=DialogueState.GREETING,
            missing_fields=missing,
            assistant_message=build_greeting(spec),
        )

    message = spec.acknowledgement if newly_filled else ""
    next_field = get_next_field(spec, after)
    if next_field is not None:
        message += next_field.prompt

    logger.info(
        f"Planner: COLLECTING next={next_field.name if next_field else 'none'} "
        f"missing={missing} new={newly_filled}"
    )
    return PlannerResult(
        state=DialogueState.COLLECTING,
        missing_fields=missing,
        newly_filled=newly_filled,
        next_field=next_field.name if next_field else None,
        assistant_message=message,
    )
