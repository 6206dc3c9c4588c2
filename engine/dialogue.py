"""
Turn driver for the appointment conversation.

advance() is the single entry point collaborators call: it reads the
last message of the history, fills whatever empty fields it can, and
returns the new record with the assistant's reply. Nothing is kept
between calls.
"""
import logging
from datetime import date
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from booking.specs import BookingSpec, APPOINTMENT_SPEC
from .extract import extract_fields
from .planner import decide_reply

logger = logging.getLogger(__name__)


def _turn_content(turn: Any) -> str:
    """Read the text of a turn given as a mapping or a message object."""
    if isinstance(turn, Mapping):
        content = turn.get("content")
    else:
        content = getattr(turn, "content", None)
    return content or ""


def advance(
    history: Sequence[Any],
    current: Optional[Mapping[str, Any]] = None,
    spec: BookingSpec = APPOINTMENT_SPEC,
    today: Optional[date] = None,
) -> Tuple[Dict[str, Any], str]:
    """
    Process one user turn.

    Args:
        history: Conversation turns, oldest first; only the last one is read
        current: Record as held by the caller (never mutated)
        spec: Booking specification
        today: Reference day for "today"/"tomorrow" (defaults to date.today())

    Returns:
        Tuple of (updated record, reply text)

    Raises:
        ValueError: If history is empty
    """
    if not history:
        raise ValueError("Conversation history is empty")

    before = dict(current or {})
    user_message = _turn_content(history[-1])

    extraction = extract_fields(spec, user_message, before, today=today)
    updated = {**before, **extraction.extracted_data}

    result = decide_reply(spec, before, updated)
    logger.debug(
        f"Turn: state={result.state.value} "
        f"extracted={list(extraction.extracted_data.keys())} "
        f"missing={result.missing_fields}"
    )
    return updated, result.assistant_message
