"""
Field extraction logic.

This module extracts appointment fields from a single user message.
Every field has its own pure pattern function (text -> value or None);
the functions are collected into a table keyed by field name so the
planner never needs to know how a value was found.

Extraction only ever fills fields that are currently empty.
"""
import re
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, Dict, Any, Optional, Sequence

from booking.specs import BookingSpec, FieldName

logger = logging.getLogger(__name__)

Extractor = Callable[[str], Optional[str]]


@dataclass
class ExtractionResult:
    """Result of field extraction for one message."""
    extracted_data: Dict[str, str] = field(default_factory=dict)


# =============================================================================
# PATTERNS
# =============================================================================

NAME_PATTERN = re.compile(
    r"(?:name is|i'm|i am|my name's)\s+([a-z]+(?:\s+[a-z]+)?)",
    re.IGNORECASE,
)

EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

PHONE_PATTERN = re.compile(
    r"\d{3}[-.\s]?\d{3}[-.\s]?\d{4}|\(\d{3}\)\s?\d{3}[-.\s]?\d{4}"
)

NUMERIC_DATE_PATTERN = re.compile(r"\d{1,2}[-/]\d{1,2}[-/]\d{2,4}")

MONTH_DATE_PATTERN = re.compile(
    r"\b(?:"
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|june?|july?|"
    r"aug(?:ust)?|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?|"
    r"(?-i:May|MAY))"
    r"\.?\s+\d{1,2}(?:st|nd|rd|th)?\b(?:,?\s+\d{4}\b)?"
    # lowercase "may" is usually the verb: needs an ordinal or a year
    r"|may\s+\d{1,2}(?:(?:st|nd|rd|th)\b(?:,?\s+\d{4}\b)?|,?\s+\d{4}\b)"
    r")",
    re.IGNORECASE,
)

TIME_PATTERN = re.compile(
    r"\d{1,2}(?::\d{2})?\s*(?:(?:am|pm)\b|a\.m\.|p\.m\.)",
    re.IGNORECASE,
)


# =============================================================================
# FIELD RULES
# =============================================================================

def extract_service(user_message: str, services: Sequence[str]) -> Optional[str]:
    """
    Find the first catalog service mentioned in the message.

    Matching is a case-insensitive substring test in catalog order,
    and the catalog spelling is returned.
    """
    message_lower = user_message.lower()
    for service in services:
        if service.lower() in message_lower:
            return service
    return None


def capitalize_word(word: str) -> str:
    """'jOHN' -> 'John'."""
    return word[:1].upper() + word[1:].lower()


def extract_name(user_message: str) -> Optional[str]:
    """
    Extract a one or two word name from an introduction.

    Accepts "my name is X", "name is X Y", "I'm X", "I am X", "my name's X".
    Longer or hyphenated names are cut to what the pattern captures.
    """
    match = NAME_PATTERN.search(user_message)
    if not match:
        return None
    words = match.group(1).split()
    return " ".join(capitalize_word(w) for w in words)


def extract_email(user_message: str) -> Optional[str]:
    match = EMAIL_PATTERN.search(user_message)
    return match.group(0) if match else None


def extract_phone(user_message: str) -> Optional[str]:
    """
    Extract a 10-digit North American phone number as typed.

    Accepts 555-123-4567, 555.123.4567, 555 123 4567, 5551234567
    and (555) 123-4567.
    """
    match = PHONE_PATTERN.search(user_message)
    return match.group(0) if match else None


def format_local_date(day: date) -> str:
    """Format a date in US short form without zero padding (10/20/2026)."""
    return f"{day.month}/{day.day}/{day.year}"


def extract_date(user_message: str, today: Optional[date] = None) -> Optional[str]:
    """
    Extract a date from the message.

    Rules, first match wins:
    1. Numeric M/D/Y or M-D-Y with a 2-4 digit year
    2. Month name with day, optional ordinal and optional year ("March 5th, 2026")
    3. "tomorrow" -> today + 1 day
    4. "today" -> today

    Explicit dates are returned as typed; relative dates are formatted
    with format_local_date.
    """
    for pattern in (NUMERIC_DATE_PATTERN, MONTH_DATE_PATTERN):
        match = pattern.search(user_message)
        if match:
            return match.group(0)

    message_lower = user_message.lower()
    if today is None:
        today = date.today()

    if "tomorrow" in message_lower:
        return format_local_date(today + timedelta(days=1))
    if "today" in message_lower:
        return format_local_date(today)

    return None


def extract_time(user_message: str) -> Optional[str]:
    """Extract a clock time with an am/pm marker ("3pm", "10:30 a.m.")."""
    match = TIME_PATTERN.search(user_message)
    return match.group(0) if match else None


def build_extractor_table(
    spec: BookingSpec,
    today: Optional[date] = None,
) -> Dict[str, Extractor]:
    """
    Build the field -> rule table for a booking spec.

    Args:
        spec: Booking specification (provides the service catalog)
        today: Reference day for relative dates (defaults to date.today())

    Returns:
        Dict mapping field name to a (text) -> Optional[str] function
    """
    return {
        FieldName.SERVICE.value: lambda text: extract_service(text, spec.services),
        FieldName.NAME.value: extract_name,
        FieldName.EMAIL.value: extract_email,
        FieldName.PHONE.value: extract_phone,
        FieldName.DATE.value: lambda text: extract_date(text, today),
        FieldName.TIME.value: extract_time,
    }


# =============================================================================
# MAIN EXTRACTION FUNCTION
# =============================================================================

def is_field_filled(record: Dict[str, Any], field_name: str) -> bool:
    """
    Check if a record field has a usable value.

    Only None and the empty string count as empty; any other value,
    whitespace included, is kept as the caller sent it.
    """
    value = record.get(field_name)
    return value is not None and value != ""


def extract_fields(
    spec: BookingSpec,
    user_message: str,
    record: Optional[Dict[str, Any]] = None,
    today: Optional[date] = None,
) -> ExtractionResult:
    """
    Extract values for every empty field of the record.

    Filled fields are skipped entirely, so extraction can never
    overwrite a value the caller already has.

    Args:
        spec: Booking specification
        user_message: The user's latest message
        record: Current record values
        today: Reference day for relative dates

    Returns:
        ExtractionResult with only the newly found values
    """
    if record is None:
        record = {}

    result = ExtractionResult()
    if not user_message or not user_message.strip():
        return result

    for field_name, rule in build_extractor_table(spec, today).items():
        if is_field_filled(record, field_name):
            continue
        value = rule(user_message)
        if value is not None:
            result.extracted_data[field_name] = value
            logger.info(f"Extracted {field_name}={value!r}")

    return result
