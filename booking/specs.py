"""
BookingSpec and FieldSpec definitions.

This module defines the declarative specification for the appointment form.
The extractor and planner read these specs to drive the conversation,
so catalog, prompts and field order live here and nowhere else.
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


class FieldName(str, Enum):
    """Fields of the appointment record."""
    SERVICE = "service"
    NAME = "name"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    TIME = "time"
    NOTES = "notes"


@dataclass(frozen=True)
class FieldSpec:
    """
    Specification for a single field to collect.

    Attributes:
        name: The record key (e.g., "email", "date")
        label: Label shown on the confirmation summary
        icon: Emoji prefix for the confirmation summary line
        prompt: The question to ask when this field is the next one missing
        required: Whether this field must be filled before confirmation
        prompt_priority: Lower asks first; None means never prompted for
    """
    name: str
    label: str
    icon: str
    prompt: str = ""
    required: bool = True
    prompt_priority: Optional[int] = None


@dataclass(frozen=True)
class BookingSpec:
    """
    Complete specification for the appointment form.

    Fields are kept in summary order (service first). Prompt order is
    independent and comes from each field's prompt_priority.
    """
    services: Tuple[str, ...]
    time_slots: Tuple[str, ...]
    fields_in_order: Tuple[FieldSpec, ...]

    greeting_intro: str
    greeting_question: str
    acknowledgement: str
    confirm_intro: str
    confirm_closing: str

    def get_required_fields(self) -> List[FieldSpec]:
        """Get all required fields in summary order."""
        return [f for f in self.fields_in_order if f.required]

    def get_required_field_names(self) -> List[str]:
        """Get required field names in summary order."""
        return [f.name for f in self.fields_in_order if f.required]

    def get_prompt_order(self) -> List[FieldSpec]:
        """Get the promptable required fields, highest priority first."""
        promptable = [
            f for f in self.fields_in_order
            if f.required and f.prompt_priority is not None
        ]
        return sorted(promptable, key=lambda f: f.prompt_priority)


# =============================================================================
# APPOINTMENT FORM
# =============================================================================

SERVICE_CATALOG: Tuple[str, ...] = (
    "Consultation",
    "Follow-up Meeting",
    "Technical Support",
    "Sales Demo",
    "Training Session",
    "Strategy Meeting",
)

TIME_SLOTS: Tuple[str, ...] = (
    "9:00 AM", "10:00 AM", "11:00 AM", "12:00 PM",
    "1:00 PM", "2:00 PM", "3:00 PM", "4:00 PM", "5:00 PM",
)

APPOINTMENT_SPEC = BookingSpec(
    services=SERVICE_CATALOG,
    time_slots=TIME_SLOTS,
    fields_in_order=(
        FieldSpec(
            name=FieldName.SERVICE.value,
            label="Service",
            icon="📅",
            prompt="Which service are you interested in? We offer: "
                   + ", ".join(SERVICE_CATALOG) + ".",
            # Only asked when it is the last field left
            prompt_priority=6,
        ),
        FieldSpec(
            name=FieldName.NAME.value,
            label="Name",
            icon="👤",
            prompt="Could you please provide your full name?",
            prompt_priority=1,
        ),
        FieldSpec(
            name=FieldName.EMAIL.value,
            label="Email",
            icon="📧",
            prompt="What's your email address?",
            prompt_priority=2,
        ),
        FieldSpec(
            name=FieldName.PHONE.value,
            label="Phone",
            icon="📱",
            prompt="What's the best phone number to reach you?",
            prompt_priority=3,
        ),
        FieldSpec(
            name=FieldName.DATE.value,
            label="Date",
            icon="📆",
            prompt="What date works best for you?",
            prompt_priority=4,
        ),
        FieldSpec(
            name=FieldName.TIME.value,
            label="Time",
            icon="🕐",
            prompt="What time would you prefer? We have availability from "
                   f"{TIME_SLOTS[0]} to {TIME_SLOTS[-1]}.",
            prompt_priority=5,
        ),
        FieldSpec(
            name=FieldName.NOTES.value,
            label="Notes",
            icon="📝",
            required=False,
        ),
    ),
    greeting_intro=(
        "Great! I'd be happy to help you schedule an appointment. "
        "We offer the following services:"
    ),
    greeting_question="Which service are you interested in?",
    acknowledgement="Thank you! ",
    confirm_intro=(
        "Perfect! I have all the information I need. "
        "Let me confirm your appointment:"
    ),
    confirm_closing=(
        "Your appointment has been scheduled! You'll receive a confirmation "
        "email shortly. Is there anything else I can help you with?"
    ),
)
