"""
Booking form specification.
"""
from .specs import (
    FieldName,
    FieldSpec,
    BookingSpec,
    SERVICE_CATALOG,
    TIME_SLOTS,
    APPOINTMENT_SPEC,
)

__all__ = [
    "FieldName",
    "FieldSpec",
    "BookingSpec",
    "SERVICE_CATALOG",
    "TIME_SLOTS",
    "APPOINTMENT_SPEC",
]
