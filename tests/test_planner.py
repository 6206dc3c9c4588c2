"""
Tests for the deterministic dialogue planner.

These tests verify that:
1. Missing fields are recomputed from the record every time
2. Prompt priority is name > email > phone > date > time > service
3. GREETING / COLLECTING / CONFIRMATION are chosen from the missing count
4. The thank-you prefix appears only when the turn filled something
"""
from booking.specs import APPOINTMENT_SPEC, SERVICE_CATALOG
from engine.planner import (
    DialogueState,
    build_confirmation,
    build_greeting,
    decide_reply,
    get_missing_fields,
    get_newly_filled_fields,
    get_next_field,
)


FULL_RECORD = {
    "service": "Consultation",
    "name": "John Smith",
    "email": "john@x.com",
    "phone": "555-123-4567",
    "date": "10/20/2026",
    "time": "3:00 pm",
}


class TestMissingFields:

    def test_empty_record_misses_everything(self):
        assert get_missing_fields(APPOINTMENT_SPEC, {}) == [
            "service", "name", "email", "phone", "date", "time",
        ]

    def test_full_record(self):
        assert get_missing_fields(APPOINTMENT_SPEC, FULL_RECORD) == []

    def test_notes_are_not_required(self):
        record = dict(FULL_RECORD)
        record["notes"] = None
        assert get_missing_fields(APPOINTMENT_SPEC, record) == []

    def test_newly_filled(self):
        before = {"service": "Consultation"}
        after = {"service": "Consultation", "name": "Ann", "email": "a@b.co"}
        assert get_newly_filled_fields(APPOINTMENT_SPEC, before, after) == ["name", "email"]


class TestPromptPriority:

    def test_name_first(self):
        assert get_next_field(APPOINTMENT_SPEC, {"service": "Sales Demo"}).name == "name"

    def test_order_after_name(self):
        record = {"service": "Sales Demo", "name": "Ann"}
        assert get_next_field(APPOINTMENT_SPEC, record).name == "email"
        record["email"] = "a@b.co"
        assert get_next_field(APPOINTMENT_SPEC, record).name == "phone"
        record["phone"] = "5551234567"
        assert get_next_field(APPOINTMENT_SPEC, record).name == "date"
        record["date"] = "today"
        assert get_next_field(APPOINTMENT_SPEC, record).name == "time"

    def test_service_is_asked_last(self):
        """Service is only prompted for once everything else is filled."""
        record = {k: v for k, v in FULL_RECORD.items() if k != "service"}
        assert get_next_field(APPOINTMENT_SPEC, record).name == "service"

        record.pop("name")
        assert get_next_field(APPOINTMENT_SPEC, record).name == "name"

    def test_nothing_left(self):
        assert get_next_field(APPOINTMENT_SPEC, FULL_RECORD) is None


class TestMessages:

    def test_greeting_lists_catalog_numbered(self):
        greeting = build_greeting(APPOINTMENT_SPEC)
        for i, service in enumerate(SERVICE_CATALOG, start=1):
            assert f"{i}. {service}" in greeting
        assert greeting.index("1. Consultation") < greeting.index("6. Strategy Meeting")
        assert greeting.endswith("Which service are you interested in?")

    def test_confirmation_lists_all_fields(self):
        message = build_confirmation(APPOINTMENT_SPEC, FULL_RECORD)
        for value in FULL_RECORD.values():
            assert value in message
        assert "📅 Service: Consultation" in message
        assert "🕐 Time: 3:00 pm" in message
        assert "Your appointment has been scheduled!" in message
        assert "Notes" not in message

    def test_confirmation_includes_notes_when_present(self):
        record = dict(FULL_RECORD, notes="Bring laptop")
        assert "📝 Notes: Bring laptop" in build_confirmation(APPOINTMENT_SPEC, record)


class TestDecideReply:

    def test_confirmation_state(self):
        result = decide_reply(APPOINTMENT_SPEC, FULL_RECORD, FULL_RECORD)
        assert result.state == DialogueState.CONFIRMATION
        assert result.missing_fields == []
        assert result.assistant_message.startswith("Perfect!")

    def test_greeting_state(self):
        result = decide_reply(APPOINTMENT_SPEC, {}, {})
        assert result.state == DialogueState.GREETING
        assert len(result.missing_fields) == 6
        assert result.assistant_message == build_greeting(APPOINTMENT_SPEC)

    def test_collecting_with_thanks(self):
        before = {"service": "Consultation"}
        after = dict(before, name="John Smith")
        result = decide_reply(APPOINTMENT_SPEC, before, after)
        assert result.state == DialogueState.COLLECTING
        assert result.next_field == "email"
        assert result.assistant_message == "Thank you! What's your email address?"

    def test_collecting_without_thanks(self):
        record = {"service": "Consultation"}
        result = decide_reply(APPOINTMENT_SPEC, record, dict(record))
        assert result.newly_filled == []
        assert result.assistant_message == "Could you please provide your full name?"

    def test_time_prompt_mentions_availability(self):
        record = {k: v for k, v in FULL_RECORD.items() if k != "time"}
        result = decide_reply(APPOINTMENT_SPEC, record, record)
        assert result.assistant_message == (
            "What time would you prefer? We have availability from 9:00 AM to 5:00 PM."
        )
        assert APPOINTMENT_SPEC.time_slots[0] in result.assistant_message
        assert APPOINTMENT_SPEC.time_slots[-1] in result.assistant_message

    def test_service_only_missing_gets_a_service_question(self):
        """
        When only the service is missing the reply asks for it.

        This intentionally differs from simply thanking the user with no
        question, which left the conversation without a next step.
        """
        before = {k: v for k, v in FULL_RECORD.items() if k not in ("service", "time")}
        after = dict(before, time="3:00 pm")
        result = decide_reply(APPOINTMENT_SPEC, before, after)
        assert result.state == DialogueState.COLLECTING
        assert result.next_field == "service"
        assert result.assistant_message.startswith("Thank you! Which service are you interested in?")
        for service in SERVICE_CATALOG:
            assert service in result.assistant_message
