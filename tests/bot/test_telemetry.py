"""
Tests for bot telemetry events.
"""
import logging
import pytest

from botbuilder.schema import ActivityTypes, ChannelAccount

from cafe_bot.api.bot.recognizers import IntentResult
from cafe_bot.telemetry import TURN_DISPATCHED, WELCOME_SENT, track_event, track_turn_event


def telemetry_records(caplog):
    return [r for r in caplog.records if r.name == "cafe_bot.telemetry"]


def test_unknown_event_name_is_rejected():
    with pytest.raises(ValueError):
        track_event("booking_made")


def test_turn_event_carries_conversation_and_channel(caplog, make_activity, make_context):
    turn_context = make_context(make_activity(text="hello"))

    with caplog.at_level(logging.INFO, logger="cafe_bot.telemetry"):
        track_turn_event(TURN_DISPATCHED, turn_context, {"intent": "Cancel"})

    record = telemetry_records(caplog)[-1]
    assert record.getMessage() == f"Telemetry Event: {TURN_DISPATCHED}"
    assert record.properties == {
        "conversation_id": "conversation-1",
        "channel_id": "test",
        "intent": "Cancel"
    }


@pytest.mark.asyncio
async def test_dispatched_turn_is_tracked(caplog, bot, mock_recognizer, make_activity, make_context):
    mock_recognizer.recognize.return_value = IntentResult(top_intent="Cancel", entities={"number": [2]})

    with caplog.at_level(logging.INFO, logger="cafe_bot.telemetry"):
        await bot.on_turn(make_context(make_activity(text="never mind")))

    dispatched = [r for r in telemetry_records(caplog) if r.getMessage().endswith(TURN_DISPATCHED)]
    assert len(dispatched) == 1
    assert dispatched[0].properties["intent"] == "Cancel"
    assert dispatched[0].properties["entity_count"] == 1
    assert dispatched[0].properties["conversation_id"] == "conversation-1"


@pytest.mark.asyncio
async def test_welcome_is_tracked(caplog, bot, make_activity, make_context):
    activity = make_activity(
        activity_type=ActivityTypes.conversation_update,
        members_added=[ChannelAccount(id="user-1", name="Guest")]
    )

    with caplog.at_level(logging.INFO, logger="cafe_bot.telemetry"):
        await bot.welcome_user(make_context(activity))

    assert [r.getMessage() for r in telemetry_records(caplog)] == [f"Telemetry Event: {WELCOME_SENT}"]
