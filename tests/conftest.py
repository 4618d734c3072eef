"""
Shared pytest configuration and fixtures for Cafe Bot tests.
Provides state stores, a mock recognizer, activity builders and a turn runner.
"""

import os
import sys
from typing import Any, List, Optional
from unittest.mock import AsyncMock

import pytest
from botbuilder.core import ConversationState, MemoryStorage, TurnContext, UserState
from botbuilder.core.adapters import TestAdapter
from botbuilder.schema import Activity, ActivityTypes, ChannelAccount, ConversationAccount

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cafe_bot.api.bot.bot import CafeBot
from cafe_bot.api.bot.recognizers import IntentRecognizer, IntentResult
from cafe_bot.api.bot.runtime import BotRuntime
from cafe_bot.config.bot_configuration import BotConfiguration, ServiceConfig


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )


@pytest.fixture
def bot_config():
    """Bot configuration with a LUIS dispatch entry."""
    return BotConfiguration(
        name="contoso-cafe-bot-test",
        services=[
            ServiceConfig(
                type="luis",
                id="1",
                name="cafeDispatchModel",
                app_id="test-app-id",
                authoring_key="test-authoring-key",
                region="westus"
            )
        ]
    )


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def conversation_state(storage):
    return ConversationState(storage)


@pytest.fixture
def user_state(storage):
    return UserState(storage)


@pytest.fixture
def mock_recognizer():
    """Recognizer returning the None intent unless a test says otherwise."""
    recognizer = AsyncMock(spec=IntentRecognizer)
    recognizer.recognize = AsyncMock(return_value=IntentResult(top_intent="None", entities={}))
    return recognizer


@pytest.fixture
def bot(conversation_state, user_state, bot_config, mock_recognizer):
    return CafeBot(conversation_state, user_state, bot_config, recognizer=mock_recognizer)


@pytest.fixture
def runtime(bot, conversation_state, user_state):
    """Runtime without a real adapter; turns are driven through TestAdapter contexts."""
    return BotRuntime(
        adapter=None,
        bot=bot,
        conversation_state=conversation_state,
        user_state=user_state
    )


@pytest.fixture
def make_activity():
    """Factory for inbound activities in a single test conversation."""
    def _make(
        activity_type: str = ActivityTypes.message,
        text: Optional[str] = None,
        value: Optional[Any] = None,
        attachments: Optional[list] = None,
        members_added: Optional[List[ChannelAccount]] = None
    ) -> Activity:
        return Activity(
            type=activity_type,
            id="activity-1",
            text=text,
            value=value,
            attachments=attachments,
            members_added=members_added,
            channel_id="test",
            service_url="https://test.example.com",
            conversation=ConversationAccount(id="conversation-1"),
            from_property=ChannelAccount(id="user-1", name="Guest"),
            recipient=ChannelAccount(id="bot-1", name="Bot")
        )
    return _make


@pytest.fixture
def make_context():
    """Build a TurnContext backed by a TestAdapter; sent replies land in adapter.activity_buffer."""
    def _make(activity: Activity) -> TurnContext:
        return TurnContext(TestAdapter(), activity)
    return _make


@pytest.fixture
def run_turn(runtime, make_context):
    """Run one full turn (dispatch + state save) and return the activities the bot sent."""
    async def _run(activity: Activity) -> List[Activity]:
        turn_context = make_context(activity)
        await runtime.on_turn(turn_context)
        return list(turn_context.adapter.activity_buffer)
    return _run

