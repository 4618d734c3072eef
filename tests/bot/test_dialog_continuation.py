"""
Tests for continue-or-begin of the main dialog.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from botbuilder.dialogs import DialogTurnResult, DialogTurnStatus

from cafe_bot.api.bot.dialogs.main_dialog import MAIN_DIALOG_ID
from cafe_bot.api.bot.recognizers import IntentResult


@pytest.fixture
def mock_dialog_context():
    dialog_context = MagicMock()
    dialog_context.continue_dialog = AsyncMock()
    dialog_context.begin_dialog = AsyncMock()
    return dialog_context


@pytest.fixture
def mock_dialogs(mock_dialog_context):
    dialogs = MagicMock()
    dialogs.create_context = AsyncMock(return_value=mock_dialog_context)
    return dialogs


@pytest.mark.asyncio
async def test_begins_main_dialog_when_stack_is_empty(bot, mock_dialogs, mock_dialog_context):
    mock_dialog_context.continue_dialog.return_value = DialogTurnResult(DialogTurnStatus.Empty)
    bot.dialogs = mock_dialogs
    turn_context = MagicMock()

    await bot.continue_or_begin_main_dialog(turn_context)

    mock_dialogs.create_context.assert_awaited_once_with(turn_context)
    mock_dialog_context.continue_dialog.assert_awaited_once()
    mock_dialog_context.begin_dialog.assert_awaited_once_with(MAIN_DIALOG_ID)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [
    DialogTurnStatus.Waiting,
    DialogTurnStatus.Complete,
    DialogTurnStatus.Cancelled
])
async def test_never_begins_a_second_dialog_when_one_was_active(bot, mock_dialogs, mock_dialog_context, status):
    mock_dialog_context.continue_dialog.return_value = DialogTurnResult(status)
    bot.dialogs = mock_dialogs

    await bot.continue_or_begin_main_dialog(MagicMock())

    mock_dialog_context.continue_dialog.assert_awaited_once()
    mock_dialog_context.begin_dialog.assert_not_awaited()


@pytest.mark.asyncio
async def test_dialog_stack_survives_between_turns(run_turn, mock_recognizer, make_activity, bot, make_context):
    """A booking prompt keeps the dialog active; the next turn continues it instead of restarting."""
    mock_recognizer.recognize.return_value = IntentResult(top_intent="Book_Table")

    await run_turn(make_activity(text="book a table"))

    turn_context = make_context(make_activity(text="Seattle"))
    dialog_context = await bot.dialogs.create_context(turn_context)
    assert dialog_context.active_dialog is not None
    assert dialog_context.active_dialog.id == MAIN_DIALOG_ID
