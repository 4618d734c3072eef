"""
Bot runtime wiring: adapter, state stores and the dispatcher.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from botbuilder.core import (
    BotFrameworkAdapter,
    BotFrameworkAdapterSettings,
    ConversationState,
    MemoryStorage,
    Storage,
    TurnContext,
    UserState
)

from cafe_bot.api.bot.bot import CafeBot
from cafe_bot.config import settings
from cafe_bot.config.bot_configuration import BotConfiguration
from cafe_bot.telemetry import TURN_ERROR, track_turn_event

logger = logging.getLogger(__name__)

ERROR_REPLY_TEXT = "Sorry, it looks like something went wrong."


@dataclass
class BotRuntime:
    """Everything needed to run one turn."""
    adapter: BotFrameworkAdapter
    bot: CafeBot
    conversation_state: ConversationState
    user_state: UserState

    async def on_turn(self, turn_context: TurnContext):
        """Run the bot, then persist conversation and user state."""
        await self.bot.on_turn(turn_context)

        await self.conversation_state.save_changes(turn_context)
        await self.user_state.save_changes(turn_context)

    async def on_turn_error(self, turn_context: TurnContext, error: Exception):
        """Adapter error hook: log, apologize, and reset the conversation."""
        logger.error(f"Unhandled error during turn: {error}", exc_info=error)

        track_turn_event(TURN_ERROR, turn_context, {
            "error_type": type(error).__name__,
            "activity_type": turn_context.activity.type
        })

        await turn_context.send_activity(ERROR_REPLY_TEXT)

        # Drop the dialog stack so the next turn starts clean
        await self.conversation_state.load(turn_context)
        await self.conversation_state.delete(turn_context)


def build_runtime(
    bot_config: Optional[BotConfiguration] = None,
    storage: Optional[Storage] = None
) -> BotRuntime:
    """
    Build the runtime from settings.

    Raises:
        ConfigurationError: If the .bot file or its NLU service entry is unusable
    """
    bot_config = bot_config or BotConfiguration.load(settings.BOT_FILE_PATH)
    storage = storage or MemoryStorage()

    conversation_state = ConversationState(storage)
    user_state = UserState(storage)

    bot = CafeBot(
        conversation_state,
        user_state,
        bot_config,
        bot_name=settings.BOT_NAME,
        nlu_service_name=settings.NLU_SERVICE_NAME
    )

    adapter = BotFrameworkAdapter(
        BotFrameworkAdapterSettings(
            app_id=settings.MICROSOFT_APP_ID,
            app_password=settings.MICROSOFT_APP_PASSWORD
        )
    )

    runtime = BotRuntime(
        adapter=adapter,
        bot=bot,
        conversation_state=conversation_state,
        user_state=user_state
    )
    adapter.on_turn_error = runtime.on_turn_error

    logger.info(f"Bot runtime ready (app_id={'set' if settings.MICROSOFT_APP_ID else 'anonymous'})")
    return runtime
