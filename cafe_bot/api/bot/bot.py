"""
Turn dispatcher for the Cafe Bot.

Processes each inbound activity, gathers the turn's intent and entities from
either a card submission or the NLU service, stores them in conversation
state, and continues (or begins) the main dialog.
"""
import logging
from typing import Any, List, Mapping, Optional

from botbuilder.core import CardFactory, ConversationState, MessageFactory, TurnContext, UserState
from botbuilder.dialogs import DialogSet, DialogTurnStatus
from botbuilder.schema import ActivityTypes

from cafe_bot.api.bot.adaptive_cards import create_welcome_card
from cafe_bot.api.bot.conversation_state import (
    DIALOG_STATE_PROPERTY,
    ON_TURN_PROPERTY,
    EntityProperty,
    TurnProperties
)
from cafe_bot.api.bot.dialogs.main_dialog import MAIN_DIALOG_ID, MainDialog
from cafe_bot.api.bot.recognizers import LUIS_ENTITIES, IntentRecognizer, create_recognizer
from cafe_bot.config.bot_configuration import BotConfiguration, ConfigurationError
from cafe_bot.telemetry import TURN_DISPATCHED, WELCOME_SENT, track_turn_event

logger = logging.getLogger(__name__)

# NLU service entry in the .bot file used for dispatch.
LUIS_CONFIGURATION = "cafeDispatchModel"

ATTACHMENT_ACK_TEXT = "Thanks for sending me that attachment. I'm still learning to process attachments."
WELCOME_TEXT = "Hello, I am the Contoso Cafe Bot!"
WELCOME_HELP_TEXT = "I can help book a table, find cafe locations and more.."


class CafeBot:
    """
    On-turn dispatcher for the Contoso Cafe Bot.

    Args:
        conversation_state: Conversation-scoped state (holds turn properties and dialog stack)
        user_state: User-scoped state (holds the guest profile)
        bot_config: Parsed .bot file; must contain the dispatch NLU service
        recognizer: Optional NLU adapter; built from bot_config when omitted
        bot_name: Display name of the bot itself, never welcomed
        recognized_entities: Entity names kept from NLU output, in this order
        nlu_service_name: Name or id of the dispatch NLU service entry

    Raises:
        ConfigurationError: If a required argument or the NLU service entry is missing
    """

    def __init__(
        self,
        conversation_state: ConversationState,
        user_state: UserState,
        bot_config: BotConfiguration,
        recognizer: Optional[IntentRecognizer] = None,
        bot_name: str = "Bot",
        recognized_entities: Optional[List[str]] = None,
        nlu_service_name: str = LUIS_CONFIGURATION
    ):
        if conversation_state is None:
            raise ConfigurationError("Missing parameter. conversation_state is required")
        if user_state is None:
            raise ConfigurationError("Missing parameter. user_state is required")
        if bot_config is None:
            raise ConfigurationError("Missing parameter. bot_config is required")

        # Create state property accessors.
        self.on_turn_accessor = conversation_state.create_property(ON_TURN_PROPERTY)
        self.dialog_state_accessor = conversation_state.create_property(DIALOG_STATE_PROPERTY)

        nlu_config = bot_config.find_service_by_name_or_id(nlu_service_name)
        if nlu_config is None or not nlu_config.app_id:
            raise ConfigurationError(
                f"Dispatch NLU service '{nlu_service_name}' not found in bot configuration. "
                f"Ensure the .bot file has an entry with this name and an appId."
            )

        self.recognizer = recognizer if recognizer is not None else create_recognizer(nlu_config)
        self.bot_name = bot_name
        self.recognized_entities = recognized_entities if recognized_entities is not None else LUIS_ENTITIES

        self.dialogs = DialogSet(self.dialog_state_accessor)
        self.dialogs.add(MainDialog(self.on_turn_accessor, user_state))

        logger.info(f"CafeBot initialized (bot_name={bot_name}, nlu_service={nlu_service_name})")

    async def on_turn(self, turn_context: TurnContext):
        """Dispatch one inbound activity."""
        activity = turn_context.activity

        if activity.type == ActivityTypes.message:
            on_turn_properties = await self.get_new_on_turn_properties(turn_context)
            if on_turn_properties is None:
                return

            await self.on_turn_accessor.set(turn_context, on_turn_properties)

            track_turn_event(TURN_DISPATCHED, turn_context, {
                "intent": on_turn_properties.intent,
                "entity_count": len(on_turn_properties.entities)
            })

            await self.continue_or_begin_main_dialog(turn_context)

        elif activity.type == ActivityTypes.conversation_update:
            for member in activity.members_added or []:
                if member.name != self.bot_name:
                    await self.welcome_user(turn_context)

        else:
            logger.debug(f"Ignoring activity type: {activity.type}")

    async def continue_or_begin_main_dialog(self, turn_context: TurnContext):
        """Continue the active dialog, or begin the main dialog if none is active."""
        dialog_context = await self.dialogs.create_context(turn_context)

        result = await dialog_context.continue_dialog()

        if result.status == DialogTurnStatus.Empty:
            await dialog_context.begin_dialog(MAIN_DIALOG_ID)

    async def get_new_on_turn_properties(self, turn_context: TurnContext) -> Optional[TurnProperties]:
        """
        Gather this turn's intent and entities.

        Card submissions win over everything else; attachments are acknowledged
        and ignored; blank text is ignored; free text goes to the recognizer.

        Returns:
            TurnProperties, or None when there is nothing to dispatch
        """
        activity = turn_context.activity

        if activity.value is not None:
            return self.handle_card_input(activity.value)

        if activity.attachments:
            await turn_context.send_activity(ATTACHMENT_ACK_TEXT)
            return None

        if activity.text is None or not activity.text.strip():
            return None

        result = await self.recognizer.recognize(turn_context)

        on_turn_properties = TurnProperties(intent=result.top_intent)
        for entity_name in self.recognized_entities:
            if entity_name in result.entities:
                on_turn_properties.entities.append(
                    EntityProperty(name=entity_name, value=result.entities[entity_name])
                )

        return on_turn_properties

    async def welcome_user(self, turn_context: TurnContext):
        """Send the welcome messages and card."""
        await turn_context.send_activity(WELCOME_TEXT)
        await turn_context.send_activity(WELCOME_HELP_TEXT)

        card = create_welcome_card()
        await turn_context.send_activity(
            MessageFactory.attachment(CardFactory.adaptive_card(card["content"]))
        )

        track_turn_event(WELCOME_SENT, turn_context)

    def handle_card_input(self, card_value: Any) -> TurnProperties:
        """
        Build turn properties from an Adaptive Card submission.

        The field named "intent" (any casing, surrounding whitespace ignored)
        becomes the intent; every other field becomes an entity.
        """
        on_turn_properties = TurnProperties()

        if not isinstance(card_value, Mapping):
            logger.warning(f"Ignoring non-object card value: {type(card_value).__name__}")
            return on_turn_properties

        intent_seen = False
        for key, value in card_value.items():
            if str(key).strip().lower() == "intent":
                if intent_seen:
                    logger.warning(f"Dropping duplicate intent field '{key}' in card submission")
                    continue
                on_turn_properties.intent = value
                intent_seen = True
            else:
                on_turn_properties.entities.append(EntityProperty(name=key, value=value))

        return on_turn_properties
