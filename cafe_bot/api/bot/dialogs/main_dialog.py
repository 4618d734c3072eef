"""
Main dialog for the Cafe Bot.

Reads the turn properties the dispatcher stored for this turn and routes on
the intent. Booking a table is the only multi-turn flow; everything else is
answered in a single turn.
"""
import logging
from typing import Any, Dict, Optional

from botbuilder.core import CardFactory, MessageFactory, StatePropertyAccessor, TurnContext, UserState
from botbuilder.dialogs import (
    ComponentDialog,
    DialogContext,
    DialogTurnResult,
    WaterfallDialog,
    WaterfallStepContext
)
from botbuilder.dialogs.prompts import PromptOptions, TextPrompt

from cafe_bot.api.bot.adaptive_cards import CAFE_LOCATIONS, create_locations_card, create_welcome_card
from cafe_bot.api.bot.conversation_state import USER_PROFILE_PROPERTY, TurnProperties, UserProfile
from cafe_bot.api.bot.recognizers import (
    BOOK_TABLE_INTENT,
    CANCEL_INTENT,
    FIND_CAFE_LOCATIONS_INTENT,
    WHAT_CAN_YOU_DO_INTENT,
    WHO_ARE_YOU_INTENT
)

logger = logging.getLogger(__name__)

MAIN_DIALOG_ID = "MainDialog"
MAIN_WATERFALL = "mainWaterfall"
BOOK_TABLE_DIALOG = "bookTable"
TEXT_PROMPT = "textPrompt"


def first_value(value: Any) -> Any:
    """Unwrap LUIS-style nested lists ([['Seattle']] -> 'Seattle')."""
    while isinstance(value, list):
        if not value:
            return None
        value = value[0]
    return value


class MainDialog(ComponentDialog):
    """Routes each new conversation flow based on the turn's intent."""

    def __init__(self, on_turn_accessor: StatePropertyAccessor, user_state: UserState):
        super().__init__(MAIN_DIALOG_ID)

        self.on_turn_accessor = on_turn_accessor
        self.user_profile_accessor = user_state.create_property(USER_PROFILE_PROPERTY)

        self.add_dialog(TextPrompt(TEXT_PROMPT))
        self.add_dialog(
            WaterfallDialog(MAIN_WATERFALL, [self.route_intent_step, self.complete_step])
        )
        self.add_dialog(
            WaterfallDialog(
                BOOK_TABLE_DIALOG,
                [self.ask_location_step, self.ask_party_size_step, self.confirm_booking_step]
            )
        )

        self.initial_dialog_id = MAIN_WATERFALL

    async def on_continue_dialog(self, inner_dc: DialogContext) -> DialogTurnResult:
        # Cancel interrupts whatever flow is active
        on_turn: Optional[TurnProperties] = await self.on_turn_accessor.get(inner_dc.context)
        if on_turn is not None and on_turn.intent == CANCEL_INTENT:
            logger.info("Cancel requested - clearing active dialogs")
            await inner_dc.context.send_activity("Sure, I've cancelled that.")
            return await inner_dc.cancel_all_dialogs()

        return await super().on_continue_dialog(inner_dc)

    async def route_intent_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        on_turn: Optional[TurnProperties] = await self.on_turn_accessor.get(step_context.context)
        on_turn = on_turn or TurnProperties()
        intent = on_turn.intent

        logger.info(f"Routing intent: {intent}")

        if intent == BOOK_TABLE_INTENT:
            return await step_context.begin_dialog(
                BOOK_TABLE_DIALOG,
                {
                    "location": first_value(on_turn.get_entity("cafeLocation")),
                    "party_size": first_value(on_turn.get_entity("number"))
                }
            )

        if intent == WHO_ARE_YOU_INTENT:
            await self._introduce(step_context.context, on_turn)
        elif intent == WHAT_CAN_YOU_DO_INTENT:
            await step_context.context.send_activity(
                "I can help you book a table, find our cafe locations and more. Pick an option below."
            )
            card = create_welcome_card()
            await step_context.context.send_activity(
                MessageFactory.attachment(CardFactory.adaptive_card(card["content"]))
            )
        elif intent == FIND_CAFE_LOCATIONS_INTENT:
            card = create_locations_card()
            await step_context.context.send_activity(
                MessageFactory.attachment(CardFactory.adaptive_card(card["content"]))
            )
        elif intent == CANCEL_INTENT:
            await step_context.context.send_activity("There's nothing to cancel right now.")
        else:
            await step_context.context.send_activity(
                "Sorry, I didn't understand that. Try \"what can you do?\""
            )

        return await step_context.end_dialog()

    async def complete_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        return await step_context.end_dialog(step_context.result)

    async def ask_location_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        options: Dict[str, Any] = step_context.options or {}
        step_context.values["party_size"] = options.get("party_size")

        if options.get("location") is not None:
            return await step_context.next(options["location"])

        return await step_context.prompt(
            TEXT_PROMPT,
            PromptOptions(
                prompt=MessageFactory.text(
                    f"Which cafe would you like to book at? We are in {', '.join(CAFE_LOCATIONS)}."
                )
            )
        )

    async def ask_party_size_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        step_context.values["location"] = step_context.result

        party_size = step_context.values.get("party_size")
        if party_size is not None:
            return await step_context.next(party_size)

        return await step_context.prompt(
            TEXT_PROMPT,
            PromptOptions(prompt=MessageFactory.text("How many guests will be joining?"))
        )

    async def confirm_booking_step(self, step_context: WaterfallStepContext) -> DialogTurnResult:
        booking = {
            "location": step_context.values["location"],
            "party_size": step_context.result
        }

        await step_context.context.send_activity(
            f"Ok. I have a table for {booking['party_size']} at our {booking['location']} location."
        )
        logger.info(f"Booking confirmed: {booking}")

        return await step_context.end_dialog(booking)

    async def _introduce(self, turn_context: TurnContext, on_turn: TurnProperties):
        profile: UserProfile = await self.user_profile_accessor.get(turn_context, UserProfile)

        name = first_value(on_turn.get_entity("userName")) or first_value(on_turn.get_entity("userName_patternAny"))
        if name:
            profile.name = name
            await self.user_profile_accessor.set(turn_context, profile)
            await turn_context.send_activity(f"Nice to meet you, {name}! I'm the Contoso Cafe bot.")
        elif profile.name:
            await turn_context.send_activity(f"Hi {profile.name}, I'm the Contoso Cafe bot.")
        else:
            await turn_context.send_activity("I'm the Contoso Cafe bot. What's your name?")
