"""
Adaptive Cards for the Cafe Bot.
Submit actions carry an "intent" field so that a button press is
handled exactly like a classified message.
"""
from typing import List, Dict, Any

from cafe_bot.api.bot.recognizers import (
    BOOK_TABLE_INTENT,
    WHO_ARE_YOU_INTENT,
    WHAT_CAN_YOU_DO_INTENT,
    FIND_CAFE_LOCATIONS_INTENT
)

ADAPTIVE_CARD_CONTENT_TYPE = "application/vnd.microsoft.card.adaptive"
ADAPTIVE_CARD_SCHEMA = "http://adaptivecards.io/schemas/adaptive-card.json"

CAFE_LOCATIONS = ["Seattle", "Bellevue", "Renton"]


def create_welcome_card() -> Dict[str, Any]:
    """
    Create welcome card shown when a guest joins the conversation.
    """
    return {
        "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
        "content": {
            "$schema": ADAPTIVE_CARD_SCHEMA,
            "type": "AdaptiveCard",
            "version": "1.0",
            "body": [
                {
                    "type": "TextBlock",
                    "text": "☕ Contoso Cafe",
                    "size": "ExtraLarge",
                    "weight": "Bolder",
                    "color": "Accent"
                },
                {
                    "type": "TextBlock",
                    "text": "Welcome! Here are a few things you can ask me:",
                    "wrap": True,
                    "spacing": "Small"
                },
                {
                    "type": "FactSet",
                    "facts": [
                        {"title": "📅 Book a table", "value": "\"Book a table for 4 tomorrow in Seattle\""},
                        {"title": "📍 Find locations", "value": "\"Where are your cafes?\""},
                        {"title": "🙋 Say hello", "value": "\"Who are you?\""}
                    ]
                }
            ],
            "actions": [
                {
                    "type": "Action.Submit",
                    "title": "Book a table",
                    "data": {"intent": BOOK_TABLE_INTENT}
                },
                {
                    "type": "Action.Submit",
                    "title": "What can you do?",
                    "data": {"intent": WHAT_CAN_YOU_DO_INTENT}
                },
                {
                    "type": "Action.Submit",
                    "title": "Find cafe locations",
                    "data": {"intent": FIND_CAFE_LOCATIONS_INTENT}
                },
                {
                    "type": "Action.Submit",
                    "title": "Who are you?",
                    "data": {"intent": WHO_ARE_YOU_INTENT}
                }
            ]
        }
    }


def create_locations_card(locations: List[str] = None) -> Dict[str, Any]:
    """Create a card listing cafe locations, each with a booking shortcut."""
    locations = locations or CAFE_LOCATIONS

    return {
        "contentType": ADAPTIVE_CARD_CONTENT_TYPE,
        "content": {
            "$schema": ADAPTIVE_CARD_SCHEMA,
            "type": "AdaptiveCard",
            "version": "1.0",
            "body": [
                {
                    "type": "TextBlock",
                    "text": "📍 Our locations",
                    "size": "Large",
                    "weight": "Bolder"
                },
                {
                    "type": "Container",
                    "items": [
                        {
                            "type": "TextBlock",
                            "text": f"• {location}",
                            "wrap": True
                        }
                        for location in locations
                    ]
                }
            ],
            "actions": [
                {
                    "type": "Action.Submit",
                    "title": f"Book in {location}",
                    "data": {"intent": BOOK_TABLE_INTENT, "cafeLocation": location}
                }
                for location in locations
            ]
        }
    }
