"""
Conversation state for the Cafe Bot.
Property names owned in the conversation and user stores, and the
models persisted under them.
"""
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# Conversation-scoped state properties
ON_TURN_PROPERTY = "onTurnProperty"
DIALOG_STATE_PROPERTY = "dialogState"

# User-scoped state properties
USER_PROFILE_PROPERTY = "userProfile"


class EntityProperty(BaseModel):
    """A named value recognized in the user's input."""
    model_config = ConfigDict(frozen=True)

    name: str
    value: Any = None


class TurnProperties(BaseModel):
    """
    Intent and entities gathered for a single turn.

    Built fresh by the dispatcher on every message turn, either from a card
    submission or from NLU output, and stored under ON_TURN_PROPERTY so the
    dialogs can read it.
    """
    intent: Optional[str] = None
    entities: List[EntityProperty] = Field(default_factory=list)

    def get_entity(self, name: str) -> Any:
        """Return the value of the first entity called `name`, or None."""
        for entity in self.entities:
            if entity.name == name:
                return entity.value
        return None


class UserProfile(BaseModel):
    """What the bot remembers about a guest across conversations."""
    name: Optional[str] = None
