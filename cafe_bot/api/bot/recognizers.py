"""
Intent recognizers for the Cafe Bot.

Wraps the external NLU services behind one small interface so the turn
dispatcher only ever sees a top intent and a mapping of entity values.
Two backends are supported, selected by the service `type` in the .bot file:

- "luis":   LUIS application via botbuilder-ai
- "openai": Azure OpenAI chat deployment in JSON mode
"""
import json
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from botbuilder.ai.luis import LuisApplication, LuisRecognizer
from botbuilder.core import TurnContext
from openai import AsyncAzureOpenAI
from pydantic import BaseModel, Field

from cafe_bot.config.bot_configuration import ConfigurationError, ServiceConfig

logger = logging.getLogger(__name__)


# Intents the dispatch model is trained on
BOOK_TABLE_INTENT = "Book_Table"
WHO_ARE_YOU_INTENT = "Who_are_you"
WHAT_CAN_YOU_DO_INTENT = "What_can_you_do"
FIND_CAFE_LOCATIONS_INTENT = "Find_Cafe_Locations"
CANCEL_INTENT = "Cancel"
NONE_INTENT = "None"

KNOWN_INTENTS = [
    BOOK_TABLE_INTENT,
    WHO_ARE_YOU_INTENT,
    WHAT_CAN_YOU_DO_INTENT,
    FIND_CAFE_LOCATIONS_INTENT,
    CANCEL_INTENT,
    NONE_INTENT,
]

# Entity names the bot acts on. Anything else the NLU service returns is dropped.
LUIS_ENTITIES = [
    "confirmationList",
    "number",
    "datetime",
    "cafeLocation",
    "userName_patternAny",
    "userName",
]

DEFAULT_OPENAI_API_VERSION = "2024-08-01-preview"


class IntentResult(BaseModel):
    """Normalized NLU output."""
    top_intent: str = NONE_INTENT
    entities: Dict[str, Any] = Field(default_factory=dict)


class IntentRecognizer(ABC):
    """Base class for NLU adapters."""

    @abstractmethod
    async def recognize(self, turn_context: TurnContext) -> IntentResult:
        """Classify the turn's text into a top intent and entity values."""


class LuisIntentRecognizer(IntentRecognizer):
    """Classifies the turn's text with a LUIS application."""

    def __init__(self, application_id: str, endpoint_key: str, endpoint: str):
        application = LuisApplication(application_id, endpoint_key, endpoint)
        self.recognizer = LuisRecognizer(application)

    async def recognize(self, turn_context: TurnContext) -> IntentResult:
        result = await self.recognizer.recognize(turn_context)
        top_intent = LuisRecognizer.top_intent(result, NONE_INTENT)
        logger.debug(f"LUIS top intent: {top_intent}")
        return IntentResult(top_intent=top_intent, entities=dict(result.entities or {}))


class OpenAIIntentRecognizer(IntentRecognizer):
    """
    Classifies the turn's text with an Azure OpenAI chat deployment.

    The model is asked for a JSON object of the form
    {"intent": "<one of KNOWN_INTENTS>", "entities": {"<entity name>": <value>}}.
    """

    def __init__(
        self,
        deployment: str,
        endpoint: Optional[str],
        api_key: Optional[str],
        api_version: Optional[str] = None,
        intents: Optional[List[str]] = None,
        entity_names: Optional[List[str]] = None,
        client: Optional[AsyncAzureOpenAI] = None
    ):
        self.model = deployment
        self.intents = intents or KNOWN_INTENTS
        self.entity_names = entity_names or LUIS_ENTITIES
        self.client = client or AsyncAzureOpenAI(
            api_key=api_key,
            api_version=api_version or DEFAULT_OPENAI_API_VERSION,
            azure_endpoint=endpoint
        )

    def _system_prompt(self) -> str:
        return f"""You are the intent classifier for the Contoso Cafe bot.
Classify the guest's message into exactly one intent and extract entities.

Intents: {", ".join(self.intents)}
Use "{NONE_INTENT}" when nothing else fits.

Entities (only these names, omit the ones not mentioned):
- number: party size or any other count
- datetime: when the guest wants to come in
- cafeLocation: which cafe (city or neighborhood)
- userName: the guest's name
- userName_patternAny: the guest's name when it is unusual
- confirmationList: "yes" or "no" answers

Return JSON: {{"intent": "<intent>", "entities": {{"<entity>": <value>}}}}"""

    async def recognize(self, turn_context: TurnContext) -> IntentResult:
        text = turn_context.activity.text

        response = await self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self._system_prompt()},
                {"role": "user", "content": text}
            ],
            response_format={"type": "json_object"}
        )

        payload = json.loads(response.choices[0].message.content)
        logger.debug(f"OpenAI classification: {payload}")

        return IntentResult(
            top_intent=payload.get("intent") or NONE_INTENT,
            entities=payload.get("entities") or {}
        )


def create_recognizer(service: ServiceConfig) -> IntentRecognizer:
    """
    Build the recognizer described by a .bot service entry.

    Raises:
        ConfigurationError: If the entry is incomplete or of an unknown type
    """
    if not service.app_id:
        raise ConfigurationError(f"NLU service '{service.name}' has no appId")

    service_type = service.type.lower()

    if service_type == "luis":
        # CAUTION: a subscription key is preferred over the authoring key here.
        endpoint_key = service.subscription_key or service.authoring_key
        if not endpoint_key:
            raise ConfigurationError(f"LUIS service '{service.name}' has no subscriptionKey or authoringKey")
        endpoint = service.endpoint or f"https://{service.region or 'westus'}.api.cognitive.microsoft.com"
        try:
            recognizer = LuisIntentRecognizer(service.app_id, endpoint_key, endpoint)
        except ValueError as e:
            raise ConfigurationError(f"Invalid LUIS service '{service.name}': {e}") from e
        logger.info(f"Using LUIS application {service.app_id} at {endpoint}")
        return recognizer

    if service_type == "openai":
        if not service.endpoint:
            raise ConfigurationError(f"OpenAI service '{service.name}' has no endpoint")
        logger.info(f"Using Azure OpenAI deployment {service.app_id} at {service.endpoint}")
        return OpenAIIntentRecognizer(
            deployment=service.app_id,
            endpoint=service.endpoint,
            api_key=service.subscription_key,
            api_version=service.api_version
        )

    raise ConfigurationError(f"Unsupported NLU service type: {service.type}")
