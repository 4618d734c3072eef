"""
Service registry loaded from a .bot file.

The .bot file is a JSON document listing the external services the bot talks
to. The dispatcher only needs one of them: the NLU service used to classify
free text into an intent and entities.

Example:
    {
        "name": "contoso-cafe-bot",
        "services": [
            {
                "type": "luis",
                "id": "1",
                "name": "cafeDispatchModel",
                "appId": "<luis app id>",
                "authoringKey": "<key>",
                "region": "westus"
            }
        ]
    }
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ConfigurationError(Exception):
    """Raised when the bot cannot be constructed from its configuration."""
    pass


class ServiceConfig(BaseModel):
    """One service entry of a .bot file."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str
    id: Optional[str] = None
    name: Optional[str] = None
    app_id: Optional[str] = Field(default=None, alias="appId")
    authoring_key: Optional[str] = Field(default=None, alias="authoringKey")
    subscription_key: Optional[str] = Field(default=None, alias="subscriptionKey")
    region: Optional[str] = None
    endpoint: Optional[str] = None
    api_version: Optional[str] = Field(default=None, alias="apiVersion")


class BotConfiguration(BaseModel):
    """Parsed .bot file."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: Optional[str] = None
    services: List[ServiceConfig] = Field(default_factory=list)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "BotConfiguration":
        """
        Load and validate a .bot file.

        Raises:
            ConfigurationError: If the file is missing, not JSON, or malformed
        """
        bot_file = Path(path)
        if not bot_file.exists():
            raise ConfigurationError(f"Bot configuration file not found: {bot_file}")

        try:
            data = json.loads(bot_file.read_text(encoding="utf-8"))
            config = cls.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            raise ConfigurationError(f"Invalid bot configuration file {bot_file}: {e}") from e

        logger.info(f"Loaded bot configuration '{config.name}' with {len(config.services)} services")
        return config

    def find_service_by_name_or_id(self, name_or_id: str) -> Optional[ServiceConfig]:
        """Return the first service whose name or id matches, else None."""
        for service in self.services:
            if service.id == name_or_id or service.name == name_or_id:
                return service
        return None
