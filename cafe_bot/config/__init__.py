"""
Configuration modules for the Contoso Cafe Bot.
Environment settings and the .bot service registry.
"""
from .bot_configuration import BotConfiguration, ServiceConfig, ConfigurationError
from .settings import (
    MICROSOFT_APP_ID,
    MICROSOFT_APP_PASSWORD,
    BOT_FILE_PATH,
    NLU_SERVICE_NAME,
    BOT_NAME,
    LOG_LEVEL,
    PORT
)

__all__ = [
    'BotConfiguration', 'ServiceConfig', 'ConfigurationError',
    'MICROSOFT_APP_ID', 'MICROSOFT_APP_PASSWORD', 'BOT_FILE_PATH',
    'NLU_SERVICE_NAME', 'BOT_NAME', 'LOG_LEVEL', 'PORT'
]
