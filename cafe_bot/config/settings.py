"""
Runtime settings for the Contoso Cafe Bot.
Set in .env.local or environment variables.

Bot Framework:
- MICROSOFT_APP_ID / MICROSOFT_APP_PASSWORD: Bot registration credentials.
  Leave empty for local Emulator testing.

Bot configuration:
- BOT_FILE_PATH: Path to the .bot file holding the NLU service entries
  Default: cafe-bot.bot
- NLU_SERVICE_NAME: Name (or id) of the dispatch NLU service in the .bot file
  Default: cafeDispatchModel
- BOT_NAME: Display name the bot joins conversations with. Members with this
  name are never welcomed.
  Default: Bot

Service:
- LOG_LEVEL: Default INFO
- PORT: Default 3978
"""
import os
from dotenv import load_dotenv

load_dotenv('.env.local')

MICROSOFT_APP_ID = os.getenv('MICROSOFT_APP_ID', '')
MICROSOFT_APP_PASSWORD = os.getenv('MICROSOFT_APP_PASSWORD', '')

BOT_FILE_PATH = os.getenv('BOT_FILE_PATH', 'cafe-bot.bot')
NLU_SERVICE_NAME = os.getenv('NLU_SERVICE_NAME', 'cafeDispatchModel')
BOT_NAME = os.getenv('BOT_NAME', 'Bot')

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
PORT = int(os.getenv('PORT', '3978'))
