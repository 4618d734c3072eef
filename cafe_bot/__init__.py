"""
Contoso Cafe Bot - Bot Framework turn dispatcher.

Provides:
- Turn dispatch (message, conversationUpdate) with card and NLU input
- LUIS or Azure OpenAI intent recognition
- Main dialog with table booking flow
- Adaptive Card welcome and location cards
"""
