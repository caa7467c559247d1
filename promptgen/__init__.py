"""
Prompt generation service.

Turns a natural-language description into a system prompt by asking a chat
model and extracting structured fields from its free-text answer.
"""

__version__ = "0.1.0"
