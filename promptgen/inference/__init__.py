from promptgen.inference.base import ChatClient, LLMClientError
from promptgen.inference.chat_completions_client import ChatCompletionsClient
from promptgen.inference.ollama_client import OllamaClient
from promptgen.inference.config import get_llm_client

__all__ = [
    "ChatClient",
    "LLMClientError",
    "ChatCompletionsClient",
    "OllamaClient",
    "get_llm_client",
]
