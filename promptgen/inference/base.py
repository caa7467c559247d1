from abc import ABC, abstractmethod


class LLMClientError(RuntimeError):
    """Raised when the chat backend cannot produce a completion."""


class ChatClient(ABC):
    @abstractmethod
    def generate(self, prompt: str) -> str:
        """Send a single user turn and return the complete assistant text"""
        pass
