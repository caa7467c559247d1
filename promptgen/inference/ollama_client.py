import logging

import requests

from promptgen.inference.base import ChatClient, LLMClientError
from promptgen.llm.parser import strip_code_fences

logger = logging.getLogger(__name__)


class OllamaClient(ChatClient):
    def __init__(
        self,
        base_url: str,
        model: str,
        temperature: float = 0.7,
        timeout: float = 300,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        payload = {
            "model": self.model,
            "options": {"temperature": self.temperature},
            "messages": [
                {
                    "role": "user",
                    "content": prompt,
                }
            ],
            "stream": False,
        }

        logger.debug("POST %s/api/chat model=%s", self.base_url, self.model)

        try:
            response = requests.post(
                f"{self.base_url}/api/chat",
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            content = data["message"]["content"]
        except requests.RequestException as e:
            raise LLMClientError(f"ollama request failed: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise LLMClientError(f"unexpected ollama payload: {e}") from e

        if content is None:
            raise LLMClientError("ollama returned no content")

        return strip_code_fences(content)
