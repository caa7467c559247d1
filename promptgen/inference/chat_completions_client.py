import logging
from typing import Optional

import requests

from promptgen.inference.base import ChatClient, LLMClientError
from promptgen.llm.parser import strip_code_fences

logger = logging.getLogger(__name__)


class ChatCompletionsClient(ChatClient):
    """OpenAI-compatible ``/chat/completions`` backend."""

    def __init__(
        self,
        base_url: str,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.7,
        timeout: float = 300,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.api_key = api_key
        self.temperature = temperature
        self.timeout = timeout

    def generate(self, prompt: str) -> str:
        url = f"{self.base_url}/chat/completions"

        headers = {}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        logger.debug("POST %s model=%s", url, self.model)

        try:
            response = requests.post(
                url,
                json={
                    "model": self.model,
                    "messages": [{"role": "user", "content": prompt}],
                    "temperature": self.temperature,
                    "stream": False,
                },
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except requests.RequestException as e:
            raise LLMClientError(f"chat completion request failed: {e}") from e
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise LLMClientError(f"unexpected chat completion payload: {e}") from e

        if content is None:
            raise LLMClientError("chat completion returned no content")

        return strip_code_fences(content)
