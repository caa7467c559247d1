from promptgen import config
from promptgen.inference.base import ChatClient
from promptgen.inference.chat_completions_client import ChatCompletionsClient
from promptgen.inference.ollama_client import OllamaClient


def get_llm_client() -> ChatClient:
    provider = config.LLM_PROVIDER.lower()

    if provider == "ollama":
        return OllamaClient(
            base_url=config.OLLAMA_BASE_URL,
            model=config.OLLAMA_MODEL,
            temperature=config.LLM_TEMPERATURE,
            timeout=config.LLM_TIMEOUT,
        )

    if provider == "openai":
        return ChatCompletionsClient(
            base_url=config.LLM_BASE_URL,
            model=config.LLM_MODEL,
            api_key=config.LLM_API_KEY,
            temperature=config.LLM_TEMPERATURE,
            timeout=config.LLM_TIMEOUT,
        )

    raise ValueError(f"Unknown LLM_PROVIDER: {config.LLM_PROVIDER}")
