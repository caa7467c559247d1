import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

from promptgen.inference.base import ChatClient
from promptgen.llm import prompt_builder
from promptgen.llm.parser import parse_list_response, parse_structured_fields
from promptgen.llm.prompt_builder import Operation
from promptgen.schemas import GenerationResult

logger = logging.getLogger(__name__)


class GenerationError(RuntimeError):
    """Chat backend failure, message already prefixed for the caller."""


@dataclass
class StreamEvent:
    event: str  # result | error | complete
    data: Dict[str, Any] = field(default_factory=dict)


class PromptGenerator:
    """
    One round trip to the chat client per operation.

    Parsing never fails; only the client call can raise, and only for the
    full-pipeline operations is that wrapped here. The list and text
    operations let client errors propagate to the route layer.
    """

    def __init__(self, client: ChatClient):
        self.client = client

    def _call(self, prompt: str) -> str:
        response = self.client.generate(prompt)
        logger.debug("Model response: %s", response)
        return response

    # =========================
    # FULL PIPELINE
    # =========================

    def generate_complete(self, input_prompt: str) -> GenerationResult:
        logger.info("Generating complete prompt for input: %s", input_prompt)

        try:
            response = self._call(prompt_builder.build_complete_prompt(input_prompt))
        except Exception as e:
            logger.exception("Complete prompt generation failed")
            raise GenerationError(f"生成提示词失败: {e}") from e

        result = parse_structured_fields(response)
        logger.info("Complete prompt generated")
        return result

    def generate_complete_stream(self, input_prompt: str) -> Iterator[StreamEvent]:
        """
        Deferred single-value delivery: one ``result`` or one ``error`` event,
        then exactly one ``complete`` event.
        """
        logger.info("Streaming complete prompt for input: %s", input_prompt)

        try:
            response = self._call(prompt_builder.build_complete_prompt(input_prompt))
            result = parse_structured_fields(response)
        except Exception as e:
            logger.exception("Streaming prompt generation failed")
            yield StreamEvent("error", {"message": f"流式生成提示词失败: {e}"})
        else:
            yield StreamEvent("result", result.model_dump(by_alias=True))
            logger.info("Streaming prompt generation finished")

        yield StreamEvent("complete", {"status": "completed"})

    # =========================
    # STEP-BY-STEP OPERATIONS
    # =========================

    def thinking_points(self, description: str, language: Optional[str] = "zh") -> List[str]:
        prompt = prompt_builder.build_thinking_points_prompt(description, language)
        return parse_list_response(self._call(prompt))

    def system_prompt(
        self,
        description: str,
        language: Optional[str] = "zh",
        thinking_points: Optional[Sequence[str]] = None,
    ) -> str:
        prompt = prompt_builder.build_system_prompt_prompt(description, language, thinking_points)
        return self._call(prompt)

    def optimization_advice(
        self,
        prompt_to_analyze: str,
        prompt_type: Optional[str] = "system",
        language: Optional[str] = "zh",
    ) -> List[str]:
        prompt = prompt_builder.build_optimization_advice_prompt(prompt_to_analyze, prompt_type, language)
        return parse_list_response(self._call(prompt))

    def apply_optimization(
        self,
        original_prompt: str,
        advice: Optional[Sequence[str]] = None,
        prompt_type: Optional[str] = "system",
        language: Optional[str] = "zh",
    ) -> str:
        prompt = prompt_builder.build_apply_optimization_prompt(original_prompt, advice, prompt_type, language)
        return self._call(prompt)

    def run(self, operation: Operation, **params) -> Any:
        """Synchronous dispatch by operation name."""
        handlers = {
            Operation.COMPLETE: self.generate_complete,
            Operation.THINKING_POINTS: self.thinking_points,
            Operation.SYSTEM_PROMPT: self.system_prompt,
            Operation.OPTIMIZATION_ADVICE: self.optimization_advice,
            Operation.APPLY_OPTIMIZATION: self.apply_optimization,
        }
        return handlers[Operation(operation)](**params)
