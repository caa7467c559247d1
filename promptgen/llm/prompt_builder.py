from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence


PROMPT_DIR = Path(__file__).resolve().parent / "prompts"

CHINESE_INSTRUCTION = "请用中文回答"
ENGLISH_INSTRUCTION = "Please answer in English"

SYSTEM_PROMPT_LABEL = "系统提示词"
USER_PROMPT_LABEL = "用户提示词"


class Operation(str, Enum):
    COMPLETE = "complete"
    THINKING_POINTS = "thinking-points"
    SYSTEM_PROMPT = "system-prompt"
    OPTIMIZATION_ADVICE = "optimization-advice"
    APPLY_OPTIMIZATION = "apply-optimization"


@lru_cache(maxsize=None)
def load_prompt(filename: str) -> str:
    """
    Load a prompt template shipped next to this module.
    """
    return (PROMPT_DIR / filename).read_text(encoding="utf-8").strip()


def language_instruction(language: Optional[str]) -> str:
    if language is not None and language.lower() == "en":
        return ENGLISH_INSTRUCTION
    return CHINESE_INSTRUCTION


def prompt_type_label(prompt_type: Optional[str]) -> str:
    if prompt_type is not None and prompt_type.lower() == "user":
        return USER_PROMPT_LABEL
    return SYSTEM_PROMPT_LABEL


def join_lines(items: Optional[Sequence[str]]) -> str:
    return "\n".join(items or [])


# ----------------------------
# Templates
# ----------------------------

def build_complete_prompt(input_prompt: str) -> str:
    return load_prompt("complete.txt").format(input_prompt=input_prompt)


def build_thinking_points_prompt(description: str, language: Optional[str] = None) -> str:
    return load_prompt("thinking_points.txt").format(
        description=description,
        language_instruction=language_instruction(language),
    )


def build_system_prompt_prompt(
    description: str,
    language: Optional[str] = None,
    thinking_points: Optional[Sequence[str]] = None,
) -> str:
    return load_prompt("system_prompt.txt").format(
        description=description,
        thinking_points=join_lines(thinking_points),
        language_instruction=language_instruction(language),
    )


def build_optimization_advice_prompt(
    prompt_to_analyze: str,
    prompt_type: Optional[str] = None,
    language: Optional[str] = None,
) -> str:
    return load_prompt("optimization_advice.txt").format(
        prompt_type_label=prompt_type_label(prompt_type),
        prompt_to_analyze=prompt_to_analyze,
        language_instruction=language_instruction(language),
    )


def build_apply_optimization_prompt(
    original_prompt: str,
    advice: Optional[Sequence[str]] = None,
    prompt_type: Optional[str] = None,
    language: Optional[str] = None,
) -> str:
    return load_prompt("apply_optimization.txt").format(
        prompt_type_label=prompt_type_label(prompt_type),
        original_prompt=original_prompt,
        advice=join_lines(advice),
        language_instruction=language_instruction(language),
    )


_BUILDERS = {
    Operation.COMPLETE: build_complete_prompt,
    Operation.THINKING_POINTS: build_thinking_points_prompt,
    Operation.SYSTEM_PROMPT: build_system_prompt_prompt,
    Operation.OPTIMIZATION_ADVICE: build_optimization_advice_prompt,
    Operation.APPLY_OPTIMIZATION: build_apply_optimization_prompt,
}


def build_prompt(operation: Operation, **params) -> str:
    """Render the template for ``operation`` with keyword parameters."""
    return _BUILDERS[Operation(operation)](**params)
