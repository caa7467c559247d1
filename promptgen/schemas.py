from typing import Annotated, Any, List, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


NonBlankStr = Annotated[str, AfterValidator(_not_blank)]


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _as_string_list(value: Any) -> List[str]:
    # Anything that is not a JSON array is treated as "no items"
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


# ============================================================
# REQUESTS
# ============================================================

class CompletePromptRequest(CamelModel):
    input_prompt: NonBlankStr


class ThinkingPointsRequest(CamelModel):
    description: NonBlankStr
    language: Optional[str] = "zh"  # zh | en


class SystemPromptRequest(CamelModel):
    description: NonBlankStr
    language: Optional[str] = "zh"
    thinking_points: List[str] = Field(default_factory=list)

    @field_validator("thinking_points", mode="before")
    @classmethod
    def normalize_points(cls, value):
        return _as_string_list(value)


class OptimizationAdviceRequest(CamelModel):
    prompt_to_analyze: NonBlankStr
    prompt_type: Optional[str] = "system"  # system | user
    language: Optional[str] = "zh"


class ApplyOptimizationRequest(CamelModel):
    original_prompt: NonBlankStr
    advice: List[str] = Field(default_factory=list)
    prompt_type: Optional[str] = "system"
    language: Optional[str] = "zh"

    @field_validator("advice", mode="before")
    @classmethod
    def normalize_advice(cls, value):
        return _as_string_list(value)


# ============================================================
# RESPONSES
# ============================================================

class GenerationResult(CamelModel):
    key_intent: Optional[str] = None
    initial_prompt: Optional[str] = None
    final_prompt: Optional[str] = None


class Result(BaseModel):
    """Uniform envelope returned by every JSON endpoint."""

    code: int = 200
    message: str = "success"
    data: Any = None

    @classmethod
    def success(cls, data: Any = None) -> "Result":
        return cls(code=200, message="success", data=data)

    @classmethod
    def error(cls, message: str, code: int = 500) -> "Result":
        return cls(code=code, message=message, data=None)
