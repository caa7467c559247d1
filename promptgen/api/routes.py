import json
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.concurrency import run_in_threadpool

from promptgen.inference.base import ChatClient
from promptgen.inference.config import get_llm_client
from promptgen.llm.prompt_builder import Operation
from promptgen.pipeline.generator import PromptGenerator, StreamEvent
from promptgen.schemas import (
    ApplyOptimizationRequest,
    CompletePromptRequest,
    OptimizationAdviceRequest,
    Result,
    SystemPromptRequest,
    ThinkingPointsRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/prompt/generate", tags=["prompt-generation"])


def get_prompt_generator(client: ChatClient = Depends(get_llm_client)) -> PromptGenerator:
    return PromptGenerator(client)


def format_sse(event: StreamEvent) -> str:
    payload = json.dumps(event.data, ensure_ascii=False)
    return f"event: {event.event}\ndata: {payload}\n\n"


# ============================================================
# FULL PIPELINE
# ============================================================

@router.post("/complete")
def generate_complete_prompt(
    request: CompletePromptRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    logger.info("Complete prompt request: %s", request.input_prompt)
    try:
        result = generator.run(Operation.COMPLETE, **request.model_dump())
        return Result.success(result.model_dump(by_alias=True))
    except Exception as e:
        # GenerationError already carries the prefixed message
        logger.error("Complete prompt request failed: %s", e)
        return Result.error(str(e))


@router.post("/complete/stream")
async def generate_complete_prompt_stream(
    request: CompletePromptRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    """
    Server-Sent Events: a single ``result`` (or ``error``) event followed by
    ``complete``. The model is called once; nothing is streamed token by token.
    """
    logger.info("Streaming prompt request: %s", request.input_prompt)

    async def event_generator() -> AsyncGenerator[str, None]:
        events = await run_in_threadpool(
            lambda: list(generator.generate_complete_stream(request.input_prompt))
        )
        for event in events:
            yield format_sse(event)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )


# ============================================================
# STEP-BY-STEP ENDPOINTS
# ============================================================

@router.post("/thinking-points")
def get_thinking_points(
    request: ThinkingPointsRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    logger.info("Thinking points request: %s", request.description)
    try:
        points = generator.run(Operation.THINKING_POINTS, **request.model_dump())
        return Result.success(points)
    except Exception as e:
        logger.exception("Thinking points generation failed")
        return Result.error(f"生成关键指令失败: {e}")


@router.post("/system-prompt")
def generate_system_prompt(
    request: SystemPromptRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    logger.info("System prompt request: %s", request.description)
    try:
        prompt = generator.run(Operation.SYSTEM_PROMPT, **request.model_dump())
        return Result.success(prompt)
    except Exception as e:
        logger.exception("System prompt generation failed")
        return Result.error(f"生成系统提示词失败: {e}")


@router.post("/optimization-advice")
def get_optimization_advice(
    request: OptimizationAdviceRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    logger.info("Optimization advice request: promptType=%s", request.prompt_type)
    try:
        advice = generator.run(Operation.OPTIMIZATION_ADVICE, **request.model_dump())
        return Result.success(advice)
    except Exception as e:
        logger.exception("Optimization advice generation failed")
        return Result.error(f"生成优化建议失败: {e}")


@router.post("/apply-optimization")
def apply_optimization_advice(
    request: ApplyOptimizationRequest,
    generator: PromptGenerator = Depends(get_prompt_generator),
):
    logger.info("Apply optimization request: promptType=%s", request.prompt_type)
    try:
        optimized = generator.run(Operation.APPLY_OPTIMIZATION, **request.model_dump())
        return Result.success(optimized)
    except Exception as e:
        logger.exception("Applying optimization advice failed")
        return Result.error(f"应用优化建议失败: {e}")
