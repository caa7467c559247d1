import json
import logging
import re
from typing import List, Optional

from promptgen.schemas import GenerationResult

logger = logging.getLogger(__name__)


DEFAULT_KEY_INTENT = "从用户需求中提取的关键意图信息"
DEFAULT_INITIAL_PROMPT = "基于用户需求生成的初版提示词"
DEFAULT_FINAL_PROMPT = "经过优化的最终提示词"

RESULT_FIELDS = {
    "keyIntent": "key_intent",
    "initialPrompt": "initial_prompt",
    "finalPrompt": "final_prompt",
}

_QUOTED_ITEM = re.compile(r'"([^"]*)"')
_ITEM_SEPARATOR = re.compile(r",\s*")
_LIST_MARKER = re.compile(r"^\d+\.\s*|^[-*]\s*")
_FENCE_OPEN = re.compile(r"^```(?:json)?\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


def placeholder_result() -> GenerationResult:
    return GenerationResult(
        key_intent=DEFAULT_KEY_INTENT,
        initial_prompt=DEFAULT_INITIAL_PROMPT,
        final_prompt=DEFAULT_FINAL_PROMPT,
    )


def _unescape_quotes(text: str) -> str:
    return text.replace('\\"', '"')


# ============================================================
# BRACKET EXTRACTION
# ============================================================

def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if any."""
    content = _FENCE_OPEN.sub("", text.strip())
    return _FENCE_CLOSE.sub("", content.strip())


def extract_bracketed(text: str, open_char: str, close_char: str) -> Optional[str]:
    """
    Return the span from the first ``open_char`` to the last ``close_char``.

    Same reach as a greedy ``\\[.*\\]`` search: brackets are not balanced, so
    several arrays (or objects) in one response come back as one span.
    """
    start = text.find(open_char)
    if start == -1:
        return None

    end = text.rfind(close_char)
    if end < start:
        return None

    return text[start:end + 1]


# ============================================================
# LIST PARSING
# ============================================================

def parse_string_array(json_like: str) -> List[str]:
    """
    Parse a JSON-ish array of strings.

    Strategy:
    1. json.loads, when it yields a flat list of strings
    2. Collect every double-quoted segment
    3. Naive comma split

    NEVER throws. Returns [] when nothing can be recovered.
    """
    try:
        try:
            data = json.loads(json_like)
        except ValueError:
            data = None
        # Only a flat array of strings is taken as-is
        if isinstance(data, list) and all(isinstance(item, str) for item in data):
            return data

        body = json_like.strip()
        if body.startswith("["):
            body = body[1:]
        if body.endswith("]"):
            body = body[:-1]

        items = [_unescape_quotes(m) for m in _QUOTED_ITEM.findall(body)]
        if items:
            return items

        for piece in _ITEM_SEPARATOR.split(body):
            piece = piece.strip()
            if len(piece) >= 2 and piece.startswith('"') and piece.endswith('"'):
                piece = piece[1:-1]
            piece = _unescape_quotes(piece)
            if piece:
                items.append(piece)
        return items
    except Exception:
        logger.warning("Could not parse string array, returning empty list", exc_info=True)
        return []


def parse_list_response(raw_text: str) -> List[str]:
    """
    Turn a model response into an ordered list of strings.

    A ``[...]`` block wins when present, even if it parses to nothing.
    Otherwise each non-empty line becomes an item, minus any ``1.`` / ``-`` / ``*``
    marker. If neither yields anything the raw text is returned as the only item.
    """
    try:
        block = extract_bracketed(raw_text, "[", "]")
        if block:
            return parse_string_array(block)

        lines = []
        for line in raw_text.split("\n"):
            line = _LIST_MARKER.sub("", line, count=1).strip()
            if line:
                lines.append(line)

        if lines:
            return lines
    except Exception:
        logger.warning("Could not parse list response, using raw content", exc_info=True)

    return [raw_text]


# ============================================================
# STRUCTURED FIELDS
# ============================================================

def _fields_from_json(block: str) -> Optional[dict]:
    try:
        data = json.loads(block)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    return {
        attr: data[key]
        for key, attr in RESULT_FIELDS.items()
        if isinstance(data.get(key), str) and data[key]
    }


def _fields_from_regex(block: str) -> dict:
    # Values stop at the first quote, so an escaped quote truncates them
    fields = {}
    for key, attr in RESULT_FIELDS.items():
        match = re.search(rf'"{key}"\s*:\s*"([^"]+)"', block)
        if match:
            fields[attr] = _unescape_quotes(match.group(1))
    return fields


def parse_structured_fields(raw_text: str) -> GenerationResult:
    """
    Extract keyIntent / initialPrompt / finalPrompt from a model response.

    Only a response with no ``{...}`` block at all (or an unexpected error)
    falls back to the placeholder triple; fields missing from a parsed block
    stay None.
    """
    try:
        block = extract_bracketed(raw_text, "{", "}")
        if not block:
            logger.warning("No JSON object in model response, using defaults: %s", raw_text)
            return placeholder_result()

        fields = _fields_from_json(block)
        if not fields:
            # Nested or malformed objects: search the whole block
            fields = _fields_from_regex(block)

        return GenerationResult(**fields)
    except Exception:
        logger.exception("Failed to parse model response")
        return placeholder_result()
