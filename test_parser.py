"""Tests for model-response parsing"""

from promptgen.llm.parser import (
    DEFAULT_FINAL_PROMPT,
    DEFAULT_INITIAL_PROMPT,
    DEFAULT_KEY_INTENT,
    extract_bracketed,
    parse_list_response,
    parse_string_array,
    parse_structured_fields,
    strip_code_fences,
)


# ----------------------------
# extract_bracketed
# ----------------------------

def test_extract_bracketed_spans_first_open_to_last_close():
    text = 'intro ["a"] middle ["b"] outro'
    assert extract_bracketed(text, "[", "]") == '["a"] middle ["b"]'


def test_extract_bracketed_missing_or_reversed():
    assert extract_bracketed("no brackets here", "[", "]") is None
    assert extract_bracketed("] before [", "[", "]") is None


# ----------------------------
# parse_string_array
# ----------------------------

def test_parse_string_array_json():
    assert parse_string_array('["a", "b", "c"]') == ["a", "b", "c"]


def test_parse_string_array_keeps_escaped_quotes_in_valid_json():
    assert parse_string_array('["say \\"hi\\"", "b"]') == ['say "hi"', "b"]


def test_parse_string_array_quoted_segments_when_json_is_broken():
    # trailing comma makes json.loads fail
    assert parse_string_array('["first", "second",]') == ["first", "second"]


def test_parse_string_array_comma_split_fallback():
    assert parse_string_array("[alpha, beta ,  gamma]") == ["alpha", "beta", "gamma"]


def test_parse_string_array_non_string_items_use_comma_split():
    assert parse_string_array("[1, 2, null]") == ["1", "2", "null"]


def test_parse_string_array_nested_arrays_are_flattened():
    assert parse_string_array('[["a", "b"], ["c"]]') == ["a", "b", "c"]


def test_list_response_array_of_objects_yields_quoted_segments():
    # keys and values both come back, in order of appearance
    raw = '[{"point": "a"}, {"point": "b"}]'
    assert parse_list_response(raw) == ["point", "a", "point", "b"]


def test_parse_string_array_empty():
    assert parse_string_array("[]") == []


# ----------------------------
# parse_list_response
# ----------------------------

def test_list_response_json_array():
    assert parse_list_response('["a","b","c"]') == ["a", "b", "c"]


def test_list_response_array_inside_prose():
    raw = '好的，以下是关键指令：\n["明确角色", "限定输出格式"]\n希望有帮助。'
    assert parse_list_response(raw) == ["明确角色", "限定输出格式"]


def test_list_response_numbered_lines():
    assert parse_list_response("1. foo\n2. bar") == ["foo", "bar"]


def test_list_response_bulleted_lines():
    raw = "- first point\n*   second point\n\n  third point  \n"
    assert parse_list_response(raw) == ["first point", "second point", "third point"]


def test_list_response_empty_array_is_returned_as_is():
    assert parse_list_response("nothing to add: []") == []


def test_list_response_blank_input_returns_raw_text():
    assert parse_list_response("   \n  ") == ["   \n  "]


def test_list_response_non_text_returns_raw_value():
    assert parse_list_response(None) == [None]


# ----------------------------
# parse_structured_fields
# ----------------------------

def test_structured_fields_exact_triple():
    raw = '{"keyIntent":"I","initialPrompt":"P1","finalPrompt":"P2"}'
    result = parse_structured_fields(raw)

    assert result.key_intent == "I"
    assert result.initial_prompt == "P1"
    assert result.final_prompt == "P2"


def test_structured_fields_inside_code_fence():
    raw = '```json\n{\n  "keyIntent": "旅行助手",\n  "initialPrompt": "你是旅行助手",\n  "finalPrompt": "你是一名专业的旅行助手"\n}\n```'
    result = parse_structured_fields(raw)

    assert result.key_intent == "旅行助手"
    assert result.final_prompt == "你是一名专业的旅行助手"


def test_structured_fields_without_object_uses_placeholders():
    result = parse_structured_fields("Sorry, I cannot help with that.")

    assert result.key_intent == DEFAULT_KEY_INTENT
    assert result.initial_prompt == DEFAULT_INITIAL_PROMPT
    assert result.final_prompt == DEFAULT_FINAL_PROMPT


def test_structured_fields_nested_object():
    raw = '{"result": {"keyIntent": "I", "initialPrompt": "P1", "finalPrompt": "P2"}}'
    result = parse_structured_fields(raw)

    assert (result.key_intent, result.initial_prompt, result.final_prompt) == ("I", "P1", "P2")


def test_structured_fields_partial_object_is_not_topped_up():
    result = parse_structured_fields('{"keyIntent": "I", "finalPrompt": "P2"}')

    assert result.key_intent == "I"
    assert result.initial_prompt is None
    assert result.final_prompt == "P2"


def test_structured_fields_escaped_quote_in_valid_json():
    raw = '{"keyIntent": "I", "initialPrompt": "say \\"hi\\"", "finalPrompt": "P2"}'
    assert parse_structured_fields(raw).initial_prompt == 'say "hi"'


def test_structured_fields_escaped_quote_truncates_in_broken_json():
    # Missing comma: json.loads fails, regex fallback stops at the escaped quote
    raw = '{"keyIntent": "I" "initialPrompt": "say \\"hi\\"", "finalPrompt": "P2"}'
    result = parse_structured_fields(raw)

    assert result.key_intent == "I"
    assert result.initial_prompt == "say \\"
    assert result.final_prompt == "P2"


def test_structured_fields_never_raises_on_non_text():
    result = parse_structured_fields(None)
    assert result.key_intent == DEFAULT_KEY_INTENT


# ----------------------------
# strip_code_fences
# ----------------------------

def test_strip_code_fences():
    assert strip_code_fences('```json\n["a"]\n```') == '["a"]'
    assert strip_code_fences("plain text") == "plain text"
