from __future__ import annotations

import pytest

from structured_llm.structured.errors import LlmError
from structured_llm.structured.extractor import extract_arguments, transport_failure
from structured_llm.structured.schemas import ChatCompletionResponse

from helpers import tool_call_response


def test_extracts_first_tool_call_arguments() -> None:
    response = tool_call_response({"result": 42})
    assert extract_arguments(response) == {"result": 42}


def test_only_first_choice_and_first_tool_call_are_read() -> None:
    response = ChatCompletionResponse.model_validate(
        {
            "choices": [
                {
                    "message": {
                        "tool_calls": [
                            {"function": {"name": "getResults", "arguments": '{"a": 1}'}},
                            {"function": {"name": "getResults", "arguments": '{"a": 2}'}},
                        ]
                    }
                },
                {"message": {"tool_calls": [{"function": {"name": "getResults", "arguments": '{"a": 3}'}}]}},
            ]
        }
    )
    assert extract_arguments(response) == {"a": 1}


@pytest.mark.parametrize("body", [{}, {"choices": None}, {"choices": []}])
def test_missing_choices(body: dict) -> None:
    with pytest.raises(LlmError, match="No completion choices"):
        extract_arguments(ChatCompletionResponse.model_validate(body))


@pytest.mark.parametrize(
    "choice",
    [
        {},
        {"message": {"role": "assistant", "content": "Sure! The answer is 4."}},
        {"message": {"role": "assistant", "tool_calls": []}},
    ],
)
def test_no_tool_call(choice: dict) -> None:
    response = ChatCompletionResponse.model_validate({"choices": [choice]})
    with pytest.raises(LlmError, match="No relevant response from the LLM"):
        extract_arguments(response)


@pytest.mark.parametrize("arguments", ["{not json", "", "[1, 2]", "42"])
def test_arguments_must_be_a_json_object(arguments: str) -> None:
    with pytest.raises(LlmError) as e:
        extract_arguments(tool_call_response(arguments))
    assert str(e.value) == "No relevant response from the LLM"


def test_transport_failure_message() -> None:
    err = transport_failure(RuntimeError("connection reset"))
    assert isinstance(err, LlmError)
    assert str(err) == "LLM call failed: connection reset"
