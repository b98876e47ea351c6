from __future__ import annotations

import json
from typing import Any

from structured_llm.structured.schemas import ChatCompletionResponse


def tool_call_response(arguments: Any, *, name: str = "getResults") -> ChatCompletionResponse:
    """Provider response carrying one tool call.

    Non-string arguments are JSON-encoded, strings are sent as they are.
    """

    encoded = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return ChatCompletionResponse.model_validate(
        {
            "id": "chatcmpl-1",
            "choices": [
                {
                    "index": 0,
                    "finish_reason": "stop",
                    "message": {
                        "role": "assistant",
                        "content": None,
                        "tool_calls": [
                            {
                                "id": "call_1",
                                "type": "function",
                                "function": {"name": name, "arguments": encoded},
                            }
                        ],
                    },
                }
            ],
        }
    )
