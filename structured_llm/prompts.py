"""Prompt objects for structured generation.

A Prompt keeps the literal text segments and the values inserted between
them separately, the way a template literal would, and renders them into
the single string sent as the user message.

Example:
    >>> review = TextDocument(content="Great battery life.")
    >>> Prompt(["Rate this review from 1 to 5:\\n", "\\n"], [review]).render()
    'Rate this review from 1 to 5:\\nGreat battery life.'
"""

from dataclasses import dataclass, field
from typing import Any, Sequence


@dataclass(frozen=True)
class TextDocument:
    """Plain text document; inserted into prompts as its content."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Prompt:
    """Literal segments interleaved with inserted values.

    Attributes:
        strings: Literal text segments, in order.
        insertions: Values placed between consecutive segments; there is
            exactly one fewer insertion than segments.
    """

    strings: Sequence[str]
    insertions: Sequence[Any] = ()

    def __post_init__(self):
        if len(self.insertions) != len(self.strings) - 1:
            raise ValueError(
                f"Prompt needs {len(self.strings) - 1} insertions for "
                f"{len(self.strings)} segments, got {len(self.insertions)}"
            )

    def render(self) -> str:
        """Concatenate segments and insertions, trimmed."""
        parts = [self.strings[0]]
        for insertion, segment in zip(self.insertions, self.strings[1:]):
            parts.append(_insertion_text(insertion))
            parts.append(segment)
        return "".join(parts).strip()


def _insertion_text(value: Any) -> str:
    if isinstance(value, TextDocument):
        return value.content
    return str(value)


def render_prompt(prompt: "Prompt | str") -> str:
    """Render a Prompt, or strip a plain string prompt."""
    if isinstance(prompt, Prompt):
        return prompt.render()
    return prompt.strip()
