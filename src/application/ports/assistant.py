"""Port for the language-model assistant."""

from typing import Protocol


class AssistantPort(Protocol):
    """Port exposing a single prompt-to-text call."""

    def generate(self, prompt: str) -> str:
        """Return the model's answer to ``prompt``."""


__all__ = ["AssistantPort"]
