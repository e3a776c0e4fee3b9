"""Use case answering business questions with a language model."""

import json
from collections.abc import Sequence
from dataclasses import dataclass

from src.application.ports.assistant import AssistantPort
from src.domain.models.entities import Expense, Product, ProductionEntry
from src.domain.models.finance import FinancialConfig
from src.domain.services.assistant_snapshot import build_assistant_snapshot
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import format_percent

UNAVAILABLE_MESSAGE = (
    "The assistant is not configured. Set GEMINI_API_KEY to enable it."
)
FAILURE_MESSAGE = (
    "I could not reach the analysis service right now. "
    "Please try again in a moment."
)
EMPTY_MESSAGE = "Sorry, I could not produce an analysis for that question."


@dataclass(frozen=True)
class AssistantReply:
    """Chat message returned to the user.

    Attributes:
        content: Text shown in the chat.
        ok: False when the text is a fallback message.
    """

    content: str
    ok: bool = True


def build_prompt(question: str, snapshot: dict, config: FinancialConfig) -> str:
    """Compose the analyst prompt from the snapshot and the question."""
    rate = format_percent(config.tax_rate)
    return "\n".join(
        [
            "You are the business analyst of a small textile workshop.",
            f"Current business context (JSON): {json.dumps(snapshot)}",
            "Business rules: a fixed tax of "
            f"{rate} applies to positive production gross profit. "
            "Other expenses are subtracted from the final net profit.",
            "Answer the owner's question in an executive tone based on the "
            "data provided. Be friendly but focus on financial results and "
            "efficiency.",
            f"Question: {question}",
        ]
    )


class AskAssistantUseCase:
    """Send a business snapshot and a question to the assistant."""

    def __init__(
        self,
        assistant: AssistantPort | None,
        config: FinancialConfig | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            assistant: Model client, or None when no credential is configured.
            config: Tax and currency settings quoted in the prompt.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._assistant = assistant
        self._config = config or FinancialConfig()
        self._logger = logger or get_app_logger()

    def execute(
        self,
        question: str,
        products: Sequence[Product],
        entries: Sequence[ProductionEntry],
        expenses: Sequence[Expense],
    ) -> AssistantReply:
        """Answer ``question``; failures become a fallback reply.

        Returns:
            AssistantReply: Model text, or a friendly message with ok=False.
        """
        question = (question or "").strip()
        if not question:
            return AssistantReply(content=EMPTY_MESSAGE, ok=False)
        if self._assistant is None:
            self._logger.warning("Assistant requested without a credential")
            return AssistantReply(content=UNAVAILABLE_MESSAGE, ok=False)

        snapshot = build_assistant_snapshot(
            products, entries, expenses, self._config
        )
        prompt = build_prompt(question, snapshot, self._config)
        try:
            text = self._assistant.generate(prompt)
        except Exception as exc:
            self._logger.exception(f"Assistant call failed: {exc}")
            return AssistantReply(content=FAILURE_MESSAGE, ok=False)
        if not text or not text.strip():
            self._logger.warning("Assistant returned an empty response")
            return AssistantReply(content=EMPTY_MESSAGE, ok=False)
        return AssistantReply(content=text.strip())


__all__ = ["AskAssistantUseCase", "AssistantReply", "build_prompt"]
