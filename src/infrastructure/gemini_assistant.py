"""Assistant adapter backed by Google Gemini."""

import os

import dotenv
import google.generativeai as genai

from src.application.ports.assistant import AssistantPort

DEFAULT_GEMINI_MODEL = "models/gemini-2.0-flash"
GENERATION_CONFIG = {"temperature": 0.7, "top_p": 0.8, "top_k": 40}


def resolve_api_key() -> str | None:
    """Return the Gemini credential from the environment, if any."""
    dotenv.load_dotenv()
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


class GeminiAssistant(AssistantPort):
    """AssistantPort calling ``GenerativeModel.generate_content``."""

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> None:
        """Configure the client.

        Args:
            api_key: Credential; read from the environment when omitted.
            model_name: Model identifier; ``GEMINI_MODEL`` or the default.

        Raises:
            RuntimeError: If no credential is available.
        """
        key = api_key or resolve_api_key()
        if not key:
            raise RuntimeError(
                "Environment variable GEMINI_API_KEY is not set"
            )
        self.model_name = (
            model_name or os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        )
        genai.configure(api_key=key)
        self._model = genai.GenerativeModel(self.model_name)

    def generate(self, prompt: str) -> str:
        response = self._model.generate_content(
            prompt,
            generation_config=GENERATION_CONFIG,
        )
        return response.text or ""


__all__ = ["GeminiAssistant", "resolve_api_key", "DEFAULT_GEMINI_MODEL"]
