from __future__ import annotations

import logging
import os

import google.generativeai as genai

from gitmind.domain.errors import MissingCredentialError
from gitmind.domain.interfaces import ITextCompleter

log = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
API_KEY_VARS = ("GEMINI_API_KEY", "API_KEY")


def read_api_key() -> str | None:
    """First non-empty credential among API_KEY_VARS, or None."""
    for var in API_KEY_VARS:
        value = os.environ.get(var)
        if value:
            return value
    return None


class GeminiCompleter(ITextCompleter):
    """
    Concrete ITextCompleter backed by Google Gemini.

    The API key is read from the environment on every call, so a key exported
    after start-up is picked up and a missing key only fails the AI step.
    """

    def __init__(self, model_name: str = DEFAULT_MODEL) -> None:
        self._model_name = model_name

    @property
    def model_name(self) -> str:
        return self._model_name

    async def complete(self, prompt: str) -> str | None:
        api_key = read_api_key()
        if not api_key:
            raise MissingCredentialError(
                f"none of {', '.join(API_KEY_VARS)} is set"
            )

        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(model_name=self._model_name)

        log.debug("Requesting completion from %s (%d chars)", self._model_name, len(prompt))
        response = await model.generate_content_async(prompt)
        return self._response_text(response)

    @staticmethod
    def _response_text(response) -> str | None:
        """
        Text of the first candidate, or None when the model sent no parts.

        `response.text` raises ValueError for an empty or blocked answer, which
        would look like a failed call; reading the parts keeps "answered with
        nothing" apart from "could not answer".
        """
        candidates = response.candidates
        if not candidates:
            log.info("Gemini returned no candidates (prompt feedback: %s)", response.prompt_feedback)
            return None

        parts = candidates[0].content.parts
        text = "".join(part.text for part in parts)
        return text or None
