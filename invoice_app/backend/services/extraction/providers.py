"""
Extraction providers.

Each provider turns raw invoice text into the ``{"vendor": ..., "invoice": ...}``
structure. Real providers call an OpenAI-compatible chat completions endpoint
once and fall back to their canned result on any failure.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from ...models import ExtractedInvoice
from .canned import canned_extraction
from .exceptions import ExtractionError

logger = logging.getLogger(__name__)

# Only this many characters of the input text are sent to a provider
MAX_PROMPT_TEXT = 2000

PROMPT_PREFIX = "Extract invoice data from this text and return only valid JSON: "

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def build_extraction_prompt(text: str) -> str:
    """Build the extraction prompt around a truncated prefix of ``text``."""
    return f"{PROMPT_PREFIX}{text[:MAX_PROMPT_TEXT]}"


def parse_extraction_reply(content: str) -> dict[str, Any]:
    """
    Parse a provider's reply into invoice fields.

    Args:
        content: Message text of the first completion choice, optionally
            wrapped in a Markdown code fence.

    Returns:
        The validated fields in camelCase form.

    Raises:
        ExtractionError: If the reply is not JSON or not invoice-shaped.
    """
    content = content.strip()
    match = _CODE_FENCE.match(content)
    if match:
        content = match.group(1)

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ExtractionError(f"Invalid JSON in provider reply: {e}") from e

    try:
        return ExtractedInvoice.model_validate(data).to_response()
    except ValidationError as e:
        raise ExtractionError(f"Provider reply is not an invoice: {e}") from e


class ExtractionProvider(ABC):
    """Capability to extract invoice fields from text."""

    name: str

    @abstractmethod
    def extract(self, text: str) -> dict[str, Any]:
        """Return structured invoice fields for ``text``."""


class MockProvider(ExtractionProvider):
    """Returns the canned result registered for its provider name."""

    def __init__(self, name: str):
        self.name = name

    def extract(self, text: str) -> dict[str, Any]:
        logger.info("Extracting with %s (MOCK MODE)", self.name)
        return canned_extraction(self.name)


class ChatCompletionProvider(ExtractionProvider):
    """Provider reached through an OpenAI-compatible chat completions API."""

    base_url: str
    default_model: str

    def __init__(
        self,
        api_key: str,
        model: str | None = None,
        client: Any = None,
    ):
        self.api_key = api_key
        self.model = model or self.default_model
        self._client = client

    @property
    def client(self) -> Any:
        """Lazy-load the API client."""
        if self._client is None:
            self._client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
            )
        return self._client

    def extract(self, text: str) -> dict[str, Any]:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_extraction_prompt(text)}],
            )
            if not response.choices:
                raise ExtractionError("Provider returned no choices")
            content = response.choices[0].message.content
            if not content:
                raise ExtractionError("Empty response from provider")
            data = parse_extraction_reply(content)
        except (OpenAIError, ExtractionError) as e:
            logger.error("%s extraction failed, using canned data: %s", self.name, e)
            return canned_extraction(self.name)

        logger.info(
            "%s extracted invoice %s with %d line items",
            self.name,
            data["invoice"].get("number"),
            len(data["invoice"].get("lineItems", [])),
        )
        return data


class GeminiProvider(ChatCompletionProvider):
    name = "gemini"
    base_url = "https://generativelanguage.googleapis.com/v1beta/openai/"
    default_model = "gemini-2.0-flash"


class GroqProvider(ChatCompletionProvider):
    name = "groq"
    base_url = "https://api.groq.com/openai/v1"
    default_model = "llama-3.3-70b-versatile"
