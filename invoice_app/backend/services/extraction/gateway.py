"""
Extraction gateway: looks providers up by name and wraps their results.
"""

import logging

from fastapi import Request

from ...config import Settings
from ...models import ExtractResponse
from .canned import DEFAULT_PROVIDER
from .providers import (
    ChatCompletionProvider,
    ExtractionProvider,
    GeminiProvider,
    GroqProvider,
    MockProvider,
)

logger = logging.getLogger(__name__)

PROVIDER_CLASSES: dict[str, type[ChatCompletionProvider]] = {
    "gemini": GeminiProvider,
    "groq": GroqProvider,
}


class ExtractionGateway:
    """
    Dispatches extraction requests to registered providers.

    Unknown provider names are served by the default provider.
    """

    def __init__(
        self,
        providers: dict[str, ExtractionProvider],
        default: ExtractionProvider | None = None,
    ):
        self.providers = providers
        self.default = default or MockProvider(DEFAULT_PROVIDER)

    def provider_for(self, name: str) -> ExtractionProvider:
        provider = self.providers.get(name)
        if provider is None:
            logger.warning("Unknown extraction provider %r, using %s", name, self.default.name)
            return self.default
        return provider

    def extract(self, provider_name: str, text: str) -> ExtractResponse:
        provider = self.provider_for(provider_name)
        try:
            data = provider.extract(text)
        except Exception:
            logger.exception("Extraction with %s failed", provider.name)
            return ExtractResponse(success=False, error="Failed to extract invoice data")
        return ExtractResponse(success=True, data=data)


def build_extraction_gateway(settings: Settings) -> ExtractionGateway:
    """
    Create the gateway from settings.

    Providers without an API key, and all providers in development mode,
    are registered as mock providers.
    """
    api_keys = {
        "gemini": (settings.gemini_api_key, settings.gemini_model),
        "groq": (settings.groq_api_key, settings.groq_model),
    }

    providers: dict[str, ExtractionProvider] = {}
    for name, provider_class in PROVIDER_CLASSES.items():
        api_key, model = api_keys[name]
        if settings.is_development or not api_key:
            logger.warning(
                "Extraction provider '%s' running in MOCK MODE. "
                "Set %s_API_KEY for real extraction.",
                name,
                name.upper(),
            )
            providers[name] = MockProvider(name)
        else:
            providers[name] = provider_class(api_key=api_key, model=model)

    return ExtractionGateway(providers)


def get_extraction_gateway(request: Request) -> ExtractionGateway:
    """Dependency returning the application's extraction gateway."""
    return request.app.state.extraction_gateway
