"""
Invoice field extraction package.

- canned: fixed per-provider results used as mock data and fallback
- providers: the provider capability and its Gemini/Groq/mock implementations
- gateway: name-based provider lookup and response wrapping
"""

from .canned import canned_extraction
from .exceptions import ExtractionError
from .gateway import (
    ExtractionGateway,
    build_extraction_gateway,
    get_extraction_gateway,
)
from .providers import (
    ExtractionProvider,
    GeminiProvider,
    GroqProvider,
    MockProvider,
    build_extraction_prompt,
    parse_extraction_reply,
)

__all__ = [
    "ExtractionError",
    "ExtractionGateway",
    "ExtractionProvider",
    "GeminiProvider",
    "GroqProvider",
    "MockProvider",
    "build_extraction_gateway",
    "build_extraction_prompt",
    "canned_extraction",
    "get_extraction_gateway",
    "parse_extraction_reply",
]
