"""Advice module for optional reading tips from an external text service."""

from .gemini import (
    ADVICE_PLACEHOLDER,
    AdviceError,
    AdviceProvider,
    GeminiAdviceClient,
    NullAdviceProvider,
    get_advice_provider,
    request_advice,
)

__all__ = [
    "ADVICE_PLACEHOLDER",
    "AdviceError",
    "AdviceProvider",
    "GeminiAdviceClient",
    "NullAdviceProvider",
    "get_advice_provider",
    "request_advice",
]
