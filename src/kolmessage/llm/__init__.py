"""LLM integration package.

Provides the Anthropic client factory, prompt templates, and the fan-offer
polishing call with its deterministic fallback.
"""

from kolmessage.llm.client import POLISH_MAX_TOKENS, POLISH_MODEL, get_anthropic_client
from kolmessage.llm.polisher import fallback_fan_offer, polish_fan_offer
from kolmessage.llm.prompts import FAN_OFFER_FALLBACK, FAN_OFFER_POLISH_PROMPT

__all__ = [
    "FAN_OFFER_FALLBACK",
    "FAN_OFFER_POLISH_PROMPT",
    "POLISH_MAX_TOKENS",
    "POLISH_MODEL",
    "fallback_fan_offer",
    "get_anthropic_client",
    "polish_fan_offer",
]
