"""Fan-offer polishing via the Claude API.

A single request with no retry.  Any API failure, an empty response, or a
missing client degrades to a fixed locally built sentence so the caller
always gets text back.
"""

from __future__ import annotations

import structlog
from anthropic import Anthropic, AnthropicError

from kolmessage.llm.client import POLISH_MAX_TOKENS, POLISH_MODEL
from kolmessage.llm.prompts import FAN_OFFER_FALLBACK, FAN_OFFER_POLISH_PROMPT

logger = structlog.get_logger()


def fallback_fan_offer(offer_text: str) -> str:
    """Return the deterministic fallback for *offer_text*."""
    return FAN_OFFER_FALLBACK.format(offer_text=offer_text)


def polish_fan_offer(
    offer_text: str,
    client: Anthropic | None,
    model: str = POLISH_MODEL,
) -> str:
    """Rewrite fan-offer copy to read more naturally.

    Args:
        offer_text: The fan offer as typed in the form.
        client: Configured Anthropic client, or ``None`` when no API key is
            configured.
        model: Model ID to use. Defaults to POLISH_MODEL.

    Returns:
        The polished text, or ``fallback_fan_offer(offer_text)`` on failure.
    """
    if client is None:
        logger.warning("polish_skipped_no_client")
        return fallback_fan_offer(offer_text)

    try:
        response = client.messages.create(
            model=model,
            max_tokens=POLISH_MAX_TOKENS,
            messages=[
                {
                    "role": "user",
                    "content": FAN_OFFER_POLISH_PROMPT.format(offer_text=offer_text),
                }
            ],
        )
    except AnthropicError as exc:
        logger.warning("polish_failed_using_fallback", error=str(exc))
        return fallback_fan_offer(offer_text)

    texts = [block.text for block in response.content if getattr(block, "type", "") == "text"]
    polished = "".join(texts).strip()
    if not polished:
        logger.warning("polish_empty_response_using_fallback", model=model)
        return fallback_fan_offer(offer_text)

    logger.info(
        "fan_offer_polished",
        model=model,
        input_tokens=response.usage.input_tokens,
        output_tokens=response.usage.output_tokens,
    )
    return polished
