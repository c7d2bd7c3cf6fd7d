"""Anthropic client factory and model configuration for fan-offer polishing."""

from anthropic import Anthropic

# Haiku is enough for a short copy-editing pass
POLISH_MODEL = "claude-haiku-4-5-20251001"
POLISH_MAX_TOKENS = 1024


def get_anthropic_client(api_key: str | None = None) -> Anthropic:
    """Create an Anthropic client.

    When *api_key* is ``None`` the constructor reads ``ANTHROPIC_API_KEY``
    from the environment.

    Returns:
        Configured Anthropic client instance.
    """
    return Anthropic(api_key=api_key)
