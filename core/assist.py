"""
Generative text assist for the CMS.

Drafts a short TV-guide synopsis for a title. Failures are reported to the
caller as ExternalServiceError and never touch the content store.
"""

import logging

import sentry_sdk

from core.config import get_llm_api_key
from core.errors import ExternalServiceError
from core.llm import complete

logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI generation unavailable. Please configure LLM_API_KEY."
EMPTY_RESPONSE_MESSAGE = "No description generated."


def build_synopsis_prompt(title: str, tags: list[str]) -> str:
    return (
        f'Write a short, punchy 2-sentence synopsis for a movie titled "{title}" '
        f"with tags: {', '.join(tags)}. "
        "It should be exciting for a TV guide description."
    )


async def generate_creative_metadata(title: str, tags: list[str]) -> str:
    """
    Generate a synopsis for a title.

    Returns:
        The generated text, or a fixed message when no API key is configured
        or the provider returned nothing.

    Raises:
        ExternalServiceError: If the LLM call fails
    """
    if not get_llm_api_key():
        logger.warning("No LLM_API_KEY configured, skipping AI generation")
        return UNAVAILABLE_MESSAGE

    prompt = build_synopsis_prompt(title, tags)
    try:
        text = await complete(messages=[{"role": "user", "content": prompt}])
    except Exception as e:
        logger.error("LLM synopsis generation failed: %s", e)
        sentry_sdk.capture_exception(e)
        raise ExternalServiceError("Failed to generate AI description.") from e

    return text.strip() or EMPTY_RESPONSE_MESSAGE
