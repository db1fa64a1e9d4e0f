"""Thin LiteLLM wrapper used by the text-assist feature."""

from litellm import acompletion

from core.config import get_llm_api_key, get_llm_provider

DEFAULT_PROVIDER = get_llm_provider()


async def complete(
    messages: list[dict],
    system: str | None = None,
    provider: str | None = None,
    max_tokens: int = 256,
) -> str:
    """
    Run a single non-streaming completion.

    Args:
        messages: List of {"role": "user"|"assistant", "content": str}
        system: Optional system prompt, prepended as a system message
        provider: LiteLLM model string. If None, uses DEFAULT_PROVIDER.
        max_tokens: Maximum tokens in response

    Returns:
        The response text (may be empty)
    """
    llm_messages = list(messages)
    if system:
        llm_messages = [{"role": "system", "content": system}] + llm_messages

    response = await acompletion(
        model=provider or DEFAULT_PROVIDER,
        messages=llm_messages,
        max_tokens=max_tokens,
        api_key=get_llm_api_key(),
    )
    return response.choices[0].message.content or ""
