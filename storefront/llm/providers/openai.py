# storefront/llm/providers/openai.py
"""
OpenAI provider implementation.
"""
import json
import aiohttp
from typing import Optional

from storefront.core.config import settings
from storefront.core.exceptions import LLMError, RateLimitError


DEFAULT_MODEL = "gpt-4o-mini"
API_URL = "https://api.openai.com/v1/chat/completions"


async def call(
    prompt: str,
    system_prompt: str = "",
    model: Optional[str] = None,
    temperature: float = 0.7,
    max_tokens: int = 1000,
) -> str:
    """
    Call the OpenAI chat completions API.

    Returns:
        The generated text

    Raises:
        LLMError on missing key, API errors or unparsable responses
    """
    api_key = settings.llm.openai_api_key
    if not api_key:
        raise LLMError("openai", "OPENAI_API_KEY not configured")

    model = model or DEFAULT_MODEL

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    payload = {
        "model": model,
        "messages": messages,
        "temperature": temperature,
        "max_tokens": max_tokens,
    }

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
        "User-Agent": "geeks-storefront/1.0",
    }

    async with aiohttp.ClientSession() as session:
        async with session.post(
            API_URL,
            json=payload,
            headers=headers,
            timeout=aiohttp.ClientTimeout(total=settings.llm.timeout_seconds)
        ) as response:
            text = await response.text()

            if response.status == 429:
                raise RateLimitError("openai")

            if response.status != 200:
                raise LLMError("openai", f"API error {response.status}: {text[:200]}")

            try:
                data = json.loads(text)
                return data["choices"][0]["message"]["content"]
            except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
                raise LLMError("openai", f"Failed to parse response: {e}")
