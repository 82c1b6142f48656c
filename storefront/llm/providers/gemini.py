# storefront/llm/providers/gemini.py
"""
Google Gemini provider implementation.
"""
import json
import aiohttp
from typing import Optional

from storefront.core.config import settings
from storefront.core.exceptions import LLMError, RateLimitError
from storefront.core.logging import log


DEFAULT_MODEL = "gemini-2.0-flash"
API_URL = "https://generativelanguage.googleapis.com/v1beta/models"


async def call(
    prompt: str,
    system_prompt: str = "",
    model: Optional[str] = None,
    temperature: float = 0.7,
    max_tokens: int = 1000,
) -> str:
    """
    Call the Gemini generateContent API.

    Returns:
        The generated text

    Raises:
        LLMError on missing key, API errors or unparsable responses
    """
    api_key = settings.llm.gemini_api_key
    if not api_key:
        raise LLMError("gemini", "GEMINI_API_KEY not configured")

    model = model or DEFAULT_MODEL
    url = f"{API_URL}/{model}:generateContent?key={api_key}"

    payload = {
        "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        "generationConfig": {
            "temperature": temperature,
            "maxOutputTokens": max_tokens,
        },
    }

    # System instruction goes in its own field
    if system_prompt:
        payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

    async with aiohttp.ClientSession() as session:
        async with session.post(
            url,
            json=payload,
            timeout=aiohttp.ClientTimeout(total=settings.llm.timeout_seconds)
        ) as response:
            text = await response.text()

            if response.status == 429:
                log("LLM", f"[gemini] 429 Rate limit response: {text[:300]}")
                raise RateLimitError("gemini")

            if response.status == 403:
                raise LLMError("gemini", f"API key invalid or quota exceeded (403): {text[:200]}")

            if response.status != 200:
                log("LLM", f"[gemini] Error {response.status}: {text[:300]}")
                raise LLMError("gemini", f"API error {response.status}: {text[:200]}")

            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise LLMError("gemini", f"Failed to parse response: {e}")

            candidates = data.get("candidates", [])
            if not candidates:
                raise LLMError("gemini", "No candidates in response")

            parts = candidates[0].get("content", {}).get("parts", [])
            if not parts:
                raise LLMError("gemini", "No parts in response")

            return parts[0].get("text", "")
