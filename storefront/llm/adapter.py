# storefront/llm/adapter.py
"""
Unified LLM adapter - single interface for the chatbot's providers.

No fallback between providers: a failing provider raises LLMError and the
caller decides what to show instead.
"""
from typing import Optional

from storefront.core.config import settings
from storefront.core.exceptions import LLMError
from storefront.core.logging import log


class LLMAdapter:
    """
    Unified adapter for LLM providers.

    Handles provider selection and normalizes every failure into LLMError.
    """

    def __init__(self):
        self.default_provider = settings.llm.default_provider
        self.default_model = settings.llm.default_model

    def api_key_for(self, provider: Optional[str] = None) -> Optional[str]:
        provider = provider or self.default_provider
        return {
            "gemini": settings.llm.gemini_api_key,
            "openai": settings.llm.openai_api_key,
        }.get(provider)

    def is_configured(self, provider: Optional[str] = None) -> bool:
        return bool(self.api_key_for(provider))

    async def call(
        self,
        prompt: str,
        system_prompt: str = "",
        provider: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """
        Call an LLM provider once.

        Raises:
            LLMError: unknown provider or any provider failure
        """
        provider = provider or self.default_provider
        model = model or self.default_model
        temperature = settings.llm.temperature if temperature is None else temperature
        max_tokens = max_tokens or settings.llm.max_tokens

        # Import here to avoid circular imports
        from .providers import gemini, openai

        provider_map = {
            "gemini": gemini.call,
            "openai": openai.call,
        }

        if provider not in provider_map:
            raise LLMError(provider, f"Unknown provider: {provider}")

        log("LLM", f"Calling {provider} ({model or 'default model'})")
        try:
            return await provider_map[provider](
                prompt=prompt,
                system_prompt=system_prompt,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except LLMError:
            raise
        except Exception as e:
            raise LLMError(provider, f"Provider error: {e}")


# Singleton instance
_adapter = LLMAdapter()


def get_adapter() -> LLMAdapter:
    return _adapter


def is_llm_configured() -> bool:
    """True when the default provider has an API key."""
    return _adapter.is_configured()


async def call_llm(
    prompt: str,
    system_prompt: str = "",
    provider: Optional[str] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> str:
    """Convenience function for calling the default LLM."""
    return await _adapter.call(
        prompt=prompt,
        system_prompt=system_prompt,
        provider=provider,
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
    )
