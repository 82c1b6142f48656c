"""
LLM module - Unified interface for the chatbot's LLM providers.
"""
from .adapter import LLMAdapter, call_llm, get_adapter, is_llm_configured

__all__ = ["LLMAdapter", "call_llm", "get_adapter", "is_llm_configured"]
