"""
LLM Providers - Individual provider implementations.
"""
from . import gemini, openai

__all__ = ["gemini", "openai"]
