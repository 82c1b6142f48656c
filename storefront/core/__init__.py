"""
Core module - configuration, logging, errors and security primitives.
"""
from .config import settings
from .logging import log

__all__ = ["settings", "log"]
