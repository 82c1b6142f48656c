import sys
import os
from datetime import datetime
from typing import Any, Optional


# ═══════════════════════════════════════════════════════════════════════════════
# LOG FILTERING
# ═══════════════════════════════════════════════════════════════════════════════
# Only these scopes are shown at INFO level
# Everything else is gated behind DEBUG

INFO_SCOPES = {
    "STARTUP",   # Lifespan, routes
    "DB",        # Connection state
    "SEED",      # Default roles / admin
    "AUTH",      # Register / login outcomes
    "ORDER",     # Order lifecycle
    "LLM",       # Provider calls
    "ERROR",     # Unhandled failures
}

# DEBUG-only scopes (hidden by default)
DEBUG_SCOPES = {
    "CART",
    "CATALOG",
    "CHATBOT",
    "UPLOAD",
    "MONITORING",
}

# Check if DEBUG mode is enabled
DEBUG_MODE = os.getenv("STOREFRONT_DEBUG", "false").lower() == "true"


def log(scope: str, message: str, data: Any = None, user_id: Optional[str] = None) -> None:
    """
    Unified logging function for the storefront.

    Only INFO_SCOPES are shown by default.
    Set STOREFRONT_DEBUG=true to see all scopes.
    """
    if not DEBUG_MODE and scope not in INFO_SCOPES:
        return

    timestamp = datetime.now().strftime("%H:%M:%S")
    prefix = f"[{timestamp}] [{scope}]"

    if user_id:
        prefix += f" [user:{str(user_id)[-6:]}]"

    print(f"{prefix} {message}")

    if data:
        print(f"  Data: {data}")

    sys.stdout.flush()


def log_section(scope: str, title: str) -> None:
    """
    Log a section header with visual separator.
    """
    timestamp = datetime.now().strftime("%H:%M:%S")
    print(f"\n{'='*60}")
    print(f"[{timestamp}] [{scope}] {title}")
    print(f"{'='*60}")
    sys.stdout.flush()
