# storefront/main.py
"""
GEEKS storefront backend.
"""
import uvicorn
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import FileResponse

# Rate limiting
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from storefront.core.config import settings
from storefront.core.exceptions import register_exception_handlers
from storefront.core.logging import log, log_section
from storefront.llm import is_llm_configured

log("STARTUP", "Environment check:")
log("STARTUP", f"  Database: {settings.database.db_name}")
log("STARTUP", f"  LLM provider: {settings.llm.default_provider} (configured: {is_llm_configured()})")


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    log_section("STARTUP", "GEEKS storefront starting")

    settings.ensure_directories()

    from storefront.db import connect_db, disconnect_db, is_connected
    from storefront.db.seed import seed_database
    await connect_db()
    if is_connected():
        await seed_database()

    yield

    log("STARTUP", "Shutting down...")
    await disconnect_db()


# ---------------------------------------------------------------------------
# APP INITIALIZATION
# ---------------------------------------------------------------------------

app = FastAPI(
    title="GEEKS Storefront",
    version="1.0.0",
    lifespan=lifespan,
)

# Monitoring
from storefront.lib.monitoring import register_monitoring
register_monitoring(app)

register_exception_handlers(app)

if settings.cors_origins == ["*"] and not settings.debug:
    log("STARTUP", "[CORS] Warning: allow_origins=['*'] - set CORS_ORIGINS in production")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rate Limiting - default 100 requests per minute per IP, RATE_LIMIT overrides
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
log("STARTUP", f"[SECURITY] Rate limiting enabled: {settings.rate_limit}")


# ---------------------------------------------------------------------------
# API ROUTES
# ---------------------------------------------------------------------------

from storefront.api import (
    auth,
    cart,
    categories,
    chatbot,
    files,
    health,
    orders,
    products,
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(cart.router)
app.include_router(orders.router)
app.include_router(chatbot.router)
app.include_router(files.router)


# ---------------------------------------------------------------------------
# STATIC FILES
# ---------------------------------------------------------------------------

app.mount(
    "/uploads",
    StaticFiles(directory=settings.uploads.uploads_dir, check_dir=False),
    name="uploads",
)

if settings.paths.frontend_dist.exists():
    log("STARTUP", f"Serving frontend from: {settings.paths.frontend_dist}")

    assets_path = settings.paths.frontend_dist / "assets"
    if assets_path.exists():
        app.mount("/assets", StaticFiles(directory=assets_path), name="assets")

    @app.get("/{full_path:path}", include_in_schema=False)
    async def serve_spa(request: Request, full_path: str):
        dist = settings.paths.frontend_dist.resolve()
        file_path = (dist / full_path).resolve()
        if file_path.is_file() and dist in file_path.parents:
            return FileResponse(file_path)
        return FileResponse(dist / "index.html")
else:
    log("STARTUP", f"Frontend not found at {settings.paths.frontend_dist}")


# ---------------------------------------------------------------------------
# RUN
# ---------------------------------------------------------------------------

def run():
    uvicorn.run(
        "storefront.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
