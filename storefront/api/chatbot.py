# storefront/api/chatbot.py
"""
Store assistant endpoints.
"""
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Query

from storefront.chatbot import service as chatbot
from storefront.core.config import settings
from storefront.core.security import CurrentUser, get_current_user
from storefront.llm import get_adapter, is_llm_configured
from storefront.schemas import (
    ChatContext,
    ChatMessageRequest,
    ChatResponse,
    GenerateDescriptionRequest,
    GenerateDescriptionResponse,
    ProductRecommendation,
)

router = APIRouter(prefix="/api/chatbot", tags=["Chatbot"])


def mask_key(key: str) -> str:
    if not key:
        return ""
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatMessageRequest, current_user: CurrentUser = Depends(get_current_user)):
    return await chatbot.process_message(request.message, current_user.id, request.session_id)


@router.get("/recommendations", response_model=List[ProductRecommendation])
async def recommendations(
    query: str = Query(..., min_length=1, max_length=200),
    current_user: CurrentUser = Depends(get_current_user),
):
    return await chatbot.get_recommendations(query)


@router.get("/context", response_model=ChatContext)
async def context(current_user: CurrentUser = Depends(get_current_user)):
    return await chatbot.get_context(current_user.id)


@router.post("/generate-description", response_model=GenerateDescriptionResponse)
async def generate_description(
    request: GenerateDescriptionRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    description, source = await chatbot.generate_description(request.product_name, request.category)
    return GenerateDescriptionResponse(description=description, generated_by=source)


@router.get("/health")
async def health():
    return {
        "status": "healthy",
        "service": "GEEKS Chatbot",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm_configured": is_llm_configured(),
        "features": [
            "Intent Detection",
            "Product Recommendations",
            "Context Awareness",
            "Quick Replies",
            "LLM Fallback",
        ],
    }


@router.post("/test-chat", response_model=ChatResponse)
async def test_chat(request: ChatMessageRequest):
    """Anonymous chat for trying the assistant without an account."""
    return await chatbot.process_message(request.message, None, request.session_id)


@router.get("/diagnose")
async def diagnose():
    adapter = get_adapter()
    api_key = adapter.api_key_for() or ""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "llm_config": {
            "provider": adapter.default_provider,
            "model": adapter.default_model,
            "has_api_key": bool(api_key),
            "api_key_length": len(api_key),
            "api_key_masked": mask_key(api_key),
            "max_tokens": settings.llm.max_tokens,
            "temperature": settings.llm.temperature,
        },
        "message": "LLM configuration diagnostics",
    }
