# storefront/chatbot/service.py
"""
Store assistant: turns a classified message into a reply, product
suggestions and quick replies. Falls back to the configured LLM for
questions the rules cannot answer.
"""
import re
from datetime import datetime
from typing import List, Optional, Tuple

from beanie import PydanticObjectId
from beanie.odm.enums import SortDirection

from storefront.chatbot import intents
from storefront.core.constants import States
from storefront.core.exceptions import LLMError
from storefront.core.logging import log
from storefront.lib.monitoring import record_chatbot_intent
from storefront.llm import call_llm, is_llm_configured
from storefront.models import Category, ChatMessageLog, Product
from storefront.schemas import ChatContext, ChatResponse, ProductRecommendation, QuickReply
from storefront.services.common import category_names


MAX_RECOMMENDATIONS = 5
CONTEXT_SIZE = 5

# Relevance weights per matching field
SCORE_NAME = 10.0
SCORE_DESCRIPTION = 5.0
SCORE_CATEGORY = 8.0
SCORE_BRAND = 6.0
SCORE_FEATURED = 2.0

ERROR_MESSAGE = "Sorry, I'm having technical trouble right now. Could you try again?"

HELP_MESSAGE = (
    "Of course! Here is what I can do:\n\n"
    "🔍 **Search products**: tell me what you are looking for and I will find it\n"
    "📂 **Explore categories**: I can list the categories we carry\n"
    "💰 **Pricing information**: details on prices and discounts\n"
    "❓ **General help**: questions about the buying process\n\n"
    "What would you like to do?"
)

GENERAL_FALLBACK_MESSAGE = (
    "I understand your question. Would you like me to look for specific products, "
    "or can I help with something more concrete? I can search products, explore "
    "categories or answer questions about the buying process."
)

SYSTEM_PROMPT = """You are GEEK-Bot, the official virtual assistant of GEEKS, a store specialised in technology and gaming products.

CURRENT CONTEXT: {context}

Be friendly, professional and enthusiastic. Recommend products from the catalog when they fit,
compare options honestly, consider the customer's budget and intended use, and keep answers
informative without being overwhelming. Use markdown for structure."""

QUICK_REPLIES = {
    intents.GREETING: [
        QuickReply(text="🔍 Search products", action="search_products"),
        QuickReply(text="📂 View categories", action="view_categories"),
        QuickReply(text="❓ I need help", action="help"),
    ],
    intents.PRODUCT_SEARCH: [
        QuickReply(text="📱 Electronics", action="search_category", value="Electronics"),
        QuickReply(text="🎮 Gaming", action="search_category", value="Gaming"),
        QuickReply(text="👕 Clothing", action="search_category", value="Clothing"),
    ],
    intents.HELP: [
        QuickReply(text="🔍 How to search", action="search_help"),
        QuickReply(text="💰 Prices and discounts", action="pricing_help"),
        QuickReply(text="📦 Buying process", action="purchase_help"),
    ],
}

DEFAULT_QUICK_REPLIES = [
    QuickReply(text="🔍 Search products", action="search_products"),
    QuickReply(text="📂 View categories", action="view_categories"),
    QuickReply(text="❓ Help", action="help"),
]


def quick_replies_for(intent: str) -> List[QuickReply]:
    return [reply.model_copy() for reply in QUICK_REPLIES.get(intent, DEFAULT_QUICK_REPLIES)]


def time_of_day_greeting(hour: int) -> str:
    if hour < 12:
        return "Good morning!"
    if hour < 18:
        return "Good afternoon!"
    return "Good evening!"


def relevance_score(query: str, product: Product, category_name: str) -> float:
    query = query.lower()
    score = 0.0
    if query in product.name.lower():
        score += SCORE_NAME
    if query in product.description.lower():
        score += SCORE_DESCRIPTION
    if query in category_name.lower():
        score += SCORE_CATEGORY
    if product.brand and query in product.brand.lower():
        score += SCORE_BRAND
    if product.is_featured:
        score += SCORE_FEATURED
    return score


def recommendation_reason(score: float) -> str:
    if score >= 15:
        return "Exact match for your search"
    if score >= 10:
        return "Closely related to what you are looking for"
    if score >= 5:
        return "Related to your question"
    return "Popular product in this category"


def template_description(product_name: str, category: str) -> str:
    return (
        f"Discover {product_name}, an exceptional product in the {category} category. "
        "Designed with the highest quality and built with your satisfaction in mind. "
        "Don't miss this amazing opportunity!"
    )


# ═══════════════════════════════════════════════════════════════════════════════
# CATALOG LOOKUPS
# ═══════════════════════════════════════════════════════════════════════════════

async def get_recommendations(query: str) -> List[ProductRecommendation]:
    """Up to five Active products mentioning ``query``, best match first."""
    query = (query or "").strip().lower()
    if not query:
        return []

    pattern = {"$regex": re.escape(query), "$options": "i"}
    clauses = [{"name": pattern}, {"description": pattern}, {"brand": pattern}]
    matching_categories = await Category.find({"name": pattern}).to_list()
    if matching_categories:
        clauses.append({"category_id": {"$in": [c.id for c in matching_categories]}})

    products = await Product.find({"state": States.ACTIVE, "$or": clauses}).limit(MAX_RECOMMENDATIONS).to_list()
    names = await category_names(p.category_id for p in products)

    recommendations = []
    for product in products:
        category_name = names.get(product.category_id, "")
        score = relevance_score(query, product, category_name)
        recommendations.append(ProductRecommendation(
            id=str(product.id),
            name=product.name,
            short_description=product.short_description,
            price=product.price,
            discount_price=product.discount_price,
            main_image=product.main_image,
            category_name=category_name,
            brand=product.brand,
            relevance_score=score,
            reason=recommendation_reason(score),
        ))

    recommendations.sort(key=lambda r: r.relevance_score, reverse=True)
    return recommendations


async def popular_categories(limit: int = CONTEXT_SIZE) -> List[str]:
    categories = await Category.find(Category.state == States.ACTIVE).to_list()
    counted = []
    for category in categories:
        count = await Product.find(
            Product.category_id == category.id,
            Product.state == States.ACTIVE,
        ).count()
        counted.append((count, category.name))
    counted.sort(key=lambda pair: pair[0], reverse=True)
    return [name for _, name in counted[:limit]]


async def trending_products(limit: int = CONTEXT_SIZE) -> List[str]:
    products = (
        await Product.find(Product.state == States.ACTIVE, Product.is_featured == True)  # noqa: E712
        .sort(("created_at", SortDirection.DESCENDING), ("_id", SortDirection.DESCENDING))
        .limit(limit)
        .to_list()
    )
    return [p.name for p in products]


async def recent_searches(user_id: Optional[PydanticObjectId], limit: int = CONTEXT_SIZE) -> List[str]:
    if user_id is None:
        return []
    entries = (
        await ChatMessageLog.find(
            ChatMessageLog.user_id == user_id,
            ChatMessageLog.intent == intents.PRODUCT_SEARCH,
        )
        .sort(("created_at", SortDirection.DESCENDING), ("_id", SortDirection.DESCENDING))
        .limit(limit * 3)
        .to_list()
    )
    searches: List[str] = []
    for entry in entries:
        if entry.search_terms and entry.search_terms not in searches:
            searches.append(entry.search_terms)
    return searches[:limit]


async def get_context(user_id: Optional[PydanticObjectId] = None) -> ChatContext:
    return ChatContext(
        popular_categories=await popular_categories(),
        trending_products=await trending_products(),
        recent_searches=await recent_searches(user_id),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# RESPONSES
# ═══════════════════════════════════════════════════════════════════════════════

async def _greeting_response() -> ChatResponse:
    greeting = time_of_day_greeting(datetime.now().hour)
    message = (
        f"{greeting} I'm the GEEKS virtual assistant. "
        "I can help you find products, explore categories or answer any question. "
    )
    categories = await popular_categories(limit=3)
    if categories:
        message += f"Some popular categories are: {', '.join(categories)}. "
    message += "How can I help you today?"
    return ChatResponse(message=message)


async def _product_search_response(search_terms: str) -> ChatResponse:
    if not search_terms:
        return ChatResponse(
            message="Which product are you looking for? Tell me its name, category or the features you care about."
        )

    recommendations = await get_recommendations(search_terms)
    if recommendations:
        return ChatResponse(
            message=f"I found {len(recommendations)} products related to '{search_terms}':",
            type="product_list",
            product_suggestions=recommendations,
        )
    return ChatResponse(
        message=f"I couldn't find specific products for '{search_terms}'. "
                "Could you be more specific or try other terms?"
    )


async def _category_response() -> ChatResponse:
    categories = await Category.find(Category.state == States.ACTIVE).sort("name").to_list()
    if not categories:
        return ChatResponse(message="We don't have any categories available right now.")
    category_list = ", ".join(c.name for c in categories)
    return ChatResponse(
        message=f"These are the categories we carry:\n\n{category_list}\n\n"
                "Are you interested in any of them? I can show you the featured products of each one."
    )


async def _general_response(message: str, user_id: Optional[PydanticObjectId]) -> ChatResponse:
    recommendations = await get_recommendations(message)
    if recommendations:
        return ChatResponse(
            message="I think you might be interested in these products related to your question:",
            type="product_list",
            product_suggestions=recommendations,
        )

    if is_llm_configured():
        context = await get_context(user_id)
        context_text = (
            f"Popular categories: {', '.join(context.popular_categories) or 'none'}. "
            f"Featured products: {', '.join(context.trending_products) or 'none'}."
        )
        try:
            answer = await call_llm(prompt=message, system_prompt=SYSTEM_PROMPT.format(context=context_text))
            if answer and answer.strip():
                return ChatResponse(message=answer.strip())
        except LLMError as e:
            log("LLM", f"Chatbot fallback after provider failure: {e.message}")

    return ChatResponse(message=GENERAL_FALLBACK_MESSAGE)


async def _build_response(
    intent: str,
    message: str,
    search_terms: str,
    user_id: Optional[PydanticObjectId],
) -> ChatResponse:
    if intent == intents.GREETING:
        return await _greeting_response()
    if intent == intents.PRODUCT_SEARCH:
        return await _product_search_response(search_terms)
    if intent == intents.HELP:
        return ChatResponse(message=HELP_MESSAGE)
    if intent == intents.CATEGORY_INQUIRY:
        return await _category_response()
    if intent == intents.GRATITUDE:
        return ChatResponse(message="You're welcome! I'm here to help. Is there anything else I can do for you?")
    if intent == intents.FAREWELL:
        return ChatResponse(message="See you soon! It was a pleasure helping you. Come back any time!")
    return await _general_response(message, user_id)


async def process_message(
    message: str,
    user_id: Optional[PydanticObjectId] = None,
    session_id: Optional[str] = None,
) -> ChatResponse:
    """Classify a message, answer it and record it in the chat log."""
    try:
        intent, confidence = intents.classify(message)
        search_terms = intents.extract_search_terms(message) if intent == intents.PRODUCT_SEARCH else ""

        response = await _build_response(intent, message.strip(), search_terms, user_id)
        response.intent = intent
        response.confidence = confidence
        response.quick_replies = quick_replies_for(intent)

        await ChatMessageLog(
            user_id=user_id,
            session_id=session_id,
            message=message,
            intent=intent,
            confidence=confidence,
            search_terms=search_terms or None,
        ).insert()
        record_chatbot_intent(intent)
        log("CHATBOT", f"'{message[:50]}' -> {intent} ({confidence:.2f})", user_id=user_id)
        return response
    except Exception as e:
        log("ERROR", f"Chatbot failed to process message: {e!r}", user_id=user_id)
        record_chatbot_intent(intents.ERROR)
        return ChatResponse(message=ERROR_MESSAGE, intent=intents.ERROR, confidence=0.0)


async def generate_description(product_name: str, category: str) -> Tuple[str, str]:
    """Return (description, source) where source is "llm" or "template"."""
    if is_llm_configured():
        prompt = (
            f"Write an attractive, professional description for a product called '{product_name}' "
            f"in the '{category}' category. It should be persuasive, highlight benefits and suit an "
            "online store. Maximum 100 words."
        )
        try:
            text = await call_llm(prompt=prompt, max_tokens=200, temperature=0.8)
            if text and text.strip():
                return text.strip(), "llm"
        except LLMError as e:
            log("LLM", f"Description generation fell back to template: {e.message}")
    return template_description(product_name, category), "template"
