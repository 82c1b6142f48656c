# storefront/chatbot/intents.py
"""
Rule-based intent detection for the store assistant.

Messages are matched against keyword sets in a fixed order; the first set
with a whole-word hit wins. Keyword sets cover Spanish and English.
"""
import re
import unicodedata
from typing import Dict, List, Tuple


GREETING = "greeting"
PRODUCT_SEARCH = "product_search"
HELP = "help"
CATEGORY_INQUIRY = "category_inquiry"
GRATITUDE = "gratitude"
FAREWELL = "farewell"
GENERAL_INQUIRY = "general_inquiry"
ERROR = "error"

# Order matters: detection stops at the first match
INTENT_KEYWORDS: Dict[str, List[str]] = {
    GREETING: ["hola", "buenos", "buenas", "saludos", "hey", "hi", "hello", "greetings"],
    PRODUCT_SEARCH: [
        "buscar", "encontrar", "producto", "comprar", "precio", "cuanto", "vale",
        "search", "find", "product", "buy", "price", "cost",
    ],
    HELP: [
        "ayuda", "ayudar", "soporte", "problema", "error", "como", "funciona",
        "help", "support", "problem", "how", "works",
    ],
    CATEGORY_INQUIRY: ["categoria", "tipo", "clase", "gama", "category", "categories", "type", "kind"],
    GRATITUDE: ["gracias", "thanks", "thank", "perfecto", "excelente", "genial", "perfect", "excellent", "great"],
    FAREWELL: ["despedida", "adios", "chao", "bye", "goodbye", "hasta", "luego", "later", "farewell"],
}

# Only these intents get a keyword-based confidence
SCORED_INTENTS = (GREETING, PRODUCT_SEARCH, HELP)
DEFAULT_CONFIDENCE = 0.5

_INTENT_PATTERNS = [
    (intent, re.compile(r"\b(" + "|".join(map(re.escape, words)) + r")\b"))
    for intent, words in INTENT_KEYWORDS.items()
]

STOP_WORDS = {
    "buscar", "encontrar", "producto", "comprar", "precio", "cuanto", "vale",
    "quiero", "necesito", "me", "gustaria", "un", "una", "el", "la", "los", "las", "de",
    "search", "find", "product", "buy", "price", "cost",
    "i", "want", "need", "would", "like", "to", "for", "a", "an", "the", "looking", "please",
}

_EDGE_PUNCTUATION = "¿?¡!.,;:\"'"


def normalize(message: str) -> str:
    """Lowercase, trim and drop accents so "Categoría" matches "categoria"."""
    decomposed = unicodedata.normalize("NFKD", message.lower().strip())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def detect_intent(message: str) -> str:
    for intent, pattern in _INTENT_PATTERNS:
        if pattern.search(message):
            return intent
    return GENERAL_INQUIRY


def calculate_confidence(message: str, intent: str) -> float:
    """Share of the intent's keywords found anywhere in the message."""
    if intent not in SCORED_INTENTS:
        return DEFAULT_CONFIDENCE
    keywords = INTENT_KEYWORDS[intent]
    matches = sum(1 for keyword in keywords if keyword in message)
    return matches / len(keywords)


def extract_search_terms(message: str) -> str:
    """Drop filler words; accents are kept so terms still match stored product names."""
    words = (word.strip(_EDGE_PUNCTUATION) for word in message.lower().split())
    return " ".join(word for word in words if word and normalize(word) not in STOP_WORDS)


def classify(message: str) -> Tuple[str, float]:
    """Return (intent, confidence) for a raw message."""
    text = normalize(message)
    intent = detect_intent(text)
    return intent, calculate_confidence(text, intent)
