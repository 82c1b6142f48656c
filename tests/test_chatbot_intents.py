import pytest

from storefront.chatbot import intents


@pytest.mark.parametrize("message,expected", [
    ("Hola, ¿qué tal?", intents.GREETING),
    ("hello there", intents.GREETING),
    ("quiero buscar un teclado", intents.PRODUCT_SEARCH),
    ("what is the price of this", intents.PRODUCT_SEARCH),
    ("necesito ayuda con mi pedido", intents.HELP),
    ("how does shipping work", intents.HELP),
    ("¿Qué categoría tienen?", intents.CATEGORY_INQUIRY),
    ("muchas gracias", intents.GRATITUDE),
    ("adiós", intents.FAREWELL),
    ("bye!", intents.FAREWELL),
    ("tienen laptops rojas", intents.GENERAL_INQUIRY),
])
def test_detect_intent(message, expected):
    intent, _ = intents.classify(message)
    assert intent == expected


def test_detection_order_prefers_greeting():
    # Both greeting and search keywords present: greeting is checked first
    intent, _ = intents.classify("hola, quiero comprar algo")
    assert intent == intents.GREETING


def test_keywords_need_word_boundaries():
    # "chip" contains "hi" but is not a greeting
    intent, _ = intents.classify("chip")
    assert intent == intents.GENERAL_INQUIRY


def test_confidence_is_share_of_keywords():
    keywords = intents.INTENT_KEYWORDS[intents.PRODUCT_SEARCH]
    intent, confidence = intents.classify("search price")
    assert intent == intents.PRODUCT_SEARCH
    assert confidence == pytest.approx(2 / len(keywords))


def test_confidence_counts_substrings():
    keywords = intents.INTENT_KEYWORDS[intents.GREETING]
    # "hi" is counted inside "this"
    _, confidence = intents.classify("hola this")
    assert confidence == pytest.approx(2 / len(keywords))


@pytest.mark.parametrize("message", ["gracias", "adios", "categoria", "algo distinto"])
def test_unscored_intents_have_default_confidence(message):
    _, confidence = intents.classify(message)
    assert confidence == intents.DEFAULT_CONFIDENCE


def test_extract_search_terms_drops_stop_words():
    assert intents.extract_search_terms("Quiero buscar un Teclado mecánico") == "teclado mecánico"
    assert intents.extract_search_terms("find me a gaming mouse?") == "gaming mouse"
    assert intents.extract_search_terms("buscar producto") == ""


def test_normalize_strips_accents():
    assert intents.normalize("  Categoría ÚNICA ") == "categoria unica"
