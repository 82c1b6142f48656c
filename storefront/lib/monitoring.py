# storefront/lib/monitoring.py
from fastapi import FastAPI
from prometheus_client.registry import CollectorRegistry as Registry
from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator
from storefront.core.logging import log

# Create a separate registry
registry = Registry()

orders_placed = Counter(
    'storefront_orders_placed',
    'Number of orders placed through checkout',
    registry=registry
)

chatbot_messages = Counter(
    'storefront_chatbot_messages',
    'Chatbot messages processed, by detected intent',
    ['intent'],
    registry=registry
)


def record_order_placed():
    orders_placed.inc()


def record_chatbot_intent(intent: str):
    chatbot_messages.labels(intent=intent).inc()


def register_monitoring(app: FastAPI):
    """
    Registers Prometheus monitoring on the FastAPI app and exposes /metrics.
    """
    instrumentator = Instrumentator(
        excluded_handlers=["/metrics"],
        registry=registry
    ).instrument(app)

    instrumentator.expose(app, include_in_schema=False, should_gzip=True)

    log("MONITORING", "Prometheus instrumentation registered at /metrics.")
