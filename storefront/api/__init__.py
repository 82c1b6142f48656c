"""
API routers.
"""
from . import auth, cart, categories, chatbot, files, health, orders, products

__all__ = ["auth", "cart", "categories", "chatbot", "files", "health", "orders", "products"]
