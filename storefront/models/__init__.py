"""
Database models - Beanie documents.
"""
from .base import AuditedDocument, utcnow
from .user import Role, User
from .catalog import Category, Product
from .cart import Cart, CartItem
from .order import Order, OrderItem
from .chat import ChatMessageLog

# Registered with init_beanie
DOCUMENT_MODELS = [Role, User, Category, Product, Cart, Order, ChatMessageLog]

__all__ = [
    "AuditedDocument",
    "utcnow",
    "Role",
    "User",
    "Category",
    "Product",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "ChatMessageLog",
    "DOCUMENT_MODELS",
]
