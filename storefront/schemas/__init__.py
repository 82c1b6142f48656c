"""
Request / response schemas (Pydantic).
"""
from .common import ServiceResponse, PaginatedResponse, MessageResponse
from .auth import (
    LoginRequest,
    RegisterRequest,
    UserResponse,
    AuthData,
    AuthResponse,
    TokenValidationResponse,
)
from .catalog import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    ProductCreate,
    ProductUpdate,
    ProductListItem,
    ProductResponse,
    ProductFilter,
    DemoClearResponse,
)
from .cart import AddToCartRequest, UpdateCartItemRequest, CartItemResponse, CartResponse
from .order import CreateOrderRequest, UpdateOrderStatusRequest, OrderItemResponse, OrderResponse
from .chatbot import (
    ChatMessageRequest,
    QuickReply,
    ProductRecommendation,
    ChatResponse,
    ChatContext,
    GenerateDescriptionRequest,
    GenerateDescriptionResponse,
)
