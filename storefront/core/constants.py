# storefront/core/constants.py
"""
Shared constants: entity states, roles, validation limits and messages.
"""


class States:
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    DELETED = "Deleted"

    ALL = (ACTIVE, INACTIVE, DELETED)


class Roles:
    ADMIN = "Admin"
    USER = "User"


class Scopes:
    ALL = "ALL"
    USER = "USER"


class OrderStatus:
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"

    ALL = (PENDING, PROCESSING, SHIPPED, DELIVERED, CANCELLED)


class Limits:
    PASSWORD_MIN_LENGTH = 6
    # bcrypt only hashes the first 72 bytes
    PASSWORD_MAX_BYTES = 72
    EMAIL_MAX_LENGTH = 255
    CUSTOMER_EMAIL_MAX_LENGTH = 100
    FIRST_NAME_MAX_LENGTH = 50
    LAST_NAME_MAX_LENGTH = 50
    PRODUCT_NAME_MAX_LENGTH = 100
    DESCRIPTION_MAX_LENGTH = 500
    SHORT_DESCRIPTION_MAX_LENGTH = 200
    SKU_MAX_LENGTH = 50
    BRAND_MAX_LENGTH = 50
    CATEGORY_NAME_MAX_LENGTH = 100
    CATEGORY_DESCRIPTION_MAX_LENGTH = 300


class Patterns:
    SKU = r"^[A-Z0-9-]+$"
    PERSON_NAME = r"^[a-zA-ZáéíóúÁÉÍÓÚñÑüÜ\s]+$"
    PASSWORD_STRENGTH = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)"


class Messages:
    REQUIRED = "Field is required"
    INVALID_PASSWORD = f"Password must be at least {Limits.PASSWORD_MIN_LENGTH} characters long"
    WEAK_PASSWORD = "Password must contain at least one lowercase letter, one uppercase letter and one number"
    INVALID_SKU = "SKU may only contain uppercase letters, numbers and hyphens"
    DUPLICATE_SKU = "SKU already exists"
    INVALID_CREDENTIALS = "Invalid credentials"
    EMAIL_ALREADY_EXISTS = "Email is already registered"
    CATEGORY_NOT_FOUND = "The specified category does not exist"
    DUPLICATE_CATEGORY = "A category with that name already exists"
    UNAUTHORIZED = "Not authenticated"
    FORBIDDEN = "Access denied"
    EMPTY_CART = "Cart is empty"

    LOGIN_SUCCESS = "Login successful"
    LOGOUT_SUCCESS = "Logged out successfully"
    REGISTER_SUCCESS = "User registered successfully"
    TOKEN_VALID = "Token is valid"


class Pagination:
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    MIN_PAGE = 1
