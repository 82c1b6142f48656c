"""
GEEKS storefront - e-commerce backend with a store assistant chatbot.
"""
__version__ = "1.0.0"
