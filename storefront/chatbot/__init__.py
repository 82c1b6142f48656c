"""
Chatbot - rule-based intent detection with an LLM fallback.
"""
