"""
Service layer - business rules shared by the API routers.
"""
