"""
Schemas module - Request/Response schemas for API endpoints.

Schemas are the API contract (what client sends/receives). Stored
documents are plain dicts handled by the services.
"""
