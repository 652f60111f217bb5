"""Request/response schemas (HTTP layer).

Pydantic models for API request validation and response serialization.
Kept separate from domain entities.
"""
