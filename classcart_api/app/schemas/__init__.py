"""
Pydantic schema definitions for API payloads.

Each domain (lessons, orders) defines its own request and response
models.  Schemas are kept apart from stored documents so the API
representation does not leak ObjectIds.
"""
