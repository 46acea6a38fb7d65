"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary (query strings, bodies, responses)
    - Domain enums from core/ used for status fields
    - JSON field names are camelCase (groupId, createdAt, nextCursor, hasNext)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
