"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at the system boundary (frontend requests, health responses)
    - Domain enums from core/ used for enum fields
"""
