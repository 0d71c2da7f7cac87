"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Shared state (EndpointConfig, backend client) reaches routes only via dependencies
"""
