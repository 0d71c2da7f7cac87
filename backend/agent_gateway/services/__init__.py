"""Services Layer — auth headers and the outbound backend client.

Invariants:
    - Services combine the pure core with infrastructure seams (token provider, httpx)
    - Services never read environment variables directly
"""
