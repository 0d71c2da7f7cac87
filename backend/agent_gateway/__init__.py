"""Agent Gateway Package — frontend-facing proxy to the AI agent backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
