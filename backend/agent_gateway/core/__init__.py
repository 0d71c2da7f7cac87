"""Core Layer — pure endpoint resolution, no IO, no network.

Invariants:
    - No module in core/ imports from services/, api/, or infrastructure/
    - Every function is a deterministic function of its arguments
"""
