"""Route Modules — one file per resource.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routes validate input and shape responses; rules live in core/, IO in services/

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
