"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - All functions are pure and deterministic (callers pass "now")

Design Decisions:
    - Functional core, imperative shell: services/ load rows, core/ shapes them
"""
