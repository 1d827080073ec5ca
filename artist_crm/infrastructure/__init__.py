"""Infrastructure Layer — database sessions, Microsoft Graph client, logging.

Invariants:
    - Infrastructure depends on core/ only for the error hierarchy
    - All external calls wrapped with retry/timeout/error mapping
"""
