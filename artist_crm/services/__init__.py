"""Services Layer — IO around the pure core: DB queries, file storage, Outlook calls.

Invariants:
    - Services own commits; routes only validate input and shape responses
    - Shaping and rules live in core/ and are called from here

Design Decisions:
    - One module per concern, plain async functions (no handler classes needed)
"""
