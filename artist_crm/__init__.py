"""Artist CRM — artists, funding opportunities, applications and team follow-up.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
