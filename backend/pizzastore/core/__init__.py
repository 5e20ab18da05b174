"""Core Layer — error hierarchy, domain types and boundary protocols.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Nothing here performs IO
"""
