"""Infrastructure Layer — database access, persistence and logging.

Invariants:
    - Infrastructure implements core/ protocols; core never imports from here
    - SQLAlchemy exceptions mapped to core errors before leaving this layer
"""
