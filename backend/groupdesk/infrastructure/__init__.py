"""Infrastructure Layer — database access, cookies, request security, view cache.

Invariants:
    - Infrastructure never decides business outcomes; it maps IO to domain errors
"""
