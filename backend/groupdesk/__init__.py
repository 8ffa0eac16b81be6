"""GroupDesk Application Package — invite-based group collaboration backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
