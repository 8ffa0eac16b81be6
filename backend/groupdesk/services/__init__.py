"""Services Layer — imperative shell around the core rules.

Invariants:
    - Services own transactions (commit/rollback); routes never commit
    - Every query that touches group-owned rows filters by group_id
"""
