"""Services Layer — transactions and cached reads over users and groups.

Invariants:
    - Every mutation runs inside one database transaction
    - List caches are invalidated only after that transaction commits

Design Decisions:
    - Services receive the session and cache explicitly; routes only translate HTTP
"""
