"""Infrastructure Layer — database, cache, rate limiter, and logging.

Invariants:
    - Infrastructure only imports core/ for error types and protocols
    - Cache and rate limiter are advisory: their failures never fail a request

Design Decisions:
    - Module-level singletons initialized in the FastAPI lifespan, swapped in tests
"""
