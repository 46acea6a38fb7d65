"""Boundary Protocols — contracts between core/services and shell collaborators.

Invariants:
    - Services depend on these Protocols, never on redis directly
    - Cache methods never raise: failures are reported as a miss or a no-op

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass any object with
      the same methods (ADR: no inheritance hierarchy)
    - Async in Protocol: implementations do network IO
"""

from typing import Any, Protocol


class ListCacheLike(Protocol):
    """Contract for the advisory short-TTL list cache — implemented by infrastructure."""
    async def get(self, key: str) -> Any | None: ...
    async def set(self, key: str, value: Any, ttl_seconds: int) -> None: ...
    async def invalidate_by_prefix(self, prefix: str) -> int: ...
