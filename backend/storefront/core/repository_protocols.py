"""Boundary Protocols — contracts between handlers and external collaborators.

Invariants:
    - Handlers depend on these Protocols, never on the Firebase SDK directly
    - All IO operations accessed through Protocol types
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests pass plain fakes (ADR: no inheritance hierarchy)
    - Async in Protocol: implementations do IO
"""

from typing import Protocol


class ImageStore(Protocol):
    """Contract for the image-hosting collaborator."""

    async def upload(self, source: str, folder: str) -> str:
        """Persist `source` under `folder`; return the canonical public URL."""
        ...

    async def delete(self, url: str) -> bool:
        """Remove a previously uploaded image; False if it was already gone."""
        ...


class SearchBackend(Protocol):
    """Contract the debounced search widget uses to look products up."""

    async def search_products(self, term: str) -> list[dict]: ...
