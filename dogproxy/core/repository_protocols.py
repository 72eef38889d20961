"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests pass fakes without inheritance
    - Async in Protocol: both boundaries (dog.ceo, database) do IO
"""

from typing import Protocol

from dogproxy.core.domain_types import BreedCatalog, UserId


class UserLike(Protocol):
    """Structural contract for User records returned by the store."""
    id: int
    name: str
    email: str
    address: str


class DogCatalog(Protocol):
    """Contract for the upstream breed/image service — implemented by DogApiClient."""
    async def list_breeds(self) -> list[str]: ...
    async def get_catalog(self) -> BreedCatalog: ...
    async def list_sub_breeds(self, breed: str) -> list[str]: ...
    async def random_images(self, count: int = 0) -> list[str]: ...
    async def breed_images(self, breed: str) -> list[str]: ...
    async def random_breed_images(self, breed: str, count: int = 0) -> list[str]: ...


class UserRepository(Protocol):
    """Contract for User persistence — implemented by UserStore."""
    async def list_all(self) -> list[UserLike]: ...
    async def get(self, user_id: UserId) -> UserLike: ...
    async def create(self, name: str, email: str, address: str) -> UserLike: ...
    async def update(
        self, user_id: UserId, name: str, email: str, address: str,
    ) -> UserLike: ...
    async def delete(self, user_id: UserId) -> None: ...
    async def delete_all(self) -> int: ...
    async def find_by_email(self, email: str) -> UserLike: ...
