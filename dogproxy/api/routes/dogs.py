"""Dog Routes — thin proxy over the dog.ceo breed and image endpoints.

Invariants:
    - Every list endpoint answers 200 + list, or 204 when the list is empty
    - Sub-breeds always answer 200 (an unknown breed is an empty list, not an error)
    - count defaults to 0 and is validated by the client before any upstream call
    - Upstream failures propagate as UpstreamError -> 503 via the global handler

Design Decisions:
    - Routes never branch on count: the client returns list[str] for both shapes
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status

from dogproxy.core.repository_protocols import DogCatalog
from dogproxy.infrastructure.dog_api_client import get_dog_client

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dogs", tags=["dogs"])


def _list_or_no_content(items: list[str]):
    if not items:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return items


@router.get("/breeds", response_model=list[str])
async def list_breeds(dogs: DogCatalog = Depends(get_dog_client)):
    """All breed names."""
    return _list_or_no_content(await dogs.list_breeds())


@router.get("/{breed}/sub-breeds", response_model=list[str])
async def list_sub_breeds(
    breed: str, dogs: DogCatalog = Depends(get_dog_client),
):
    """Sub-breeds of a breed; [] for unknown breeds."""
    return await dogs.list_sub_breeds(breed)


@router.get("/random-image", response_model=list[str])
async def random_image(
    count: int = Query(0, description="0 for a single image, else up to 50"),
    dogs: DogCatalog = Depends(get_dog_client),
):
    """One or more random images across all breeds."""
    return _list_or_no_content(await dogs.random_images(count))


@router.get("/{breed}/images", response_model=list[str])
async def breed_images(
    breed: str, dogs: DogCatalog = Depends(get_dog_client),
):
    """Every image for a breed."""
    return _list_or_no_content(await dogs.breed_images(breed))


@router.get("/{breed}/images/random", response_model=list[str])
async def random_breed_images(
    breed: str,
    count: int = Query(0, description="0 for a single image, else up to 50"),
    dogs: DogCatalog = Depends(get_dog_client),
):
    """One or more random images of a breed."""
    return _list_or_no_content(await dogs.random_breed_images(breed, count))
