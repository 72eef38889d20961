"""Dog API Client — wraps httpx.AsyncClient with timeout, envelope decoding, and error mapping.

Invariants:
    - Every request is a GET to {base_url}{path} with Content-Type: application/json
    - Timeout (default 10s, total per call), connection errors, non-2xx, non-"success"
      status, undecodable bodies and malformed JSON all surface as UpstreamError (core/errors.py)
    - No retries: one attempt per inbound request
    - Image counts validated before any request is built
    - Callers only ever receive list[str] or BreedCatalog — never the raw envelope

Design Decisions:
    - DogApiConfig is frozen and built once from Settings: no global mutable client config
    - One AsyncClient per process (connection pooling); created and closed by the app lifespan
    - Unknown breed on the sub-breed endpoint (upstream 404) yields [] instead of an error
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from dogproxy.config import Settings
from dogproxy.core.domain_types import BreedCatalog, UpstreamFailure
from dogproxy.core.envelope import (
    Envelope, MAX_IMAGE_COUNT,
    decode_envelope, ensure_image_count, require_success, to_catalog, to_list,
)
from dogproxy.core.errors import ErrorContext, UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DogApiConfig:
    """Immutable upstream client configuration."""
    base_url: str = "https://dog.ceo/api"
    timeout_seconds: float = 10.0
    user_agent: str = "dogproxy-api/1.0"
    max_image_count: int = MAX_IMAGE_COUNT

    @classmethod
    def from_settings(cls, settings: Settings) -> "DogApiConfig":
        return cls(
            base_url=settings.dog_api_base_url,
            timeout_seconds=settings.dog_api_timeout_seconds,
            user_agent=settings.dog_api_user_agent,
            max_image_count=settings.max_image_count,
        )


class DogApiClient:
    """Typed access to the dog.ceo breed and image endpoints."""

    def __init__(self, config: DogApiConfig):
        self.config = config
        self.client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={
                "Content-Type": "application/json",
                "User-Agent": config.user_agent,
            },
            timeout=config.timeout_seconds,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    # ─── Breeds ──────────────────────────────────────────────────

    async def list_breeds(self) -> list[str]:
        """Breed names from /breeds/list/all. Order not guaranteed."""
        catalog = await self.get_catalog()
        return list(catalog.keys())

    async def get_catalog(self) -> BreedCatalog:
        """Full breed -> sub-breeds mapping."""
        path = "/breeds/list/all"
        envelope = await self._fetch(path)
        catalog = to_catalog(envelope.payload, path)
        self._log_success(path, len(catalog))
        return catalog

    async def list_sub_breeds(self, breed: str) -> list[str]:
        """Sub-breeds of one breed. Unknown breed -> []."""
        path = f"/breed/{_segment(breed)}/list"
        try:
            envelope = await self._fetch(path)
        except UpstreamError as e:
            if e.status_code == httpx.codes.NOT_FOUND:
                logger.info(
                    f"Unknown breed '{breed}', returning no sub-breeds",
                    extra={"breed": breed, "upstream_path": path},
                )
                return []
            raise
        return self._collect(path, envelope)

    # ─── Images ──────────────────────────────────────────────────

    async def random_images(self, count: int = 0) -> list[str]:
        """Random images across all breeds. count == 0 -> exactly one URL."""
        ensure_image_count(count, self.config.max_image_count)
        path = "/breeds/image/random"
        if count > 0:
            path = f"{path}/{count}"
        return self._collect(path, await self._fetch(path))

    async def breed_images(self, breed: str) -> list[str]:
        """Every image URL for a breed."""
        path = f"/breed/{_segment(breed)}/images"
        return self._collect(path, await self._fetch(path))

    async def random_breed_images(self, breed: str, count: int = 0) -> list[str]:
        """Random images of one breed. count == 0 -> exactly one URL."""
        ensure_image_count(count, self.config.max_image_count)
        path = f"/breed/{_segment(breed)}/images/random"
        if count > 0:
            path = f"{path}/{count}"
        return self._collect(path, await self._fetch(path))

    # ─── Transport ───────────────────────────────────────────────

    async def _fetch(self, path: str) -> Envelope:
        """GET path, decode the envelope, and require status == success.

        timeout_seconds caps the whole call (connect, headers and body),
        not just each httpx phase.
        """
        started = time.perf_counter()
        try:
            async with asyncio.timeout(self.config.timeout_seconds):
                response = await self.client.get(path)
                response.raise_for_status()
                body = response.json()
        except (httpx.TimeoutException, TimeoutError):
            raise self._failure(
                path, started, UpstreamFailure.TIMEOUT,
                f"no response within {self.config.timeout_seconds}s",
            )
        except httpx.HTTPStatusError as e:
            raise self._failure(
                path, started, UpstreamFailure.HTTP_STATUS,
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code, level=logging.WARNING,
            )
        except httpx.DecodingError as e:
            logger.debug(f"Content decoding failed: {e}")
            raise self._failure(
                path, started, UpstreamFailure.DECODE_ERROR,
                "response body could not be decoded",
            )
        except httpx.TransportError as e:
            logger.debug(f"Transport failure: {e!r}")
            raise self._failure(
                path, started, UpstreamFailure.CONNECTION_ERROR, "connection failed",
            )
        except ValueError:
            raise self._failure(
                path, started, UpstreamFailure.DECODE_ERROR,
                "response body is not valid JSON",
            )
        return require_success(decode_envelope(body, path), path)

    def _failure(
        self,
        path: str,
        started: float,
        failure: UpstreamFailure,
        message: str,
        status_code: int | None = None,
        level: int = logging.ERROR,
    ) -> UpstreamError:
        logger.log(
            level,
            f"Dog API call failed: {message}",
            extra={
                "upstream_path": path,
                "failure_type": failure.value,
                "status_code": status_code,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return UpstreamError(
            message, failure.value, status_code=status_code,
            context=ErrorContext(upstream_path=path),
        )

    def _collect(self, path: str, envelope: Envelope) -> list[str]:
        items = to_list(envelope.payload)
        self._log_success(path, len(items))
        return items

    def _log_success(self, path: str, result_count: int) -> None:
        logger.info(
            "Dog API success",
            extra={"upstream_path": path, "result_count": result_count},
        )


def _segment(value: str) -> str:
    """Encode a user-supplied value as a single path segment."""
    return quote(value, safe="")


# Singleton (initialized on startup)
dog_client: DogApiClient | None = None


def init_dog_client(config: DogApiConfig) -> DogApiClient:
    global dog_client
    dog_client = DogApiClient(config)
    return dog_client


async def close_dog_client() -> None:
    global dog_client
    if dog_client:
        await dog_client.aclose()
        dog_client = None


def get_dog_client() -> DogApiClient:
    """FastAPI dependency for the upstream client."""
    if not dog_client:
        raise RuntimeError("Dog API client not initialized")
    return dog_client
