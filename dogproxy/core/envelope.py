"""Envelope Normalization — decodes dog.ceo `{message, status}` bodies into one list shape.

Invariants:
    - decode_envelope is PURE: no IO, raises UpstreamError(decode_error) on malformed bodies
    - The payload is classified exactly once, at decode time, into a tagged variant
    - to_list() is the only place the scalar/list duality is collapsed:
      Scalar -> [value], List -> values, Empty -> [], Mapping -> keys
    - ensure_image_count runs before any request is built

Design Decisions:
    - Frozen dataclasses as variants: callers match on type, never on the requested count
    - A non-"success" status is reported separately from shape errors (bad_status vs decode_error)
"""

from dataclasses import dataclass, field
from typing import Any, Union

from dogproxy.core.domain_types import BreedCatalog, EnvelopeStatus, UpstreamFailure
from dogproxy.core.errors import ErrorContext, ImageCountError, UpstreamError


MAX_IMAGE_COUNT: int = 50


@dataclass(frozen=True)
class ScalarPayload:
    """`message` held a single string (e.g. one random image URL)."""
    value: str


@dataclass(frozen=True)
class ListPayload:
    """`message` held an array of strings."""
    values: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class MappingPayload:
    """`message` held breed -> sub-breeds (only /breeds/list/all)."""
    entries: BreedCatalog = field(default_factory=dict)


@dataclass(frozen=True)
class EmptyPayload:
    """`message` was absent or null."""


Payload = Union[ScalarPayload, ListPayload, MappingPayload, EmptyPayload]


@dataclass(frozen=True)
class Envelope:
    status: str
    payload: Payload

    @property
    def is_success(self) -> bool:
        return self.status == EnvelopeStatus.SUCCESS.value


def decode_envelope(body: Any, upstream_path: str | None = None) -> Envelope:
    """Classify a decoded JSON body. Raises UpstreamError on shape errors."""
    if not isinstance(body, dict):
        raise _decode_error(
            f"expected JSON object, got {type(body).__name__}", upstream_path,
        )
    status = body.get("status")
    if not isinstance(status, str):
        raise _decode_error("envelope has no string 'status'", upstream_path)
    return Envelope(
        status=status,
        payload=classify_payload(body.get("message"), upstream_path),
    )


def classify_payload(message: Any, upstream_path: str | None = None) -> Payload:
    """Map a raw `message` value onto its payload variant."""
    if message is None:
        return EmptyPayload()
    if isinstance(message, str):
        return ScalarPayload(message)
    if isinstance(message, list):
        if not all(isinstance(v, str) for v in message):
            raise _decode_error("list payload contains non-string items", upstream_path)
        return ListPayload(list(message))
    if isinstance(message, dict):
        entries: BreedCatalog = {}
        for breed, subs in message.items():
            if not isinstance(subs, list) or not all(isinstance(s, str) for s in subs):
                raise _decode_error(
                    f"sub-breeds for '{breed}' are not a list of strings", upstream_path,
                )
            entries[breed] = list(subs)
        return MappingPayload(entries)
    raise _decode_error(
        f"unsupported message type {type(message).__name__}", upstream_path,
    )


def require_success(envelope: Envelope, upstream_path: str | None = None) -> Envelope:
    """Return the envelope unchanged, or raise if upstream reported a failure."""
    if not envelope.is_success:
        detail = (
            envelope.payload.value
            if isinstance(envelope.payload, ScalarPayload) else envelope.status
        )
        raise UpstreamError(
            f"upstream reported status '{envelope.status}': {detail}",
            UpstreamFailure.BAD_STATUS.value,
            context=ErrorContext(upstream_path=upstream_path),
        )
    return envelope


def to_list(payload: Payload) -> list[str]:
    """Collapse any payload variant into an ordered list of strings."""
    if isinstance(payload, ScalarPayload):
        return [payload.value]
    if isinstance(payload, ListPayload):
        return list(payload.values)
    if isinstance(payload, MappingPayload):
        return list(payload.entries.keys())
    return []


def to_catalog(payload: Payload, upstream_path: str | None = None) -> BreedCatalog:
    """Breed catalog view of a payload. Only MappingPayload (or empty) qualifies."""
    if isinstance(payload, MappingPayload):
        return {breed: list(subs) for breed, subs in payload.entries.items()}
    if isinstance(payload, EmptyPayload):
        return {}
    raise _decode_error("expected breed mapping payload", upstream_path)


def ensure_image_count(count: int, maximum: int = MAX_IMAGE_COUNT) -> int:
    """Reject counts outside 0..maximum. Returns count unchanged."""
    if count < 0 or count > maximum:
        raise ImageCountError(count, maximum)
    return count


def _decode_error(message: str, upstream_path: str | None) -> UpstreamError:
    return UpstreamError(
        message,
        UpstreamFailure.DECODE_ERROR.value,
        context=ErrorContext(upstream_path=upstream_path),
    )
