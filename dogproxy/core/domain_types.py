"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the integer primary key — never use bare int for user identity in services
    - BreedCatalog maps breed name -> ordered sub-breed names
    - All valid upstream states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: compare directly against decoded JSON strings
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Value Types ─────────────────────────────────────────────────


BreedCatalog = dict[str, list[str]]


# ─── Enums ───────────────────────────────────────────────────────

class EnvelopeStatus(str, Enum):
    """Values of the upstream envelope `status` field."""
    SUCCESS = "success"
    ERROR = "error"


class UpstreamFailure(str, Enum):
    """Why an upstream call failed — carried on UpstreamError.failure_type."""
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_STATUS = "http_status"
    BAD_STATUS = "bad_status"
    DECODE_ERROR = "decode_error"
