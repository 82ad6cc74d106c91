"""Core transcoding components."""

from .profiles import DEFAULT_PROFILE, DEFAULT_REGISTRY, EncodingProfile, ProfileRegistry
from .resolver import DecodeFailure, DecodeResult, resolve_candidates, resolve_encoding, try_decode
from .session import DocumentSession, DocumentState
from .transcoder import (
    LRO,
    EditDelta,
    MarkEdit,
    MarkInsertion,
    MarkRemoval,
    mark_directional_runs,
    mark_inserted_run,
    reverse_transform,
    forward_transform,
    strip_directional_marks,
)

__all__ = [
    "DEFAULT_PROFILE",
    "DEFAULT_REGISTRY",
    "EncodingProfile",
    "ProfileRegistry",
    "DecodeFailure",
    "DecodeResult",
    "resolve_candidates",
    "resolve_encoding",
    "try_decode",
    "DocumentSession",
    "DocumentState",
    "LRO",
    "EditDelta",
    "MarkEdit",
    "MarkInsertion",
    "MarkRemoval",
    "mark_directional_runs",
    "mark_inserted_run",
    "reverse_transform",
    "forward_transform",
    "strip_directional_marks",
]
