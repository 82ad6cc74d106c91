"""
free-bidi: edit legacy single-byte Hebrew/Arabic source files as marked UTF-8.

Open, edit and save in three calls:
    result = forward_transform(raw_bytes, resolve_encoding("ISO-8859-8"))
    marks = mark_inserted_run(buffer, EditDelta(insertion_point=0, inserted_text="שלום"), profile)
    raw_bytes = reverse_transform(buffer, profile)
"""

__version__ = "0.4.0"

from .core.profiles import DEFAULT_PROFILE, DEFAULT_REGISTRY, EncodingProfile, ProfileRegistry
from .core.resolver import (
    DecodeFailure,
    DecodeResult,
    decode_with_candidates,
    encode_text,
    resolve_candidates,
    resolve_encoding,
    try_decode,
)
from .core.session import DocumentSession, DocumentState
from .core.transcoder import (
    LRO,
    EditDelta,
    MarkEdit,
    MarkInsertion,
    MarkRemoval,
    apply_insertions,
    find_script_runs,
    forward_transform,
    mark_directional_runs,
    mark_inserted_run,
    normalize_marks,
    reverse_transform,
    strip_directional_marks,
)
from .utils.errors import (
    EncodingFailure,
    FreeBidiError,
    UnmappableCodePointError,
    UnrecognizedEncodingNameError,
)

__all__ = [
    "DEFAULT_PROFILE",
    "DEFAULT_REGISTRY",
    "EncodingProfile",
    "ProfileRegistry",
    "DecodeFailure",
    "DecodeResult",
    "decode_with_candidates",
    "encode_text",
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
    "apply_insertions",
    "find_script_runs",
    "forward_transform",
    "mark_directional_runs",
    "mark_inserted_run",
    "normalize_marks",
    "reverse_transform",
    "strip_directional_marks",
    "EncodingFailure",
    "FreeBidiError",
    "UnmappableCodePointError",
    "UnrecognizedEncodingNameError",
]
