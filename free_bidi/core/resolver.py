"""Codec resolution: choose the legacy encoding for a file and validate a decode.

Decoding a single-byte code page never raises. Bytes the code page leaves
undefined decode to U+FFFD and are counted, so the only failure is
`DecodeFailure.NO_SCRIPT_CHARACTERS`: the bytes decode, but none of the
profile's RTL script shows up, which means the file is out of scope.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from ..utils.errors import UnmappableCodePointError, UnrecognizedEncodingNameError
from .observers import DiagnosticObserver, resolve_observer
from .profiles import DEFAULT_REGISTRY, EncodingProfile, ProfileRegistry

logger = logging.getLogger(__name__)

REPLACEMENT_CHARACTER = "\ufffd"


class DecodeFailure(str, Enum):
    """Reasons a decode is rejected for a profile."""

    NO_SCRIPT_CHARACTERS = "no_script_characters"

    def describe(self) -> str:
        if self is DecodeFailure.NO_SCRIPT_CHARACTERS:
            return "No RTL language characters detected"
        return self.value


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of decoding a byte buffer under one profile."""

    profile: EncodingProfile
    text: Optional[str] = None
    failure: Optional[DecodeFailure] = None
    replaced_bytes: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None


def resolve_encoding(
    configured_name: Optional[str] = None,
    *,
    registry: ProfileRegistry = DEFAULT_REGISTRY,
    diagnostics: Optional[DiagnosticObserver] = None,
) -> EncodingProfile:
    """
    Pick the profile for a configured encoding name.

    Args:
        configured_name: Encoding name from configuration, may be empty
        registry: Known profiles and the default
        diagnostics: Receives a fallback notice for unknown names

    Returns:
        The named profile, or the registry default. Never raises.
    """
    if not configured_name or not configured_name.strip():
        return registry.default
    try:
        return registry.require(configured_name)
    except UnrecognizedEncodingNameError as e:
        resolve_observer(diagnostics).on_encoding_fallback(e.name, registry.default)
        return registry.default


def resolve_candidates(
    names: Iterable[Optional[str]],
    *,
    registry: ProfileRegistry = DEFAULT_REGISTRY,
    diagnostics: Optional[DiagnosticObserver] = None,
) -> List[EncodingProfile]:
    """Resolve an ordered list of encoding names into distinct candidate profiles.

    The first name always yields a profile (falling back to the default);
    later names are only kept when known.
    """
    observer = resolve_observer(diagnostics)
    names = list(names) or [None]
    candidates = [resolve_encoding(names[0], registry=registry, diagnostics=observer)]
    for name in names[1:]:
        if not name or not name.strip():
            continue
        profile = registry.get(name)
        if profile is None:
            observer.on_encoding_fallback(name, candidates[0])
            continue
        if profile not in candidates:
            candidates.append(profile)
    return candidates


def try_decode(data: bytes, profile: EncodingProfile) -> DecodeResult:
    """Decode `data` under `profile` and check that the profile's script is present."""
    text = bytes(data).decode(profile.codec, errors="replace")
    replaced = text.count(REPLACEMENT_CHARACTER)
    if not profile.contains_script(text):
        return DecodeResult(
            profile=profile,
            failure=DecodeFailure.NO_SCRIPT_CHARACTERS,
            replaced_bytes=replaced,
        )
    return DecodeResult(profile=profile, text=text, replaced_bytes=replaced)


def decode_with_candidates(
    data: bytes,
    profiles: Iterable[EncodingProfile],
    *,
    document: Optional[str] = None,
    diagnostics: Optional[DiagnosticObserver] = None,
) -> DecodeResult:
    """Try each profile in order and return the first successful decode.

    When every candidate fails, the last failure is returned.
    """
    observer = resolve_observer(diagnostics)
    result = None
    for profile in profiles:
        result = try_decode(data, profile)
        if result.ok:
            logger.debug(f"Decoded {document or '<buffer>'} as {profile.name}")
            if result.replaced_bytes:
                observer.on_undefined_bytes(document, profile, result.replaced_bytes)
            return result
        observer.on_decode_failure(document, profile, result.failure)
    if result is None:
        raise ValueError("At least one candidate profile is required")
    return result


def encode_text(
    text: str,
    profile: EncodingProfile,
    *,
    document: Optional[str] = None,
) -> bytes:
    """Encode `text` strictly in the profile's code page.

    Raises:
        UnmappableCodePointError: if any code point has no byte in the code page
    """
    try:
        return text.encode(profile.codec, errors="strict")
    except UnicodeEncodeError as e:
        raise UnmappableCodePointError(
            "Text contains a character that cannot be saved in the legacy encoding",
            encoding=profile.name,
            document=document,
            character=e.object[e.start],
            position=e.start,
        ) from e
