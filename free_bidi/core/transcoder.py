"""Reversible bidi transform between legacy bytes and LRO-marked Unicode text.

Forward: bytes -> decoded text with one LRO (U+202D) before every maximal
run of RTL script. Reverse: strip every LRO and re-encode in the original
code page. Both directions are pure functions of their arguments.

`find_script_runs` is the single run detector. The full-buffer transform runs
it over the whole text and the edit-time transform runs it over the span
touched by an insertion, so both give one mark per run.
"""

from __future__ import annotations

import dataclasses
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from ..utils.errors import UnmappableCodePointError
from .observers import DiagnosticObserver, resolve_observer
from .profiles import EncodingProfile
from .resolver import DecodeResult, decode_with_candidates, encode_text

LRO = "\u202d"

Span = Tuple[int, int]


class EditDelta(BaseModel):
    """A single buffer change reported by the editor.

    `removed_length` code points at `insertion_point` were replaced by `inserted_text`.
    """

    model_config = ConfigDict(frozen=True)

    insertion_point: int = Field(ge=0)
    inserted_text: str
    removed_length: int = Field(default=0, ge=0)


class MarkInsertion(BaseModel):
    """An LRO mark to insert at `offset` in the live buffer."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0)
    mark: str = LRO


class MarkRemoval(BaseModel):
    """A stale LRO at `offset` that now sits inside a run and must go."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0)


MarkEdit = Union[MarkInsertion, MarkRemoval]


def find_script_runs(
    text: str,
    profile: EncodingProfile,
    start: int = 0,
    end: Optional[int] = None,
) -> List[Span]:
    """Return ``(start, end)`` of each maximal script run inside ``text[start:end]``."""
    if end is None:
        end = len(text)
    return [m.span() for m in profile.pattern.finditer(text, start, end)]


def _is_marked_at(text: str, offset: int) -> bool:
    return offset > 0 and text[offset - 1] == LRO


def mark_directional_runs(text: str, profile: EncodingProfile) -> str:
    """Insert one LRO before every RTL run that does not already have one."""
    parts: List[str] = []
    last = 0
    for start, _ in find_script_runs(text, profile):
        if _is_marked_at(text, start):
            continue
        parts.append(text[last:start])
        parts.append(LRO)
        last = start
    if not parts:
        return text
    parts.append(text[last:])
    return "".join(parts)


def strip_directional_marks(text: str) -> str:
    """Remove every LRO mark."""
    return text.replace(LRO, "")


def normalize_marks(text: str, profile: EncodingProfile) -> str:
    """Rebuild the marks from scratch: exactly one LRO before each run, nowhere else."""
    return mark_directional_runs(strip_directional_marks(text), profile)


def is_marked_text(text: str, profile: EncodingProfile) -> bool:
    """True if `text` carries exactly the marks a fresh forward transform would give it."""
    return text == normalize_marks(text, profile)


def mark_inserted_run(
    existing_text: str,
    delta: EditDelta,
    profile: EncodingProfile,
) -> List[MarkEdit]:
    """
    Compute the LRO marks needed after an edit.

    Args:
        existing_text: Live buffer with the edit already applied
        delta: The edit; its text must sit at ``delta.insertion_point``
        profile: Profile whose script ranges define RTL runs

    Returns:
        One insertion per unmarked run touched by the inserted text, plus a
        removal for every old LRO the edit left inside a run (typing right
        before a marked run moves its mark to the new start). Offsets refer
        to `existing_text` before any of the returned edits are applied.
    """
    inserted = delta.inserted_text
    start = delta.insertion_point
    stop = start + len(inserted)
    if existing_text[start:stop] != inserted:
        raise ValueError(
            f"Inserted text not found at offset {start} of the buffer"
        )
    if not profile.contains_script(inserted):
        return []

    def joins(index: int) -> bool:
        # A script char, or an LRO squeezed between two script chars
        char = existing_text[index]
        if profile.is_script_char(char):
            return True
        return (
            char == LRO
            and 0 < index < len(existing_text) - 1
            and profile.is_script_char(existing_text[index - 1])
            and profile.is_script_char(existing_text[index + 1])
        )

    # Runs that continue across the edges of the fragment are part of the same run
    if profile.is_script_char(inserted[0]) or inserted[0] == LRO:
        while start > 0 and joins(start - 1):
            start -= 1
    if profile.is_script_char(inserted[-1]) or inserted[-1] == LRO:
        while stop < len(existing_text) and joins(stop):
            stop += 1

    edits: List[MarkEdit] = []
    previous_end = None
    for run_start, run_end in find_script_runs(existing_text, profile, start, stop):
        gap = existing_text[previous_end:run_start] if previous_end is not None else None
        if gap and gap == LRO * len(gap):
            # Only marks between this run and the last one: they form one run
            edits.extend(MarkRemoval(offset=i) for i in range(previous_end, run_start))
        elif not _is_marked_at(existing_text, run_start):
            edits.append(MarkInsertion(offset=run_start))
        previous_end = run_end
    return edits


def apply_insertions(text: str, edits: Iterable[MarkEdit]) -> str:
    """Apply mark insertions and removals computed against `text`."""
    # Highest offset first; at equal offsets a removal goes before an insertion
    ordered = sorted(
        edits, key=lambda e: (e.offset, isinstance(e, MarkRemoval)), reverse=True
    )
    for edit in ordered:
        if isinstance(edit, MarkRemoval):
            if text[edit.offset:edit.offset + 1] != LRO:
                raise ValueError(f"No direction mark at offset {edit.offset} to remove")
            text = text[:edit.offset] + text[edit.offset + 1:]
            continue
        if edit.offset > len(text):
            raise ValueError(f"Insertion offset {edit.offset} is past the end of the buffer")
        text = text[:edit.offset] + edit.mark + text[edit.offset:]
    return text


def forward_transform(
    data: bytes,
    profile: Union[EncodingProfile, Sequence[EncodingProfile]],
    *,
    document: Optional[str] = None,
    diagnostics: Optional[DiagnosticObserver] = None,
) -> DecodeResult:
    """Decode `data` and mark its RTL runs.

    `profile` may be a single profile or an ordered list of candidates. A
    failed result carries no text and the caller should leave the file alone.
    """
    candidates = [profile] if isinstance(profile, EncodingProfile) else list(profile)
    result = decode_with_candidates(
        data, candidates, document=document, diagnostics=diagnostics
    )
    if not result.ok:
        return result
    return dataclasses.replace(result, text=mark_directional_runs(result.text, result.profile))


def reverse_transform(
    text: str,
    profile: EncodingProfile,
    *,
    document: Optional[str] = None,
    diagnostics: Optional[DiagnosticObserver] = None,
) -> bytes:
    """Strip the marks from `text` and encode it back to the profile's code page.

    Raises:
        UnmappableCodePointError: if the text holds a character the code page lacks
    """
    try:
        return encode_text(strip_directional_marks(text), profile, document=document)
    except UnmappableCodePointError as e:
        resolve_observer(diagnostics).on_encode_failure(document, profile, e)
        raise
