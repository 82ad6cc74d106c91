"""Per-document state for an open shadow buffer."""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from .observers import DiagnosticObserver, resolve_observer
from .profiles import EncodingProfile
from .resolver import DecodeResult
from .transcoder import (
    EditDelta,
    MarkEdit,
    MarkInsertion,
    apply_insertions,
    forward_transform,
    mark_inserted_run,
    reverse_transform,
)

logger = logging.getLogger(__name__)


class DocumentState(str, Enum):
    """Whether the buffer currently carries direction marks from the engine."""

    UNMARKED = "unmarked"
    MARKED = "marked"


class DocumentSession:
    """Drives one document through open, edit and save.

    The session owns the buffer text and applies the engine's results to it;
    the engine functions themselves stay pure. Callers must serialize edits.
    """

    def __init__(
        self,
        document: str,
        profile: EncodingProfile,
        diagnostics: Optional[DiagnosticObserver] = None,
    ):
        self.document = document
        self.profile = profile
        self.diagnostics = resolve_observer(diagnostics)
        self.state = DocumentState.UNMARKED
        self.text = ""

    def open(self, data: bytes) -> DecodeResult:
        """Forward-transform the original bytes into the buffer.

        Bytes without RTL text leave the session empty and unmarked, whatever
        it held before.
        """
        result = forward_transform(
            data, self.profile, document=self.document, diagnostics=self.diagnostics
        )
        if result.ok:
            self.text = result.text
            self.state = DocumentState.MARKED
        else:
            self.text = ""
            self.state = DocumentState.UNMARKED
        return result

    def apply_edit(self, delta: EditDelta) -> List[MarkEdit]:
        """Splice `delta` into the buffer, then add marks for any RTL text it brought in."""
        point = delta.insertion_point
        if point + delta.removed_length > len(self.text):
            raise ValueError(
                f"Edit at {point} removing {delta.removed_length} is outside the buffer "
                f"of length {len(self.text)}"
            )
        text = self.text[:point] + delta.inserted_text + self.text[point + delta.removed_length:]
        edits = mark_inserted_run(text, delta, self.profile)
        self.text = apply_insertions(text, edits)
        inserted = sum(1 for edit in edits if isinstance(edit, MarkInsertion))
        if inserted:
            self.state = DocumentState.MARKED
            self.diagnostics.on_marks_inserted(self.document, inserted)
        return edits

    def save(self) -> bytes:
        """Reverse-transform the buffer; the buffer itself keeps its marks."""
        data = reverse_transform(
            self.text, self.profile, document=self.document, diagnostics=self.diagnostics
        )
        self.state = DocumentState.UNMARKED
        logger.debug(f"Prepared {len(data)} byte(s) for {self.document} ({self.profile.name})")
        return data

    def __repr__(self) -> str:
        return f"DocumentSession(document='{self.document}', state={self.state.value})"
