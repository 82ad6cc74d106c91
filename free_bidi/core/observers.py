"""Diagnostic hooks for fallbacks and failures inside the transcoding engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..utils.errors import UnmappableCodePointError
    from .profiles import EncodingProfile
    from .resolver import DecodeFailure


logger = logging.getLogger(__name__)


class DiagnosticObserver:
    """Base observer with no-op hooks for engine diagnostics."""

    def on_encoding_fallback(
        self,
        configured_name: str,
        profile: "EncodingProfile",
    ) -> None:
        """Called when a configured encoding name is unknown and a default is used instead."""

    def on_decode_failure(
        self,
        document: Optional[str],
        profile: "EncodingProfile",
        failure: "DecodeFailure",
    ) -> None:
        """Called when bytes decode but fail validation for a profile."""

    def on_undefined_bytes(
        self,
        document: Optional[str],
        profile: "EncodingProfile",
        count: int,
    ) -> None:
        """Called when bytes undefined in the code page were replaced during decoding."""

    def on_encode_failure(
        self,
        document: Optional[str],
        profile: "EncodingProfile",
        error: "UnmappableCodePointError",
    ) -> None:
        """Called before an encode failure propagates to the caller."""

    def on_marks_inserted(
        self,
        document: Optional[str],
        count: int,
    ) -> None:
        """Called when an incremental edit received direction marks."""


class NullDiagnosticObserver(DiagnosticObserver):
    """Observer that ignores all notifications."""

    pass


class LoggingDiagnosticObserver(DiagnosticObserver):
    """Writes one human-readable log line per diagnostic."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def on_encoding_fallback(self, configured_name, profile):
        self.log.warning(
            f"Invalid RTL encoding value '{configured_name}', falling back to {profile.name}"
        )

    def on_decode_failure(self, document, profile, failure):
        self.log.info(
            f"Decoding failed for {document or '<buffer>'} using {profile.name}: {failure.describe()}"
        )

    def on_undefined_bytes(self, document, profile, count):
        self.log.warning(
            f"{count} byte(s) undefined in {profile.name} were replaced in {document or '<buffer>'}"
        )

    def on_encode_failure(self, document, profile, error):
        self.log.error(f"Error saving {document or '<buffer>'} as {profile.name}: {error}")

    def on_marks_inserted(self, document, count):
        self.log.debug(f"Inserted {count} LRO mark(s) in {document or '<buffer>'}")


def resolve_observer(diagnostics: Optional[DiagnosticObserver]) -> DiagnosticObserver:
    """Return `diagnostics`, or a logging observer when none is given."""
    if diagnostics is None:
        return LoggingDiagnosticObserver()
    return diagnostics
