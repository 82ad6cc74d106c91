"""Custom exceptions for the transcoding engine."""

from __future__ import annotations


class FreeBidiError(Exception):
    """Base exception for all free-bidi errors."""
    pass


class UnrecognizedEncodingNameError(FreeBidiError):
    """Raised when a configured encoding name has no known profile."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unrecognized RTL encoding name '{name}'")


class EncodingFailure(FreeBidiError):
    """Raised when text cannot be written back in its legacy encoding."""


class UnmappableCodePointError(EncodingFailure):
    """Raised when text holds a code point the target code page cannot represent."""

    def __init__(
        self,
        message: str,
        *,
        encoding: str,
        document: "str | None" = None,
        character: "str | None" = None,
        position: "int | None" = None,
    ):
        self.encoding = encoding
        self.document = document
        self.character = character
        self.position = position
        parts = [message]
        loc = []
        if document:
            loc.append(f"document={document}")
        loc.append(f"encoding={encoding}")
        if character is not None:
            loc.append(f"character=U+{ord(character):04X}")
        if position is not None:
            loc.append(f"position={position}")
        parts.append(f"({', '.join(loc)})")
        super().__init__(" ".join(parts))


class ShadowPathError(FreeBidiError):
    """Raised when a path is expected to live inside a shadow directory but does not."""
    pass
