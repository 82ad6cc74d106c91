"""Encoding profiles: a legacy code page plus the RTL script it carries.

- `EncodingProfile`: codec name and the code-point ranges that count as RTL script
- `ProfileRegistry`: immutable lookup of known profiles by codec name or alias
"""

from __future__ import annotations

import codecs
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from ..utils.errors import UnrecognizedEncodingNameError


@dataclass(frozen=True)
class ScriptRange:
    """Inclusive code-point interval."""

    start: int
    end: int

    def __post_init__(self):
        if not 0 <= self.start <= self.end <= 0x10FFFF:
            raise ValueError(f"Invalid script range U+{self.start:04X}-U+{self.end:04X}")

    def __contains__(self, char: str) -> bool:
        return self.start <= ord(char) <= self.end


HEBREW = ScriptRange(0x0590, 0x05FF)
ARABIC = ScriptRange(0x0600, 0x06FF)
ARABIC_SUPPLEMENT = ScriptRange(0x0750, 0x077F)
ARABIC_EXTENDED_A = ScriptRange(0x08A0, 0x08FF)

RTL_SCRIPT_RANGES: Tuple[ScriptRange, ...] = (
    HEBREW,
    ARABIC,
    ARABIC_SUPPLEMENT,
    ARABIC_EXTENDED_A,
)


@lru_cache(maxsize=32)
def script_run_pattern(ranges: Tuple[ScriptRange, ...]) -> re.Pattern[str]:
    """Compile one character class covering the union of `ranges`, matching whole runs."""
    if not ranges:
        raise ValueError("At least one script range is required")
    body = "".join(
        f"{re.escape(chr(r.start))}-{re.escape(chr(r.end))}" for r in ranges
    )
    return re.compile(f"[{body}]+")


@dataclass(frozen=True)
class EncodingProfile:
    """A single-byte legacy encoding and the RTL script ranges expected in it."""

    name: str
    codec: str
    script_ranges: Tuple[ScriptRange, ...] = RTL_SCRIPT_RANGES

    def __post_init__(self):
        # Fails fast with LookupError for codecs Python does not ship
        codecs.lookup(self.codec)

    @property
    def pattern(self) -> re.Pattern[str]:
        return script_run_pattern(self.script_ranges)

    def is_script_char(self, char: str) -> bool:
        return any(char in r for r in self.script_ranges)

    def contains_script(self, text: str) -> bool:
        return self.pattern.search(text) is not None

    def __str__(self) -> str:
        return self.name


ISO_8859_8 = EncodingProfile("ISO-8859-8", "iso8859_8")
WINDOWS_1255 = EncodingProfile("windows-1255", "cp1255")
CP862 = EncodingProfile("cp862", "cp862")
ISO_8859_6 = EncodingProfile("ISO-8859-6", "iso8859_6")
WINDOWS_1256 = EncodingProfile("windows-1256", "cp1256")

BUILTIN_PROFILES: Tuple[EncodingProfile, ...] = (
    ISO_8859_8,
    WINDOWS_1255,
    CP862,
    ISO_8859_6,
    WINDOWS_1256,
)

DEFAULT_PROFILE = ISO_8859_8


def _codec_key(name: str) -> Optional[str]:
    try:
        return codecs.lookup(name.strip()).name
    except (LookupError, ValueError):
        # ValueError: names with an embedded NUL
        return None


class ProfileRegistry:
    """Known encoding profiles, keyed by canonical codec name.

    Lookups accept any alias Python's codec registry knows, so
    ``"ISO-8859-8"``, ``"iso8859_8"`` and ``"hebrew"`` all find the same profile.
    """

    def __init__(self, profiles: Iterable[EncodingProfile], default: EncodingProfile):
        self._profiles: Dict[str, EncodingProfile] = {}
        for profile in profiles:
            self._profiles.setdefault(codecs.lookup(profile.codec).name, profile)
        key = codecs.lookup(default.codec).name
        if key not in self._profiles:
            self._profiles[key] = default
        self._default = default

    @property
    def default(self) -> EncodingProfile:
        return self._default

    def get(self, name: Optional[str]) -> Optional[EncodingProfile]:
        """Return the profile for `name`, or None if it is blank or unknown."""
        if not name or not name.strip():
            return None
        key = _codec_key(name)
        if key is None:
            return None
        return self._profiles.get(key)

    def require(self, name: str) -> EncodingProfile:
        profile = self.get(name)
        if profile is None:
            raise UnrecognizedEncodingNameError(name)
        return profile

    def names(self) -> List[str]:
        return [p.name for p in self._profiles.values()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        return len(self._profiles)

    def __repr__(self) -> str:
        return f"ProfileRegistry(default='{self._default.name}', profiles={self.names()})"


DEFAULT_REGISTRY = ProfileRegistry(BUILTIN_PROFILES, DEFAULT_PROFILE)
