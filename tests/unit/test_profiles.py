import pytest

from free_bidi.core.profiles import (
    DEFAULT_PROFILE,
    DEFAULT_REGISTRY,
    HEBREW,
    ISO_8859_6,
    ISO_8859_8,
    WINDOWS_1255,
    EncodingProfile,
    ProfileRegistry,
    ScriptRange,
    script_run_pattern,
)
from free_bidi.utils.errors import UnrecognizedEncodingNameError


def test_script_range_rejects_inverted_bounds():
    with pytest.raises(ValueError):
        ScriptRange(0x05FF, 0x0590)


def test_script_range_membership_is_inclusive():
    assert "\u0590" in HEBREW
    assert "\u05ff" in HEBREW
    assert "\u0600" not in HEBREW


def test_profile_with_unknown_codec_fails_fast():
    with pytest.raises(LookupError):
        EncodingProfile("nope", "no-such-codec")


def test_default_profile_is_iso_8859_8():
    assert DEFAULT_PROFILE is ISO_8859_8
    assert DEFAULT_REGISTRY.default is ISO_8859_8


def test_registry_resolves_codec_aliases():
    assert DEFAULT_REGISTRY.get("ISO-8859-8") is ISO_8859_8
    assert DEFAULT_REGISTRY.get("iso8859_8") is ISO_8859_8
    assert DEFAULT_REGISTRY.get("hebrew") is ISO_8859_8
    assert DEFAULT_REGISTRY.get("  windows-1255 ") is WINDOWS_1255
    assert DEFAULT_REGISTRY.get("arabic") is ISO_8859_6


def test_registry_unknown_and_blank_names():
    assert DEFAULT_REGISTRY.get(None) is None
    assert DEFAULT_REGISTRY.get("   ") is None
    # A real codec that is not a known RTL profile
    assert DEFAULT_REGISTRY.get("utf-8") is None
    assert "utf-8" not in DEFAULT_REGISTRY
    assert "cp862" in DEFAULT_REGISTRY


def test_registry_require_raises_for_unknown_name():
    with pytest.raises(UnrecognizedEncodingNameError) as exc:
        DEFAULT_REGISTRY.require("klingon-1")
    assert exc.value.name == "klingon-1"


def test_custom_registry_adds_its_default():
    registry = ProfileRegistry([WINDOWS_1255], default=ISO_8859_8)
    assert len(registry) == 2
    assert registry.names() == ["windows-1255", "ISO-8859-8"]


def test_hebrew_and_arabic_ranges_share_one_pattern():
    pattern = ISO_8859_8.pattern
    match = pattern.search("x אبב y")
    assert match.group() == "אبב"
    assert script_run_pattern(ISO_8859_8.script_ranges) is pattern


def test_contains_script_ignores_latin_and_digits():
    assert not ISO_8859_8.contains_script("MOVE 12 TO X.")
    assert ISO_8859_8.contains_script("MOVE 'ש' TO X.")
