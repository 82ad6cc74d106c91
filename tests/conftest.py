import os

import pytest

from free_bidi.core.observers import DiagnosticObserver
from free_bidi.core.profiles import ISO_8859_8, WINDOWS_1256


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests that need no network or external services")


class RecordingObserver(DiagnosticObserver):
    """Collects diagnostics as (hook, details) tuples."""

    def __init__(self):
        self.events = []

    def on_encoding_fallback(self, configured_name, profile):
        self.events.append(("encoding_fallback", configured_name, profile.name))

    def on_decode_failure(self, document, profile, failure):
        self.events.append(("decode_failure", document, profile.name, failure))

    def on_undefined_bytes(self, document, profile, count):
        self.events.append(("undefined_bytes", document, profile.name, count))

    def on_encode_failure(self, document, profile, error):
        self.events.append(("encode_failure", document, profile.name, error))

    def on_marks_inserted(self, document, count):
        self.events.append(("marks_inserted", document, count))

    def names(self):
        return [event[0] for event in self.events]


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep FREEBIDI_* variables and stray .env files out of every test."""
    for key in list(os.environ):
        if key.startswith("FREEBIDI_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def diagnostics():
    return RecordingObserver()


@pytest.fixture
def hebrew():
    return ISO_8859_8


@pytest.fixture
def arabic():
    return WINDOWS_1256


@pytest.fixture
def cobol_bytes():
    # "       DISPLAY 'אבג' 'דהו'." in ISO-8859-8, CRLF line endings
    return (
        b"       IDENTIFICATION DIVISION.\r\n"
        b"       DISPLAY '\xe0\xe1\xe2' '\xe3\xe4\xe5'.\r\n"
        b"       STOP RUN.\r\n"
    )
