"""Unit tests for the DocumentSession state machine."""

import pytest

from free_bidi.core.profiles import ISO_8859_8
from free_bidi.core.resolver import DecodeFailure
from free_bidi.core.session import DocumentSession, DocumentState
from free_bidi.core.transcoder import LRO, EditDelta, MarkInsertion, MarkRemoval, is_marked_text
from free_bidi.utils.errors import UnmappableCodePointError


@pytest.fixture
def session(diagnostics):
    return DocumentSession("PROG.cob", ISO_8859_8, diagnostics=diagnostics)


@pytest.mark.unit
class TestOpen:
    """Test cases for opening a document."""

    def test_new_session_is_unmarked(self, session):
        """Test the initial state."""
        assert session.state is DocumentState.UNMARKED
        assert session.text == ""
        assert "unmarked" in repr(session)

    def test_open_marks_document(self, session, cobol_bytes):
        """Test that opening RTL bytes gives a canonical marked buffer."""
        result = session.open(cobol_bytes)

        assert result.ok
        assert session.state is DocumentState.MARKED
        assert session.text == result.text
        assert is_marked_text(session.text, ISO_8859_8)

    def test_open_without_script_stays_unmarked(self, session, diagnostics):
        """Test that bytes without RTL text are rejected."""
        result = session.open(b"       STOP RUN.\n")

        assert result.failure is DecodeFailure.NO_SCRIPT_CHARACTERS
        assert session.state is DocumentState.UNMARKED
        assert session.text == ""
        assert diagnostics.names() == ["decode_failure"]

    def test_failed_reopen_clears_previous_buffer(self, session, cobol_bytes):
        """Test that a failed open does not keep text from an earlier open."""
        session.open(cobol_bytes)
        assert session.state is DocumentState.MARKED

        result = session.open(b"       STOP RUN.\n")

        assert not result.ok
        assert session.state is DocumentState.UNMARKED
        assert session.text == ""

    def test_open_twice_is_deterministic(self, session, cobol_bytes):
        """Test that reopening the same bytes gives the same buffer."""
        session.open(cobol_bytes)
        first = session.text
        session.open(cobol_bytes)
        assert session.text == first


@pytest.mark.unit
class TestEditAndSave:
    """Test cases for edits and saving."""

    def test_save_round_trips_bytes_and_unmarks(self, session, cobol_bytes):
        """Test that saving an unedited buffer gives back the original bytes."""
        session.open(cobol_bytes)

        assert session.save() == cobol_bytes
        assert session.state is DocumentState.UNMARKED
        # Saving again yields the same bytes
        assert session.save() == cobol_bytes

    def test_edit_with_rtl_text_marks_and_saves(self, session, cobol_bytes, diagnostics):
        """Test that inserted RTL text is marked and encoded on save."""
        session.open(cobol_bytes)
        session.save()
        point = session.text.index("STOP")

        edits = session.apply_edit(EditDelta(insertion_point=point, inserted_text="שלום "))

        assert len(edits) == 1
        assert session.state is DocumentState.MARKED
        assert f"{LRO}שלום STOP RUN." in session.text
        assert ("marks_inserted", "PROG.cob", 1) in diagnostics.events
        assert session.save().endswith(b"\xf9\xec\xe5\xed STOP RUN.\r\n")

    def test_typing_before_marked_run_moves_the_mark(self, session):
        """Test that the buffer stays canonical when a run grows at its start."""
        session.open(b"MOVE '\xe1\xe2' TO X.")
        point = session.text.index(LRO)

        edits = session.apply_edit(EditDelta(insertion_point=point, inserted_text="א"))

        assert edits == [MarkInsertion(offset=point), MarkRemoval(offset=point + 1)]
        assert session.text == f"MOVE '{LRO}אבג' TO X."
        assert is_marked_text(session.text, ISO_8859_8)
        assert session.save() == b"MOVE '\xe0\xe1\xe2' TO X."

    def test_edit_without_rtl_text_keeps_state(self, session, cobol_bytes):
        """Test that a Latin edit adds no marks and keeps the state."""
        session.open(cobol_bytes)
        session.save()

        assert session.apply_edit(EditDelta(insertion_point=0, inserted_text="*")) == []
        assert session.state is DocumentState.UNMARKED

    def test_replacing_text(self, session):
        """Test edits that replace text, including one outside the buffer."""
        session.open(b"MOVE '\xe0\xe1' TO X.")
        point = session.text.index("X.")

        session.apply_edit(EditDelta(insertion_point=point, inserted_text="Y", removed_length=1))
        assert session.text.endswith("TO Y.")

        with pytest.raises(ValueError):
            session.apply_edit(EditDelta(insertion_point=point, inserted_text="", removed_length=10))

    def test_failed_save_leaves_session_untouched(self, session, cobol_bytes, diagnostics):
        """Test that an unmappable character blocks the save and keeps the buffer."""
        session.open(cobol_bytes)
        session.apply_edit(EditDelta(insertion_point=0, inserted_text="€"))
        text = session.text

        with pytest.raises(UnmappableCodePointError) as exc:
            session.save()

        assert exc.value.document == "PROG.cob"
        assert session.state is DocumentState.MARKED
        assert session.text == text
        assert "encode_failure" in diagnostics.names()
