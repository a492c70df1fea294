#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for the document session model."""

import logging
import math
from pathlib import Path
from unittest.mock import Mock

import pytest

from mdpreview.exceptions import ValidationError
from mdpreview.live.session import DocumentSession, DocumentStats
from mdpreview.options import SessionOptions
from mdpreview.parsers import markdown_to_ast
from mdpreview.renderers import build
from mdpreview.theme import Theme


@pytest.mark.unit
class TestDocumentStats:
    """Test character and word counting."""

    @pytest.mark.parametrize(
        "text,words",
        [
            ("", 0),
            ("   \n\t ", 0),
            ("one", 1),
            ("one two", 2),
            ("Hello  world\n\tagain\r\nend", 4),
            ("# Title\n\n- [ ] task", 6),
        ],
    )
    def test_word_counts(self, text: str, words: int) -> None:
        """Test words are runs separated by spaces, tabs and line breaks."""
        stats = DocumentStats.from_text(text)
        assert stats.words == words
        assert stats.characters == len(text)


@pytest.mark.unit
class TestSessionState:
    """Test text, dirty state and document identity."""

    def test_defaults(self) -> None:
        """Test a new empty session."""
        session = DocumentSession()
        assert session.title == "Untitled"
        assert session.is_new_document
        assert not session.is_dirty
        assert session.render_mode == "edit"
        assert session.visual_tree == ()
        assert session.render_count == 0

    def test_title_from_file_name(self) -> None:
        """Test the title defaults to the file name."""
        session = DocumentSession("x", file_path="docs/notes.md")
        assert session.title == "notes.md"
        assert session.file_path == Path("docs/notes.md")
        assert not session.is_new_document

    def test_dirty_tracks_saved_text(self) -> None:
        """Test dirty means the text differs from the saved text, not that it was edited."""
        session = DocumentSession("saved")
        session.set_text("edited")
        assert session.is_dirty
        session.set_text("saved")
        assert not session.is_dirty

    def test_apply_document(self) -> None:
        """Test loading a document resets the saved state."""
        session = DocumentSession("old")
        session.set_text("unsaved change")
        session.apply_document("# New", file_path="new.md")

        assert session.source_text == "# New"
        assert session.saved_text == "# New"
        assert not session.is_dirty
        assert session.title == "new.md"

    def test_mark_saved_with_new_path(self) -> None:
        """Test save-as updates the path and title."""
        session = DocumentSession()
        session.set_text("draft")
        session.mark_saved("final.md")

        assert not session.is_dirty
        assert session.title == "final.md"
        assert not session.is_new_document

    def test_stats_property(self) -> None:
        """Test stats follow the editor text."""
        session = DocumentSession("a b c")
        assert session.stats == DocumentStats(characters=5, words=3)

    def test_preview_max_width(self) -> None:
        """Test read mode uses the width preset and edit mode is unbounded."""
        session = DocumentSession(options=SessionOptions(read_width="75"))
        assert math.isinf(session.preview_max_width)
        session.set_render_mode("read")
        assert session.preview_max_width == 675.0

    def test_initial_mode_from_options(self) -> None:
        """Test the session starts in the configured mode."""
        assert DocumentSession(options=SessionOptions(render_mode="read")).render_mode == "read"

    def test_invalid_mode(self) -> None:
        """Test unknown render modes are rejected."""
        with pytest.raises(ValidationError):
            DocumentSession().set_render_mode("print")  # type: ignore[arg-type]

    def test_invalid_theme(self) -> None:
        """Test unknown theme names are rejected."""
        with pytest.raises(ValidationError):
            DocumentSession(theme="Nonexistent")
        with pytest.raises(ValidationError):
            DocumentSession().set_theme("Nonexistent")


@pytest.mark.unit
class TestSchedulerRouting:
    """Test that session changes are routed to a bound scheduler."""

    def test_set_text_notifies(self) -> None:
        """Test edits notify the scheduler and no-op edits do not."""
        scheduler = Mock()
        session = DocumentSession("a")
        session.bind_scheduler(scheduler)

        session.set_text("a")
        scheduler.notify_text_changed.assert_not_called()
        session.set_text("ab")
        scheduler.notify_text_changed.assert_called_once()
        scheduler.flush.assert_not_called()

    def test_apply_document_renders_immediately(self) -> None:
        """Test loading a document flushes a render."""
        scheduler = Mock()
        session = DocumentSession()
        session.bind_scheduler(scheduler)

        session.apply_document("# Loaded")
        scheduler.notify_text_changed.assert_called_once()
        scheduler.flush.assert_called_once()

    def test_mode_and_theme_rerender(self) -> None:
        """Test switching mode or theme invalidates and re-renders, unchanged values do nothing."""
        scheduler = Mock()
        session = DocumentSession()
        session.bind_scheduler(scheduler)

        session.set_render_mode("edit")
        session.set_theme(False)
        scheduler.invalidate.assert_not_called()

        session.set_render_mode("read")
        session.set_theme(Theme.MIDNIGHT_PURPLE)
        assert scheduler.invalidate.call_count == 2
        assert scheduler.flush.call_count == 2
        assert session.theme == Theme.MIDNIGHT_PURPLE

    def test_toggle_checkbox_edits_source(self) -> None:
        """Test a checkbox click rewrites the source and schedules a render."""
        scheduler = Mock()
        session = DocumentSession("- [ ] a\n- [ ] b")
        session.bind_scheduler(scheduler)
        session.publish(build(markdown_to_ast(session.source_text)))

        second = session.checkboxes[1]
        updated = session.toggle_checkbox(second)

        # First unchecked marker flips, whichever box was clicked
        assert updated == "- [x] a\n- [ ] b"
        assert session.source_text == updated
        assert session.is_dirty
        scheduler.notify_text_changed.assert_called_once()


@pytest.mark.unit
class TestPublishing:
    """Test visual tree publication and listeners."""

    def test_publish_replaces_tree(self) -> None:
        """Test publish swaps the tree and counts renders."""
        session = DocumentSession()
        tree = build(markdown_to_ast("# A\n\ntext"))
        session.publish(tree, "# A\n\ntext")

        assert session.visual_tree == tree
        assert session.render_count == 1
        assert session.rendered_text == "A\ntext\n"

    def test_listeners(self) -> None:
        """Test listeners receive each tree until unsubscribed."""
        session = DocumentSession()
        received = []
        unsubscribe = session.on_published(received.append)

        session.publish(())
        unsubscribe()
        session.publish(())
        assert received == [()]

    def test_failing_listener_logged(self, caplog) -> None:
        """Test a failing listener is logged and does not stop the others."""
        session = DocumentSession()
        received = []

        def broken(tree):
            raise RuntimeError("host widget disposed")

        session.on_published(broken)
        session.on_published(received.append)

        with caplog.at_level(logging.ERROR, logger="mdpreview.live.session"):
            session.publish(())

        assert received == [()]
        assert "host widget disposed" in caplog.text
