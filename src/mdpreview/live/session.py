#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdpreview/live/session.py
"""Document session model and live preview wiring.

``DocumentSession`` is the host-facing state of one open document: the text
being edited, the last saved text, render mode and theme, and the most
recently published visual tree. ``LivePreview`` connects a session to the
markdown parser, the preview renderer, a ``RenderScheduler`` and an optional
``ScrollSynchronizer``.

Examples
--------
    >>> preview = LivePreview(DocumentSession("# Hello"))
    >>> preview.start()
    True
    >>> preview.session.visual_tree[0].role
    'heading'

"""

from __future__ import annotations

import logging
import re
import threading
import time
from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union

from mdpreview.constants import RenderModeType
from mdpreview.exceptions import ValidationError
from mdpreview.highlighting import CodeTokenizer
from mdpreview.live.cancellation import CancellationToken
from mdpreview.live.scheduler import RenderScheduler, TimerFactory
from mdpreview.live.scroll import DeferFunction, ExtentProvider, ScrollApplier, ScrollSynchronizer
from mdpreview.options.preview import PreviewOptions
from mdpreview.options.session import SessionOptions
from mdpreview.parsers.base import BaseParser
from mdpreview.parsers.markdown import MarkdownParser
from mdpreview.renderers.preview import build
from mdpreview.tasks import toggle_checkbox
from mdpreview.theme import Palette, ThemeLike, resolve_palette
from mdpreview.visual.nodes import InteractiveCheckbox, VisualNode, find_checkboxes
from mdpreview.visual.text import extract_rendered_text

logger = logging.getLogger(__name__)

_WORD_SEPARATORS = re.compile(r"[ \t\r\n]+")
_RENDER_MODES = ("edit", "read")

PublishListener = Callable[[tuple[VisualNode, ...]], None]


@dataclass(frozen=True)
class DocumentStats:
    """Character and word counts of the source text.

    Words are runs of characters separated by spaces, tabs or line breaks.
    """

    characters: int
    words: int

    @classmethod
    def from_text(cls, text: str) -> DocumentStats:
        """Compute the counts for ``text``."""
        words = len([word for word in _WORD_SEPARATORS.split(text) if word]) if text.strip() else 0
        return cls(characters=len(text), words=words)


class DocumentSession:
    """State of one document open in the editor.

    Parameters
    ----------
    text : str, default ""
        Initial source text; also taken as the saved text
    title : str, optional
        Window/tab title. Defaults to the file name, or "Untitled".
    file_path : str or Path, optional
        Location of the document on disk, if it has one
    theme : bool, Theme, str or Palette, default False
        Initial theme
    render_mode : {"edit", "read"}, optional
        Initial mode; defaults to ``options.render_mode``
    options : SessionOptions, optional
        Session options

    Notes
    -----
    Session mutation is expected on the host's UI thread. ``publish()`` may be
    called from a render worker and is serialized with a lock; listeners run
    on the publishing thread.

    """

    def __init__(
        self,
        text: str = "",
        *,
        title: Optional[str] = None,
        file_path: Optional[Union[str, Path]] = None,
        theme: Union[ThemeLike, Palette] = False,
        render_mode: Optional[RenderModeType] = None,
        options: Optional[SessionOptions] = None,
    ) -> None:
        """Initialize the session with clean (saved) text."""
        self.options = options or SessionOptions()
        self._source_text = text
        self._saved_text = text
        self.file_path: Optional[Path] = Path(file_path) if file_path is not None else None
        self.title = title or self._default_title()

        resolve_palette(theme)
        self._theme = theme
        self._render_mode: RenderModeType = self._validate_mode(render_mode or self.options.render_mode)

        self._lock = threading.Lock()
        self._visual_tree: tuple[VisualNode, ...] = ()
        self._render_count = 0
        self._listeners: list[PublishListener] = []
        self._scheduler: Optional[RenderScheduler] = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def source_text(self) -> str:
        """Return the text currently in the editor."""
        return self._source_text

    @property
    def saved_text(self) -> str:
        """Return the text as last loaded or saved."""
        return self._saved_text

    @property
    def is_dirty(self) -> bool:
        """Return True when the editor text differs from the saved text."""
        return self._source_text != self._saved_text

    @property
    def is_new_document(self) -> bool:
        """Return True when the document has never been saved to a file."""
        return self.file_path is None

    @property
    def render_mode(self) -> RenderModeType:
        """Return the current render mode."""
        return self._render_mode

    @property
    def theme(self) -> Union[ThemeLike, Palette]:
        """Return the current theme."""
        return self._theme

    @property
    def visual_tree(self) -> tuple[VisualNode, ...]:
        """Return the most recently published visual tree."""
        with self._lock:
            return self._visual_tree

    @property
    def render_count(self) -> int:
        """Return the number of trees published so far."""
        return self._render_count

    @property
    def stats(self) -> DocumentStats:
        """Return character and word counts of the source text."""
        return DocumentStats.from_text(self._source_text)

    @property
    def preview_max_width(self) -> float:
        """Return the maximum content width of the preview pane.

        Unbounded in edit mode; the configured read width preset in read mode.
        """
        if self._render_mode == "read":
            return self.options.read_max_width
        return float("inf")

    @property
    def rendered_text(self) -> str:
        """Return the plain text of the published visual tree (copy-all)."""
        return extract_rendered_text(self.visual_tree)

    @property
    def checkboxes(self) -> list[InteractiveCheckbox]:
        """Return the checkboxes of the published visual tree in document order."""
        return find_checkboxes(self.visual_tree)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def bind_scheduler(self, scheduler: Optional[RenderScheduler]) -> None:
        """Route text, theme and mode changes to ``scheduler``."""
        self._scheduler = scheduler

    def set_text(self, text: str) -> None:
        """Replace the editor text and restart the render window.

        Setting the same text again is a no-op.
        """
        if text == self._source_text:
            return
        self._source_text = text
        if self._scheduler is not None:
            self._scheduler.notify_text_changed()

    def apply_document(
        self,
        text: str,
        file_path: Optional[Union[str, Path]] = None,
        title: Optional[str] = None,
    ) -> None:
        """Load new content as the saved state and render it immediately.

        Parameters
        ----------
        text : str
            Document content
        file_path : str or Path, optional
            Where the content was loaded from
        title : str, optional
            Title to show; defaults to the file name, or "Untitled"

        """
        self._source_text = text
        self._saved_text = text
        self.file_path = Path(file_path) if file_path is not None else None
        self.title = title or self._default_title()
        logger.debug(f"Applied document {self.title!r} ({len(text)} characters)")

        if self._scheduler is not None:
            self._scheduler.notify_text_changed()
            self._scheduler.flush()

    def mark_saved(self, file_path: Optional[Union[str, Path]] = None) -> None:
        """Record the current text as saved, optionally under a new path."""
        self._saved_text = self._source_text
        if file_path is not None:
            self.file_path = Path(file_path)
            self.title = self.file_path.name

    def toggle_checkbox(self, checkbox: InteractiveCheckbox) -> str:
        """Flip a task marker in the source for a clicked preview checkbox.

        Parameters
        ----------
        checkbox : InteractiveCheckbox
            The checkbox that was clicked

        Returns
        -------
        str
            The updated source text (unchanged when no marker matched)

        """
        updated = toggle_checkbox(self._source_text, checkbox)
        self.set_text(updated)
        return updated

    def set_render_mode(self, mode: RenderModeType) -> None:
        """Switch between edit and read mode and re-render immediately.

        Raises
        ------
        ValidationError
            If ``mode`` is not "edit" or "read"

        """
        mode = self._validate_mode(mode)
        if mode == self._render_mode:
            return
        self._render_mode = mode
        self._rerender()

    def set_theme(self, theme: Union[ThemeLike, Palette]) -> None:
        """Switch theme and re-render immediately.

        Raises
        ------
        ValidationError
            If ``theme`` is an unknown theme name

        """
        resolve_palette(theme)
        if theme == self._theme:
            return
        self._theme = theme
        self._rerender()

    def on_published(self, listener: PublishListener) -> Callable[[], None]:
        """Register a callback receiving every published visual tree.

        Returns
        -------
        callable
            Call it to unregister the listener

        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, visual_tree: tuple[VisualNode, ...], text: str | None = None) -> None:
        """Replace the visual tree wholesale and notify listeners.

        Parameters
        ----------
        visual_tree : tuple of VisualNode
            Newly built tree
        text : str, optional
            Source text the tree was built from (for logging)

        """
        with self._lock:
            self._visual_tree = tuple(visual_tree)
            self._render_count += 1
            tree = self._visual_tree

        if text is not None:
            logger.debug(f"Published visual tree with {len(tree)} block(s) for {len(text)} characters")

        for listener in list(self._listeners):
            try:
                listener(tree)
            except Exception as e:
                logger.error(f"Preview listener {listener!r} failed: {e}")

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _default_title(self) -> str:
        return self.file_path.name if self.file_path is not None else "Untitled"

    def _rerender(self) -> None:
        if self._scheduler is not None:
            self._scheduler.invalidate()
            self._scheduler.flush()

    @staticmethod
    def _validate_mode(mode: Any) -> RenderModeType:
        if mode not in _RENDER_MODES:
            raise ValidationError(
                f"render_mode must be 'edit' or 'read', got {mode!r}",
                parameter_name="render_mode",
                parameter_value=mode,
            )
        return mode


class LivePreview:
    """Wire a document session to the parser, renderer and scheduler.

    Parameters
    ----------
    session : DocumentSession, optional
        Session to drive; a new empty one is created when omitted
    parser : BaseParser, optional
        Markdown parser; defaults to ``MarkdownParser()``
    preview_options : PreviewOptions, optional
        Renderer options
    tokenizer : CodeTokenizer, optional
        Code tokenizer for fenced code blocks
    clock : callable, default time.monotonic
        Time source for the scheduler
    timer_factory : callable, optional
        One-shot timer factory (``threading.Timer`` fits); without it the
        host calls ``poll()``
    executor : concurrent.futures.Executor, optional
        Executor for offloaded renders. When ``session.options.offload_rendering``
        is set and none is given, a single-worker pool owned by this object is
        created and shut down by ``close()``.

    """

    def __init__(
        self,
        session: Optional[DocumentSession] = None,
        *,
        parser: Optional[BaseParser] = None,
        preview_options: Optional[PreviewOptions] = None,
        tokenizer: Optional[CodeTokenizer] = None,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Optional[TimerFactory] = None,
        executor: Optional[Executor] = None,
    ) -> None:
        """Create the scheduler and bind it to the session."""
        self.session = session or DocumentSession()
        self.parser = parser or MarkdownParser()
        self.preview_options = preview_options or PreviewOptions()
        self.tokenizer = tokenizer

        self._owned_executor: Optional[ThreadPoolExecutor] = None
        if executor is None and self.session.options.offload_rendering:
            self._owned_executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="mdpreview-render")
            executor = self._owned_executor

        self.scheduler = RenderScheduler(
            text_provider=lambda: self.session.source_text,
            render=self._render,
            publish=self.session.publish,
            debounce_ms=self.session.options.debounce_ms,
            clock=clock,
            timer_factory=timer_factory,
            executor=executor,
        )
        self.session.bind_scheduler(self.scheduler)
        self.scroll: Optional[ScrollSynchronizer] = None

    def _render(self, text: str, token: CancellationToken) -> tuple[VisualNode, ...]:
        doc = self.parser.parse(text)
        token.raise_if_cancelled()
        return build(
            doc,
            self.session.theme,
            self.session.render_mode,
            options=self.preview_options,
            tokenizer=self.tokenizer,
            cancel_token=token,
        )

    def start(self) -> bool:
        """Render the current text immediately (initial render)."""
        return self.scheduler.flush()

    def poll(self) -> bool:
        """Render if the quiescence window has elapsed; for hosts without timers."""
        return self.scheduler.poll()

    def attach_scroll(
        self,
        apply_to_target: ScrollApplier,
        target_extent: ExtentProvider,
        apply_to_source: Optional[ScrollApplier] = None,
        source_extent: Optional[ExtentProvider] = None,
        defer: Optional[DeferFunction] = None,
    ) -> ScrollSynchronizer:
        """Create the scroll synchronizer for the host's panes.

        Synchronization starts enabled or disabled according to
        ``session.options.sync_scroll``.
        """
        self.scroll = ScrollSynchronizer(
            apply_to_target=apply_to_target,
            target_extent=target_extent,
            apply_to_source=apply_to_source,
            source_extent=source_extent,
            defer=defer,
            enabled=self.session.options.sync_scroll,
        )
        return self.scroll

    def close(self) -> None:
        """Stop scheduling renders and release the owned executor."""
        self.scheduler.close()
        self.session.bind_scheduler(None)
        if self._owned_executor is not None:
            self._owned_executor.shutdown(wait=True)
            self._owned_executor = None

    def __enter__(self) -> LivePreview:
        """Return self for use as a context manager."""
        return self

    def __exit__(self, *exc_info: Any) -> None:
        """Close on context exit."""
        self.close()


__all__ = [
    "DocumentSession",
    "DocumentStats",
    "LivePreview",
]
