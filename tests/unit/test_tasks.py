#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for task checkbox toggling on source text."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mdpreview.exceptions import ValidationError
from mdpreview.parsers import markdown_to_ast
from mdpreview.renderers import build
from mdpreview.tasks import TaskMarkerPosition, find_task_markers, toggle, toggle_checkbox
from mdpreview.visual import InteractiveCheckbox, find_checkboxes

# Source lines that contain no checkbox markers of either state
_marker_free_text = st.text(alphabet=st.characters(blacklist_characters="[]"), max_size=30)


@pytest.mark.unit
class TestToggle:
    """Test the first-match toggle rule."""

    def test_check_first_unchecked(self) -> None:
        """Test ticking replaces the first unchecked marker."""
        assert toggle("- [ ] task one\n- [x] task two", 0, checked=False) == "- [x] task one\n- [x] task two"

    def test_uncheck_first_checked(self) -> None:
        """Test unticking replaces the first checked marker."""
        assert toggle("- [ ] a\n- [x] b\n- [x] c", 0, checked=True) == "- [ ] a\n- [ ] b\n- [x] c"

    def test_uppercase_x(self) -> None:
        """Test ``[X]`` counts as checked."""
        assert toggle("- [X] done", 0, checked=True) == "- [ ] done"

    def test_first_match_regardless_of_index(self) -> None:
        """Test the clicked ordinal does not select the match."""
        source = "- [ ] a\n- [ ] b\n- [ ] c"
        assert toggle(source, 2, checked=False) == "- [x] a\n- [ ] b\n- [ ] c"

    def test_no_marker_unchanged(self) -> None:
        """Test text without a marker of the clicked state is returned as is."""
        assert toggle("- [x] only checked", 0, checked=False) == "- [x] only checked"
        assert toggle("no tasks here", 0, checked=True) == "no tasks here"

    def test_marker_outside_list(self) -> None:
        """Test the rewrite is purely textual and also hits markers in prose."""
        assert toggle("see [ ] here\n- [ ] item", 0, checked=False) == "see [x] here\n- [ ] item"

    def test_negative_index_rejected(self) -> None:
        """Test negative ordinals are rejected."""
        with pytest.raises(ValidationError):
            toggle("- [ ] a", -1, checked=False)

    def test_scenario_from_rendered_checkbox(self) -> None:
        """Test clicking the rendered unchecked box ticks the first unchecked marker."""
        source = "- [ ] task one\n- [x] task two"
        boxes = find_checkboxes(build(markdown_to_ast(source)))
        unchecked = [box for box in boxes if not box.checked]

        assert len(unchecked) == 1
        assert unchecked[0].occurrence_index == 0
        assert toggle_checkbox(source, unchecked[0]) == "- [x] task one\n- [x] task two"

    def test_toggle_checkbox_uses_state(self) -> None:
        """Test the checkbox's own state picks the direction."""
        box = InteractiveCheckbox(checked=True, glyph="✓", color="#22C55E", occurrence_index=0)
        assert toggle_checkbox("- [x] a", box) == "- [ ] a"


@pytest.mark.unit
class TestFindTaskMarkers:
    """Test marker discovery."""

    def test_positions(self) -> None:
        """Test markers are listed in order with offsets and state."""
        markers = find_task_markers("- [ ] a\n- [X] b")
        assert markers == [
            TaskMarkerPosition(start=2, end=5, checked=False),
            TaskMarkerPosition(start=10, end=13, checked=True),
        ]

    def test_none(self) -> None:
        """Test text without markers."""
        assert find_task_markers("[link](x) [y]") == []


@pytest.mark.unit
class TestToggleProperties:
    """Property-based tests for toggling."""

    @given(
        prefix=_marker_free_text,
        items=st.lists(_marker_free_text, min_size=1, max_size=5),
    )
    def test_round_trip_restores_source(self, prefix: str, items: list[str]) -> None:
        """Test ticking then unticking restores text whose markers all start unchecked."""
        source = prefix + "".join(f"\n- [ ] {item}" for item in items)

        ticked = toggle(source, 0, checked=False)
        assert ticked != source
        assert toggle(ticked, 0, checked=True) == source

    @given(
        states=st.lists(st.booleans(), min_size=1, max_size=8),
        checked=st.booleans(),
    )
    def test_at_most_one_marker_changes(self, states: list[bool], checked: bool) -> None:
        """Test a toggle flips exactly one marker of the clicked state, or none."""
        source = "\n".join(f"- [{'x' if state else ' '}] item {i}" for i, state in enumerate(states))
        result = toggle(source, 0, checked=checked)

        before = [marker.checked for marker in find_task_markers(source)]
        after = [marker.checked for marker in find_task_markers(result)]
        changed = [i for i, (a, b) in enumerate(zip(before, after)) if a != b]

        assert len(result) == len(source)
        if checked in before:
            assert changed == [before.index(checked)]
        else:
            assert result == source
