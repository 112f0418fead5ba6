"""
Undo / redo tests
=================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from cipher_engine.history import HistoryPhase, UndoRedoStack


class Editor:
    """Minimal editable state: a dict with a nested list."""

    def __init__(self):
        self.state = {"offset": 0, "find": "", "marks": []}
        self.history = UndoRedoStack(self.save, self.restore)

    def save(self):
        return self.state

    def restore(self, data):
        self.state = data

    def edit(self, tag=None, **changes):
        self.history.mark_undo(tag)
        self.state.update(changes)


@pytest.fixture
def editor():
    return Editor()


# ── Basics ────────────────────────────────────────────────────────────────────
def test_fresh_stack_is_a_no_op(editor):
    assert not editor.history.can_undo
    assert not editor.history.can_redo
    assert editor.history.undo() is False
    assert editor.history.redo() is False
    assert editor.state["offset"] == 0


def test_single_edit_undo_redo(editor):
    editor.edit(offset=1)
    assert editor.history.phase is HistoryPhase.PENDING_COMMIT
    assert editor.history.can_undo

    assert editor.history.undo() is True
    assert editor.state["offset"] == 0
    assert len(editor.history.frames) == 2
    assert editor.history.can_redo

    assert editor.history.redo() is True
    assert editor.state["offset"] == 1
    assert editor.history.phase is HistoryPhase.MERGE_ELIGIBLE
    assert editor.history.redo() is False


def test_undo_at_the_bottom_does_nothing(editor):
    editor.edit(offset=1)
    editor.history.undo()
    assert editor.history.undo() is False
    assert editor.state["offset"] == 0


# ── Merging ───────────────────────────────────────────────────────────────────
def test_same_tag_edits_merge(editor):
    editor.edit("find", find="A")
    editor.edit("find", find="AB")
    editor.edit("find", find="ABC")
    assert len(editor.history.frames) == 2

    assert editor.history.undo() is True
    assert editor.state["find"] == ""
    assert editor.history.undo() is False


def test_untagged_edits_never_merge(editor):
    editor.edit(offset=1)
    editor.edit(offset=2)
    assert len(editor.history.frames) == 2
    editor.history.undo()
    assert editor.state["offset"] == 1
    editor.history.undo()
    assert editor.state["offset"] == 0


def test_merge_table(editor):
    editor.edit(offset=1)                # push  [initial]
    editor.edit("find", find="A")        # push  [initial][off=1]
    editor.edit("find", find="AB")       # push  [...][find=A]
    editor.edit("find", find="ABC")      # merge [...][find=AB]
    editor.edit(offset=2)                # merge [...][find=ABC]
    editor.edit(offset=3)                # push  [...][off=2]
    frames = editor.history.frames
    assert [f["offset"] for f in frames] == [0, 1, 1, 2]
    assert [f["find"] for f in frames] == ["", "", "ABC", "ABC"]


def test_different_tags_do_not_merge(editor):
    editor.edit("find", find="A")
    editor.edit("offset", offset=1)
    editor.edit("find", find="AB")
    assert len(editor.history.frames) == 3


# ── Snapshots ─────────────────────────────────────────────────────────────────
def test_frames_are_independent_of_live_state(editor):
    editor.edit(offset=1)
    editor.state["marks"].append("x")
    assert editor.history.frames[0]["marks"] == []

    editor.history.undo()
    editor.state["marks"].append("y")
    editor.history.redo()
    editor.history.undo()
    assert editor.state["marks"] == []


# ── Truncation ────────────────────────────────────────────────────────────────
def test_edit_after_undo_discards_redo(editor):
    editor.edit(offset=1)
    editor.edit(offset=2)
    editor.history.undo()
    editor.history.undo()
    assert editor.state["offset"] == 0

    editor.edit(offset=5)
    assert not editor.history.can_redo
    assert len(editor.history.frames) == 1

    editor.history.undo()
    assert editor.state["offset"] == 0
    editor.history.redo()
    assert editor.state["offset"] == 5


def test_edit_after_redo_replaces_top(editor):
    editor.edit(offset=1)
    editor.history.undo()
    editor.history.redo()
    editor.edit(offset=2)
    editor.history.undo()
    assert editor.state["offset"] == 1
    editor.history.undo()
    assert editor.state["offset"] == 0


def test_clear(editor):
    editor.edit(offset=1)
    editor.history.clear()
    assert editor.history.frames == []
    assert editor.history.phase is HistoryPhase.IDLE
    assert editor.history.undo() is False
