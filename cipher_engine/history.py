"""
Undo / redo history for an editable cipher.

The stack never looks at the state it stores: it is given a `save` callable
returning the current editable state and a `restore` callable putting one
back.  Every frame is a deep copy, both going in and coming out, so later
edits can never reach into history.

Named operations merge.  For example, with the frames being the state
*before* each operation:

    Operation            tag     Action  Stack after
    Initial state                        <empty>
    Change offset=1      None    push    [initial]
    Type find char A     find    push    [initial][off=1]
    Type find char AB    find    push    [initial][off=1][find=A]
    Type find char ABC   find    merge   [initial][off=1][find=AB]
    Change offset=2      None    merge   [initial][off=1][find=ABC]
    Change offset=3      None    push    [initial][off=1][find=ABC][off=2]

A push merges into the top frame when the two pushes before it carried the
same non-null tag: the top frame is then only an intermediate state between
two edits of the same kind.
"""
import copy
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class HistoryPhase(Enum):
    # nothing owed, next push appends
    IDLE = "idle"
    # an operation was marked; undo must first record the state it produced
    PENDING_COMMIT = "pending_commit"
    # a redo restored the top frame; the next push replaces it
    MERGE_ELIGIBLE = "merge_eligible"


class UndoRedoStack:
    def __init__(self, save, restore):
        self._save = save
        self._restore = restore
        self.frames = []
        self.position = 0
        self.phase = HistoryPhase.IDLE
        self.pending_tag = None
        self._last_tag = None
        self._merge_top = False

    def _push(self, tag):
        snapshot = copy.deepcopy(self._save())
        if self._merge_top and self.frames:
            self.frames[-1] = snapshot
        else:
            self.frames.append(snapshot)
        self.position = len(self.frames) - 1
        self._merge_top = tag is not None and tag == self._last_tag
        self._last_tag = tag

    def _restore_frame(self):
        self._restore(copy.deepcopy(self.frames[self.position]))

    def mark_undo(self, tag=None):
        """
        Record the current state before an edit.  `tag` names the kind of
        edit; consecutive edits with the same non-null tag collapse into a
        single undo step.
        """
        if self.position < len(self.frames) - 1:
            # Editing after an undo: the redo future is gone and the frame
            # at the cursor is re-captured from the live state below.
            del self.frames[self.position:]
            self._merge_top = False
        self._push(tag)
        self.phase = HistoryPhase.PENDING_COMMIT
        self.pending_tag = tag

    def undo(self):
        """Go back one step.  Returns True when a state was restored."""
        if self.phase is HistoryPhase.PENDING_COMMIT:
            self._push(self.pending_tag)
        self.phase = HistoryPhase.IDLE
        self.pending_tag = None
        self._merge_top = False
        self._last_tag = None
        if self.position <= 0:
            return False
        self.position -= 1
        self._restore_frame()
        logger.debug("undo -> frame %d of %d", self.position, len(self.frames))
        return True

    def redo(self):
        """Go forward one step.  Returns True when a state was restored."""
        if self.position >= len(self.frames) - 1:
            return False
        self.position += 1
        self._restore_frame()
        # the live state now equals the top frame, so the next push replaces it
        self.phase = HistoryPhase.MERGE_ELIGIBLE
        self.pending_tag = None
        self._merge_top = True
        self._last_tag = None
        logger.debug("redo -> frame %d of %d", self.position, len(self.frames))
        return True

    @property
    def can_undo(self):
        return self.position > 0 or (
            self.phase is HistoryPhase.PENDING_COMMIT and len(self.frames) > 0
        )

    @property
    def can_redo(self):
        return self.position < len(self.frames) - 1

    def clear(self):
        self.frames = []
        self.position = 0
        self.phase = HistoryPhase.IDLE
        self.pending_tag = None
        self._last_tag = None
        self._merge_top = False
