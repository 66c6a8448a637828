"""
Script sequencing - labels, the active sequence and its cursor.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import Mapping, Optional, Sequence

from parley.core.models import Statement

logger = logging.getLogger(__name__)


class SequenceState(Enum):
    """Where the sequencer stands."""
    IDLE = auto()       # No sequence loaded (or an unknown label was started)
    ACTIVE = auto()     # Cursor points at a statement
    EXHAUSTED = auto()  # Cursor is past the last statement


class ScriptSequencer:
    """
    Holds the label table and walks one sequence at a time.

    A script maps label names to lists of statements. Labels can be
    added or replaced at any time. The active label is looked up on
    every step, so replacing it mid-sequence takes effect at the current
    cursor position.

    An unnamed sequence can also be loaded directly; it is not stored in
    the label table.
    """

    def __init__(self):
        self._labels: dict[str, list[Statement]] = {}
        self._current_label: Optional[str] = None
        self._unnamed: Optional[list[Statement]] = None
        self._cursor = 0

    @property
    def labels(self) -> dict[str, list[Statement]]:
        return self._labels

    @property
    def current_label(self) -> Optional[str]:
        return self._current_label

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def statements(self) -> Optional[Sequence[Statement]]:
        """The active sequence, or None when idle."""
        if self._current_label is not None:
            return self._labels.get(self._current_label)
        return self._unnamed

    @property
    def state(self) -> SequenceState:
        statements = self.statements
        if statements is None:
            return SequenceState.IDLE
        if self._cursor >= len(statements):
            return SequenceState.EXHAUSTED
        return SequenceState.ACTIVE

    def define_labels(self, labels: Mapping[str, Sequence[Statement]]) -> None:
        """Add or replace labels. Other labels are left untouched."""
        for label, statements in labels.items():
            self._labels[label] = list(statements)
            logger.debug(f"Defined label {label!r} ({len(statements)} statements)")

    def load_sequence(self, statements: Sequence[Statement]) -> None:
        """Make an unnamed list of statements the active sequence."""
        self._unnamed = list(statements)
        self._current_label = None
        self._cursor = 0

    def start_label(self, label: str) -> bool:
        """
        Make a label the active sequence.

        Unknown labels are tolerated: the sequencer goes idle and stays
        idle even if the label is defined later.

        Returns:
            True if the label exists
        """
        self._unnamed = None
        self._cursor = 0

        if label not in self._labels:
            self._current_label = None
            logger.warning(f"Dialog label not found: {label!r}")
            return False

        self._current_label = label
        return True

    def take(self) -> Statement:
        """
        Return the statement at the cursor and move past it.

        Raises:
            IndexError: If the sequencer is not ACTIVE
        """
        statements = self.statements
        if statements is None or self._cursor >= len(statements):
            raise IndexError("No statement at cursor")

        statement = statements[self._cursor]
        self._cursor += 1
        return statement

    def reset(self) -> None:
        """Forget the active sequence. Labels are kept."""
        self._current_label = None
        self._unnamed = None
        self._cursor = 0
