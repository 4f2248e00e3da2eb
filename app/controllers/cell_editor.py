"""
CellEditor - Single-focus edit state machine for grade cells.

This module contains no Qt dependencies. At most one cell is open for
editing at a time; opening another cell cancels the current edit first.

States: VIEWING -> EDITING -> (COMMITTING | CANCELLING) -> VIEWING.
A commit that fails validation leaves the cell in EDITING and writes
nothing.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from models.directory import CourseDirectory
from models.errors import AssignmentNotFoundError, EditStateError, GradeValidationError
from models.grade import points_to_percentage
from models.grade_matrix import GradeMatrix

logger = logging.getLogger(__name__)


class EditState(Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    COMMITTING = "committing"
    CANCELLING = "cancelling"


@dataclass(frozen=True)
class GradeCell:
    """Address of one gradebook cell."""

    student_id: str
    assignment_id: str


def parse_score_input(raw_input, maximum: float) -> int:
    """Parse user input as a whole-number score in ``[0, maximum]``.

    Raises:
        GradeValidationError: If the input is empty, not an integer, or
            out of range.
    """
    text = str(raw_input).strip() if raw_input is not None else ""
    if not text:
        raise GradeValidationError("Please enter a score.", raw_input, maximum)
    try:
        value = int(text)
    except ValueError:
        raise GradeValidationError(
            f"'{text}' is not a whole number.", raw_input, maximum
        ) from None
    if value < 0:
        raise GradeValidationError("Score cannot be negative.", raw_input, maximum)
    if value > maximum:
        raise GradeValidationError(
            f"Score cannot exceed {maximum:g}.", raw_input, maximum
        )
    return value


class CellEditor:
    """
    Edit/validate/commit/cancel workflow for one grade cell at a time.

    ``begin_edit``, ``commit`` and ``cancel`` are the only mutators.

    Observer events:
        edit_started (GradeCell) - A cell was opened for editing
        edit_committed (GradeData) - A valid score was written
        edit_rejected (GradeValidationError) - Input failed validation
        edit_cancelled (GradeCell) - An edit was discarded
    """

    def __init__(
        self,
        matrix: GradeMatrix,
        directory: Optional[CourseDirectory] = None,
        max_percentage: int = 100,
        notify: Optional[Callable[[str, Any], None]] = None,
    ):
        self.matrix = matrix
        self.directory = directory or CourseDirectory()
        self.max_percentage = max_percentage
        self._notify = notify or (lambda event, data: None)
        self._state = EditState.VIEWING
        self._cell: Optional[GradeCell] = None
        self._buffer = ""
        self._last_error: Optional[GradeValidationError] = None

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def editing_cell(self) -> Optional[GradeCell]:
        return self._cell

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def last_error(self) -> Optional[GradeValidationError]:
        return self._last_error

    def is_editing(self, cell: GradeCell) -> bool:
        return self._state is EditState.EDITING and self._cell == cell

    def begin_edit(self, cell: GradeCell) -> str:
        """Open ``cell`` for editing and return the pre-filled buffer.

        The buffer holds the existing score as a whole percentage, or is
        empty when the cell has no grade. Any other open edit is
        cancelled first.
        """
        if self._cell is not None and self._cell != cell:
            self.cancel(self._cell)

        grade = self.matrix.get(cell.student_id, cell.assignment_id)
        self._cell = cell
        self._buffer = str(int(grade.score)) if grade is not None else ""
        self._last_error = None
        self._state = EditState.EDITING
        logger.debug("Editing %s/%s", cell.student_id, cell.assignment_id)
        self._notify("edit_started", cell)
        return self._buffer

    def commit(self, cell: GradeCell, raw_input, as_points: bool = False):
        """Validate ``raw_input`` and write it to the grade matrix.

        With ``as_points`` the input is a whole number of points out of
        the assignment's total and is stored as a percentage.

        Returns:
            The updated GradeData.

        Raises:
            EditStateError: If ``cell`` is not the cell being edited.
            GradeValidationError: If the input is invalid. The cell stays
                open and the matrix is unchanged.
            AssignmentNotFoundError: If the cell's class cannot be resolved.
        """
        self._require_editing(cell)
        self._state = EditState.COMMITTING
        self._buffer = "" if raw_input is None else str(raw_input)
        try:
            assignment = self.directory.get_assignment(cell.assignment_id)
            if as_points:
                if assignment is None:
                    raise AssignmentNotFoundError(
                        f"Unknown assignment '{cell.assignment_id}'"
                    )
                points = parse_score_input(raw_input, assignment.total_points)
                score = points_to_percentage(points, assignment.total_points)
            else:
                score = parse_score_input(raw_input, self.max_percentage)
            class_id = self._class_id_for(cell, assignment)
        except GradeValidationError as e:
            self._state = EditState.EDITING
            self._last_error = e
            self._notify("edit_rejected", e)
            raise
        except AssignmentNotFoundError:
            self._state = EditState.EDITING
            raise

        grade = self.matrix.upsert(cell.student_id, cell.assignment_id, class_id, score)
        grade.rubric_scored = False
        self._reset()
        self._notify("edit_committed", grade)
        return grade

    def cancel(self, cell: GradeCell) -> None:
        """Discard the edit buffer without touching the matrix."""
        self._require_editing(cell)
        self._state = EditState.CANCELLING
        self._reset()
        self._notify("edit_cancelled", cell)

    def _require_editing(self, cell: GradeCell) -> None:
        if self._state is not EditState.EDITING or self._cell != cell:
            raise EditStateError(
                f"Cell {cell.student_id}/{cell.assignment_id} is not being edited"
            )

    def _class_id_for(self, cell: GradeCell, assignment) -> str:
        existing = self.matrix.get(cell.student_id, cell.assignment_id)
        if existing is not None:
            return existing.class_id
        if assignment is None:
            raise AssignmentNotFoundError(f"Unknown assignment '{cell.assignment_id}'")
        return assignment.class_id

    def _reset(self) -> None:
        self._state = EditState.VIEWING
        self._cell = None
        self._buffer = ""
        self._last_error = None
