"""
GradingWorkflow - Cell edits and bulk grading for the gradebook.

This module contains no Qt dependencies. It owns the grade matrix and
rubric score store for a session, delegates single-cell edits to a
CellEditor, and fills in ungraded students in bulk, either with one
manual score or from rubric selections.

Bulk fills never overwrite an existing grade, so running one twice
changes nothing the second time.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from controllers.cell_editor import CellEditor, GradeCell
from grading.rubric import Rubric
from grading.rubric_scores import RubricScoreStore
from models.directory import CourseDirectory
from models.errors import GradeValidationError
from models.grade import GradeData, points_to_percentage
from models.grade_matrix import GradeMatrix
from models.settings import GradebookSettings

logger = logging.getLogger(__name__)


@dataclass
class BulkGradeResult:
    """Outcome of a bulk fill for one assignment."""

    assignment_id: str
    graded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list[tuple[str, str]] = field(default_factory=list)

    @property
    def graded_count(self) -> int:
        return len(self.graded)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)


class GradingWorkflow:
    """
    Entry point for gradebook edits.

    Observer events:
        edit_started (GradeCell) - A cell was opened for editing
        edit_committed (GradeData) - A cell edit was saved
        edit_rejected (GradeValidationError) - A cell edit failed validation
        edit_cancelled (GradeCell) - A cell edit was discarded
        grade_changed (GradeData) - A bulk fill wrote a grade
        bulk_graded (BulkGradeResult) - A bulk fill finished
    """

    def __init__(
        self,
        matrix: Optional[GradeMatrix] = None,
        score_store: Optional[RubricScoreStore] = None,
        directory: Optional[CourseDirectory] = None,
        rubric_library=None,
        settings: Optional[GradebookSettings] = None,
    ):
        self.settings = settings or GradebookSettings()
        self.matrix = matrix if matrix is not None else GradeMatrix()
        self.score_store = score_store or RubricScoreStore(
            default_max_score=self.settings.default_max_score,
            level_scale=self.settings.level_scale,
        )
        self.directory = directory or CourseDirectory()
        self.rubric_library = rubric_library
        self._observers: list[Callable[[str, Any], None]] = []
        self.editor = CellEditor(
            self.matrix,
            self.directory,
            max_percentage=self.settings.max_percentage,
            notify=self._notify,
        )

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for gradebook change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    # --- Single-cell editing ---

    def begin_edit(self, cell: GradeCell) -> str:
        return self.editor.begin_edit(cell)

    def commit(self, cell: GradeCell, raw_input, as_points: bool = False) -> GradeData:
        return self.editor.commit(cell, raw_input, as_points=as_points)

    def cancel(self, cell: GradeCell) -> None:
        self.editor.cancel(cell)

    # --- Rubric lookup ---

    def rubric_for(self, assignment_id: str) -> Optional[Rubric]:
        """Return the rubric attached to an assignment, or None.

        Loader failures are logged and treated as "no rubric".
        """
        assignment = self.directory.get_assignment(assignment_id)
        if assignment is None or not assignment.rubric_id or self.rubric_library is None:
            return None
        try:
            return self.rubric_library.get(assignment.rubric_id)
        except (OSError, ValueError) as e:
            logger.warning("Could not load rubric '%s': %s", assignment.rubric_id, e)
            return None

    # --- Bulk grading ---

    def ungraded_students(self, assignment_id: str) -> list[str]:
        """Return enrolled students with no entry for an assignment."""
        assignment = self.directory.get_assignment(assignment_id)
        if assignment is None:
            return []
        graded = self.matrix.graded_student_ids(assignment_id)
        return [
            sid for sid in self.directory.students_in_class(assignment.class_id) if sid not in graded
        ]

    def grade_all(self, assignment_id: str, score: float) -> BulkGradeResult:
        """Give ``score`` to every enrolled student not yet graded.

        Raises:
            GradeValidationError: If ``score`` is not a number within
                ``[0, max_percentage]``. Nothing is written.
        """
        maximum = self.settings.max_percentage
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise GradeValidationError(f"Score {score!r} is not a number.", score, maximum)
        if not 0 <= score <= maximum:
            raise GradeValidationError(
                f"Score must be between 0 and {maximum}, got {score:g}.", score, maximum
            )

        result = BulkGradeResult(assignment_id=assignment_id)
        assignment = self.directory.get_assignment(assignment_id)
        if assignment is None:
            logger.warning("grade_all: unknown assignment '%s', nothing graded", assignment_id)
            return result

        with self.matrix.locked():
            graded = self.matrix.graded_student_ids(assignment_id)
            for student_id in self.directory.students_in_class(assignment.class_id):
                if student_id in graded:
                    result.skipped.append(student_id)
                    continue
                grade = self.matrix.upsert(student_id, assignment_id, assignment.class_id, score)
                result.graded.append(student_id)
                self._notify("grade_changed", grade)

        logger.info(
            "grade_all %s: %d graded, %d already graded",
            assignment_id,
            result.graded_count,
            result.skipped_count,
        )
        self._notify("bulk_graded", result)
        return result

    def grade_all_with_rubric(
        self,
        assignment_id: str,
        rubric: Optional[Rubric] = None,
        bulk_selections: Optional[Mapping[str, int]] = None,
        overrides: Optional[Mapping[str, Mapping[str, int]]] = None,
    ) -> BulkGradeResult:
        """Score every ungraded student from rubric selections.

        Each student's selections are their entry in ``overrides`` if
        present, otherwise ``bulk_selections``. The selections are saved to
        the score store, converted to points and then to a percentage of
        the assignment's total, and written to the matrix.

        When ``rubric`` is omitted it is looked up from the assignment. If
        no rubric can be found the call writes nothing.
        """
        result = BulkGradeResult(assignment_id=assignment_id)
        assignment = self.directory.get_assignment(assignment_id)
        if assignment is None:
            logger.warning(
                "grade_all_with_rubric: unknown assignment '%s', nothing graded", assignment_id
            )
            return result

        if rubric is None:
            rubric = self.rubric_for(assignment_id)
        if rubric is None:
            logger.warning(
                "grade_all_with_rubric: no rubric for assignment '%s', nothing graded",
                assignment_id,
            )
            return result

        bulk_selections = dict(bulk_selections or {})
        overrides = overrides or {}

        with self.matrix.locked():
            graded = self.matrix.graded_student_ids(assignment_id)
            for student_id in self.directory.students_in_class(assignment.class_id):
                if student_id in graded:
                    result.skipped.append(student_id)
                    continue
                selections = overrides.get(student_id, bulk_selections)
                try:
                    grade = self._apply_rubric(assignment, rubric, student_id, selections)
                except (TypeError, ValueError) as e:
                    logger.warning("Could not rubric-grade %s: %s", student_id, e)
                    result.errors.append((student_id, str(e)))
                    continue
                result.graded.append(student_id)
                self._notify("grade_changed", grade)

        logger.info(
            "grade_all_with_rubric %s: %d graded, %d already graded, %d errors",
            assignment_id,
            result.graded_count,
            result.skipped_count,
            len(result.errors),
        )
        self._notify("bulk_graded", result)
        return result

    def _apply_rubric(self, assignment, rubric: Rubric, student_id: str, selections) -> GradeData:
        self.score_store.save_selections(
            student_id, assignment.assignment_id, selections, assignment.total_points
        )
        points = self.score_store.total_score(rubric, student_id, assignment.assignment_id)
        percentage = points_to_percentage(points, assignment.total_points)
        grade = self.matrix.upsert(student_id, assignment.assignment_id, assignment.class_id, percentage)
        grade.rubric_scored = True
        return grade
