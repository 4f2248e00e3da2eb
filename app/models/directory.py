"""
CourseDirectory - In-memory student and assignment directory.

Supplies the opaque values the gradebook needs (assignment totals and
class ids, class rosters). The grading core reads from it and never
changes the stored records.
"""

from typing import Optional

from .assignment import AssignmentData
from .errors import AssignmentNotFoundError
from .student import StudentData


class CourseDirectory:
    """Students, assignments and class enrollments."""

    def __init__(self):
        self._students: dict[str, StudentData] = {}
        self._assignments: dict[str, AssignmentData] = {}
        self._enrollments: dict[str, list[str]] = {}

    # --- Students ---

    def add_student(self, student: StudentData, class_id: Optional[str] = None) -> None:
        """Register a student, optionally enrolling them in a class."""
        self._students[student.student_id] = student
        if class_id is not None:
            self.enroll(student.student_id, class_id)

    def enroll(self, student_id: str, class_id: str) -> None:
        roster = self._enrollments.setdefault(class_id, [])
        if student_id not in roster:
            roster.append(student_id)

    def get_student(self, student_id: str) -> Optional[StudentData]:
        return self._students.get(student_id)

    def students_in_class(self, class_id: str) -> list[str]:
        """Return enrolled student ids in enrollment order."""
        return list(self._enrollments.get(class_id, []))

    # --- Assignments ---

    def add_assignment(self, assignment: AssignmentData) -> None:
        self._assignments[assignment.assignment_id] = assignment

    def get_assignment(self, assignment_id: str) -> Optional[AssignmentData]:
        return self._assignments.get(assignment_id)

    def require_assignment(self, assignment_id: str) -> AssignmentData:
        """Like :meth:`get_assignment` but raises when the id is unknown."""
        assignment = self._assignments.get(assignment_id)
        if assignment is None:
            raise AssignmentNotFoundError(f"Unknown assignment '{assignment_id}'")
        return assignment

    def assignments_for_class(self, class_id: str) -> list[AssignmentData]:
        return [a for a in self._assignments.values() if a.class_id == class_id]
