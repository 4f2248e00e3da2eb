"""
GradeMatrix - Sparse store of grade entries keyed by (student, assignment).

This module contains no Qt dependencies. A missing key means "no grade
yet", which is different from an entry with a score of 0. There is at
most one GradeData per key; all writes go through a single re-entrant
lock so interleaved upserts on the same key cannot create duplicates.
"""

import dataclasses
import statistics
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from .grade import GradeData, GradeStatus

GradeKey = tuple[str, str]


class GradeMatrix:
    """In-memory grade store with create-or-update semantics."""

    def __init__(self):
        self._grades: dict[GradeKey, GradeData] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._grades)

    def __contains__(self, key: object) -> bool:
        return key in self._grades

    def __iter__(self) -> Iterator[GradeData]:
        return iter(list(self._grades.values()))

    @contextmanager
    def locked(self):
        """Hold the writer lock across several operations."""
        with self._lock:
            yield self

    # --- Lookup ---

    def get(self, student_id: str, assignment_id: str) -> Optional[GradeData]:
        """Return the grade for a cell, or None if none has been recorded."""
        return self._grades.get((student_id, assignment_id))

    def filter(self, predicate: Callable[[GradeData], bool]) -> list[GradeData]:
        """Return every grade matching ``predicate``. Never mutates."""
        return [grade for grade in list(self._grades.values()) if predicate(grade)]

    def grades_for_student(self, student_id: str) -> list[GradeData]:
        return self.filter(lambda g: g.student_id == student_id)

    def grades_for_assignment(self, assignment_id: str) -> list[GradeData]:
        return self.filter(lambda g: g.assignment_id == assignment_id)

    def graded_student_ids(self, assignment_id: str) -> set[str]:
        """Return ids of students who have any entry for an assignment."""
        return {g.student_id for g in self.grades_for_assignment(assignment_id)}

    def missing(self) -> list[GradeData]:
        return self.filter(lambda g: g.is_missing)

    def incomplete(self) -> list[GradeData]:
        return self.filter(lambda g: g.is_incomplete)

    def snapshot(self) -> dict[GradeKey, GradeData]:
        """Return a detached copy of every entry, keyed by cell."""
        with self._lock:
            return {key: dataclasses.replace(grade) for key, grade in self._grades.items()}

    # --- Aggregates ---

    def average_grade(self, student_id: str) -> Optional[float]:
        """Mean score across a student's entries, or None if there are none."""
        scores = [g.score for g in self.grades_for_student(student_id)]
        if not scores:
            return None
        return statistics.fmean(scores)

    # --- Mutation ---

    def upsert(self, student_id: str, assignment_id: str, class_id: str, score: float) -> GradeData:
        """Set the score for a cell, creating the entry if needed.

        Status, comments and other fields of an existing entry are kept.
        Range checking is the caller's job.
        """
        with self._lock:
            grade = self._grades.get((student_id, assignment_id))
            if grade is None:
                grade = GradeData(
                    student_id=student_id,
                    assignment_id=assignment_id,
                    class_id=class_id,
                    score=score,
                )
                self._grades[grade.key] = grade
            else:
                grade.score = score
            return grade

    def set_comment(self, student_id: str, assignment_id: str, comment: str, class_id: str = "") -> GradeData:
        """Set the comment for a cell, creating a zero-score entry if needed."""
        with self._lock:
            grade = self._grades.get((student_id, assignment_id))
            if grade is None:
                grade = GradeData(
                    student_id=student_id,
                    assignment_id=assignment_id,
                    class_id=class_id,
                    comments=comment,
                )
                self._grades[grade.key] = grade
            else:
                grade.comments = comment
            return grade

    def set_status(
        self, student_id: str, assignment_id: str, status: GradeStatus, class_id: str = ""
    ) -> GradeData:
        """Move a cell to ``status``. This is the only way status changes."""
        status = GradeStatus(status)
        with self._lock:
            grade = self._grades.get((student_id, assignment_id))
            if grade is None:
                grade = GradeData(
                    student_id=student_id,
                    assignment_id=assignment_id,
                    class_id=class_id,
                    status=status,
                )
                self._grades[grade.key] = grade
            else:
                grade.status = status
            return grade

    def override(
        self, student_id: str, assignment_id: str, class_id: str, score: float, reason: str
    ) -> GradeData:
        """Upsert a score and record why it was manually overridden."""
        with self._lock:
            grade = self.upsert(student_id, assignment_id, class_id, score)
            grade.override_reason = reason
            grade.rubric_scored = False
            return grade

    def remove(self, student_id: str, assignment_id: str) -> bool:
        """Delete a cell's entry. Returns False if there was none."""
        with self._lock:
            return self._grades.pop((student_id, assignment_id), None) is not None

    def clear(self) -> None:
        with self._lock:
            self._grades.clear()
