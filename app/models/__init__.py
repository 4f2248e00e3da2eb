"""
Pure Python data models for the gradebook.

This package contains Qt-free data classes for students, assignments,
grades and the grade matrix. All models use only Python standard
library types.
"""

from .assignment import AssignmentData
from .directory import CourseDirectory
from .errors import (
    AssignmentNotFoundError,
    EditStateError,
    GradebookError,
    GradeValidationError,
    InconsistentRubricDataError,
    NotFoundError,
    RubricNotFoundError,
)
from .grade import (
    AchievementLevel,
    GradeData,
    GradeStatus,
    letter_grade,
    percentage_to_points,
    points_to_percentage,
)
from .grade_matrix import GradeMatrix
from .settings import GradebookSettings
from .student import StudentData

__all__ = [
    "AchievementLevel",
    "AssignmentData",
    "AssignmentNotFoundError",
    "CourseDirectory",
    "EditStateError",
    "GradebookError",
    "GradebookSettings",
    "GradeData",
    "GradeMatrix",
    "GradeStatus",
    "GradeValidationError",
    "InconsistentRubricDataError",
    "NotFoundError",
    "RubricNotFoundError",
    "StudentData",
    "letter_grade",
    "percentage_to_points",
    "points_to_percentage",
]
