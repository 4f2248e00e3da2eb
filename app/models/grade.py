"""Grade entry for one (student, assignment) cell.

``score`` is always a percentage in the range 0-100. Absolute points
(rubric totals, point-based input) are converted at the boundary with
:func:`points_to_percentage` and :func:`percentage_to_points`.

No Qt dependencies.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum

# (minimum percentage, letter) in descending order
LETTER_GRADE_THRESHOLDS = (
    (97.0, "A+"),
    (93.0, "A"),
    (90.0, "A-"),
    (87.0, "B+"),
    (83.0, "B"),
    (80.0, "B-"),
    (77.0, "C+"),
    (73.0, "C"),
    (70.0, "C-"),
    (67.0, "D+"),
    (63.0, "D"),
    (60.0, "D-"),
)


class GradeStatus(Enum):
    """Status of a grade entry.

    Replaces independently settable missing/incomplete flags, so that an
    entry can never be both at once.
    """

    GRADED = "graded"
    MISSING = "missing"
    INCOMPLETE = "incomplete"
    EXCUSED = "excused"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class AchievementLevel(IntEnum):
    """Four-level achievement band derived from a percentage."""

    LEVEL_1 = 1
    LEVEL_2 = 2
    LEVEL_3 = 3
    LEVEL_4 = 4

    @property
    def label(self) -> str:
        return f"Level {self.value}"

    @classmethod
    def for_percentage(cls, percentage: float) -> "AchievementLevel":
        if percentage < 60:
            return cls.LEVEL_1
        if percentage < 75:
            return cls.LEVEL_2
        if percentage < 90:
            return cls.LEVEL_3
        return cls.LEVEL_4


def letter_grade(percentage: float) -> str:
    """Return the letter grade (A+ through F) for a percentage."""
    for minimum, letter in LETTER_GRADE_THRESHOLDS:
        if percentage >= minimum:
            return letter
    return "F"


def points_to_percentage(points: float, total_points: float) -> float:
    """Convert earned points to a percentage of ``total_points``."""
    if total_points <= 0:
        return 0.0
    return round(points / total_points * 100.0, 2)


def percentage_to_points(percentage: float, total_points: float) -> float:
    """Convert a percentage to points out of ``total_points``."""
    return round(percentage / 100.0 * total_points, 2)


@dataclass
class GradeData:
    """A recorded grade for one student on one assignment."""

    student_id: str
    assignment_id: str
    class_id: str
    score: float = 0.0
    comments: str = ""
    status: GradeStatus = GradeStatus.GRADED
    override_reason: str = ""
    rubric_scored: bool = False

    @property
    def key(self) -> tuple[str, str]:
        return (self.student_id, self.assignment_id)

    @property
    def is_missing(self) -> bool:
        return self.status is GradeStatus.MISSING

    @property
    def is_incomplete(self) -> bool:
        return self.status is GradeStatus.INCOMPLETE

    @property
    def is_excused(self) -> bool:
        return self.status is GradeStatus.EXCUSED

    @property
    def letter_grade(self) -> str:
        return letter_grade(self.score)

    @property
    def achievement_level(self) -> AchievementLevel:
        return AchievementLevel.for_percentage(self.score)

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "assignment_id": self.assignment_id,
            "class_id": self.class_id,
            "score": self.score,
            "comments": self.comments,
            "status": self.status.value,
            "override_reason": self.override_reason,
            "rubric_scored": self.rubric_scored,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GradeData":
        return cls(
            student_id=data["student_id"],
            assignment_id=data["assignment_id"],
            class_id=data.get("class_id", ""),
            score=data.get("score", 0.0),
            comments=data.get("comments", ""),
            status=GradeStatus(data.get("status", GradeStatus.GRADED.value)),
            override_reason=data.get("override_reason", ""),
            rubric_scored=data.get("rubric_scored", False),
        )
