"""Data model for gradebook assignments.

An assignment belongs to one class, is worth a positive number of
points and may reference a rubric by id.
No Qt dependencies.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AssignmentData:
    """An assignment as supplied by the assignment directory.

    ``weight`` is only used by weighted reporting; scoring ignores it.
    """

    assignment_id: str
    class_id: str
    total_points: float
    title: str = ""
    rubric_id: Optional[str] = None
    weight: float = 1.0

    def __post_init__(self):
        if not isinstance(self.total_points, (int, float)) or self.total_points <= 0:
            raise ValueError(
                f"Assignment '{self.assignment_id}' must have positive total_points, "
                f"got {self.total_points!r}"
            )

    @property
    def has_rubric(self) -> bool:
        return bool(self.rubric_id)

    def to_dict(self) -> dict:
        data: dict = {
            "assignment_id": self.assignment_id,
            "class_id": self.class_id,
            "total_points": self.total_points,
            "title": self.title,
            "weight": self.weight,
        }
        if self.rubric_id is not None:
            data["rubric_id"] = self.rubric_id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AssignmentData":
        return cls(
            assignment_id=data["assignment_id"],
            class_id=data["class_id"],
            total_points=data["total_points"],
            title=data.get("title", ""),
            rubric_id=data.get("rubric_id"),
            weight=data.get("weight", 1.0),
        )
