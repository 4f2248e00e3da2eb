"""Student identity as seen by the gradebook.

Only the id is used by grading logic; names are carried for display
and export. No Qt dependencies.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class StudentData:
    """A student known to the gradebook."""

    student_id: str
    first_name: str = ""
    last_name: str = ""

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.student_id

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "first_name": self.first_name,
            "last_name": self.last_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StudentData":
        return cls(
            student_id=data["student_id"],
            first_name=data.get("first_name", ""),
            last_name=data.get("last_name", ""),
        )
