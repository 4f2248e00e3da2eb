"""Rubric data model for leveled, multi-criterion scoring.

A rubric is an ordered list of criteria. Each criterion has ordered
achievement levels numbered from 1, and each level awards a fraction of
that criterion's share of the assignment's points. Rubrics are read
from and written to JSON files.

Rubric objects are immutable once built. Malformed data is rejected by
:func:`validate_rubric` when loading, never later.

No Qt dependencies - pure Python module.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

RUBRIC_EXTENSION = ".json"

# Fraction of a criterion's points awarded at each standard level.
STANDARD_LEVEL_PERCENTAGES = {1: 0.50, 2: 0.65, 3: 0.80, 4: 1.00}


@dataclass(frozen=True)
class RubricLevel:
    """One achievement level within a criterion."""

    level: int
    percentage: float
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "percentage": self.percentage,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RubricLevel":
        level = data["level"]
        percentage = data.get("percentage")
        if percentage is None:
            percentage = STANDARD_LEVEL_PERCENTAGES[level]
        return cls(level=level, percentage=percentage, description=data.get("description", ""))


@dataclass(frozen=True)
class RubricCriterion:
    """One assessed dimension of a rubric, e.g. "Organization"."""

    name: str
    levels: tuple[RubricLevel, ...] = ()
    description: str = ""

    @property
    def max_level(self) -> int:
        return max((lv.level for lv in self.levels), default=0)

    def get_level(self, level: int) -> Optional[RubricLevel]:
        for lv in self.levels:
            if lv.level == level:
                return lv
        return None

    def to_dict(self) -> dict:
        d = {
            "name": self.name,
            "levels": [lv.to_dict() for lv in self.levels],
        }
        if self.description:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "RubricCriterion":
        return cls(
            name=data["name"],
            levels=tuple(RubricLevel.from_dict(lv) for lv in data.get("levels", [])),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class Rubric:
    """A complete rubric: id, title and ordered criteria."""

    rubric_id: str
    title: str
    criteria: tuple[RubricCriterion, ...] = ()
    description: str = ""
    applicable_grades: tuple[int, ...] = field(default_factory=tuple)

    def criterion(self, name: str) -> Optional[RubricCriterion]:
        for criterion in self.criteria:
            if criterion.name == name:
                return criterion
        return None

    def max_level(self, criterion_name: str) -> int:
        """Return the highest level number defined for a criterion.

        Raises:
            KeyError: If the rubric has no criterion with that name.
        """
        criterion = self.criterion(criterion_name)
        if criterion is None:
            raise KeyError(criterion_name)
        return criterion.max_level

    @property
    def criterion_names(self) -> list[str]:
        return [c.name for c in self.criteria]

    def to_dict(self) -> dict:
        return {
            "id": self.rubric_id,
            "title": self.title,
            "description": self.description,
            "applicable_grades": list(self.applicable_grades),
            "criteria": [c.to_dict() for c in self.criteria],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Rubric":
        return cls(
            rubric_id=data["id"],
            title=data["title"],
            criteria=tuple(RubricCriterion.from_dict(c) for c in data.get("criteria", [])),
            description=data.get("description", ""),
            applicable_grades=tuple(data.get("applicable_grades", [])),
        )


def validate_rubric(data: dict) -> None:
    """Validate rubric JSON structure.

    Raises ValueError if the rubric is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Rubric must be a JSON object.")

    if not data.get("id"):
        raise ValueError("Rubric must have a non-empty 'id'.")

    if not data.get("title"):
        raise ValueError("Rubric must have a non-empty 'title'.")

    if "criteria" not in data or not isinstance(data["criteria"], list):
        raise ValueError("Rubric must have a 'criteria' list.")

    if len(data["criteria"]) == 0:
        raise ValueError("Rubric must have at least one criterion.")

    names = set()
    for i, criterion in enumerate(data["criteria"]):
        if not isinstance(criterion, dict):
            raise ValueError(f"Criterion #{i + 1} must be a JSON object.")

        name = criterion.get("name")
        if not name:
            raise ValueError(f"Criterion #{i + 1} must have a non-empty 'name'.")
        if name in names:
            raise ValueError(f"Duplicate criterion name '{name}'.")
        names.add(name)

        _validate_levels(name, criterion.get("levels"))


def _validate_levels(name: str, levels) -> None:
    if not isinstance(levels, list) or not levels:
        raise ValueError(f"Criterion '{name}' must have a non-empty 'levels' list.")

    previous_pct = 0.0
    for expected, level in enumerate(levels, start=1):
        if not isinstance(level, dict):
            raise ValueError(f"Criterion '{name}' level #{expected} must be a JSON object.")

        number = level.get("level")
        if not isinstance(number, int) or isinstance(number, bool):
            raise ValueError(f"Criterion '{name}' level #{expected} must have an integer 'level'.")
        if number != expected:
            raise ValueError(
                f"Criterion '{name}' levels must be numbered 1..n in order; "
                f"expected {expected}, got {number}."
            )

        pct = level.get("percentage")
        if pct is None:
            if number not in STANDARD_LEVEL_PERCENTAGES:
                raise ValueError(
                    f"Criterion '{name}' level {number} needs an explicit 'percentage'."
                )
            pct = STANDARD_LEVEL_PERCENTAGES[number]
        elif not isinstance(pct, (int, float)) or isinstance(pct, bool):
            raise ValueError(f"Criterion '{name}' level {number} has a non-numeric percentage.")

        if not 0.0 < pct <= 1.0:
            raise ValueError(
                f"Criterion '{name}' level {number} percentage must be in (0, 1], got {pct}."
            )
        if pct < previous_pct:
            raise ValueError(
                f"Criterion '{name}' percentages must not decrease with level "
                f"(level {number} has {pct} < {previous_pct})."
            )
        previous_pct = pct


def save_rubric(rubric: Rubric, filepath) -> None:
    """Save a rubric to a JSON file."""
    filepath = Path(filepath)
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(rubric.to_dict(), f, indent=2)


def load_rubric(filepath) -> Rubric:
    """Load and validate a rubric from a JSON file.

    Raises:
        json.JSONDecodeError: If file is not valid JSON.
        ValueError: If rubric structure is invalid.
        OSError: If the file cannot be read.
    """
    filepath = Path(filepath)
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    validate_rubric(data)
    return Rubric.from_dict(data)
