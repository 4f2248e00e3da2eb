"""Rubric level selections and their conversion to points.

The store keeps, per (student, assignment), the level chosen for each
criterion, plus the total points last recorded for each assignment.
Scores weight every criterion equally: each gets
``total_points / criteria_count`` points, of which a level awards its
percentage, truncated to whole points.

No Qt dependencies - pure Python module.
"""

import logging
import math
from dataclasses import dataclass
from typing import Mapping, Optional

from grading.rubric import STANDARD_LEVEL_PERCENTAGES, Rubric, RubricCriterion
from models.errors import InconsistentRubricDataError
from models.settings import LEVEL_SCALES

logger = logging.getLogger(__name__)

DEFAULT_MAX_SCORE = 100


@dataclass(frozen=True)
class CriterionScore:
    """Points awarded for one criterion."""

    criterion: str
    level: Optional[int]
    percentage: float
    points: int


class RubricScoreStore:
    """Per-student rubric selections for each assignment.

    Create one per gradebook session and pass it to the components that
    need it; there is no shared global instance.
    """

    def __init__(self, default_max_score: int = DEFAULT_MAX_SCORE, level_scale: str = "rubric"):
        if level_scale not in LEVEL_SCALES:
            raise ValueError(f"Unknown level scale '{level_scale}'")
        self.default_max_score = default_max_score
        self.level_scale = level_scale
        self._selections: dict[tuple[str, str], dict[str, int]] = {}
        self._assignment_points: dict[str, float] = {}

    def get_selections(self, student_id: str, assignment_id: str) -> dict[str, int]:
        """Return a copy of the recorded selections (empty if none)."""
        return dict(self._selections.get((student_id, assignment_id), {}))

    def save_selections(
        self,
        student_id: str,
        assignment_id: str,
        selections: Mapping[str, int],
        total_points: float,
    ) -> None:
        """Replace the selections for a cell and record the assignment's points.

        The last call wins for ``total_points``; differing totals saved for
        the same assignment by different students are not reconciled.
        """
        self._selections[(student_id, assignment_id)] = dict(selections)
        self._assignment_points[assignment_id] = total_points

    def has_total_points(self, assignment_id: str) -> bool:
        return assignment_id in self._assignment_points

    def max_score(self, assignment_id: str) -> int:
        """Return the last saved total points, or the default if never saved."""
        return int(self._assignment_points.get(assignment_id, self.default_max_score))

    def score_breakdown(
        self,
        rubric: Rubric,
        student_id: str,
        assignment_id: str,
        selections: Optional[Mapping[str, int]] = None,
    ) -> list[CriterionScore]:
        """Return the points awarded per criterion, in rubric order."""
        if selections is None:
            selections = self._selections.get((student_id, assignment_id), {})
        total_points = self._assignment_points.get(assignment_id, self.default_max_score)
        points_per_criterion = total_points / max(1, len(rubric.criteria))

        breakdown = []
        for criterion in rubric.criteria:
            level = selections.get(criterion.name)
            pct = self._level_percentage(criterion, level)
            breakdown.append(
                CriterionScore(
                    criterion=criterion.name,
                    level=level,
                    percentage=pct,
                    points=math.floor(round(points_per_criterion * pct, 9)),
                )
            )
        return breakdown

    def total_score(
        self,
        rubric: Rubric,
        student_id: str,
        assignment_id: str,
        selections: Optional[Mapping[str, int]] = None,
    ) -> int:
        """Return the whole-point total for a set of selections.

        Uses the stored selections when ``selections`` is omitted. Unselected
        criteria and levels the criterion does not define score 0.
        """
        breakdown = self.score_breakdown(rubric, student_id, assignment_id, selections)
        return sum(cs.points for cs in breakdown)

    def check_selections(self, rubric: Rubric, selections: Mapping[str, int]) -> None:
        """Raise InconsistentRubricDataError if a selection does not fit the rubric."""
        for name, level in selections.items():
            criterion = rubric.criterion(name)
            if criterion is None:
                raise InconsistentRubricDataError(
                    f"Rubric '{rubric.rubric_id}' has no criterion '{name}'"
                )
            if criterion.get_level(level) is None:
                raise InconsistentRubricDataError(
                    f"Criterion '{name}' has no level {level} "
                    f"(levels 1-{criterion.max_level})"
                )

    def clear(self) -> None:
        """Drop all selections and recorded totals."""
        self._selections.clear()
        self._assignment_points.clear()

    def _level_percentage(self, criterion: RubricCriterion, level: Optional[int]) -> float:
        if level is None:
            return 0.0
        defined = criterion.get_level(level)
        if defined is None:
            logger.debug(
                "Selection level %s is not defined on criterion '%s'; scoring 0",
                level,
                criterion.name,
            )
            return 0.0
        if self.level_scale == "standard":
            return STANDARD_LEVEL_PERCENTAGES.get(level, 0.0)
        return defined.percentage
