"""Aggregate statistics over the grade matrix.

Class and assignment averages, points-weighted final grades, letter
grade and achievement level distributions, and score histograms for
reporting views.

Pure Python module - no Qt dependencies. Matplotlib is used only for
figure creation and is imported lazily.
"""

from __future__ import annotations

import statistics
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional

from models.grade import LETTER_GRADE_THRESHOLDS, AchievementLevel

if TYPE_CHECKING:
    from models.assignment import AssignmentData
    from models.grade_matrix import GradeMatrix


@dataclass
class AssignmentStatistics:
    """Score summary for one assignment (percentages)."""

    assignment_id: str
    count: int
    mean: float
    median: float
    min_score: float
    max_score: float


def weighted_final_grade(
    matrix: GradeMatrix, student_id: str, assignments: Iterable[AssignmentData]
) -> Optional[float]:
    """Return a student's final percentage weighted by assignment points.

    Only assignments the student has a grade for count; excused grades
    are left out. Returns None when nothing counts.
    """
    earned = 0.0
    possible = 0.0
    for assignment in assignments:
        grade = matrix.get(student_id, assignment.assignment_id)
        if grade is None or grade.is_excused:
            continue
        possible += assignment.total_points
        earned += grade.score / 100.0 * assignment.total_points
    if possible == 0:
        return None
    return earned / possible * 100.0


def class_average(matrix: GradeMatrix, class_id: str) -> Optional[float]:
    """Mean score over every grade recorded for a class."""
    scores = [g.score for g in matrix.filter(lambda g: g.class_id == class_id)]
    if not scores:
        return None
    return statistics.fmean(scores)


def assignment_statistics(matrix: GradeMatrix, assignment_id: str) -> AssignmentStatistics:
    """Summarize the scores recorded for an assignment."""
    scores = [g.score for g in matrix.grades_for_assignment(assignment_id)]
    if not scores:
        return AssignmentStatistics(assignment_id, 0, 0.0, 0.0, 0.0, 0.0)
    return AssignmentStatistics(
        assignment_id=assignment_id,
        count=len(scores),
        mean=statistics.fmean(scores),
        median=float(statistics.median(scores)),
        min_score=float(min(scores)),
        max_score=float(max(scores)),
    )


def letter_grade_distribution(scores: Iterable[float]) -> dict[str, int]:
    """Count scores per letter grade, best grade first, F last."""
    counts = {letter: 0 for _, letter in LETTER_GRADE_THRESHOLDS}
    counts["F"] = 0
    for score in scores:
        for minimum, letter in LETTER_GRADE_THRESHOLDS:
            if score >= minimum:
                counts[letter] += 1
                break
        else:
            counts["F"] += 1
    return counts


def achievement_distribution(scores: Iterable[float]) -> dict[AchievementLevel, int]:
    """Count scores per achievement level."""
    counter = Counter(AchievementLevel.for_percentage(s) for s in scores)
    return {level: counter.get(level, 0) for level in AchievementLevel}


# Bar colour per achievement level of the bin's lower edge
_LEVEL_COLOURS = {
    AchievementLevel.LEVEL_1: "#E57373",
    AchievementLevel.LEVEL_2: "#FFB74D",
    AchievementLevel.LEVEL_3: "#81C784",
    AchievementLevel.LEVEL_4: "#388E3C",
}


def _bin_index(percentage: float, num_bins: int) -> int:
    clamped = max(0.0, min(100.0, percentage))
    return min(int(clamped * num_bins / 100.0), num_bins - 1)


def compute_score_bins(scores: Iterable[float], num_bins: int = 10) -> tuple[list[str], list[int]]:
    """Count percentages in ``num_bins`` equal-width bins over 0-100.

    Labels read like ``"0-10%"``. Out-of-range scores are clamped and a
    score of exactly 100 falls in the last bin.
    """
    if num_bins < 1:
        raise ValueError("num_bins must be at least 1")
    edges = [round(i * 100 / num_bins) for i in range(num_bins + 1)]
    labels = [f"{lo}-{hi}%" for lo, hi in zip(edges, edges[1:])]
    filled = Counter(_bin_index(s, num_bins) for s in scores)
    return labels, [filled.get(i, 0) for i in range(num_bins)]


def create_histogram_figure(scores: Iterable[float], num_bins: int = 10, title: str = "Grade Distribution"):
    """Build a matplotlib Figure of the score distribution.

    Bars are coloured by achievement level and a dashed line marks the
    mean score when there is at least one.
    """
    import matplotlib.figure as mpl_figure
    from matplotlib.ticker import MaxNLocator

    scores = list(scores)
    labels, counts = compute_score_bins(scores, num_bins)
    width = 100.0 / num_bins
    colours = [_LEVEL_COLOURS[AchievementLevel.for_percentage(i * width)] for i in range(num_bins)]

    fig = mpl_figure.Figure(figsize=(6, 3), dpi=100)
    ax = fig.add_subplot(111)
    ax.bar(range(num_bins), counts, color=colours, edgecolor="#424242", width=0.9)

    if scores:
        mean = statistics.fmean(scores)
        # bar i is centred on i, so score s sits at s / width - 0.5
        ax.axvline(mean / width - 0.5, color="#1565C0", linestyle="--", linewidth=1,
                   label=f"Mean {mean:.1f}%")
        ax.legend(loc="upper left", fontsize=8)

    ax.set_xticks(range(num_bins))
    ax.set_xticklabels(labels, rotation=45, ha="right", fontsize=8)
    ax.set_xlabel("Score (%)")
    ax.set_ylabel("Students")
    ax.set_title(title)
    ax.set_ylim(0, max(counts, default=0) + 1)
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))

    fig.tight_layout()
    return fig
