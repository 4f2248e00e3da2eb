"""
Shared test fixtures for the gradebook test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import sys
from pathlib import Path

# Ensure app/ is on sys.path so bare imports (models, controllers, grading)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from controllers.grading_workflow import GradingWorkflow
from grading.rubric import Rubric, RubricCriterion, RubricLevel, STANDARD_LEVEL_PERCENTAGES
from grading.rubric_scores import RubricScoreStore
from models.assignment import AssignmentData
from models.directory import CourseDirectory
from models.grade_matrix import GradeMatrix
from models.student import StudentData


def make_criterion(name, percentages=None):
    """Helper to create a criterion with levels 1..n."""
    if percentages is None:
        percentages = [STANDARD_LEVEL_PERCENTAGES[i] for i in range(1, 5)]
    levels = tuple(RubricLevel(level=i, percentage=p) for i, p in enumerate(percentages, start=1))
    return RubricCriterion(name=name, levels=levels)


def make_rubric(*criterion_names, rubric_id="r1", title="Test Rubric"):
    """Helper to create a rubric whose criteria all use the standard scale."""
    return Rubric(
        rubric_id=rubric_id,
        title=title,
        criteria=tuple(make_criterion(name) for name in criterion_names),
    )


def rubric_dict(rubric_id="essay", criteria=("Ideas", "Organization")):
    """Helper to create rubric JSON data with standard levels."""
    return {
        "id": rubric_id,
        "title": f"{rubric_id} rubric",
        "criteria": [
            {"name": name, "levels": [{"level": i, "description": f"L{i}"} for i in range(1, 5)]}
            for name in criteria
        ],
    }


class EventLog:
    """Simple observer that records (event, data) tuples."""

    def __init__(self):
        self.events = []

    def __call__(self, event, data):
        self.events.append((event, data))

    def count(self, event_name):
        return sum(1 for e, _ in self.events if e == event_name)

    def names(self):
        return [e for e, _ in self.events]

    def last(self):
        return self.events[-1] if self.events else None


@pytest.fixture
def two_criterion_rubric():
    return make_rubric("Organization", "Content")


@pytest.fixture
def directory():
    """
    Class c1 with three students and three assignments:

    A1 - 100 pts, no rubric
    A2 - 40 pts, rubric "r1"
    A3 - 50 pts, no rubric
    """
    d = CourseDirectory()
    d.add_student(StudentData("s1", "Ada", "Lovelace"), class_id="c1")
    d.add_student(StudentData("s2", "Alan", "Turing"), class_id="c1")
    d.add_student(StudentData("s3", "Grace", "Hopper"), class_id="c1")
    d.add_assignment(AssignmentData("A1", "c1", 100, title="Quiz 1"))
    d.add_assignment(AssignmentData("A2", "c1", 40, title="Essay", rubric_id="r1"))
    d.add_assignment(AssignmentData("A3", "c1", 50, title="Lab"))
    return d


@pytest.fixture
def matrix():
    return GradeMatrix()


@pytest.fixture
def score_store():
    return RubricScoreStore()


@pytest.fixture
def workflow(matrix, score_store, directory):
    return GradingWorkflow(matrix=matrix, score_store=score_store, directory=directory)
