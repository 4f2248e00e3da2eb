"""
Controllers for the gradebook.

This package contains Qt-free controller classes that orchestrate
grade edits, bulk grading, rubric lookup and settings, notifying views
through an observer pattern.
"""

from .cell_editor import CellEditor, EditState, GradeCell, parse_score_input
from .grading_workflow import BulkGradeResult, GradingWorkflow
from .rubric_library import RubricLibrary
from .settings_manager import SettingsManager

__all__ = [
    "BulkGradeResult",
    "CellEditor",
    "EditState",
    "GradeCell",
    "GradingWorkflow",
    "RubricLibrary",
    "SettingsManager",
    "parse_score_input",
]
