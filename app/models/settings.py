"""User-adjustable gradebook settings.

Plain data; loading and saving live in controllers.settings_manager.
"""

from dataclasses import asdict, dataclass, fields
from typing import Optional

LEVEL_SCALES = ("rubric", "standard")


@dataclass
class GradebookSettings:
    """Gradebook preferences.

    Attributes:
        max_percentage: Upper bound accepted for percentage input.
        default_max_score: Points assumed for an assignment whose total
            was never recorded by the rubric score store.
        level_scale: ``"rubric"`` takes level percentages from the rubric
            itself, ``"standard"`` uses the fixed four-tier scale.
        rubric_cache_seconds: How long loaded rubrics are reused.
        rubric_dir: Directory holding user rubric JSON files.
        histogram_bins: Number of bins for score distribution charts.
    """

    max_percentage: int = 100
    default_max_score: int = 100
    level_scale: str = "rubric"
    rubric_cache_seconds: float = 300.0
    rubric_dir: Optional[str] = None
    histogram_bins: int = 10

    def __post_init__(self):
        if self.level_scale not in LEVEL_SCALES:
            raise ValueError(
                f"level_scale must be one of {', '.join(LEVEL_SCALES)}, got '{self.level_scale}'"
            )
        if self.max_percentage <= 0:
            raise ValueError("max_percentage must be positive")
        if self.default_max_score <= 0:
            raise ValueError("default_max_score must be positive")
        if self.histogram_bins < 1:
            raise ValueError("histogram_bins must be at least 1")

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "GradebookSettings":
        """Build settings from a dict, ignoring unknown keys.

        Raises:
            ValueError: If a known key has an invalid value.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
