"""
RubricLibrary - Rubric discovery, caching, save and load.

Built-in rubrics ship with the application as Python data; user rubrics
are JSON files saved to ~/.gradebook/rubrics/. When two rubrics share an
id the first one found wins, built-ins first.
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Callable, Optional

from grading.rubric import RUBRIC_EXTENSION, Rubric, load_rubric, save_rubric, validate_rubric
from grading.rubric_templates import BUILTIN_RUBRICS
from models.errors import RubricNotFoundError
from models.settings import GradebookSettings

logger = logging.getLogger(__name__)

USER_RUBRICS_DIR = Path.home() / ".gradebook" / "rubrics"
DEFAULT_CACHE_SECONDS = 300.0


class RubricLibrary:
    """Supplies Rubric objects by id."""

    def __init__(
        self,
        user_dir: Optional[Path] = None,
        include_builtin: bool = True,
        cache_seconds: float = DEFAULT_CACHE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.user_dir = Path(user_dir) if user_dir is not None else USER_RUBRICS_DIR
        self.include_builtin = include_builtin
        self.cache_seconds = cache_seconds
        self._clock = clock
        self._cache: Optional[list[Rubric]] = None
        self._loaded_at = 0.0

    @classmethod
    def from_settings(cls, settings: GradebookSettings, **kwargs) -> "RubricLibrary":
        """Build a library using the settings' rubric directory and cache lifetime."""
        user_dir = Path(settings.rubric_dir).expanduser() if settings.rubric_dir else None
        return cls(user_dir=user_dir, cache_seconds=settings.rubric_cache_seconds, **kwargs)

    def list_rubrics(self) -> list[Rubric]:
        """Return all available rubrics, reusing the cache while it is fresh."""
        now = self._clock()
        if self._cache is not None and now - self._loaded_at < self.cache_seconds:
            return list(self._cache)

        rubrics: list[Rubric] = []
        seen: set[str] = set()
        if self.include_builtin:
            for data in BUILTIN_RUBRICS:
                self._add_unique(Rubric.from_dict(data), rubrics, seen)
        for rubric in self._scan_directory(self.user_dir):
            self._add_unique(rubric, rubrics, seen)

        logger.debug("Loaded %d rubrics", len(rubrics))
        self._cache = rubrics
        self._loaded_at = now
        return list(rubrics)

    def get(self, rubric_id: str) -> Optional[Rubric]:
        """Return the rubric with ``rubric_id``, or None if there is none."""
        for rubric in self.list_rubrics():
            if rubric.rubric_id == rubric_id:
                return rubric
        return None

    def require(self, rubric_id: str) -> Rubric:
        rubric = self.get(rubric_id)
        if rubric is None:
            raise RubricNotFoundError(f"Unknown rubric '{rubric_id}'")
        return rubric

    def rubrics_for_grade(self, grade_level: int) -> list[Rubric]:
        return [r for r in self.list_rubrics() if grade_level in r.applicable_grades]

    def reload(self) -> list[Rubric]:
        """Drop the cache and read everything again."""
        self._cache = None
        return self.list_rubrics()

    def save(self, rubric: Rubric) -> Path:
        """Save a rubric into the user directory, replacing one with the same id.

        Raises:
            ValueError: If the rubric does not validate.
            OSError: If the file cannot be written.
        """
        validate_rubric(rubric.to_dict())
        self._ensure_user_dir()
        filepath = self.user_dir / self._id_to_filename(rubric.rubric_id)
        save_rubric(rubric, filepath)
        self._cache = None
        return filepath

    def install_defaults(self) -> list[Path]:
        """Write the built-in rubrics into the user directory if it has none.

        Returns:
            Paths written; empty if the directory already held rubrics.
        """
        self._ensure_user_dir()
        if any(self.user_dir.glob(f"*{RUBRIC_EXTENSION}")):
            return []
        written = []
        for data in BUILTIN_RUBRICS:
            filepath = self.user_dir / self._id_to_filename(data["id"])
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            written.append(filepath)
        self._cache = None
        return written

    def _ensure_user_dir(self) -> None:
        self.user_dir.mkdir(parents=True, exist_ok=True)

    def _scan_directory(self, directory: Path) -> list[Rubric]:
        """Load every valid rubric file in a directory."""
        rubrics = []
        if not directory.exists():
            return rubrics

        for filepath in sorted(directory.glob(f"*{RUBRIC_EXTENSION}")):
            try:
                rubrics.append(load_rubric(filepath))
            except (json.JSONDecodeError, ValueError, OSError) as e:
                logger.warning("Failed to read rubric %s: %s", filepath, e)
        return rubrics

    @staticmethod
    def _add_unique(rubric: Rubric, rubrics: list[Rubric], seen: set[str]) -> None:
        if rubric.rubric_id in seen:
            logger.debug("Ignoring duplicate rubric id '%s'", rubric.rubric_id)
            return
        rubrics.append(rubric)
        seen.add(rubric.rubric_id)

    @staticmethod
    def _id_to_filename(rubric_id: str) -> str:
        safe = re.sub(r"[^\w\-]+", "_", rubric_id).strip("_") or "rubric"
        return f"{safe}{RUBRIC_EXTENSION}"
