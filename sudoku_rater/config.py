"""
Generator settings.

Defaults can be overridden from a JSON file; keys missing from the file
keep their default value.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .generator.generator import FillAlgorithm, ThinningAlgorithm, check_filled_cells

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_FILE = Path("sudoku-rater.json")


@dataclass
class GeneratorSettings:
    """Settings for the puzzle generator and its worker pool."""
    fill_algorithm: FillAlgorithm = FillAlgorithm.DIAGONAL_THIN_OUT
    thinning: ThinningAlgorithm = ThinningAlgorithm.MIRRORED
    max_filled_cells: int = 24
    min_effort: Optional[float] = None
    num_threads: int = os.cpu_count() or 1
    mask: Optional[str] = None
    seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.fill_algorithm, str):
            self.fill_algorithm = FillAlgorithm(self.fill_algorithm)
        if isinstance(self.thinning, str):
            self.thinning = ThinningAlgorithm(self.thinning)
        check_filled_cells(self.max_filled_cells)
        if self.num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {self.num_threads}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GeneratorSettings:
        """Build settings from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning("Ignoring unknown settings: %s", ", ".join(sorted(unknown)))
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to a JSON-compatible dictionary."""
        data = asdict(self)
        data["fill_algorithm"] = self.fill_algorithm.value
        data["thinning"] = self.thinning.value
        return data


def load_settings(path: Union[str, Path, None] = None) -> GeneratorSettings:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (default: sudoku-rater.json in the working directory).

    Returns:
        Settings merged over the defaults. Returns defaults if the file is
        missing or invalid.
    """
    path = Path(path) if path is not None else DEFAULT_SETTINGS_FILE
    if not path.exists():
        logger.debug("Settings file %s not found, using defaults", path)
        return GeneratorSettings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("settings file must hold a JSON object")
        settings = GeneratorSettings.from_dict(data)
        logger.debug("Settings loaded: %s", settings)
        return settings
    except (json.JSONDecodeError, IOError, ValueError, TypeError) as e:
        logger.warning("Failed to load settings from %s: %s, using defaults", path, e)
        return GeneratorSettings()


def save_settings(settings: GeneratorSettings, path: Union[str, Path, None] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings to save.
        path: Target file (default: sudoku-rater.json in the working directory).
    """
    path = Path(path) if path is not None else DEFAULT_SETTINGS_FILE
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.debug("Settings saved to %s", path)
    except IOError as e:
        logger.error("Failed to save settings to %s: %s", path, e)
