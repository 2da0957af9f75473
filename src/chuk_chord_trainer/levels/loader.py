"""
Level loader - discovers and loads level configurations.

Levels can come from:
1. Built-in library (shipped with package)
2. Project levels (a user's own directory of level files)

One YAML file per level, named after the level id. A `kind` key says
which family the level belongs to.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_chord_trainer.constants import ErrorMessages, LevelKind
from chuk_chord_trainer.errors import ConfigurationError
from chuk_chord_trainer.models.level import (
    ChordLevelConfig,
    LevelConfig,
    ProgressionLevelConfig,
)

logger = logging.getLogger(__name__)

_MODELS: dict[LevelKind, type[ChordLevelConfig] | type[ProgressionLevelConfig]] = {
    LevelKind.CHORD_RECOGNITION: ChordLevelConfig,
    LevelKind.PROGRESSION_TRANSCRIPTION: ProgressionLevelConfig,
}


class LevelLoader:
    """
    Discovers and loads level definitions.

    Levels are loaded from YAML files in the library and project directories.
    Project levels override library levels with the same id.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the level loader.

        Args:
            library_path: Path to built-in level library
            project_path: Path to project levels directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, LevelConfig] = {}

    def list_levels(self, kind: LevelKind | str | None = None) -> list[LevelConfig]:
        """
        List all available levels, sorted by id.

        Project levels take precedence. Files that fail to load are skipped
        with a warning.

        Args:
            kind: Only list levels of this kind
        """
        levels: dict[str, LevelConfig] = {}
        for directory in self._search_order():
            for path in sorted(directory.glob("*.yaml")):
                try:
                    level = self._load_level_file(path)
                except ConfigurationError as e:
                    logger.warning("Skipping level file: %s", e)
                    continue
                levels[level.id] = level

        wanted = LevelKind(kind) if kind is not None else None
        return [
            level
            for level_id, level in sorted(levels.items())
            if wanted is None or _MODELS[wanted] is type(level)
        ]

    def get_level(self, level_id: str) -> LevelConfig:
        """
        Get a level by id.

        Project levels take precedence over library levels.

        Raises:
            ConfigurationError: Unknown id or invalid level file
        """
        if level_id in self._cache:
            return self._cache[level_id]

        for directory in reversed(self._search_order()):
            path = directory / f"{level_id}.yaml"
            if path.exists():
                level = self._load_level_file(path)
                self._cache[level_id] = level
                return level

        raise ConfigurationError(ErrorMessages.UNKNOWN_LEVEL.format(level_id=level_id))

    def get_chord_level(self, level_id: str) -> ChordLevelConfig:
        """Get a chord recognition level; other kinds raise ConfigurationError."""
        level = self.get_level(level_id)
        if not isinstance(level, ChordLevelConfig):
            raise ConfigurationError(f"Level '{level_id}' is not a chord recognition level.")
        return level

    def get_progression_level(self, level_id: str) -> ProgressionLevelConfig:
        """Get a progression transcription level; other kinds raise ConfigurationError."""
        level = self.get_level(level_id)
        if not isinstance(level, ProgressionLevelConfig):
            raise ConfigurationError(
                f"Level '{level_id}' is not a progression transcription level."
            )
        return level

    def copy_to_project(self, level_id: str) -> Path:
        """
        Copy a library level to the project for customization.

        Args:
            level_id: Level id

        Returns:
            Path to the copied file

        Raises:
            ConfigurationError: No project path, unknown id, or already copied
        """
        if not self.project_path:
            raise ConfigurationError("No project path configured")

        library_file = self.library_path / f"{level_id}.yaml"
        if not library_file.exists():
            raise ConfigurationError(ErrorMessages.UNKNOWN_LEVEL.format(level_id=level_id))

        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / f"{level_id}.yaml"
        if dest_file.exists():
            raise ConfigurationError(f"Level already exists in project: {level_id}")

        dest_file.write_text(library_file.read_text(encoding="utf-8"), encoding="utf-8")

        # Invalidate cache
        self._cache.pop(level_id, None)

        return dest_file

    def clear_cache(self) -> None:
        """Clear the level cache."""
        self._cache.clear()

    def _search_order(self) -> list[Path]:
        """Existing level directories, lowest precedence first."""
        directories = [self.library_path]
        if self.project_path:
            directories.append(self.project_path)
        return [directory for directory in directories if directory.exists()]

    def _load_level_file(self, path: Path) -> LevelConfig:
        """Load a level from a YAML file."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                ErrorMessages.INVALID_LEVEL_FILE.format(path=path, reason=e)
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                ErrorMessages.INVALID_LEVEL_FILE.format(path=path, reason="expected a mapping")
            )
        return self._parse_level(data, path)

    def _parse_level(self, data: dict[str, Any], path: Path) -> LevelConfig:
        """Parse a level from YAML data."""
        data = dict(data)
        data.setdefault("id", path.stem)
        try:
            kind = LevelKind(data.pop("kind", LevelKind.CHORD_RECOGNITION))
        except ValueError as e:
            raise ConfigurationError(
                ErrorMessages.INVALID_LEVEL_FILE.format(path=path, reason=e)
            ) from e

        try:
            return _MODELS[kind].model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(
                ErrorMessages.INVALID_LEVEL_FILE.format(path=path, reason=e)
            ) from e
