"""
Level library - bundled training levels and the loader that finds them.

Levels are declarative YAML; project directories can override or add to
the bundled set.
"""

from chuk_chord_trainer.levels.loader import LevelLoader

__all__ = ["LevelLoader"]
