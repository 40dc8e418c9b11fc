"""Layout constants and path configuration."""

from dataclasses import dataclass, replace
import os
from pathlib import Path

DB_ENV_VAR = "FAMTREE_DB"
DEFAULT_DB_NAME = "family_tree.db"


@dataclass(frozen=True)
class LayoutConfig:
    """
    Spacing constants for the hierarchical layout, in layout units.

    couple_spacing is wide enough to fit the "married" label between spouses;
    min_space_for_parents reserves room above a sibling group for a couple.
    """

    generation_spacing: float = 200.0
    node_spacing: float = 180.0
    sibling_group_spacing: float = 100.0
    couple_spacing: float = 280.0
    min_space_for_parents: float = 380.0
    base_x: float = 100.0
    base_offset: float = 100.0
    node_height: float = 80.0
    junction_offset: float = 65.0
    root_stride: int = 10
    sentinel_year: int = 9999

    def with_overrides(self, **overrides) -> "LayoutConfig":
        """Return a copy with the given fields replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def row_y(self, generation: int) -> float:
        return generation * self.generation_spacing + self.base_offset


DEFAULT_CONFIG = LayoutConfig()


def resolve_db_path(cli_value: str | None = None) -> Path:
    """Pick the database path: CLI flag, then environment, then the working directory."""
    if cli_value:
        return Path(cli_value)
    env_value = os.environ.get(DB_ENV_VAR)
    if env_value:
        return Path(env_value)
    return Path.cwd() / DEFAULT_DB_NAME
