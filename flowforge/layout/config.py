"""Layout strategies and their tunables."""

from enum import Enum

from pydantic import BaseModel, Field


class LayoutStrategy(str, Enum):
    hierarchical = "hierarchical"
    organic = "organic"


class LayoutDirection(str, Enum):
    """Main axis of a hierarchical layout."""

    TB = "TB"  # top to bottom
    LR = "LR"  # left to right


class HierarchicalLayoutConfig(BaseModel):
    """Fixed box size and spacing for rank-based placement."""

    model_config = {"frozen": True}

    direction: LayoutDirection = LayoutDirection.TB
    node_width: float = Field(default=220, gt=0)
    node_height: float = Field(default=90, gt=0)
    node_sep: float = Field(default=120, ge=0)  # between nodes of one rank
    rank_sep: float = Field(default=180, ge=0)  # between ranks
    margin_x: float = Field(default=60, ge=0)
    margin_y: float = Field(default=60, ge=0)


class OrganicLayoutConfig(BaseModel):
    """Cluster spread, ring radius and jitter for organic placement.

    The usable area is `[margin, width - right_reserve]` by
    `[margin, height - bottom_reserve]`; the reserves leave room for the node
    box itself since positions are top-left corners.
    """

    model_config = {"frozen": True}

    margin: float = 50
    right_reserve: float = 200
    bottom_reserve: float = 100
    base_radius: float = 60
    radius_step: float = 30  # added per cluster member
    jitter: float = Field(default=30, ge=0)
