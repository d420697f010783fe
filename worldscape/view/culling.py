"""
Visibility culling.

A panel is dropped when its projected centre is more than `margin_factor`
panel heights beyond the top or bottom viewport edge. The expanded panel is
never culled, and during the singularity sequence nothing is (panels blow up
to fill the screen). Focus mode is a hard override: with a panel expanded,
only that panel is rendered at all.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from ..core.world import Panel
from .projection import Projection


@dataclass(frozen=True)
class CullingConfig:
    margin_factor: float = 2.0


DEFAULT_CULLING = CullingConfig()


def is_culled(
    projection: Projection,
    height: float,
    viewport_height: float,
    expanded: bool = False,
    sequence_active: bool = False,
    config: CullingConfig = DEFAULT_CULLING,
) -> bool:
    if expanded or sequence_active:
        return False
    margin = height * config.margin_factor
    return projection.screen_y < -margin or projection.screen_y > viewport_height + margin


def visible_panels(
    panels: Iterable[Panel],
    projections: Dict[str, Projection],
    viewport_height: float,
    expanded_id: Optional[str] = None,
    sequence_active: bool = False,
    config: CullingConfig = DEFAULT_CULLING,
) -> List[Panel]:
    """Panels worth rendering, in world order."""
    if expanded_id is not None:
        return [p for p in panels if p.id == expanded_id]
    
    visible = []
    for panel in panels:
        projection = projections.get(panel.id)
        if projection is None:
            continue
        if is_culled(projection, panel.height, viewport_height,
                     sequence_active=sequence_active, config=config):
            continue
        visible.append(panel)
    return visible
