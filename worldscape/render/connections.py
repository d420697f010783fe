# worldscape/render/connections.py
"""
Connectivity beams between related panels.

Second pass over the same per-panel projections the panels use. A
connected_to id with no matching panel simply yields no beam. Beams whose two
ends are both far above or both far below the viewport are skipped; this is a
coarse fixed-margin cut, independent of panel size.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.world import World
from ..view.projection import CameraState, Projection, ProjectionConfig, DEFAULT_PROJECTION, project_state
from .draw import DrawBatch
from .style import Palette, DEFAULT_PALETTE


@dataclass(frozen=True)
class ConnectionConfig:
    offscreen_margin: float = 500.0
    min_width: float = 4.0
    width_scale: float = 15.0
    casing_extra: float = 4.0
    cable_ratio: float = 0.2
    cable_dash: tuple = (10.0, 5.0)


DEFAULT_CONNECTIONS = ConnectionConfig()


@dataclass(frozen=True)
class Beam:
    source_id: str
    target_id: str
    start: Projection
    end: Projection
    width: float

    @property
    def key(self) -> str:
        return f"{self.source_id}-{self.target_id}"


def beam_width(start: Projection, end: Projection, config: ConnectionConfig = DEFAULT_CONNECTIONS) -> float:
    return max(config.min_width, config.width_scale * ((start.scale + end.scale) / 2))


def both_offscreen(start: Projection, end: Projection, viewport_height: float, margin: float) -> bool:
    above = start.screen_y < -margin and end.screen_y < -margin
    below = start.screen_y > viewport_height + margin and end.screen_y > viewport_height + margin
    return above or below


def build_beams(
    world: World,
    camera: CameraState,
    projections: Optional[Dict[str, Projection]] = None,
    config: ConnectionConfig = DEFAULT_CONNECTIONS,
    projection_config: ProjectionConfig = DEFAULT_PROJECTION,
) -> List[Beam]:
    """One beam per (panel, existing target) pair, in world then connected_to order."""
    if projections is None:
        projections = {p.id: project_state(p.position, camera, projection_config) for p in world}

    beams = []
    for panel in world:
        if not panel.connected_to:
            continue
        start = projections.get(panel.id)
        if start is None:
            continue
        for target_id in panel.connected_to:
            end = projections.get(target_id)
            if end is None or target_id not in world:
                continue
            if both_offscreen(start, end, camera.viewport_height, config.offscreen_margin):
                continue
            beams.append(Beam(panel.id, target_id, start, end, beam_width(start, end, config)))
    return beams


def draw_beams(
    batch: DrawBatch,
    beams: List[Beam],
    z_index: int = 0,
    config: ConnectionConfig = DEFAULT_CONNECTIONS,
    palette: Palette = DEFAULT_PALETTE,
):
    """Casing, hollow core, dashed cable and two diamond joints per beam."""
    for beam in beams:
        x0, y0 = beam.start.screen_x, beam.start.screen_y
        x1, y1 = beam.end.screen_x, beam.end.screen_y
        w = beam.width

        batch.line(x0, y0, x1, y1, palette.beam_casing, w + config.casing_extra, z_index, tag=beam.key)
        batch.line(x0, y0, x1, y1, palette.beam_core, w, z_index, tag=beam.key)
        batch.line(x0, y0, x1, y1, palette.beam_cable, w * config.cable_ratio, z_index,
                   dash=config.cable_dash, tag=beam.key)
        batch.quad(x0, y0, w, w, palette.beam_joint, rotation=45.0, z_index=z_index, tag=beam.key)
        batch.quad(x1, y1, w, w, palette.beam_joint, rotation=45.0, z_index=z_index, tag=beam.key)
