# worldscape/render/wireframe.py
"""
Wireframe scaffolding drawn behind the panels.

Each panel gets a long depth tunnel and a tall vertical shaft, both boxes
projected corner by corner. A box whose corners are all far above or all far
below the viewport is dropped.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple

from ..core.world import Panel, World
from ..view.projection import (
    BOX_EDGES, CameraState, Projection, ProjectionConfig, DEFAULT_PROJECTION, project_box,
)
from .draw import DrawBatch
from .style import Palette, DEFAULT_PALETTE, with_alpha


@dataclass(frozen=True)
class WireframeConfig:
    tunnel_padding: float = 40.0
    tunnel_depth: float = 4000.0
    tunnel_stroke: float = 1.0
    tunnel_opacity: float = 0.15
    shaft_height: float = 6000.0
    shaft_depth: float = 20.0
    shaft_stroke: float = 0.5
    shaft_opacity: float = 0.1
    offscreen_margin: float = 1000.0


DEFAULT_WIREFRAME = WireframeConfig()


@dataclass(frozen=True)
class WireBox:
    panel_id: str
    name: str
    corners: Tuple[Projection, ...]
    stroke: float
    opacity: float

    def edges(self):
        for a, b in BOX_EDGES:
            yield self.corners[a], self.corners[b]


def _offscreen(corners: List[Projection], viewport_height: float, margin: float) -> bool:
    return (all(c.screen_y < -margin for c in corners) or
            all(c.screen_y > viewport_height + margin for c in corners))


def panel_wireframes(
    panel: Panel,
    camera: CameraState,
    config: WireframeConfig = DEFAULT_WIREFRAME,
    projection_config: ProjectionConfig = DEFAULT_PROJECTION,
) -> List[WireBox]:
    specs = (
        ('tunnel', panel.width + config.tunnel_padding, panel.height + config.tunnel_padding,
         config.tunnel_depth, config.tunnel_stroke, config.tunnel_opacity),
        ('shaft', panel.width, config.shaft_height, config.shaft_depth,
         config.shaft_stroke, config.shaft_opacity),
    )

    boxes = []
    for name, w, h, d, stroke, opacity in specs:
        corners = project_box(
            panel.position, w, h, d,
            camera.scroll_offset, camera.viewport_width, camera.viewport_height,
            camera.rotation, projection_config,
        )
        if _offscreen(corners, camera.viewport_height, config.offscreen_margin):
            continue
        boxes.append(WireBox(panel.id, name, tuple(corners), stroke, opacity))
    return boxes


def build_wireframes(
    world: World,
    camera: CameraState,
    config: WireframeConfig = DEFAULT_WIREFRAME,
    projection_config: ProjectionConfig = DEFAULT_PROJECTION,
) -> List[WireBox]:
    boxes = []
    for panel in world:
        boxes.extend(panel_wireframes(panel, camera, config, projection_config))
    return boxes


def draw_wireframes(batch: DrawBatch, boxes: List[WireBox], z_index: int = 0,
                    palette: Palette = DEFAULT_PALETTE):
    for box in boxes:
        color = with_alpha(palette.wireframe, box.opacity)
        for a, b in box.edges():
            batch.line(a.screen_x, a.screen_y, b.screen_x, b.screen_y, color, box.stroke,
                       z_index, tag=f"{box.panel_id}:{box.name}")
