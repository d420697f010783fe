"""
Draw Batch

Backend-neutral draw commands for the host surface.

Design:
- Layers push quads and lines while composing a frame
- finalize() sorts by z-index (paint order, back to front)
- Vertex arrays are plain numpy buffers any 2D/GL surface can consume

Primitives:
- Filled quads (centre-anchored, optional rotation)
- Lines with width
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple
import math

import numpy as np

from .style import Color, color_rgba


# =============================================================================
# Draw Commands
# =============================================================================

@dataclass
class DrawQuad:
    """A quad centred on (cx, cy)."""
    cx: float
    cy: float
    w: float
    h: float
    color: Tuple[float, float, float, float]
    rotation: float = 0.0  # Degrees, about the centre
    z_index: int = 0
    tag: str = ""

    def corners(self) -> np.ndarray:
        """(4, 2) corner positions: TL, TR, BR, BL."""
        hw, hh = self.w / 2.0, self.h / 2.0
        local = np.array([[-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]], dtype=np.float64)
        if self.rotation:
            rad = math.radians(self.rotation)
            c, s = math.cos(rad), math.sin(rad)
            local = local @ np.array([[c, s], [-s, c]])
        return local + np.array([self.cx, self.cy])


@dataclass
class DrawLine:
    """A line segment."""
    x0: float
    y0: float
    x1: float
    y1: float
    color: Tuple[float, float, float, float]
    width: float = 1.0
    z_index: int = 0
    dash: Tuple[float, float] = ()
    tag: str = ""


# =============================================================================
# Draw Batch
# =============================================================================

@dataclass
class DrawBatch:
    """
    Collection of draw commands, sorted for painting.

    After building, call finalize() to sort by z-index.
    """
    quads: List[DrawQuad] = field(default_factory=list)
    lines: List[DrawLine] = field(default_factory=list)

    _finalized: bool = False

    def add_quad(self, quad: DrawQuad):
        self.quads.append(quad)
        self._finalized = False

    def add_line(self, line: DrawLine):
        self.lines.append(line)
        self._finalized = False

    def quad(self, cx: float, cy: float, w: float, h: float, color: Color,
             rotation: float = 0.0, z_index: int = 0, tag: str = ""):
        self.add_quad(DrawQuad(cx, cy, w, h, color_rgba(color), rotation, z_index, tag))

    def line(self, x0: float, y0: float, x1: float, y1: float, color: Color,
             width: float = 1.0, z_index: int = 0, dash: Tuple[float, float] = (), tag: str = ""):
        self.add_line(DrawLine(x0, y0, x1, y1, color_rgba(color), width, z_index, dash, tag))

    def finalize(self) -> DrawBatch:
        """Sort commands by z-index. Stable, so insertion order breaks ties."""
        self.quads.sort(key=lambda q: q.z_index)
        self.lines.sort(key=lambda l: l.z_index)
        self._finalized = True
        return self

    @property
    def finalized(self) -> bool:
        return self._finalized

    def clear(self):
        """Clear all commands."""
        self.quads.clear()
        self.lines.clear()
        self._finalized = False

    @property
    def quad_count(self) -> int:
        return len(self.quads)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    # -------------------------------------------------------------------------
    # Vertex Export
    # -------------------------------------------------------------------------

    def quad_vertices(self) -> np.ndarray:
        """Two triangles per quad. Format: pos(2f) + color(4f)."""
        vertices = np.zeros((len(self.quads) * 6, 6), dtype=np.float32)

        for i, q in enumerate(self.quads):
            tl, tr, br, bl = q.corners()
            base = i * 6
            for j, corner in enumerate((tl, tr, br, tl, br, bl)):
                vertices[base + j] = [corner[0], corner[1], *q.color]

        return vertices

    def line_vertices(self) -> np.ndarray:
        """Two vertices per line. Format: pos(2f) + color(4f) + width(1f)."""
        vertices = np.zeros((len(self.lines) * 2, 7), dtype=np.float32)

        for i, ln in enumerate(self.lines):
            base = i * 2
            vertices[base + 0] = [ln.x0, ln.y0, *ln.color, ln.width]
            vertices[base + 1] = [ln.x1, ln.y1, *ln.color, ln.width]

        return vertices
