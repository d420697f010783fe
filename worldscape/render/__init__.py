# worldscape/render/__init__.py
"""Render module - draw batches, beams and wireframe scaffolding."""

from .style import (
    Color,
    Palette,
    DEFAULT_PALETTE,
    THEME_HEX,
    color_rgba,
    with_alpha,
    hex_to_color,
)

from .draw import (
    DrawBatch,
    DrawQuad,
    DrawLine,
)

from .connections import (
    Beam,
    ConnectionConfig,
    beam_width,
    build_beams,
    draw_beams,
)

from .wireframe import (
    WireBox,
    WireframeConfig,
    panel_wireframes,
    build_wireframes,
    draw_wireframes,
)

__all__ = [
    'Color',
    'Palette',
    'DEFAULT_PALETTE',
    'THEME_HEX',
    'color_rgba',
    'with_alpha',
    'hex_to_color',
    'DrawBatch',
    'DrawQuad',
    'DrawLine',
    'Beam',
    'ConnectionConfig',
    'beam_width',
    'build_beams',
    'draw_beams',
    'WireBox',
    'WireframeConfig',
    'panel_wireframes',
    'build_wireframes',
    'draw_wireframes',
]
