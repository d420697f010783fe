"""
Style

Colours for the draw layer. Panels carry a theme tag; the palette maps the
tag to a colour here, the core math never looks at it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


# =============================================================================
# Color
# =============================================================================

# Color can be:
# - Tuple of 3-4 floats (RGB or RGBA, 0.0-1.0)
# - None (transparent)
Color = Optional[Tuple[float, ...]]


def color_rgba(c: Color) -> Tuple[float, float, float, float]:
    """Normalize color to RGBA tuple."""
    if c is None:
        return (0.0, 0.0, 0.0, 0.0)
    if len(c) == 3:
        return (c[0], c[1], c[2], 1.0)
    return (c[0], c[1], c[2], c[3])


def with_alpha(c: Color, alpha: float) -> Tuple[float, float, float, float]:
    r, g, b, a = color_rgba(c)
    return (r, g, b, a * alpha)


def hex_to_color(hex_str: str) -> Color:
    """Convert hex string to color. Supports #RGB, #RRGGBB, #RRGGBBAA."""
    h = hex_str.lstrip('#')
    if len(h) == 3:
        r, g, b = int(h[0], 16) / 15, int(h[1], 16) / 15, int(h[2], 16) / 15
        return (r, g, b, 1.0)
    elif len(h) == 6:
        r, g, b = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255
        return (r, g, b, 1.0)
    elif len(h) == 8:
        r, g, b, a = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255, int(h[6:8], 16) / 255
        return (r, g, b, a)
    raise ValueError(f"Invalid hex color: {hex_str}")


# =============================================================================
# Palette
# =============================================================================

THEME_HEX: Dict[str, str] = {
    'cyan': '#00f3ff',
    'magenta': '#ff00ff',
    'yellow': '#ffe600',
    'rust': '#a63737',
    'olive': '#708238',
    'slate': '#4a5d6e',
}


@dataclass
class Palette:
    """Named colours for the world layers."""

    panel_themes: Dict[str, Color] = field(
        default_factory=lambda: {name: hex_to_color(h) for name, h in THEME_HEX.items()}
    )
    fallback_theme: str = 'cyan'

    panel_body: Color = (0.08, 0.08, 0.08, 1.0)
    beam_casing: Color = (0.25, 0.25, 0.25, 0.5)
    beam_core: Color = (0.02, 0.02, 0.03, 1.0)
    beam_cable: Color = (0.0, 0.95, 1.0, 0.8)
    beam_joint: Color = (0.25, 0.25, 0.25, 1.0)
    wireframe: Color = (1.0, 1.0, 1.0, 1.0)

    def theme(self, name: str) -> Color:
        return self.panel_themes.get(name, self.panel_themes[self.fallback_theme])


DEFAULT_PALETTE = Palette()
