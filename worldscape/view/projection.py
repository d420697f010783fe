# worldscape/view/projection.py
"""
Perspective projection of world points onto the viewport.

Camera model: the viewer sits at (0, 0, PERSPECTIVE) looking down -z at the
z = 0 plane, which scrolls vertically with the page. Points farther back
(negative z) are pushed further away as the page scrolls, which gives the
depth-dependent parallax. Everything here is pure: same inputs, same outputs.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, NamedTuple, Tuple
import math

import numpy as np

from ..core.math3d import Vec3, clamp


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class ProjectionConfig:
    perspective: float = 800.0
    scroll_depth_factor: float = 0.12
    depth_attenuation: float = 1000.0
    near_epsilon: float = 10.0
    depth_order_resolution: float = 1000.0


DEFAULT_PROJECTION = ProjectionConfig()


# =============================================================================
# Values
# =============================================================================

@dataclass(frozen=True)
class CameraState:
    """Immutable camera value recomputed on every scroll/resize/drag."""
    scroll_offset: float = 0.0
    rotation: float = 0.0
    viewport_width: float = 1280.0
    viewport_height: float = 720.0


class Projection(NamedTuple):
    """Screen placement of one world point."""
    screen_x: float
    screen_y: float
    scale: float
    depth_order: int


# =============================================================================
# Point Projection
# =============================================================================

def depth_influence(z: float, attenuation: float = DEFAULT_PROJECTION.depth_attenuation) -> float:
    """0 at or in front of z = 0, rising to 1 at z = -attenuation and beyond."""
    return clamp(-z / attenuation, 0.0, 1.0)


def project(
    point: Vec3,
    scroll_offset: float,
    viewport_width: float,
    viewport_height: float,
    rotation_degrees: float = 0.0,
    config: ProjectionConfig = DEFAULT_PROJECTION,
) -> Projection:
    """Project a world point to screen space."""
    rotated = point.rotated_y(rotation_degrees)
    rotated_x = rotated.x
    rotated_z = rotated.z
    
    # Scroll pushes distant points further back
    influence = depth_influence(point.z, config.depth_attenuation)
    rotated_z += scroll_offset * config.scroll_depth_factor * influence
    
    relative_y = point.y - scroll_offset
    
    # Keep the divisor at least near_epsilon away from zero
    safe_z = min(rotated_z, config.perspective - config.near_epsilon)
    scale = max(0.0, config.perspective / (config.perspective - safe_z))
    
    screen_x = viewport_width / 2 + rotated_x * scale
    screen_y = viewport_height / 2 + relative_y * scale
    
    return Projection(
        screen_x=screen_x,
        screen_y=screen_y,
        scale=scale,
        depth_order=math.floor(scale * config.depth_order_resolution),
    )


def project_state(point: Vec3, camera: CameraState, config: ProjectionConfig = DEFAULT_PROJECTION) -> Projection:
    return project(
        point,
        camera.scroll_offset,
        camera.viewport_width,
        camera.viewport_height,
        camera.rotation,
        config,
    )


# =============================================================================
# Box Projection
# =============================================================================

# Front face (z - d/2) then back face (z + d/2); each TL, TR, BR, BL
BOX_CORNER_SIGNS = np.array([
    [-1.0, -1.0, -1.0],
    [ 1.0, -1.0, -1.0],
    [ 1.0,  1.0, -1.0],
    [-1.0,  1.0, -1.0],
    [-1.0, -1.0,  1.0],
    [ 1.0, -1.0,  1.0],
    [ 1.0,  1.0,  1.0],
    [-1.0,  1.0,  1.0],
])

# Corner index pairs: front ring, back ring, then the four depth struts
BOX_EDGES: Tuple[Tuple[int, int], ...] = (
    (0, 1), (1, 2), (2, 3), (3, 0),
    (4, 5), (5, 6), (6, 7), (7, 4),
    (0, 4), (1, 5), (2, 6), (3, 7),
)


def box_corners(center: Vec3, width: float, height: float, depth: float) -> np.ndarray:
    """(8, 3) array of world-space corners in BOX_CORNER_SIGNS order."""
    half = np.array([width, height, depth], dtype=np.float64) / 2.0
    origin = np.array(center.to_tuple(), dtype=np.float64)
    return origin + BOX_CORNER_SIGNS * half


def project_box(
    center: Vec3,
    width: float,
    height: float,
    depth: float,
    scroll_offset: float,
    viewport_width: float,
    viewport_height: float,
    rotation_degrees: float = 0.0,
    config: ProjectionConfig = DEFAULT_PROJECTION,
) -> List[Projection]:
    """Project the 8 corners of an axis-aligned box."""
    return [
        project(
            Vec3(float(x), float(y), float(z)),
            scroll_offset, viewport_width, viewport_height, rotation_degrees, config,
        )
        for x, y, z in box_corners(center, width, height, depth)
    ]
