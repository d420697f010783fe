# worldscape/view/__init__.py
"""View module - camera, projection and culling."""

from .projection import (
    ProjectionConfig,
    CameraState,
    Projection,
    project,
    project_state,
    project_box,
    box_corners,
    depth_influence,
    BOX_EDGES,
)

from .culling import (
    CullingConfig,
    is_culled,
    visible_panels,
)

from .camera import (
    WorldCamera,
    CameraConfig,
)

__all__ = [
    'ProjectionConfig',
    'CameraState',
    'Projection',
    'project',
    'project_state',
    'project_box',
    'box_corners',
    'depth_influence',
    'BOX_EDGES',
    'CullingConfig',
    'is_culled',
    'visible_panels',
    'WorldCamera',
    'CameraConfig',
]
