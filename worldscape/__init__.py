# worldscape/__init__.py
"""
Worldscape - pseudo-3D spatial canvas engine.

Core components:
- Stage: Top-level coordinator, composes frames
- World: Panels positioned in one shared 3D space
- WorldCamera: Scroll dolly and yaw
- InteractionResolver: Per-panel hover/press/focus state
- SingularitySequencer: Timed explode-and-reset sweep
- OrbitalMenu: Radial navigation
- SignalBridge: Event routing system
"""

from .core import (
    Vec2, Vec3,
    lerp, clamp,
    SignalBridge,
    SignalEmitter,
    Scheduler,
    FrameState,
    World,
    Panel,
    PanelKind,
    Size,
)

from .view import (
    WorldCamera,
    CameraConfig,
    CameraState,
    Projection,
    ProjectionConfig,
    project,
    project_box,
)

from .interaction import (
    InteractionResolver,
    InteractionState,
    SingularitySequencer,
)

from .menu import (
    OrbitalMenu,
    MenuEntry,
)

from .config import WorldscapeConfig, load_config, save_config
from .presets import default_world, DEFAULT_MENU
from .stage import Stage, Frame, RenderItem

__version__ = '0.1.0'

__all__ = [
    # Stage
    'Stage',
    'Frame',
    'RenderItem',
    'WorldscapeConfig',
    'load_config',
    'save_config',
    'default_world',
    'DEFAULT_MENU',
    
    # Core
    'Vec2', 'Vec3',
    'lerp', 'clamp',
    'SignalBridge',
    'SignalEmitter',
    'Scheduler',
    'FrameState',
    'World',
    'Panel',
    'PanelKind',
    'Size',
    
    # View
    'WorldCamera',
    'CameraConfig',
    'CameraState',
    'Projection',
    'ProjectionConfig',
    'project',
    'project_box',
    
    # Interaction
    'InteractionResolver',
    'InteractionState',
    'SingularitySequencer',
    'OrbitalMenu',
    'MenuEntry',
]
