# worldscape/core/__init__.py
"""Core module - math, signals, timers and the world model."""

from .math3d import (
    Vec2, Vec3,
    lerp, clamp,
    ease_out_cubic,
    deg_to_rad,
)

from .signal import (
    SignalBridge,
    Connection,
    SignalEmitter,
    SignalDebugger,
    SIGNAL_DT,
    SIGNAL_VIEW_CHANGED,
    SIGNAL_RESIZE,
    SIGNAL_PANEL_ADDED,
    SIGNAL_PANEL_REMOVED,
    SIGNAL_PANEL_CHANGED,
    SIGNAL_PANEL_RESIZED,
    SIGNAL_HOVER,
    SIGNAL_EXPAND,
    SIGNAL_CLOSE,
    SIGNAL_EDIT_REQUESTED,
    SIGNAL_SEQUENCE_STARTED,
    SIGNAL_SEQUENCE_STEP,
    SIGNAL_SEQUENCE_FINISHED,
    SIGNAL_MENU_TOGGLED,
    SIGNAL_MENU_SELECTION,
    SIGNAL_MENU_PERSISTED,
    SIGNAL_NAVIGATE,
)

from .frame import FrameState
from .timers import Scheduler, TimerHandle, OwnedTimers

from .world import (
    World,
    Panel,
    PanelKind,
    Size,
)

__all__ = [
    'Vec2', 'Vec3',
    'lerp', 'clamp',
    'ease_out_cubic',
    'deg_to_rad',
    'SignalBridge',
    'Connection',
    'SignalEmitter',
    'SignalDebugger',
    'FrameState',
    'Scheduler',
    'TimerHandle',
    'OwnedTimers',
    'World',
    'Panel',
    'PanelKind',
    'Size',
]
