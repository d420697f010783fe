# worldscape/view/camera.py
"""
WorldCamera - scroll dolly and yaw for the world view.

Vertical drag scrolls, horizontal drag yaws the world within a small
symmetric range. Navigation jumps are eased over a short animation advanced
by update(dt_ms).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional
import logging

from ..core.math3d import lerp, clamp, ease_out_cubic
from ..core.signal import SignalBridge, SignalEmitter, SIGNAL_VIEW_CHANGED, SIGNAL_RESIZE, SIGNAL_DT
from .projection import CameraState

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    rotation_limit: float = 10.0            # degrees, symmetric
    drag_pixels_per_limit: float = 300.0    # horizontal drag that sweeps 0 -> limit
    min_document_height: float = 5000.0
    document_viewports: float = 5.0         # document is at least this many viewports tall
    page_step_divisor: float = 1.5
    navigate_duration_ms: float = 600.0
    navigate_viewport_fraction: float = 1.0 / 3.0


@dataclass
class WorldCamera(SignalEmitter):
    """Mutable camera controller. state() snapshots it for projection."""
    
    scroll_offset: float = 0.0
    rotation: float = 0.0
    viewport_width: float = 1280.0
    viewport_height: float = 720.0
    config: CameraConfig = field(default_factory=CameraConfig)
    
    # Returns True while input must be ignored (focus mode, sequence, modal)
    lock: Optional[Callable[[], bool]] = None
    
    _dragging: bool = False
    _drag_start_x: float = 0.0
    _drag_start_y: float = 0.0
    _drag_start_scroll: float = 0.0
    _drag_start_rotation: float = 0.0
    
    _animating: bool = False
    _anim_start: float = 0.0
    _anim_target: float = 0.0
    _anim_elapsed: float = 0.0
    _anim_duration: float = 0.0
    
    _bridge: SignalBridge = None
    
    def state(self) -> CameraState:
        return CameraState(
            scroll_offset=self.scroll_offset,
            rotation=self.rotation,
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
        )
    
    @property
    def locked(self) -> bool:
        return bool(self.lock and self.lock())
    
    @property
    def dragging(self) -> bool:
        return self._dragging
    
    @property
    def animating(self) -> bool:
        return self._animating
    
    # -------------------------------------------------------------------------
    # Extent
    # -------------------------------------------------------------------------
    
    @property
    def document_height(self) -> float:
        return max(self.config.min_document_height,
                   self.viewport_height * self.config.document_viewports)
    
    @property
    def max_scroll(self) -> float:
        return max(0.0, self.document_height - self.viewport_height)
    
    def scroll_progress(self) -> float:
        """Scroll position as 0..1 of the scrollable range."""
        if self.max_scroll <= 0:
            return 0.0
        return clamp(self.scroll_offset / self.max_scroll, 0.0, 1.0)
    
    def _clamp_scroll(self, value: float) -> float:
        return clamp(value, 0.0, self.max_scroll)
    
    # -------------------------------------------------------------------------
    # Scrolling
    # -------------------------------------------------------------------------
    
    def scroll_to(self, offset: float) -> bool:
        if self.locked:
            return False
        self._animating = False
        self.scroll_offset = self._clamp_scroll(offset)
        self._emit_view_changed()
        return True
    
    def scroll_by(self, amount: float) -> bool:
        return self.scroll_to(self.scroll_offset + amount)
    
    def page_down(self) -> bool:
        return self.animate_to(self.scroll_offset + self.viewport_height / self.config.page_step_divisor)
    
    def page_up(self) -> bool:
        return self.animate_to(self.scroll_offset - self.viewport_height / self.config.page_step_divisor)
    
    def set_rotation(self, degrees: float):
        limit = self.config.rotation_limit
        self.rotation = clamp(degrees, -limit, limit)
        self._emit_view_changed()
    
    # -------------------------------------------------------------------------
    # Drag
    # -------------------------------------------------------------------------
    
    def begin_drag(self, x: float, y: float) -> bool:
        if self.locked:
            return False
        self._dragging = True
        self._animating = False
        self._drag_start_x = x
        self._drag_start_y = y
        self._drag_start_scroll = self.scroll_offset
        self._drag_start_rotation = self.rotation
        return True
    
    def update_drag(self, x: float, y: float):
        if not self._dragging or self.locked:
            return
        
        dy = y - self._drag_start_y
        dx = x - self._drag_start_x
        limit = self.config.rotation_limit
        
        self.scroll_offset = self._clamp_scroll(self._drag_start_scroll - dy)
        self.rotation = clamp(
            self._drag_start_rotation + dx * (limit / self.config.drag_pixels_per_limit),
            -limit, limit,
        )
        self._emit_view_changed()
    
    def end_drag(self):
        self._dragging = False
    
    # -------------------------------------------------------------------------
    # Animation
    # -------------------------------------------------------------------------
    
    def animate_to(self, offset: float, duration_ms: float = None) -> bool:
        if self.locked:
            return False
        if duration_ms is None:
            duration_ms = self.config.navigate_duration_ms
        
        target = self._clamp_scroll(offset)
        if duration_ms <= 0:
            return self.scroll_to(target)
        
        self._animating = True
        self._anim_start = self.scroll_offset
        self._anim_target = target
        self._anim_elapsed = 0.0
        self._anim_duration = duration_ms
        return True
    
    def navigate_to_y(self, world_y: float) -> bool:
        """Bring a world y into the upper third of the viewport."""
        return self.animate_to(world_y - self.viewport_height * self.config.navigate_viewport_fraction)

    def stop(self):
        """Drop any running animation or drag where it stands."""
        self._animating = False
        self._dragging = False

    def update(self, dt_ms: float):
        if not self._animating or self.locked:
            return
        
        self._anim_elapsed += dt_ms
        
        if self._anim_elapsed >= self._anim_duration:
            self.scroll_offset = self._anim_target
            self._animating = False
        else:
            t = ease_out_cubic(self._anim_elapsed / self._anim_duration)
            self.scroll_offset = lerp(self._anim_start, self._anim_target, t)
        
        self._emit_view_changed()
    
    # -------------------------------------------------------------------------
    # Viewport
    # -------------------------------------------------------------------------
    
    def set_viewport(self, width: float, height: float):
        self.viewport_width = width
        self.viewport_height = height
        self.scroll_offset = self._clamp_scroll(self.scroll_offset)
        if self._bridge:
            self._bridge.emit(SIGNAL_RESIZE, width, height)
        self._emit_view_changed()
    
    # -------------------------------------------------------------------------
    # Signals
    # -------------------------------------------------------------------------
    
    def bind(self, bridge: SignalBridge):
        self.bind_bridge(bridge)
        bridge.connect(SIGNAL_DT, self._on_dt)
    
    def _on_dt(self, dt: float):
        self.update(dt * 1000.0)
    
    def _emit_view_changed(self):
        if self._bridge:
            self._bridge.emit(SIGNAL_VIEW_CHANGED, self.state())
