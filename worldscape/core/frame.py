"""
Frame State

Immutable tick information handed to time-driven systems each frame.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class FrameState:
    """
    Immutable frame information passed to all systems.
    """
    frame_id: int   # Monotonically increasing frame counter
    dt: float       # Delta time since last frame (seconds)
    t: float        # Total elapsed time (seconds)
    
    @property
    def dt_ms(self) -> float:
        return self.dt * 1000.0
    
    def next(self, dt: float) -> FrameState:
        return FrameState(self.frame_id + 1, dt, self.t + dt)
