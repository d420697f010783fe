# worldscape/core/math3d.py
"""
Core math types for the world space.
Plain CPU-side values; the host surface only ever sees projected 2D results.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

# =============================================================================
# Vector Types
# =============================================================================

@dataclass
class Vec2:
    """2D vector for screen coordinates."""
    x: float = 0.0
    y: float = 0.0
    
    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)
    
    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)
    
    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)
    
    def __rmul__(self, scalar: float) -> Vec2:
        return self.__mul__(scalar)
    
    def length(self) -> float:
        return math.hypot(self.x, self.y)
    
    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)
    
    @staticmethod
    def from_tuple(t: Tuple[float, float]) -> Vec2:
        return Vec2(t[0], t[1])

    @staticmethod
    def polar(angle_deg: float, radius: float) -> Vec2:
        """Point at `radius` along `angle_deg` (0 = +x, 90 = +y, screen-down)."""
        rad = deg_to_rad(angle_deg)
        return Vec2(math.cos(rad) * radius, math.sin(rad) * radius)


@dataclass
class Vec3:
    """
    3D vector in world space.

    x: horizontal offset from the world centre line
    y: position along the scroll axis (grows downward)
    z: depth, negative is farther from the camera
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    
    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
    
    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
    
    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)
    
    def __rmul__(self, scalar: float) -> Vec3:
        return self.__mul__(scalar)
    
    def rotated_y(self, degrees: float) -> Vec3:
        """Rotate about the vertical axis through the world origin."""
        if degrees == 0:
            return Vec3(self.x, self.y, self.z)
        rad = deg_to_rad(degrees)
        c = math.cos(rad)
        s = math.sin(rad)
        return Vec3(
            self.x * c + self.z * s,
            self.y,
            self.z * c - self.x * s,
        )
    
    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)
    
    def copy(self) -> Vec3:
        return Vec3(self.x, self.y, self.z)
    
    @staticmethod
    def from_tuple(t) -> Vec3:
        return Vec3(float(t[0]), float(t[1]), float(t[2]))


# =============================================================================
# Easing Functions
# =============================================================================

def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


# =============================================================================
# Utility Functions
# =============================================================================

def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(value, max_val))

def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t

def deg_to_rad(degrees: float) -> float:
    return degrees * (math.pi / 180.0)
