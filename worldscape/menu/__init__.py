# worldscape/menu/__init__.py
"""Menu module - radial navigation."""

from .orbital import (
    OrbitalMenu,
    MenuEntry,
    MenuConfig,
    MenuSlot,
)

__all__ = [
    'OrbitalMenu',
    'MenuEntry',
    'MenuConfig',
    'MenuSlot',
]
