# worldscape/core/world.py
"""
World - the scrollable 3D space and the panels that live in it.

Conceptual space where:
- X axis = horizontal offset from the centre line (px)
- Y axis = position along the scroll (px, grows downward)
- Z axis = depth (px, negative is farther away)

The world owns the panel collection. Everything else reads it, projects it,
and may request size mutations through resize().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any, Iterator, Tuple
from enum import Enum
import json
import logging

from .math3d import Vec3
from .signal import (
    SignalBridge,
    SIGNAL_PANEL_ADDED, SIGNAL_PANEL_REMOVED, SIGNAL_PANEL_CHANGED, SIGNAL_PANEL_RESIZED,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Panel Kinds
# =============================================================================

class PanelKind(Enum):
    HERO = 'HERO'
    NAV = 'NAV'
    GALLERY_MAIN = 'GALLERY_MAIN'
    GALLERY_SATELLITE_FADE = 'GALLERY_SATELLITE_FADE'
    GALLERY_SATELLITE_CAROUSEL = 'GALLERY_SATELLITE_CAROUSEL'
    PDF_VIEWER = 'PDF_VIEWER'
    ITEM_LIST = 'ITEM_LIST'
    BLOG_PORTAL = 'BLOG_PORTAL'
    SITE_PORTAL = 'SITE_PORTAL'
    TEXT_BOX = 'TEXT_BOX'
    TEXT_EDITOR = 'TEXT_EDITOR'
    OS_SANDBOX = 'OS_SANDBOX'
    MINIGAME = 'MINIGAME'
    EXTERNAL_EMBED = 'EXTERNAL_EMBED'
    CUSTOM_CODE = 'CUSTOM_CODE'

DEFAULT_THEME = 'cyan'


# =============================================================================
# Panel
# =============================================================================

@dataclass
class Size:
    width: float
    height: float
    
    def to_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


@dataclass
class Panel:
    """
    A rectangular content panel placed in world space.

    Only position, size and connected_to matter to the spatial engine; kind,
    title, theme and payload are carried for the content renderers.
    """
    id: str
    position: Vec3 = field(default_factory=Vec3)
    size: Size = field(default_factory=lambda: Size(300.0, 200.0))
    connected_to: List[str] = field(default_factory=list)
    kind: PanelKind = PanelKind.TEXT_BOX
    title: str = ""
    theme: str = DEFAULT_THEME
    payload: Dict[str, Any] = field(default_factory=dict)
    
    def __post_init__(self):
        if not self.id:
            raise ValueError("Panel id must be a non-empty string")
        if self.size.width <= 0 or self.size.height <= 0:
            raise ValueError(f"Panel {self.id!r} has non-positive size {self.size.to_tuple()}")
    
    @property
    def width(self) -> float:
        return self.size.width
    
    @property
    def height(self) -> float:
        return self.size.height
    
    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'kind': self.kind.value,
            'title': self.title,
            'position': list(self.position.to_tuple()),
            'size': list(self.size.to_tuple()),
            'connected_to': list(self.connected_to),
            'theme': self.theme,
            'payload': self.payload,
        }
    
    @staticmethod
    def from_dict(data: dict) -> Panel:
        try:
            kind = PanelKind(data.get('kind', PanelKind.TEXT_BOX.value))
        except ValueError:
            raise ValueError(f"Unknown panel kind: {data.get('kind')!r}") from None
        width, height = data.get('size', (300.0, 200.0))
        return Panel(
            id=data.get('id', ''),
            position=Vec3.from_tuple(data.get('position', (0, 0, 0))),
            size=Size(float(width), float(height)),
            connected_to=list(data.get('connected_to', [])),
            kind=kind,
            title=data.get('title', ''),
            theme=data.get('theme', DEFAULT_THEME),
            payload=dict(data.get('payload', {})),
        )


# =============================================================================
# World
# =============================================================================

class World:
    """Ordered panel collection with stable ids."""
    
    def __init__(self, panels: List[Panel] = None, bridge: SignalBridge = None):
        self._bridge = bridge
        self._panels: Dict[str, Panel] = {}
        for panel in panels or []:
            self.add(panel)
    
    def bind_bridge(self, bridge: Optional[SignalBridge]):
        self._bridge = bridge
    
    def _emit(self, signal: str, *args):
        if self._bridge:
            self._bridge.emit(signal, *args)
    
    # -------------------------------------------------------------------------
    # Collection
    # -------------------------------------------------------------------------
    
    def add(self, panel: Panel) -> Panel:
        if panel.id in self._panels:
            raise ValueError(f"Duplicate panel id: {panel.id!r}")
        self._panels[panel.id] = panel
        self._emit(SIGNAL_PANEL_ADDED, panel)
        return panel
    
    def remove(self, panel_id: str) -> Optional[Panel]:
        panel = self._panels.pop(panel_id, None)
        if panel:
            self._emit(SIGNAL_PANEL_REMOVED, panel_id)
        return panel
    
    def get(self, panel_id: str) -> Optional[Panel]:
        return self._panels.get(panel_id)
    
    def clear(self):
        for panel_id in list(self._panels):
            self.remove(panel_id)
    
    def __contains__(self, panel_id: str) -> bool:
        return panel_id in self._panels
    
    def __len__(self) -> int:
        return len(self._panels)
    
    def __iter__(self) -> Iterator[Panel]:
        return iter(list(self._panels.values()))
    
    def ids(self) -> List[str]:
        return list(self._panels)
    
    def sorted_by_scroll_descending(self) -> List[Panel]:
        """Panels ordered by world y, largest first. Ties keep insertion order."""
        return sorted(self._panels.values(), key=lambda p: -p.position.y)
    
    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------
    
    def move(self, panel_id: str, position: Vec3) -> bool:
        panel = self._panels.get(panel_id)
        if panel is None:
            return False
        panel.position = position.copy()
        self._emit(SIGNAL_PANEL_CHANGED, panel)
        return True
    
    def resize(self, panel_id: str, width: float, height: float) -> bool:
        panel = self._panels.get(panel_id)
        if panel is None:
            logger.debug(f"Resize ignored for unknown panel {panel_id!r}")
            return False
        if width <= 0 or height <= 0:
            logger.debug(f"Resize ignored for {panel_id!r}: degenerate size {width}x{height}")
            return False
        panel.size = Size(float(width), float(height))
        self._emit(SIGNAL_PANEL_RESIZED, panel_id, panel.size.width, panel.size.height)
        return True
    
    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------
    
    def to_dict(self) -> dict:
        return {'panels': [p.to_dict() for p in self._panels.values()]}
    
    @staticmethod
    def from_dict(data: dict, bridge: SignalBridge = None) -> World:
        if not isinstance(data, dict) or not isinstance(data.get('panels', []), list):
            raise ValueError("World document must be an object with a 'panels' list")
        return World([Panel.from_dict(d) for d in data.get('panels', [])], bridge=bridge)
    
    def save(self, path: str):
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
    
    @staticmethod
    def load(path: str, bridge: SignalBridge = None) -> World:
        with open(path, 'r') as f:
            data = json.load(f)
        return World.from_dict(data, bridge=bridge)
