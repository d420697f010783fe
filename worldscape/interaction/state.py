# worldscape/interaction/state.py
"""
Interaction state for panels.

Per-panel pointer states (hovered, pressed) are local and independent. Two
states are coordinated across the whole world:

- Expanded: at most one panel at a time (focus mode). A second expand is
  refused; the UI closes first, then opens.
- Exploding: set by the singularity sequencer only, terminal until the
  sequencer's reset puts every panel back to idle at once.

All transitions go through InteractionResolver; nothing else writes state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Optional, Set
from enum import Enum, auto
import logging

from ..core.math3d import Vec2
from ..core.signal import (
    Connection, SignalBridge, SignalEmitter,
    SIGNAL_HOVER, SIGNAL_EXPAND, SIGNAL_CLOSE, SIGNAL_EDIT_REQUESTED, SIGNAL_PANEL_REMOVED,
)
from ..core.world import World, Size

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = auto()
    HOVERED = auto()
    PRESSED = auto()
    EXPANDED = auto()
    EXPLODING = auto()


@dataclass(frozen=True)
class InteractionConfig:
    min_width: float = 150.0
    min_height: float = 150.0


@dataclass
class _ResizeGesture:
    panel_id: str
    start: Vec2
    start_size: Size
    scale: float


class InteractionResolver(SignalEmitter):
    """Owns every panel's transient interaction state."""

    def __init__(self, world: World, config: InteractionConfig = None, bridge: SignalBridge = None):
        self.world = world
        self.config = config or InteractionConfig()

        self._local: Dict[str, InteractionState] = {}
        self._expanded_id: Optional[str] = None
        self._exploding: Set[str] = set()
        self._sequence_active = False

        self.admin_mode = False
        self.modal_active = False

        self._resize: Optional[_ResizeGesture] = None
        self._removed_conn: Optional[Connection] = None

        if bridge:
            self.bind(bridge)

    def bind(self, bridge: SignalBridge):
        self.unbind()
        self.bind_bridge(bridge)
        self._removed_conn = bridge.connect(SIGNAL_PANEL_REMOVED, self.forget)

    def unbind(self):
        """Stop listening for removals and emitting; state is kept."""
        if self._removed_conn is not None:
            self._removed_conn.disconnect()
            self._removed_conn = None
        self.bind_bridge(None)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def state_of(self, panel_id: str) -> InteractionState:
        if panel_id in self._exploding:
            return InteractionState.EXPLODING
        if panel_id == self._expanded_id:
            return InteractionState.EXPANDED
        return self._local.get(panel_id, InteractionState.IDLE)

    def states(self) -> Dict[str, InteractionState]:
        return {panel_id: self.state_of(panel_id) for panel_id in self.world.ids()}

    @property
    def expanded_id(self) -> Optional[str]:
        return self._expanded_id

    @property
    def exploding_ids(self) -> FrozenSet[str]:
        return frozenset(self._exploding)

    @property
    def sequence_active(self) -> bool:
        return self._sequence_active

    @property
    def input_blocked(self) -> bool:
        """True while pointer interaction with the world is suspended."""
        return self._expanded_id is not None or self._sequence_active or self.modal_active

    @property
    def resizing(self) -> Optional[str]:
        return self._resize.panel_id if self._resize else None

    # -------------------------------------------------------------------------
    # Mode Flags
    # -------------------------------------------------------------------------

    def set_admin_mode(self, enabled: bool):
        if enabled == self.admin_mode:
            return
        self.admin_mode = enabled
        self.close()

    def set_modal_active(self, active: bool):
        self.modal_active = active
        if active:
            self._local.clear()

    # -------------------------------------------------------------------------
    # Pointer Transitions
    # -------------------------------------------------------------------------

    def pointer_enter(self, panel_id: str) -> bool:
        if self.input_blocked:
            logger.debug(f"Hover ignored for {panel_id!r}: input blocked")
            return False
        if panel_id not in self.world or self.state_of(panel_id) != InteractionState.IDLE:
            return False
        self._local[panel_id] = InteractionState.HOVERED
        self.emit(SIGNAL_HOVER, panel_id)
        return True

    def pointer_leave(self, panel_id: str):
        if self._local.pop(panel_id, None) is not None:
            logger.debug(f"Pointer left {panel_id!r}")

    def pointer_down(self, panel_id: str) -> bool:
        if self.input_blocked or self.state_of(panel_id) != InteractionState.HOVERED:
            return False
        self._local[panel_id] = InteractionState.PRESSED
        return True

    def pointer_up(self, panel_id: str) -> bool:
        """Release a press: expand, or in admin mode ask the editor to open."""
        if self.state_of(panel_id) != InteractionState.PRESSED:
            return False

        if self.admin_mode:
            self._local[panel_id] = InteractionState.HOVERED
            self.emit(SIGNAL_EDIT_REQUESTED, panel_id)
            return True

        return self.expand(panel_id)

    # -------------------------------------------------------------------------
    # Focus Mode
    # -------------------------------------------------------------------------

    def expand(self, panel_id: str) -> bool:
        if self._expanded_id is not None:
            logger.debug(f"Expand of {panel_id!r} refused: {self._expanded_id!r} is expanded")
            return False
        if self._sequence_active or panel_id not in self.world:
            return False

        self._local.clear()
        self._expanded_id = panel_id
        self.emit(SIGNAL_EXPAND, panel_id)
        return True

    def close(self) -> bool:
        panel_id = self._expanded_id
        if panel_id is None:
            return False
        self._expanded_id = None
        self.emit(SIGNAL_CLOSE, panel_id)
        return True

    # -------------------------------------------------------------------------
    # Sequencer-facing
    # -------------------------------------------------------------------------

    def begin_sequence(self):
        self._sequence_active = True
        self._local.clear()
        self._resize = None

    def mark_exploding(self, panel_id: str):
        if panel_id == self._expanded_id:
            self.close()
        self._local.pop(panel_id, None)
        self._exploding.add(panel_id)

    def end_sequence(self):
        """Return every panel to idle in one step."""
        self._exploding = set()
        self._local.clear()
        self._sequence_active = False

    # -------------------------------------------------------------------------
    # Resize
    # -------------------------------------------------------------------------

    def request_resize(self, panel_id: str, width: float, height: float) -> Optional[Size]:
        """Apply a size change, floored to the configured minimum."""
        floored = Size(max(self.config.min_width, width), max(self.config.min_height, height))
        if floored.to_tuple() != (width, height):
            logger.debug(f"Resize of {panel_id!r} floored from {width}x{height} to {floored.width}x{floored.height}")
        if not self.world.resize(panel_id, floored.width, floored.height):
            return None
        return floored

    def begin_resize(self, panel_id: str, x: float, y: float, scale: float) -> bool:
        panel = self.world.get(panel_id)
        if panel is None or self.input_blocked or scale <= 0:
            return False
        if self.state_of(panel_id) in (InteractionState.EXPANDED, InteractionState.EXPLODING):
            return False
        self._resize = _ResizeGesture(panel_id, Vec2(x, y), Size(panel.width, panel.height), scale)
        return True

    def update_resize(self, x: float, y: float) -> Optional[Size]:
        gesture = self._resize
        if gesture is None:
            return None
        # Screen delta back to world units at the panel's projected scale
        dx = (x - gesture.start.x) / gesture.scale
        dy = (y - gesture.start.y) / gesture.scale
        return self.request_resize(
            gesture.panel_id,
            gesture.start_size.width + dx,
            gesture.start_size.height + dy,
        )

    def end_resize(self):
        self._resize = None

    # -------------------------------------------------------------------------
    # Bookkeeping
    # -------------------------------------------------------------------------

    def forget(self, panel_id: str):
        """Drop state for a panel that left the world."""
        self._local.pop(panel_id, None)
        if self._resize and self._resize.panel_id == panel_id:
            self._resize = None
        if panel_id == self._expanded_id:
            self.close()
