# worldscape/menu/orbital.py
"""
OrbitalMenu - radial navigation menu.

Entries sit on a circle, the first straight up, the rest clockwise at equal
angles. Closed, the radius collapses to 0. Selection moves in +1/-1 steps
(arrow keys, wheel) or jumps on pointer-enter; holding the pointer on an entry
for the dwell time switches on the persisted highlight.

Plain 2D trigonometry; this does not go through the world projection.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from ..core.math3d import Vec2
from ..core.signal import (
    SignalBridge, SignalEmitter,
    SIGNAL_MENU_TOGGLED, SIGNAL_MENU_SELECTION, SIGNAL_MENU_PERSISTED,
)
from ..core.timers import Scheduler, OwnedTimers

logger = logging.getLogger(__name__)


NEXT_KEYS = ('ArrowRight', 'ArrowDown')
PREV_KEYS = ('ArrowLeft', 'ArrowUp')
ACTIVATE_KEYS = ('Enter',)


@dataclass(frozen=True)
class MenuEntry:
    label: str
    color: str
    target: str


@dataclass(frozen=True)
class MenuConfig:
    open_radius: float = 75.0
    dwell_ms: float = 400.0
    start_angle: float = -90.0


@dataclass(frozen=True)
class MenuSlot:
    index: int
    entry: MenuEntry
    angle: float        # degrees
    position: Vec2
    active: bool


class OrbitalMenu(SignalEmitter):

    def __init__(
        self,
        entries: Sequence[MenuEntry],
        scheduler: Scheduler,
        config: MenuConfig = None,
        on_navigate: Callable[[str], None] = None,
        bridge: SignalBridge = None,
    ):
        if not entries:
            raise ValueError("Orbital menu needs at least one entry")
        self.entries: Tuple[MenuEntry, ...] = tuple(entries)
        self.config = config or MenuConfig()
        self.on_navigate = on_navigate
        self._timers = OwnedTimers(scheduler, self)

        self._open = False
        self._active: Optional[int] = None
        self._persisted = False

        if bridge:
            self.bind_bridge(bridge)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def active_index(self) -> Optional[int]:
        return self._active

    @property
    def persisted(self) -> bool:
        return self._persisted

    @property
    def dwell_pending(self) -> bool:
        return self._timers.is_pending('dwell')

    def __len__(self) -> int:
        return len(self.entries)

    def open(self):
        if self._open:
            return
        self._open = True
        self.emit(SIGNAL_MENU_TOGGLED, True)

    def close(self):
        """Close and drop any selection and pending dwell."""
        was_open = self._open
        self._open = False
        self._timers.cancel('dwell')
        self._set_active(None)
        self._persisted = False
        if was_open:
            self.emit(SIGNAL_MENU_TOGGLED, False)

    def toggle(self):
        if self._open:
            self.close()
        else:
            self.open()

    def _set_active(self, index: Optional[int]):
        if index == self._active:
            return
        self._active = index
        self.emit(SIGNAL_MENU_SELECTION, index)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    @property
    def radius(self) -> float:
        return self.config.open_radius if self._open else 0.0

    def angle_of(self, index: int) -> float:
        return index * (360.0 / len(self.entries)) + self.config.start_angle

    def layout(self, center: Vec2 = None) -> List[MenuSlot]:
        center = center or Vec2()
        radius = self.radius
        return [
            MenuSlot(
                index=i,
                entry=entry,
                angle=self.angle_of(i),
                position=center + Vec2.polar(self.angle_of(i), radius),
                active=(i == self._active),
            )
            for i, entry in enumerate(self.entries)
        ]

    def spokes(self, center: Vec2 = None) -> List[Tuple[Vec2, Vec2]]:
        center = center or Vec2()
        return [(center, slot.position) for slot in self.layout(center)]

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def cycle(self, direction: int) -> Optional[int]:
        if not self._open:
            return None
        if self._active is None:
            self._set_active(0)
        else:
            step = 1 if direction > 0 else -1
            self._set_active((self._active + step) % len(self.entries))
        return self._active

    def handle_key(self, key: str) -> bool:
        if not self._open:
            return False
        if key in NEXT_KEYS:
            self.cycle(1)
            return True
        if key in PREV_KEYS:
            self.cycle(-1)
            return True
        if key in ACTIVATE_KEYS and self._active is not None:
            return self.activate(self._active)
        return False

    def handle_wheel(self, delta_y: float) -> bool:
        if not self._open:
            return False
        self.cycle(1 if delta_y > 0 else -1)
        return True

    def pointer_enter(self, index: int):
        if not self._open or not 0 <= index < len(self.entries):
            return
        self._set_active(index)
        self._persisted = False
        self._timers.start('dwell', self.config.dwell_ms, self._on_dwell)

    def pointer_leave(self):
        self._timers.cancel('dwell')
        self._set_active(None)
        self._persisted = False

    def _on_dwell(self):
        self._persisted = True
        self.emit(SIGNAL_MENU_PERSISTED, self._active)

    def activate(self, index: int = None) -> bool:
        """Navigate to an entry's target."""
        if not self._open:
            return False
        if index is None:
            index = self._active
        if index is None or not 0 <= index < len(self.entries):
            return False
        target = self.entries[index].target
        logger.debug(f"Menu activate {self.entries[index].label} -> {target}")
        if self.on_navigate:
            self.on_navigate(target)
        return True

    def teardown(self):
        self._timers.teardown()
