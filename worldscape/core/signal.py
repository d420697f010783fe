# worldscape/core/signal.py
"""
SignalBridge - Observer hub routing notifications between the core and its
collaborators (audio, editing, host surface).

Emission is fire-and-forget: a failing subscriber is logged and skipped, the
emitter never sees the exception.
"""

from __future__ import annotations
from collections import defaultdict
from typing import Callable, Dict, List, Optional, Set
from dataclasses import dataclass
from weakref import ref
import itertools
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Types
# =============================================================================

SIGNAL_DT = 'dt'                                    # (dt_seconds,)
SIGNAL_VIEW_CHANGED = 'view_changed'                # (camera_state,)
SIGNAL_RESIZE = 'resize'                            # (width, height)

SIGNAL_PANEL_ADDED = 'panel_added'                  # (panel,)
SIGNAL_PANEL_REMOVED = 'panel_removed'              # (panel_id,)
SIGNAL_PANEL_CHANGED = 'panel_changed'              # (panel,)
SIGNAL_PANEL_RESIZED = 'panel_resized'              # (panel_id, width, height)

SIGNAL_HOVER = 'hover'                              # (panel_id,)
SIGNAL_EXPAND = 'expand'                            # (panel_id,)
SIGNAL_CLOSE = 'close'                              # (panel_id,)
SIGNAL_EDIT_REQUESTED = 'edit_requested'            # (panel_id,)

SIGNAL_SEQUENCE_STARTED = 'sequence_started'        # (panel_count,)
SIGNAL_SEQUENCE_STEP = 'sequence_step'              # (panel_id, index, t_ms)
SIGNAL_SEQUENCE_FINISHED = 'sequence_finished'      # ()

SIGNAL_MENU_TOGGLED = 'menu_toggled'                # (is_open,)
SIGNAL_MENU_SELECTION = 'menu_selection'            # (index or None,)
SIGNAL_MENU_PERSISTED = 'menu_persisted'            # (index,)
SIGNAL_NAVIGATE = 'navigate'                        # (target,)



# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Returned by connect(); disconnect() is idempotent."""
    signal: str
    slot_id: int
    bridge: Optional[SignalBridge] = None
    
    @property
    def connected(self) -> bool:
        return self.bridge is not None
    
    def disconnect(self):
        bridge, self.bridge = self.bridge, None
        if bridge is not None:
            bridge._drop(self.signal, self.slot_id)


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """
    Routes named signals to subscribers in connection order.

    Dispatch runs over a snapshot of the subscriber list, so a handler that
    disconnects itself or a neighbour mid-emit takes effect from the next emit.
    """
    
    def __init__(self):
        self._slots: Dict[str, Dict[int, Callable]] = defaultdict(dict)
        self._ids = itertools.count()
        self._muted: Set[str] = set()
        self._taps: List[Callable] = []
    
    def connect(self, signal: str, handler: Callable) -> Connection:
        slot_id = next(self._ids)
        self._slots[signal][slot_id] = handler
        return Connection(signal, slot_id, self)
    
    def connect_weak(self, signal: str, obj: object, method_name: str) -> Connection:
        """Subscribe obj.method_name without keeping obj alive; the slot drops itself once obj is gone."""
        owner = ref(obj)
        
        def forward(*args, **kwargs):
            target = owner()
            if target is None:
                conn.disconnect()
                return
            getattr(target, method_name)(*args, **kwargs)
        
        conn = self.connect(signal, forward)
        return conn
    
    def receiver_count(self, signal: str) -> int:
        return len(self._slots.get(signal, ()))
    
    def emit(self, signal: str, *args, **kwargs):
        if signal in self._muted:
            return
        for tap in self._taps:
            tap(signal, args)
        
        slots = self._slots.get(signal)
        if not slots:
            return
        for handler in list(slots.values()):
            try:
                handler(*args, **kwargs)
            except Exception:
                logger.exception(f"Subscriber to '{signal}' failed")
    
    def block(self, signal: str):
        self._muted.add(signal)
    
    def unblock(self, signal: str):
        self._muted.discard(signal)
    
    def _drop(self, signal: str, slot_id: int):
        slots = self._slots.get(signal)
        if slots is not None:
            slots.pop(slot_id, None)
            if not slots:
                del self._slots[signal]


# =============================================================================
# Signal Debugger
# =============================================================================

class SignalDebugger:
    """Logs watched signals at DEBUG as they pass through a bridge."""
    
    def __init__(self, bridge: SignalBridge):
        self.bridge = bridge
        self._watched: Set[str] = set()
        self._watch_all = False
        bridge._taps.append(self._log)
    
    def watch(self, signal: str):
        self._watched.add(signal)
    
    def watch_all(self, enabled: bool = True):
        self._watch_all = enabled
    
    def _log(self, signal: str, args: tuple):
        if self._watch_all or signal in self._watched:
            logger.debug(f"SIGNAL: {signal}({', '.join(repr(a) for a in args)})")
    
    def detach(self):
        if self._log in self.bridge._taps:
            self.bridge._taps.remove(self._log)


# =============================================================================
# Convenience
# =============================================================================

class SignalEmitter:
    """Mixin for objects that emit signals once a bridge is bound."""
    
    _bridge: Optional[SignalBridge] = None
    
    def bind_bridge(self, bridge: Optional[SignalBridge]):
        self._bridge = bridge
    
    def emit(self, signal: str, *args, **kwargs):
        if self._bridge:
            self._bridge.emit(signal, *args, **kwargs)
