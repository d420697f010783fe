# worldscape/core/timers.py
"""
Scheduler - cancellable one-shot timers on a virtual millisecond clock.

Nothing here sleeps. The host advances the clock (directly, from a FrameState,
or through the SIGNAL_DT signal) and due callbacks fire in order of due time,
ties broken by scheduling order. A callback may schedule further timers; those
fire within the same advance() if they fall due inside the window, so a chain
of steps keeps exact spacing regardless of frame granularity.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Any
import heapq
import itertools
import logging

from .frame import FrameState
from .signal import SignalBridge, Connection, SIGNAL_DT

logger = logging.getLogger(__name__)


@dataclass(order=True)
class TimerHandle:
    """A pending callback. Ordered by (due_ms, seq) for the heap."""
    due_ms: float
    seq: int
    callback: Callable[[], Any] = field(compare=False)
    owner: Any = field(default=None, compare=False)
    _cancelled: bool = field(default=False, compare=False, repr=False)
    _fired: bool = field(default=False, compare=False, repr=False)
    
    def cancel(self) -> bool:
        """Cancel if still pending. Returns True when this call cancelled it."""
        if self._cancelled or self._fired:
            return False
        self._cancelled = True
        return True
    
    @property
    def cancelled(self) -> bool:
        return self._cancelled
    
    @property
    def fired(self) -> bool:
        return self._fired
    
    @property
    def pending(self) -> bool:
        return not (self._cancelled or self._fired)


class Scheduler:
    """Virtual-clock timer queue."""
    
    def __init__(self, start_ms: float = 0.0):
        self._now: float = start_ms
        self._heap: List[TimerHandle] = []
        self._seq = itertools.count()
        self._dt_connection: Optional[Connection] = None
    
    @property
    def now(self) -> float:
        return self._now
    
    @property
    def pending_count(self) -> int:
        return sum(1 for h in self._heap if h.pending)
    
    def call_later(self, delay_ms: float, callback: Callable[[], Any], owner: Any = None) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError(f"Timer delay must be non-negative, got {delay_ms}")
        handle = TimerHandle(self._now + delay_ms, next(self._seq), callback, owner)
        heapq.heappush(self._heap, handle)
        return handle
    
    def cancel_owner(self, owner: Any) -> int:
        """Cancel every pending timer registered for `owner`."""
        count = 0
        for handle in self._heap:
            if handle.owner is owner and handle.cancel():
                count += 1
        if count:
            self._compact()
        return count
    
    def cancel_all(self) -> int:
        count = sum(1 for h in self._heap if h.cancel())
        self._heap.clear()
        return count
    
    def advance(self, dt_ms: float) -> int:
        """Move the clock forward and fire everything that falls due. Returns fired count."""
        target = self._now + max(0.0, dt_ms)
        fired = 0
        while self._heap and self._heap[0].due_ms <= target:
            handle = heapq.heappop(self._heap)
            if not handle.pending:
                continue
            # Callbacks observe the clock at their own due time
            self._now = handle.due_ms
            handle._fired = True
            fired += 1
            handle.callback()
        self._now = target
        return fired
    
    def advance_to(self, t_ms: float) -> int:
        return self.advance(t_ms - self._now)
    
    def tick(self, frame: FrameState) -> int:
        return self.advance(frame.dt_ms)
    
    def bind(self, bridge: SignalBridge):
        """Drive the clock from SIGNAL_DT (seconds)."""
        if self._dt_connection:
            self._dt_connection.disconnect()
        self._dt_connection = bridge.connect(SIGNAL_DT, self._on_dt)
    
    def _on_dt(self, dt: float):
        self.advance(dt * 1000.0)
    
    def _compact(self):
        self._heap = [h for h in self._heap if h.pending]
        heapq.heapify(self._heap)


class OwnedTimers:
    """
    Book-keeping for one component's timers on a shared scheduler.
    teardown() cancels everything the component still has pending.
    """
    
    def __init__(self, scheduler: Scheduler, owner: Any):
        self.scheduler = scheduler
        self.owner = owner
        self._named: Dict[str, TimerHandle] = {}
    
    def start(self, name: str, delay_ms: float, callback: Callable[[], Any]) -> TimerHandle:
        """Start (or restart) the named timer."""
        self.cancel(name)
        handle = self.scheduler.call_later(delay_ms, callback, owner=self.owner)
        self._named[name] = handle
        return handle
    
    def cancel(self, name: str) -> bool:
        handle = self._named.pop(name, None)
        return handle.cancel() if handle else False
    
    def is_pending(self, name: str) -> bool:
        handle = self._named.get(name)
        return handle is not None and handle.pending
    
    def teardown(self) -> int:
        self._named.clear()
        cancelled = self.scheduler.cancel_owner(self.owner)
        if cancelled:
            logger.info(f"Cancelled {cancelled} pending timer(s) for {type(self.owner).__name__}")
        return cancelled
