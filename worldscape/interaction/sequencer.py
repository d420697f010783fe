# worldscape/interaction/sequencer.py
"""
SingularitySequencer - the one-shot sweep that explodes every panel.

Timeline for N panels, interval I, hold H, started at t0:

    t0          first panel (largest world y) explodes
    t0 + k*I    panel k explodes
    t0 + (N-1)*I + H
                every panel returns to idle together

Each step is its own cancellable timer on the shared Scheduler, so tearing
the view down mid-sweep leaves nothing behind to fire.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from ..core.signal import (
    SignalBridge, SignalEmitter,
    SIGNAL_SEQUENCE_STARTED, SIGNAL_SEQUENCE_STEP, SIGNAL_SEQUENCE_FINISHED,
)
from ..core.timers import Scheduler, OwnedTimers
from ..core.world import World
from .state import InteractionResolver

logger = logging.getLogger(__name__)


# Navigation target that starts the sequence instead of scrolling
SEQUENCE_TRIGGER_TOKEN = 'EXPLODE_CMD'


@dataclass(frozen=True)
class SequencerConfig:
    step_interval_ms: float = 150.0
    hold_ms: float = 4500.0


class SingularitySequencer(SignalEmitter):

    def __init__(
        self,
        world: World,
        resolver: InteractionResolver,
        scheduler: Scheduler,
        config: SequencerConfig = None,
        bridge: SignalBridge = None,
    ):
        self.world = world
        self.resolver = resolver
        self.scheduler = scheduler
        self.config = config or SequencerConfig()
        self._timers = OwnedTimers(scheduler, self)

        self._active = False
        self._order: List[str] = []
        self._activations: List[Tuple[str, float]] = []
        self._started_at: Optional[float] = None

        if bridge:
            self.bind_bridge(bridge)

    @property
    def active(self) -> bool:
        return self._active

    @property
    def order(self) -> List[str]:
        return list(self._order)

    @property
    def activations(self) -> List[Tuple[str, float]]:
        """(panel_id, t_ms) for every step of the current or last run."""
        return list(self._activations)

    @property
    def reset_at(self) -> Optional[float]:
        """Scheduled time of the global reset, once the sweep has finished."""
        if not self._active or self._started_at is None:
            return None
        steps = max(0, len(self._order) - 1)
        return self._started_at + steps * self.config.step_interval_ms + self.config.hold_ms

    def trigger(self) -> bool:
        if self._active:
            logger.debug("Singularity trigger ignored: sequence already running")
            return False

        self._active = True
        self._order = [p.id for p in self.world.sorted_by_scroll_descending()]
        self._activations = []
        self._started_at = self.scheduler.now

        self.resolver.begin_sequence()
        logger.info(f"Singularity sequence started over {len(self._order)} panel(s)")
        self.emit(SIGNAL_SEQUENCE_STARTED, len(self._order))

        if self._order:
            self._step(0)
        else:
            self._timers.start('reset', self.config.hold_ms, self._finish)
        return True

    def _step(self, index: int):
        panel_id = self._order[index]
        now = self.scheduler.now

        # A panel deleted mid-sweep keeps its slot so spacing stays exact
        if panel_id in self.world:
            self.resolver.mark_exploding(panel_id)
        self._activations.append((panel_id, now))
        self.emit(SIGNAL_SEQUENCE_STEP, panel_id, index, now)

        if index + 1 < len(self._order):
            self._timers.start('step', self.config.step_interval_ms, lambda: self._step(index + 1))
        else:
            self._timers.start('reset', self.config.hold_ms, self._finish)

    def _finish(self):
        self.resolver.end_sequence()
        self._active = False
        logger.info("Singularity sequence finished")
        self.emit(SIGNAL_SEQUENCE_FINISHED)

    def teardown(self):
        """Cancel pending steps and the reset; leaves the world idle."""
        self._timers.teardown()
        if self._active:
            self.resolver.end_sequence()
            self._active = False
