"""
AudioCues - forwards interaction notifications to a sound collaborator.

The collaborator is anything with on_hover(panel_id), on_expand() and
on_close(). The bridge holds AudioCues weakly, so dropping it silences the
cues. The sink may be absent or muted; the core never waits on it and never
sees its errors.
"""

from __future__ import annotations
from typing import List, Optional, Protocol

from ..core.signal import (
    SignalBridge, Connection,
    SIGNAL_HOVER, SIGNAL_EXPAND, SIGNAL_CLOSE, SIGNAL_SEQUENCE_STARTED,
)


class SoundSink(Protocol):
    def on_hover(self, panel_id: str) -> None: ...
    def on_expand(self) -> None: ...
    def on_close(self) -> None: ...


class AudioCues:
    """
    Usage:
        cues = AudioCues(bridge)
        cues.attach(synth)      # synth implements SoundSink
        ...
        cues.detach()
    """

    def __init__(self, bridge: SignalBridge):
        self.bridge = bridge
        self._connections: List[Connection] = []
        self._sink: Optional[SoundSink] = None

    @property
    def attached(self) -> bool:
        return bool(self._connections)

    def attach(self, sink: SoundSink):
        self.detach()
        self._sink = sink
        self._connections = [
            self.bridge.connect_weak(SIGNAL_HOVER, self, '_hover'),
            self.bridge.connect_weak(SIGNAL_EXPAND, self, '_expand'),
            self.bridge.connect_weak(SIGNAL_CLOSE, self, '_close'),
            # The sweep opens with the expand cue
            self.bridge.connect_weak(SIGNAL_SEQUENCE_STARTED, self, '_expand'),
        ]

    def detach(self):
        for conn in self._connections:
            conn.disconnect()
        self._connections = []
        self._sink = None

    def _hover(self, panel_id: str):
        if self._sink is not None:
            self._sink.on_hover(panel_id)

    def _expand(self, *_):
        if self._sink is not None:
            self._sink.on_expand()

    def _close(self, *_):
        if self._sink is not None:
            self._sink.on_close()
