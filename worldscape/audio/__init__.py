"""
Audio cue routing.

Sound synthesis lives outside this package; AudioCues only forwards the
hover / expand / close notifications to whatever sink is attached.

Quick Start:
    from worldscape.audio import AudioCues

    cues = AudioCues(bridge)
    cues.attach(my_synth)
"""

from .cues import AudioCues, SoundSink

__all__ = [
    'AudioCues',
    'SoundSink',
]
