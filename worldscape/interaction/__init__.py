# worldscape/interaction/__init__.py
"""Interaction module - per-panel state and the singularity sequence."""

from .state import (
    InteractionState,
    InteractionConfig,
    InteractionResolver,
)

from .sequencer import (
    SingularitySequencer,
    SequencerConfig,
    SEQUENCE_TRIGGER_TOKEN,
)

__all__ = [
    'InteractionState',
    'InteractionConfig',
    'InteractionResolver',
    'SingularitySequencer',
    'SequencerConfig',
    'SEQUENCE_TRIGGER_TOKEN',
]
