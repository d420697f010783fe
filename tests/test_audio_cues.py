import gc

from worldscape.audio.cues import AudioCues
from worldscape.core.math3d import Vec3
from worldscape.core.signal import SignalBridge
from worldscape.core.timers import Scheduler
from worldscape.core.world import World, Panel, Size
from worldscape.interaction.state import InteractionResolver
from worldscape.interaction.sequencer import SingularitySequencer


class RecordingSink:
    def __init__(self):
        self.calls = []
    def on_hover(self, panel_id):
        self.calls.append(('hover', panel_id))
    def on_expand(self):
        self.calls.append(('expand',))
    def on_close(self):
        self.calls.append(('close',))


class BrokenSink(RecordingSink):
    def on_hover(self, panel_id):
        raise RuntimeError("speaker unplugged")


def _setup():
    bridge = SignalBridge()
    world = World([Panel('a', Vec3(), Size(200, 200))], bridge=bridge)
    resolver = InteractionResolver(world, bridge=bridge)
    return bridge, world, resolver


def test_cues_follow_interaction():
    bridge, _, resolver = _setup()
    sink = RecordingSink()
    cues = AudioCues(bridge)
    cues.attach(sink)
    
    resolver.pointer_enter('a')
    resolver.pointer_down('a')
    resolver.pointer_up('a')
    resolver.close()
    
    assert sink.calls == [('hover', 'a'), ('expand',), ('close',)]

def test_sequence_start_cues_expand():
    bridge, world, resolver = _setup()
    sink = RecordingSink()
    cues = AudioCues(bridge)
    cues.attach(sink)
    
    SingularitySequencer(world, resolver, Scheduler(), bridge=bridge).trigger()
    assert sink.calls == [('expand',)]

def test_detach_silences():
    bridge, _, resolver = _setup()
    sink = RecordingSink()
    cues = AudioCues(bridge)
    cues.attach(sink)
    cues.detach()
    
    resolver.pointer_enter('a')
    assert sink.calls == []
    assert not cues.attached

def test_dropped_cues_are_not_kept_alive():
    bridge, _, resolver = _setup()
    sink = RecordingSink()
    cues = AudioCues(bridge)
    cues.attach(sink)
    
    del cues
    gc.collect()
    resolver.pointer_enter('a')
    assert sink.calls == []

def test_sink_errors_do_not_reach_the_core():
    bridge, _, resolver = _setup()
    cues = AudioCues(bridge)
    cues.attach(BrokenSink())
    
    assert resolver.pointer_enter('a')
    assert resolver.pointer_down('a')
