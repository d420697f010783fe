import pytest
from worldscape.core.frame import FrameState
from worldscape.core.math3d import Vec3
from worldscape.core.signal import SIGNAL_NAVIGATE, SIGNAL_CLOSE, SIGNAL_PANEL_REMOVED
from worldscape.interaction.state import InteractionState
from worldscape.presets import default_world
from worldscape.stage import Stage, DirtyFlags, FOCUS_DEPTH_ORDER, EXPLODING_DEPTH_ORDER


@pytest.fixture
def stage():
    return Stage(default_world(), viewport=(1280, 720))


def test_compose_culls_and_orders(stage):
    frame = stage.compose()
    
    assert 'intro-text' in frame.ids
    # y = 3800 at scroll 0 is far below the fold
    assert 'final-contact' not in frame.ids
    depths = [item.depth_order for item in frame.items]
    assert depths == sorted(depths)
    assert len(frame.beams) > 0
    assert len(frame.wireboxes) > 0

def test_projection_cache(stage):
    first = stage.projections()
    assert stage.dirty == DirtyFlags.NONE
    assert stage.projections() is first
    
    stage.camera.scroll_to(200)
    assert stage.projections() is not first
    
    cached = stage.projections()
    stage.world.move('intro-text', Vec3(0, 0, 0))
    assert DirtyFlags.WORLD in stage.dirty
    assert stage.projections()['intro-text'].screen_y == 160.0
    assert stage.projections() is not cached

def test_focus_mode(stage):
    stage.menu.open()
    assert stage.resolver.expand('gallery-1')
    frame = stage.compose()
    
    assert frame.ids == ['gallery-1']
    item = frame.item('gallery-1')
    assert (item.screen_x, item.screen_y) == (640.0, 360.0)
    assert item.scale == 1.0
    assert item.depth_order == FOCUS_DEPTH_ORDER
    assert item.state == InteractionState.EXPANDED
    assert frame.backdrop_dimmed
    assert frame.menu_slots == ()
    assert not stage.menu.is_open

def test_camera_locked_in_focus_mode(stage):
    stage.resolver.expand('gallery-1')
    
    assert stage.camera.scroll_to(500) == False
    assert stage.navigate_to('blog-node') == False
    assert stage.camera.scroll_offset == 0.0

def test_navigate_to_panel(stage):
    navigated = []
    stage.bridge.connect(SIGNAL_NAVIGATE, navigated.append)
    stage.menu.open()
    
    assert stage.navigate_to('gallery-1')
    assert not stage.menu.is_open
    stage.advance(600)
    
    assert stage.camera.scroll_offset == pytest.approx(1100 - 240)
    assert navigated == ['gallery-1']

def test_navigate_top_and_unknown(stage):
    stage.camera.scroll_to(2000)
    
    assert stage.navigate_to('top')
    stage.advance(600)
    assert stage.camera.scroll_offset == 0.0
    assert stage.navigate_to('nowhere') == False

def test_menu_entry_starts_sequence(stage):
    stage.menu.open()
    assert stage.menu.activate(5)
    
    assert stage.sequencer.active
    assert not stage.menu.is_open
    frame = stage.compose()
    
    # Nothing is culled, no beams, first panel already exploding
    assert len(frame.items) == 9
    assert frame.beams == ()
    assert frame.sequence_active
    assert frame.item('final-contact').depth_order == EXPLODING_DEPTH_ORDER
    assert frame.items[-1].panel_id == 'final-contact'
    assert frame.menu_slots == ()

def test_sequence_runs_to_reset(stage):
    stage.trigger_sequence()
    # 9 panels: reset at 8 * 150 + 4500
    stage.advance(5699)
    assert stage.sequencer.active
    assert len(stage.resolver.exploding_ids) == 9
    
    stage.tick(FrameState(frame_id=1, dt=0.5, t=6.2))
    assert not stage.sequencer.active
    assert set(stage.resolver.states().values()) == {InteractionState.IDLE}
    assert len(stage.compose().beams) > 0

def test_sequence_closes_focus(stage):
    stage.resolver.expand('gallery-1')
    assert stage.trigger_sequence()
    
    assert stage.resolver.expanded_id is None
    assert len(stage.compose().items) == 9

def test_draw_batch(stage):
    frame = stage.compose()
    batch = stage.to_draw_batch(frame)
    
    assert batch.finalized
    assert batch.quad_count == 2 * len(frame.items) + 2 * len(frame.beams)
    assert batch.line_count == 3 * len(frame.beams) + 12 * len(frame.wireboxes)
    z = [q.z_index for q in batch.quads]
    assert z == sorted(z)

def test_menu_slots_follow_viewport(stage):
    stage.menu.open()
    frame = stage.compose()
    
    assert len(frame.menu_slots) == 6
    assert frame.menu_slots[0].position.x == pytest.approx(1280 - 64)
    assert frame.menu_slots[0].position.y == pytest.approx(64 - 75)

def test_teardown_cancels_timers(stage):
    stage.menu.open()
    stage.menu.pointer_enter(1)
    stage.trigger_sequence()
    stage.teardown()
    
    assert stage.scheduler.pending_count == 0
    assert not stage.resolver.sequence_active

def test_teardown_stops_camera_animation(stage):
    assert stage.navigate_to('final-contact')
    stage.advance(100)
    stage.teardown()
    offset = stage.camera.scroll_offset
    stage.advance(5000)
    
    assert not stage.camera.animating
    assert stage.camera.scroll_offset == offset

def test_teardown_unhooks_resolver_and_world(stage):
    closes = []
    stage.bridge.connect(SIGNAL_CLOSE, closes.append)
    assert stage.resolver.expand('intro-text')
    stage.teardown()
    
    stage.world.remove('intro-text')
    assert closes == []
    assert stage.bridge.receiver_count(SIGNAL_PANEL_REMOVED) == 0
