import pytest
from worldscape.core.signal import SignalBridge, SIGNAL_VIEW_CHANGED, SIGNAL_RESIZE
from worldscape.view.camera import WorldCamera, CameraConfig
from worldscape.view.projection import CameraState


def test_document_extent():
    camera = WorldCamera(viewport_width=1280, viewport_height=720)
    assert camera.document_height == 5000.0
    assert camera.max_scroll == 4280.0
    
    tall = WorldCamera(viewport_width=1280, viewport_height=1200)
    assert tall.document_height == 6000.0

def test_scroll_is_clamped():
    camera = WorldCamera()
    camera.scroll_to(-50)
    assert camera.scroll_offset == 0.0
    camera.scroll_to(1e9)
    assert camera.scroll_offset == camera.max_scroll
    assert camera.scroll_progress() == 1.0

def test_drag_scrolls_and_yaws():
    camera = WorldCamera()
    assert camera.begin_drag(100, 100)
    camera.update_drag(250, 40)
    
    assert camera.scroll_offset == 60.0
    assert camera.rotation == pytest.approx(5.0)
    
    # Yaw is held at the limit
    camera.update_drag(2000, 40)
    assert camera.rotation == 10.0
    camera.end_drag()
    assert not camera.dragging

def test_set_rotation_is_clamped():
    camera = WorldCamera(config=CameraConfig(rotation_limit=4.0))
    camera.set_rotation(-30)
    assert camera.rotation == -4.0

def test_lock_suspends_input():
    locked = [True]
    camera = WorldCamera(lock=lambda: locked[0])
    
    assert camera.scroll_to(500) == False
    assert camera.begin_drag(0, 0) == False
    assert camera.animate_to(500) == False
    assert camera.scroll_offset == 0.0
    
    locked[0] = False
    assert camera.scroll_to(500)

def test_animation_eases_to_target():
    camera = WorldCamera()
    assert camera.animate_to(1000, duration_ms=600)
    
    camera.update(300)
    assert 500.0 < camera.scroll_offset < 1000.0
    camera.update(300)
    assert camera.scroll_offset == 1000.0
    assert not camera.animating

def test_navigate_to_y_uses_upper_third():
    camera = WorldCamera(viewport_height=720)
    camera.navigate_to_y(1240)
    camera.update(10000)
    
    assert camera.scroll_offset == pytest.approx(1000.0)

def test_page_down():
    camera = WorldCamera(viewport_height=720)
    camera.page_down()
    camera.update(10000)
    
    assert camera.scroll_offset == pytest.approx(480.0)

def test_signals():
    bridge = SignalBridge()
    states = []
    sizes = []
    bridge.connect(SIGNAL_VIEW_CHANGED, states.append)
    bridge.connect(SIGNAL_RESIZE, lambda w, h: sizes.append((w, h)))
    
    camera = WorldCamera()
    camera.bind_bridge(bridge)
    camera.scroll_to(100)
    camera.set_viewport(800, 600)
    
    assert states[0] == CameraState(100.0, 0.0, 1280.0, 720.0)
    assert states[-1].viewport_width == 800
    assert sizes == [(800, 600)]

def test_scroll_by_and_page_up():
    camera = WorldCamera(viewport_height=720)
    camera.scroll_by(1000)
    camera.scroll_by(-100)
    assert camera.scroll_offset == 900.0
    
    camera.page_up()
    camera.update(10000)
    assert camera.scroll_offset == pytest.approx(420.0)
