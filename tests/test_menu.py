import pytest
from worldscape.core.math3d import Vec2
from worldscape.core.signal import SignalBridge, SIGNAL_MENU_PERSISTED
from worldscape.core.timers import Scheduler
from worldscape.menu.orbital import OrbitalMenu, MenuEntry, MenuConfig


ENTRIES = [MenuEntry(f"E{i}", '#ffffff', f"target-{i}") for i in range(6)]


@pytest.fixture
def scheduler():
    return Scheduler()

@pytest.fixture
def navigated():
    return []

@pytest.fixture
def menu(scheduler, navigated):
    return OrbitalMenu(ENTRIES, scheduler, on_navigate=navigated.append)


def test_needs_entries(scheduler):
    with pytest.raises(ValueError):
        OrbitalMenu([], scheduler)

def test_radius_collapses_when_closed(menu):
    assert menu.radius == 0.0
    for slot in menu.layout(Vec2(100, 100)):
        assert slot.position.to_tuple() == (100.0, 100.0)
    
    menu.open()
    assert menu.radius == 75.0

def test_layout_starts_at_top_and_runs_clockwise(menu):
    menu.open()
    slots = menu.layout()
    
    assert [s.angle for s in slots] == [-90.0, -30.0, 30.0, 90.0, 150.0, 210.0]
    assert slots[0].position.x == pytest.approx(0.0, abs=1e-9)
    assert slots[0].position.y == pytest.approx(-75.0)
    assert slots[1].position.x == pytest.approx(75.0 * 0.8660254)
    assert slots[3].position.y == pytest.approx(75.0)
    
    for slot in slots:
        assert slot.position.length() == pytest.approx(75.0)

def test_spokes_start_at_center(menu):
    menu.open()
    center = Vec2(10, 20)
    spokes = menu.spokes(center)
    
    assert len(spokes) == 6
    assert all(start == center for start, _ in spokes)

def test_cycle_from_nothing_selects_first(menu):
    assert menu.cycle(1) is None    # closed
    menu.open()
    
    assert menu.cycle(-1) == 0
    assert menu.cycle(-1) == 5
    assert menu.cycle(1) == 0
    assert menu.cycle(1) == 1

def test_keys_and_wheel(menu, navigated):
    assert menu.handle_key('ArrowRight') == False    # closed
    menu.open()
    
    assert menu.handle_key('ArrowDown')
    assert menu.handle_key('ArrowRight')
    assert menu.active_index == 1
    assert menu.handle_key('ArrowUp')
    assert menu.active_index == 0
    assert menu.handle_wheel(-3.0)
    assert menu.active_index == 5
    assert menu.handle_key('q') == False
    
    assert menu.handle_key('Enter')
    assert navigated == ['target-5']

def test_enter_without_selection_does_nothing(menu, navigated):
    menu.open()
    assert menu.handle_key('Enter') == False
    assert navigated == []

def test_dwell_persists_highlight(menu, scheduler):
    bridge = SignalBridge()
    persisted = []
    bridge.connect(SIGNAL_MENU_PERSISTED, persisted.append)
    menu.bind_bridge(bridge)
    menu.open()
    
    menu.pointer_enter(2)
    assert menu.active_index == 2
    scheduler.advance(399)
    assert not menu.persisted
    scheduler.advance(1)
    assert menu.persisted
    assert persisted == [2]

def test_leaving_cancels_dwell(menu, scheduler):
    menu.open()
    menu.pointer_enter(2)
    scheduler.advance(200)
    menu.pointer_leave()
    scheduler.advance(1000)
    
    assert not menu.persisted
    assert menu.active_index is None

def test_close_resets(menu, scheduler):
    menu.open()
    menu.pointer_enter(4)
    menu.close()
    
    assert menu.active_index is None
    assert not menu.dwell_pending
    assert menu.radius == 0.0

def test_activate_by_index(menu, navigated):
    assert menu.activate(3) == False    # closed
    menu.open()
    assert menu.activate(3)
    assert menu.activate(99) == False
    assert navigated == ['target-3']

def test_teardown_cancels_dwell(menu, scheduler):
    menu.open()
    menu.pointer_enter(1)
    menu.teardown()
    
    assert scheduler.pending_count == 0

def test_custom_radius(scheduler):
    menu = OrbitalMenu(ENTRIES[:4], scheduler, MenuConfig(open_radius=120.0))
    menu.toggle()
    
    assert [s.angle for s in menu.layout()] == [-90.0, 0.0, 90.0, 180.0]
    assert menu.layout()[1].position.x == pytest.approx(120.0)
