import pytest
from worldscape.core.frame import FrameState
from worldscape.core.signal import SignalBridge, SIGNAL_DT
from worldscape.core.timers import Scheduler, OwnedTimers


def test_fires_in_due_order():
    scheduler = Scheduler()
    fired = []
    scheduler.call_later(300, lambda: fired.append('c'))
    scheduler.call_later(100, lambda: fired.append('a'))
    scheduler.call_later(200, lambda: fired.append('b'))
    
    assert scheduler.advance(250) == 2
    assert fired == ['a', 'b']
    assert scheduler.now == 250.0
    scheduler.advance(50)
    assert fired == ['a', 'b', 'c']

def test_ties_keep_scheduling_order():
    scheduler = Scheduler()
    fired = []
    for name in 'xyz':
        scheduler.call_later(100, lambda name=name: fired.append(name))
    scheduler.advance(100)
    
    assert fired == ['x', 'y', 'z']

def test_callback_sees_its_own_due_time():
    scheduler = Scheduler()
    seen = []
    
    def step():
        seen.append(scheduler.now)
        if len(seen) < 4:
            scheduler.call_later(150, step)
    
    scheduler.call_later(0, step)
    scheduler.advance(1000)
    
    assert seen == [0.0, 150.0, 300.0, 450.0]
    assert scheduler.now == 1000.0

def test_cancel():
    scheduler = Scheduler()
    fired = []
    handle = scheduler.call_later(10, lambda: fired.append(1))
    
    assert handle.cancel()
    assert handle.cancel() == False
    scheduler.advance(100)
    assert fired == []
    assert handle.cancelled and not handle.fired

def test_cancel_owner():
    scheduler = Scheduler()
    owner = object()
    scheduler.call_later(10, lambda: None, owner=owner)
    scheduler.call_later(20, lambda: None, owner=owner)
    scheduler.call_later(30, lambda: None)
    
    assert scheduler.cancel_owner(owner) == 2
    assert scheduler.pending_count == 1

def test_negative_delay_rejected():
    with pytest.raises(ValueError):
        Scheduler().call_later(-1, lambda: None)

def test_frame_and_signal_drive_the_clock():
    scheduler = Scheduler()
    scheduler.tick(FrameState(frame_id=1, dt=0.5, t=0.5))
    assert scheduler.now == pytest.approx(500.0)
    
    bridge = SignalBridge()
    scheduler.bind(bridge)
    bridge.emit(SIGNAL_DT, 0.25)
    assert scheduler.now == pytest.approx(750.0)

def test_owned_timers_restart_by_name():
    scheduler = Scheduler()
    timers = OwnedTimers(scheduler, owner='menu')
    fired = []
    timers.start('dwell', 400, lambda: fired.append(scheduler.now))
    scheduler.advance(300)
    timers.start('dwell', 400, lambda: fired.append(scheduler.now))
    
    scheduler.advance(300)
    assert fired == []
    assert timers.is_pending('dwell')
    scheduler.advance(100)
    assert fired == [700.0]
    assert not timers.is_pending('dwell')

def test_owned_timers_teardown():
    scheduler = Scheduler()
    timers = OwnedTimers(scheduler, owner='seq')
    timers.start('step', 10, lambda: None)
    timers.start('reset', 20, lambda: None)
    
    assert timers.teardown() == 2
    assert scheduler.pending_count == 0

def test_cancel_all():
    scheduler = Scheduler()
    fired = []
    scheduler.call_later(10, lambda: fired.append(1))
    scheduler.call_later(20, lambda: fired.append(2))
    
    assert scheduler.cancel_all() == 2
    scheduler.advance(100)
    assert fired == []
