from worldscape.core.math3d import Vec3
from worldscape.core.world import Panel, Size
from worldscape.view.projection import Projection
from worldscape.view.culling import CullingConfig, is_culled, visible_panels


def _at(y: float) -> Projection:
    return Projection(640.0, y, 1.0, 1000)


def test_cull_above_viewport():
    assert is_culled(_at(-401), 200, 720) == True
    assert is_culled(_at(-399), 200, 720) == False
    assert is_culled(_at(-400), 200, 720) == False   # boundary is kept

def test_cull_below_viewport():
    assert is_culled(_at(1121), 200, 720) == True
    assert is_culled(_at(1119), 200, 720) == False

def test_expanded_and_sequence_are_never_culled():
    assert is_culled(_at(-10000), 200, 720, expanded=True) == False
    assert is_culled(_at(10000), 200, 720, sequence_active=True) == False

def test_margin_factor_is_configurable():
    config = CullingConfig(margin_factor=1.0)
    
    assert is_culled(_at(-201), 200, 720, config=config) == True
    assert is_culled(_at(-199), 200, 720, config=config) == False

def _panels():
    return [
        Panel('a', Vec3(0, 0, 0), Size(200, 200)),
        Panel('b', Vec3(0, 0, 0), Size(200, 200)),
        Panel('c', Vec3(0, 0, 0), Size(200, 200)),
    ]

def test_visible_panels_keeps_world_order():
    projections = {'a': _at(100), 'b': _at(-5000), 'c': _at(300)}
    
    assert [p.id for p in visible_panels(_panels(), projections, 720)] == ['a', 'c']

def test_sequence_disables_culling():
    projections = {'a': _at(100), 'b': _at(-5000), 'c': _at(9000)}
    visible = visible_panels(_panels(), projections, 720, sequence_active=True)
    
    assert [p.id for p in visible] == ['a', 'b', 'c']

def test_focus_mode_is_exclusive():
    projections = {'a': _at(100), 'b': _at(-5000), 'c': _at(300)}
    
    for expanded in ('a', 'b', 'c'):
        visible = visible_panels(_panels(), projections, 720, expanded_id=expanded)
        assert [p.id for p in visible] == [expanded]
