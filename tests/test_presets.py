from worldscape.interaction.sequencer import SEQUENCE_TRIGGER_TOKEN
from worldscape.presets import default_world, DEFAULT_MENU, TOP_TARGET


def test_default_world():
    world = default_world()
    
    assert len(world) == 9
    assert world.ids()[0] == 'intro-text'
    assert world.sorted_by_scroll_descending()[0].id == 'final-contact'

def test_default_connections_resolve():
    world = default_world()
    for panel in world:
        for target in panel.connected_to:
            assert target in world

def test_default_menu_targets():
    world = default_world()
    targets = [entry.target for entry in DEFAULT_MENU]
    
    assert len(DEFAULT_MENU) == 6
    assert targets[0] == TOP_TARGET
    assert targets[-1] == SEQUENCE_TRIGGER_TOKEN
    assert all(t in world for t in targets[1:-1])
