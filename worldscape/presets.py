# worldscape/presets.py
"""
Demonstration content: the nine-panel world and the six-entry orbital menu.
"""

from __future__ import annotations
from typing import List

from .core.math3d import Vec3
from .core.world import Panel, PanelKind, Size, World
from .interaction.sequencer import SEQUENCE_TRIGGER_TOKEN
from .menu.orbital import MenuEntry


TOP_TARGET = 'top'


def default_panels() -> List[Panel]:
    return [
        Panel('intro-text', Vec3(-60, 350, -100), Size(380, 280),
              ['gallery-1', 'skills-node'], PanelKind.TEXT_EDITOR, 'ABOUT_ME', 'cyan'),
        Panel('skills-node', Vec3(350, 650, 150), Size(220, 320),
              ['gallery-1', 'console-node'], PanelKind.ITEM_LIST, 'SYSTEM_CAPABILITIES', 'slate'),
        Panel('gallery-1', Vec3(-150, 1100, -50), Size(450, 320),
              ['sat-fade', 'blog-node'], PanelKind.GALLERY_MAIN, 'VISUAL_DB_PRIMARY', 'magenta'),
        Panel('sat-fade', Vec3(-550, 1500, -600), Size(200, 150),
              ['sat-wipe'], PanelKind.GALLERY_SATELLITE_FADE, 'SAT_UPLINK_ALPHA', 'cyan'),
        Panel('console-node', Vec3(500, 1400, -300), Size(250, 250),
              [], PanelKind.OS_SANDBOX, 'DEBUG_LOG', 'olive'),
        Panel('sat-wipe', Vec3(280, 2000, 200), Size(240, 180),
              ['side-note'], PanelKind.GALLERY_SATELLITE_CAROUSEL, 'SAT_UPLINK_BETA', 'yellow'),
        Panel('side-note', Vec3(-350, 2400, -200), Size(180, 160),
              [], PanelKind.TEXT_BOX, 'CONTEXT', 'yellow',
              {'text': 'All systems operational. Efficiency at 98%. Neural link stable.'}),
        Panel('blog-node', Vec3(100, 3000, -900), Size(300, 380),
              ['final-contact'], PanelKind.ITEM_LIST, 'TRANSMISSIONS', 'rust'),
        Panel('final-contact', Vec3(0, 3800, 0), Size(420, 250),
              [], PanelKind.HERO, 'UPLINK_TERMINAL', 'slate'),
    ]


def default_world() -> World:
    return World(default_panels())


DEFAULT_MENU = (
    MenuEntry('HOME', '#98DDDE', TOP_TARGET),
    MenuEntry('RESUMÉ', '#E9AAE6', 'intro-text'),
    MenuEntry('PROJECTS', '#ffe600', 'skills-node'),
    MenuEntry('GALLERY', '#E9897E', 'gallery-1'),
    MenuEntry('BLOG', '#A0DAA9', 'blog-node'),
    MenuEntry('VORTEX', '#6667AB', SEQUENCE_TRIGGER_TOKEN),
)
