# worldscape/stage.py
"""
Stage - owns the world and its collaborators and composes frames.

One Stage per running view:

    world ──► projections (cached) ──► cull ──► states ──► Frame
                  │                                         │
                  └──► beams, wireframes ───────────────────┘

The projection cache is keyed on dirty flags raised by bridge signals
(camera moves, world edits, panel resizes), so an idle frame re-uses the
last pass. Frames are plain data; to_draw_batch() turns one into quads and
lines for whatever surface the host owns.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Flag, auto
from typing import Dict, List, Optional, Sequence, Tuple
import logging

from .config import WorldscapeConfig
from .core.frame import FrameState
from .core.math3d import Vec2
from .core.signal import (
    SignalBridge,
    SIGNAL_VIEW_CHANGED, SIGNAL_RESIZE, SIGNAL_NAVIGATE,
    SIGNAL_PANEL_ADDED, SIGNAL_PANEL_REMOVED, SIGNAL_PANEL_CHANGED, SIGNAL_PANEL_RESIZED,
    SIGNAL_EXPAND, SIGNAL_SEQUENCE_STARTED,
)
from .core.timers import Scheduler
from .core.world import World
from .interaction.sequencer import SingularitySequencer, SEQUENCE_TRIGGER_TOKEN
from .interaction.state import InteractionResolver, InteractionState
from .menu.orbital import OrbitalMenu, MenuEntry, MenuSlot
from .presets import DEFAULT_MENU, TOP_TARGET
from .render.connections import Beam, build_beams, draw_beams
from .render.draw import DrawBatch
from .render.style import Palette, DEFAULT_PALETTE, with_alpha
from .render.wireframe import WireBox, build_wireframes, draw_wireframes
from .view.camera import WorldCamera
from .view.culling import visible_panels
from .view.projection import CameraState, Projection, project_state

logger = logging.getLogger(__name__)


FOCUS_DEPTH_ORDER = 10000
EXPLODING_DEPTH_ORDER = 8888

WIREFRAME_Z = -2
BEAM_Z = -1


class DirtyFlags(Flag):
    """Reasons the cached projections are stale."""
    NONE = 0
    CAMERA = auto()     # Scroll, rotation or viewport changed
    WORLD = auto()      # Panel added, removed or moved
    RESIZE = auto()     # Panel size changed

    ALL = CAMERA | WORLD | RESIZE


@dataclass(frozen=True)
class RenderItem:
    """One panel as it should be painted this frame."""
    panel_id: str
    screen_x: float
    screen_y: float
    scale: float
    depth_order: int
    state: InteractionState
    width: float
    height: float
    theme: str


@dataclass(frozen=True)
class Frame:
    camera: CameraState
    items: Tuple[RenderItem, ...]
    beams: Tuple[Beam, ...] = ()
    wireboxes: Tuple[WireBox, ...] = ()
    menu_slots: Tuple[MenuSlot, ...] = ()
    expanded_id: Optional[str] = None
    sequence_active: bool = False
    backdrop_dimmed: bool = False
    scroll_progress: float = 0.0

    def item(self, panel_id: str) -> Optional[RenderItem]:
        for item in self.items:
            if item.panel_id == panel_id:
                return item
        return None

    @property
    def ids(self) -> List[str]:
        return [item.panel_id for item in self.items]


class Stage:

    def __init__(
        self,
        world: World = None,
        config: WorldscapeConfig = None,
        menu_entries: Sequence[MenuEntry] = DEFAULT_MENU,
        bridge: SignalBridge = None,
        scheduler: Scheduler = None,
        viewport: Tuple[float, float] = (1280.0, 720.0),
    ):
        self.config = config or WorldscapeConfig()
        self.bridge = bridge or SignalBridge()
        self.scheduler = scheduler or Scheduler()

        self.world = world if world is not None else World()
        self.world.bind_bridge(self.bridge)

        self.resolver = InteractionResolver(self.world, self.config.interaction, self.bridge)
        self.sequencer = SingularitySequencer(
            self.world, self.resolver, self.scheduler, self.config.sequencer, self.bridge,
        )
        self.camera = WorldCamera(
            viewport_width=viewport[0],
            viewport_height=viewport[1],
            config=self.config.camera,
            lock=lambda: self.resolver.input_blocked,
        )
        self.camera.bind_bridge(self.bridge)
        self.menu = OrbitalMenu(
            menu_entries, self.scheduler, self.config.menu,
            on_navigate=self.navigate_to, bridge=self.bridge,
        )

        self._dirty = DirtyFlags.ALL
        self._projections: Dict[str, Projection] = {}
        self._cached_camera: Optional[CameraState] = None
        self._connections = []
        self._connect_signals()

    def _connect_signals(self):
        b = self.bridge
        self._connections = [
            b.connect(SIGNAL_VIEW_CHANGED, lambda *_: self.mark_dirty(DirtyFlags.CAMERA)),
            b.connect(SIGNAL_RESIZE, lambda *_: self.mark_dirty(DirtyFlags.CAMERA)),
            b.connect(SIGNAL_PANEL_ADDED, lambda *_: self.mark_dirty(DirtyFlags.WORLD)),
            b.connect(SIGNAL_PANEL_REMOVED, lambda *_: self.mark_dirty(DirtyFlags.WORLD)),
            b.connect(SIGNAL_PANEL_CHANGED, lambda *_: self.mark_dirty(DirtyFlags.WORLD)),
            b.connect(SIGNAL_PANEL_RESIZED, lambda *_: self.mark_dirty(DirtyFlags.RESIZE)),
            # Focus mode and the sequence both hide the menu
            b.connect(SIGNAL_EXPAND, lambda *_: self.menu.close()),
            b.connect(SIGNAL_SEQUENCE_STARTED, lambda *_: self.menu.close()),
        ]

    # -------------------------------------------------------------------------
    # Cache
    # -------------------------------------------------------------------------

    @property
    def dirty(self) -> DirtyFlags:
        return self._dirty

    def mark_dirty(self, flags: DirtyFlags = DirtyFlags.ALL):
        self._dirty |= flags

    def projections(self) -> Dict[str, Projection]:
        """Per-panel projections for the current camera, recomputed only when dirty."""
        camera = self.camera.state()
        if camera != self._cached_camera:
            self._dirty |= DirtyFlags.CAMERA
        if self._dirty:
            self._cached_camera = camera
            self._projections = {
                p.id: project_state(p.position, camera, self.config.projection)
                for p in self.world
            }
            self._dirty = DirtyFlags.NONE
        return self._projections

    # -------------------------------------------------------------------------
    # Frame composition
    # -------------------------------------------------------------------------

    def menu_center(self) -> Vec2:
        inset = self.config.stage.menu_inset
        return Vec2(self.camera.viewport_width - inset, inset)

    def compose(self) -> Frame:
        camera = self.camera.state()
        projections = self.projections()
        expanded_id = self.resolver.expanded_id
        sequence_active = self.resolver.sequence_active

        panels = visible_panels(
            self.world, projections, camera.viewport_height,
            expanded_id=expanded_id, sequence_active=sequence_active,
            config=self.config.culling,
        )

        items = []
        for panel in panels:
            state = self.resolver.state_of(panel.id)
            proj = projections[panel.id]
            if state is InteractionState.EXPANDED:
                x, y = camera.viewport_width / 2, camera.viewport_height / 2
                scale, depth = 1.0, FOCUS_DEPTH_ORDER
            else:
                x, y, scale, depth = proj
                if state is InteractionState.EXPLODING:
                    depth = EXPLODING_DEPTH_ORDER
            items.append(RenderItem(
                panel.id, x, y, scale, depth, state, panel.width, panel.height, panel.theme,
            ))
        items.sort(key=lambda item: item.depth_order)

        beams = []
        if not sequence_active:
            beams = build_beams(
                self.world, camera, projections,
                self.config.connections, self.config.projection,
            )
        wireboxes = build_wireframes(
            self.world, camera, self.config.wireframe, self.config.projection,
        )

        menu_slots = ()
        if not self.resolver.input_blocked:
            menu_slots = tuple(self.menu.layout(self.menu_center()))

        return Frame(
            camera=camera,
            items=tuple(items),
            beams=tuple(beams),
            wireboxes=tuple(wireboxes),
            menu_slots=menu_slots,
            expanded_id=expanded_id,
            sequence_active=sequence_active,
            backdrop_dimmed=expanded_id is not None or self.resolver.modal_active,
            scroll_progress=self.camera.scroll_progress(),
        )

    def to_draw_batch(self, frame: Frame, palette: Palette = DEFAULT_PALETTE) -> DrawBatch:
        """Paint order: wireframes, beams, then panels by depth order."""
        batch = DrawBatch()
        draw_wireframes(batch, list(frame.wireboxes), WIREFRAME_Z, palette)
        draw_beams(batch, list(frame.beams), BEAM_Z, self.config.connections, palette)

        pad = self.config.stage.focus_padding
        for item in frame.items:
            w, h = item.width * item.scale, item.height * item.scale
            if item.state is InteractionState.EXPANDED:
                w = min(w, frame.camera.viewport_width - 2 * pad)
                h = min(h, frame.camera.viewport_height - 2 * pad)
            accent = palette.theme(item.theme)
            if item.state is InteractionState.IDLE:
                accent = with_alpha(accent, 0.6)
            batch.quad(item.screen_x, item.screen_y, w + 2, h + 2, accent,
                       z_index=item.depth_order, tag=item.panel_id)
            batch.quad(item.screen_x, item.screen_y, w, h, palette.panel_body,
                       z_index=item.depth_order, tag=item.panel_id)
        return batch.finalize()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def navigate_to(self, target: str) -> bool:
        """
        Route a menu target.

        'top' scrolls home, the trigger token starts the singularity sequence,
        anything else is taken as a panel id to bring into view.
        """
        self.menu.close()
        self.bridge.emit(SIGNAL_NAVIGATE, target)

        if target == SEQUENCE_TRIGGER_TOKEN:
            return self.trigger_sequence()
        if target == TOP_TARGET:
            return self.camera.animate_to(0.0)

        panel = self.world.get(target)
        if panel is None:
            logger.debug(f"Navigate to unknown target '{target}' ignored")
            return False
        return self.camera.navigate_to_y(panel.position.y)

    def trigger_sequence(self) -> bool:
        """Close the menu and any focused panel, then start the sweep."""
        self.menu.close()
        if not self.sequencer.active:
            self.resolver.close()
        return self.sequencer.trigger()

    # -------------------------------------------------------------------------
    # Time
    # -------------------------------------------------------------------------

    def advance(self, dt_ms: float) -> int:
        """Run due timers, then ease the camera. Returns timers fired."""
        fired = self.scheduler.advance(dt_ms)
        self.camera.update(dt_ms)
        return fired

    def tick(self, frame: FrameState) -> int:
        return self.advance(frame.dt_ms)

    def set_viewport(self, width: float, height: float):
        self.camera.set_viewport(width, height)

    def teardown(self):
        """Cancel pending timers, stop the camera and unhook everything from the bridge."""
        self.sequencer.teardown()
        self.menu.teardown()
        self.camera.stop()
        for conn in self._connections:
            conn.disconnect()
        self._connections = []

        self.resolver.unbind()
        for part in (self.world, self.camera, self.sequencer, self.menu):
            part.bind_bridge(None)
        logger.info("Stage torn down")
