# worldscape/config.py
"""
WorldscapeConfig - every tunable in one place.

Sections mirror the component configs. JSON documents may give any subset of
sections and keys; anything missing keeps its default, anything unknown is
an error.
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict
import json

from .view.projection import ProjectionConfig
from .view.culling import CullingConfig
from .view.camera import CameraConfig
from .interaction.state import InteractionConfig
from .interaction.sequencer import SequencerConfig
from .render.connections import ConnectionConfig
from .render.wireframe import WireframeConfig
from .menu.orbital import MenuConfig


@dataclass(frozen=True)
class StageConfig:
    menu_inset: float = 64.0       # menu centre sits this far in from the top-right corner
    focus_padding: float = 40.0    # expanded panel keeps this gap to the viewport edge


@dataclass
class WorldscapeConfig:
    projection: ProjectionConfig = field(default_factory=ProjectionConfig)
    culling: CullingConfig = field(default_factory=CullingConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    interaction: InteractionConfig = field(default_factory=InteractionConfig)
    sequencer: SequencerConfig = field(default_factory=SequencerConfig)
    connections: ConnectionConfig = field(default_factory=ConnectionConfig)
    wireframe: WireframeConfig = field(default_factory=WireframeConfig)
    menu: MenuConfig = field(default_factory=MenuConfig)
    stage: StageConfig = field(default_factory=StageConfig)
    
    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return asdict(self)
    
    @staticmethod
    def from_dict(data: Dict[str, Any]) -> WorldscapeConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping of sections, got {type(data).__name__}")
        sections = {f.name: f for f in fields(WorldscapeConfig)}
        unknown = set(data) - set(sections)
        if unknown:
            raise ValueError(f"Unknown config section(s): {', '.join(sorted(unknown))}")
        
        kwargs = {}
        for name, values in data.items():
            if not isinstance(values, dict):
                raise ValueError(f"Config section [{name}] must be a mapping, got {type(values).__name__}")
            section_type = sections[name].default_factory
            allowed = {f.name for f in fields(section_type)}
            bad = set(values) - allowed
            if bad:
                raise ValueError(f"Unknown key(s) in [{name}]: {', '.join(sorted(bad))}")
            kwargs[name] = section_type(**{
                k: tuple(v) if isinstance(v, list) else v for k, v in values.items()
            })
        return WorldscapeConfig(**kwargs)


def load_config(path: str) -> WorldscapeConfig:
    with open(path, 'r') as f:
        return WorldscapeConfig.from_dict(json.load(f))


def save_config(config: WorldscapeConfig, path: str):
    with open(path, 'w') as f:
        json.dump(config.to_dict(), f, indent=2)
