"""Entities, components and the scene that owns them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

import numpy as np

from .camera import rotate as _rotate
from .camera import scale as _scale
from .camera import translate as _translate

__all__ = [
    "TagComponent",
    "TransformComponent",
    "SpriteComponent",
    "HealthComponent",
    "ManaComponent",
    "MovementComponent",
    "ChampionComponent",
    "TeamComponent",
    "MeshComponent",
    "Scene",
    "Entity",
]

Vec3 = tuple[float, float, float]
C = TypeVar("C")


@dataclass
class TagComponent:
    tag: str = ""


@dataclass
class TransformComponent:
    """Position, rotation (radians, applied x then y then z) and scale."""

    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)

    def matrix(self) -> np.ndarray:
        rx, ry, rz = self.rotation
        rotation = (
            _rotate(rx, (1.0, 0.0, 0.0))
            @ _rotate(ry, (0.0, 1.0, 0.0))
            @ _rotate(rz, (0.0, 0.0, 1.0))
        )
        return _translate(self.position) @ rotation @ _scale(self.scale)


@dataclass
class SpriteComponent:
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)


@dataclass
class HealthComponent:
    max_health: float = 100.0
    current_health: float = 100.0
    health_regen: float = 0.0


@dataclass
class ManaComponent:
    max_mana: float = 100.0
    current_mana: float = 100.0
    mana_regen: float = 0.0


@dataclass
class MovementComponent:
    move_speed: float = 300.0
    velocity: Vec3 = (0.0, 0.0, 0.0)
    target_position: Vec3 = (0.0, 0.0, 0.0)
    is_moving: bool = False


@dataclass
class ChampionComponent:
    champion_name: str = ""
    level: int = 1
    experience: int = 0
    attack_damage: float = 50.0
    ability_power: float = 0.0
    armor: float = 20.0
    magic_resist: float = 20.0
    attack_speed: float = 1.0
    crit_chance: float = 0.0


@dataclass
class TeamComponent:
    team_id: int = 0  # 0 = blue, 1 = red


@dataclass
class MeshComponent:
    model_asset: Any = None
    cast_shadows: bool = True
    receive_shadows: bool = True
    visible: bool = True


class Scene:
    """Owns entities and the components attached to them."""

    def __init__(self) -> None:
        self._registry: dict[int, dict[type, Any]] = {}
        self._next_handle = 0

    def create_entity(self, name: str = "Entity") -> Entity:
        """Create an entity carrying a transform and a tag named ``name``."""
        handle = self._next_handle
        self._next_handle += 1
        self._registry[handle] = {}
        entity = Entity(handle, self)
        entity.add_component(TransformComponent())
        entity.add_component(TagComponent(name or "Entity"))
        return entity

    def destroy_entity(self, entity: Entity) -> None:
        self._storage(entity)
        del self._registry[entity.handle]

    def __contains__(self, entity: object) -> bool:
        return (
            isinstance(entity, Entity)
            and entity.scene is self
            and entity.handle in self._registry
        )

    def _storage(self, entity: Entity) -> dict[type, Any]:
        if entity not in self:
            raise ValueError("entity does not belong to this scene or was destroyed")
        return self._registry[entity.handle]


class Entity:
    """A lightweight handle to an entity living in a scene."""

    __slots__ = ("_handle", "_scene")

    def __init__(self, handle: int | None = None, scene: Scene | None = None) -> None:
        self._handle = handle
        self._scene = scene

    @property
    def handle(self) -> int | None:
        return self._handle

    @property
    def scene(self) -> Scene | None:
        return self._scene

    def _components(self) -> dict[type, Any]:
        if self._scene is None or self._handle is None:
            raise ValueError("null entity has no components")
        return self._scene._storage(self)

    def add_component(self, component: C) -> C:
        components = self._components()
        kind = type(component)
        if kind in components:
            raise ValueError(f"entity already has a {kind.__name__}")
        components[kind] = component
        return component

    def get_component(self, component_type: type[C]) -> C:
        components = self._components()
        try:
            return components[component_type]
        except KeyError:
            raise KeyError(f"entity has no {component_type.__name__}") from None

    def has_component(self, component_type: type) -> bool:
        return component_type in self._components()

    def remove_component(self, component_type: type) -> None:
        self._components().pop(component_type, None)

    def __bool__(self) -> bool:
        return self._handle is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self._handle == other._handle and self._scene is other._scene

    def __hash__(self) -> int:
        return hash((self._handle, id(self._scene)))

    def __repr__(self) -> str:
        return f"Entity(handle={self._handle!r})"