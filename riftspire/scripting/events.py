"""Trigger blocks that run their body when an event fires."""

from __future__ import annotations

from typing import Any

from .core import (
    Block,
    BlockCategory,
    BlockRegistry,
    BlockShape,
    ExecutionContext,
    NetworkAuthority,
    ScriptVM,
    ValueType,
)

__all__ = ["register_event_blocks"]


def _run_body(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    body = block.nested_slot("body")
    if body is not None:
        return vm.execute_nested(body, ctx)
    return None


_STRING = ValueType.STRING
_LOCAL = NetworkAuthority.LOCAL
_SERVER = NetworkAuthority.SERVER

# (id, display name, description, icon, inputs, authority)
_EVENTS: tuple[tuple[str, str, str, str, tuple[tuple[str, Any], ...], NetworkAuthority], ...] = (
    # Lifecycle
    ("events.on_start", "When Game Starts", "Triggered when the game/scene starts",
     "⚡", (), _SERVER),
    ("events.on_spawn", "When Spawned", "Triggered when this entity is spawned",
     "⚡", (), _SERVER),
    ("events.on_destroy", "When Destroyed", "Triggered when this entity is destroyed",
     "⚡", (), _SERVER),
    ("events.on_update", "On Update", "Triggered every frame", "🔄", (), _SERVER),
    # Combat
    ("events.on_damage_received", "When Damage Received",
     "Triggered when this entity receives damage", "💥", (), _SERVER),
    ("events.on_damage_dealt", "When Damage Dealt",
     "Triggered when this entity deals damage", "⚔", (), _SERVER),
    ("events.on_health_changed", "When Health Changed",
     "Triggered when this entity's health changes", "❤", (), _SERVER),
    ("events.on_death", "When Died", "Triggered when this entity dies", "💀", (), _SERVER),
    ("events.on_respawn", "When Respawned", "Triggered when this entity respawns",
     "✨", (), _SERVER),
    ("events.on_kill", "When Killed Enemy", "Triggered when this entity kills an enemy",
     "🏆", (), _SERVER),
    # Abilities
    ("events.on_ability_cast", "When Ability Casted", "Triggered when an ability is used",
     "🔮", (("slot", "Q"),), _SERVER),
    ("events.on_ability_hit", "When Ability Hits", "Triggered when an ability hits a target",
     "🎯", (("slot", "Q"),), _SERVER),
    # Buffs and debuffs
    ("events.on_buff_applied", "When Buff Applied",
     "Triggered when a buff is applied to this entity", "⬆", (("buff_name", None),),
     _SERVER),
    ("events.on_buff_removed", "When Buff Removed",
     "Triggered when a buff is removed from this entity", "⬇", (("buff_name", None),),
     _SERVER),
    # Areas and collisions
    ("events.on_enter_area", "When Entered Area", "Triggered when entering a zone/area",
     "📍", (("zone", None),), _SERVER),
    ("events.on_leave_area", "When Left Area", "Triggered when leaving a zone/area",
     "🚪", (("zone", None),), _SERVER),
    ("events.on_collision", "When Collision", "Triggered when colliding with another object",
     "💫", (("tag", None),), _SERVER),
    # Input
    ("events.on_key_pressed", "When Key Pressed", "Triggered when a key is pressed",
     "⌨", (("key", "Space"),), _LOCAL),
    ("events.on_mouse_click", "When Mouse Clicked", "Triggered when mouse is clicked",
     "🖱", (("button", "Left"),), _LOCAL),
    # Custom
    ("events.on_custom", "When Custom Event", "Triggered when a custom event is broadcast",
     "📡", (("event_name", "MyEvent"),), _SERVER),
)


def register_event_blocks(registry: BlockRegistry) -> None:
    """Register the trigger blocks; each runs its ``body`` when executed."""
    for block_id, name, description, icon, inputs, authority in _EVENTS:
        builder = (
            registry.define_block(block_id)
            .display_name(name)
            .description(description)
            .icon(icon)
            .shape(BlockShape.EVENT_NESTED)
            .category(BlockCategory.EVENTS)
            .authority(authority)
        )
        for input_name, default in inputs:
            builder.input(input_name, _STRING, default)
        builder.nested_body("body").on_execute(_run_body).register()