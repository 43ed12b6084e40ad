"""Blocks that broadcast custom events to other scripts.

A broadcast is queued on the execution context as an ``(event_name, data)``
pair in the script variable ``_broadcasts``. The host reads that queue
after a run and fires the matching ``events.on_custom`` triggers.
"""

from __future__ import annotations

from typing import Any

from .core import (
    Block,
    BlockCategory,
    BlockRegistry,
    BlockShape,
    ExecutionContext,
    ScriptVM,
    ValueType,
    to_string,
)

__all__ = ["register_signal_blocks"]

_QUEUE = "_broadcasts"


def _pending(ctx: ExecutionContext) -> list[tuple[str, Any]]:
    queue = ctx.get_variable(_QUEUE)
    if not isinstance(queue, list):
        queue = []
        ctx.set_variable(_QUEUE, queue)
    return queue


def _event_name(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> str:
    return to_string(vm.slot_value(block.input_slot("event_name"), ctx))


def _broadcast(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    _pending(ctx).append((_event_name(block, ctx, vm), None))


def _broadcast_with_data(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _event_name(block, ctx, vm)
    data = vm.slot_value(block.input_slot("data"), ctx)
    _pending(ctx).append((name, data))


def register_signal_blocks(registry: BlockRegistry) -> None:
    """Register the blocks that broadcast custom events."""
    registry.define_block("events.broadcast") \
        .display_name("Broadcast Event") \
        .description("Broadcast a custom event to all scripts") \
        .icon("📢") \
        .shape(BlockShape.FLAT) \
        .category(BlockCategory.EVENTS) \
        .input("event_name", ValueType.STRING, "MyEvent") \
        .on_execute(_broadcast).register()

    registry.define_block("events.broadcast_with_data") \
        .display_name("Broadcast Event with Data") \
        .description("Broadcast a custom event with data") \
        .icon("📢") \
        .shape(BlockShape.MULTI_VALUE_NESTED) \
        .category(BlockCategory.EVENTS) \
        .input("event_name", ValueType.STRING, "MyEvent") \
        .input("data", ValueType.ANY) \
        .on_execute(_broadcast_with_data).register()