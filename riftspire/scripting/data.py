"""Variable, entity reference, list and literal blocks."""

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
    to_int,
    to_string,
)
from .operators import add

__all__ = ["register_data_blocks"]


def _input(block: Block, name: str, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    return vm.slot_value(block.input_slot(name), ctx)


def _name(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> str:
    return to_string(_input(block, "name", ctx, vm))


def _set(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    ctx.set_variable(name, _input(block, "value", ctx, vm))


def _get(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    return ctx.get_variable(_name(block, ctx, vm))


def _change(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    amount = _input(block, "amount", ctx, vm)
    ctx.set_variable(name, add(ctx.get_variable(name), amount))


def _create_local(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    ctx.set_local_variable(name, _input(block, "value", ctx, vm))


def _create_synced(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    ctx.set_synced_variable(name, _input(block, "value", ctx, vm))


def _list_add(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    items = _input(block, "list", ctx, vm)
    item = _input(block, "item", ctx, vm)
    if isinstance(items, list):
        items.append(item)


def _list_index(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> tuple[Any, int]:
    items = _input(block, "list", ctx, vm)
    index = to_int(_input(block, "index", ctx, vm))
    return items, index


def _list_get(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    items, index = _list_index(block, ctx, vm)
    if isinstance(items, list) and 0 <= index < len(items):
        return items[index]
    return None


def _list_length(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> int:
    items = _input(block, "list", ctx, vm)
    return len(items) if isinstance(items, list) else 0


def _list_remove(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    items, index = _list_index(block, ctx, vm)
    if isinstance(items, list) and 0 <= index < len(items):
        del items[index]


def _list_clear(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    items = _input(block, "list", ctx, vm)
    if isinstance(items, list):
        items.clear()


def _literal(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    return _input(block, "value", ctx, vm)


def register_data_blocks(registry: BlockRegistry) -> None:
    """Register the variable, entity, list and literal blocks."""

    def define(block_id: str, name: str, description: str, icon: str, shape: BlockShape):
        return (
            registry.define_block(block_id)
            .display_name(name)
            .description(description)
            .icon(icon)
            .shape(shape)
            .category(BlockCategory.DATA_VARIABLES)
        )

    multi = BlockShape.MULTI_VALUE_NESTED
    value = BlockShape.VALUE_NESTED
    flat = BlockShape.FLAT

    # Variables
    define("data.set", "Set Variable", "Set a variable to a value", "📝", multi) \
        .changes_state(True) \
        .input("name", ValueType.STRING, "myVar") \
        .input("value", ValueType.ANY) \
        .on_execute(_set).register()

    define("data.get", "Get Variable", "Get the value of a variable", "📖", value) \
        .returns_value(ValueType.ANY) \
        .input("name", ValueType.STRING, "myVar") \
        .on_execute(_get).register()

    define("data.change", "Change Variable By", "Change a variable by an amount", "➕",
           multi) \
        .changes_state(True) \
        .input("name", ValueType.STRING, "myVar") \
        .input("amount", ValueType.FLOAT, 1) \
        .on_execute(_change).register()

    define("data.create_local", "Create Local Variable",
           "Create a local variable (scope-limited)", "📌", multi) \
        .authority(NetworkAuthority.LOCAL) \
        .input("name", ValueType.STRING, "localVar") \
        .input("value", ValueType.ANY) \
        .on_execute(_create_local).register()

    define("data.create_synced", "Create Synced Variable",
           "Create a network-synced variable", "🌐", multi) \
        .changes_state(True) \
        .input("name", ValueType.STRING, "syncedVar") \
        .input("value", ValueType.ANY) \
        .on_execute(_create_synced).register()

    # Entity references
    define("data.self", "Self", "Reference to this entity", "👤", flat) \
        .returns_value(ValueType.ENTITY) \
        .on_execute(lambda block, ctx, vm: ctx.self_entity).register()

    define("data.target", "Target", "Reference to current target entity", "🎯", flat) \
        .returns_value(ValueType.ENTITY) \
        .on_execute(lambda block, ctx, vm: ctx.target).register()

    define("data.owner", "Owner", "Reference to owner entity (e.g., projectile owner)",
           "👑", flat) \
        .returns_value(ValueType.ENTITY) \
        .on_execute(lambda block, ctx, vm: ctx.owner).register()

    # Lists
    define("data.list_create", "Create List", "Create an empty list", "📋", flat) \
        .returns_value(ValueType.LIST) \
        .on_execute(lambda block, ctx, vm: []).register()

    define("data.list_add", "Add to List", "Add an item to a list", "➕", multi) \
        .changes_state(True) \
        .input("list", ValueType.LIST) \
        .input("item", ValueType.ANY) \
        .on_execute(_list_add).register()

    define("data.list_get", "Get from List", "Get an item from a list by index", "📍",
           multi) \
        .returns_value(ValueType.ANY) \
        .input("list", ValueType.LIST) \
        .input("index", ValueType.INT, 0) \
        .on_execute(_list_get).register()

    define("data.list_length", "List Length", "Get the number of items in a list", "📏",
           value) \
        .returns_value(ValueType.INT) \
        .input("list", ValueType.LIST) \
        .on_execute(_list_length).register()

    define("data.list_remove", "Remove from List", "Remove an item from a list by index",
           "➖", multi) \
        .changes_state(True) \
        .input("list", ValueType.LIST) \
        .input("index", ValueType.INT, 0) \
        .on_execute(_list_remove).register()

    define("data.list_clear", "Clear List", "Remove all items from a list", "🗑", value) \
        .changes_state(True) \
        .input("list", ValueType.LIST) \
        .on_execute(_list_clear).register()

    # Literals
    define("data.number", "Number", "A number value", "🔢", value) \
        .returns_value(ValueType.FLOAT) \
        .input("value", ValueType.FLOAT, 0.0) \
        .on_execute(_literal).register()

    define("data.text", "Text", "A text string value", "📝", value) \
        .returns_value(ValueType.STRING) \
        .input("value", ValueType.STRING, "") \
        .on_execute(_literal).register()

    define("data.true", "True", "Boolean true value", "✓", flat) \
        .returns_value(ValueType.BOOL) \
        .on_execute(lambda block, ctx, vm: True).register()

    define("data.false", "False", "Boolean false value", "✗", flat) \
        .returns_value(ValueType.BOOL) \
        .on_execute(lambda block, ctx, vm: False).register()