"""Conditional, loop and flow-statement blocks."""

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
    to_bool,
    to_int,
)

__all__ = ["register_control_flow_blocks"]

# Safety limit for "while" and "forever" loops.
_MAX_ITERATIONS = 1_000_000


def _leave_loop(ctx: ExecutionContext) -> bool:
    """Settle flow requests after one pass of a loop body; True ends the loop."""
    if ctx.break_requested:
        ctx.clear_break()
        return True
    if ctx.continue_requested:
        ctx.clear_continue()
        return False
    return ctx.return_requested or ctx.stop_requested


def _if(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    condition = vm.slot_value(block.input_slot("condition"), ctx)
    if to_bool(condition):
        body = block.nested_slot("then")
        if body is not None:
            return vm.execute_nested(body, ctx)
    return None


def _if_else(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    condition = vm.slot_value(block.input_slot("condition"), ctx)
    body = block.nested_slot("then" if to_bool(condition) else "else")
    if body is not None:
        return vm.execute_nested(body, ctx)
    return None


def _repeat(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    count = to_int(vm.slot_value(block.input_slot("count"), ctx))
    body = block.nested_slot("body")
    if body is None:
        return None
    result = None
    for index in range(count):
        ctx.iteration_index = index
        result = vm.execute_nested(body, ctx)
        if _leave_loop(ctx):
            break
    return result


def _while(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    body = block.nested_slot("body")
    if body is None:
        return None
    result = None
    iteration = 0
    while to_bool(vm.slot_value(block.input_slot("condition"), ctx)):
        if iteration >= _MAX_ITERATIONS:
            break
        iteration += 1
        ctx.iteration_index = iteration
        result = vm.execute_nested(body, ctx)
        if _leave_loop(ctx):
            break
    return result


def _forever(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    body = block.nested_slot("body")
    if body is None:
        return None
    result = None
    iteration = 0
    while iteration < _MAX_ITERATIONS:
        iteration += 1
        ctx.iteration_index = iteration
        result = vm.execute_nested(body, ctx)
        if _leave_loop(ctx):
            break
    return result


def _for_each(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    items = vm.slot_value(block.input_slot("list"), ctx)
    body = block.nested_slot("body")
    if not isinstance(items, list) or body is None:
        return None
    result = None
    for index, item in enumerate(list(items)):
        ctx.iteration_index = index
        ctx.iteration_item = item
        result = vm.execute_nested(body, ctx)
        if _leave_loop(ctx):
            break
    return result


def _break(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    ctx.request_break()


def _continue(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    ctx.request_continue()


def _return(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    value = vm.slot_value(block.input_slot("value"), ctx)
    ctx.request_return(value)
    return value


def _stop(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    ctx.request_stop()


def register_control_flow_blocks(registry: BlockRegistry) -> None:
    """Register the if, loop and flow-statement blocks."""

    def define(block_id: str, name: str, description: str, icon: str, shape: BlockShape):
        return (
            registry.define_block(block_id)
            .display_name(name)
            .description(description)
            .icon(icon)
            .shape(shape)
            .category(BlockCategory.CONTROL_FLOW)
        )

    # Conditionals
    define("control.if", "If", "Execute blocks if condition is true", "❓",
           BlockShape.CONDITIONAL_NESTED) \
        .input("condition", ValueType.BOOL, True) \
        .nested_body("then") \
        .on_execute(_if).register()

    define("control.if_else", "If-Else", "Execute different blocks based on condition", "❓",
           BlockShape.MULTI_NESTED) \
        .input("condition", ValueType.BOOL, True) \
        .nested_body("then") \
        .nested_body("else") \
        .on_execute(_if_else).register()

    # Loops
    define("control.repeat", "Repeat", "Repeat blocks a number of times", "🔁",
           BlockShape.LOOP_NESTED) \
        .input("count", ValueType.INT, 10) \
        .nested_body("body") \
        .on_execute(_repeat).register()

    define("control.while", "While", "Repeat blocks while condition is true", "🔄",
           BlockShape.LOOP_NESTED) \
        .input("condition", ValueType.BOOL, True) \
        .nested_body("body") \
        .on_execute(_while).register()

    define("control.forever", "Forever", "Repeat blocks forever (until stopped)", "∞",
           BlockShape.LOOP_NESTED) \
        .nested_body("body") \
        .on_execute(_forever).register()

    define("control.for_each", "For Each", "Iterate over items in a list", "📝",
           BlockShape.LOOP_NESTED) \
        .input("list", ValueType.LIST) \
        .nested_body("body") \
        .on_execute(_for_each).register()

    # Statements
    define("control.break", "Break", "Exit the current loop", "⛔", BlockShape.FLAT) \
        .on_execute(_break).register()

    define("control.continue", "Continue", "Skip to the next loop iteration", "⏭",
           BlockShape.FLAT) \
        .on_execute(_continue).register()

    define("control.return", "Return", "Return a value from the script", "↩",
           BlockShape.VALUE_NESTED) \
        .input("value", ValueType.ANY) \
        .on_execute(_return).register()

    define("control.stop", "Stop Script", "Stop executing this script entirely", "🛑",
           BlockShape.FLAT) \
        .on_execute(_stop).register()

    # Loop state
    define("control.get_iteration", "Get Iteration Index",
           "Get the current loop iteration index (0-based)", "🔢", BlockShape.FLAT) \
        .returns_value(ValueType.INT) \
        .on_execute(lambda block, ctx, vm: ctx.iteration_index).register()

    define("control.get_item", "Get Current Item",
           "Get the current item in a for-each loop", "📦", BlockShape.FLAT) \
        .returns_value(ValueType.ANY) \
        .on_execute(lambda block, ctx, vm: ctx.iteration_item).register()