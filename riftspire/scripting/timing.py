"""Waits, delays, timers, cooldowns, countdowns and time getters.

Delays and timers are polled: the block is executed every frame and runs
its body once the context's game time reaches the due time.
"""

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
    to_float,
    to_string,
)

__all__ = ["register_time_blocks"]


def _input(block: Block, name: str, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    return vm.slot_value(block.input_slot(name), ctx)


def _name(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> str:
    return to_string(_input(block, "name", ctx, vm))


def _wait(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    seconds = to_float(_input(block, "seconds", ctx, vm))
    ctx.set_local_variable("_wait_until", ctx.game_time + max(seconds, 0.0))


def _delay(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    key = f"_delay_{block.id}"
    due = ctx.get_variable(key)
    if due is None:
        due = ctx.game_time + to_float(_input(block, "seconds", ctx, vm))
        ctx.set_local_variable(key, due)
    if ctx.game_time < to_float(due):
        return None
    ctx.set_local_variable(key, None)
    return vm.execute_nested(block.nested_slot("body"), ctx)


def _set_timer(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
    key = "_timer_" + _name(block, ctx, vm)
    interval = to_float(_input(block, "interval", ctx, vm))
    due = ctx.get_variable(key)
    if due is None:
        due = ctx.game_time + interval
        ctx.set_local_variable(key, due)
    if ctx.game_time < to_float(due):
        return None
    ctx.set_local_variable(key, ctx.game_time + interval)
    return vm.execute_nested(block.nested_slot("body"), ctx)


def _clear_timer(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    ctx.set_local_variable("_timer_" + _name(block, ctx, vm), None)


def _cooldown_start(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    duration = to_float(_input(block, "duration", ctx, vm))
    ctx.set_synced_variable("_cooldown_" + name, ctx.game_time + duration)


def _cooldown_ready(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> bool:
    end = ctx.get_synced_variable("_cooldown_" + _name(block, ctx, vm))
    if end is None:
        return True
    return ctx.game_time >= to_float(end)


def _cooldown_remaining(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> float:
    end = ctx.get_synced_variable("_cooldown_" + _name(block, ctx, vm))
    if end is None:
        return 0.0
    remaining = to_float(end) - ctx.game_time
    return remaining if remaining > 0 else 0.0


def _cooldown_reset(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    ctx.set_synced_variable("_cooldown_" + _name(block, ctx, vm), 0.0)


def _start_countdown(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> None:
    name = _name(block, ctx, vm)
    start = to_float(_input(block, "from", ctx, vm))
    ctx.set_synced_variable("_countdown_start_" + name, ctx.game_time)
    ctx.set_synced_variable("_countdown_duration_" + name, start)


def _countdown_state(
    block: Block, ctx: ExecutionContext, vm: ScriptVM
) -> tuple[float, float] | None:
    name = _name(block, ctx, vm)
    start = ctx.get_synced_variable("_countdown_start_" + name)
    duration = ctx.get_synced_variable("_countdown_duration_" + name)
    if start is None or duration is None:
        return None
    return ctx.game_time - to_float(start), to_float(duration)


def _get_countdown(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> float:
    state = _countdown_state(block, ctx, vm)
    if state is None:
        return 0.0
    elapsed, duration = state
    remaining = duration - elapsed
    return remaining if remaining > 0 else 0.0


def _countdown_finished(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> bool:
    state = _countdown_state(block, ctx, vm)
    if state is None:
        return True
    elapsed, duration = state
    return elapsed >= duration


def register_time_blocks(registry: BlockRegistry) -> None:
    """Register the wait, timer, cooldown, countdown and clock blocks."""

    def define(block_id: str, name: str, description: str, icon: str, shape: BlockShape):
        return (
            registry.define_block(block_id)
            .display_name(name)
            .description(description)
            .icon(icon)
            .shape(shape)
            .category(BlockCategory.TIME)
        )

    value = BlockShape.VALUE_NESTED
    multi = BlockShape.MULTI_VALUE_NESTED
    scoped = BlockShape.SCOPED_NESTED
    flat = BlockShape.FLAT
    local = NetworkAuthority.LOCAL
    float_t = ValueType.FLOAT
    string_t = ValueType.STRING

    # Waits and delays
    define("time.wait", "Wait", "Pause execution for specified seconds", "⏱", value) \
        .authority(local) \
        .input("seconds", float_t, 1.0) \
        .on_execute(_wait).register()

    define("time.delay", "Delay Then", "Execute blocks after a delay", "⏲", scoped) \
        .authority(local) \
        .input("seconds", float_t, 1.0) \
        .nested_body("body") \
        .on_execute(_delay).register()

    # Timers
    define("time.set_timer", "Set Timer", "Create a repeating timer", "🔁", scoped) \
        .authority(local) \
        .input("name", string_t, "Timer1") \
        .input("interval", float_t, 1.0) \
        .nested_body("body") \
        .on_execute(_set_timer).register()

    define("time.clear_timer", "Clear Timer", "Stop and remove a timer", "⏹", value) \
        .authority(local) \
        .input("name", string_t, "Timer1") \
        .on_execute(_clear_timer).register()

    # Cooldowns
    define("time.cooldown_start", "Start Cooldown", "Start a cooldown timer", "⏳", multi) \
        .changes_state(True) \
        .input("name", string_t, "Cooldown1") \
        .input("duration", float_t, 5.0) \
        .on_execute(_cooldown_start).register()

    define("time.cooldown_ready", "Is Cooldown Ready", "Check if a cooldown has finished",
           "✅", value) \
        .returns_value(ValueType.BOOL) \
        .input("name", string_t, "Cooldown1") \
        .on_execute(_cooldown_ready).register()

    define("time.cooldown_remaining", "Cooldown Remaining",
           "Get remaining time on a cooldown", "⏱", value) \
        .returns_value(float_t) \
        .input("name", string_t, "Cooldown1") \
        .on_execute(_cooldown_remaining).register()

    define("time.cooldown_reset", "Reset Cooldown", "Reset a cooldown immediately", "🔄",
           value) \
        .changes_state(True) \
        .input("name", string_t, "Cooldown1") \
        .on_execute(_cooldown_reset).register()

    # Clocks
    define("time.get_delta", "Get Delta Time", "Get time since last frame in seconds",
           "Δ", flat) \
        .returns_value(float_t) \
        .on_execute(lambda block, ctx, vm: float(ctx.delta_time)).register()

    define("time.get_game_time", "Get Game Time", "Get total elapsed game time in seconds",
           "🕐", flat) \
        .returns_value(float_t) \
        .on_execute(lambda block, ctx, vm: ctx.game_time).register()

    define("time.get_server_time", "Get Server Time", "Get synchronized server time",
           "🌐", flat) \
        .returns_value(float_t) \
        .on_execute(lambda block, ctx, vm: ctx.game_time).register()

    # Countdowns
    define("time.start_countdown", "Start Countdown", "Start a countdown timer", "⏱",
           multi) \
        .changes_state(True) \
        .input("name", string_t, "Countdown1") \
        .input("from", float_t, 10.0) \
        .on_execute(_start_countdown).register()

    define("time.get_countdown", "Get Countdown", "Get remaining time on countdown", "⏱",
           value) \
        .returns_value(float_t) \
        .input("name", string_t, "Countdown1") \
        .on_execute(_get_countdown).register()

    define("time.is_countdown_finished", "Is Countdown Finished",
           "Check if countdown has reached zero", "✓", value) \
        .returns_value(ValueType.BOOL) \
        .input("name", string_t, "Countdown1") \
        .on_execute(_countdown_finished).register()