"""Blocks that print, log, assert and mark breakpoints."""

from __future__ import annotations

import logging
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
    to_bool,
    to_string,
)

__all__ = ["register_debug_blocks"]

_DEFAULT_LOGGER = "riftspire.script"


def register_debug_blocks(
    registry: BlockRegistry, logger: logging.Logger | None = None
) -> None:
    """Register the debug blocks, writing their output to ``logger``."""
    log = logger if logger is not None else logging.getLogger(_DEFAULT_LOGGER)

    def message(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> str:
        return to_string(vm.slot_value(block.input_slot("message"), ctx))

    def logging_block(level: int):
        def execute(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
            log.log(level, "[Script] %s", message(block, ctx, vm))
            return None

        return execute

    def breakpoint_block(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
        if ctx.debug_mode:
            log.info("[Script] Breakpoint hit at block %s", block.id)
        return None

    def assert_block(block: Block, ctx: ExecutionContext, vm: ScriptVM) -> Any:
        condition = to_bool(vm.slot_value(block.input_slot("condition"), ctx))
        text = message(block, ctx, vm)
        if not condition:
            log.error("[Script Assert] %s", text)
        return None

    def define(block_id: str, name: str, description: str, icon: str, shape: BlockShape):
        return (
            registry.define_block(block_id)
            .display_name(name)
            .description(description)
            .icon(icon)
            .shape(shape)
            .category(BlockCategory.DEBUG_LOGGING)
            .authority(NetworkAuthority.LOCAL)
        )

    define("debug.print", "Print", "Print a message to the console", "📢",
           BlockShape.VALUE_NESTED) \
        .input("message", ValueType.STRING, "Hello!") \
        .on_execute(logging_block(logging.INFO)).register()

    define("debug.log_info", "Log Info", "Log an info message", "ℹ",
           BlockShape.VALUE_NESTED) \
        .input("message", ValueType.STRING) \
        .on_execute(logging_block(logging.INFO)).register()

    define("debug.log_warn", "Log Warning", "Log a warning message", "⚠",
           BlockShape.VALUE_NESTED) \
        .input("message", ValueType.STRING) \
        .on_execute(logging_block(logging.WARNING)).register()

    define("debug.log_error", "Log Error", "Log an error message", "❌",
           BlockShape.VALUE_NESTED) \
        .input("message", ValueType.STRING) \
        .on_execute(logging_block(logging.ERROR)).register()

    define("debug.breakpoint", "Breakpoint", "Pause execution in debug mode", "🔴",
           BlockShape.FLAT) \
        .on_execute(breakpoint_block).register()

    define("debug.assert", "Assert", "Assert that a condition is true", "✓",
           BlockShape.MULTI_VALUE_NESTED) \
        .input("condition", ValueType.BOOL, True) \
        .input("message", ValueType.STRING, "Assertion failed") \
        .on_execute(assert_block).register()