"""Arithmetic, comparison, logic and math blocks."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from typing import Any

from .core import (
    BlockCategory,
    BlockRegistry,
    BlockShape,
    ValueType,
    to_bool,
    to_float,
    to_int,
)

__all__ = [
    "add",
    "subtract",
    "multiply",
    "divide",
    "modulo",
    "negate",
    "register_operator_blocks",
]

Number = int | float


def _numeric(value: Any) -> Number | None:
    """Numeric form of a script value, or None when it has none.

    Void counts as 0, booleans as 0 or 1, and text is parsed (junk is 0).
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            return to_float(text)
    return None


def _both_numeric(a: Any, b: Any) -> tuple[Number, Number] | None:
    x = _numeric(a)
    y = _numeric(b)
    if x is None or y is None:
        return None
    return x, y


def add(a: Any, b: Any) -> Any:
    """Sum of two values; text joins as text and lists concatenate."""
    if isinstance(a, str) or isinstance(b, str):
        from .core import to_string

        return to_string(a) + to_string(b)
    if isinstance(a, list) and isinstance(b, list):
        return a + b
    pair = _both_numeric(a, b)
    if pair is None:
        return None
    return pair[0] + pair[1]


def subtract(a: Any, b: Any) -> Any:
    """Difference of two numeric values; void if either is not numeric."""
    pair = _both_numeric(a, b)
    if pair is None:
        return None
    return pair[0] - pair[1]


def multiply(a: Any, b: Any) -> Any:
    """Product of two numeric values; void if either is not numeric."""
    pair = _both_numeric(a, b)
    if pair is None:
        return None
    return pair[0] * pair[1]


def divide(a: Any, b: Any) -> Any:
    """Quotient as a float; void on a zero divisor or non-numeric input."""
    pair = _both_numeric(a, b)
    if pair is None or pair[1] == 0:
        return None
    return float(pair[0]) / float(pair[1])


def modulo(a: Any, b: Any) -> Any:
    """Integer remainder taking the sign of the dividend; void on zero."""
    pair = _both_numeric(a, b)
    if pair is None:
        return None
    x, y = to_int(pair[0]), to_int(pair[1])
    if y == 0:
        return None
    remainder = abs(x) % abs(y)
    return -remainder if x < 0 else remainder


def negate(value: Any) -> Any:
    """Arithmetic negation; void if the value is not numeric."""
    number = _numeric(value)
    if number is None:
        return None
    return -number


def _equals(a: Any, b: Any) -> bool:
    numeric_types = (bool, int, float)
    if isinstance(a, numeric_types) and isinstance(b, numeric_types):
        return float(a) == float(b)
    return a == b


def _compare(a: Any, b: Any) -> int:
    if isinstance(a, str) and isinstance(b, str):
        return (a > b) - (a < b)
    x, y = to_float(a), to_float(b)
    return (x > y) - (x < y)


def _to_whole(value: float) -> int:
    return int(value) if math.isfinite(value) else 0


def _round_half_away(value: float) -> int:
    if not math.isfinite(value):
        return 0
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return -whole if value < 0 else whole


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0 else math.nan


def _pow(base: float, exponent: float) -> float:
    if base == 0.0 and exponent < 0:
        return math.inf
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = exponent.is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        return math.nan


def _define(
    registry: BlockRegistry,
    block_id: str,
    display_name: str,
    description: str,
    icon: str,
    shape: BlockShape,
    returns: ValueType,
    inputs: Sequence[tuple[str, ValueType, Any]],
    func: Callable[..., Any],
) -> None:
    names = [name for name, _, _ in inputs]

    def execute(block, ctx, vm):
        values = [vm.slot_value(block.input_slot(name), ctx) for name in names]
        return func(*values)

    builder = (
        registry.define_block(block_id)
        .display_name(display_name)
        .description(description)
        .icon(icon)
        .shape(shape)
        .category(BlockCategory.OPERATORS)
        .returns_value(returns)
    )
    for name, value_type, default in inputs:
        builder.input(name, value_type, default)
    builder.on_execute(execute).register()


def register_operator_blocks(
    registry: BlockRegistry, rng: random.Random | None = None
) -> None:
    """Register the operator blocks; ``rng`` drives the random blocks."""
    generator = rng if rng is not None else random.Random()
    value = BlockShape.VALUE_NESTED
    multi = BlockShape.MULTI_VALUE_NESTED
    any_t, bool_t, int_t, float_t = (
        ValueType.ANY,
        ValueType.BOOL,
        ValueType.INT,
        ValueType.FLOAT,
    )

    # Arithmetic
    _define(registry, "operators.add", "Add", "Add two values together", "+",
            value, any_t, [("a", any_t, 0), ("b", any_t, 0)], add)
    _define(registry, "operators.subtract", "Subtract", "Subtract second value from first",
            "-", value, any_t, [("a", any_t, 0), ("b", any_t, 0)], subtract)
    _define(registry, "operators.multiply", "Multiply", "Multiply two values", "×",
            value, any_t, [("a", any_t, 1), ("b", any_t, 1)], multiply)
    _define(registry, "operators.divide", "Divide", "Divide first value by second", "÷",
            value, any_t, [("a", any_t, 0), ("b", any_t, 1)], divide)
    _define(registry, "operators.modulo", "Modulo", "Get remainder of division", "%",
            value, int_t, [("a", any_t, 0), ("b", any_t, 1)], modulo)
    _define(registry, "operators.negate", "Negate",
            "Negate a value (make positive negative or vice versa)", "−",
            value, any_t, [("value", any_t, 0)], negate)

    # Comparison
    _define(registry, "operators.equals", "Equals", "Check if two values are equal", "=",
            value, bool_t, [("a", any_t, None), ("b", any_t, None)],
            _equals)
    _define(registry, "operators.not_equals", "Not Equals",
            "Check if two values are not equal", "≠", value, bool_t,
            [("a", any_t, None), ("b", any_t, None)],
            lambda a, b: not _equals(a, b))
    _define(registry, "operators.greater", "Greater Than",
            "Check if first value is greater than second", ">", value, bool_t,
            [("a", any_t, None), ("b", any_t, None)],
            lambda a, b: _compare(a, b) > 0)
    _define(registry, "operators.less", "Less Than",
            "Check if first value is less than second", "<", value, bool_t,
            [("a", any_t, None), ("b", any_t, None)],
            lambda a, b: _compare(a, b) < 0)
    _define(registry, "operators.greater_equal", "Greater or Equal",
            "Check if first value is greater than or equal to second", "≥", value, bool_t,
            [("a", any_t, None), ("b", any_t, None)],
            lambda a, b: _compare(a, b) >= 0)
    _define(registry, "operators.less_equal", "Less or Equal",
            "Check if first value is less than or equal to second", "≤", value, bool_t,
            [("a", any_t, None), ("b", any_t, None)],
            lambda a, b: _compare(a, b) <= 0)

    # Logic
    _define(registry, "operators.and", "And", "Returns true if both conditions are true",
            "AND", value, bool_t, [("a", bool_t, False), ("b", bool_t, False)],
            lambda a, b: to_bool(a) and to_bool(b))
    _define(registry, "operators.or", "Or", "Returns true if either condition is true",
            "OR", value, bool_t, [("a", bool_t, False), ("b", bool_t, False)],
            lambda a, b: to_bool(a) or to_bool(b))
    _define(registry, "operators.not", "Not", "Returns the opposite boolean value",
            "NOT", value, bool_t, [("value", bool_t, False)],
            lambda v: not to_bool(v))

    # Utility
    def random_float(low: Any, high: Any) -> float:
        lo, hi = to_float(low), to_float(high)
        return lo + generator.random() * (hi - lo)

    def random_int(low: Any, high: Any) -> int:
        lo, hi = to_int(low), to_int(high)
        if hi <= lo:
            return lo
        return generator.randint(lo, hi)

    def clamp(v: Any, low: Any, high: Any) -> float:
        x, lo, hi = to_float(v), to_float(low), to_float(high)
        if x < lo:
            return lo
        if x > hi:
            return hi
        return x

    def lerp(a: Any, b: Any, t: Any) -> float:
        x, y, f = to_float(a), to_float(b), to_float(t)
        return x + f * (y - x)

    def absolute(v: Any) -> float:
        x = to_float(v)
        return -x if x < 0 else x

    def smaller(a: Any, b: Any) -> float:
        x, y = to_float(a), to_float(b)
        return x if x < y else y

    def larger(a: Any, b: Any) -> float:
        x, y = to_float(a), to_float(b)
        return x if x > y else y

    _define(registry, "operators.random", "Random",
            "Get a random number between min and max", "🎲", multi, float_t,
            [("min", float_t, 0.0), ("max", float_t, 1.0)], random_float)
    _define(registry, "operators.random_int", "Random Int",
            "Get a random integer between min and max (inclusive)", "🎲", multi, int_t,
            [("min", int_t, 0), ("max", int_t, 100)], random_int)
    _define(registry, "operators.clamp", "Clamp", "Constrain a value between min and max",
            "📏", multi, float_t,
            [("value", float_t, None), ("min", float_t, 0.0), ("max", float_t, 1.0)], clamp)
    _define(registry, "operators.lerp", "Lerp", "Linear interpolation between two values",
            "↔", multi, float_t,
            [("a", float_t, 0.0), ("b", float_t, 1.0), ("t", float_t, 0.5)], lerp)
    _define(registry, "operators.abs", "Absolute", "Get the absolute value", "|x|",
            value, float_t, [("value", float_t, None)], absolute)
    _define(registry, "operators.floor", "Floor", "Round down to nearest integer", "⌊x⌋",
            value, int_t, [("value", float_t, None)],
            lambda v: _to_whole(math.floor(x)) if math.isfinite(x := to_float(v)) else 0)
    _define(registry, "operators.ceil", "Ceiling", "Round up to nearest integer", "⌈x⌉",
            value, int_t, [("value", float_t, None)],
            lambda v: _to_whole(math.ceil(x)) if math.isfinite(x := to_float(v)) else 0)
    _define(registry, "operators.round", "Round", "Round to nearest integer", "≈",
            value, int_t, [("value", float_t, None)],
            lambda v: _round_half_away(to_float(v)))
    _define(registry, "operators.sqrt", "Square Root", "Calculate square root", "√",
            value, float_t, [("value", float_t, None)],
            lambda v: _sqrt(to_float(v)))
    _define(registry, "operators.pow", "Power", "Raise base to exponent power", "^",
            multi, float_t, [("base", float_t, None), ("exponent", float_t, 2.0)],
            lambda b, e: _pow(to_float(b), to_float(e)))
    _define(registry, "operators.min", "Min", "Get the smaller of two values", "↓",
            multi, float_t, [("a", float_t, None), ("b", float_t, None)], smaller)
    _define(registry, "operators.max", "Max", "Get the larger of two values", "↑",
            multi, float_t, [("a", float_t, None), ("b", float_t, None)], larger)