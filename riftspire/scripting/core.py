"""Script values, block definitions and registry, execution state and the VM."""

from __future__ import annotations

import math
import uuid
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

__all__ = [
    "ValueType",
    "BlockShape",
    "BlockCategory",
    "NetworkAuthority",
    "to_bool",
    "to_int",
    "to_float",
    "to_string",
    "InputSpec",
    "BlockDefinition",
    "BlockBuilder",
    "BlockRegistry",
    "InputSlot",
    "NestedSlot",
    "Block",
    "ExecutionContext",
    "ScriptVM",
]


class ValueType(Enum):
    VOID = auto()
    BOOL = auto()
    INT = auto()
    FLOAT = auto()
    STRING = auto()
    LIST = auto()
    ENTITY = auto()
    ANY = auto()


class BlockShape(Enum):
    FLAT = auto()
    VALUE_NESTED = auto()
    MULTI_VALUE_NESTED = auto()
    CONDITIONAL_NESTED = auto()
    MULTI_NESTED = auto()
    LOOP_NESTED = auto()
    EVENT_NESTED = auto()
    SCOPED_NESTED = auto()


class BlockCategory(Enum):
    EVENTS = auto()
    CONTROL_FLOW = auto()
    OPERATORS = auto()
    DATA_VARIABLES = auto()
    DEBUG_LOGGING = auto()
    TIME = auto()


class NetworkAuthority(Enum):
    SERVER = auto()
    CLIENT = auto()
    LOCAL = auto()


_FALSE_WORDS = frozenset({"", "false", "0"})


def to_bool(value: Any) -> bool:
    """Truth of a script value; the strings "false" and "0" are false."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_WORDS
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return bool(value)


def to_int(value: Any) -> int:
    """Integer form of a script value; floats truncate, junk gives 0."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return to_int(float(text))
        except ValueError:
            return 0
    return 0


def to_float(value: Any) -> float:
    """Float form of a script value; junk gives 0.0."""
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def to_string(value: Any) -> str:
    """Text form of a script value; void is the empty string."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(to_string(item) for item in value) + "]"
    return str(value)


ExecuteFn = Callable[["Block", "ExecutionContext", "ScriptVM"], Any]


@dataclass(frozen=True)
class InputSpec:
    name: str
    value_type: ValueType = ValueType.ANY
    default: Any = None


@dataclass(frozen=True)
class BlockDefinition:
    """Everything that describes one kind of block."""

    block_id: str
    display_name: str
    description: str = ""
    icon: str = ""
    shape: BlockShape = BlockShape.FLAT
    category: BlockCategory | None = None
    authority: NetworkAuthority = NetworkAuthority.SERVER
    changes_state: bool = False
    inputs: tuple[InputSpec, ...] = ()
    nested_bodies: tuple[str, ...] = ()
    return_type: ValueType | None = None
    execute: ExecuteFn | None = None


class BlockBuilder:
    """Fluent builder that registers a block definition when done."""

    def __init__(self, registry: BlockRegistry, block_id: str) -> None:
        if not block_id:
            raise ValueError("block id must not be empty")
        self._registry = registry
        self._block_id = block_id
        self._display_name = block_id
        self._description = ""
        self._icon = ""
        self._shape = BlockShape.FLAT
        self._category: BlockCategory | None = None
        self._authority = NetworkAuthority.SERVER
        self._changes_state = False
        self._inputs: list[InputSpec] = []
        self._nested: list[str] = []
        self._return_type: ValueType | None = None
        self._execute: ExecuteFn | None = None

    def display_name(self, name: str) -> BlockBuilder:
        self._display_name = name
        return self

    def description(self, text: str) -> BlockBuilder:
        self._description = text
        return self

    def icon(self, icon: str) -> BlockBuilder:
        self._icon = icon
        return self

    def shape(self, shape: BlockShape) -> BlockBuilder:
        self._shape = shape
        return self

    def category(self, category: BlockCategory) -> BlockBuilder:
        self._category = category
        return self

    def authority(self, authority: NetworkAuthority) -> BlockBuilder:
        self._authority = authority
        return self

    def changes_state(self, flag: bool = True) -> BlockBuilder:
        self._changes_state = bool(flag)
        return self

    def input(
        self, name: str, value_type: ValueType = ValueType.ANY, default: Any = None
    ) -> BlockBuilder:
        if any(spec.name == name for spec in self._inputs):
            raise ValueError(f"block {self._block_id!r} already has an input {name!r}")
        self._inputs.append(InputSpec(name, value_type, default))
        return self

    def nested_body(self, name: str) -> BlockBuilder:
        if name in self._nested:
            raise ValueError(f"block {self._block_id!r} already has a body {name!r}")
        self._nested.append(name)
        return self

    def returns_value(self, value_type: ValueType) -> BlockBuilder:
        self._return_type = value_type
        return self

    def on_execute(self, func: ExecuteFn) -> BlockBuilder:
        """Set the behaviour, called as ``func(block, ctx, vm)``."""
        self._execute = func
        return self

    def register(self) -> BlockDefinition:
        definition = BlockDefinition(
            block_id=self._block_id,
            display_name=self._display_name,
            description=self._description,
            icon=self._icon,
            shape=self._shape,
            category=self._category,
            authority=self._authority,
            changes_state=self._changes_state,
            inputs=tuple(self._inputs),
            nested_bodies=tuple(self._nested),
            return_type=self._return_type,
            execute=self._execute,
        )
        self._registry.register(definition)
        return definition


class BlockRegistry:
    """Block definitions by id, in registration order."""

    def __init__(self) -> None:
        self._definitions: dict[str, BlockDefinition] = {}

    def define_block(self, block_id: str) -> BlockBuilder:
        return BlockBuilder(self, block_id)

    def register(self, definition: BlockDefinition) -> None:
        if definition.block_id in self._definitions:
            raise ValueError(f"block {definition.block_id!r} is already registered")
        self._definitions[definition.block_id] = definition

    def get(self, block_id: str) -> BlockDefinition:
        try:
            return self._definitions[block_id]
        except KeyError:
            raise KeyError(f"unknown block {block_id!r}") from None

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[BlockDefinition]:
        return iter(self._definitions.values())

    def create_block(self, block_id: str) -> Block:
        return Block(self.get(block_id))


@dataclass
class InputSlot:
    """An input holding either a literal value or a connected block."""

    name: str
    value_type: ValueType = ValueType.ANY
    value: Any = None
    source: Block | None = None


@dataclass
class NestedSlot:
    """A body of blocks run in order."""

    name: str
    blocks: list[Block] = field(default_factory=list)


def _fresh(default: Any) -> Any:
    return list(default) if isinstance(default, list) else default


class Block:
    """One placed instance of a block definition."""

    def __init__(self, definition: BlockDefinition) -> None:
        self.definition = definition
        self.id = uuid.uuid4()
        self._inputs = {
            spec.name: InputSlot(spec.name, spec.value_type, _fresh(spec.default))
            for spec in definition.inputs
        }
        self._nested = {name: NestedSlot(name) for name in definition.nested_bodies}

    @property
    def block_id(self) -> str:
        return self.definition.block_id

    def input_slot(self, name: str) -> InputSlot | None:
        return self._inputs.get(name)

    def nested_slot(self, name: str) -> NestedSlot | None:
        return self._nested.get(name)

    def _require_input(self, name: str) -> InputSlot:
        try:
            return self._inputs[name]
        except KeyError:
            raise KeyError(f"block {self.block_id!r} has no input {name!r}") from None

    def set_input(self, name: str, value: Any) -> Block:
        """Put a literal value in an input, dropping any connected block."""
        slot = self._require_input(name)
        slot.value = value
        slot.source = None
        return self

    def connect_input(self, name: str, block: Block) -> Block:
        """Feed an input from the result of another block."""
        self._require_input(name).source = block
        return self

    def append_nested(self, name: str, block: Block) -> Block:
        try:
            self._nested[name].blocks.append(block)
        except KeyError:
            raise KeyError(f"block {self.block_id!r} has no body {name!r}") from None
        return self

    def __repr__(self) -> str:
        return f"Block({self.block_id!r})"


class ExecutionContext:
    """Per-run state: entities, time, variables, loop data and flow requests."""

    def __init__(
        self,
        self_entity: Any = None,
        target: Any = None,
        owner: Any = None,
        delta_time: float = 0.0,
        game_time: float = 0.0,
        debug_mode: bool = False,
    ) -> None:
        self.self_entity = self_entity
        self.target = target
        self.owner = owner
        self.delta_time = delta_time
        self.game_time = game_time
        self.debug_mode = debug_mode
        self.iteration_index = 0
        self.iteration_item: Any = None
        self._variables: dict[str, Any] = {}
        self._locals: dict[str, Any] = {}
        self._synced: dict[str, Any] = {}
        self._break = False
        self._continue = False
        self._return = False
        self._stop = False
        self._return_value: Any = None

    @property
    def break_requested(self) -> bool:
        return self._break

    @property
    def continue_requested(self) -> bool:
        return self._continue

    @property
    def return_requested(self) -> bool:
        return self._return

    @property
    def stop_requested(self) -> bool:
        return self._stop

    @property
    def return_value(self) -> Any:
        return self._return_value

    @property
    def interrupted(self) -> bool:
        """True while any break, continue, return or stop is pending."""
        return self._break or self._continue or self._return or self._stop

    def request_break(self) -> None:
        self._break = True

    def request_continue(self) -> None:
        self._continue = True

    def request_return(self, value: Any = None) -> None:
        self._return = True
        self._return_value = value

    def request_stop(self) -> None:
        self._stop = True

    def clear_break(self) -> None:
        self._break = False

    def clear_continue(self) -> None:
        self._continue = False

    def get_variable(self, name: str) -> Any:
        """Look a name up in local, then script, then synced variables."""
        for scope in (self._locals, self._variables, self._synced):
            if name in scope:
                return scope[name]
        return None

    def set_variable(self, name: str, value: Any) -> None:
        """Update the scope that already holds ``name``, else a script variable."""
        if name in self._locals:
            self._locals[name] = value
        elif name in self._synced:
            self._synced[name] = value
        else:
            self._variables[name] = value

    def set_local_variable(self, name: str, value: Any) -> None:
        self._locals[name] = value

    def get_synced_variable(self, name: str) -> Any:
        return self._synced.get(name)

    def set_synced_variable(self, name: str, value: Any) -> None:
        self._synced[name] = value


class ScriptVM:
    """Evaluates blocks, their inputs and their nested bodies."""

    def execute(self, block: Block, ctx: ExecutionContext) -> Any:
        func = block.definition.execute
        if func is None:
            return None
        return func(block, ctx, self)

    def slot_value(self, slot: InputSlot | None, ctx: ExecutionContext) -> Any:
        """Value of an input: its connected block's result, else its literal."""
        if slot is None:
            return None
        if slot.source is not None:
            return self.execute(slot.source, ctx)
        return slot.value

    def execute_nested(self, slot: NestedSlot | None, ctx: ExecutionContext) -> Any:
        """Run a body in order until it ends or a flow request is pending."""
        result = None
        if slot is None:
            return result
        for block in list(slot.blocks):
            if ctx.interrupted:
                break
            result = self.execute(block, ctx)
        return result