import pytest

from riftspire.scripting.core import (
    BlockCategory,
    BlockRegistry,
    BlockShape,
    ExecutionContext,
    ScriptVM,
)
from riftspire.scripting.signals import register_signal_blocks


@pytest.fixture
def registry():
    reg = BlockRegistry()
    register_signal_blocks(reg)
    return reg


def test_broadcast_queues_default_event(registry):
    ctx = ExecutionContext()
    result = ScriptVM().execute(registry.create_block("events.broadcast"), ctx)
    assert result is None
    assert ctx.get_variable("_broadcasts") == [("MyEvent", None)]


def test_broadcast_with_data_keeps_order(registry):
    ctx = ExecutionContext()
    vm = ScriptVM()
    first = registry.create_block("events.broadcast").set_input("event_name", "Alpha")
    second = registry.create_block("events.broadcast_with_data")
    second.set_input("event_name", "Beta").set_input("data", [1, 2])
    vm.execute(first, ctx)
    vm.execute(second, ctx)
    assert ctx.get_variable("_broadcasts") == [("Alpha", None), ("Beta", [1, 2])]


def test_event_name_converted_to_text(registry):
    ctx = ExecutionContext()
    block = registry.create_block("events.broadcast").set_input("event_name", True)
    ScriptVM().execute(block, ctx)
    assert ctx.get_variable("_broadcasts") == [("true", None)]


def test_definitions(registry):
    plain = registry.get("events.broadcast")
    with_data = registry.get("events.broadcast_with_data")
    assert plain.shape is BlockShape.FLAT
    assert with_data.shape is BlockShape.MULTI_VALUE_NESTED
    assert plain.category is BlockCategory.EVENTS
    assert [spec.name for spec in with_data.inputs] == ["event_name", "data"]


def test_registering_twice_fails(registry):
    with pytest.raises(ValueError):
        register_signal_blocks(registry)