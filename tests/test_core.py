import pytest

from riftspire.scripting.core import (
    BlockCategory,
    BlockRegistry,
    BlockShape,
    ExecutionContext,
    NetworkAuthority,
    ScriptVM,
    ValueType,
    to_bool,
    to_float,
    to_int,
    to_string,
)


def _registry():
    registry = BlockRegistry()
    registry.define_block("test.literal").input("value").on_execute(
        lambda block, ctx, vm: vm.slot_value(block.input_slot("value"), ctx)
    ).register()
    registry.define_block("test.set").input("name", ValueType.STRING, "v").input("value").on_execute(
        lambda block, ctx, vm: ctx.set_variable(
            to_string(vm.slot_value(block.input_slot("name"), ctx)),
            vm.slot_value(block.input_slot("value"), ctx),
        )
    ).register()
    registry.define_block("test.seq").nested_body("body").on_execute(
        lambda block, ctx, vm: vm.execute_nested(block.nested_slot("body"), ctx)
    ).register()
    registry.define_block("test.stop").on_execute(lambda block, ctx, vm: ctx.request_stop()).register()

    def _return(block, ctx, vm):
        value = vm.slot_value(block.input_slot("value"), ctx)
        ctx.request_return(value)
        return value

    registry.define_block("test.return").input("value").on_execute(_return).register()
    registry.define_block("test.inert").register()
    return registry


def test_bool_round_trips_through_string():
    for flag in (True, False):
        assert to_bool(to_string(flag)) is flag


def test_string_of_true_is_lowercase():
    assert to_string(True) == "true"


def test_int_round_trips_through_string():
    for number in (-7, 0, 12345):
        assert to_int(to_string(number)) == number


def test_float_round_trips_through_string():
    for number in (2.5, -0.125):
        assert to_float(to_string(number)) == number


def test_to_int_truncates_toward_zero():
    assert to_int(2.9) == to_int("2")
    assert to_int(-2.9) == to_int("-2")
    assert to_int("3.7") == to_int(3)


def test_junk_converts_to_void_numbers():
    assert to_float(None) == 0
    assert to_int("abc") == to_int(None)
    assert to_float("abc") == to_float(None)
    assert to_int(float("inf")) == to_int(None)


def test_truth_of_containers_and_void():
    assert to_bool(None) is False
    assert to_bool([]) is False
    assert to_bool([0]) is True
    assert to_bool(0.0) is False


def test_list_string_form():
    assert to_string([1, "a", True]) == "[1, a, true]"
    assert to_string(None) == ""


def test_builder_defaults():
    registry = BlockRegistry()
    definition = registry.define_block("x.y").register()
    assert definition.display_name == "x.y"
    assert definition.shape is BlockShape.FLAT
    assert definition.authority is NetworkAuthority.SERVER
    assert definition.inputs == ()
    assert definition.return_type is None
    assert "x.y" in registry
    assert len(registry) == 1
    assert registry.get("x.y") is definition


def test_builder_records_everything():
    registry = BlockRegistry()
    definition = (
        registry.define_block("data.get")
        .display_name("Get Variable")
        .description("Get the value of a variable")
        .icon("G")
        .shape(BlockShape.VALUE_NESTED)
        .category(BlockCategory.DATA_VARIABLES)
        .authority(NetworkAuthority.LOCAL)
        .changes_state(True)
        .returns_value(ValueType.ANY)
        .input("name", ValueType.STRING, "myVar")
        .nested_body("body")
        .register()
    )
    assert definition.display_name == "Get Variable"
    assert definition.category is BlockCategory.DATA_VARIABLES
    assert definition.authority is NetworkAuthority.LOCAL
    assert definition.changes_state is True
    assert definition.return_type is ValueType.ANY
    assert [(s.name, s.value_type, s.default) for s in definition.inputs] == [
        ("name", ValueType.STRING, "myVar")
    ]
    assert definition.nested_bodies == ("body",)


def test_builder_rejects_duplicates():
    registry = BlockRegistry()
    with pytest.raises(ValueError):
        registry.define_block("a").input("x").input("x")
    with pytest.raises(ValueError):
        registry.define_block("a").nested_body("b").nested_body("b")
    with pytest.raises(ValueError):
        registry.define_block("")
    registry.define_block("a").register()
    with pytest.raises(ValueError):
        registry.define_block("a").register()


def test_unknown_block():
    registry = BlockRegistry()
    with pytest.raises(KeyError):
        registry.get("nope")
    with pytest.raises(KeyError):
        registry.create_block("nope")


def test_create_block_slots():
    registry = BlockRegistry()
    registry.define_block("l").input("items", ValueType.LIST, []).input("n", ValueType.INT, 4).nested_body("body").register()
    first = registry.create_block("l")
    second = registry.create_block("l")
    assert first.input_slot("n").value == 4
    assert first.input_slot("items").value_type is ValueType.LIST
    assert first.input_slot("missing") is None
    assert first.nested_slot("body").blocks == []
    first.input_slot("items").value.append(1)
    assert second.input_slot("items").value == []
    assert first.id != second.id


def test_block_mutators_validate_names():
    registry = _registry()
    block = registry.create_block("test.literal")
    with pytest.raises(KeyError):
        block.set_input("other", 1)
    with pytest.raises(KeyError):
        block.append_nested("body", block)


def test_context_variable_scopes():
    ctx = ExecutionContext()
    assert ctx.get_variable("x") is None
    ctx.set_variable("x", 1)
    assert ctx.get_variable("x") == 1
    ctx.set_local_variable("x", 2)
    assert ctx.get_variable("x") == 2
    ctx.set_variable("x", 3)
    assert ctx.get_variable("x") == 3
    ctx.set_synced_variable("s", "a")
    assert ctx.get_variable("s") == "a"
    ctx.set_variable("s", "b")
    assert ctx.get_synced_variable("s") == "b"
    assert ctx.get_synced_variable("x") is None


def test_context_flow_flags():
    ctx = ExecutionContext()
    assert not ctx.interrupted
    ctx.request_break()
    assert ctx.break_requested and ctx.interrupted
    ctx.clear_break()
    assert not ctx.interrupted
    ctx.request_continue()
    assert ctx.continue_requested
    ctx.clear_continue()
    assert not ctx.continue_requested
    ctx.request_return("done")
    assert ctx.return_requested and ctx.return_value == "done"
    ctx.request_stop()
    assert ctx.stop_requested


def test_slot_value_literal_connected_and_missing():
    registry = _registry()
    vm = ScriptVM()
    ctx = ExecutionContext()
    inner = registry.create_block("test.literal").set_input("value", "inner")
    outer = registry.create_block("test.literal").set_input("value", "plain")
    assert vm.execute(outer, ctx) == "plain"
    outer.connect_input("value", inner)
    assert vm.execute(outer, ctx) == "inner"
    assert vm.slot_value(None, ctx) is None


def test_execute_without_behaviour():
    registry = _registry()
    assert ScriptVM().execute(registry.create_block("test.inert"), ExecutionContext()) is None


def test_nested_runs_in_order_and_returns_last():
    registry = _registry()
    vm = ScriptVM()
    ctx = ExecutionContext()
    seq = registry.create_block("test.seq")
    seq.append_nested("body", registry.create_block("test.set").set_input("value", "first"))
    seq.append_nested("body", registry.create_block("test.set").set_input("value", "second"))
    seq.append_nested("body", registry.create_block("test.literal").set_input("value", "last"))
    assert vm.execute(seq, ctx) == "last"
    assert ctx.get_variable("v") == "second"


def test_stop_ends_body():
    registry = _registry()
    vm = ScriptVM()
    ctx = ExecutionContext()
    seq = registry.create_block("test.seq")
    seq.append_nested("body", registry.create_block("test.stop"))
    seq.append_nested("body", registry.create_block("test.set").set_input("value", "late"))
    vm.execute(seq, ctx)
    assert ctx.stop_requested
    assert ctx.get_variable("v") is None


def test_return_value_propagates():
    registry = _registry()
    vm = ScriptVM()
    ctx = ExecutionContext()
    seq = registry.create_block("test.seq")
    seq.append_nested("body", registry.create_block("test.return").set_input("value", "answer"))
    seq.append_nested("body", registry.create_block("test.literal").set_input("value", "ignored"))
    assert vm.execute(seq, ctx) == "answer"
    assert ctx.return_value == "answer"


def test_execute_nested_of_missing_slot():
    assert ScriptVM().execute_nested(None, ExecutionContext()) is None