import pytest

from riftspire.scripting.core import (
    BlockCategory,
    BlockRegistry,
    ExecutionContext,
    NetworkAuthority,
    ScriptVM,
)
from riftspire.scripting.timing import register_time_blocks


@pytest.fixture
def registry():
    reg = BlockRegistry()
    register_time_blocks(reg)

    def tick(block, ctx, vm):
        ctx.set_variable("ticks", (ctx.get_variable("ticks") or 0) + 1)
        return "ticked"

    reg.define_block("test.tick").on_execute(tick).register()
    return reg


@pytest.fixture
def vm():
    return ScriptVM()


def make(registry, block_id, **inputs):
    block = registry.create_block(block_id)
    for name, value in inputs.items():
        block.set_input(name, value)
    return block


def test_cooldown_ready_without_start(registry, vm):
    ctx = ExecutionContext()
    assert vm.execute(make(registry, "time.cooldown_ready"), ctx) is True
    assert vm.execute(make(registry, "time.cooldown_remaining"), ctx) == 0.0


def test_cooldown_lifecycle(registry, vm):
    ctx = ExecutionContext(game_time=10.0)
    vm.execute(make(registry, "time.cooldown_start", name="Q", duration=5.0), ctx)
    ready = make(registry, "time.cooldown_ready", name="Q")
    remaining = make(registry, "time.cooldown_remaining", name="Q")
    assert vm.execute(ready, ctx) is False
    assert vm.execute(remaining, ctx) == pytest.approx(5.0)
    ctx.game_time = 15.0
    assert vm.execute(ready, ctx) is True
    assert vm.execute(remaining, ctx) == 0.0


def test_cooldown_reset(registry, vm):
    ctx = ExecutionContext(game_time=1.0)
    vm.execute(make(registry, "time.cooldown_start", name="W", duration=30.0), ctx)
    vm.execute(make(registry, "time.cooldown_reset", name="W"), ctx)
    assert vm.execute(make(registry, "time.cooldown_ready", name="W"), ctx) is True
    assert ctx.get_synced_variable("_cooldown_W") == 0.0


def test_countdown(registry, vm):
    ctx = ExecutionContext(game_time=2.0)
    finished = make(registry, "time.is_countdown_finished", name="C")
    remaining = make(registry, "time.get_countdown", name="C")
    assert vm.execute(finished, ctx) is True
    assert vm.execute(remaining, ctx) == 0.0
    vm.execute(make(registry, "time.start_countdown", name="C", **{"from": 10.0}), ctx)
    assert vm.execute(remaining, ctx) == pytest.approx(10.0)
    assert vm.execute(finished, ctx) is False
    ctx.game_time = 12.0
    assert vm.execute(finished, ctx) is True
    assert vm.execute(remaining, ctx) == 0.0


def test_clock_getters(registry, vm):
    ctx = ExecutionContext(delta_time=0.25, game_time=42.5)
    assert vm.execute(make(registry, "time.get_delta"), ctx) == 0.25
    assert vm.execute(make(registry, "time.get_game_time"), ctx) == 42.5
    assert vm.execute(make(registry, "time.get_server_time"), ctx) == 42.5


def test_wait_records_until(registry, vm):
    ctx = ExecutionContext()
    assert vm.execute(make(registry, "time.wait", seconds=3.0), ctx) is None
    assert ctx.get_variable("_wait_until") == 3.0


def test_delay_runs_body_once_due(registry, vm):
    ctx = ExecutionContext(game_time=0.0)
    delay = make(registry, "time.delay", seconds=2.0)
    delay.append_nested("body", registry.create_block("test.tick"))
    assert vm.execute(delay, ctx) is None
    assert ctx.get_variable("ticks") is None
    ctx.game_time = 2.0
    assert vm.execute(delay, ctx) == "ticked"
    assert ctx.get_variable("ticks") == 1


def test_timer_repeats_and_clears(registry, vm):
    ctx = ExecutionContext(game_time=0.0)
    timer = make(registry, "time.set_timer", name="T", interval=1.0)
    timer.append_nested("body", registry.create_block("test.tick"))
    vm.execute(timer, ctx)
    assert ctx.get_variable("ticks") is None
    ctx.game_time = 1.0
    vm.execute(timer, ctx)
    ctx.game_time = 2.0
    vm.execute(timer, ctx)
    assert ctx.get_variable("ticks") == 2
    vm.execute(make(registry, "time.clear_timer", name="T"), ctx)
    assert ctx.get_variable("_timer_T") is None


def test_definitions(registry):
    assert registry.get("time.wait").authority is NetworkAuthority.LOCAL
    assert registry.get("time.cooldown_start").changes_state is True
    assert registry.get("time.get_delta").category is BlockCategory.TIME
    assert registry.get("time.delay").nested_bodies == ("body",)