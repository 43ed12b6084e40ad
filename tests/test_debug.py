import logging
import uuid

import pytest

from riftspire.scripting.core import (
    BlockCategory,
    BlockRegistry,
    ExecutionContext,
    NetworkAuthority,
    ScriptVM,
)
from riftspire.scripting.debug import register_debug_blocks


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def env():
    logger = logging.getLogger(f"test.debug.{uuid.uuid4().hex}")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _ListHandler()
    logger.addHandler(handler)
    registry = BlockRegistry()
    register_debug_blocks(registry, logger)
    yield registry, ScriptVM(), handler.records
    logger.removeHandler(handler)


def test_definitions_are_local_debug(env):
    registry, _, _ = env
    ids = [d.block_id for d in registry]
    assert len(ids) == 6
    for block_id in ids:
        definition = registry.get(block_id)
        assert definition.category is BlockCategory.DEBUG_LOGGING
        assert definition.authority is NetworkAuthority.LOCAL


def test_print_default_message(env):
    registry, vm, records = env
    assert vm.execute(registry.create_block("debug.print"), ExecutionContext()) is None
    assert [r.getMessage() for r in records] == ["[Script] Hello!"]
    assert records[0].levelno == logging.INFO


@pytest.mark.parametrize(
    "block_id, level",
    [
        ("debug.log_info", logging.INFO),
        ("debug.log_warn", logging.WARNING),
        ("debug.log_error", logging.ERROR),
    ],
)
def test_log_levels(env, block_id, level):
    registry, vm, records = env
    block = registry.create_block(block_id).set_input("message", "boom")
    vm.execute(block, ExecutionContext())
    assert records[0].levelno == level
    assert records[0].getMessage() == "[Script] boom"


def test_message_converted_to_text(env):
    registry, vm, records = env
    block = registry.create_block("debug.log_info").set_input("message", True)
    vm.execute(block, ExecutionContext())
    assert records[0].getMessage() == "[Script] true"


def test_breakpoint_only_in_debug_mode(env):
    registry, vm, records = env
    block = registry.create_block("debug.breakpoint")
    vm.execute(block, ExecutionContext())
    assert records == []
    vm.execute(block, ExecutionContext(debug_mode=True))
    assert len(records) == 1
    assert str(block.id) in records[0].getMessage()


def test_assert_passes_silently(env):
    registry, vm, records = env
    vm.execute(registry.create_block("debug.assert"), ExecutionContext())
    assert records == []


def test_assert_failure_logs_error(env):
    registry, vm, records = env
    block = registry.create_block("debug.assert").set_input("condition", False)
    vm.execute(block, ExecutionContext())
    assert records[0].levelno == logging.ERROR
    assert records[0].getMessage() == "[Script Assert] Assertion failed"


def test_default_logger_used_without_one(caplog):
    registry = BlockRegistry()
    register_debug_blocks(registry)
    block = registry.create_block("debug.log_warn").set_input("message", "hi")
    with caplog.at_level(logging.WARNING, logger="riftspire.script"):
        ScriptVM().execute(block, ExecutionContext())
    assert "[Script] hi" in caplog.messages