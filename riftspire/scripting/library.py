"""Registration of every built-in block family."""

from __future__ import annotations

from .control_flow import register_control_flow_blocks
from .core import BlockRegistry
from .data import register_data_blocks
from .debug import register_debug_blocks
from .events import register_event_blocks
from .operators import register_operator_blocks
from .signals import register_signal_blocks
from .timing import register_time_blocks

__all__ = ["register_all_blocks"]


def register_all_blocks(registry: BlockRegistry) -> None:
    """Register every built-in block family into ``registry``."""
    register_event_blocks(registry)
    register_signal_blocks(registry)
    register_control_flow_blocks(registry)
    register_operator_blocks(registry)
    register_data_blocks(registry)
    register_debug_blocks(registry)
    register_time_blocks(registry)