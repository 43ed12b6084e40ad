"""Vertex arrays: how buffer layouts map onto numbered vertex attributes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .buffer import IndexBuffer, ShaderDataType, VertexBuffer

__all__ = ["BaseType", "base_type", "VertexAttribute", "VertexArray"]


class BaseType(Enum):
    """Scalar component types, valued as the graphics API's enumerants."""

    NONE = 0
    INT = 0x1404
    FLOAT = 0x1406
    BOOL = 0x8B56


_FLOAT_TYPES = frozenset(
    {ShaderDataType.FLOAT, ShaderDataType.FLOAT2, ShaderDataType.FLOAT3, ShaderDataType.FLOAT4}
)
_INT_TYPES = frozenset(
    {
        ShaderDataType.INT,
        ShaderDataType.INT2,
        ShaderDataType.INT3,
        ShaderDataType.INT4,
        ShaderDataType.BOOL,
    }
)
_MATRIX_TYPES = frozenset({ShaderDataType.MAT3, ShaderDataType.MAT4})

_BASE_TYPES = {
    **{t: BaseType.FLOAT for t in _FLOAT_TYPES | _MATRIX_TYPES},
    ShaderDataType.INT: BaseType.INT,
    ShaderDataType.INT2: BaseType.INT,
    ShaderDataType.INT3: BaseType.INT,
    ShaderDataType.INT4: BaseType.INT,
    ShaderDataType.BOOL: BaseType.BOOL,
}

_FLOAT_SIZE = 4


def base_type(data_type: ShaderDataType) -> BaseType:
    """Scalar type of one component of ``data_type``; NONE if it has none."""
    return _BASE_TYPES.get(data_type, BaseType.NONE)


@dataclass(frozen=True)
class VertexAttribute:
    """One enabled attribute slot and how it reads from its buffer."""

    index: int
    component_count: int
    base_type: BaseType
    normalized: bool
    stride: int
    offset: int
    integer: bool = False
    divisor: int = 0


class VertexArray:
    """Collects vertex buffers and an index buffer into one drawable set."""

    def __init__(self) -> None:
        self._attributes: list[VertexAttribute] = []
        self._vertex_buffers: list[VertexBuffer] = []
        self._index_buffer: IndexBuffer | None = None

    @property
    def attributes(self) -> tuple[VertexAttribute, ...]:
        return tuple(self._attributes)

    @property
    def vertex_buffers(self) -> tuple[VertexBuffer, ...]:
        return tuple(self._vertex_buffers)

    @property
    def index_buffer(self) -> IndexBuffer | None:
        return self._index_buffer

    def add_vertex_buffer(self, vertex_buffer: VertexBuffer) -> None:
        """Enable attributes for every element of the buffer's layout.

        Attribute indices continue from buffers added earlier. Matrix
        elements take one instanced attribute per component, each reading
        as many floats as the matrix has components.
        """
        layout = vertex_buffer.layout
        stride = layout.stride
        for element in layout:
            kind = element.data_type
            if kind in _FLOAT_TYPES:
                self._enable(element.component_count(), base_type(kind),
                             element.normalized, stride, element.offset)
            elif kind in _INT_TYPES:
                self._enable(element.component_count(), base_type(kind),
                             False, stride, element.offset, integer=True)
            elif kind in _MATRIX_TYPES:
                count = element.component_count()
                for row in range(count):
                    self._enable(count, base_type(kind), element.normalized, stride,
                                 element.offset + _FLOAT_SIZE * count * row, divisor=1)
        self._vertex_buffers.append(vertex_buffer)

    def set_index_buffer(self, index_buffer: IndexBuffer) -> None:
        self._index_buffer = index_buffer

    def _enable(
        self,
        count: int,
        kind: BaseType,
        normalized: bool,
        stride: int,
        offset: int,
        *,
        integer: bool = False,
        divisor: int = 0,
    ) -> None:
        self._attributes.append(
            VertexAttribute(
                index=len(self._attributes),
                component_count=count,
                base_type=kind,
                normalized=normalized,
                stride=stride,
                offset=offset,
                integer=integer,
                divisor=divisor,
            )
        )