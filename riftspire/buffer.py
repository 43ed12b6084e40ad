"""Vertex layouts and the vertex and index buffers that hold mesh data."""

from __future__ import annotations

import numbers
from array import array
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

__all__ = [
    "ShaderDataType",
    "shader_data_type_size",
    "BufferElement",
    "BufferLayout",
    "VertexBuffer",
    "IndexBuffer",
]


class ShaderDataType(Enum):
    NONE = 0
    FLOAT = 1
    FLOAT2 = 2
    FLOAT3 = 3
    FLOAT4 = 4
    MAT3 = 5
    MAT4 = 6
    INT = 7
    INT2 = 8
    INT3 = 9
    INT4 = 10
    BOOL = 11


_COMPONENT_COUNTS = {
    ShaderDataType.FLOAT: 1,
    ShaderDataType.FLOAT2: 2,
    ShaderDataType.FLOAT3: 3,
    ShaderDataType.FLOAT4: 4,
    ShaderDataType.MAT3: 3 * 3,
    ShaderDataType.MAT4: 4 * 4,
    ShaderDataType.INT: 1,
    ShaderDataType.INT2: 2,
    ShaderDataType.INT3: 3,
    ShaderDataType.INT4: 4,
    ShaderDataType.BOOL: 1,
}

_SIZES = {
    data_type: (1 if data_type is ShaderDataType.BOOL else 4 * count)
    for data_type, count in _COMPONENT_COUNTS.items()
}

_MAX_INDEX = 0xFFFFFFFF


def shader_data_type_size(data_type: ShaderDataType) -> int:
    """Size in bytes of one attribute of ``data_type``; zero for NONE."""
    return _SIZES.get(data_type, 0)


@dataclass
class BufferElement:
    """One named attribute in an interleaved vertex layout."""

    data_type: ShaderDataType
    name: str
    normalized: bool = False
    offset: int = 0

    @property
    def size(self) -> int:
        return shader_data_type_size(self.data_type)

    def component_count(self) -> int:
        return _COMPONENT_COUNTS.get(self.data_type, 0)


class BufferLayout:
    """Ordered attributes with offsets and stride worked out from their sizes."""

    def __init__(self, elements: Iterable[BufferElement] = ()) -> None:
        placed = []
        offset = 0
        for element in elements:
            placed.append(replace(element, offset=offset))
            offset += element.size
        self._elements = tuple(placed)
        self._stride = offset

    @property
    def stride(self) -> int:
        return self._stride

    @property
    def elements(self) -> tuple[BufferElement, ...]:
        return self._elements

    def __iter__(self) -> Iterator[BufferElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"BufferLayout({list(self._elements)!r}, stride={self._stride})"


def _to_bytes(data: Any) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return memoryview(data).tobytes()
    return array("f", (float(v) for v in data)).tobytes()


class VertexBuffer:
    """Vertex storage: either a zeroed dynamic block or packed float32 vertices."""

    def __init__(self, source: int | Iterable[float] | bytes, layout: BufferLayout | None = None) -> None:
        if isinstance(source, numbers.Integral) and not isinstance(source, bool):
            if source < 0:
                raise ValueError("buffer size must not be negative")
            self._data = bytearray(int(source))
            self.dynamic = True
        else:
            self._data = bytearray(_to_bytes(source))
            self.dynamic = False
        self.layout = layout if layout is not None else BufferLayout()

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    def set_data(self, data: bytes | Iterable[float]) -> None:
        """Overwrite the start of the buffer with ``data``."""
        raw = _to_bytes(data)
        if len(raw) > len(self._data):
            raise ValueError(
                f"data of {len(raw)} bytes does not fit a buffer of {len(self._data)} bytes"
            )
        self._data[: len(raw)] = raw


class IndexBuffer:
    """Unsigned 32-bit triangle indices."""

    def __init__(self, indices: Iterable[int]) -> None:
        values = tuple(int(i) for i in indices)
        for value in values:
            if not 0 <= value <= _MAX_INDEX:
                raise ValueError(f"index {value} is outside the unsigned 32-bit range")
        self._indices = values

    @property
    def indices(self) -> tuple[int, ...]:
        return self._indices

    def __len__(self) -> int:
        return len(self._indices)