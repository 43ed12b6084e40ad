"""Shader programs: stage sources, the ``#type`` file format and uniform state."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

import numpy as np

__all__ = ["parse_shader_source", "Shader"]

_TYPE_TOKEN = "#type"
_LINE_BREAK = re.compile(r"[\r\n]")
_NOT_LINE_BREAK = re.compile(r"[^\r\n]")
_UNIFORM_DECLARATION = re.compile(
    r"\buniform\s+(?:(?:lowp|mediump|highp)\s+)?\w+\s+([^;{]+);"
)
_IDENTIFIER = re.compile(r"\s*(\w+)")


def parse_shader_source(source: str) -> tuple[str, str]:
    """Split a combined file into ``(vertex, fragment)`` sources.

    Each stage starts with a ``#type vertex``, ``#type fragment`` or
    ``#type pixel`` line; sections of any other type are ignored and a
    stage that never appears comes back as an empty string.
    """
    vertex = ""
    fragment = ""
    pos = source.find(_TYPE_TOKEN)
    while pos != -1:
        begin = pos + len(_TYPE_TOKEN) + 1
        eol_match = _LINE_BREAK.search(source, pos)
        if eol_match is None:
            stage = source[begin:]
            body = ""
            pos = -1
        else:
            eol = eol_match.start()
            stage = source[begin:eol]
            next_line = _NOT_LINE_BREAK.search(source, eol)
            if next_line is None:
                body = ""
                pos = -1
            else:
                start = next_line.start()
                pos = source.find(_TYPE_TOKEN, start)
                body = source[start:] if pos == -1 else source[start:pos]

        if stage == "vertex":
            vertex = body
        elif stage in ("fragment", "pixel"):
            fragment = body
    return vertex, fragment


def _declared_uniforms(source: str) -> set[str]:
    names: set[str] = set()
    for declaration in _UNIFORM_DECLARATION.finditer(source):
        for part in declaration.group(1).split(","):
            match = _IDENTIFIER.match(part)
            if match:
                names.add(match.group(1))
    return names


def _components(value: Any, count: int) -> tuple[float, ...]:
    flat = np.asarray(value, dtype=float).reshape(-1)
    if flat.shape[0] != count:
        raise ValueError(f"expected {count} components, got {flat.shape[0]}")
    return tuple(float(v) for v in flat)


def _matrix(value: Any, size: int) -> np.ndarray:
    matrix = np.array(value, dtype=float)
    if matrix.shape != (size, size):
        raise ValueError(f"expected a {size}x{size} matrix, got shape {matrix.shape}")
    return matrix


class Shader:
    """A vertex and fragment program with the uniform values set on it.

    Uniform locations are handed out on first lookup to names declared in
    either stage (struct members and array elements resolve through their
    base name). Values set on undeclared names are dropped, the way a
    location of -1 is ignored.
    """

    def __init__(self, vertex_source: str, fragment_source: str) -> None:
        for stage, text in (("vertex", vertex_source), ("fragment", fragment_source)):
            if not text.strip():
                raise ValueError(f"{stage} shader source is empty")
        self.vertex_source = vertex_source
        self.fragment_source = fragment_source
        self._declared = frozenset(
            _declared_uniforms(vertex_source) | _declared_uniforms(fragment_source)
        )
        self._locations: dict[str, int] = {}
        self._next_location = 0
        self._values: dict[int, Any] = {}

    @classmethod
    def from_file(cls, filepath: str | os.PathLike[str]) -> Shader:
        """Load a shader from a file that uses ``#type`` stage markers."""
        text = Path(filepath).read_bytes().decode("utf-8")
        return cls(*parse_shader_source(text))

    def _location(self, name: str) -> int:
        cached = self._locations.get(name)
        if cached is not None:
            return cached
        base = _IDENTIFIER.match(name)
        if base is not None and base.group(1) in self._declared:
            location = self._next_location
            self._next_location += 1
        else:
            location = -1
        self._locations[name] = location
        return location

    def _store(self, name: str, value: Any) -> None:
        location = self._location(name)
        if location >= 0:
            self._values[location] = value

    def uniform(self, name: str) -> Any:
        """Value last set on ``name``, or None if unset or not declared."""
        location = self._location(name)
        if location < 0:
            return None
        value = self._values.get(location)
        return value.copy() if isinstance(value, np.ndarray) else value

    def set_int(self, name: str, value: int) -> None:
        self._store(name, int(value))

    def set_int_array(self, name: str, values: Iterable[int]) -> None:
        self._store(name, tuple(int(v) for v in values))

    def set_float(self, name: str, value: float) -> None:
        self._store(name, float(value))

    def set_float2(self, name: str, value: Sequence[float]) -> None:
        self._store(name, _components(value, 2))

    def set_float3(self, name: str, value: Sequence[float]) -> None:
        self._store(name, _components(value, 3))

    def set_float4(self, name: str, value: Sequence[float]) -> None:
        self._store(name, _components(value, 4))

    def set_mat3(self, name: str, value: Any) -> None:
        self._store(name, _matrix(value, 3))

    def set_mat4(self, name: str, value: Any) -> None:
        self._store(name, _matrix(value, 4))