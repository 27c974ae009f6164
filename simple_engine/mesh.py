"""Vertex meshes and the built-in triangle and quad primitives."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from simple_engine.graphics_backend import current_backend

log = logging.getLogger(__name__)

# Interleaved x, y, z, u, v per vertex.
TRIANGLE_VERTICES = (
    0.0, 0.6, 0.0, 0.5, 1.0,
    -0.6, -0.45, 0.0, 0.0, 0.0,
    0.6, -0.45, 0.0, 1.0, 0.0,
)

QUAD_VERTICES = (
    -0.5, 0.5, 0.0, 0.0, 1.0,
    -0.5, -0.5, 0.0, 0.0, 0.0,
    0.5, -0.5, 0.0, 1.0, 0.0,
    -0.5, 0.5, 0.0, 0.0, 1.0,
    0.5, -0.5, 0.0, 1.0, 0.0,
    0.5, 0.5, 0.0, 1.0, 1.0,
)


class MeshError(RuntimeError):
    """Raised when a mesh cannot be created."""


class Mesh:
    """A vertex buffer drawn as a list of triangles."""

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend
        self._buffer: Any = None
        self._vertex_count = 0

    def __enter__(self) -> Mesh:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    def _resolve_backend(self) -> Any:
        if self._backend is None:
            self._backend = current_backend()
        return self._backend

    def create(
        self, vertices: Sequence[float], components_per_vertex: int, has_texture_coordinates: bool
    ) -> None:
        """Upload interleaved vertices; position first, then optional UVs."""
        self.destroy()
        values = tuple(float(v) for v in vertices)
        if not values or components_per_vertex < 3:
            log.error("Mesh creation received invalid vertex data.")
            raise MeshError("Mesh creation received invalid vertex data.")

        buffer = self._resolve_backend().create_vertex_buffer(
            values, components_per_vertex, has_texture_coordinates
        )
        if buffer is None:
            log.error("Failed to create buffers for mesh.")
            raise MeshError("Failed to create buffers for mesh.")

        self._buffer = buffer
        self._vertex_count = len(values) // components_per_vertex
        log.info("Mesh created successfully.")

    def draw(self) -> None:
        if self._buffer is None or self._vertex_count == 0:
            return
        self._resolve_backend().draw_triangles(self._buffer)

    def destroy(self) -> None:
        if self._buffer is not None:
            self._resolve_backend().delete_vertex_buffer(self._buffer)
            self._buffer = None
            log.info("Mesh vertex buffer destroyed.")
        self._vertex_count = 0


def _primitive(vertices: Sequence[float], name: str, backend: Any) -> Mesh:
    mesh = Mesh(backend)
    try:
        mesh.create(vertices, 5, True)
    except MeshError as error:
        message = f"Failed to create {name} primitive."
        log.error(message)
        raise MeshError(message) from error
    return mesh


def create_triangle(backend: Any = None) -> Mesh:
    """A textured triangle centred near the origin."""
    return _primitive(TRIANGLE_VERTICES, "triangle", backend)


def create_quad(backend: Any = None) -> Mesh:
    """A textured unit quad centred on the origin."""
    return _primitive(QUAD_VERTICES, "quad", backend)