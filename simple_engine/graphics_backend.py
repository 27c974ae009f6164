"""The drawing backend and the process-wide slot that holds the active one.

A backend compiles shader programs, owns vertex buffers and textures and
issues draw calls.  :class:`PygletBackend` does this through pyglet's OpenGL
bindings; anything with the same methods can be loaded in its place.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import numpy as np

log = logging.getLogger(__name__)

_REQUIRED_METHODS = (
    "compile_program",
    "delete_program",
    "use_program",
    "set_uniform",
    "create_vertex_buffer",
    "draw_triangles",
    "delete_vertex_buffer",
    "create_texture",
    "bind_texture",
    "delete_texture",
    "set_viewport",
    "clear",
)


class BackendError(RuntimeError):
    """Raised when the graphics backend cannot do what was asked of it."""


def _to_uniform(value: Any) -> Any:
    """Convert a value into the form a uniform setter expects.

    4x4 matrices become 16 floats in column-major order; vectors become
    tuples of floats; integers stay integers.
    """
    if isinstance(value, np.ndarray):
        if value.shape == (4, 4):
            return tuple(float(v) for v in value.flatten(order="F"))
        return tuple(float(v) for v in value.ravel())
    if isinstance(value, (bool, int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        return float(value)
    return tuple(float(v) for v in value)


class _VertexBuffer:
    """Interleaved vertex data split into attribute streams.

    The GPU-side vertex lists are built lazily, one per shader program,
    because their layout follows the program's attributes.
    """

    def __init__(self, positions: tuple[float, ...], tex_coords: tuple[float, ...] | None, count: int) -> None:
        self.positions = positions
        self.tex_coords = tex_coords
        self.count = count
        self.vertex_lists: dict[int, Any] = {}


class PygletBackend:
    """Backend drawing through pyglet's OpenGL 3.3 core bindings."""

    def __init__(self) -> None:
        try:
            import pyglet.gl as gl
            import pyglet.image as image
            from pyglet.graphics import shader as shader_module
        except (ImportError, OSError) as error:
            raise BackendError(f"Failed to load OpenGL through pyglet: {error}") from error
        self._gl = gl
        self._image = image
        self._shader = shader_module
        self._current_program: Any = None
        self._buffers: list[_VertexBuffer] = []

    def compile_program(self, vertex_source: str, fragment_source: str) -> Any:
        """Compile and link a program; raises :class:`BackendError` on failure."""
        errors = (self._shader.ShaderException, self._gl.GLException)
        try:
            vertex = self._shader.Shader(vertex_source, "vertex")
            fragment = self._shader.Shader(fragment_source, "fragment")
        except errors as error:
            raise BackendError(f"Shader compilation failed. {error}") from error
        try:
            return self._shader.ShaderProgram(vertex, fragment)
        except errors as error:
            raise BackendError(f"Shader linking failed. {error}") from error

    def delete_program(self, program: Any) -> None:
        key = id(program)
        for buffer in self._buffers:
            vertex_list = buffer.vertex_lists.pop(key, None)
            if vertex_list is not None:
                vertex_list.delete()
        if self._current_program is program:
            self._current_program = None
        program.delete()

    def use_program(self, program: Any) -> None:
        """Make ``program`` current; ``None`` unbinds any program."""
        if program is None:
            self._gl.glUseProgram(0)
        else:
            program.use()
        self._current_program = program

    def set_uniform(self, program: Any, name: str, value: Any) -> bool:
        """Set a uniform; returns False when the program has no such uniform."""
        if name not in program.uniforms:
            return False
        program[name] = _to_uniform(value)
        return True

    def create_vertex_buffer(
        self, vertices: Sequence[float], components_per_vertex: int, has_texture_coordinates: bool
    ) -> _VertexBuffer | None:
        data = np.asarray(vertices, dtype=np.float32)
        count = data.size // components_per_vertex
        if count == 0:
            return None
        rows = data[: count * components_per_vertex].reshape(count, components_per_vertex)
        positions = tuple(rows[:, :3].ravel().tolist())
        tex_coords = None
        if has_texture_coordinates and components_per_vertex >= 5:
            tex_coords = tuple(rows[:, 3:5].ravel().tolist())
        buffer = _VertexBuffer(positions, tex_coords, count)
        self._buffers.append(buffer)
        return buffer

    def draw_triangles(self, buffer: _VertexBuffer) -> None:
        """Draw the buffer as triangles with the program currently in use."""
        program = self._current_program
        if program is None:
            return
        vertex_list = buffer.vertex_lists.get(id(program))
        if vertex_list is None:
            streams = {"aPosition": ("f", buffer.positions)}
            if buffer.tex_coords is not None:
                streams["aTexCoord"] = ("f", buffer.tex_coords)
            streams = {name: data for name, data in streams.items() if name in program.attributes}
            vertex_list = program.vertex_list(buffer.count, self._gl.GL_TRIANGLES, **streams)
            buffer.vertex_lists[id(program)] = vertex_list
        vertex_list.draw(self._gl.GL_TRIANGLES)

    def delete_vertex_buffer(self, buffer: _VertexBuffer) -> None:
        for vertex_list in buffer.vertex_lists.values():
            vertex_list.delete()
        buffer.vertex_lists.clear()
        if buffer in self._buffers:
            self._buffers.remove(buffer)

    def create_texture(self, width: int, height: int, pixels: bytes) -> Any:
        """Upload RGB8 pixels as a nearest-filtered, edge-clamped texture."""
        gl = self._gl
        image_data = self._image.ImageData(width, height, "RGB", bytes(pixels), pitch=width * 3)
        texture = image_data.get_texture()
        gl.glBindTexture(texture.target, texture.id)
        for parameter, setting in (
            (gl.GL_TEXTURE_MIN_FILTER, gl.GL_NEAREST),
            (gl.GL_TEXTURE_MAG_FILTER, gl.GL_NEAREST),
            (gl.GL_TEXTURE_WRAP_S, gl.GL_CLAMP_TO_EDGE),
            (gl.GL_TEXTURE_WRAP_T, gl.GL_CLAMP_TO_EDGE),
        ):
            gl.glTexParameteri(texture.target, parameter, setting)
        gl.glBindTexture(texture.target, 0)
        return texture

    def bind_texture(self, texture: Any, slot: int) -> None:
        """Bind ``texture`` to a texture unit; ``None`` unbinds the unit."""
        gl = self._gl
        gl.glActiveTexture(gl.GL_TEXTURE0 + slot)
        if texture is None:
            gl.glBindTexture(gl.GL_TEXTURE_2D, 0)
        else:
            gl.glBindTexture(texture.target, texture.id)

    def delete_texture(self, texture: Any) -> None:
        texture.delete()

    def set_viewport(self, width: int, height: int) -> None:
        self._gl.glViewport(0, 0, width, height)

    def clear(self, color: Sequence[float]) -> None:
        red, green, blue, alpha = color
        self._gl.glClearColor(red, green, blue, alpha)
        self._gl.glClear(self._gl.GL_COLOR_BUFFER_BIT)


_backend: Any = None


def load_backend(backend: Any = None) -> Any:
    """Make ``backend`` (by default a new :class:`PygletBackend`) the active one.

    Every required method is checked first; a backend missing any of them
    is rejected with :class:`BackendError`.
    """
    global _backend
    candidate = backend if backend is not None else PygletBackend()
    missing = [name for name in _REQUIRED_METHODS if not callable(getattr(candidate, name, None))]
    if missing:
        for name in missing:
            log.error(name)
        raise BackendError(
            "Failed to load one or more required graphics functions: " + ", ".join(missing)
        )
    _backend = candidate
    log.info("Graphics functions loaded successfully.")
    return candidate


def current_backend() -> Any:
    """The active backend; raises :class:`BackendError` if none is loaded."""
    if _backend is None:
        raise BackendError("No graphics backend is loaded.")
    return _backend


def is_backend_loaded() -> bool:
    return _backend is not None


def unload_backend() -> Any:
    """Forget the active backend and return it, or ``None`` if none was loaded."""
    global _backend
    previous = _backend
    _backend = None
    if previous is not None:
        log.info("Graphics backend unloaded.")
    return previous