"""Compiled shader programs and their uniforms."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import numpy as np

from simple_engine.graphics_backend import BackendError, current_backend

log = logging.getLogger(__name__)


class ShaderError(RuntimeError):
    """Raised when a shader program cannot be compiled or linked."""


class Shader:
    """A vertex and fragment shader linked into one program."""

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend
        self.program: Any = None

    def __enter__(self) -> Shader:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    @property
    def is_created(self) -> bool:
        return self.program is not None

    @property
    def backend(self) -> Any:
        """The backend given at construction, else the one currently loaded."""
        if self._backend is None:
            self._backend = current_backend()
        return self._backend

    def create(self, vertex_source: str, fragment_source: str) -> None:
        """Compile and link the program, replacing any earlier one."""
        self.destroy()
        try:
            self.program = self.backend.compile_program(vertex_source, fragment_source)
        except BackendError as error:
            log.error("%s", error)
            raise ShaderError(str(error)) from error
        log.info("Shader program created successfully.")

    def bind(self) -> None:
        self.backend.use_program(self.program)

    def destroy(self) -> None:
        if self.program is None:
            return
        self.backend.delete_program(self.program)
        self.program = None
        log.info("Shader program destroyed.")

    def set_matrix4(self, name: str, matrix: np.ndarray) -> bool:
        return self._set(name, np.asarray(matrix, dtype=np.float64))

    def set_int(self, name: str, value: int) -> bool:
        return self._set(name, int(value))

    def set_vector2(self, name: str, value: Iterable[float]) -> bool:
        return self._set(name, tuple(value))

    def set_vector4(self, name: str, value: Iterable[float]) -> bool:
        return self._set(name, tuple(value))

    def _set(self, name: str, value: Any) -> bool:
        """Set a uniform; logs and returns False when it does not exist."""
        found = self.is_created and self.backend.set_uniform(self.program, name, value)
        if not found:
            log.error("Uniform not found: %s", name)
        return bool(found)