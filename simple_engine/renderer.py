"""Draws a scene's world objects and interface into a window."""

from __future__ import annotations

import logging
from typing import Any

from simple_engine.geometry import identity_matrix, ortho_matrix
from simple_engine.graphics_backend import load_backend
from simple_engine.sprite import RenderObject

log = logging.getLogger(__name__)

CLEAR_COLOR = (0.08, 0.12, 0.24, 1.0)


def _drawable(obj: RenderObject) -> bool:
    return obj.mesh is not None and obj.material is not None and obj.material.is_valid()


class Renderer:
    """Clears the frame, draws world then interface objects and presents.

    The window must provide ``is_open``, ``drawable_size()`` returning
    ``(width, height)`` in pixels, and ``swap_buffers()``.
    """

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def init(self, window: Any) -> None:
        """Load the graphics backend and size the viewport to the window."""
        if not window.is_open:
            message = "Renderer initialization requires an open window."
            log.error(message)
            raise ValueError(message)

        self._backend = load_backend(self._backend)
        width, height = window.drawable_size()
        self._backend.set_viewport(width, height)
        self._initialized = True
        log.info("Renderer initialized successfully.")

    def render_scene(self, window: Any, scene: Any) -> None:
        width, height = window.drawable_size()
        if self._backend is not None:
            self._backend.set_viewport(width, height)
            self._backend.clear(CLEAR_COLOR)

        if self._initialized:
            aspect_ratio = width / height if height > 0 else 1.0
            view = scene.camera.view_matrix()
            projection = scene.camera.projection_matrix(aspect_ratio)
            self._draw(scene.objects, view, projection)

            scene.update_ui_layout(width, height)
            ui_projection = ortho_matrix(0.0, float(width), 0.0, float(height), -1.0, 1.0)
            self._draw(scene.ui_objects, identity_matrix(), ui_projection)

        window.swap_buffers()

    def shutdown(self) -> None:
        self._initialized = False
        log.info("Renderer shutdown complete.")

    @staticmethod
    def _draw(objects: Any, view: Any, projection: Any) -> None:
        for obj in objects:
            if not _drawable(obj):
                continue
            obj.material.apply(obj.transform.matrix(), view, projection)
            obj.mesh.draw()