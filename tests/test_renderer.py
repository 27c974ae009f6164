import numpy as np
import pytest

from simple_engine.geometry import Transform, Vec2, ortho_matrix
from simple_engine.graphics_backend import (
    BackendError,
    current_backend,
    is_backend_loaded,
    load_backend,
    unload_backend,
)
from simple_engine.material import Material
from simple_engine.mesh import create_quad
from simple_engine.renderer import Renderer
from simple_engine.scene import Scene
from simple_engine.shader import Shader
from simple_engine.texture import PixelImage, Texture
from simple_engine.ui import UIElement


class FakeBackend:
    def __init__(self):
        self.current = None
        self.uniforms = []
        self.draws = []
        self.viewports = []
        self.clears = []

    def compile_program(self, vertex_source, fragment_source):
        return object()

    def delete_program(self, program):
        pass

    def use_program(self, program):
        self.current = program

    def set_uniform(self, program, name, value):
        self.uniforms.append((name, value))
        return True

    def create_vertex_buffer(self, vertices, components_per_vertex, has_texture_coordinates):
        return {"count": len(vertices) // components_per_vertex}

    def draw_triangles(self, buffer):
        self.draws.append((buffer, self.current))

    def delete_vertex_buffer(self, buffer):
        pass

    def create_texture(self, width, height, pixels):
        return object()

    def bind_texture(self, texture, slot):
        pass

    def delete_texture(self, texture):
        pass

    def set_viewport(self, width, height):
        self.viewports.append((width, height))

    def clear(self, color):
        self.clears.append(tuple(color))


class FakeWindow:
    def __init__(self, width=800, height=600, is_open=True):
        self.size = (width, height)
        self.is_open = is_open
        self.swaps = 0

    def drawable_size(self):
        return self.size

    def swap_buffers(self):
        self.swaps += 1


@pytest.fixture
def backend():
    fake = FakeBackend()
    load_backend(fake)
    yield fake
    unload_backend()


def _uniform_values(backend, name):
    return [value for uniform, value in backend.uniforms if uniform == name]


def _scene_with_objects(backend, count):
    scene = Scene()
    shader = Shader(backend)
    shader.create("vertex", "fragment")
    mesh = create_quad(backend)
    objects = [
        scene.create_render_object(mesh, Material(shader), Transform(position=Vec2(float(i), 0.0)))
        for i in range(count)
    ]
    return scene, mesh, objects


def test_init_rejects_closed_window():
    renderer = Renderer(FakeBackend())
    with pytest.raises(ValueError):
        renderer.init(FakeWindow(is_open=False))
    assert not renderer.initialized


def test_init_rejects_incomplete_backend():
    unload_backend()
    renderer = Renderer(object())
    with pytest.raises(BackendError):
        renderer.init(FakeWindow())
    assert not is_backend_loaded()


def test_init_loads_backend_and_sets_viewport():
    fake = FakeBackend()
    renderer = Renderer(fake)
    try:
        renderer.init(FakeWindow(640, 480))
        assert renderer.initialized
        assert current_backend() is fake
        assert fake.viewports == [(640, 480)]
    finally:
        unload_backend()


def test_render_clears_draws_and_swaps(backend):
    scene, mesh, _ = _scene_with_objects(backend, 2)
    renderer = Renderer(backend)
    window = FakeWindow()
    renderer.init(window)
    renderer.render_scene(window, scene)

    assert backend.clears == [(0.08, 0.12, 0.24, 1.0)]
    assert len(backend.draws) == 2
    assert window.swaps == 1


def test_render_uploads_camera_matrices(backend):
    scene, _, objects = _scene_with_objects(backend, 1)
    scene.camera.position = Vec2(1.0, -2.0)
    renderer = Renderer(backend)
    window = FakeWindow(800, 600)
    renderer.init(window)
    renderer.render_scene(window, scene)

    assert np.allclose(_uniform_values(backend, "uView")[0], scene.camera.view_matrix())
    assert np.allclose(
        _uniform_values(backend, "uProjection")[0], scene.camera.projection_matrix(800 / 600)
    )
    assert np.allclose(_uniform_values(backend, "uModel")[0], objects[0].transform.matrix())


def test_invalid_materials_are_skipped(backend):
    scene, _, _ = _scene_with_objects(backend, 1)
    scene.create_render_object(create_quad(backend), Material(), Transform())
    scene.create_render_object(None, Material(), Transform())
    renderer = Renderer(backend)
    window = FakeWindow()
    renderer.init(window)
    renderer.render_scene(window, scene)
    assert len(backend.draws) == 1


def test_uninitialized_renderer_only_presents(backend):
    scene, _, _ = _scene_with_objects(backend, 2)
    renderer = Renderer(backend)
    window = FakeWindow()
    renderer.render_scene(window, scene)
    assert backend.draws == []
    assert window.swaps == 1


def test_shutdown_stops_drawing(backend):
    scene, _, _ = _scene_with_objects(backend, 1)
    renderer = Renderer(backend)
    window = FakeWindow()
    renderer.init(window)
    renderer.shutdown()
    renderer.render_scene(window, scene)
    assert not renderer.initialized
    assert backend.draws == []
    assert window.swaps == 1


def test_ui_is_laid_out_and_drawn_in_pixels(backend):
    texture = Texture(backend)
    texture.load_image(PixelImage(1, 1, bytes(3)))
    scene = Scene()
    element = scene.add_ui_element(UIElement(texture, Vec2(10.0, 10.0), Vec2(50.0, 20.0)))
    renderer = Renderer(backend)
    window = FakeWindow(800, 600)
    renderer.init(window)
    renderer.render_scene(window, scene)

    assert element.sprite.transform.position == element.anchored_position(800, 600)
    projections = _uniform_values(backend, "uProjection")
    assert len(projections) == 1
    assert np.allclose(projections[0], ortho_matrix(0.0, 800.0, 0.0, 600.0, -1.0, 1.0))
    assert np.allclose(_uniform_values(backend, "uView")[0], np.identity(4))