"""Materials: a shader, a base colour, an optional texture and a UV window."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from simple_engine.geometry import Vec2
from simple_engine.shader import Shader
from simple_engine.texture import Texture
from simple_engine.texture_atlas import AtlasRegion

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)

DEFAULT_VERTEX_SHADER = """
#version 330 core
layout (location = 0) in vec3 aPosition;
layout (location = 1) in vec2 aTexCoord;

uniform mat4 uModel;
uniform mat4 uView;
uniform mat4 uProjection;
uniform vec2 uUVOffset;
uniform vec2 uUVScale;

out vec2 vTexCoord;

void main() {
    vTexCoord = (aTexCoord * uUVScale) + uUVOffset;
    gl_Position = uProjection * uView * uModel * vec4(aPosition, 1.0);
}
"""

DEFAULT_FRAGMENT_SHADER = """
#version 330 core
in vec2 vTexCoord;
out vec4 fragmentColor;

uniform vec4 uBaseColor;
uniform int uUseTexture;
uniform sampler2D uTexture0;

void main() {
    vec4 color = uBaseColor;
    if (uUseTexture == 1) {
        color *= texture(uTexture0, vTexCoord);
    }
    fragmentColor = color;
}
"""


def _full_region_size() -> Vec2:
    return AtlasRegion().size


@dataclass(eq=False)
class Material:
    """Surface description handed to the shader before a draw call."""

    shader: Shader | None = None
    base_color: Color = WHITE
    texture: Texture | None = None
    uv_offset: Vec2 = field(default_factory=Vec2)
    uv_scale: Vec2 = field(default_factory=_full_region_size)

    def apply(self, model: np.ndarray, view: np.ndarray, projection: np.ndarray) -> None:
        """Bind the shader, upload all uniforms and bind the texture."""
        if not self.is_valid():
            return

        shader = self.shader
        shader.bind()
        for name, matrix in (("uModel", model), ("uView", view), ("uProjection", projection)):
            shader.set_matrix4(name, matrix)
        shader.set_vector2("uUVOffset", self.uv_offset)
        shader.set_vector2("uUVScale", self.uv_scale)
        shader.set_vector4("uBaseColor", self.base_color)
        shader.set_int("uTexture0", 0)
        shader.set_int("uUseTexture", int(self.texture is not None))

        if self.texture is not None:
            self.texture.bind(0)

    def is_valid(self) -> bool:
        return self.shader is not None

    def set_texture_region(self, min_uv: Vec2, max_uv: Vec2) -> None:
        """Sample only the UV rectangle from ``min_uv`` to ``max_uv``."""
        self.uv_offset = min_uv
        self.uv_scale = max_uv - min_uv

    def reset_texture_region(self) -> None:
        """Sample the whole texture again."""
        full = AtlasRegion()
        self.set_texture_region(full.min_uv, full.max_uv)

    @staticmethod
    def create_default_shader(backend: Any = None) -> Shader:
        """Compile the built-in sprite shader; raises ShaderError on failure."""
        shader = Shader(backend)
        shader.create(DEFAULT_VERTEX_SHADER, DEFAULT_FRAGMENT_SHADER)
        return shader