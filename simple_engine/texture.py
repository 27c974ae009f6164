"""Textures loaded from ASCII PPM (P3) images."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from simple_engine.graphics_backend import current_backend

log = logging.getLogger(__name__)


class TextureError(RuntimeError):
    """Raised when a texture cannot be read or created."""


@dataclass(frozen=True)
class PixelImage:
    """An RGB image with one byte per channel, rows in file order."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self) -> None:
        if len(self.pixels) != self.width * self.height * 3:
            raise ValueError("pixel data does not match the image dimensions")


def _tokens(text: str) -> Iterator[str]:
    """Whitespace-separated tokens; a token starting with '#' ends its line."""
    for line in text.splitlines():
        for token in line.split():
            if token.startswith("#"):
                break
            yield token


def _read_int(tokens: Iterator[str], missing_message: str) -> int:
    token = next(tokens, None)
    if token is None:
        raise TextureError(missing_message)
    try:
        return int(token)
    except ValueError as error:
        raise TextureError(f"Invalid number in texture file: {token!r}") from error


def _scale(value: int, max_value: int) -> int:
    product = value * 255
    scaled = abs(product) // max_value
    if product < 0:
        scaled = -scaled
    return scaled & 0xFF


def parse_ppm(text: str) -> PixelImage:
    """Parse an ASCII PPM image, scaling samples to the 0-255 range."""
    tokens = _tokens(text)
    if next(tokens, None) != "P3":
        raise TextureError("Texture loader currently supports only ASCII PPM (P3).")

    width = _read_int(tokens, "Failed to read texture width.")
    height = _read_int(tokens, "Failed to read texture height.")
    max_value = _read_int(tokens, "Failed to read texture max value.")
    if width <= 0 or height <= 0 or max_value <= 0:
        raise TextureError("Texture file contains invalid dimensions or max value.")

    pixels = bytearray()
    for _ in range(width * height * 3):
        value = _read_int(tokens, "Texture file ended before all pixel data was read.")
        pixels.append(_scale(value, max_value))
    return PixelImage(width, height, bytes(pixels))


class Texture:
    """A two-dimensional texture owned by the graphics backend."""

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend
        self._handle: Any = None

    def __enter__(self) -> Texture:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    @property
    def handle(self) -> Any:
        return self._handle

    @property
    def is_loaded(self) -> bool:
        return self._handle is not None

    def _resolve_backend(self) -> Any:
        if self._backend is None:
            self._backend = current_backend()
        return self._backend

    def load_from_file(self, path: str | Path) -> None:
        """Read a PPM file and upload it, replacing any earlier image."""
        self.destroy()
        try:
            text = Path(path).read_text(encoding="ascii", errors="replace")
        except OSError as error:
            log.error("Failed to open texture file.")
            raise TextureError("Failed to open texture file.") from error
        try:
            image = parse_ppm(text)
        except TextureError as error:
            log.error(str(error))
            raise
        self.load_image(image)

    def load_image(self, image: PixelImage) -> None:
        """Upload an already decoded image."""
        self.destroy()
        handle = self._resolve_backend().create_texture(image.width, image.height, image.pixels)
        if handle is None:
            raise TextureError("Failed to create texture.")
        self._handle = handle
        log.info("Texture loaded successfully.")

    def bind(self, slot: int = 0) -> None:
        self._resolve_backend().bind_texture(self._handle, slot)

    def destroy(self) -> None:
        if self._handle is not None:
            self._resolve_backend().delete_texture(self._handle)
            self._handle = None
            log.info("Texture destroyed.")