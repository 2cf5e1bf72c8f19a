from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image


@dataclass(frozen=True)
class PixelBuffer:
    """Read-only RGBA bytes of a packed atlas image, row-major, 4 bytes per pixel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        expected = self.width * self.height * 4
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid pixel buffer size {self.width}x{self.height}")
        if len(self.data) != expected:
            raise ValueError(
                f"Pixel buffer holds {len(self.data)} bytes, expected {expected} for {self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return cls(width=rgba.width, height=rgba.height, data=rgba.tobytes())

    @classmethod
    def from_alpha(cls, alpha: np.ndarray) -> "PixelBuffer":
        plane = np.asarray(alpha, dtype=np.uint8)
        if plane.ndim != 2:
            raise ValueError("Alpha plane must be two-dimensional (height, width)")
        height, width = plane.shape
        rgba = np.zeros((height, width, 4), dtype=np.uint8)
        rgba[:, :, 3] = plane
        return cls(width=width, height=height, data=rgba.tobytes())

    def alpha_plane(self) -> np.ndarray:
        pixels = np.frombuffer(self.data, dtype=np.uint8)
        return pixels.reshape(self.height, self.width, 4)[:, :, 3]

    def alpha(self, x: int, y: int) -> int:
        return self.data[(y * self.width + x) * 4 + 3]


def load_png(path: Path) -> PixelBuffer:
    with Image.open(path) as image:
        return PixelBuffer.from_image(image)
