"""Image loading collaborator used by SwatchConfig for the raw image.

Any object with load_image/size/to_pixel_buffer can stand in for
PillowImageSource, e.g. a decoder for camera raw formats.
"""

from typing import Protocol

import numpy as np
from PIL import Image, UnidentifiedImageError


class ImageSource(Protocol):
    def load_image(self, path: str) -> bool: ...

    def size(self) -> tuple[int, int]: ...

    def to_pixel_buffer(self) -> np.ndarray | None: ...


def read_pixels(path: str, mode: str = 'RGB') -> np.ndarray | None:
    """Decode an image file to an H x W x C uint8 array in `mode`, None if undecodable."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert(mode))
    except (UnidentifiedImageError, OSError):
        return None


class PillowImageSource:
    """ImageSource backed by Pillow. Holds the last successfully decoded image."""

    def __init__(self) -> None:
        self._pixels: np.ndarray | None = None

    def load_image(self, path: str) -> bool:
        self._pixels = read_pixels(path)
        return self._pixels is not None

    def size(self) -> tuple[int, int]:
        """(width, height) of the loaded image, (0, 0) when nothing is loaded."""
        if self._pixels is None:
            return (0, 0)
        h, w = self._pixels.shape[:2]
        return (w, h)

    def to_pixel_buffer(self) -> np.ndarray | None:
        return self._pixels
