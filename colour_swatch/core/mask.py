"""Mask image handling: background detection, masking and patch segmentation.

The mask is an image the same size as the swatch render where every patch
is painted in some non-background colour and patches are separated by the
background colour. Masks are decoded as RGBA, so a transparent background
is distinct from an opaque patch of the same RGB value.

Segmentation is a raster scan, not a flood fill. At the first
non-background pixel (row, col) the patch rectangle is grown down column
`col` and right along row `row` until the background is hit. Rectangular
patches come out exact; concave or touching shapes get whatever rectangle
that rule produces, and patch numbering depends on it.
"""

import os

import numpy as np
from PIL import Image

from colour_swatch.core.colour import to_rgba
from colour_swatch.core.errors import ErrorKind, SwatchError
from colour_swatch.core.image_source import read_pixels
from colour_swatch.core.types import RGB, RGBA, SavedPatch

MASKED_FILL = (0, 0, 0)


def most_frequent_colour(pixels: np.ndarray) -> tuple[int, ...]:
    """Return the most frequent exact pixel value, all channels compared.

    Ties go to the lowest value in channel order.
    """
    flat = pixels.reshape(-1, pixels.shape[-1])
    values, counts = np.unique(flat, axis=0, return_counts=True)
    return tuple(int(v) for v in values[int(np.argmax(counts))])


def grow_rect(foreground: np.ndarray, row: int, col: int) -> tuple[int, int]:
    """Grow a patch rectangle from its top-left pixel.

    Returns (max_row, max_col), both exclusive. Only column `col` is
    walked downward and only row `row` is walked rightward.
    """
    h, w = foreground.shape
    max_row = row
    while max_row < h and foreground[max_row, col]:
        max_row += 1
    max_col = col
    while max_col < w and foreground[row, max_col]:
        max_col += 1
    return max_row, max_col


class MaskAsset:
    """A mask image file plus its background colour."""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._background: RGBA | None = None
        self._image: np.ndarray | None = None

    @property
    def background_colour(self) -> RGBA | None:
        return self._background

    def set_background_colour(self, colour: RGB | RGBA) -> None:
        """Fix the background colour. RGB values are taken as opaque."""
        if self._background is not None:
            raise SwatchError(
                ErrorKind.PRECONDITION_VIOLATION,
                path=self.file_path,
                detail='mask background colour is already set',
            )
        self._background = to_rgba(colour)

    def has_background_colour(self) -> bool:
        return self._background is not None

    @property
    def image(self) -> np.ndarray | None:
        return self._image

    def is_loaded(self) -> bool:
        return self._image is not None

    @property
    def size(self) -> tuple[int, int]:
        """(width, height) of the loaded mask, (0, 0) when not loaded."""
        if self._image is None:
            return (0, 0)
        h, w = self._image.shape[:2]
        return (w, h)

    def load_image(self) -> bool:
        """Decode the mask file. Returns False if it cannot be decoded."""
        self._image = read_pixels(self.file_path, mode='RGBA')
        return self._image is not None

    def _require_image(self, operation: str) -> np.ndarray:
        if self._image is None:
            raise SwatchError(
                ErrorKind.PRECONDITION_VIOLATION,
                path=self.file_path,
                detail=f'cannot {operation} without a loaded mask',
            )
        return self._image

    def detect_background_colour(self) -> RGBA:
        """Set the background colour to the most frequent mask colour."""
        image = self._require_image('detect background')
        self.set_background_colour(most_frequent_colour(image))
        return self._background

    def ensure_background_colour(self) -> RGBA:
        if self._background is None:
            return self.detect_background_colour()
        return self._background

    def foreground(self) -> np.ndarray:
        """Boolean H x W array, True where the mask is not background."""
        image = self._require_image('compute foreground')
        bg = np.array(self.ensure_background_colour(), dtype=image.dtype)
        return np.any(image != bg, axis=-1)

    def apply_mask(self, pixels: np.ndarray) -> np.ndarray:
        """Return a copy of `pixels` with mask background blanked out."""
        fg = self.foreground()
        if pixels.shape[:2] != fg.shape:
            h, w = pixels.shape[:2]
            raise SwatchError(
                ErrorKind.SIZE_MISMATCH,
                path=self.file_path,
                detail=f'image {w}x{h}, mask {self.size[0]}x{self.size[1]}',
            )
        out = pixels.copy()
        out[~fg] = MASKED_FILL
        return out

    def segment_patches(self, output_dir: str = '.', prefix: str = 'patch') -> list[SavedPatch]:
        """Cut the mask into patch images and save them as <prefix>_<n>.png.

        Patches are numbered from 0 in discovery order (top to bottom,
        left to right). The loaded mask is left untouched; consumed
        regions are painted over on a working copy only.
        """
        image = self._require_image('segment patches')
        bg = self.ensure_background_colour()
        work = image.copy()
        fg = np.any(work != np.array(bg, dtype=work.dtype), axis=-1)
        w = fg.shape[1]

        os.makedirs(output_dir, exist_ok=True)
        saved: list[SavedPatch] = []
        flat = fg.reshape(-1)
        pos = 0
        while True:
            hits = np.flatnonzero(flat[pos:])
            if len(hits) == 0:
                break
            pos += int(hits[0])
            row, col = divmod(pos, w)
            max_row, max_col = grow_rect(fg, row, col)

            patch = work[row:max_row, col:max_col].copy()
            work[row:max_row, col:max_col] = bg
            fg[row:max_row, col:max_col] = False

            index = len(saved)
            path = os.path.join(output_dir, f'{prefix}_{index}.png')
            Image.fromarray(patch).save(path)
            saved.append(SavedPatch(index=index, path=path, bounds=(col, row, max_col, max_row)))

        return saved
