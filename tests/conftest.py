"""Shared fixtures: small PNGs and settings files written into tmp_path."""

from pathlib import Path

import numpy as np
import pytest
from PIL import Image

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)


def rgba(rgb: tuple[int, int, int], alpha: int = 255) -> tuple[int, int, int, int]:
    return (*rgb, alpha)


def solid(width: int, height: int, rgb: tuple[int, int, int]) -> np.ndarray:
    arr = np.zeros((height, width, 3), dtype=np.uint8)
    arr[:, :] = rgb
    return arr


def write_png(path: Path, pixels: np.ndarray) -> Path:
    Image.fromarray(pixels).save(path)
    return path


def write_settings(path: Path, sections: dict[str, dict[str, str]]) -> Path:
    lines = []
    for name, values in sections.items():
        lines.append(f'[{name}]')
        for key, value in values.items():
            lines.append(f'{key} = {value}')
        lines.append('')
    path.write_text('\n'.join(lines), encoding='utf-8')
    return path


def two_patch_mask() -> np.ndarray:
    """10x8 black mask with a red 4x3 patch and a green 3x2 patch."""
    mask = solid(10, 8, BLACK)
    mask[1:4, 1:5] = RED
    mask[5:7, 6:9] = GREEN
    return mask


@pytest.fixture
def swatch_dir(tmp_path: Path) -> Path:
    """Directory with raw.png (10x8), render.png and mask.png (two patches)."""
    write_png(tmp_path / 'raw.png', solid(10, 8, (100, 150, 200)))
    write_png(tmp_path / 'render.png', solid(10, 8, (90, 90, 90)))
    write_png(tmp_path / 'mask.png', two_patch_mask())
    return tmp_path


@pytest.fixture
def full_settings(swatch_dir: Path) -> Path:
    return write_settings(
        swatch_dir / 'swatch.ini',
        {
            'colorswatch': {'rawfile': 'raw.png', 'file': 'render.png'},
            'mask': {'file': 'mask.png', 'backgroundcolor': '#000000'},
            'strip:1': {'reflectances': '0.1, 0.2', 'ISCCNBS': '1:vivid pink, 2:strong pink'},
            'strip:2': {'reflectances': '0.5'},
        },
    )
