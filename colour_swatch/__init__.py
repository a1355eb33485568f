"""colour-swatch: colour reference chart descriptions, images and mask patches."""

from colour_swatch.core.errors import ErrorKind, SwatchError
from colour_swatch.core.image_source import ImageSource, PillowImageSource
from colour_swatch.core.mask import MaskAsset
from colour_swatch.core.swatch import SwatchConfig
from colour_swatch.core.types import ColourLabel, PatchRecord, SavedPatch

__version__ = '0.1.0'

__all__ = [
    'ColourLabel',
    'ErrorKind',
    'ImageSource',
    'MaskAsset',
    'PatchRecord',
    'PillowImageSource',
    'SavedPatch',
    'SwatchConfig',
    'SwatchError',
]
