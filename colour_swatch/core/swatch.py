"""SwatchConfig: parse a swatch settings file and load its images.

Settings layout:

    [colorswatch]
    rawfile = <path>            ; mandatory
    file = <path>               ; optional rendered image

    [mask]                      ; optional section
    file = <path>               ; mandatory if section present
    backgroundcolor = <colour>  ; optional

    [strip:1]                   ; 1-indexed, contiguous
    reflectances = 0.1, 0.2     ; mandatory
    ISCCNBS = 1:vivid pink, 2:strong pink   ; optional, same length

Relative paths are resolved against the settings file's directory.

Each rule below is a standalone function returning a Check. load_settings
unwraps them in order, so the first violation raises a SwatchError.
"""

from __future__ import annotations

import os

import numpy as np

from colour_swatch.core.colour import colour_to_hex, parse_colour, parse_label
from colour_swatch.core.errors import Check, ErrorKind, SwatchError
from colour_swatch.core.image_source import ImageSource
from colour_swatch.core.mask import MaskAsset
from colour_swatch.core.settings import SettingsFile
from colour_swatch.core.types import ColourLabel, PatchRecord, SavedPatch

SWATCH_GROUP = 'colorswatch'
MASK_GROUP = 'mask'
STRIP_GROUP = 'strip:{}'


def resolve_path(base_dir: str, path: str) -> str:
    if os.path.isabs(path):
        return os.path.normpath(path)
    return os.path.normpath(os.path.join(base_dir, path))


def check_file(settings: SettingsFile, base_dir: str, group: str, key: str, required: bool) -> Check[str | None]:
    """Resolve a file key and require that the file exists.

    An absent optional key is a success with value None. An absent
    required key is reported as a missing file.
    """
    raw = settings.value(group, key)
    if raw is None:
        if required:
            return Check.failure(ErrorKind.MISSING_FILE, key=f'{group}.{key}', detail='key not set')
        return Check.success(None)
    path = resolve_path(base_dir, raw)
    if not os.path.isfile(path):
        return Check.failure(ErrorKind.MISSING_FILE, key=f'{group}.{key}', path=path)
    return Check.success(path)


def check_background(settings: SettingsFile) -> Check:
    token = settings.value(MASK_GROUP, 'backgroundcolor')
    if token is None:
        return Check.success(None)
    result = parse_colour(token)
    if not result.ok:
        return Check.failure(ErrorKind.INVALID_COLOR, key=f'{MASK_GROUP}.backgroundcolor', value=token)
    return result


def check_reflectances(settings: SettingsFile, index: int) -> Check[list[float]]:
    group = STRIP_GROUP.format(index)
    items = settings.list_value(group, 'reflectances')
    if items is None:
        return Check.failure(ErrorKind.MISSING_KEY, strip=index, key='reflectances')
    values = []
    for item in items:
        try:
            values.append(float(item))
        except ValueError:
            return Check.failure(ErrorKind.INVALID_VALUE, strip=index, key='reflectances', value=item)
    return Check.success(values)


def check_labels(settings: SettingsFile, index: int) -> Check[list[ColourLabel] | None]:
    group = STRIP_GROUP.format(index)
    items = settings.list_value(group, 'ISCCNBS')
    if items is None:
        return Check.success(None)
    labels = []
    for item in items:
        result = parse_label(item)
        if not result.ok:
            return Check.failure(ErrorKind.INVALID_VALUE, strip=index, key='ISCCNBS', value=item)
        labels.append(result.value)
    return Check.success(labels)


def check_counts(index: int, reflectances: list[float], labels: list[ColourLabel] | None) -> Check[None]:
    if labels is not None and len(labels) != len(reflectances):
        return Check.failure(
            ErrorKind.COUNT_MISMATCH,
            strip=index,
            detail=f'{len(reflectances)} reflectances, {len(labels)} labels',
        )
    return Check.success(None)


def build_patches(
    index: int, reflectances: list[float], labels: list[ColourLabel] | None
) -> Check[list[PatchRecord]]:
    """One PatchRecord per reflectance; labelled strips must label every patch."""
    patches = []
    for i, reflectance in enumerate(reflectances):
        label = None
        if labels is not None:
            if i >= len(labels):
                return Check.failure(ErrorKind.MISSING_LABEL, strip=index, value=reflectance)
            label = labels[i]
        patches.append(PatchRecord(reflectance=reflectance, colour_label=label))
    return Check.success(patches)


class SwatchConfig:
    """Parsed swatch description plus the images it refers to.

    One instance may be reused: load_settings resets every field before
    repopulating. Not safe for concurrent use.
    """

    def __init__(self, image_source: ImageSource):
        self._source = image_source
        self.settings_path: str | None = None
        self.raw_file_path: str | None = None
        self.image_file_path: str | None = None
        self.mask: MaskAsset | None = None
        self.patches: list[PatchRecord] = []
        self.masked_image: np.ndarray | None = None

    def _reset(self) -> None:
        self.settings_path = None
        self.raw_file_path = None
        self.image_file_path = None
        self.mask = None
        self.patches = []
        self.masked_image = None

    def load_settings(self, path: str) -> bool:
        """Parse a settings file. Raises SwatchError on the first violation."""
        self._reset()
        if not os.path.isfile(path):
            raise SwatchError(ErrorKind.MISSING_FILE, path=path, detail='settings file')
        settings = SettingsFile(path)
        self.settings_path = os.path.abspath(path)
        base_dir = os.path.dirname(self.settings_path)

        self.raw_file_path = check_file(settings, base_dir, SWATCH_GROUP, 'rawfile', required=True).unwrap()
        self.image_file_path = check_file(settings, base_dir, SWATCH_GROUP, 'file', required=False).unwrap()

        if settings.has_group(MASK_GROUP):
            mask_path = check_file(settings, base_dir, MASK_GROUP, 'file', required=True).unwrap()
            self.mask = MaskAsset(mask_path)
            background = check_background(settings).unwrap()
            if background is not None:
                self.mask.set_background_colour(background)

        index = 1
        while settings.has_group(STRIP_GROUP.format(index)):
            reflectances = check_reflectances(settings, index).unwrap()
            labels = check_labels(settings, index).unwrap()
            check_counts(index, reflectances, labels).unwrap()
            self.patches.extend(build_patches(index, reflectances, labels).unwrap())
            index += 1

        return True

    def load_images(self) -> bool:
        """Decode the raw image and the mask, then apply the mask.

        Returns whether the raw image loaded. The mask is dropped whenever
        the images are not consistent with each other.
        """
        result = False
        self.masked_image = None
        if self.raw_file_path:
            result = self._source.load_image(self.raw_file_path)

        if self.mask is not None:
            try:
                self._load_mask(result)
            except SwatchError:
                self.mask = None
                raise
            if not result:
                self.mask = None

        return result

    def _load_mask(self, raw_loaded: bool) -> None:
        mask = self.mask
        if not mask.load_image():
            raise SwatchError(ErrorKind.MASK_DECODE_ERROR, path=mask.file_path)
        if self._source.size() != mask.size:
            iw, ih = self._source.size()
            mw, mh = mask.size
            raise SwatchError(
                ErrorKind.SIZE_MISMATCH,
                path=mask.file_path,
                detail=f'image {iw}x{ih}, mask {mw}x{mh}',
            )
        if not raw_loaded:
            raise SwatchError(ErrorKind.INCONSISTENT_STATE, path=self.raw_file_path)
        self.masked_image = mask.apply_mask(self._source.to_pixel_buffer())

    def fill_patches_from_mask(self, output_dir: str = '.', prefix: str = 'patch') -> list[SavedPatch]:
        """Segment the loaded mask into patch images written to output_dir."""
        if self.mask is None or not self.mask.is_loaded():
            raise SwatchError(
                ErrorKind.PRECONDITION_VIOLATION,
                path=self.settings_path,
                detail='cannot fill patches without a valid loaded mask',
            )
        return self.mask.segment_patches(output_dir=output_dir, prefix=prefix)

    def has_image(self) -> bool:
        return self._source.to_pixel_buffer() is not None

    @property
    def image(self) -> np.ndarray | None:
        return self._source.to_pixel_buffer()

    @property
    def image_size(self) -> tuple[int, int]:
        return self._source.size()

    def has_mask(self) -> bool:
        return self.mask is not None

    @property
    def mask_image(self) -> np.ndarray | None:
        return self.mask.image if self.mask is not None else None

    def mask_info(self) -> str:
        """Mask summary: file, background colour and size once loaded."""
        mask = self.mask
        if mask is None:
            return '[-] Mask :'
        lines = [f'[X] Mask :\t{mask.file_path}']
        bg = mask.background_colour
        lines.append(f'\tbackground: {colour_to_hex(bg) if bg else "(auto-detect)"}')
        if mask.is_loaded():
            w, h = mask.size
            lines.append(f'\tsize: {w}×{h}')
        return '\n'.join(lines)

    def patches_info(self) -> str:
        """Patch count followed by one line per patch."""
        lines = [f'[{len(self.patches)}] Patches:']
        for patch in self.patches:
            lines.append(f'\tPatch: {patch}')
        return '\n'.join(lines)
