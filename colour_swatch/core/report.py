"""Report builder: text and JSON dumps of a SwatchConfig."""

import json
from typing import Any

from colour_swatch.core.colour import colour_to_hex
from colour_swatch.core.swatch import SwatchConfig


def _flag(present: bool) -> str:
    return '[X]' if present else '[-]'


def format_text(swatch: SwatchConfig) -> str:
    """Format the swatch as human-readable text."""
    lines = [f'ColorSwatch: {swatch.settings_path or "(not loaded)"}']
    lines.append(f'{_flag(bool(swatch.raw_file_path))} Raw file:\t{swatch.raw_file_path or ""}')
    lines.append(f'{_flag(bool(swatch.image_file_path))} Image file:\t{swatch.image_file_path or ""}')
    if swatch.has_image():
        w, h = swatch.image_size
        lines.append(f'\tsize: {w}×{h}')
    lines.append(swatch.mask_info())
    lines.append(swatch.patches_info())
    return '\n'.join(lines)


def format_json(swatch: SwatchConfig) -> str:
    """Format the swatch as JSON."""
    obj: dict[str, Any] = {
        'settings': swatch.settings_path,
        'rawfile': swatch.raw_file_path,
        'file': swatch.image_file_path,
    }
    if swatch.has_image():
        w, h = swatch.image_size
        obj['dimensions'] = {'width': w, 'height': h}

    if swatch.mask is not None:
        bg = swatch.mask.background_colour
        mask_obj: dict[str, Any] = {
            'file': swatch.mask.file_path,
            'background': colour_to_hex(bg) if bg else None,
            'loaded': swatch.mask.is_loaded(),
        }
        if swatch.mask.is_loaded():
            w, h = swatch.mask.size
            mask_obj['dimensions'] = {'width': w, 'height': h}
        obj['mask'] = mask_obj
    else:
        obj['mask'] = None

    obj['patches'] = [
        {
            'reflectance': p.reflectance,
            'isccnbs': (
                {'name': p.colour_label.name, 'code': p.colour_label.code} if p.colour_label is not None else None
            ),
        }
        for p in swatch.patches
    ]
    obj['summary'] = {
        'patches': len(swatch.patches),
        'labelled': sum(1 for p in swatch.patches if p.colour_label is not None),
    }
    return json.dumps(obj, indent=2)
